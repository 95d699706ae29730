from fastapi import Depends, Request
from jose import JWTError
from pydantic import ValidationError

from app.techno.core.authorization import AuthorizationDecision, authorize
from app.techno.core.context import RequestContext, build_request_context
from app.techno.core.error_catalog import AppError, AuthorizationError, ErrorCatalog
from app.techno.core.metrics import metrics
from app.techno.core.security import TokenData, decode_token, oauth2_scheme


def get_current_token_data(token: str = Depends(oauth2_scheme)) -> TokenData:
    try:
        payload = decode_token(token)
        return TokenData(**payload)
    except (JWTError, ValidationError, TypeError) as exc:
        raise AppError(ErrorCatalog.INVALID_TOKEN) from exc


def require_request_context(
    request: Request,
    token_data: TokenData = Depends(get_current_token_data),
) -> RequestContext:
    trace_id = getattr(request.state, "trace_id", "")
    context = build_request_context(
        user_id=token_data.sub,
        username=token_data.username,
        roles=token_data.roles,
        trace_id=trace_id,
    )
    request.state.context = context
    request.state.user_id = token_data.sub
    return context


def check_operation(operation: str, context: RequestContext) -> AuthorizationDecision:
    decision = authorize(operation, context.roles)
    if not decision.allowed:
        metrics.increment_rbac_denied(operation)
        raise AuthorizationError(details={"operation": operation})
    return decision


def require_operation(operation: str):
    def dependency(context: RequestContext = Depends(require_request_context)) -> RequestContext:
        check_operation(operation, context)
        return context

    return dependency


__all__ = [
    "get_current_token_data",
    "require_request_context",
    "check_operation",
    "require_operation",
]
