from dataclasses import dataclass

from app.techno.core.authorization import normalize_roles


@dataclass(frozen=True)
class RequestContext:
    user_id: str | None
    username: str | None
    roles: frozenset[str]
    trace_id: str


def build_request_context(
    *,
    user_id: str | None,
    username: str | None,
    roles,
    trace_id: str,
) -> RequestContext:
    return RequestContext(
        user_id=user_id,
        username=username,
        roles=normalize_roles(roles),
        trace_id=trace_id,
    )
