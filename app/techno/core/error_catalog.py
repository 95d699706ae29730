from dataclasses import dataclass
from fastapi import status


@dataclass(frozen=True)
class ErrorDefinition:
    code: str
    message: str
    status_code: int


class ErrorCatalog:
    INVALID_TOKEN = ErrorDefinition("INVALID_TOKEN", "Invalid token", status.HTTP_401_UNAUTHORIZED)
    PERMISSION_DENIED = ErrorDefinition(
        "PERMISSION_DENIED",
        "Permission denied",
        status.HTTP_403_FORBIDDEN,
    )
    VALIDATION_ERROR = ErrorDefinition(
        "VALIDATION_ERROR",
        "Validation error",
        status.HTTP_422_UNPROCESSABLE_ENTITY,
    )
    STORE_NOT_FOUND = ErrorDefinition(
        "STORE_NOT_FOUND",
        "Store not found",
        status.HTTP_404_NOT_FOUND,
    )
    PROJECT_NOT_FOUND = ErrorDefinition(
        "PROJECT_NOT_FOUND",
        "Project not found",
        status.HTTP_404_NOT_FOUND,
    )
    EMPLOYEE_NOT_FOUND = ErrorDefinition(
        "EMPLOYEE_NOT_FOUND",
        "Employee not found",
        status.HTTP_404_NOT_FOUND,
    )
    BALANCE_NOT_FOUND = ErrorDefinition(
        "BALANCE_NOT_FOUND",
        "Balance not found for store and item",
        status.HTTP_404_NOT_FOUND,
    )
    STORE_NAME_EXISTS = ErrorDefinition(
        "STORE_NAME_EXISTS",
        "An active store with this name already exists",
        status.HTTP_409_CONFLICT,
    )
    STORE_PROJECT_IMMUTABLE = ErrorDefinition(
        "STORE_PROJECT_IMMUTABLE",
        "Store project cannot be changed",
        status.HTTP_409_CONFLICT,
    )
    STORE_INACTIVE = ErrorDefinition(
        "STORE_INACTIVE",
        "Store is inactive",
        status.HTTP_409_CONFLICT,
    )
    STORE_HAS_BALANCE = ErrorDefinition(
        "STORE_HAS_BALANCE",
        "Cannot deactivate a store that still holds balances; transfer all stock first or use force=true",
        status.HTTP_409_CONFLICT,
    )
    DB_UNAVAILABLE = ErrorDefinition(
        "DB_UNAVAILABLE",
        "Database unavailable",
        status.HTTP_503_SERVICE_UNAVAILABLE,
    )
    LOCK_TIMEOUT = ErrorDefinition(
        "LOCK_TIMEOUT",
        "Lock wait timeout",
        status.HTTP_409_CONFLICT,
    )
    INTERNAL_ERROR = ErrorDefinition(
        "INTERNAL_ERROR",
        "Internal server error",
        status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


class AppError(Exception):
    def __init__(self, error: ErrorDefinition, details: object | None = None):
        self.error = error
        self.details = details
        super().__init__(error.message)


class ValidationError(AppError):
    def __init__(self, details: object | None = None):
        super().__init__(ErrorCatalog.VALIDATION_ERROR, details)


class NotFoundError(AppError):
    pass


class ConflictError(AppError):
    pass


class BalanceConflictError(ConflictError):
    def __init__(self, details: object | None = None):
        super().__init__(ErrorCatalog.STORE_HAS_BALANCE, details)


class AuthorizationError(AppError):
    def __init__(self, details: object | None = None):
        super().__init__(ErrorCatalog.PERMISSION_DENIED, details)
