"""Role capability checks for warehouse operations.

Every operation the API exposes is declared here together with the roles
allowed to invoke it. Routers never inspect roles themselves; they depend on
``require_operation`` (see ``app.techno.core.deps``), which evaluates the
caller's role set against this table before any service code runs.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable


ADMIN = "ADMIN"
GENERAL_MANAGER = "GENERAL_MANAGER"
HR_MANAGER = "HR_MANAGER"
FINANCE_MANAGER = "FINANCE_MANAGER"
PROJECT_MANAGER = "PROJECT_MANAGER"
WAREHOUSE_MANAGER = "WAREHOUSE_MANAGER"
EMPLOYEE = "EMPLOYEE"

STORE_WRITERS = frozenset({WAREHOUSE_MANAGER, ADMIN})
STORE_READERS = frozenset(
    {ADMIN, GENERAL_MANAGER, HR_MANAGER, FINANCE_MANAGER, PROJECT_MANAGER, WAREHOUSE_MANAGER}
)
STORE_DETAIL_READERS = STORE_READERS | {EMPLOYEE}


class Operation:
    STORE_CREATE = "store.create"
    STORE_LIST = "store.list"
    STORE_VIEW = "store.view"
    STORE_LIST_BY_PROJECT = "store.list_by_project"
    STORE_UPDATE = "store.update"
    STORE_DEACTIVATE = "store.deactivate"
    STORE_FORCE_DEACTIVATE = "store.force_deactivate"
    BALANCE_VIEW = "balance.view"
    BALANCE_ADJUST = "balance.adjust"


OPERATION_ROLES: dict[str, frozenset[str]] = {
    Operation.STORE_CREATE: STORE_WRITERS,
    Operation.STORE_LIST: STORE_READERS,
    Operation.STORE_VIEW: STORE_DETAIL_READERS,
    Operation.STORE_LIST_BY_PROJECT: STORE_READERS,
    Operation.STORE_UPDATE: STORE_WRITERS,
    Operation.STORE_DEACTIVATE: STORE_WRITERS,
    # Bypasses the balance guard, so only administrators may use it.
    Operation.STORE_FORCE_DEACTIVATE: frozenset({ADMIN}),
    Operation.BALANCE_VIEW: STORE_DETAIL_READERS,
    Operation.BALANCE_ADJUST: STORE_WRITERS,
}


@dataclass(frozen=True)
class AuthorizationDecision:
    operation: str
    allowed: bool
    matched_roles: frozenset[str]


def normalize_roles(roles: Iterable[str] | None) -> frozenset[str]:
    normalized = set()
    for role in roles or ():
        value = (role or "").strip().upper()
        if value.startswith("ROLE_"):
            value = value[len("ROLE_"):]
        if value:
            normalized.add(value)
    return frozenset(normalized)


def required_roles(operation: str) -> frozenset[str]:
    try:
        return OPERATION_ROLES[operation]
    except KeyError as exc:
        raise ValueError(f"Unknown operation: {operation}") from exc


def authorize(operation: str, roles: Iterable[str] | None) -> AuthorizationDecision:
    matched = required_roles(operation) & normalize_roles(roles)
    return AuthorizationDecision(operation=operation, allowed=bool(matched), matched_roles=frozenset(matched))
