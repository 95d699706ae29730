"""Project store lifecycle.

A store is created ``ACTIVE`` and can only leave that state through an
explicit deactivation, after which it is ``INACTIVE`` for good. Two
deactivation paths exist:

* ``deactivate`` refuses while the store still holds any inventory balance;
* ``force_deactivate`` skips the balance check entirely.

Both paths lock the store row and write the status with a conditional
update, so concurrent callers cannot both perform the transition. The soft
path checks every balance row inside the same transaction as the status write.
"""

import logging
from dataclasses import dataclass
from datetime import datetime

from app.techno.core.config import settings
from app.techno.core.context import RequestContext
from app.techno.core.error_catalog import (
    BalanceConflictError,
    ConflictError,
    ErrorCatalog,
    NotFoundError,
    ValidationError,
)
from app.techno.core.logging import log_json
from app.techno.core.metrics import metrics
from app.techno.db.models import STORE_STATUS_ACTIVE, STORE_STATUSES, Store
from app.techno.repos.balances import BalanceRepository
from app.techno.repos.projects import EmployeeRepository, ProjectRepository
from app.techno.repos.stores import StoreRepository
from app.techno.schemas.stores import StoreRequest, StoreResponse, StoreSummary

logger = logging.getLogger(__name__)

MODE_SOFT = "soft"
MODE_FORCE = "force"


@dataclass(frozen=True)
class DeactivationResult:
    store_code: int
    mode: str
    changed: bool


def _actor(context: RequestContext | None) -> str | None:
    if context is None:
        return None
    return context.user_id


def _trace(context: RequestContext | None) -> str:
    if context is None:
        return ""
    return context.trace_id


class StoreLifecycleService:
    def __init__(self, db):
        self.db = db
        self.stores = StoreRepository(db)
        self.balances = BalanceRepository(db)
        self.projects = ProjectRepository(db)
        self.employees = EmployeeRepository(db)

    def _require_store(self, store_code: int, *, for_update: bool = False) -> Store:
        if for_update:
            store = self.stores.get_for_update(store_code)
        else:
            store = self.stores.get_by_id(store_code)
        if store is None:
            raise NotFoundError(ErrorCatalog.STORE_NOT_FOUND, details={"store_code": store_code})
        return store

    def _require_project(self, project_code: int):
        project = self.projects.get_by_code(project_code)
        if project is None:
            raise NotFoundError(ErrorCatalog.PROJECT_NOT_FOUND, details={"project_code": project_code})
        return project

    def _validate_manager(self, manager_id: int | None) -> None:
        if manager_id is None:
            return
        if self.employees.get_by_id(manager_id) is None:
            raise NotFoundError(ErrorCatalog.EMPLOYEE_NOT_FOUND, details={"store_manager_id": manager_id})

    @staticmethod
    def _clean_fields(request: StoreRequest) -> tuple[str, str | None]:
        name = (request.store_name or "").strip()
        errors = []
        if not name:
            errors.append({"field": "storeName", "message": "storeName is required"})
        elif len(name) > settings.STORE_NAME_MAX_LENGTH:
            errors.append(
                {"field": "storeName", "message": f"storeName must be at most {settings.STORE_NAME_MAX_LENGTH} characters"}
            )
        location = (request.store_location or "").strip() or None
        if location and len(location) > settings.STORE_LOCATION_MAX_LENGTH:
            errors.append(
                {
                    "field": "storeLocation",
                    "message": f"storeLocation must be at most {settings.STORE_LOCATION_MAX_LENGTH} characters",
                }
            )
        if request.project_code is None:
            errors.append({"field": "projectCode", "message": "projectCode is required"})
        if errors:
            raise ValidationError(details={"errors": errors})
        return name, location

    def _ensure_unique_name(self, name: str, *, exclude_id: int | None = None) -> None:
        if self.stores.active_name_exists(name, exclude_id=exclude_id):
            raise ConflictError(ErrorCatalog.STORE_NAME_EXISTS, details={"store_name": name})

    def _summary_fields(self, store: Store, item_count: int) -> dict:
        return {
            "store_code": store.id,
            "project_code": store.project_code,
            "project_name": store.project.name if store.project is not None else None,
            "store_name": store.name,
            "store_location": store.location,
            "status": store.status,
            "is_active": store.is_active,
            "item_count": item_count,
            "store_manager_id": store.manager_id,
            "store_manager_name": store.manager.name if store.manager is not None else None,
        }

    def to_response(self, store: Store, item_count: int | None = None) -> StoreResponse:
        if item_count is None:
            item_count = self.balances.count_items([store.id]).get(store.id, 0)
        return StoreResponse(
            **self._summary_fields(store, item_count),
            created_at=store.created_at,
            created_by=store.created_by,
            modified_at=store.modified_at,
            modified_by=store.modified_by,
        )

    def to_summary(self, store: Store, item_count: int = 0) -> StoreSummary:
        return StoreSummary(**self._summary_fields(store, item_count))

    def create(self, request: StoreRequest, context: RequestContext | None = None) -> StoreResponse:
        logger.info("Creating project store: %s", request.store_name)
        name, location = self._clean_fields(request)
        self._require_project(request.project_code)
        self._ensure_unique_name(name)
        self._validate_manager(request.store_manager_id)

        now = datetime.utcnow()
        store = Store(
            project_code=request.project_code,
            name=name,
            location=location,
            status=STORE_STATUS_ACTIVE,
            manager_id=request.store_manager_id,
            created_at=now,
            created_by=_actor(context),
            modified_at=now,
            modified_by=_actor(context),
        )
        store = self.stores.create(store)
        logger.info("Project store created with code: %s", store.id)
        return self.to_response(store, item_count=0)

    def update(self, store_code: int, request: StoreRequest, context: RequestContext | None = None) -> StoreResponse:
        logger.info("Updating project store with code: %s", store_code)
        try:
            # Lock held until commit; the status check below stays valid.
            store = self._require_store(store_code, for_update=True)
            if request.project_code != store.project_code:
                raise ConflictError(
                    ErrorCatalog.STORE_PROJECT_IMMUTABLE,
                    details={
                        "store_code": store_code,
                        "current_project_code": store.project_code,
                        "requested_project_code": request.project_code,
                    },
                )
            if not store.is_active:
                raise ConflictError(ErrorCatalog.STORE_INACTIVE, details={"store_code": store_code})

            name, location = self._clean_fields(request)
            self._ensure_unique_name(name, exclude_id=store.id)
            self._validate_manager(request.store_manager_id)

            store.name = name
            store.location = location
            store.manager_id = request.store_manager_id
            store.modified_at = datetime.utcnow()
            store.modified_by = _actor(context)
            store = self.stores.update(store)
        except Exception:
            self.db.rollback()
            raise
        logger.info("Project store updated: %s", store_code)
        return self.to_response(store)

    def deactivate(self, store_code: int, context: RequestContext | None = None) -> DeactivationResult:
        logger.info("Deactivating project store with code: %s", store_code)
        return self._deactivate(store_code, context, force=False)

    def force_deactivate(self, store_code: int, context: RequestContext | None = None) -> DeactivationResult:
        logger.warning("FORCE deactivating project store with code: %s (bypassing balances check)", store_code)
        return self._deactivate(store_code, context, force=True)

    def _deactivate(self, store_code: int, context: RequestContext | None, *, force: bool) -> DeactivationResult:
        mode = MODE_FORCE if force else MODE_SOFT
        try:
            store = self._require_store(store_code, for_update=True)
            if not store.is_active:
                self.db.rollback()
                logger.info("Project store %s already inactive; nothing to do", store_code)
                return DeactivationResult(store_code=store_code, mode=mode, changed=False)

            if not force and self.balances.has_nonzero_balance(store_code):
                metrics.increment_store_deactivation_blocked()
                raise BalanceConflictError(
                    details={
                        "store_code": store_code,
                        "total_on_hand": self.balances.total_on_hand(store_code),
                        "hint": "Transfer or write off all stock first, or retry with force=true",
                    }
                )

            changed = self.stores.mark_inactive(
                store_code,
                modified_at=datetime.utcnow(),
                modified_by=_actor(context),
            )
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        if changed:
            metrics.increment_store_deactivation(mode)
        log_json(
            logger,
            {
                "event": "store_deactivated",
                "store_code": store_code,
                "mode": mode,
                "changed": changed,
                "actor": _actor(context),
                "trace_id": _trace(context),
            },
            level=logging.WARNING if force else logging.INFO,
        )
        return DeactivationResult(store_code=store_code, mode=mode, changed=changed)

    def get_by_id(self, store_code: int) -> StoreResponse:
        logger.info("Retrieving store with code: %s", store_code)
        return self.to_response(self._require_store(store_code))

    def get_all_stores(self, *, status: str | None = None) -> list[StoreSummary]:
        logger.info("Retrieving all project stores")
        if status is not None and status not in STORE_STATUSES:
            raise ValidationError(
                details={"errors": [{"field": "status", "message": f"status must be one of {', '.join(STORE_STATUSES)}"}]}
            )
        stores = self.stores.list_all(status=status)
        counts = self.balances.count_items([store.id for store in stores])
        return [self.to_summary(store, counts.get(store.id, 0)) for store in stores]

    def get_stores_by_project(self, project_code: int) -> list[StoreResponse]:
        logger.info("Retrieving stores for project: %s", project_code)
        stores = self.stores.list_by_project(project_code)
        counts = self.balances.count_items([store.id for store in stores])
        return [self.to_response(store, counts.get(store.id, 0)) for store in stores]
