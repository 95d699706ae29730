import logging
from typing import Literal

from fastapi import APIRouter, Depends, Query, status

from app.techno.core.authorization import Operation
from app.techno.core.context import RequestContext
from app.techno.core.deps import check_operation, require_operation, require_request_context
from app.techno.db.session import get_db
from app.techno.schemas.common import ApiResponse, ok
from app.techno.schemas.stores import StoreRequest, StoreResponse, StoreSummary
from app.techno.services.stores import StoreLifecycleService


router = APIRouter(prefix="/warehouse/stores")
logger = logging.getLogger(__name__)

MSG_CREATED = "Project store created successfully"
MSG_UPDATED = "Project store updated successfully"
MSG_DEACTIVATED = "Project store deactivated successfully"
MSG_FORCE_DEACTIVATED = "Project store force deactivated successfully (balance check bypassed)"
MSG_ALREADY_INACTIVE = "Project store is already inactive"


@router.post("", status_code=status.HTTP_201_CREATED, response_model=ApiResponse[StoreResponse])
def create_store(
    payload: StoreRequest,
    context: RequestContext = Depends(require_operation(Operation.STORE_CREATE)),
    db=Depends(get_db),
):
    logger.info("REST request to create project store: %s", payload.store_name)
    response = StoreLifecycleService(db).create(payload, context)
    return ok(response, MSG_CREATED)


@router.get("", response_model=ApiResponse[list[StoreSummary]])
def list_stores(
    store_status: Literal["ACTIVE", "INACTIVE"] | None = Query(default=None, alias="status"),
    context: RequestContext = Depends(require_operation(Operation.STORE_LIST)),
    db=Depends(get_db),
):
    logger.info("REST request to get all project stores")
    return ok(StoreLifecycleService(db).get_all_stores(status=store_status))


@router.get("/project/{project_code}", response_model=ApiResponse[list[StoreResponse]])
def list_stores_by_project(
    project_code: int,
    context: RequestContext = Depends(require_operation(Operation.STORE_LIST_BY_PROJECT)),
    db=Depends(get_db),
):
    logger.info("REST request to get stores for project: %s", project_code)
    return ok(StoreLifecycleService(db).get_stores_by_project(project_code))


@router.get("/{store_code}", response_model=ApiResponse[StoreResponse])
def get_store(
    store_code: int,
    context: RequestContext = Depends(require_operation(Operation.STORE_VIEW)),
    db=Depends(get_db),
):
    logger.info("REST request to get project store: %s", store_code)
    return ok(StoreLifecycleService(db).get_by_id(store_code))


@router.put("/{store_code}", response_model=ApiResponse[StoreResponse])
def update_store(
    store_code: int,
    payload: StoreRequest,
    context: RequestContext = Depends(require_operation(Operation.STORE_UPDATE)),
    db=Depends(get_db),
):
    logger.info("REST request to update project store: %s", store_code)
    response = StoreLifecycleService(db).update(store_code, payload, context)
    return ok(response, MSG_UPDATED)


@router.delete("/{store_code}", response_model=ApiResponse[None])
def deactivate_store(
    store_code: int,
    force: bool = Query(default=False),
    context: RequestContext = Depends(require_request_context),
    db=Depends(get_db),
):
    logger.info("REST request to deactivate project store: %s (force: %s)", store_code, force)
    operation = Operation.STORE_FORCE_DEACTIVATE if force else Operation.STORE_DEACTIVATE
    check_operation(operation, context)

    service = StoreLifecycleService(db)
    if force:
        result = service.force_deactivate(store_code, context)
        message = MSG_FORCE_DEACTIVATED
    else:
        result = service.deactivate(store_code, context)
        message = MSG_DEACTIVATED
    if not result.changed:
        message = MSG_ALREADY_INACTIVE
    return ok(None, message)
