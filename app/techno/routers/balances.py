from fastapi import APIRouter, Depends

from app.techno.core.authorization import Operation
from app.techno.core.context import RequestContext
from app.techno.core.deps import require_operation
from app.techno.db.session import get_db
from app.techno.schemas.balances import BalanceAdjustmentRequest, BalanceResponse
from app.techno.schemas.common import ApiResponse, ok
from app.techno.services.balances import BalanceService


router = APIRouter(prefix="/warehouse/balances")


@router.get("/store/{store_code}", response_model=ApiResponse[list[BalanceResponse]])
def list_store_balances(
    store_code: int,
    context: RequestContext = Depends(require_operation(Operation.BALANCE_VIEW)),
    db=Depends(get_db),
):
    return ok(BalanceService(db).list_for_store(store_code))


@router.get("/store/{store_code}/item/{item_code}", response_model=ApiResponse[BalanceResponse])
def get_store_item_balance(
    store_code: int,
    item_code: str,
    context: RequestContext = Depends(require_operation(Operation.BALANCE_VIEW)),
    db=Depends(get_db),
):
    return ok(BalanceService(db).get_for_store_item(store_code, item_code))


@router.post("/adjustments", response_model=ApiResponse[BalanceResponse])
def adjust_balance(
    payload: BalanceAdjustmentRequest,
    context: RequestContext = Depends(require_operation(Operation.BALANCE_ADJUST)),
    db=Depends(get_db),
):
    balance = BalanceService(db).adjust(payload.store_code, payload.item_code, payload.quantity, context)
    return ok(balance, "Balance adjusted successfully")
