import logging
from datetime import datetime
from decimal import Decimal

from app.techno.core.context import RequestContext
from app.techno.core.error_catalog import ConflictError, ErrorCatalog, NotFoundError, ValidationError
from app.techno.db.models import StoreBalance
from app.techno.repos.balances import BalanceRepository
from app.techno.repos.stores import StoreRepository
from app.techno.schemas.balances import BalanceResponse

logger = logging.getLogger(__name__)

_ZERO = Decimal("0")
# Largest value a Numeric(12, 4) column holds.
_MAX_QUANTITY = Decimal("99999999.9999")


def to_balance_response(balance: StoreBalance) -> BalanceResponse:
    return BalanceResponse(
        balance_id=balance.id,
        store_code=balance.store_id,
        item_code=balance.item_code,
        quantity_on_hand=balance.quantity_on_hand,
        quantity_reserved=balance.quantity_reserved,
        quantity_available=balance.quantity_available,
        last_transaction_at=balance.last_transaction_at,
    )


class BalanceService:
    """Reads and adjusts per-item store balances.

    Adjustments lock the owning store row first, so a receipt can never land
    on a store that a concurrent deactivation has just made inactive.
    """

    def __init__(self, db):
        self.db = db
        self.stores = StoreRepository(db)
        self.repo = BalanceRepository(db)

    def _require_store(self, store_code: int, *, for_update: bool = False):
        store = self.stores.get_for_update(store_code) if for_update else self.stores.get_by_id(store_code)
        if store is None:
            raise NotFoundError(ErrorCatalog.STORE_NOT_FOUND, details={"store_code": store_code})
        return store

    def list_for_store(self, store_code: int) -> list[BalanceResponse]:
        self._require_store(store_code)
        return [to_balance_response(balance) for balance in self.repo.list_for_store(store_code)]

    def get_for_store_item(self, store_code: int, item_code: str) -> BalanceResponse:
        self._require_store(store_code)
        balance = self.repo.get_for_store_item(store_code, item_code)
        if balance is None:
            raise NotFoundError(
                ErrorCatalog.BALANCE_NOT_FOUND,
                details={"store_code": store_code, "item_code": item_code},
            )
        return to_balance_response(balance)

    def adjust(
        self,
        store_code: int,
        item_code: str,
        quantity: Decimal,
        context: RequestContext | None = None,
    ) -> BalanceResponse:
        item_code = (item_code or "").strip()
        if not item_code:
            raise ValidationError(details={"errors": [{"field": "itemCode", "message": "itemCode is required"}]})
        if quantity == 0:
            raise ValidationError(details={"errors": [{"field": "quantity", "message": "quantity must not be zero"}]})

        try:
            store = self._require_store(store_code, for_update=True)
            if not store.is_active:
                raise ConflictError(ErrorCatalog.STORE_INACTIVE, details={"store_code": store_code})

            balance = self.repo.get_for_store_item(store_code, item_code, for_update=True)
            if balance is None:
                balance = self.repo.add(
                    StoreBalance(
                        store_id=store_code,
                        item_code=item_code,
                        quantity_on_hand=_ZERO,
                        quantity_reserved=_ZERO,
                        created_at=datetime.utcnow(),
                    )
                )
            on_hand = (balance.quantity_on_hand or _ZERO) + quantity
            reserved = balance.quantity_reserved or _ZERO
            if on_hand < 0:
                raise ValidationError(
                    details={
                        "errors": [{"field": "quantity", "message": "adjustment would make quantity on hand negative"}],
                        "quantity_on_hand": balance.quantity_on_hand,
                    }
                )
            if on_hand > _MAX_QUANTITY:
                raise ValidationError(
                    details={
                        "errors": [{"field": "quantity", "message": "adjustment would exceed the maximum quantity on hand"}],
                        "quantity_on_hand": balance.quantity_on_hand,
                    }
                )
            if on_hand < reserved:
                raise ValidationError(
                    details={
                        "errors": [{"field": "quantity", "message": "adjustment would drop below reserved quantity"}],
                        "quantity_reserved": reserved,
                    }
                )

            now = datetime.utcnow()
            balance.quantity_on_hand = on_hand
            balance.last_transaction_at = now
            balance.updated_at = now
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(balance)
        logger.info(
            "Adjusted balance store=%s item=%s delta=%s on_hand=%s actor=%s",
            store_code,
            item_code,
            quantity,
            balance.quantity_on_hand,
            context.user_id if context else None,
        )
        return to_balance_response(balance)
