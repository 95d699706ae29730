from decimal import Decimal

from sqlalchemy import exists, func, select

from app.techno.db.models import StoreBalance


class BalanceRepository:
    def __init__(self, db):
        self.db = db

    def total_on_hand(self, store_id: int) -> Decimal:
        stmt = select(func.coalesce(func.sum(StoreBalance.quantity_on_hand), 0)).where(
            StoreBalance.store_id == store_id
        )
        return Decimal(str(self.db.execute(stmt).scalar_one()))

    def has_nonzero_balance(self, store_id: int) -> bool:
        """True when any single item row holds a nonzero quantity on hand.

        Checked per row, so offsetting positive and negative rows still count
        as stock.
        """
        stmt = select(exists().where(StoreBalance.store_id == store_id, StoreBalance.quantity_on_hand != 0))
        return bool(self.db.execute(stmt).scalar())

    def count_items(self, store_ids: list[int]) -> dict[int, int]:
        if not store_ids:
            return {}
        stmt = (
            select(StoreBalance.store_id, func.count())
            .where(StoreBalance.store_id.in_(store_ids))
            .group_by(StoreBalance.store_id)
        )
        return {store_id: count for store_id, count in self.db.execute(stmt).all()}

    def list_for_store(self, store_id: int):
        stmt = select(StoreBalance).where(StoreBalance.store_id == store_id).order_by(StoreBalance.item_code.asc())
        return self.db.execute(stmt).scalars().all()

    def get_for_store_item(self, store_id: int, item_code: str, *, for_update: bool = False):
        stmt = select(StoreBalance).where(StoreBalance.store_id == store_id, StoreBalance.item_code == item_code)
        if for_update:
            stmt = stmt.with_for_update()
        return self.db.execute(stmt).scalars().first()

    def add(self, balance: StoreBalance) -> StoreBalance:
        self.db.add(balance)
        return balance
