from datetime import datetime

from sqlalchemy import func, select, update

from app.techno.db.models import STORE_STATUS_ACTIVE, STORE_STATUS_INACTIVE, Store


class StoreRepository:
    def __init__(self, db):
        self.db = db

    def get_by_id(self, store_id: int):
        return self.db.get(Store, store_id)

    def get_for_update(self, store_id: int):
        stmt = select(Store).where(Store.id == store_id).with_for_update()
        return self.db.execute(stmt).scalars().first()

    def list_all(self, *, status: str | None = None):
        stmt = select(Store)
        if status:
            stmt = stmt.where(Store.status == status)
        stmt = stmt.order_by(Store.name.asc(), Store.id.asc())
        return self.db.execute(stmt).scalars().all()

    def list_by_project(self, project_code: int):
        stmt = select(Store).where(Store.project_code == project_code).order_by(Store.name.asc(), Store.id.asc())
        return self.db.execute(stmt).scalars().all()

    def active_name_exists(self, name: str, *, exclude_id: int | None = None) -> bool:
        stmt = (
            select(func.count())
            .select_from(Store)
            .where(func.lower(Store.name) == name.lower(), Store.status == STORE_STATUS_ACTIVE)
        )
        if exclude_id is not None:
            stmt = stmt.where(Store.id != exclude_id)
        return self.db.execute(stmt).scalar_one() > 0

    def create(self, store: Store):
        self.db.add(store)
        self.db.commit()
        self.db.refresh(store)
        return store

    def update(self, store: Store):
        self.db.add(store)
        self.db.commit()
        self.db.refresh(store)
        return store

    def mark_inactive(self, store_id: int, *, modified_at: datetime, modified_by: str | None) -> bool:
        """Conditional status write; returns False when the store was no longer ACTIVE.

        Runs inside the caller's transaction and does not commit.
        """
        stmt = (
            update(Store)
            .where(Store.id == store_id, Store.status == STORE_STATUS_ACTIVE)
            .values(status=STORE_STATUS_INACTIVE, modified_at=modified_at, modified_by=modified_by)
            .execution_options(synchronize_session="fetch")
        )
        result = self.db.execute(stmt)
        return result.rowcount == 1
