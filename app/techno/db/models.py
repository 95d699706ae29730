from datetime import datetime
from decimal import Decimal

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


STORE_STATUS_ACTIVE = "ACTIVE"
STORE_STATUS_INACTIVE = "INACTIVE"
STORE_STATUSES = (STORE_STATUS_ACTIVE, STORE_STATUS_INACTIVE)


class Base(DeclarativeBase):
    pass


class Project(Base):
    __tablename__ = "projects"

    code: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False)

    stores = relationship("Store", back_populates="project")


class Employee(Base):
    __tablename__ = "employees"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False)


class Store(Base):
    __tablename__ = "stores"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    project_code: Mapped[int] = mapped_column(Integer, ForeignKey("projects.code"), index=True, nullable=False)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    location: Mapped[str | None] = mapped_column(String(500), nullable=True)
    status: Mapped[str] = mapped_column(String(20), default=STORE_STATUS_ACTIVE, nullable=False)
    manager_id: Mapped[int | None] = mapped_column(Integer, ForeignKey("employees.id"), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False)
    created_by: Mapped[str | None] = mapped_column(String(255), nullable=True)
    modified_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False)
    modified_by: Mapped[str | None] = mapped_column(String(255), nullable=True)

    project = relationship("Project", back_populates="stores")
    manager = relationship("Employee")
    balances = relationship("StoreBalance", back_populates="store")

    __table_args__ = (
        CheckConstraint("status IN ('ACTIVE', 'INACTIVE')", name="ck_stores_status"),
    )

    @property
    def is_active(self) -> bool:
        return self.status == STORE_STATUS_ACTIVE


class StoreBalance(Base):
    __tablename__ = "store_balances"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    store_id: Mapped[int] = mapped_column(Integer, ForeignKey("stores.id"), index=True, nullable=False)
    item_code: Mapped[str] = mapped_column(String(100), nullable=False)
    quantity_on_hand: Mapped[Decimal] = mapped_column(Numeric(12, 4), default=Decimal("0"), nullable=False)
    quantity_reserved: Mapped[Decimal] = mapped_column(Numeric(12, 4), default=Decimal("0"), nullable=False)
    last_transaction_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)

    store = relationship("Store", back_populates="balances")

    __table_args__ = (
        UniqueConstraint("store_id", "item_code", name="uq_store_balances_store_item"),
    )

    @property
    def quantity_available(self) -> Decimal:
        return (self.quantity_on_hand or Decimal("0")) - (self.quantity_reserved or Decimal("0"))


Index("ix_stores_status_name", Store.status, Store.name)
