"""store balances

Revision ID: 0002_store_balances
Revises: 0001_initial
Create Date: 2026-09-08 00:00:00.000000
"""

from alembic import op
import sqlalchemy as sa


revision = "0002_store_balances"
down_revision = "0001_initial"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "store_balances",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("store_id", sa.Integer(), sa.ForeignKey("stores.id"), nullable=False),
        sa.Column("item_code", sa.String(length=100), nullable=False),
        sa.Column("quantity_on_hand", sa.Numeric(12, 4), nullable=False, server_default="0"),
        sa.Column("quantity_reserved", sa.Numeric(12, 4), nullable=False, server_default="0"),
        sa.Column("last_transaction_at", sa.DateTime(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
        sa.UniqueConstraint("store_id", "item_code", name="uq_store_balances_store_item"),
    )
    op.create_index("ix_store_balances_store_id", "store_balances", ["store_id"])


def downgrade() -> None:
    op.drop_index("ix_store_balances_store_id", table_name="store_balances")
    op.drop_table("store_balances")
