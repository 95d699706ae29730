"""initial project store tables

Revision ID: 0001_initial
Revises:
Create Date: 2026-09-01 00:00:00.000000
"""

from alembic import op
import sqlalchemy as sa


revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "projects",
        sa.Column("code", sa.Integer(), primary_key=True, autoincrement=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_table(
        "employees",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_table(
        "stores",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("project_code", sa.Integer(), sa.ForeignKey("projects.code"), nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("location", sa.String(length=500), nullable=True),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="ACTIVE"),
        sa.Column("manager_id", sa.Integer(), sa.ForeignKey("employees.id"), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("created_by", sa.String(length=255), nullable=True),
        sa.Column("modified_at", sa.DateTime(), nullable=False),
        sa.Column("modified_by", sa.String(length=255), nullable=True),
        sa.CheckConstraint("status IN ('ACTIVE', 'INACTIVE')", name="ck_stores_status"),
    )
    op.create_index("ix_stores_project_code", "stores", ["project_code"])
    op.create_index("ix_stores_status_name", "stores", ["status", "name"])


def downgrade() -> None:
    op.drop_index("ix_stores_status_name", table_name="stores")
    op.drop_index("ix_stores_project_code", table_name="stores")
    op.drop_table("stores")
    op.drop_table("employees")
    op.drop_table("projects")
