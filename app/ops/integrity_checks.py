from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from sqlalchemy import func, or_, select

from app.techno.core.metrics import metrics
from app.techno.db.models import STORE_STATUS_INACTIVE, Project, Store, StoreBalance


SEVERITY_CRITICAL = "CRITICAL"
SEVERITY_WARN = "WARN"


@dataclass(frozen=True)
class IntegrityFinding:
    check_id: str
    severity: str
    project_code: int | None
    message: str
    entity: str
    entity_id: str | None
    details: dict


def resolve_projects(db, project: str) -> list[int]:
    if project.lower() != "all":
        return [int(project)]
    return [row.code for row in db.execute(select(Project.code).order_by(Project.code)).all()]


def check_inactive_store_with_balance(db, project_code: int) -> list[IntegrityFinding]:
    rows = db.execute(
        select(Store.id, Store.name, func.sum(StoreBalance.quantity_on_hand).label("total_on_hand"))
        .join(StoreBalance, StoreBalance.store_id == Store.id)
        .where(Store.project_code == project_code)
        .where(Store.status == STORE_STATUS_INACTIVE)
        .group_by(Store.id, Store.name)
        .having(func.sum(StoreBalance.quantity_on_hand) != 0)
    ).all()
    findings = []
    for row in rows:
        findings.append(
            IntegrityFinding(
                check_id="inactive_store_with_balance",
                severity=SEVERITY_WARN,
                project_code=project_code,
                message="INACTIVE store still holds inventory balance.",
                entity="stores",
                entity_id=str(row.id),
                details={"store_name": row.name, "total_on_hand": str(Decimal(str(row.total_on_hand)))},
            )
        )
    if findings:
        metrics.increment_invariant_violation("inactive_store_with_balance", len(findings))
    return findings


def check_negative_balance(db, project_code: int) -> list[IntegrityFinding]:
    rows = db.execute(
        select(
            StoreBalance.id,
            StoreBalance.store_id,
            StoreBalance.item_code,
            StoreBalance.quantity_on_hand,
            StoreBalance.quantity_reserved,
        )
        .join(Store, StoreBalance.store_id == Store.id)
        .where(Store.project_code == project_code)
        .where(
            or_(
                StoreBalance.quantity_on_hand < 0,
                StoreBalance.quantity_reserved < 0,
                StoreBalance.quantity_reserved > StoreBalance.quantity_on_hand,
            )
        )
    ).all()
    findings = []
    for row in rows:
        findings.append(
            IntegrityFinding(
                check_id="negative_balance",
                severity=SEVERITY_CRITICAL,
                project_code=project_code,
                message="Balance below zero or reserved above on-hand.",
                entity="store_balances",
                entity_id=str(row.id),
                details={
                    "store_id": row.store_id,
                    "item_code": row.item_code,
                    "quantity_on_hand": str(row.quantity_on_hand),
                    "quantity_reserved": str(row.quantity_reserved),
                },
            )
        )
    if findings:
        metrics.increment_invariant_violation("negative_balance", len(findings))
    return findings


def check_orphan_stores(db) -> list[IntegrityFinding]:
    rows = db.execute(
        select(Store.id, Store.project_code)
        .outerjoin(Project, Project.code == Store.project_code)
        .where(Project.code.is_(None))
    ).all()
    findings = []
    for row in rows:
        findings.append(
            IntegrityFinding(
                check_id="store_project_missing",
                severity=SEVERITY_CRITICAL,
                project_code=row.project_code,
                message="Store references a project that does not exist.",
                entity="stores",
                entity_id=str(row.id),
                details={"project_code": row.project_code},
            )
        )
    if findings:
        metrics.increment_invariant_violation("store_project_missing", len(findings))
    return findings


def run_integrity_checks(db, project_code: int) -> list[IntegrityFinding]:
    findings: list[IntegrityFinding] = []
    findings.extend(check_inactive_store_with_balance(db, project_code))
    findings.extend(check_negative_balance(db, project_code))
    return findings
