from sqlalchemy import select

from app.techno.db.models import Employee, Project


DEFAULT_PROJECTS = [
    (42, "Riyadh Metro Site A"),
    (43, "Jeddah Warehouse Expansion"),
]

DEFAULT_EMPLOYEES = [
    (1001, "Store Keeper One"),
    (1002, "Store Keeper Two"),
]


def _get_or_create_projects(db):
    existing = {project.code for project in db.execute(select(Project)).scalars().all()}
    for code, name in DEFAULT_PROJECTS:
        if code in existing:
            continue
        db.add(Project(code=code, name=name))


def _get_or_create_employees(db):
    existing = {employee.id for employee in db.execute(select(Employee)).scalars().all()}
    for employee_id, name in DEFAULT_EMPLOYEES:
        if employee_id in existing:
            continue
        db.add(Employee(id=employee_id, name=name))


def run_seed(db):
    _get_or_create_projects(db)
    _get_or_create_employees(db)
    db.commit()
