from app.techno.db.models import Employee, Project


class ProjectRepository:
    def __init__(self, db):
        self.db = db

    def get_by_code(self, project_code: int):
        return self.db.get(Project, project_code)


class EmployeeRepository:
    def __init__(self, db):
        self.db = db

    def get_by_id(self, employee_id: int):
        return self.db.get(Employee, employee_id)
