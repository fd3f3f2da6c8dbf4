"""Shared fixtures: an app bound to a throwaway SQLite file and a row factory."""

import itertools

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from app import create_app
from core.database import Database
from models.class_model import ClassModel
from models.department import DepartmentModel
from models.enrollment import EnrollmentModel
from models.subject import SubjectModel
from models.user import UserModel


class Factory:
    """Inserts rows with sensible defaults and returns the ORM objects."""

    def __init__(self, db: Session):
        self.db = db
        self._seq = itertools.count(1)

    def _save(self, model):
        self.db.add(model)
        self.db.commit()
        self.db.refresh(model)
        return model

    def user(self, role: str = "student", **kwargs) -> UserModel:
        n = next(self._seq)
        values = {
            "id": f"user-{n}",
            "name": f"User {n}",
            "email": f"user{n}@example.edu",
            "email_verified": True,
            "role": role,
        }
        values.update(kwargs)
        return self._save(UserModel(**values))

    def department(self, **kwargs) -> DepartmentModel:
        n = next(self._seq)
        values = {"code": f"D{n}", "name": f"Department {n}"}
        values.update(kwargs)
        return self._save(DepartmentModel(**values))

    def subject(self, department: DepartmentModel, **kwargs) -> SubjectModel:
        n = next(self._seq)
        values = {
            "department_id": department.id,
            "code": f"S{n}",
            "name": f"Subject {n}",
        }
        values.update(kwargs)
        return self._save(SubjectModel(**values))

    def klass(self, subject: SubjectModel, teacher: UserModel, **kwargs) -> ClassModel:
        n = next(self._seq)
        values = {
            "subject_id": subject.id,
            "teacher_id": teacher.id,
            "invite_code": f"inv{n:04d}",
            "name": f"Class {n}",
            "capacity": 30,
            "status": "active",
            "schedules": [],
        }
        values.update(kwargs)
        return self._save(ClassModel(**values))

    def enrollment(self, student: UserModel, klass: ClassModel) -> EnrollmentModel:
        return self._save(EnrollmentModel(student_id=student.id, class_id=klass.id))


@pytest.fixture
def database(tmp_path):
    database = Database(f"sqlite:///{tmp_path / 'test.db'}")
    database.init()
    yield database
    database.dispose()


@pytest.fixture
def db(database):
    session = database.SessionLocal()
    yield session
    session.close()


@pytest.fixture
def factory(db) -> Factory:
    return Factory(db)


@pytest.fixture
def test_client(database):
    app = create_app(database=database)
    with TestClient(app) as client:
        yield client
