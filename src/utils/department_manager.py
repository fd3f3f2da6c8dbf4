"""Department management utilities."""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, ContextManager, List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from core.exceptions import DepartmentNotFoundError
from models.class_model import ClassModel
from models.department import DepartmentModel
from models.enrollment import EnrollmentModel
from models.subject import SubjectModel
from models.user import UserModel
from schemas.class_schema import ClassWithSubjectAndTeacher
from schemas.common import Pagination
from schemas.department import DepartmentListItem
from schemas.details import DepartmentDetails, DepartmentTotals
from schemas.subject import SubjectWithClassCount
from schemas.user import EnrolledStudent, UserRole
from utils.converters import (
    class_row_to_with_subject_and_teacher,
    department_row_to_list_item,
    model_to_department,
    row_to_enrolled_student,
    subject_row_to_with_class_count,
)
from utils.filters import FilterBuilder
from utils.pagination import PageParams, paginate

logger = logging.getLogger(__name__)

SessionFactory = Callable[[], ContextManager[Session]]


class DepartmentManager:
    """Manages department listing, creation and detail assembly."""

    def __init__(self, db: Session, session_factory: Optional[SessionFactory] = None):
        """Initialize DepartmentManager.

        Args:
            db: Request-scoped SQLAlchemy Session.
            session_factory: Opens additional sessions for the concurrent
                detail fetches. Without it those fetches share ``db`` and run
                one after another.
        """
        self.db = db
        self.session_factory = session_factory

    def list_departments(
        self, params: PageParams, search: Optional[str] = None
    ) -> Tuple[List[DepartmentListItem], Pagination]:
        """List departments with their subject counts, newest first."""
        where = (
            FilterBuilder()
            .search(search, DepartmentModel.name, DepartmentModel.code)
            .build()
        )
        query = (
            self.db.query(DepartmentModel, func.count(SubjectModel.id))
            .outerjoin(SubjectModel, DepartmentModel.id == SubjectModel.department_id)
            .filter(where)
            .group_by(DepartmentModel.id)
            .order_by(DepartmentModel.created_at.desc(), DepartmentModel.id.desc())
        )
        rows, pagination = paginate(query, params)
        return [department_row_to_list_item(d, total) for d, total in rows], pagination

    def create_department(
        self, code: Optional[str], name: Optional[str], description: Optional[str] = None
    ) -> int:
        """Insert a department and return its id."""
        model = DepartmentModel(code=code, name=name, description=description)
        self.db.add(model)
        try:
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        logger.info("Created department %s (%s)", model.id, code)
        return model.id

    def get_department(self, department_id: int) -> DepartmentModel:
        model = (
            self.db.query(DepartmentModel)
            .filter(DepartmentModel.id == department_id)
            .first()
        )
        if not model:
            raise DepartmentNotFoundError(department_id)
        return model

    def get_department_details(self, department_id: int) -> DepartmentDetails:
        """Assemble a department with its subjects, classes and students.

        The department is looked up first. The three collections are then
        fetched concurrently, each on its own session, and the call only
        returns once all of them have completed. The first failure is
        re-raised.

        Args:
            department_id: Department primary key.

        Returns:
            DepartmentDetails.

        Raises:
            DepartmentNotFoundError: If the department does not exist.
        """
        department = self.get_department(department_id)

        fetches = (
            self._subjects_with_class_counts,
            self._classes_with_subject_and_teacher,
            self._enrolled_students,
        )
        if self.session_factory is None:
            subjects, classes, students = (fetch(self.db, department_id) for fetch in fetches)
        else:
            with ThreadPoolExecutor(max_workers=len(fetches)) as executor:
                futures = [
                    executor.submit(self._run_in_own_session, fetch, department_id)
                    for fetch in fetches
                ]
                subjects, classes, students = (future.result() for future in futures)

        return DepartmentDetails(
            department=model_to_department(department),
            subjects=subjects,
            classes=classes,
            enrolled_students=students,
            totals=DepartmentTotals(
                subjects=len(subjects),
                classes=len(classes),
                enrolled_students=len(students),
            ),
        )

    def _run_in_own_session(self, fetch, department_id: int):
        with self.session_factory() as db:
            return fetch(db, department_id)

    @staticmethod
    def _subjects_with_class_counts(
        db: Session, department_id: int
    ) -> List[SubjectWithClassCount]:
        rows = (
            db.query(SubjectModel, func.count(ClassModel.id))
            .outerjoin(ClassModel, SubjectModel.id == ClassModel.subject_id)
            .filter(SubjectModel.department_id == department_id)
            .group_by(SubjectModel.id)
            .order_by(SubjectModel.created_at.desc(), SubjectModel.id.desc())
            .all()
        )
        return [subject_row_to_with_class_count(s, total) for s, total in rows]

    @staticmethod
    def _classes_with_subject_and_teacher(
        db: Session, department_id: int
    ) -> List[ClassWithSubjectAndTeacher]:
        rows = (
            db.query(ClassModel, SubjectModel, UserModel)
            .outerjoin(SubjectModel, ClassModel.subject_id == SubjectModel.id)
            .outerjoin(UserModel, ClassModel.teacher_id == UserModel.id)
            .filter(SubjectModel.department_id == department_id)
            .order_by(ClassModel.created_at.desc(), ClassModel.id.desc())
            .all()
        )
        return [class_row_to_with_subject_and_teacher(*row) for row in rows]

    @staticmethod
    def _enrolled_students(db: Session, department_id: int) -> List[EnrolledStudent]:
        # Grouping on the identity columns collapses one row per enrollment
        # into one row per student.
        rows = (
            db.query(
                UserModel.id,
                UserModel.name,
                UserModel.email,
                UserModel.image,
                UserModel.role,
            )
            .join(EnrollmentModel, UserModel.id == EnrollmentModel.student_id)
            .join(ClassModel, EnrollmentModel.class_id == ClassModel.id)
            .join(SubjectModel, ClassModel.subject_id == SubjectModel.id)
            .filter(
                UserModel.role == UserRole.STUDENT.value,
                SubjectModel.department_id == department_id,
            )
            .group_by(
                UserModel.id,
                UserModel.name,
                UserModel.email,
                UserModel.image,
                UserModel.role,
                UserModel.created_at,
            )
            .order_by(UserModel.created_at.desc(), UserModel.id.desc())
            .all()
        )
        return [row_to_enrolled_student(row) for row in rows]
