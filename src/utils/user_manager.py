"""User management utilities.

This module provides the user list query and the role-dependent user detail
assembly. Users are created by the authentication provider, so there is no
create operation here.
"""

import logging
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session, aliased

from core.exceptions import UserNotFoundError
from models.class_model import ClassModel
from models.department import DepartmentModel
from models.enrollment import EnrollmentModel
from models.subject import SubjectModel
from models.user import UserModel
from schemas.common import Pagination
from schemas.details import (
    AnyUserDetails,
    StudentDetails,
    StudentTotals,
    TeacherDetails,
    TeacherTotals,
    UserDetails,
)
from schemas.user import UserInfo, UserRole
from utils.aggregation import unique_by_key
from utils.converters import (
    class_row_to_with_subject_and_department,
    enrollment_row_to_with_relations,
    model_to_class,
    model_to_department,
    model_to_subject,
    model_to_user,
)
from utils.filters import FilterBuilder
from utils.pagination import PageParams, paginate

logger = logging.getLogger(__name__)


class UserManager:
    """Read operations over users and their role-specific aggregates."""

    def __init__(self, db: Session):
        """Initialize UserManager.

        Args:
            db: SQLAlchemy Session.
        """
        self.db = db

    def list_users(
        self,
        params: PageParams,
        search: Optional[str] = None,
        role: Optional[str] = None,
    ) -> Tuple[List[UserInfo], Pagination]:
        """List users, newest first.

        Args:
            params: Page parameters.
            search: Substring matched against name or email.
            role: Exact role to keep.

        Returns:
            Tuple of (users on the page, pagination metadata).
        """
        where = (
            FilterBuilder()
            .search(search, UserModel.name, UserModel.email)
            .equals(UserModel.role, role)
            .build()
        )
        query = (
            self.db.query(UserModel)
            .filter(where)
            .order_by(UserModel.created_at.desc(), UserModel.id.desc())
        )
        rows, pagination = paginate(query, params)
        return [model_to_user(row) for row in rows], pagination

    def get_user(self, user_id: str) -> UserModel:
        model = self.db.query(UserModel).filter(UserModel.id == user_id).first()
        if not model:
            raise UserNotFoundError(user_id)
        return model

    def get_user_details(self, user_id: str) -> AnyUserDetails:
        """Fetch a user together with the aggregate matching their role.

        Teachers get the classes they teach with the distinct subjects and
        departments behind them. Students get their enrollments with the
        distinct classes and subjects. Every other role gets the bare user.

        Args:
            user_id: Opaque user id.

        Returns:
            TeacherDetails, StudentDetails or UserDetails.

        Raises:
            UserNotFoundError: If no user has this id.
        """
        user = self.get_user(user_id)
        if user.role == UserRole.TEACHER.value:
            return self._teacher_details(user)
        if user.role == UserRole.STUDENT.value:
            return self._student_details(user)
        return UserDetails(user=model_to_user(user))

    def _teacher_details(self, user: UserModel) -> TeacherDetails:
        rows = (
            self.db.query(ClassModel, SubjectModel, DepartmentModel)
            .outerjoin(SubjectModel, ClassModel.subject_id == SubjectModel.id)
            .outerjoin(DepartmentModel, SubjectModel.department_id == DepartmentModel.id)
            .filter(ClassModel.teacher_id == user.id)
            .order_by(ClassModel.created_at.desc(), ClassModel.id.desc())
            .all()
        )
        classes = [
            class_row_to_with_subject_and_department(class_model, subject, department)
            for class_model, subject, department in rows
        ]
        subjects = unique_by_key(subject for _, subject, _ in rows)
        departments = unique_by_key(department for _, _, department in rows)

        return TeacherDetails(
            user=model_to_user(user),
            classes=classes,
            subjects=[model_to_subject(s) for s in subjects],
            departments=[model_to_department(d) for d in departments],
            totals=TeacherTotals(
                classes=len(classes),
                subjects=len(subjects),
                departments=len(departments),
            ),
        )

    def _student_details(self, user: UserModel) -> StudentDetails:
        teacher = aliased(UserModel, name="teacher")
        rows = (
            self.db.query(
                EnrollmentModel, ClassModel, SubjectModel, DepartmentModel, teacher
            )
            .outerjoin(ClassModel, EnrollmentModel.class_id == ClassModel.id)
            .outerjoin(SubjectModel, ClassModel.subject_id == SubjectModel.id)
            .outerjoin(DepartmentModel, SubjectModel.department_id == DepartmentModel.id)
            .outerjoin(teacher, ClassModel.teacher_id == teacher.id)
            .filter(EnrollmentModel.student_id == user.id)
            .order_by(EnrollmentModel.created_at.desc(), EnrollmentModel.id.desc())
            .all()
        )
        enrollments = [enrollment_row_to_with_relations(*row) for row in rows]
        classes = unique_by_key(row[1] for row in rows)
        subjects = unique_by_key(row[2] for row in rows)

        return StudentDetails(
            user=model_to_user(user),
            enrollments=enrollments,
            classes=[model_to_class(c) for c in classes],
            subjects=[model_to_subject(s) for s in subjects],
            totals=StudentTotals(
                enrollments=len(enrollments),
                classes=len(classes),
                subjects=len(subjects),
            ),
        )
