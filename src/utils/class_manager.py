"""Class management utilities."""

import logging
import secrets
import string
from typing import List, Optional, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, aliased

import config
from core.exceptions import ClassNotFoundError
from models.class_model import ClassModel
from models.department import DepartmentModel
from models.enrollment import EnrollmentModel
from models.subject import SubjectModel
from models.user import UserModel
from schemas.class_schema import ClassStatus, ClassWithSubjectAndTeacher
from schemas.common import Pagination
from schemas.details import ClassDetails, ClassTotals
from utils.aggregation import unique_by_key
from utils.converters import (
    class_row_to_with_relations,
    class_row_to_with_subject_and_teacher,
    row_to_enrolled_student,
)
from utils.filters import FilterBuilder
from utils.pagination import PageParams, paginate

logger = logging.getLogger(__name__)

INVITE_CODE_ALPHABET = string.ascii_lowercase + string.digits


def generate_invite_code(length: int = config.INVITE_CODE_LENGTH) -> str:
    return "".join(secrets.choice(INVITE_CODE_ALPHABET) for _ in range(length))


class ClassManager:
    """Manages class listing, creation and detail assembly."""

    def __init__(self, db: Session):
        self.db = db

    def list_classes(
        self,
        params: PageParams,
        search: Optional[str] = None,
        subject: Optional[str] = None,
        teacher: Optional[str] = None,
        status: Optional[str] = None,
    ) -> Tuple[List[ClassWithSubjectAndTeacher], Pagination]:
        """List classes with their subject and teacher, newest first.

        Args:
            params: Page parameters.
            search: Substring matched against the class name or invite code.
            subject: Substring of the subject name.
            teacher: Substring of the teacher name.
            status: Exact class status.

        Returns:
            Tuple of (classes on the page, pagination metadata).
        """
        teacher_user = aliased(UserModel, name="teacher")
        where = (
            FilterBuilder()
            .search(search, ClassModel.name, ClassModel.invite_code)
            .contains(SubjectModel.name, subject)
            .contains(teacher_user.name, teacher)
            .equals(ClassModel.status, status)
            .build()
        )
        query = (
            self.db.query(ClassModel, SubjectModel, teacher_user)
            .outerjoin(SubjectModel, ClassModel.subject_id == SubjectModel.id)
            .outerjoin(teacher_user, ClassModel.teacher_id == teacher_user.id)
            .filter(where)
            .order_by(ClassModel.created_at.desc(), ClassModel.id.desc())
        )
        rows, pagination = paginate(query, params)
        return [class_row_to_with_subject_and_teacher(*row) for row in rows], pagination

    def create_class(
        self,
        name: Optional[str],
        teacher_id: Optional[str],
        subject_id: Optional[int],
        capacity: Optional[int] = None,
        description: Optional[str] = None,
        status: Optional[str] = None,
        banner_url: Optional[str] = None,
        banner_cld_pub_id: Optional[str] = None,
    ) -> int:
        """Insert a class with a fresh invite code and no schedules.

        Returns:
            The new class id.
        """
        model = ClassModel(
            subject_id=subject_id,
            teacher_id=teacher_id,
            invite_code=generate_invite_code(),
            name=name,
            banner_cld_pub_id=banner_cld_pub_id,
            banner_url=banner_url,
            capacity=capacity if capacity is not None else config.DEFAULT_CLASS_CAPACITY,
            description=description,
            schedules=[],
            status=status or ClassStatus.ACTIVE.value,
        )
        self.db.add(model)
        try:
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        logger.info("Created class %s with invite code %s", model.id, model.invite_code)
        return model.id

    def get_class_details(self, class_id: int) -> ClassDetails:
        """Fetch a class with subject, department, teacher and its students.

        Raises:
            ClassNotFoundError: If the class does not exist.
        """
        teacher_user = aliased(UserModel, name="teacher")
        row = (
            self.db.query(ClassModel, SubjectModel, DepartmentModel, teacher_user)
            .outerjoin(SubjectModel, ClassModel.subject_id == SubjectModel.id)
            .outerjoin(DepartmentModel, SubjectModel.department_id == DepartmentModel.id)
            .outerjoin(teacher_user, ClassModel.teacher_id == teacher_user.id)
            .filter(ClassModel.id == class_id)
            .first()
        )
        if not row:
            raise ClassNotFoundError(class_id)

        student_rows = (
            self.db.query(
                EnrollmentModel.id.label("enrollment_id"),
                UserModel.id,
                UserModel.name,
                UserModel.email,
                UserModel.image,
                UserModel.role,
            )
            .join(UserModel, EnrollmentModel.student_id == UserModel.id)
            .filter(EnrollmentModel.class_id == class_id)
            .order_by(EnrollmentModel.created_at.desc(), EnrollmentModel.id.desc())
            .all()
        )
        # A student enrolled twice appears once
        students = [row_to_enrolled_student(r) for r in unique_by_key(student_rows)]
        return ClassDetails(
            class_=class_row_to_with_relations(*row),
            enrolled_students=students,
            totals=ClassTotals(enrolled_students=len(students)),
        )
