"""Subject management utilities."""

import logging
from typing import List, Optional, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from core.exceptions import SubjectNotFoundError
from models.class_model import ClassModel
from models.department import DepartmentModel
from models.subject import SubjectModel
from models.user import UserModel
from schemas.common import Pagination
from schemas.details import SubjectDetails, SubjectTotals
from schemas.subject import SubjectWithDepartment
from utils.converters import class_row_to_with_teacher, subject_row_to_with_department
from utils.filters import FilterBuilder
from utils.pagination import PageParams, paginate

logger = logging.getLogger(__name__)


class SubjectManager:
    """Manages subject listing, creation and detail assembly."""

    def __init__(self, db: Session):
        self.db = db

    def list_subjects(
        self,
        params: PageParams,
        search: Optional[str] = None,
        department: Optional[str] = None,
    ) -> Tuple[List[SubjectWithDepartment], Pagination]:
        """List subjects with their department, newest first.

        The department join is part of the base query so the name filter
        applies to the count as well as to the page.
        """
        where = (
            FilterBuilder()
            .search(search, SubjectModel.name, SubjectModel.code)
            .contains(DepartmentModel.name, department)
            .build()
        )
        query = (
            self.db.query(SubjectModel, DepartmentModel)
            .outerjoin(DepartmentModel, SubjectModel.department_id == DepartmentModel.id)
            .filter(where)
            .order_by(SubjectModel.created_at.desc(), SubjectModel.id.desc())
        )
        rows, pagination = paginate(query, params)
        return [subject_row_to_with_department(*row) for row in rows], pagination

    def create_subject(
        self,
        department_id: Optional[int],
        name: Optional[str],
        code: Optional[str],
        description: Optional[str] = None,
    ) -> int:
        """Insert a subject and return its id."""
        model = SubjectModel(
            department_id=department_id,
            name=name,
            code=code,
            description=description,
        )
        self.db.add(model)
        try:
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        logger.info("Created subject %s (%s)", model.id, code)
        return model.id

    def get_subject_details(self, subject_id: int) -> SubjectDetails:
        """Fetch a subject with its department and the classes teaching it.

        Raises:
            SubjectNotFoundError: If the subject does not exist.
        """
        row = (
            self.db.query(SubjectModel, DepartmentModel)
            .outerjoin(DepartmentModel, SubjectModel.department_id == DepartmentModel.id)
            .filter(SubjectModel.id == subject_id)
            .first()
        )
        if not row:
            raise SubjectNotFoundError(subject_id)

        class_rows = (
            self.db.query(ClassModel, UserModel)
            .outerjoin(UserModel, ClassModel.teacher_id == UserModel.id)
            .filter(ClassModel.subject_id == subject_id)
            .order_by(ClassModel.created_at.desc(), ClassModel.id.desc())
            .all()
        )
        classes = [class_row_to_with_teacher(*class_row) for class_row in class_rows]
        return SubjectDetails(
            subject=subject_row_to_with_department(*row),
            classes=classes,
            totals=SubjectTotals(classes=len(classes)),
        )
