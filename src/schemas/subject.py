"""Subject schema definitions."""

from datetime import datetime
from typing import Optional

from schemas.base import APIModel
from schemas.department import DepartmentInfo


class SubjectInfo(APIModel):
    id: int
    department_id: int
    name: str
    code: str
    description: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class SubjectWithDepartment(SubjectInfo):
    department: Optional[DepartmentInfo] = None


class SubjectWithClassCount(SubjectInfo):
    total_classes: int


class CreateSubjectRequest(APIModel):
    department_id: Optional[int] = None
    name: Optional[str] = None
    code: Optional[str] = None
    description: Optional[str] = None
