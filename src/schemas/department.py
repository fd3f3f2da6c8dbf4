"""Department schema definitions."""

from datetime import datetime
from typing import Optional

from schemas.base import APIModel


class DepartmentInfo(APIModel):
    id: int
    code: str
    name: str
    description: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class DepartmentListItem(DepartmentInfo):
    total_subjects: int


class CreateDepartmentRequest(APIModel):
    code: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
