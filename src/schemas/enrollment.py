"""Enrollment schema definitions."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from schemas.base import APIModel
from schemas.class_schema import ClassInfo
from schemas.department import DepartmentInfo
from schemas.subject import SubjectInfo
from schemas.user import UserInfo


class EnrollmentInfo(APIModel):
    id: int
    student_id: str
    class_id: int
    created_at: datetime
    updated_at: datetime


class EnrollmentWithRelations(EnrollmentInfo):
    # "class" is a keyword, so the attribute is class_ and the JSON key is "class"
    class_: Optional[ClassInfo] = Field(default=None, alias="class")
    subject: Optional[SubjectInfo] = None
    department: Optional[DepartmentInfo] = None
    teacher: Optional[UserInfo] = None
