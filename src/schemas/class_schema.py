"""Class schema definitions."""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import Field

from schemas.base import APIModel
from schemas.department import DepartmentInfo
from schemas.subject import SubjectInfo
from schemas.user import UserInfo


class ClassStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    ARCHIVED = "archived"


class ClassInfo(APIModel):
    id: int
    subject_id: int
    teacher_id: str
    invite_code: str
    name: str
    banner_cld_pub_id: Optional[str] = None
    banner_url: Optional[str] = None
    capacity: int
    description: Optional[str] = None
    status: str
    schedules: List[Dict[str, Any]] = Field(
        default_factory=list,
        description="Weekly slots, e.g. {'day': 'monday', 'startTime': '09:00', 'endTime': '10:30'}.",
    )
    created_at: datetime
    updated_at: datetime


class ClassWithTeacher(ClassInfo):
    teacher: Optional[UserInfo] = None


class ClassWithSubjectAndTeacher(ClassInfo):
    subject: Optional[SubjectInfo] = None
    teacher: Optional[UserInfo] = None


class ClassWithSubjectAndDepartment(ClassInfo):
    subject: Optional[SubjectInfo] = None
    department: Optional[DepartmentInfo] = None


class ClassWithRelations(ClassInfo):
    subject: Optional[SubjectInfo] = None
    department: Optional[DepartmentInfo] = None
    teacher: Optional[UserInfo] = None


class CreateClassRequest(APIModel):
    name: Optional[str] = None
    teacher_id: Optional[str] = None
    subject_id: Optional[int] = None
    capacity: Optional[int] = None
    description: Optional[str] = None
    status: Optional[ClassStatus] = None
    banner_url: Optional[str] = None
    banner_cld_pub_id: Optional[str] = None
