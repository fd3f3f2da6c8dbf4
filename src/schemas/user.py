"""User schema definitions."""

from datetime import datetime
from enum import Enum
from typing import Optional

from schemas.base import APIModel


class UserRole(str, Enum):
    STUDENT = "student"
    TEACHER = "teacher"
    ADMIN = "admin"


class UserInfo(APIModel):
    id: str
    name: str
    email: str
    email_verified: bool
    image: Optional[str] = None
    image_cld_pub_id: Optional[str] = None
    role: str
    created_at: datetime
    updated_at: datetime


class EnrolledStudent(APIModel):
    """Identity columns of a student enrolled somewhere below a resource."""

    id: str
    name: str
    email: str
    image: Optional[str] = None
    role: str
