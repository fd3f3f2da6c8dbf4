"""Database models.

Importing this package registers every table with ``Base.metadata``.
"""

from .base import Base
from .auth import AccountModel, SessionModel, VerificationModel
from .class_model import ClassModel
from .department import DepartmentModel
from .enrollment import EnrollmentModel
from .subject import SubjectModel
from .user import UserModel

__all__ = [
    "Base",
    "AccountModel",
    "ClassModel",
    "DepartmentModel",
    "EnrollmentModel",
    "SessionModel",
    "SubjectModel",
    "UserModel",
    "VerificationModel",
]
