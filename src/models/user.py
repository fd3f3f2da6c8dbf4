"""User database model.

This module defines the User database model using SQLAlchemy. Rows are
written by the external authentication provider; the API only reads them.
"""

from sqlalchemy import Boolean, Column, String

from .base import Base, created_at_column, updated_at_column


class UserModel(Base):
    """User database model."""

    __tablename__ = "user"

    id = Column(String, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, nullable=False)
    email_verified = Column(Boolean, nullable=False, default=False)
    image = Column(String, nullable=True)
    image_cld_pub_id = Column(String, nullable=True)
    role = Column(String, nullable=False, default="student")  # 'student', 'teacher', or 'admin'

    created_at = created_at_column()
    updated_at = updated_at_column()
