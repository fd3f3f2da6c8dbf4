from sqlalchemy import Column, Integer, String, Text

from .base import Base, created_at_column, updated_at_column


class DepartmentModel(Base):
    __tablename__ = "departments"

    id = Column(Integer, primary_key=True, index=True)
    code = Column(String(50), unique=True, nullable=False)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)

    created_at = created_at_column()
    updated_at = updated_at_column()
