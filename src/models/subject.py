from sqlalchemy import Column, ForeignKey, Integer, String, Text

from .base import Base, created_at_column, updated_at_column


class SubjectModel(Base):
    __tablename__ = "subjects"

    id = Column(Integer, primary_key=True, index=True)
    department_id = Column(
        Integer, ForeignKey("departments.id"), index=True, nullable=False
    )
    name = Column(String(255), nullable=False)
    code = Column(String(50), unique=True, nullable=False)
    description = Column(Text, nullable=True)

    created_at = created_at_column()
    updated_at = updated_at_column()
