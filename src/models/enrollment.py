from sqlalchemy import Column, ForeignKey, Integer, String

from .base import Base, created_at_column, updated_at_column


class EnrollmentModel(Base):
    __tablename__ = "enrollments"

    id = Column(Integer, primary_key=True, index=True)
    # (student_id, class_id) is not unique; a student may be enrolled twice
    student_id = Column(String, ForeignKey("user.id"), index=True, nullable=False)
    class_id = Column(Integer, ForeignKey("classes.id"), index=True, nullable=False)

    created_at = created_at_column()
    updated_at = updated_at_column()
