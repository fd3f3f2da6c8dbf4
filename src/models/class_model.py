from sqlalchemy import JSON, Column, ForeignKey, Integer, String, Text

from .base import Base, created_at_column, updated_at_column


class ClassModel(Base):
    __tablename__ = "classes"

    id = Column(Integer, primary_key=True, index=True)
    subject_id = Column(Integer, ForeignKey("subjects.id"), index=True, nullable=False)
    teacher_id = Column(String, ForeignKey("user.id"), index=True, nullable=False)
    invite_code = Column(String(50), unique=True, nullable=False)
    name = Column(String(255), nullable=False)
    banner_cld_pub_id = Column(String, nullable=True)
    banner_url = Column(String, nullable=True)
    capacity = Column(Integer, nullable=False, default=50)
    description = Column(Text, nullable=True)
    status = Column(String, nullable=False, default="active")  # 'active', 'inactive', or 'archived'
    schedules = Column(JSON, nullable=False, default=list)

    created_at = created_at_column()
    updated_at = updated_at_column()
