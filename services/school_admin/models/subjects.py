# services/school_admin/models/subjects.py
from sqlalchemy import Column, ForeignKey, Integer, String, Table
from sqlalchemy.orm import relationship

from shared.db import Base

teacher_subjects = Table(
    "teacher_subjects",
    Base.metadata,
    Column("subject_id", Integer, ForeignKey("subjects.id", ondelete="CASCADE"), primary_key=True),
    Column("teacher_id", String(36), ForeignKey("teachers.id", ondelete="CASCADE"), primary_key=True),
)


class Subject(Base):
    __tablename__ = "subjects"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), unique=True, nullable=False)  # e.g. "Math", "Science"

    teachers = relationship(
        "Teacher", secondary=teacher_subjects, back_populates="subjects", passive_deletes=True
    )
    lessons = relationship("Lesson", back_populates="subject", passive_deletes=True)
