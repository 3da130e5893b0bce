# services/school_admin/models/lessons.py
import enum

from sqlalchemy import Column, DateTime, Enum, ForeignKey, Index, Integer, String
from sqlalchemy.orm import relationship

from shared.db import Base


class Day(str, enum.Enum):
    MONDAY = "MONDAY"
    TUESDAY = "TUESDAY"
    WEDNESDAY = "WEDNESDAY"
    THURSDAY = "THURSDAY"
    FRIDAY = "FRIDAY"


class Lesson(Base):
    __tablename__ = "lessons"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    day = Column(Enum(Day, name="lesson_day"), nullable=False)
    start_time = Column(DateTime, nullable=False)
    end_time = Column(DateTime, nullable=False)
    subject_id = Column(Integer, ForeignKey("subjects.id"), nullable=False)
    class_id = Column(Integer, ForeignKey("classes.id"), nullable=False)
    teacher_id = Column(String(36), ForeignKey("teachers.id"), nullable=False)

    __table_args__ = (
        Index("ix_lesson_teacher_id", "teacher_id"),  # ownership checks
        Index("ix_lesson_class_teacher", "class_id", "teacher_id"),
    )

    subject = relationship("Subject", back_populates="lessons")
    school_class = relationship("SchoolClass", back_populates="lessons")
    teacher = relationship("Teacher", back_populates="lessons")
    exams = relationship("Exam", back_populates="lesson", passive_deletes=True)
    assignments = relationship("Assignment", back_populates="lesson", passive_deletes=True)
