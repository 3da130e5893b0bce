# services/school_admin/models/classes.py
from sqlalchemy import CheckConstraint, Column, ForeignKey, Index, Integer, String
from sqlalchemy.orm import relationship

from shared.db import Base


class Grade(Base):
    __tablename__ = "grades"

    id = Column(Integer, primary_key=True, autoincrement=True)
    level = Column(Integer, unique=True, nullable=False)

    classes = relationship("SchoolClass", back_populates="grade", passive_deletes=True)
    students = relationship("Student", back_populates="grade", passive_deletes=True)


class SchoolClass(Base):
    __tablename__ = "classes"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(50), unique=True, nullable=False)  # E.g., "1A", "4B"
    capacity = Column(Integer, nullable=False)
    grade_id = Column(Integer, ForeignKey("grades.id"), nullable=False)
    supervisor_id = Column(String(36), ForeignKey("teachers.id"), nullable=True)

    __table_args__ = (
        CheckConstraint("capacity > 0", name="ck_class_capacity_positive"),
        Index("ix_class_supervisor_id", "supervisor_id"),
    )

    grade = relationship("Grade", back_populates="classes")
    supervisor = relationship("Teacher", back_populates="classes")
    students = relationship("Student", back_populates="school_class", passive_deletes=True)
    lessons = relationship("Lesson", back_populates="school_class", passive_deletes=True)
    events = relationship("Event", back_populates="school_class", passive_deletes=True)
    announcements = relationship("Announcement", back_populates="school_class", passive_deletes=True)
