# services/school_admin/models/assessments.py
from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from shared.db import Base


class Exam(Base):
    __tablename__ = "exams"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(200), nullable=False)
    start_time = Column(DateTime, nullable=False)
    end_time = Column(DateTime, nullable=False)
    lesson_id = Column(Integer, ForeignKey("lessons.id", ondelete="CASCADE"), nullable=False)

    lesson = relationship("Lesson", back_populates="exams")
    results = relationship("Result", back_populates="exam", passive_deletes=True)


class Assignment(Base):
    __tablename__ = "assignments"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(200), nullable=False)
    start_date = Column(DateTime, nullable=False)
    due_date = Column(DateTime, nullable=False)
    lesson_id = Column(Integer, ForeignKey("lessons.id", ondelete="CASCADE"), nullable=False)

    lesson = relationship("Lesson", back_populates="assignments")
    results = relationship("Result", back_populates="assignment", passive_deletes=True)


class Result(Base):
    __tablename__ = "results"

    id = Column(Integer, primary_key=True, autoincrement=True)
    score = Column(Integer, nullable=False)
    exam_id = Column(Integer, ForeignKey("exams.id", ondelete="CASCADE"), nullable=True)
    assignment_id = Column(Integer, ForeignKey("assignments.id", ondelete="CASCADE"), nullable=True)
    student_id = Column(String(36), ForeignKey("students.id", ondelete="CASCADE"), nullable=False)

    __table_args__ = (
        CheckConstraint(
            "(exam_id IS NOT NULL) OR (assignment_id IS NOT NULL)",
            name="ck_result_has_source",
        ),
    )

    exam = relationship("Exam", back_populates="results")
    assignment = relationship("Assignment", back_populates="results")
    student = relationship("Student", back_populates="results")
