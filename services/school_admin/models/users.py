# services/school_admin/models/users.py
import enum

from sqlalchemy import Column, Date, DateTime, Enum, ForeignKey, Index, Integer, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from shared.db import Base
from services.school_admin.models.subjects import teacher_subjects


class Sex(str, enum.Enum):
    MALE = "MALE"
    FEMALE = "FEMALE"


class Teacher(Base):
    __tablename__ = "teachers"

    # Same id as the teacher's UserAccount
    id = Column(String(36), primary_key=True)
    username = Column(String(20), unique=True, nullable=False)
    name = Column(String(100), nullable=False)
    surname = Column(String(100), nullable=False)
    email = Column(String(100), unique=True, nullable=True)
    phone = Column(String(30), unique=True, nullable=True)
    address = Column(String, nullable=False)
    img = Column(String, nullable=True)
    blood_type = Column(String(5), nullable=False)
    sex = Column(Enum(Sex, name="user_sex"), nullable=False)
    birthday = Column(Date, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    subjects = relationship(
        "Subject", secondary=teacher_subjects, back_populates="teachers", passive_deletes=True
    )
    lessons = relationship("Lesson", back_populates="teacher", passive_deletes=True)
    classes = relationship("SchoolClass", back_populates="supervisor", passive_deletes=True)


class Student(Base):
    __tablename__ = "students"

    # Same id as the student's UserAccount
    id = Column(String(36), primary_key=True)
    username = Column(String(20), unique=True, nullable=False)
    name = Column(String(100), nullable=False)
    surname = Column(String(100), nullable=False)
    email = Column(String(100), unique=True, nullable=True)
    phone = Column(String(30), unique=True, nullable=True)
    address = Column(String, nullable=False)
    img = Column(String, nullable=True)
    blood_type = Column(String(5), nullable=False)
    sex = Column(Enum(Sex, name="user_sex"), nullable=False)
    birthday = Column(Date, nullable=False)
    grade_id = Column(Integer, ForeignKey("grades.id"), nullable=False)
    class_id = Column(Integer, ForeignKey("classes.id"), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (
        Index("ix_student_class_id", "class_id"),  # capacity counts
    )

    grade = relationship("Grade", back_populates="students")
    school_class = relationship("SchoolClass", back_populates="students")
    results = relationship("Result", back_populates="student", passive_deletes=True)
