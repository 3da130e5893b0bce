# services/school_admin/controllers/listing_service.py
"""Read views behind the admin lists.

Each view is rendered once and served from the ViewCache until a mutation
invalidates its path. Route-level role checks happen in the access middleware.
"""
from typing import Awaitable, Callable, List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from shared.cache import ViewCache, get_view_cache
from shared.db import get_db
from services.school_admin import views
from services.school_admin.models import Assignment, Exam, Lesson, SchoolClass, Student, Subject, Teacher
from services.school_admin.schemas.assessments import AssignmentOut, ExamOut
from services.school_admin.schemas.classes import ClassOut
from services.school_admin.schemas.lessons import LessonOut
from services.school_admin.schemas.subjects import SubjectOut
from services.school_admin.schemas.users import PersonOut, StudentOut, TeacherOut

router = APIRouter(prefix="/list", tags=["Listings"])


async def _cached(cache: ViewCache, path: str, render: Callable[[], Awaitable]):
    view = cache.get(path)
    if view is None:
        view = cache.store(path, await render())
    return view


async def _cached_one(cache: ViewCache, path: str, render: Callable[[], Awaitable], what: str, entity_id):
    """Like ``_cached`` for a detail view. A missing record is never cached."""
    view = cache.get(path)
    if view is None:
        rows = await render()
        if not rows:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"{what} {entity_id} not found")
        view = cache.store(path, rows[0])
    return view


# --- SUBJECTS ---
async def _render_subjects(db: AsyncSession, subject_id=None) -> List[dict]:
    stmt = select(Subject).options(selectinload(Subject.teachers)).order_by(Subject.name)
    if subject_id is not None:
        stmt = stmt.where(Subject.id == subject_id)
    result = await db.execute(stmt)
    return [
        SubjectOut(
            id=subject.id,
            name=subject.name,
            teacher_ids=sorted(teacher.id for teacher in subject.teachers),
        ).model_dump(mode="json")
        for subject in result.scalars().all()
    ]


@router.get("/subjects", response_model=List[SubjectOut])
async def list_subjects(db: AsyncSession = Depends(get_db), cache: ViewCache = Depends(get_view_cache)):
    return await _cached(cache, views.SUBJECTS, lambda: _render_subjects(db))


@router.get("/subjects/{subject_id}", response_model=SubjectOut)
async def get_subject(
    subject_id: int, db: AsyncSession = Depends(get_db), cache: ViewCache = Depends(get_view_cache)
):
    path = views.detail_path(views.SUBJECTS, subject_id)
    return await _cached_one(cache, path, lambda: _render_subjects(db, subject_id), "Subject", subject_id)


# --- CLASSES ---
async def _render_classes(db: AsyncSession, class_id=None) -> List[dict]:
    stmt = (
        select(SchoolClass, func.count(Student.id).label("student_count"))
        .outerjoin(Student, Student.class_id == SchoolClass.id)
        .group_by(SchoolClass.id)
        .order_by(SchoolClass.name)
    )
    if class_id is not None:
        stmt = stmt.where(SchoolClass.id == class_id)
    result = await db.execute(stmt)
    return [
        ClassOut(
            id=school_class.id,
            name=school_class.name,
            capacity=school_class.capacity,
            grade_id=school_class.grade_id,
            supervisor_id=school_class.supervisor_id,
            student_count=student_count,
        ).model_dump(mode="json")
        for school_class, student_count in result.all()
    ]


@router.get("/classes", response_model=List[ClassOut])
async def list_classes(db: AsyncSession = Depends(get_db), cache: ViewCache = Depends(get_view_cache)):
    return await _cached(cache, views.CLASSES, lambda: _render_classes(db))


@router.get("/classes/{class_id}", response_model=ClassOut)
async def get_class(
    class_id: int, db: AsyncSession = Depends(get_db), cache: ViewCache = Depends(get_view_cache)
):
    path = views.detail_path(views.CLASSES, class_id)
    return await _cached_one(cache, path, lambda: _render_classes(db, class_id), "Class", class_id)


# --- TEACHERS ---
async def _render_teachers(db: AsyncSession, teacher_id=None) -> List[dict]:
    stmt = select(Teacher).options(selectinload(Teacher.subjects)).order_by(Teacher.surname, Teacher.name)
    if teacher_id is not None:
        stmt = stmt.where(Teacher.id == teacher_id)
    result = await db.execute(stmt)
    return [
        TeacherOut(
            subject_ids=sorted(subject.id for subject in teacher.subjects),
            **PersonOut.model_validate(teacher).model_dump(),
        ).model_dump(mode="json")
        for teacher in result.scalars().all()
    ]


@router.get("/teachers", response_model=List[TeacherOut])
async def list_teachers(db: AsyncSession = Depends(get_db), cache: ViewCache = Depends(get_view_cache)):
    return await _cached(cache, views.TEACHERS, lambda: _render_teachers(db))


@router.get("/teachers/{teacher_id}", response_model=TeacherOut)
async def get_teacher(
    teacher_id: str, db: AsyncSession = Depends(get_db), cache: ViewCache = Depends(get_view_cache)
):
    path = views.detail_path(views.TEACHERS, teacher_id)
    return await _cached_one(cache, path, lambda: _render_teachers(db, teacher_id), "Teacher", teacher_id)


# --- STUDENTS, LESSONS, EXAMS, ASSIGNMENTS ---
async def _render_rows(db: AsyncSession, model, schema, order_by, entity_id=None) -> List[dict]:
    stmt = select(model).order_by(*order_by)
    if entity_id is not None:
        stmt = stmt.where(model.id == entity_id)
    result = await db.execute(stmt)
    return [schema.model_validate(row).model_dump(mode="json") for row in result.scalars().all()]


@router.get("/students", response_model=List[StudentOut])
async def list_students(db: AsyncSession = Depends(get_db), cache: ViewCache = Depends(get_view_cache)):
    return await _cached(
        cache, views.STUDENTS,
        lambda: _render_rows(db, Student, StudentOut, (Student.class_id, Student.surname)),
    )


@router.get("/students/{student_id}", response_model=StudentOut)
async def get_student(
    student_id: str, db: AsyncSession = Depends(get_db), cache: ViewCache = Depends(get_view_cache)
):
    return await _cached_one(
        cache, views.detail_path(views.STUDENTS, student_id),
        lambda: _render_rows(db, Student, StudentOut, (Student.id,), student_id),
        "Student", student_id,
    )


@router.get("/lessons", response_model=List[LessonOut])
async def list_lessons(db: AsyncSession = Depends(get_db), cache: ViewCache = Depends(get_view_cache)):
    return await _cached(
        cache, views.LESSONS,
        lambda: _render_rows(db, Lesson, LessonOut, (Lesson.day, Lesson.start_time)),
    )


@router.get("/lessons/{lesson_id}", response_model=LessonOut)
async def get_lesson(
    lesson_id: int, db: AsyncSession = Depends(get_db), cache: ViewCache = Depends(get_view_cache)
):
    return await _cached_one(
        cache, views.detail_path(views.LESSONS, lesson_id),
        lambda: _render_rows(db, Lesson, LessonOut, (Lesson.id,), lesson_id),
        "Lesson", lesson_id,
    )


@router.get("/exams", response_model=List[ExamOut])
async def list_exams(db: AsyncSession = Depends(get_db), cache: ViewCache = Depends(get_view_cache)):
    return await _cached(
        cache, views.EXAMS, lambda: _render_rows(db, Exam, ExamOut, (Exam.start_time,))
    )


@router.get("/exams/{exam_id}", response_model=ExamOut)
async def get_exam(
    exam_id: int, db: AsyncSession = Depends(get_db), cache: ViewCache = Depends(get_view_cache)
):
    return await _cached_one(
        cache, views.detail_path(views.EXAMS, exam_id),
        lambda: _render_rows(db, Exam, ExamOut, (Exam.id,), exam_id),
        "Exam", exam_id,
    )


@router.get("/assignments", response_model=List[AssignmentOut])
async def list_assignments(db: AsyncSession = Depends(get_db), cache: ViewCache = Depends(get_view_cache)):
    return await _cached(
        cache, views.ASSIGNMENTS,
        lambda: _render_rows(db, Assignment, AssignmentOut, (Assignment.due_date,)),
    )


@router.get("/assignments/{assignment_id}", response_model=AssignmentOut)
async def get_assignment(
    assignment_id: int, db: AsyncSession = Depends(get_db), cache: ViewCache = Depends(get_view_cache)
):
    return await _cached_one(
        cache, views.detail_path(views.ASSIGNMENTS, assignment_id),
        lambda: _render_rows(db, Assignment, AssignmentOut, (Assignment.id,), assignment_id),
        "Assignment", assignment_id,
    )
