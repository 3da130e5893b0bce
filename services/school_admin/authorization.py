# services/school_admin/authorization.py
"""Role and ownership checks run by mutation handlers before any write.

Admins may do anything. Teachers may only touch lessons they teach and the
exams and assignments hanging off them. Every other caller is refused. A
referenced record that does not exist is refused the same way.
"""
import logging
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from shared.auth import Caller, Role
from services.school_admin.exceptions import AuthorizationDenied
from services.school_admin.models import Assignment, Exam, Lesson, SchoolClass, teacher_subjects

logger = logging.getLogger(__name__)


def deny(caller: Caller, reason: str, **context) -> AuthorizationDenied:
    role = caller.role.value if caller.role else None
    logger.warning("Denied caller %s (role=%s): %s %s", caller.id, role, reason, context)
    return AuthorizationDenied(reason)


def require_admin(caller: Caller) -> None:
    if caller.role is Role.ADMIN:
        return
    raise deny(caller, "admin role required")


def needs_ownership_check(caller: Caller) -> bool:
    """Whether lesson-scoped writes by ``caller`` must pass an ownership check.

    Raises for callers who may not write lesson-scoped records at all.
    """
    if caller.role is Role.ADMIN:
        return False
    elif caller.role is Role.TEACHER:
        return True
    elif caller.role is Role.STUDENT:
        raise deny(caller, "students cannot modify lesson records")
    raise deny(caller, "no recognised role")


def _ensure_owner(caller: Caller, teacher_id: Optional[str], what: str, record_id) -> None:
    if teacher_id is None or teacher_id != caller.id:
        raise deny(caller, f"{what} is not taught by caller", record_id=record_id)


async def ensure_owns_lesson(db: AsyncSession, caller: Caller, lesson_id: int) -> None:
    teacher_id = await db.scalar(select(Lesson.teacher_id).where(Lesson.id == lesson_id))
    _ensure_owner(caller, teacher_id, "lesson", lesson_id)


async def ensure_owns_exam(db: AsyncSession, caller: Caller, exam_id: int) -> None:
    teacher_id = await db.scalar(
        select(Lesson.teacher_id).join(Exam, Exam.lesson_id == Lesson.id).where(Exam.id == exam_id)
    )
    _ensure_owner(caller, teacher_id, "exam", exam_id)


async def ensure_owns_assignment(db: AsyncSession, caller: Caller, assignment_id: int) -> None:
    teacher_id = await db.scalar(
        select(Lesson.teacher_id)
        .join(Assignment, Assignment.lesson_id == Lesson.id)
        .where(Assignment.id == assignment_id)
    )
    _ensure_owner(caller, teacher_id, "assignment", assignment_id)


async def ensure_can_schedule(
    db: AsyncSession, caller: Caller, *, teacher_id: str, subject_id: int, class_id: int
) -> None:
    """A teacher may only schedule their own lessons, in a subject they teach,
    for a class they supervise or already teach in."""
    if teacher_id != caller.id:
        raise deny(caller, "lesson assigned to another teacher", teacher_id=teacher_id)

    teaches_subject = await db.scalar(
        select(func.count())
        .select_from(teacher_subjects)
        .where(
            teacher_subjects.c.subject_id == subject_id,
            teacher_subjects.c.teacher_id == caller.id,
        )
    )
    if not teaches_subject:
        raise deny(caller, "caller does not teach this subject", subject_id=subject_id)

    school_class = await db.get(SchoolClass, class_id)
    if school_class is None:
        raise deny(caller, "class not found", class_id=class_id)
    if school_class.supervisor_id == caller.id:
        return

    existing_lesson = await db.scalar(
        select(Lesson.id)
        .where(Lesson.class_id == class_id, Lesson.teacher_id == caller.id)
        .limit(1)
    )
    if existing_lesson is None:
        raise deny(caller, "caller neither supervises nor teaches in this class", class_id=class_id)
