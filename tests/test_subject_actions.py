from sqlalchemy import func, select
from sqlalchemy.orm import selectinload

from shared.auth import Caller, Role
from services.school_admin import views as paths
from services.school_admin.actions.base import CONFLICT_MESSAGE
from services.school_admin.actions.subjects import create_subject, delete_subject, update_subject
from services.school_admin.models import Subject
from services.school_admin.schemas.results import INITIAL_STATE
from services.school_admin.schemas.subjects import SubjectInput


async def _subject_by_name(session, name):
    result = await session.execute(
        select(Subject).options(selectinload(Subject.teachers)).where(Subject.name == name)
    )
    return result.scalars().first()


async def test_create_subject_round_trips_name_and_teachers(session, seed, make_ctx, admin):
    first = await seed.teacher("ada")
    second = await seed.teacher("grace")

    result = await create_subject(
        INITIAL_STATE, SubjectInput(name="Math", teachers=[second, first]), make_ctx(admin)
    )

    assert result.success is True
    assert result.error is False
    assert result.message is None
    subject = await _subject_by_name(session, "Math")
    assert subject.name == "Math"
    assert {teacher.id for teacher in subject.teachers} == {first, second}


async def test_create_subject_invalidates_listing(seed, make_ctx, admin, views):
    views.store(paths.SUBJECTS, [])

    await create_subject(INITIAL_STATE, SubjectInput(name="History"), make_ctx(admin))

    assert paths.SUBJECTS not in views


async def test_create_subject_refused_for_teacher(session, seed, make_ctx):
    teacher_id = await seed.teacher("ada")

    result = await create_subject(
        INITIAL_STATE, SubjectInput(name="Math"), make_ctx(Caller(id=teacher_id, role=Role.TEACHER))
    )

    assert result.error is True
    assert result.message is None
    assert await session.scalar(select(func.count()).select_from(Subject)) == 0


async def test_create_subject_with_unknown_teacher_fails(session, make_ctx, admin):
    result = await create_subject(
        INITIAL_STATE, SubjectInput(name="Math", teachers=["nobody"]), make_ctx(admin)
    )

    assert result.error is True
    assert await session.scalar(select(func.count()).select_from(Subject)) == 0


async def test_duplicate_subject_name_reports_conflict(seed, make_ctx, admin):
    await seed.subject("Math")

    result = await create_subject(INITIAL_STATE, SubjectInput(name="Math"), make_ctx(admin))

    assert result.error is True
    assert result.message == CONFLICT_MESSAGE


async def test_update_subject_replaces_teacher_set(session, seed, make_ctx, admin, views):
    kept = await seed.teacher("ada")
    dropped = await seed.teacher("grace")
    added = await seed.teacher("linus")
    subject_id = await seed.subject("Math", [kept, dropped])
    views.store(paths.detail_path(paths.SUBJECTS, subject_id), {})

    result = await update_subject(
        INITIAL_STATE,
        SubjectInput(id=subject_id, name="Mathematics", teachers=[kept, added]),
        make_ctx(admin),
    )

    assert result.success is True
    subject = await _subject_by_name(session, "Mathematics")
    assert {teacher.id for teacher in subject.teachers} == {kept, added}
    assert paths.detail_path(paths.SUBJECTS, subject_id) not in views


async def test_update_subject_without_id_fails_before_any_write(session, seed, make_ctx, admin, views):
    subject_id = await seed.subject("Math")
    views.store(paths.SUBJECTS, [])

    result = await update_subject(INITIAL_STATE, SubjectInput(name="Physics"), make_ctx(admin))

    assert result.success is False
    assert result.error is True
    assert paths.SUBJECTS in views
    assert await session.scalar(select(Subject.name).where(Subject.id == subject_id)) == "Math"


async def test_delete_subject_with_teacher_is_blocked(session, seed, make_ctx, admin):
    teacher_id = await seed.teacher("ada")
    subject_id = await seed.subject("Math", [teacher_id])

    result = await delete_subject(INITIAL_STATE, {"id": str(subject_id)}, make_ctx(admin))

    assert result.success is False
    assert result.error is True
    assert "1 teacher(s)" in result.message
    assert await session.get(Subject, subject_id) is not None


async def test_delete_subject_lists_every_blocking_category(session, seed, make_ctx, admin):
    teachers = [await seed.teacher(name) for name in ("ada", "grace", "linus")]
    subject_id = await seed.subject("Math", teachers)
    class_id = await seed.school_class("1A")
    await seed.lesson(subject_id, class_id, teachers[0], name="Algebra")
    await seed.lesson(subject_id, class_id, teachers[1], name="Geometry")

    result = await delete_subject(INITIAL_STATE, {"id": str(subject_id)}, make_ctx(admin))

    assert result.error is True
    assert "3 teacher(s), 2 lesson(s)" in result.message
    assert await session.scalar(select(func.count()).select_from(Subject)) == 1


async def test_delete_subject_without_dependents(session, seed, make_ctx, admin, views):
    subject_id = await seed.subject("Art")
    views.store(paths.SUBJECTS, [])

    result = await delete_subject(INITIAL_STATE, {"id": str(subject_id)}, make_ctx(admin))

    assert result.success is True
    assert await session.scalar(select(func.count()).select_from(Subject)) == 0
    assert paths.SUBJECTS not in views


async def test_delete_subject_needs_an_id(make_ctx, admin):
    result = await delete_subject(INITIAL_STATE, {}, make_ctx(admin))

    assert result.error is True
    assert result.message is None
