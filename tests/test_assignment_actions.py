from datetime import timedelta

import pytest
from pydantic import ValidationError
from sqlalchemy import func, select

from shared.auth import Caller, Role
from services.school_admin import views as paths
from services.school_admin.actions.assignments import (
    create_assignment, delete_assignment, update_assignment,
)
from services.school_admin.models import Assignment, Result
from services.school_admin.schemas.assessments import AssignmentInput
from services.school_admin.schemas.results import INITIAL_STATE

from conftest import MONDAY_9AM


def assignment_input(lesson_id, **overrides):
    fields = dict(
        title="Essay",
        start_date=MONDAY_9AM,
        due_date=MONDAY_9AM + timedelta(days=3),
        lesson_id=lesson_id,
    )
    fields.update(overrides)
    return AssignmentInput(**fields)


async def _assignment_count(session):
    return await session.scalar(select(func.count()).select_from(Assignment))


@pytest.fixture
async def lessons(seed):
    ada = await seed.teacher("ada")
    bob = await seed.teacher("bob")
    english = await seed.subject("English", [ada, bob])
    class_id = await seed.school_class("2A")
    return dict(
        ada=ada,
        class_id=class_id,
        ada_lesson=await seed.lesson(english, class_id, ada),
        bob_lesson=await seed.lesson(english, class_id, bob),
    )


def test_due_date_before_start_is_rejected():
    with pytest.raises(ValidationError):
        assignment_input(1, due_date=MONDAY_9AM - timedelta(days=1))


async def test_teacher_creates_assignment_for_own_lesson(session, lessons, make_ctx, views):
    views.store(paths.ASSIGNMENTS, [])

    result = await create_assignment(
        INITIAL_STATE,
        assignment_input(lessons["ada_lesson"]),
        make_ctx(Caller(id=lessons["ada"], role=Role.TEACHER)),
    )

    assert result.success is True
    assert await _assignment_count(session) == 1
    assert paths.ASSIGNMENTS not in views


async def test_teacher_cannot_create_assignment_for_another_teachers_lesson(session, lessons, make_ctx):
    result = await create_assignment(
        INITIAL_STATE,
        assignment_input(lessons["bob_lesson"]),
        make_ctx(Caller(id=lessons["ada"], role=Role.TEACHER)),
    )

    assert (result.success, result.error) == (False, True)
    assert await _assignment_count(session) == 0


async def test_caller_without_role_is_refused(session, lessons, make_ctx):
    result = await create_assignment(
        INITIAL_STATE,
        assignment_input(lessons["ada_lesson"]),
        make_ctx(Caller(id="someone", role=None)),
    )

    assert result.error is True
    assert await _assignment_count(session) == 0


async def test_teacher_cannot_move_another_teachers_assignment(session, seed, lessons, make_ctx):
    assignment_id = await seed.assignment(lessons["bob_lesson"])

    result = await update_assignment(
        INITIAL_STATE,
        assignment_input(lessons["ada_lesson"], id=assignment_id),
        make_ctx(Caller(id=lessons["ada"], role=Role.TEACHER)),
    )

    assert result.error is True
    lesson_id = await session.scalar(
        select(Assignment.lesson_id).where(Assignment.id == assignment_id)
    )
    assert lesson_id == lessons["bob_lesson"]


async def test_update_assignment_without_id(lessons, make_ctx, admin):
    result = await update_assignment(
        INITIAL_STATE, assignment_input(lessons["ada_lesson"]), make_ctx(admin)
    )

    assert (result.success, result.error) == (False, True)


async def test_deleting_assignment_drops_its_results(session, seed, lessons, make_ctx):
    assignment_id = await seed.assignment(lessons["ada_lesson"])
    student_id = await seed.student("kim", lessons["class_id"])
    await seed.result(student_id, assignment_id=assignment_id)

    result = await delete_assignment(
        INITIAL_STATE, {"id": assignment_id}, make_ctx(Caller(id=lessons["ada"], role=Role.TEACHER))
    )

    assert result.success is True
    assert await _assignment_count(session) == 0
    assert await session.scalar(select(func.count()).select_from(Result)) == 0


async def test_delete_assignment_with_malformed_id(lessons, make_ctx, admin):
    result = await delete_assignment(INITIAL_STATE, {"id": "abc"}, make_ctx(admin))

    assert (result.success, result.error) == (False, True)
