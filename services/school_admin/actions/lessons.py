# services/school_admin/actions/lessons.py
from typing import Mapping

from services.school_admin import views
from services.school_admin.actions.base import (
    ActionContext, fetch_one, form_id, mutation_handler, require_id, revalidate,
    revalidate_related,
)
from services.school_admin.authorization import (
    ensure_can_schedule, ensure_owns_lesson, needs_ownership_check,
)
from services.school_admin.models import Lesson
from services.school_admin.schemas.lessons import LessonInput
from services.school_admin.schemas.results import ActionResult


@mutation_handler
async def create_lesson(current_state: ActionResult, data: LessonInput, ctx: ActionContext):
    if needs_ownership_check(ctx.caller):
        await ensure_can_schedule(
            ctx.db, ctx.caller,
            teacher_id=data.teacher_id, subject_id=data.subject_id, class_id=data.class_id,
        )

    ctx.db.add(Lesson(**data.model_dump(exclude={"id"})))
    await ctx.db.commit()

    revalidate(ctx, views.LESSONS)
    return ActionResult.ok()


@mutation_handler
async def update_lesson(current_state: ActionResult, data: LessonInput, ctx: ActionContext):
    lesson_id = require_id(data.id)
    if needs_ownership_check(ctx.caller):
        await ensure_owns_lesson(ctx.db, ctx.caller, lesson_id)
        await ensure_can_schedule(
            ctx.db, ctx.caller,
            teacher_id=data.teacher_id, subject_id=data.subject_id, class_id=data.class_id,
        )

    lesson = await fetch_one(ctx.db, Lesson, lesson_id)
    for field, value in data.model_dump(exclude={"id"}).items():
        setattr(lesson, field, value)
    await ctx.db.commit()

    revalidate(ctx, views.LESSONS, views.detail_path(views.LESSONS, lesson_id))
    return ActionResult.ok()


@mutation_handler
async def delete_lesson(current_state: ActionResult, form: Mapping, ctx: ActionContext):
    lesson_id = form_id(form)
    if needs_ownership_check(ctx.caller):
        await ensure_owns_lesson(ctx.db, ctx.caller, lesson_id)

    lesson = await fetch_one(ctx.db, Lesson, lesson_id)
    # Exams and assignments of the lesson go with it
    await ctx.db.delete(lesson)
    await ctx.db.commit()

    revalidate(ctx, views.LESSONS, views.detail_path(views.LESSONS, lesson_id))
    revalidate_related(ctx, views.EXAMS, views.ASSIGNMENTS)
    return ActionResult.ok()
