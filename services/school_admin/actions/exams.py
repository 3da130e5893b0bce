# services/school_admin/actions/exams.py
from typing import Mapping

from services.school_admin import views
from services.school_admin.actions.base import (
    ActionContext, fetch_one, form_id, mutation_handler, require_id, revalidate,
)
from services.school_admin.authorization import (
    ensure_owns_exam, ensure_owns_lesson, needs_ownership_check,
)
from services.school_admin.integrity import ensure_deletable
from services.school_admin.models import Exam
from services.school_admin.schemas.assessments import ExamInput
from services.school_admin.schemas.results import ActionResult


@mutation_handler
async def create_exam(current_state: ActionResult, data: ExamInput, ctx: ActionContext):
    if needs_ownership_check(ctx.caller):
        await ensure_owns_lesson(ctx.db, ctx.caller, data.lesson_id)

    ctx.db.add(Exam(
        title=data.title,
        start_time=data.start_time,
        end_time=data.end_time,
        lesson_id=data.lesson_id,
    ))
    await ctx.db.commit()

    revalidate(ctx, views.EXAMS)
    return ActionResult.ok()


@mutation_handler
async def update_exam(current_state: ActionResult, data: ExamInput, ctx: ActionContext):
    exam_id = require_id(data.id)
    if needs_ownership_check(ctx.caller):
        # Both the lesson it moves to and the one it belongs to now
        await ensure_owns_lesson(ctx.db, ctx.caller, data.lesson_id)
        await ensure_owns_exam(ctx.db, ctx.caller, exam_id)

    exam = await fetch_one(ctx.db, Exam, exam_id)
    exam.title = data.title
    exam.start_time = data.start_time
    exam.end_time = data.end_time
    exam.lesson_id = data.lesson_id
    await ctx.db.commit()

    revalidate(ctx, views.EXAMS, views.detail_path(views.EXAMS, exam_id))
    return ActionResult.ok()


@mutation_handler
async def delete_exam(current_state: ActionResult, form: Mapping, ctx: ActionContext):
    exam_id = form_id(form)
    await ensure_deletable(ctx.db, Exam, exam_id)
    if needs_ownership_check(ctx.caller):
        await ensure_owns_exam(ctx.db, ctx.caller, exam_id)

    exam = await fetch_one(ctx.db, Exam, exam_id)
    await ctx.db.delete(exam)
    await ctx.db.commit()

    revalidate(ctx, views.EXAMS, views.detail_path(views.EXAMS, exam_id))
    return ActionResult.ok()
