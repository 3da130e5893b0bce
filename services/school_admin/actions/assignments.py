# services/school_admin/actions/assignments.py
from typing import Mapping

from services.school_admin import views
from services.school_admin.actions.base import (
    ActionContext, fetch_one, form_id, mutation_handler, require_id, revalidate,
)
from services.school_admin.authorization import (
    ensure_owns_assignment, ensure_owns_lesson, needs_ownership_check,
)
from services.school_admin.models import Assignment
from services.school_admin.schemas.assessments import AssignmentInput
from services.school_admin.schemas.results import ActionResult


@mutation_handler
async def create_assignment(current_state: ActionResult, data: AssignmentInput, ctx: ActionContext):
    if needs_ownership_check(ctx.caller):
        await ensure_owns_lesson(ctx.db, ctx.caller, data.lesson_id)

    ctx.db.add(Assignment(
        title=data.title,
        start_date=data.start_date,
        due_date=data.due_date,
        lesson_id=data.lesson_id,
    ))
    await ctx.db.commit()

    revalidate(ctx, views.ASSIGNMENTS)
    return ActionResult.ok()


@mutation_handler
async def update_assignment(current_state: ActionResult, data: AssignmentInput, ctx: ActionContext):
    assignment_id = require_id(data.id)
    if needs_ownership_check(ctx.caller):
        await ensure_owns_lesson(ctx.db, ctx.caller, data.lesson_id)
        await ensure_owns_assignment(ctx.db, ctx.caller, assignment_id)

    assignment = await fetch_one(ctx.db, Assignment, assignment_id)
    assignment.title = data.title
    assignment.start_date = data.start_date
    assignment.due_date = data.due_date
    assignment.lesson_id = data.lesson_id
    await ctx.db.commit()

    revalidate(ctx, views.ASSIGNMENTS, views.detail_path(views.ASSIGNMENTS, assignment_id))
    return ActionResult.ok()


@mutation_handler
async def delete_assignment(current_state: ActionResult, form: Mapping, ctx: ActionContext):
    assignment_id = form_id(form)
    if needs_ownership_check(ctx.caller):
        await ensure_owns_assignment(ctx.db, ctx.caller, assignment_id)

    assignment = await fetch_one(ctx.db, Assignment, assignment_id)
    await ctx.db.delete(assignment)
    await ctx.db.commit()

    revalidate(ctx, views.ASSIGNMENTS, views.detail_path(views.ASSIGNMENTS, assignment_id))
    return ActionResult.ok()
