# services/school_admin/actions/classes.py
from typing import Mapping

from services.school_admin import views
from services.school_admin.actions.base import (
    ActionContext, fetch_one, form_id, mutation_handler, require_id, revalidate,
)
from services.school_admin.authorization import require_admin
from services.school_admin.enrolment import count_enrolled
from services.school_admin.exceptions import PreconditionFailed
from services.school_admin.integrity import ensure_deletable
from services.school_admin.models import Grade, SchoolClass, Teacher
from services.school_admin.schemas.classes import ClassInput
from services.school_admin.schemas.results import ActionResult


async def _check_references(ctx: ActionContext, data: ClassInput) -> None:
    await fetch_one(ctx.db, Grade, data.grade_id)
    if data.supervisor_id:
        await fetch_one(ctx.db, Teacher, data.supervisor_id)


@mutation_handler
async def create_class(current_state: ActionResult, data: ClassInput, ctx: ActionContext):
    require_admin(ctx.caller)
    await _check_references(ctx, data)

    ctx.db.add(SchoolClass(
        name=data.name,
        capacity=data.capacity,
        grade_id=data.grade_id,
        supervisor_id=data.supervisor_id,
    ))
    await ctx.db.commit()

    revalidate(ctx, views.CLASSES)
    return ActionResult.ok()


@mutation_handler
async def update_class(current_state: ActionResult, data: ClassInput, ctx: ActionContext):
    class_id = require_id(data.id)
    enrolled = await count_enrolled(ctx.db, class_id)
    if data.capacity < enrolled:
        raise PreconditionFailed(f"Capacity {data.capacity} is below current enrolment {enrolled}")
    require_admin(ctx.caller)
    await _check_references(ctx, data)

    school_class = await fetch_one(ctx.db, SchoolClass, class_id)
    school_class.name = data.name
    school_class.capacity = data.capacity
    school_class.grade_id = data.grade_id
    school_class.supervisor_id = data.supervisor_id
    await ctx.db.commit()

    revalidate(ctx, views.CLASSES, views.detail_path(views.CLASSES, class_id))
    return ActionResult.ok()


@mutation_handler
async def delete_class(current_state: ActionResult, form: Mapping, ctx: ActionContext):
    class_id = form_id(form)
    await ensure_deletable(ctx.db, SchoolClass, class_id)
    require_admin(ctx.caller)

    school_class = await fetch_one(ctx.db, SchoolClass, class_id)
    await ctx.db.delete(school_class)
    await ctx.db.commit()

    revalidate(ctx, views.CLASSES, views.detail_path(views.CLASSES, class_id))
    return ActionResult.ok()
