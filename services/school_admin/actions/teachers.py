# services/school_admin/actions/teachers.py
from typing import Mapping

from sqlalchemy.orm import selectinload

from shared.auth import Role
from services.school_admin import views
from services.school_admin.actions.base import (
    ActionContext, fetch_all, fetch_one, form_id, mutation_handler, release_account,
    require_id, revalidate, revalidate_related,
)
from services.school_admin.authorization import require_admin
from services.school_admin.exceptions import PreconditionFailed
from services.school_admin.integrity import ensure_deletable
from services.school_admin.models import Subject, Teacher
from services.school_admin.schemas.results import ActionResult
from services.school_admin.schemas.users import TeacherInput


@mutation_handler
async def create_teacher(current_state: ActionResult, data: TeacherInput, ctx: ActionContext):
    if not data.password:
        raise PreconditionFailed("A new teacher needs a password")
    require_admin(ctx.caller)
    subjects = await fetch_all(ctx.db, Subject, data.subjects)

    teacher_id = await ctx.identity.create_account(
        username=data.username,
        password=data.password,
        first_name=data.name,
        last_name=data.surname,
        role=Role.TEACHER,
    )
    ctx.db.add(Teacher(id=teacher_id, subjects=subjects, **data.profile()))
    await ctx.db.commit()

    revalidate(ctx, views.TEACHERS)
    revalidate_related(ctx, views.SUBJECTS)
    return ActionResult.ok()


@mutation_handler
async def update_teacher(current_state: ActionResult, data: TeacherInput, ctx: ActionContext):
    teacher_id = require_id(data.id)
    require_admin(ctx.caller)

    teacher = await fetch_one(ctx.db, Teacher, teacher_id, selectinload(Teacher.subjects))
    subjects = await fetch_all(ctx.db, Subject, data.subjects)
    await ctx.identity.update_account(
        teacher_id,
        username=data.username,
        first_name=data.name,
        last_name=data.surname,
        password=data.password or None,
    )
    for field, value in data.profile().items():
        setattr(teacher, field, value)
    teacher.subjects = subjects
    await ctx.db.commit()

    revalidate(ctx, views.TEACHERS, views.detail_path(views.TEACHERS, teacher_id))
    revalidate_related(ctx, views.SUBJECTS)
    return ActionResult.ok()


@mutation_handler
async def delete_teacher(current_state: ActionResult, form: Mapping, ctx: ActionContext):
    teacher_id = form_id(form, str)
    await ensure_deletable(ctx.db, Teacher, teacher_id)
    require_admin(ctx.caller)

    note = await release_account(ctx, teacher_id)
    # Loaded after the account step, which may roll the session back
    teacher = await fetch_one(ctx.db, Teacher, teacher_id)
    await ctx.db.delete(teacher)
    await ctx.db.commit()

    revalidate(ctx, views.TEACHERS, views.detail_path(views.TEACHERS, teacher_id))
    return ActionResult.ok(note)
