# services/school_admin/actions/subjects.py
from typing import Mapping

from sqlalchemy.orm import selectinload

from services.school_admin import views
from services.school_admin.actions.base import (
    ActionContext, fetch_all, fetch_one, form_id, mutation_handler, require_id, revalidate,
    revalidate_related,
)
from services.school_admin.authorization import require_admin
from services.school_admin.integrity import ensure_deletable
from services.school_admin.models import Subject, Teacher
from services.school_admin.schemas.results import ActionResult
from services.school_admin.schemas.subjects import SubjectInput


@mutation_handler
async def create_subject(current_state: ActionResult, data: SubjectInput, ctx: ActionContext):
    require_admin(ctx.caller)
    teachers = await fetch_all(ctx.db, Teacher, data.teachers)

    ctx.db.add(Subject(name=data.name, teachers=teachers))
    await ctx.db.commit()

    revalidate(ctx, views.SUBJECTS)
    revalidate_related(ctx, views.TEACHERS)
    return ActionResult.ok()


@mutation_handler
async def update_subject(current_state: ActionResult, data: SubjectInput, ctx: ActionContext):
    subject_id = require_id(data.id)
    require_admin(ctx.caller)

    subject = await fetch_one(ctx.db, Subject, subject_id, selectinload(Subject.teachers))
    subject.name = data.name
    subject.teachers = await fetch_all(ctx.db, Teacher, data.teachers)
    await ctx.db.commit()

    revalidate(ctx, views.SUBJECTS, views.detail_path(views.SUBJECTS, subject_id))
    revalidate_related(ctx, views.TEACHERS)
    return ActionResult.ok()


@mutation_handler
async def delete_subject(current_state: ActionResult, form: Mapping, ctx: ActionContext):
    subject_id = form_id(form)
    await ensure_deletable(ctx.db, Subject, subject_id)
    require_admin(ctx.caller)

    subject = await fetch_one(ctx.db, Subject, subject_id)
    await ctx.db.delete(subject)
    await ctx.db.commit()

    revalidate(ctx, views.SUBJECTS, views.detail_path(views.SUBJECTS, subject_id))
    return ActionResult.ok()
