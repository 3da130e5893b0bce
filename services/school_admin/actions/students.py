# services/school_admin/actions/students.py
from typing import Mapping

from shared.auth import Role
from services.school_admin import views
from services.school_admin.actions.base import (
    ActionContext, fetch_one, form_id, mutation_handler, release_account, require_id, revalidate,
    revalidate_related,
)
from services.school_admin.authorization import require_admin
from services.school_admin.enrolment import ensure_class_has_room
from services.school_admin.exceptions import PreconditionFailed
from services.school_admin.models import Student
from services.school_admin.schemas.results import ActionResult
from services.school_admin.schemas.users import StudentInput


@mutation_handler
async def create_student(current_state: ActionResult, data: StudentInput, ctx: ActionContext):
    if not data.password:
        raise PreconditionFailed("A new student needs a password")
    # Checked before any account exists; the class row stays locked until commit
    await ensure_class_has_room(ctx.db, data.class_id)
    require_admin(ctx.caller)

    student_id = await ctx.identity.create_account(
        username=data.username,
        password=data.password,
        first_name=data.name,
        last_name=data.surname,
        role=Role.STUDENT,
    )
    ctx.db.add(Student(
        id=student_id,
        grade_id=data.grade_id,
        class_id=data.class_id,
        **data.profile(),
    ))
    await ctx.db.commit()

    revalidate(ctx, views.STUDENTS)
    revalidate_related(ctx, views.CLASSES)
    return ActionResult.ok()


@mutation_handler
async def update_student(current_state: ActionResult, data: StudentInput, ctx: ActionContext):
    student_id = require_id(data.id)
    student = await fetch_one(ctx.db, Student, student_id)
    if student.class_id != data.class_id:
        await ensure_class_has_room(ctx.db, data.class_id)
    require_admin(ctx.caller)

    await ctx.identity.update_account(
        student_id,
        username=data.username,
        first_name=data.name,
        last_name=data.surname,
        password=data.password or None,
    )
    for field, value in data.profile().items():
        setattr(student, field, value)
    student.grade_id = data.grade_id
    student.class_id = data.class_id
    await ctx.db.commit()

    revalidate(ctx, views.STUDENTS, views.detail_path(views.STUDENTS, student_id))
    revalidate_related(ctx, views.CLASSES)
    return ActionResult.ok()


@mutation_handler
async def delete_student(current_state: ActionResult, form: Mapping, ctx: ActionContext):
    student_id = form_id(form, str)
    require_admin(ctx.caller)

    note = await release_account(ctx, student_id)
    # Loaded after the account step, which may roll the session back
    student = await fetch_one(ctx.db, Student, student_id)
    await ctx.db.delete(student)
    await ctx.db.commit()

    revalidate(ctx, views.STUDENTS, views.detail_path(views.STUDENTS, student_id))
    revalidate_related(ctx, views.CLASSES)
    return ActionResult.ok(note)
