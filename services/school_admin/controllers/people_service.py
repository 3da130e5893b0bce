# services/school_admin/controllers/people_service.py
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends

from services.school_admin.actions.base import ActionContext
from services.school_admin.actions.students import create_student, delete_student, update_student
from services.school_admin.actions.teachers import create_teacher, delete_teacher, update_teacher
from services.school_admin.controllers.dependencies import get_action_context
from services.school_admin.schemas.results import INITIAL_STATE, ActionResult
from services.school_admin.schemas.users import StudentInput, TeacherInput

teacher_router = APIRouter(prefix="/teachers", tags=["Teachers"])
student_router = APIRouter(prefix="/students", tags=["Students"])


# --- TEACHERS ---
@teacher_router.post("/create", response_model=ActionResult, response_model_exclude_none=True)
async def teacher_create(payload: TeacherInput, ctx: ActionContext = Depends(get_action_context)):
    return await create_teacher(INITIAL_STATE, payload, ctx)


@teacher_router.put("/update", response_model=ActionResult, response_model_exclude_none=True)
async def teacher_update(payload: TeacherInput, ctx: ActionContext = Depends(get_action_context)):
    return await update_teacher(INITIAL_STATE, payload, ctx)


@teacher_router.post("/delete", response_model=ActionResult, response_model_exclude_none=True)
async def teacher_delete(
    payload: Dict[str, Any] = Body(...), ctx: ActionContext = Depends(get_action_context)
):
    return await delete_teacher(INITIAL_STATE, payload, ctx)


# --- STUDENTS ---
@student_router.post("/create", response_model=ActionResult, response_model_exclude_none=True)
async def student_create(payload: StudentInput, ctx: ActionContext = Depends(get_action_context)):
    return await create_student(INITIAL_STATE, payload, ctx)


@student_router.put("/update", response_model=ActionResult, response_model_exclude_none=True)
async def student_update(payload: StudentInput, ctx: ActionContext = Depends(get_action_context)):
    return await update_student(INITIAL_STATE, payload, ctx)


@student_router.post("/delete", response_model=ActionResult, response_model_exclude_none=True)
async def student_delete(
    payload: Dict[str, Any] = Body(...), ctx: ActionContext = Depends(get_action_context)
):
    return await delete_student(INITIAL_STATE, payload, ctx)
