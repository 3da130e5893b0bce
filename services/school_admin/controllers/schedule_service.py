# services/school_admin/controllers/schedule_service.py
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends

from services.school_admin.actions.assignments import (
    create_assignment, delete_assignment, update_assignment,
)
from services.school_admin.actions.base import ActionContext
from services.school_admin.actions.exams import create_exam, delete_exam, update_exam
from services.school_admin.actions.lessons import create_lesson, delete_lesson, update_lesson
from services.school_admin.controllers.dependencies import get_action_context
from services.school_admin.schemas.assessments import AssignmentInput, ExamInput
from services.school_admin.schemas.lessons import LessonInput
from services.school_admin.schemas.results import INITIAL_STATE, ActionResult

lesson_router = APIRouter(prefix="/lessons", tags=["Lessons"])
exam_router = APIRouter(prefix="/exams", tags=["Exams"])
assignment_router = APIRouter(prefix="/assignments", tags=["Assignments"])


# --- LESSONS ---
@lesson_router.post("/create", response_model=ActionResult, response_model_exclude_none=True)
async def lesson_create(payload: LessonInput, ctx: ActionContext = Depends(get_action_context)):
    return await create_lesson(INITIAL_STATE, payload, ctx)


@lesson_router.put("/update", response_model=ActionResult, response_model_exclude_none=True)
async def lesson_update(payload: LessonInput, ctx: ActionContext = Depends(get_action_context)):
    return await update_lesson(INITIAL_STATE, payload, ctx)


@lesson_router.post("/delete", response_model=ActionResult, response_model_exclude_none=True)
async def lesson_delete(
    payload: Dict[str, Any] = Body(...), ctx: ActionContext = Depends(get_action_context)
):
    return await delete_lesson(INITIAL_STATE, payload, ctx)


# --- EXAMS ---
@exam_router.post("/create", response_model=ActionResult, response_model_exclude_none=True)
async def exam_create(payload: ExamInput, ctx: ActionContext = Depends(get_action_context)):
    return await create_exam(INITIAL_STATE, payload, ctx)


@exam_router.put("/update", response_model=ActionResult, response_model_exclude_none=True)
async def exam_update(payload: ExamInput, ctx: ActionContext = Depends(get_action_context)):
    return await update_exam(INITIAL_STATE, payload, ctx)


@exam_router.post("/delete", response_model=ActionResult, response_model_exclude_none=True)
async def exam_delete(
    payload: Dict[str, Any] = Body(...), ctx: ActionContext = Depends(get_action_context)
):
    return await delete_exam(INITIAL_STATE, payload, ctx)


# --- ASSIGNMENTS ---
@assignment_router.post("/create", response_model=ActionResult, response_model_exclude_none=True)
async def assignment_create(payload: AssignmentInput, ctx: ActionContext = Depends(get_action_context)):
    return await create_assignment(INITIAL_STATE, payload, ctx)


@assignment_router.put("/update", response_model=ActionResult, response_model_exclude_none=True)
async def assignment_update(payload: AssignmentInput, ctx: ActionContext = Depends(get_action_context)):
    return await update_assignment(INITIAL_STATE, payload, ctx)


@assignment_router.post("/delete", response_model=ActionResult, response_model_exclude_none=True)
async def assignment_delete(
    payload: Dict[str, Any] = Body(...), ctx: ActionContext = Depends(get_action_context)
):
    return await delete_assignment(INITIAL_STATE, payload, ctx)
