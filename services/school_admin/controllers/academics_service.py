# services/school_admin/controllers/academics_service.py
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends

from services.school_admin.actions.base import ActionContext
from services.school_admin.actions.classes import create_class, delete_class, update_class
from services.school_admin.actions.subjects import create_subject, delete_subject, update_subject
from services.school_admin.controllers.dependencies import get_action_context
from services.school_admin.schemas.classes import ClassInput
from services.school_admin.schemas.results import INITIAL_STATE, ActionResult
from services.school_admin.schemas.subjects import SubjectInput

subject_router = APIRouter(prefix="/subjects", tags=["Subjects"])
class_router = APIRouter(prefix="/classes", tags=["Classes"])


# --- SUBJECTS ---
@subject_router.post("/create", response_model=ActionResult, response_model_exclude_none=True)
async def subject_create(payload: SubjectInput, ctx: ActionContext = Depends(get_action_context)):
    return await create_subject(INITIAL_STATE, payload, ctx)


@subject_router.put("/update", response_model=ActionResult, response_model_exclude_none=True)
async def subject_update(payload: SubjectInput, ctx: ActionContext = Depends(get_action_context)):
    return await update_subject(INITIAL_STATE, payload, ctx)


@subject_router.post("/delete", response_model=ActionResult, response_model_exclude_none=True)
async def subject_delete(
    payload: Dict[str, Any] = Body(...), ctx: ActionContext = Depends(get_action_context)
):
    return await delete_subject(INITIAL_STATE, payload, ctx)


# --- CLASSES ---
@class_router.post("/create", response_model=ActionResult, response_model_exclude_none=True)
async def class_create(payload: ClassInput, ctx: ActionContext = Depends(get_action_context)):
    return await create_class(INITIAL_STATE, payload, ctx)


@class_router.put("/update", response_model=ActionResult, response_model_exclude_none=True)
async def class_update(payload: ClassInput, ctx: ActionContext = Depends(get_action_context)):
    return await update_class(INITIAL_STATE, payload, ctx)


@class_router.post("/delete", response_model=ActionResult, response_model_exclude_none=True)
async def class_delete(
    payload: Dict[str, Any] = Body(...), ctx: ActionContext = Depends(get_action_context)
):
    return await delete_class(INITIAL_STATE, payload, ctx)
