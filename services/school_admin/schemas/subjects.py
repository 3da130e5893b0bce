# services/school_admin/schemas/subjects.py
from typing import List, Optional

from pydantic import BaseModel, Field


class SubjectInput(BaseModel):
    id: Optional[int] = None
    name: str = Field(..., min_length=1, max_length=100)
    teachers: List[str] = Field(default_factory=list)  # teacher ids


class SubjectOut(BaseModel):
    id: int
    name: str
    teacher_ids: List[str]
