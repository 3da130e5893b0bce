# services/school_admin/schemas/classes.py
from typing import Optional

from pydantic import BaseModel, Field


class ClassInput(BaseModel):
    id: Optional[int] = None
    name: str = Field(..., min_length=1, max_length=50)
    capacity: int = Field(..., gt=0)
    grade_id: int
    supervisor_id: Optional[str] = None


class ClassOut(BaseModel):
    id: int
    name: str
    capacity: int
    grade_id: int
    supervisor_id: Optional[str]
    student_count: int
