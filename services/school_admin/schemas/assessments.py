# services/school_admin/schemas/assessments.py
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, model_validator


class ExamInput(BaseModel):
    id: Optional[int] = None
    title: str = Field(..., min_length=1)
    start_time: datetime
    end_time: datetime
    lesson_id: int

    @model_validator(mode="after")
    def check_time_window(self):
        if self.end_time <= self.start_time:
            raise ValueError("Exam must end after it starts")
        return self


class ExamOut(BaseModel):
    id: int
    title: str
    start_time: datetime
    end_time: datetime
    lesson_id: int

    class Config:
        from_attributes = True


class AssignmentInput(BaseModel):
    id: Optional[int] = None
    title: str = Field(..., min_length=1)
    start_date: datetime
    due_date: datetime
    lesson_id: int

    @model_validator(mode="after")
    def check_date_window(self):
        if self.due_date < self.start_date:
            raise ValueError("Assignment cannot be due before it starts")
        return self


class AssignmentOut(BaseModel):
    id: int
    title: str
    start_date: datetime
    due_date: datetime
    lesson_id: int

    class Config:
        from_attributes = True
