# services/school_admin/schemas/lessons.py
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, model_validator

from services.school_admin.models.lessons import Day


class LessonInput(BaseModel):
    id: Optional[int] = None
    name: str = Field(..., min_length=1)
    day: Day
    start_time: datetime
    end_time: datetime
    subject_id: int
    class_id: int
    teacher_id: str

    @model_validator(mode="after")
    def check_time_window(self):
        if self.end_time <= self.start_time:
            raise ValueError("Lesson must end after it starts")
        return self


class LessonOut(BaseModel):
    id: int
    name: str
    day: Day
    start_time: datetime
    end_time: datetime
    subject_id: int
    class_id: int
    teacher_id: str

    class Config:
        from_attributes = True
