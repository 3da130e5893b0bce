# services/school_admin/schemas/users.py
from datetime import date
from typing import List, Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

from services.school_admin.models.users import Sex

PROFILE_FIELDS = {
    "username", "name", "surname", "email", "phone",
    "address", "img", "blood_type", "birthday", "sex",
}


class PersonInput(BaseModel):
    id: Optional[str] = None
    username: str = Field(..., min_length=3, max_length=20)
    # Empty on update keeps the current password
    password: str = ""
    name: str = Field(..., min_length=1)
    surname: str = Field(..., min_length=1)
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    address: str
    img: Optional[str] = None
    blood_type: str = Field(..., min_length=1, max_length=5)
    birthday: date
    sex: Sex

    @field_validator("email", "phone", "img", mode="before")
    @classmethod
    def blank_as_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    def profile(self) -> dict:
        """Columns shared by the teacher and student tables."""
        return self.model_dump(include=PROFILE_FIELDS)

    @field_validator("password")
    @classmethod
    def password_length(cls, value):
        if value and len(value) < 8:
            raise ValueError("Password must be at least 8 characters long")
        return value


class TeacherInput(PersonInput):
    subjects: List[int] = Field(default_factory=list)  # subject ids


class StudentInput(PersonInput):
    grade_id: int
    class_id: int


class PersonOut(BaseModel):
    id: str
    username: str
    name: str
    surname: str
    email: Optional[str]
    phone: Optional[str]
    address: str
    img: Optional[str]
    blood_type: str
    birthday: date
    sex: Sex

    class Config:
        from_attributes = True


class TeacherOut(PersonOut):
    subject_ids: List[int]


class StudentOut(PersonOut):
    grade_id: int
    class_id: int


class LoginRequest(BaseModel):
    username: str
    password: str


class LoginResponse(BaseModel):
    name: str
    role: str
    access_token: str
    token_type: str = "bearer"
