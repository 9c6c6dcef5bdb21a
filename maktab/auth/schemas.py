from typing import Optional
from pydantic import BaseModel, field_validator

from maktab.students.schemas import Student, validate_contact

STUDENT = "STUDENT"
TEACHER = "TEACHER"


class LoginRequest(BaseModel):
    contact: str

    @field_validator('contact')
    @classmethod
    def validate_contact(cls, v):
        return validate_contact(v)


class UserResponse(BaseModel):
    # The contact number doubles as the user id
    id: str
    name: str
    role: str
    class_name: Optional[str] = None
    student: Optional[Student] = None

    @property
    def is_teacher(self) -> bool:
        return self.role == TEACHER


class LoginResponse(BaseModel):
    success: bool
    message: str
    user: Optional[UserResponse] = None
