import re
from typing import List, Optional
from pydantic import BaseModel, field_validator

from maktab.config.school_config import CLASSES


def validate_contact(v: str) -> str:
    v = v.strip() if v else v
    if not v or not re.match(r'^\d{10,15}$', v):
        raise ValueError('Invalid contact number. Please enter a 10-15 digit number.')
    return v


class StudentBase(BaseModel):
    name: str
    father_name: str
    class_name: str
    roll_number: str
    # None or empty means the student takes every configured subject
    subjects: Optional[List[str]] = None

    @field_validator('name', 'father_name')
    @classmethod
    def validate_names(cls, v):
        if not v or not v.strip():
            raise ValueError('Name cannot be empty')
        return v.strip()

    @field_validator('class_name')
    @classmethod
    def validate_class_name(cls, v):
        if v not in CLASSES:
            raise ValueError(f'Class must be one of: {", ".join(CLASSES)}')
        return v

    @field_validator('roll_number')
    @classmethod
    def validate_roll_number(cls, v):
        if not v or not v.strip():
            raise ValueError('Roll number cannot be empty')
        return v.strip()

    @field_validator('subjects')
    @classmethod
    def normalize_subjects(cls, v):
        if v is None:
            return None
        seen = []
        for name in v:
            name = name.strip().upper()
            if name and name not in seen:
                seen.append(name)
        return seen


class StudentCreate(StudentBase):
    contact: str

    @field_validator('contact')
    @classmethod
    def validate_contact(cls, v):
        return validate_contact(v)


class StudentUpdate(StudentBase):
    pass


class Student(StudentBase):
    # The contact number is the student's id and login
    contact: str
    role: str = "STUDENT"

    @property
    def id(self) -> str:
        return self.contact
