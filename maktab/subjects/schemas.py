from typing import List
from pydantic import BaseModel, Field, field_validator


class SubjectConfig(BaseModel):
    name: str
    max_marks: int = Field(100, gt=0)

    @field_validator('name')
    @classmethod
    def normalize_name(cls, v):
        if not v or not v.strip():
            raise ValueError('Subject name cannot be empty')
        return v.strip().upper()


class SubjectsUpdate(BaseModel):
    subjects: List[SubjectConfig]

    @field_validator('subjects')
    @classmethod
    def names_must_be_unique(cls, v):
        names = [s.name for s in v]
        if len(names) != len(set(names)):
            raise ValueError('Subject names must be unique')
        return v
