from typing import Optional
from pydantic import BaseModel, field_validator


class FeedbackCreate(BaseModel):
    name: str
    message: str
    contact: Optional[str] = None

    @field_validator('name', 'message')
    @classmethod
    def must_not_be_empty(cls, v):
        if not v or not v.strip():
            raise ValueError('Field cannot be empty')
        return v.strip()


class FeedbackRead(FeedbackCreate):
    id: str
    date: str
    timestamp: float
