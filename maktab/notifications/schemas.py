from typing import Optional
from pydantic import BaseModel, field_validator


class NotificationCreate(BaseModel):
    text: str
    title: Optional[str] = None
    image_url: Optional[str] = None
    pdf_url: Optional[str] = None
    pdf_name: Optional[str] = None

    @field_validator('text')
    @classmethod
    def text_must_not_be_empty(cls, v):
        if not v or not v.strip():
            raise ValueError('Notification text cannot be empty')
        return v


class Notification(NotificationCreate):
    id: str
    date: str
    timestamp: float
