import datetime
from typing import Dict, List, Literal, Optional
from pydantic import BaseModel, Field, computed_field

AttendanceStatus = Literal["present", "absent"]


class AttendanceRecord(BaseModel):
    student_id: str
    # ISO date -> status; the counters are always derived from this map
    history: Dict[str, AttendanceStatus] = Field(default_factory=dict)
    total_classes: int = 0
    present_days: int = 0
    last_updated: Optional[str] = None

    @computed_field
    @property
    def attendance_percentage(self) -> float:
        if self.total_classes <= 0:
            return 0
        return round(self.present_days / self.total_classes * 100, 2)


class MarkAttendanceRequest(BaseModel):
    student_id: str
    date: datetime.date
    is_present: bool


class ClassAttendanceRequest(BaseModel):
    class_name: str
    date: datetime.date
    present_ids: List[str] = Field(default_factory=list)


class ClassRegisterEntry(BaseModel):
    student_id: str
    name: str
    roll_number: str
    status: Optional[AttendanceStatus] = None
