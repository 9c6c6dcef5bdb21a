from typing import Dict, List, Optional
from pydantic import BaseModel, Field, field_validator


def normalize_subject_name(v: str) -> str:
    if not v or not v.strip():
        raise ValueError('Subject name cannot be empty')
    return v.strip().upper()


def _require_exam_name(v: str) -> str:
    if not v or not v.strip():
        raise ValueError('Exam name cannot be empty')
    return v


class StudentResult(BaseModel):
    id: str
    student_id: str
    exam_name: str
    # Only subjects that have been entered are present
    marks: Dict[str, float] = Field(default_factory=dict)
    total_marks: float = 0
    max_total_marks: int = 0
    percentage: float = 0
    overall_grade: Optional[str] = None
    is_pass: bool = False


class SubjectMarkUpdate(BaseModel):
    student_id: str
    exam_name: str
    subject_name: str
    marks: float = Field(..., ge=0)

    @field_validator('exam_name')
    @classmethod
    def validate_exam_name(cls, v):
        return _require_exam_name(v)

    @field_validator('subject_name')
    @classmethod
    def validate_subject_name(cls, v):
        return normalize_subject_name(v)


class BulkMarksEntry(BaseModel):
    student_id: str
    marks: float = Field(..., ge=0)


class BulkMarksRequest(BaseModel):
    exam_name: str
    subject_name: str
    updates: List[BulkMarksEntry]

    @field_validator('exam_name')
    @classmethod
    def validate_exam_name(cls, v):
        return _require_exam_name(v)

    @field_validator('subject_name')
    @classmethod
    def validate_subject_name(cls, v):
        return normalize_subject_name(v)


class FullResultRequest(BaseModel):
    student_id: str
    exam_name: str
    marks: Dict[str, float]

    @field_validator('exam_name')
    @classmethod
    def validate_exam_name(cls, v):
        return _require_exam_name(v)

    @field_validator('marks')
    @classmethod
    def validate_marks(cls, v):
        normalized = {}
        for subject, score in v.items():
            if score < 0:
                raise ValueError(f'Marks for {subject} cannot be negative')
            normalized[normalize_subject_name(subject)] = score
        return normalized


class RankResponse(BaseModel):
    student_id: str
    exam_name: str
    total_marks: float
    rank: int


class MarksheetRow(BaseModel):
    subject: str
    max_marks: int
    obtained: float
    grade: str
    performance_level: str


class MarksheetStudent(BaseModel):
    contact: str
    name: str
    father_name: Optional[str] = None
    class_name: Optional[str] = None
    roll_number: Optional[str] = None


class Marksheet(BaseModel):
    """Everything a printable marksheet needs; layout is left to the renderer."""
    student: MarksheetStudent
    exam_name: str
    rows: List[MarksheetRow]
    total_marks: float
    max_total_marks: int
    percentage: float
    overall_grade: Optional[str] = None
    is_pass: bool
    rank: int
    signatures: List[str] = Field(default_factory=lambda: ["Guardian Sign", "Teacher Sign"])
