"""
School Configuration
This file contains the classes, months and default subjects used across the school.
Edit this file to add/remove classes or change the default subject list.
"""
from typing import Dict, List
from pydantic import BaseModel, Field

from maktab.config.settings import settings

# Ordered list of classes (lowest first)
CLASSES = [
    "Nursery",
    "KG",
    "Class I",
    "Class II",
    "Class III",
    "Class IV",
    "Class V",
]

MONTHS = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]

# Seeded into the subject config the first time it is read
DEFAULT_SUBJECTS = [
    {"name": "BENGALI", "max_marks": 100},
    {"name": "ENGLISH", "max_marks": 100},
    {"name": "ARABIC", "max_marks": 100},
    {"name": "MATHEMATICS", "max_marks": 100},
]

# Every class studies these; ENGLISH is added for the upper classes
CORE_SUBJECTS = ["BENGALI", "ARABIC", "MATHEMATICS"]
ENGLISH_CLASSES = ["Class III", "Class IV", "Class V"]

PASS_MARK = 35
FALLBACK_MAX_MARKS = 100


class SchoolConfig(BaseModel):
    """Runtime school configuration, built once at startup."""
    classes: List[str] = Field(default_factory=lambda: list(CLASSES))
    months: List[str] = Field(default_factory=lambda: list(MONTHS))
    default_subjects: List[Dict] = Field(default_factory=lambda: [dict(s) for s in DEFAULT_SUBJECTS])
    admin_contacts: List[str] = Field(default_factory=list)
    # A single subject below this fails the whole exam
    pass_mark: float = PASS_MARK
    # Max marks assumed for a subject that is no longer configured
    fallback_max_marks: int = FALLBACK_MAX_MARKS
    default_fee_structure: Dict[str, float] = Field(default_factory=dict)


def load_school_config() -> SchoolConfig:
    return SchoolConfig(admin_contacts=settings.admin_contact_list)


school_config = load_school_config()
