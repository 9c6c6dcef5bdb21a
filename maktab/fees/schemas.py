from typing import Dict
from pydantic import BaseModel, Field, field_validator

from maktab.config.school_config import CLASSES, MONTHS


def validate_month(v: str) -> str:
    month = v.strip().capitalize() if v else v
    if month not in MONTHS:
        raise ValueError(f'Month must be one of: {", ".join(MONTHS)}')
    return month


def validate_year(v: str) -> str:
    v = v.strip() if v else v
    if not v or not v.isdigit() or len(v) != 4:
        raise ValueError('Year must be a four digit year')
    return v


class FeePaymentRecord(BaseModel):
    student_id: str
    year: str
    # Only months that have been set appear here; a missing month is unpaid
    payments: Dict[str, bool] = Field(default_factory=dict)

    @field_validator('year')
    @classmethod
    def check_year(cls, v):
        return validate_year(v)

    @field_validator('payments')
    @classmethod
    def check_months(cls, v):
        return {validate_month(month): paid for month, paid in v.items()}


class MonthPaymentUpdate(BaseModel):
    student_id: str
    year: str
    month: str
    paid: bool

    @field_validator('year')
    @classmethod
    def check_year(cls, v):
        return validate_year(v)

    @field_validator('month')
    @classmethod
    def check_month(cls, v):
        return validate_month(v)


class FeeStructure(BaseModel):
    """Monthly fee per class."""
    fees: Dict[str, float] = Field(default_factory=dict)

    @field_validator('fees')
    @classmethod
    def check_fees(cls, v):
        for class_name, amount in v.items():
            if class_name not in CLASSES:
                raise ValueError(f'Unknown class: {class_name}')
            if amount < 0:
                raise ValueError(f'Fee for {class_name} cannot be negative')
        return v
