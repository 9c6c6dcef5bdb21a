from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query

from maktab.auth.dependencies import ensure_can_read, get_current_user, require_teacher
from maktab.auth.schemas import UserResponse
from maktab.dependencies import get_fee_ledger
from maktab.fees.schemas import FeePaymentRecord, FeeStructure, MonthPaymentUpdate, validate_year
from maktab.fees.service import FeeLedger

router = APIRouter(
    prefix="/api/fees",
    tags=["fees"],
)


@router.get("/structure", response_model=FeeStructure)
def get_fee_structure(
    ledger: FeeLedger = Depends(get_fee_ledger),
    _: UserResponse = Depends(get_current_user),
):
    return ledger.get_fee_structure()


@router.put("/structure", response_model=FeeStructure)
def save_fee_structure(
    structure: FeeStructure,
    ledger: FeeLedger = Depends(get_fee_ledger),
    _: UserResponse = Depends(require_teacher),
):
    return ledger.save_fee_structure(structure)


@router.get("/records", response_model=List[FeePaymentRecord])
def get_all_fee_records(
    year: str = Query(...),
    ledger: FeeLedger = Depends(get_fee_ledger),
    _: UserResponse = Depends(require_teacher),
):
    try:
        year = validate_year(year)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return ledger.get_all_fee_records(year)


@router.put("/records", response_model=FeePaymentRecord)
def update_fee_record(
    record: FeePaymentRecord,
    ledger: FeeLedger = Depends(get_fee_ledger),
    _: UserResponse = Depends(require_teacher),
):
    return ledger.update_fee_record(record)


@router.put("/records/month", response_model=FeePaymentRecord)
def set_month_paid(
    update: MonthPaymentUpdate,
    ledger: FeeLedger = Depends(get_fee_ledger),
    _: UserResponse = Depends(require_teacher),
):
    return ledger.set_month_paid(update.student_id, update.year, update.month, update.paid)


@router.get("/records/{student_id}/{year}", response_model=FeePaymentRecord)
def get_fee_record(
    student_id: str,
    year: str,
    ledger: FeeLedger = Depends(get_fee_ledger),
    current_user: UserResponse = Depends(get_current_user),
):
    ensure_can_read(current_user, student_id)
    try:
        year = validate_year(year)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return ledger.get_fee_record(student_id, year)


@router.get("/records/{student_id}/{year}/due", response_model=List[str])
def get_months_due(
    student_id: str,
    year: str,
    ledger: FeeLedger = Depends(get_fee_ledger),
    current_user: UserResponse = Depends(get_current_user),
):
    ensure_can_read(current_user, student_id)
    try:
        year = validate_year(year)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return ledger.months_due(student_id, year)
