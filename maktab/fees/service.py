import logging
from typing import List

from maktab.config.school_config import SchoolConfig
from maktab.fees.schemas import FeePaymentRecord, FeeStructure, validate_month
from maktab.storage import CONFIG, FEES, StorageBackend

logger = logging.getLogger(__name__)

FEE_STRUCTURE_KEY = "fees"


def fee_record_id(student_id: str, year: str) -> str:
    return f"{student_id}_{year}"


def months_due(record: FeePaymentRecord, months: List[str]) -> List[str]:
    """Months of the year not marked as paid, in calendar order."""
    return [m for m in months if not record.payments.get(m)]


class FeeLedger:
    """Month-by-month fee payments per student and year."""

    def __init__(self, storage: StorageBackend, config: SchoolConfig):
        self.storage = storage
        self.config = config

    def get_fee_record(self, student_id: str, year: str) -> FeePaymentRecord:
        record = self.storage.get(FEES, fee_record_id(student_id, year))
        if record:
            return FeePaymentRecord(**record)
        return FeePaymentRecord(student_id=student_id, year=year, payments={})

    def get_all_fee_records(self, year: str) -> List[FeePaymentRecord]:
        return [FeePaymentRecord(**r) for r in self.storage.query(FEES, "year", year)]

    def update_fee_record(self, record: FeePaymentRecord) -> FeePaymentRecord:
        self.storage.set(FEES, fee_record_id(record.student_id, record.year), record.model_dump())
        return record

    def set_month_paid(self, student_id: str, year: str, month: str, paid: bool) -> FeePaymentRecord:
        record = self.get_fee_record(student_id, year)
        payments = dict(record.payments)
        payments[validate_month(month)] = paid
        updated = FeePaymentRecord(student_id=student_id, year=year, payments=payments)
        logger.info(f"Fee for {student_id} {month} {year} set to {'paid' if paid else 'unpaid'}")
        return self.update_fee_record(updated)

    def months_due(self, student_id: str, year: str) -> List[str]:
        return months_due(self.get_fee_record(student_id, year), self.config.months)

    def get_fee_structure(self) -> FeeStructure:
        doc = self.storage.get(CONFIG, FEE_STRUCTURE_KEY)
        if doc and doc.get("fees") is not None:
            return FeeStructure(fees=doc["fees"])
        return FeeStructure(fees=dict(self.config.default_fee_structure))

    def save_fee_structure(self, structure: FeeStructure) -> FeeStructure:
        self.storage.set(CONFIG, FEE_STRUCTURE_KEY, {"fees": structure.fees})
        return structure
