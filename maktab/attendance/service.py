import datetime
import logging
from typing import Iterable, List, Optional, Union

from maktab.attendance.schemas import AttendanceRecord, ClassRegisterEntry
from maktab.exceptions import MaktabError
from maktab.schemas import BatchResult
from maktab.storage import ATTENDANCE, StorageBackend
from maktab.students.schemas import Student

logger = logging.getLogger(__name__)

PRESENT = "present"
ABSENT = "absent"

DateLike = Union[str, datetime.date]


def _date_key(day: DateLike) -> str:
    if isinstance(day, datetime.date):
        return day.isoformat()
    # Validates the string and normalises it to YYYY-MM-DD
    return datetime.date.fromisoformat(day).isoformat()


class AttendanceService:
    """
    Per-student attendance history with counters derived from it.

    The counters are never incremented. After every write they are recounted
    from the full history, so marking a day twice or correcting a day's status
    cannot drift them.
    """

    def __init__(self, storage: StorageBackend):
        self.storage = storage

    def get_attendance(self, student_id: str) -> Optional[AttendanceRecord]:
        record = self.storage.get(ATTENDANCE, student_id)
        if not record:
            return None
        record["student_id"] = student_id
        return AttendanceRecord(**record)

    def get_all_attendance(self) -> List[AttendanceRecord]:
        return [AttendanceRecord(**r) for r in self.storage.list_all(ATTENDANCE)]

    def get_attendance_for_class(self, student_ids: Iterable[str]) -> List[AttendanceRecord]:
        records = []
        for student_id in student_ids:
            record = self.get_attendance(student_id)
            if record:
                records.append(record)
        return records

    def mark_attendance(self, student_id: str, day: DateLike, is_present: bool) -> AttendanceRecord:
        date_key = _date_key(day)
        existing = self.get_attendance(student_id)
        history = dict(existing.history) if existing else {}
        history[date_key] = PRESENT if is_present else ABSENT

        record = AttendanceRecord(
            student_id=student_id,
            history=history,
            total_classes=len(history),
            present_days=sum(1 for status in history.values() if status == PRESENT),
            last_updated=date_key,
        )
        self.storage.set(ATTENDANCE, student_id, record.model_dump(exclude={"attendance_percentage"}))
        return record

    def mark_class_attendance(self, students: Iterable[Student], present_ids: Iterable[str], day: DateLike) -> BatchResult:
        """
        Mark a whole roster for one day, one student at a time.

        Students in ``present_ids`` are present, everyone else absent. Each student
        is an independent write: a failure is recorded and the rest still run.
        """
        date_key = _date_key(day)
        present = set(present_ids)
        outcome = BatchResult()
        for student in students:
            try:
                self.mark_attendance(student.contact, date_key, student.contact in present)
                outcome.updated.append(student.contact)
            except MaktabError as e:
                logger.error(f"Could not mark attendance for {student.contact} on {date_key}: {e}")
                outcome.failed[student.contact] = str(e)
        logger.info(
            f"Class attendance for {date_key}: {len(outcome.updated)} saved, {len(outcome.failed)} failed"
        )
        return outcome

    def class_register(self, students: Iterable[Student], day: DateLike) -> List[ClassRegisterEntry]:
        """Each student's status on ``day`` (None when not marked yet)."""
        date_key = _date_key(day)
        entries = []
        for student in students:
            record = self.get_attendance(student.contact)
            entries.append(ClassRegisterEntry(
                student_id=student.contact,
                name=student.name,
                roll_number=student.roll_number,
                status=record.history.get(date_key) if record else None,
            ))
        return entries
