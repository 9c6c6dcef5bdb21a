import logging
import re
from typing import Dict, List, Mapping, Optional

from maktab.config.school_config import SchoolConfig
from maktab.exceptions import MaktabError
from maktab.results.grading import grade_of, summarize_marks
from maktab.results.ranking import rank_from_totals
from maktab.results.schemas import (
    BulkMarksEntry, Marksheet, MarksheetRow, MarksheetStudent, StudentResult, normalize_subject_name,
)
from maktab.schemas import BatchResult
from maktab.storage import RESULTS, StorageBackend
from maktab.students.service import StudentService, enrolled_subjects
from maktab.subjects.service import SubjectService

logger = logging.getLogger(__name__)


def normalize_exam_name(exam_name: str) -> str:
    return re.sub(r"\s+", "_", exam_name)


def result_record_id(student_id: str, exam_name: str) -> str:
    """
    Record id of a student's result for one exam.

    Exam names that only differ in whitespace ("Term 1" and "Term  1") map to
    the same id and therefore share one record.
    """
    return f"{student_id}_{normalize_exam_name(exam_name)}"


class ResultService:
    """Builds and updates per-student, per-exam result records."""

    def __init__(self, storage: StorageBackend, config: SchoolConfig):
        self.storage = storage
        self.config = config
        self.subjects = SubjectService(storage, config)

    def _recompute(self, student_id: str, exam_name: str, marks: Mapping[str, float]) -> StudentResult:
        summary = summarize_marks(
            marks,
            self.subjects.max_marks_by_subject(),
            pass_mark=self.config.pass_mark,
            fallback_max=self.config.fallback_max_marks,
        )
        return StudentResult(
            id=result_record_id(student_id, exam_name),
            student_id=student_id,
            exam_name=exam_name,
            marks=dict(marks),
            **summary,
        )

    def _load(self, student_id: str, exam_name: str) -> Optional[StudentResult]:
        record_id = result_record_id(student_id, exam_name)
        record = self.storage.get(RESULTS, record_id)
        if not record:
            return None
        result = StudentResult(**record)
        if result.exam_name != exam_name:
            logger.warning(
                f"Exam '{exam_name}' shares record {record_id} with exam '{result.exam_name}'"
            )
        return result

    def _save(self, result: StudentResult) -> StudentResult:
        self.storage.set(RESULTS, result.id, result.model_dump())
        return result

    def get_result(self, student_id: str, exam_name: str) -> Optional[StudentResult]:
        return self._load(student_id, exam_name)

    def get_results(self, student_id: Optional[str] = None) -> List[StudentResult]:
        if student_id:
            records = self.storage.query(RESULTS, "student_id", student_id)
        else:
            records = self.storage.list_all(RESULTS)
        return [StudentResult(**r) for r in records]

    def list_exam_names(self, student_id: Optional[str] = None) -> List[str]:
        names = []
        for result in self.get_results(student_id):
            if result.exam_name not in names:
                names.append(result.exam_name)
        return names

    def upsert_single_subject_marks(
        self, student_id: str, exam_name: str, subject_name: str, marks: float
    ) -> StudentResult:
        """
        Set one subject's marks and recompute the whole result.

        Marks already entered for other subjects are kept; totals, percentage,
        grade and pass/fail are re-derived from the full marks map. Subject names
        are matched case-insensitively against the configured subjects.
        """
        subject_name = normalize_subject_name(subject_name)
        existing = self._load(student_id, exam_name)
        marks_map: Dict[str, float] = dict(existing.marks) if existing else {}
        marks_map[subject_name] = marks
        return self._save(self._recompute(student_id, exam_name, marks_map))

    def upsert_full_result(self, student_id: str, exam_name: str, marks: Mapping[str, float]) -> StudentResult:
        """Replace the whole marks map of a result and recompute it."""
        normalized = {normalize_subject_name(subject): score for subject, score in marks.items()}
        return self._save(self._recompute(student_id, exam_name, normalized))

    def bulk_update_marks(self, exam_name: str, subject_name: str, updates: List[BulkMarksEntry]) -> BatchResult:
        """
        Enter one subject's marks for many students, one student at a time.

        A failure for one student is recorded and the rest of the batch still runs;
        students already processed keep their update.
        """
        outcome = BatchResult()
        for update in updates:
            try:
                self.upsert_single_subject_marks(update.student_id, exam_name, subject_name, update.marks)
                outcome.updated.append(update.student_id)
            except MaktabError as e:
                logger.error(f"Could not save {subject_name} marks for {update.student_id}: {e}")
                outcome.failed[update.student_id] = str(e)
        logger.info(
            f"Bulk marks for {exam_name}/{subject_name}: "
            f"{len(outcome.updated)} saved, {len(outcome.failed)} failed"
        )
        return outcome

    def rank_of(self, exam_name: str, my_total: float) -> int:
        """Rank of ``my_total`` among every result of ``exam_name``; 0 if no result has it."""
        totals = [r.get("total_marks", 0) for r in self.storage.query(RESULTS, "exam_name", exam_name)]
        return rank_from_totals(totals, my_total)

    def build_marksheet(self, student_id: str, exam_name: str) -> Optional[Marksheet]:
        """Data for a student's printable marksheet, or None when either record is missing."""
        student = StudentService(self.storage).get_student(student_id)
        result = self._load(student_id, exam_name)
        if not student or not result:
            return None

        subjects = self.subjects.get_subjects()
        enrolled = enrolled_subjects(student, subjects)
        rows = []
        for subject in subjects:
            if subject.name not in enrolled:
                continue
            obtained = result.marks.get(subject.name, 0)
            info = grade_of(obtained)
            rows.append(MarksheetRow(
                subject=subject.name,
                max_marks=subject.max_marks,
                obtained=obtained,
                grade=info.grade,
                performance_level=info.performance_level,
            ))

        return Marksheet(
            student=MarksheetStudent(
                contact=student.contact,
                name=student.name,
                father_name=student.father_name,
                class_name=student.class_name,
                roll_number=student.roll_number,
            ),
            exam_name=result.exam_name,
            rows=rows,
            total_marks=result.total_marks,
            max_total_marks=result.max_total_marks,
            percentage=result.percentage,
            overall_grade=result.overall_grade,
            is_pass=result.is_pass,
            rank=self.rank_of(result.exam_name, result.total_marks),
        )
