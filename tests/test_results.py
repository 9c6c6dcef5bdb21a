import pytest

from conftest import make_student
from maktab.exceptions import StorageError
from maktab.results.schemas import BulkMarksEntry
from maktab.results.service import ResultService, result_record_id
from maktab.storage import LocalStore, RESULTS
from maktab.students.service import StudentService
from maktab.subjects.schemas import SubjectConfig
from maktab.subjects.service import SubjectService

EXAM = "Annual 2024"


@pytest.fixture()
def service(storage, school_config):
    return ResultService(storage, school_config)


def test_record_id_collapses_whitespace():
    assert result_record_id("9000000001", "Annual 2024") == "9000000001_Annual_2024"
    assert result_record_id("9000000001", "Half   Yearly\t2024") == "9000000001_Half_Yearly_2024"


def test_single_subject_creates_result(service):
    result = service.upsert_single_subject_marks("9000000001", EXAM, "MATHEMATICS", 90)

    assert result.id == "9000000001_Annual_2024"
    assert result.marks == {"MATHEMATICS": 90}
    assert result.total_marks == 90
    assert result.max_total_marks == 100
    assert result.percentage == 90.0
    assert result.overall_grade == "A+"
    assert result.is_pass is True
    assert service.get_result("9000000001", EXAM) == result


def test_recompute_after_each_subject(service):
    """Setting a second subject recomputes the aggregate over both."""
    service.upsert_single_subject_marks("9000000001", EXAM, "MATH", 90)
    result = service.upsert_single_subject_marks("9000000001", EXAM, "ENGLISH", 30)

    assert result.marks == {"MATH": 90, "ENGLISH": 30}
    assert result.total_marks == 120
    assert result.max_total_marks == 200
    assert result.percentage == 60.0
    assert result.overall_grade == "B"
    assert result.is_pass is False


def test_single_subject_upsert_is_idempotent(service):
    once = service.upsert_single_subject_marks("9000000001", EXAM, "ARABIC", 72)
    twice = service.upsert_single_subject_marks("9000000001", EXAM, "ARABIC", 72)
    assert once == twice
    assert service.get_results("9000000001") == [twice]


def test_correcting_a_mark_replaces_it(service):
    service.upsert_single_subject_marks("9000000001", EXAM, "BENGALI", 20)
    service.upsert_single_subject_marks("9000000001", EXAM, "ARABIC", 80)
    result = service.upsert_single_subject_marks("9000000001", EXAM, "BENGALI", 60)

    assert result.marks == {"BENGALI": 60, "ARABIC": 80}
    assert result.total_marks == 140
    assert result.is_pass is True


def test_full_result_replaces_marks(service):
    service.upsert_single_subject_marks("9000000001", EXAM, "BENGALI", 20)
    result = service.upsert_full_result("9000000001", EXAM, {"ARABIC": 50, "MATHEMATICS": 70})

    assert result.marks == {"ARABIC": 50, "MATHEMATICS": 70}
    assert result.total_marks == 120
    assert result.percentage == 60.0
    assert result.is_pass is True


def test_removed_subject_falls_back_to_100(storage, school_config, service):
    subjects = SubjectService(storage, school_config)
    subjects.update_subjects([SubjectConfig(name="MATHEMATICS", max_marks=50)])

    result = service.upsert_full_result("9000000001", EXAM, {"MATHEMATICS": 45, "HISTORY": 40})
    assert result.max_total_marks == 150
    assert result.total_marks == 85


def test_changing_subject_config_does_not_touch_saved_results(storage, school_config, service):
    service.upsert_single_subject_marks("9000000001", EXAM, "MATHEMATICS", 40)
    SubjectService(storage, school_config).update_subjects([SubjectConfig(name="MATHEMATICS", max_marks=50)])

    assert service.get_result("9000000001", EXAM).max_total_marks == 100
    # The next edit picks up the new maximum
    result = service.upsert_single_subject_marks("9000000001", EXAM, "ARABIC", 40)
    assert result.max_total_marks == 150


def test_colliding_exam_names_share_a_record(service):
    service.upsert_single_subject_marks("9000000001", "Term 1", "MATHEMATICS", 80)
    result = service.upsert_single_subject_marks("9000000001", "Term  1", "ARABIC", 70)

    assert result.id == "9000000001_Term_1"
    assert result.marks == {"MATHEMATICS": 80, "ARABIC": 70}
    assert len(service.get_results("9000000001")) == 1



def test_subject_names_are_normalized(storage, school_config, service):
    SubjectService(storage, school_config).update_subjects([SubjectConfig(name="MATHEMATICS", max_marks=50)])

    result = service.upsert_single_subject_marks("9000000001", EXAM, " mathematics ", 40)
    assert result.marks == {"MATHEMATICS": 40}
    assert result.max_total_marks == 50
    assert result.percentage == 80.0

    full = service.upsert_full_result("9000000002", EXAM, {"mathematics": 25})
    assert full.marks == {"MATHEMATICS": 25}
    assert full.max_total_marks == 50

def test_get_results_filters_by_student(service):
    service.upsert_single_subject_marks("9000000001", EXAM, "MATHEMATICS", 80)
    service.upsert_single_subject_marks("9000000002", EXAM, "MATHEMATICS", 60)
    service.upsert_single_subject_marks("9000000001", "Half Yearly", "MATHEMATICS", 60)

    assert len(service.get_results()) == 3
    assert sorted(r.exam_name for r in service.get_results("9000000001")) == ["Annual 2024", "Half Yearly"]
    assert service.list_exam_names("9000000002") == [EXAM]
    assert service.get_result("9000000003", EXAM) is None


def test_bulk_update_marks(service):
    outcome = service.bulk_update_marks(EXAM, "MATHEMATICS", [
        BulkMarksEntry(student_id="9000000001", marks=90),
        BulkMarksEntry(student_id="9000000002", marks=30),
    ])

    assert outcome.updated == ["9000000001", "9000000002"]
    assert outcome.ok
    assert service.get_result("9000000002", EXAM).is_pass is False


class FailingStore(LocalStore):
    """Local store that refuses to write one key."""

    def __init__(self, *args, fail_key=None, **kwargs):
        super().__init__(*args, **kwargs)
        self.fail_key = fail_key

    def set(self, collection, key, record):
        if key == self.fail_key:
            raise StorageError(f"Could not write {collection}/{key}")
        super().set(collection, key, record)


def test_bulk_update_continues_after_a_failure(tmp_path, school_config):
    store = FailingStore(str(tmp_path), latency_ms=0, fail_key=result_record_id("9000000002", EXAM))
    service = ResultService(store, school_config)

    outcome = service.bulk_update_marks(EXAM, "MATHEMATICS", [
        BulkMarksEntry(student_id="9000000001", marks=90),
        BulkMarksEntry(student_id="9000000002", marks=80),
        BulkMarksEntry(student_id="9000000003", marks=70),
    ])

    assert outcome.updated == ["9000000001", "9000000003"]
    assert list(outcome.failed) == ["9000000002"]
    assert service.get_result("9000000002", EXAM) is None
    assert service.get_result("9000000003", EXAM).total_marks == 70


def test_interleaved_writers_lose_updates(service):
    """Two editors working from the same snapshot: the last write wins."""
    service.upsert_single_subject_marks("9000000001", EXAM, "MATHEMATICS", 80)
    snapshot = service.get_result("9000000001", EXAM)

    service.upsert_single_subject_marks("9000000001", EXAM, "ENGLISH", 70)
    service.upsert_full_result("9000000001", EXAM, {**snapshot.marks, "ARABIC": 60})

    assert service.get_result("9000000001", EXAM).marks == {"MATHEMATICS": 80, "ARABIC": 60}


def test_marksheet_rows_follow_enrolled_subjects(storage, school_config, service):
    StudentService(storage).add_student(
        make_student("9000000001", subjects=["BENGALI", "MATHEMATICS"])
    )
    service.upsert_full_result("9000000001", EXAM, {"BENGALI": 84, "MATHEMATICS": 30})
    service.upsert_full_result("9000000002", EXAM, {"BENGALI": 90, "MATHEMATICS": 90})

    marksheet = service.build_marksheet("9000000001", EXAM)

    assert [row.subject for row in marksheet.rows] == ["BENGALI", "MATHEMATICS"]
    assert marksheet.rows[0].grade == "A"
    assert marksheet.rows[1].performance_level == "BPL"
    assert marksheet.total_marks == 114
    assert marksheet.max_total_marks == 200
    assert marksheet.is_pass is False
    assert marksheet.rank == 2
    assert marksheet.student.name == "Ayesha Khatun"
    assert marksheet.signatures == ["Guardian Sign", "Teacher Sign"]


def test_marksheet_without_subject_list_shows_all(storage, school_config, service):
    StudentService(storage).add_student(make_student("9000000001"))
    service.upsert_single_subject_marks("9000000001", EXAM, "ARABIC", 55)

    marksheet = service.build_marksheet("9000000001", EXAM)

    assert [row.subject for row in marksheet.rows] == ["BENGALI", "ENGLISH", "ARABIC", "MATHEMATICS"]
    assert marksheet.rows[0].obtained == 0
    assert service.build_marksheet("9000000001", "Missing") is None


def test_result_record_is_stored_under_its_id(storage, service):
    service.upsert_single_subject_marks("9000000001", EXAM, "ARABIC", 55)
    record = storage.get(RESULTS, "9000000001_Annual_2024")
    assert record["total_marks"] == 55
    assert record["exam_name"] == EXAM
