import logging
from typing import List, Optional

from maktab.config.school_config import CORE_SUBJECTS, ENGLISH_CLASSES
from maktab.exceptions import DuplicateStudentError
from maktab.storage import STUDENTS, StorageBackend
from maktab.students.schemas import Student, StudentCreate, StudentUpdate
from maktab.subjects.schemas import SubjectConfig

logger = logging.getLogger(__name__)


def _roll_sort_key(student: Student):
    roll = student.roll_number
    return (0, int(roll), roll) if roll.isdigit() else (1, 0, roll)


def recommended_subjects(class_name: str, subjects: List[SubjectConfig]) -> List[str]:
    """Subjects pre-selected for a new student of ``class_name``."""
    wanted = list(CORE_SUBJECTS)
    if class_name in ENGLISH_CLASSES:
        wanted.append("ENGLISH")
    return [s.name for s in subjects if s.name in wanted]


def enrolled_subjects(student: Student, subjects: List[SubjectConfig]) -> List[str]:
    """The student's own subject list, or every configured subject when it is empty."""
    if student.subjects:
        return list(student.subjects)
    return [s.name for s in subjects]


class StudentService:
    def __init__(self, storage: StorageBackend):
        self.storage = storage

    @staticmethod
    def _to_record(student: Student) -> dict:
        return student.model_dump()

    def get_student(self, contact: str) -> Optional[Student]:
        record = self.storage.get(STUDENTS, contact)
        return Student(**record) if record else None

    def add_student(self, student: StudentCreate) -> Student:
        """Register a new student. The contact number must not be taken yet."""
        if self.storage.get(STUDENTS, student.contact):
            raise DuplicateStudentError(student.contact)
        db_student = Student(**student.model_dump())
        self.storage.set(STUDENTS, db_student.contact, self._to_record(db_student))
        logger.info(f"Registered student {db_student.contact} in {db_student.class_name}")
        return db_student

    def update_student(self, contact: str, update: StudentUpdate) -> Optional[Student]:
        """Replace a student's details. The contact number itself never changes."""
        if not self.storage.get(STUDENTS, contact):
            return None
        db_student = Student(contact=contact, **update.model_dump())
        self.storage.set(STUDENTS, contact, self._to_record(db_student))
        return db_student

    def delete_student(self, contact: str) -> bool:
        if not self.storage.get(STUDENTS, contact):
            return False
        self.storage.delete(STUDENTS, contact)
        logger.info(f"Deleted student {contact}")
        return True

    def list_students(self) -> List[Student]:
        return [Student(**r) for r in self.storage.list_all(STUDENTS)]

    def list_by_class(self, class_name: str) -> List[Student]:
        """The class roster ordered by roll number."""
        students = [Student(**r) for r in self.storage.query(STUDENTS, "class_name", class_name)]
        return sorted(students, key=_roll_sort_key)

    def find_by_contact(self, contact: str) -> Optional[Student]:
        matches = self.storage.query(STUDENTS, "contact", contact)
        return Student(**matches[0]) if matches else None
