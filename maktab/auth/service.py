from typing import Optional

from maktab.auth.schemas import STUDENT, TEACHER, UserResponse
from maktab.config.school_config import SchoolConfig
from maktab.storage import StorageBackend
from maktab.students.service import StudentService


class AuthService:
    """Contact-number login for teachers and students."""

    @staticmethod
    def login(storage: StorageBackend, config: SchoolConfig, contact: str) -> Optional[UserResponse]:
        """
        Resolve a contact number to a user.

        Admin contacts are teachers whether or not a student record exists for
        them, so they are checked before the student lookup.

        Returns:
            Optional[UserResponse]: the user, or None for an unknown contact
        """
        if contact in config.admin_contacts:
            return UserResponse(id=contact, name="Teacher (Admin)", role=TEACHER)

        student = StudentService(storage).find_by_contact(contact)
        if not student:
            return None
        return UserResponse(
            id=student.contact,
            name=student.name,
            role=STUDENT,
            class_name=student.class_name,
            student=student,
        )

auth_service = AuthService()
