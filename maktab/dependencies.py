from fastapi import Depends, Request

from maktab.attendance.service import AttendanceService
from maktab.config.school_config import SchoolConfig
from maktab.feedback.service import FeedbackService
from maktab.fees.service import FeeLedger
from maktab.notifications.service import NotificationService
from maktab.results.service import ResultService
from maktab.storage import StorageBackend, get_storage
from maktab.students.service import StudentService
from maktab.subjects.service import SubjectService
from maktab.uploads.service import UploadService


def get_school_config(request: Request) -> SchoolConfig:
    return request.app.state.school_config


def get_student_service(storage: StorageBackend = Depends(get_storage)) -> StudentService:
    return StudentService(storage)


def get_subject_service(
    storage: StorageBackend = Depends(get_storage),
    config: SchoolConfig = Depends(get_school_config),
) -> SubjectService:
    return SubjectService(storage, config)


def get_result_service(
    storage: StorageBackend = Depends(get_storage),
    config: SchoolConfig = Depends(get_school_config),
) -> ResultService:
    return ResultService(storage, config)


def get_attendance_service(storage: StorageBackend = Depends(get_storage)) -> AttendanceService:
    return AttendanceService(storage)


def get_fee_ledger(
    storage: StorageBackend = Depends(get_storage),
    config: SchoolConfig = Depends(get_school_config),
) -> FeeLedger:
    return FeeLedger(storage, config)


def get_notification_service(storage: StorageBackend = Depends(get_storage)) -> NotificationService:
    return NotificationService(storage)


def get_feedback_service(storage: StorageBackend = Depends(get_storage)) -> FeedbackService:
    return FeedbackService(storage)


def get_upload_service(request: Request) -> UploadService:
    return request.app.state.upload_service
