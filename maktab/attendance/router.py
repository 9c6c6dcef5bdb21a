from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query

from maktab.attendance.schemas import (
    AttendanceRecord, ClassAttendanceRequest, ClassRegisterEntry, MarkAttendanceRequest,
)
from maktab.attendance.service import AttendanceService
from maktab.auth.dependencies import ensure_can_read, get_current_user, require_teacher
from maktab.auth.schemas import UserResponse
from maktab.dependencies import get_attendance_service, get_student_service
from maktab.schemas import BatchResult
from maktab.students.service import StudentService

router = APIRouter(
    prefix="/api/attendance",
    tags=["attendance"],
)


@router.get("", response_model=List[AttendanceRecord])
def get_all_attendance(
    service: AttendanceService = Depends(get_attendance_service),
    _: UserResponse = Depends(require_teacher),
):
    return service.get_all_attendance()


@router.put("", response_model=AttendanceRecord)
def mark_attendance(
    payload: MarkAttendanceRequest,
    service: AttendanceService = Depends(get_attendance_service),
    _: UserResponse = Depends(require_teacher),
):
    return service.mark_attendance(payload.student_id, payload.date, payload.is_present)


@router.post("/class", response_model=BatchResult)
def mark_class_attendance(
    payload: ClassAttendanceRequest,
    service: AttendanceService = Depends(get_attendance_service),
    students: StudentService = Depends(get_student_service),
    _: UserResponse = Depends(require_teacher),
):
    """Mark the whole class for a day; ticked students are present, the rest absent."""
    roster = students.list_by_class(payload.class_name)
    return service.mark_class_attendance(roster, payload.present_ids, payload.date)


@router.get("/class", response_model=List[ClassRegisterEntry])
def get_class_register(
    class_name: str = Query(...),
    date: str = Query(...),
    service: AttendanceService = Depends(get_attendance_service),
    students: StudentService = Depends(get_student_service),
    _: UserResponse = Depends(require_teacher),
):
    try:
        return service.class_register(students.list_by_class(class_name), date)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/{student_id}", response_model=AttendanceRecord)
def get_attendance(
    student_id: str,
    service: AttendanceService = Depends(get_attendance_service),
    current_user: UserResponse = Depends(get_current_user),
):
    """A student's attendance; a zeroed record when nothing has been marked yet."""
    ensure_can_read(current_user, student_id)
    return service.get_attendance(student_id) or AttendanceRecord(student_id=student_id)
