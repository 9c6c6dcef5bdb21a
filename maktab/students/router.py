import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from maktab.auth.dependencies import ensure_can_read, get_current_user, require_teacher
from maktab.auth.schemas import UserResponse
from maktab.dependencies import get_student_service, get_subject_service
from maktab.exceptions import DuplicateStudentError
from maktab.students.schemas import Student, StudentCreate, StudentUpdate
from maktab.students.service import StudentService, recommended_subjects
from maktab.subjects.service import SubjectService

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/students",
    tags=["students"],
)


@router.get("", response_model=List[Student])
def list_students(
    class_name: Optional[str] = Query(None),
    service: StudentService = Depends(get_student_service),
    _: UserResponse = Depends(require_teacher),
):
    """All students, or one class roster ordered by roll number."""
    if class_name:
        return service.list_by_class(class_name)
    return service.list_students()


@router.post("", response_model=Student, status_code=201)
def add_student(
    student: StudentCreate,
    service: StudentService = Depends(get_student_service),
    _: UserResponse = Depends(require_teacher),
):
    try:
        return service.add_student(student)
    except DuplicateStudentError as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.get("/recommended-subjects", response_model=List[str])
def get_recommended_subjects(
    class_name: str = Query(...),
    subjects: SubjectService = Depends(get_subject_service),
    _: UserResponse = Depends(require_teacher),
):
    return recommended_subjects(class_name, subjects.get_subjects())


@router.get("/{contact}", response_model=Student)
def get_student(
    contact: str,
    service: StudentService = Depends(get_student_service),
    current_user: UserResponse = Depends(get_current_user),
):
    ensure_can_read(current_user, contact)
    student = service.get_student(contact)
    if not student:
        raise HTTPException(status_code=404, detail="Student not found")
    return student


@router.put("/{contact}", response_model=Student)
def update_student(
    contact: str,
    update: StudentUpdate,
    service: StudentService = Depends(get_student_service),
    _: UserResponse = Depends(require_teacher),
):
    student = service.update_student(contact, update)
    if not student:
        raise HTTPException(status_code=404, detail="Student not found")
    return student


@router.delete("/{contact}", status_code=204)
def delete_student(
    contact: str,
    service: StudentService = Depends(get_student_service),
    _: UserResponse = Depends(require_teacher),
):
    if not service.delete_student(contact):
        raise HTTPException(status_code=404, detail="Student not found")
    return Response(status_code=204)
