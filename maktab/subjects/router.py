from typing import List

from fastapi import APIRouter, Depends, HTTPException

from maktab.auth.dependencies import get_current_user, require_teacher
from maktab.auth.schemas import UserResponse
from maktab.dependencies import get_subject_service
from maktab.subjects.schemas import SubjectConfig, SubjectsUpdate
from maktab.subjects.service import SubjectService

router = APIRouter(
    prefix="/api/subjects",
    tags=["subjects"],
)


@router.get("", response_model=List[SubjectConfig])
def get_subjects(
    service: SubjectService = Depends(get_subject_service),
    _: UserResponse = Depends(get_current_user),
):
    return service.get_subjects()


@router.put("", response_model=List[SubjectConfig])
def update_subjects(
    payload: SubjectsUpdate,
    service: SubjectService = Depends(get_subject_service),
    _: UserResponse = Depends(require_teacher),
):
    """Replace the subject list. Results already saved are not recalculated."""
    try:
        return service.update_subjects(payload.subjects)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
