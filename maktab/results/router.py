from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from maktab.auth.dependencies import ensure_can_read, get_current_user, require_teacher
from maktab.auth.schemas import UserResponse
from maktab.dependencies import get_result_service
from maktab.results.schemas import (
    BulkMarksRequest, FullResultRequest, Marksheet, RankResponse, StudentResult, SubjectMarkUpdate,
)
from maktab.results.service import ResultService
from maktab.schemas import BatchResult

router = APIRouter(
    prefix="/api/results",
    tags=["results"],
)


@router.get("", response_model=List[StudentResult])
def get_results(
    student_id: Optional[str] = Query(None),
    service: ResultService = Depends(get_result_service),
    current_user: UserResponse = Depends(get_current_user),
):
    if not current_user.is_teacher:
        student_id = current_user.id
    return service.get_results(student_id)


@router.get("/exams", response_model=List[str])
def list_exam_names(
    student_id: Optional[str] = Query(None),
    service: ResultService = Depends(get_result_service),
    current_user: UserResponse = Depends(get_current_user),
):
    if not current_user.is_teacher:
        student_id = current_user.id
    return service.list_exam_names(student_id)


@router.put("/marks", response_model=StudentResult)
def upsert_subject_marks(
    update: SubjectMarkUpdate,
    service: ResultService = Depends(get_result_service),
    _: UserResponse = Depends(require_teacher),
):
    """Enter one subject's marks; the whole result is recalculated."""
    return service.upsert_single_subject_marks(
        update.student_id, update.exam_name, update.subject_name, update.marks
    )


@router.post("/bulk", response_model=BatchResult)
def bulk_update_marks(
    payload: BulkMarksRequest,
    service: ResultService = Depends(get_result_service),
    _: UserResponse = Depends(require_teacher),
):
    return service.bulk_update_marks(payload.exam_name, payload.subject_name, payload.updates)


@router.put("", response_model=StudentResult)
def upsert_full_result(
    payload: FullResultRequest,
    service: ResultService = Depends(get_result_service),
    _: UserResponse = Depends(require_teacher),
):
    return service.upsert_full_result(payload.student_id, payload.exam_name, payload.marks)


@router.get("/{student_id}/{exam_name}", response_model=StudentResult)
def get_result(
    student_id: str,
    exam_name: str,
    service: ResultService = Depends(get_result_service),
    current_user: UserResponse = Depends(get_current_user),
):
    ensure_can_read(current_user, student_id)
    result = service.get_result(student_id, exam_name)
    if not result:
        raise HTTPException(status_code=404, detail="Result not found")
    return result


@router.get("/{student_id}/{exam_name}/rank", response_model=RankResponse)
def get_rank(
    student_id: str,
    exam_name: str,
    service: ResultService = Depends(get_result_service),
    current_user: UserResponse = Depends(get_current_user),
):
    ensure_can_read(current_user, student_id)
    result = service.get_result(student_id, exam_name)
    if not result:
        raise HTTPException(status_code=404, detail="Result not found")
    return RankResponse(
        student_id=student_id,
        exam_name=result.exam_name,
        total_marks=result.total_marks,
        rank=service.rank_of(result.exam_name, result.total_marks),
    )


@router.get("/{student_id}/{exam_name}/marksheet", response_model=Marksheet)
def get_marksheet(
    student_id: str,
    exam_name: str,
    service: ResultService = Depends(get_result_service),
    current_user: UserResponse = Depends(get_current_user),
):
    ensure_can_read(current_user, student_id)
    marksheet = service.build_marksheet(student_id, exam_name)
    if not marksheet:
        raise HTTPException(status_code=404, detail="Result not found")
    return marksheet
