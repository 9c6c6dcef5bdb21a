from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response

from maktab.auth.dependencies import require_teacher
from maktab.auth.schemas import UserResponse
from maktab.dependencies import get_feedback_service
from maktab.feedback import schemas
from maktab.feedback.service import FeedbackService

router = APIRouter(
    prefix="/api/feedback",
    tags=["feedback"],
    responses={404: {"description": "Not found"}},
)


@router.post("", response_model=schemas.FeedbackRead, status_code=201)
def create_feedback(
    feedback: schemas.FeedbackCreate,
    service: FeedbackService = Depends(get_feedback_service),
):
    """
    Leave feedback for the school. No login needed.
    """
    return service.add_feedback(feedback)


@router.get("", response_model=List[schemas.FeedbackRead])
def list_feedback(
    service: FeedbackService = Depends(get_feedback_service),
    _: UserResponse = Depends(require_teacher),
):
    return service.get_feedback()


@router.delete("/{feedback_id}", status_code=204)
def delete_feedback(
    feedback_id: str,
    service: FeedbackService = Depends(get_feedback_service),
    _: UserResponse = Depends(require_teacher),
):
    if not service.delete_feedback(feedback_id):
        raise HTTPException(status_code=404, detail="Feedback not found")
    return Response(status_code=204)
