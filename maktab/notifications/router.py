from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response

from maktab.auth.dependencies import require_teacher
from maktab.auth.schemas import UserResponse
from maktab.dependencies import get_notification_service
from maktab.notifications.schemas import Notification, NotificationCreate
from maktab.notifications.service import NotificationService

router = APIRouter(
    prefix="/api/notifications",
    tags=["notifications"],
)


@router.get("", response_model=List[Notification])
def get_notifications(service: NotificationService = Depends(get_notification_service)):
    """Public notice board, newest first."""
    return service.get_notifications()


@router.post("", response_model=Notification, status_code=201)
def add_notification(
    notification: NotificationCreate,
    service: NotificationService = Depends(get_notification_service),
    _: UserResponse = Depends(require_teacher),
):
    return service.add_notification(notification)


@router.delete("/{notification_id}", status_code=204)
def delete_notification(
    notification_id: str,
    service: NotificationService = Depends(get_notification_service),
    _: UserResponse = Depends(require_teacher),
):
    if not service.delete_notification(notification_id):
        raise HTTPException(status_code=404, detail="Notification not found")
    return Response(status_code=204)
