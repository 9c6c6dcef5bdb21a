from fastapi import APIRouter, Depends, File, Form, UploadFile
from pydantic import BaseModel

from maktab.auth.dependencies import require_teacher
from maktab.auth.schemas import UserResponse
from maktab.dependencies import get_upload_service
from maktab.uploads.service import UploadService

router = APIRouter(
    prefix="/api/uploads",
    tags=["uploads"],
)


class UploadResponse(BaseModel):
    url: str


@router.post("", response_model=UploadResponse)
async def upload_file(
    file: UploadFile = File(...),
    folder: str = Form("notifications"),
    service: UploadService = Depends(get_upload_service),
    _: UserResponse = Depends(require_teacher),
):
    """Upload an image or PDF. Falls back to an inline data URL when the upload fails."""
    content = await file.read()
    url = await service.upload_file(content, file.filename or "upload", file.content_type, folder)
    return {"url": url}
