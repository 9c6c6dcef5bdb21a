from typing import Optional

from fastapi import Depends, Header, HTTPException

from maktab.auth.schemas import UserResponse
from maktab.auth.service import auth_service
from maktab.config.school_config import SchoolConfig
from maktab.dependencies import get_school_config
from maktab.storage import StorageBackend, get_storage


def get_current_user(
    authorization: Optional[str] = Header(None),
    storage: StorageBackend = Depends(get_storage),
    config: SchoolConfig = Depends(get_school_config),
) -> UserResponse:
    """
    Resolve the 'Authorization: Bearer <contact>' header to a user.
    """
    if not authorization or not authorization.startswith('Bearer '):
        raise HTTPException(status_code=401, detail="Unauthorized: Missing or invalid Bearer token format")

    parts = authorization.split(' ')
    if len(parts) != 2 or not parts[1]:
        raise HTTPException(status_code=401, detail="Unauthorized: Invalid token content")

    user = auth_service.login(storage, config, parts[1])
    if user is None:
        raise HTTPException(status_code=401, detail="Unauthorized: User not found")
    return user


def require_teacher(current_user: UserResponse = Depends(get_current_user)) -> UserResponse:
    if not current_user.is_teacher:
        raise HTTPException(status_code=403, detail="Only teachers can do this")
    return current_user


def ensure_can_read(current_user: UserResponse, student_id: str):
    """Students may only read their own records; teachers may read anyone's."""
    if not current_user.is_teacher and current_user.id != student_id:
        raise HTTPException(status_code=403, detail="You can only view your own records")
