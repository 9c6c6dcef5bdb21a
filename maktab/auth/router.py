import logging

from fastapi import APIRouter, Depends, HTTPException

from maktab.auth.dependencies import get_current_user
from maktab.auth.schemas import LoginRequest, LoginResponse, UserResponse
from maktab.auth.service import auth_service
from maktab.config.school_config import SchoolConfig
from maktab.dependencies import get_school_config
from maktab.exceptions import StorageError
from maktab.storage import StorageBackend, get_storage

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/auth",
    tags=["authentication"]
)


@router.post("/login", response_model=LoginResponse)
def login(
    request: LoginRequest,
    storage: StorageBackend = Depends(get_storage),
    config: SchoolConfig = Depends(get_school_config),
):
    """
    Log in with a contact number. Admin contacts get the teacher role.
    """
    try:
        user = auth_service.login(storage, config, request.contact)
    except StorageError as e:
        logger.error(f"Login error: {e}")
        raise HTTPException(status_code=503, detail=str(e))

    if user is None:
        raise HTTPException(status_code=401, detail="No student registered with this contact number")

    return {
        'success': True,
        'message': 'Login successful',
        'user': user,
    }


@router.get("/me", response_model=UserResponse)
def read_users_me(current_user: UserResponse = Depends(get_current_user)):
    return current_user
