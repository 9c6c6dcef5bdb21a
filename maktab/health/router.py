import time
import logging
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from maktab.config.settings import settings
from maktab.exceptions import StorageError
from maktab.storage import STUDENTS, StorageBackend, get_storage

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api",
    tags=["health"]
)


class HealthResponse(BaseModel):
    status: str
    environment: str
    storage: str
    timestamp: float


@router.get("/health", response_model=HealthResponse)
def health_check(storage: StorageBackend = Depends(get_storage)):
    """Health check endpoint to verify the API and its store are reachable"""
    response = {
        'status': 'healthy',
        'environment': settings.APP_ENV,
        'storage': storage.name,
        'timestamp': time.time()
    }
    try:
        storage.get(STUDENTS, "__health__")
    except StorageError as e:
        logger.error(f"Health check failed: {e}")
        response['status'] = 'unhealthy'
        return JSONResponse(content=response, status_code=503)

    logger.info(f"Health check response: {response}")
    return response
