from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from typing import Optional
import logging
from mangum import Mangum

from maktab.attendance import router as attendance_router
from maktab.auth import router as auth_router
from maktab.config import router as config_router
from maktab.config.school_config import SchoolConfig, load_school_config
from maktab.config.settings import settings
from maktab.exceptions import StorageError
from maktab.feedback import router as feedback_router
from maktab.fees import router as fees_router
from maktab.health import router as health_router
from maktab.notifications import router as notifications_router
from maktab.results import router as results_router
from maktab.storage import StorageBackend, build_storage
from maktab.students import router as students_router
from maktab.subjects import router as subjects_router
from maktab.uploads import router as uploads_router
from maktab.uploads.service import UploadService

# Configure logging for Lambda
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[logging.StreamHandler()]
)

# Prevent duplicate logs from uvicorn when running locally
if settings.APP_ENV != 'development':
    logging.getLogger("uvicorn.access").propagate = False
    logging.getLogger("uvicorn.error").propagate = False

logger = logging.getLogger(__name__)


def create_app(
    storage: Optional[StorageBackend] = None,
    school_config: Optional[SchoolConfig] = None,
    upload_service: Optional[UploadService] = None,
) -> FastAPI:
    """Create and configure a FastAPI application.

    The storage backend is chosen here, once, and shared by every request.
    """
    logger.info(f"Creating FastAPI app - Environment: {settings.APP_ENV}")

    app = FastAPI(
        title=settings.API_TITLE,
        description=settings.API_DESCRIPTION,
        version=settings.API_VERSION,
        docs_url=settings.API_DOCS_URL,
        redoc_url=settings.API_REDOC_URL,
        openapi_url=settings.API_OPENAPI_URL
    )

    app.state.storage = storage if storage is not None else build_storage(settings)
    app.state.school_config = school_config if school_config is not None else load_school_config()
    app.state.upload_service = upload_service if upload_service is not None else UploadService()
    logger.info(f"Storage backend: {app.state.storage.name}")

    @app.exception_handler(StorageError)
    async def storage_error_handler(request: Request, exc: StorageError):
        logger.error(f"Storage error on {request.url.path}: {exc}")
        return JSONResponse(status_code=503, content={"detail": str(exc)})

    # Build allowed origins list
    allowed_origins = [
        "http://localhost:3000",
        "http://localhost:5173",
    ]
    if settings.FRONTEND_URL:
        allowed_origins.append(settings.FRONTEND_URL.rstrip("/"))
    if settings.ALLOW_ALL_ORIGINS:
        allowed_origins = ["*"]

    logger.info(f"CORS allowed origins: {allowed_origins}")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    app.include_router(auth_router.router)
    app.include_router(students_router.router)
    app.include_router(subjects_router.router)
    app.include_router(results_router.router)
    app.include_router(attendance_router.router)
    app.include_router(fees_router.router)
    app.include_router(notifications_router.router)
    app.include_router(feedback_router.router)
    app.include_router(uploads_router.router)
    app.include_router(config_router.router)
    app.include_router(health_router.router)

    logger.info("FastAPI app created successfully")
    return app


def create_handler():
    """Lambda entry point; wraps the app with Mangum."""
    return Mangum(create_app())


# For local development
if __name__ == '__main__':
    import uvicorn

    port = settings.PORT
    print(f"Starting FastAPI server on port {port}...")
    print(f"Environment: {settings.APP_ENV}")
    print(f"API Documentation: http://localhost:{port}{settings.API_DOCS_URL}")

    uvicorn.run(create_app(),
                host="0.0.0.0",
                port=port,
                log_level="info",
                access_log=False)
