import logging

from fastapi import Request

from maktab.storage.base import StorageBackend
from maktab.storage.document_store import DocumentStore
from maktab.storage.local_store import LocalStore

logger = logging.getLogger(__name__)

# Collection names
STUDENTS = "students"
RESULTS = "results"
ATTENDANCE = "attendance"
CONFIG = "config"
FEES = "fees"
NOTIFICATIONS = "notifications"
FEEDBACK = "feedback"


def build_storage(settings) -> StorageBackend:
    """Pick the storage backend once at startup from the configured settings."""
    if settings.DATABASE_URL:
        from maktab.database import make_session_factory, init_db

        try:
            session_factory = make_session_factory(settings.DATABASE_URL)
            init_db(session_factory)
            logger.info("Using remote document store")
            return DocumentStore(session_factory)
        except Exception as e:
            logger.error(f"Document store init failed, falling back to local store: {e}")
    else:
        logger.warning("No DATABASE_URL configured. Running on the local store.")
    return LocalStore(
        settings.LOCAL_STORE_DIR,
        app_id=settings.APP_ID,
        latency_ms=settings.LOCAL_STORE_LATENCY_MS,
    )


def get_storage(request: Request) -> StorageBackend:
    """FastAPI dependency returning the backend selected at startup."""
    return request.app.state.storage


__all__ = [
    "StorageBackend", "DocumentStore", "LocalStore", "build_storage", "get_storage",
    "STUDENTS", "RESULTS", "ATTENDANCE", "CONFIG", "FEES", "NOTIFICATIONS", "FEEDBACK",
]
