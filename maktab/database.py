import logging
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)

Base = declarative_base()


def make_session_factory(database_url: str) -> sessionmaker:
    """Create an engine for the document store and return a session factory bound to it."""
    engine_kwargs = {}
    if database_url.startswith("sqlite") and ":memory:" in database_url:
        # Keep one shared connection so every session sees the same in-memory database
        engine_kwargs = {"connect_args": {"check_same_thread": False}, "poolclass": StaticPool}
    engine = create_engine(database_url, **engine_kwargs)
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(session_factory: sessionmaker):
    """Initialize the database using the schema defined by SQLAlchemy models."""
    try:
        # Import all models here before calling create_all
        from maktab import models  # noqa: F401

        engine = session_factory.kw["bind"]
        logger.info("Attempting to create document store tables...")
        Base.metadata.create_all(bind=engine)
        logger.info("Document store tables created successfully (if they didn't exist)")
    except Exception as e:
        logger.error(f"Database initialization error: {e}")
        raise
