"""
Database configuration with connection pooling.
"""

from collections.abc import Iterator
from contextlib import contextmanager

from loguru import logger
from sqlalchemy import create_engine
from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import NullPool, QueuePool

from models.config import settings
from models.exceptions import StoreUnavailableException


def create_db_engine():
    """
    Create database engine with appropriate configuration.

    Uses QueuePool for PostgreSQL/MySQL and NullPool for SQLite.
    NullPool opens a new connection per request, avoiding SQLite locking
    problems under concurrent requests.
    """
    is_sqlite = "sqlite" in settings.DATABASE_URL

    if is_sqlite:
        return create_engine(
            settings.DATABASE_URL,
            connect_args={"check_same_thread": False},
            poolclass=NullPool,
        )
    else:
        return create_engine(
            settings.DATABASE_URL,
            poolclass=QueuePool,
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_MAX_OVERFLOW,
            pool_timeout=settings.DB_POOL_TIMEOUT,
            pool_recycle=settings.DB_POOL_RECYCLE,
            pool_pre_ping=True,  # Verify connections before use
        )


engine = create_db_engine()
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    """Get database session with automatic cleanup."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def store_errors(db: Session, operation: str) -> Iterator[None]:
    """
    Translate connectivity failures into StoreUnavailableException.

    The session is rolled back first, so no partial write survives the failure.

    Args:
        db: Database session used inside the block
        operation: Short name of the operation, used in the error message

    Raises:
        StoreUnavailableException: If the store could not be reached
    """
    try:
        yield
    except (OperationalError, InterfaceError) as e:
        db.rollback()
        logger.error(f"Store failure during {operation}: {e!r}")
        raise StoreUnavailableException(operation) from e
