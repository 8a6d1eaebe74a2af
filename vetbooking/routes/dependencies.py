import logging

from fastapi import HTTPException, status
from sqlalchemy.exc import SQLAlchemyError

from vetbooking.core.errors import InternalError
from vetbooking.database import SessionLocal, ensure_booking_schema

logger = logging.getLogger(__name__)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def database_unavailable(exc: Exception) -> HTTPException:
    logger.error('Database operation failed', exc_info=exc)
    return InternalError().to_http()


def ensure_database_ready() -> None:
    try:
        ensure_booking_schema()
    except SQLAlchemyError as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail='Database unavailable. Verify DATABASE_URL and database credentials.',
        ) from exc
