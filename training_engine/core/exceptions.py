import logging
from contextlib import contextmanager
from typing import Optional

from fastapi import HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)


class TrainingError(HTTPException):
    """Base class for errors raised by the training engine."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, detail: str):
        super().__init__(status_code=self.status_code, detail=detail)

    def __str__(self) -> str:
        return self.detail


class TrainingValidationError(TrainingError):
    """Request is missing a required reference; raised before any store call."""
    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(TrainingError):
    status_code = status.HTTP_404_NOT_FOUND


class PreconditionError(TrainingError):
    status_code = status.HTTP_409_CONFLICT


class CertificateInvalidError(PreconditionError):
    pass


class PersistenceError(TrainingError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


@contextmanager
def persistence_guard(message: str, db: Optional[Session] = None):
    """Wrap store failures as PersistenceError, rolling back the session first."""
    try:
        yield
    except SQLAlchemyError as exc:
        logger.error(f"{message}: {exc}")
        if db is not None:
            db.rollback()
        raise PersistenceError(f"{message}: {exc}") from exc
