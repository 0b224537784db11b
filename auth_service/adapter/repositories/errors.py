import logging
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError

from auth_service.domain.errors import StoreError, StoreErrorKind

logger = logging.getLogger(__name__)


@contextmanager
def store_errors(operation: str):
    """Translate SQLAlchemy failures into StoreError(IO_FAILURE)"""
    try:
        yield
    except SQLAlchemyError as exc:
        logger.error(f"Store failure during {operation}: {exc.__class__.__name__}")
        raise StoreError(StoreErrorKind.IO_FAILURE, f"{operation} failed") from exc
