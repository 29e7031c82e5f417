from contextlib import contextmanager

from fastapi import HTTPException, status
from sqlalchemy.exc import SQLAlchemyError

from booksmart.records.client import RecordClientError
from booksmart.services.common import BookingServiceError

STORE_UNAVAILABLE_DETAIL = 'Record store unavailable. Verify DATABASE_URL.'


@contextmanager
def record_store_errors(action: str):
    """Turn record client failures into the message shown to the user."""
    try:
        yield
    except (BookingServiceError, RecordClientError) as exc:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f'Failed to {action}: {exc}',
        ) from exc
    except SQLAlchemyError as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=STORE_UNAVAILABLE_DETAIL,
        ) from exc
