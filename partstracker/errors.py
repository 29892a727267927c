"""Error taxonomy shared by every service.

Services raise a single exception type, ``ServiceError``, tagged with one
member of the closed ``ErrorKind`` enumeration. Callers branch on the kind
rather than on exception classes.
"""

import enum
from contextlib import contextmanager

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from .extensions import db
from .utils.logging import get_logger

logger = get_logger(__name__)


class ErrorKind(str, enum.Enum):
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    DUPLICATE_USER = "duplicate_user"
    INTEGRITY = "integrity"
    OWNER_REQUIRED = "owner_required"
    STORE_UNAVAILABLE = "store_unavailable"


HTTP_STATUS = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.DUPLICATE_USER: 409,
    ErrorKind.INTEGRITY: 409,
    ErrorKind.OWNER_REQUIRED: 401,
    ErrorKind.STORE_UNAVAILABLE: 503,
}


class ServiceError(Exception):
    def __init__(self, kind: ErrorKind, message: str = None):
        self.kind = ErrorKind(kind)
        self.message = message or self.kind.value
        super().__init__(self.message)

    @property
    def status_code(self) -> int:
        return HTTP_STATUS[self.kind]

    @property
    def is_client_error(self) -> bool:
        return self.status_code < 500

    def __repr__(self):
        return f"ServiceError(kind={self.kind.value!r}, message={self.message!r})"


@contextmanager
def store_guard(operation: str):
    """Roll back and translate storage failures raised inside the block."""
    try:
        yield
    except ServiceError:
        db.session.rollback()
        raise
    except IntegrityError as e:
        db.session.rollback()
        logger.warning("Integrity violation", operation=operation, error=str(e.orig))
        raise ServiceError(ErrorKind.INTEGRITY, "Referenced record is missing or already exists") from e
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error("Database error", operation=operation, error=str(e))
        raise ServiceError(ErrorKind.STORE_UNAVAILABLE, "Error while connecting to database.") from e
