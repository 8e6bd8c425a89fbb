from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.exc import DBAPIError, InterfaceError, OperationalError


class WageEngineError(Exception):
    """Base class for conditions the engine raises to its callers."""

    status_code = 500
    code = "internal_error"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.code)
        self.message = message or self.code


class InvalidInput(WageEngineError):
    """Raised for out-of-range periods and other malformed arguments."""

    status_code = 400
    code = "invalid_input"


class NotFound(WageEngineError):
    """Raised when a calculation or worker does not exist."""

    status_code = 404
    code = "not_found"


class Forbidden(WageEngineError):
    """Raised for cross-organization access or a worker reading another worker's slip."""

    status_code = 403
    code = "forbidden"


class Unavailable(WageEngineError):
    """Raised when the storage collaborator cannot be reached."""

    status_code = 503
    code = "database_unavailable"


@contextmanager
def storage_errors() -> Iterator[None]:
    """Translate driver-level failures into :class:`Unavailable`."""
    try:
        yield
    except (OperationalError, InterfaceError) as exc:
        raise Unavailable() from exc
    except DBAPIError as exc:
        if exc.connection_invalidated:
            raise Unavailable() from exc
        raise
