"""
Domain error taxonomy shared by the store, synchronizer and migrator.

Every error carries a machine-readable ``kind`` and a human message; the
FastAPI app turns them into structured JSON responses with the matching
status code.
"""
from typing import Optional

from sqlalchemy import exc as sa_exc


class LedgerError(Exception):
    """Base class for all domain errors."""

    kind = "error"
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(LedgerError):
    """A required field is missing or a value is not acceptable."""

    kind = "validation_error"
    status_code = 400


class AuthError(LedgerError):
    """Missing, invalid or expired bearer credential."""

    kind = "auth_error"
    status_code = 401


class NotFoundError(LedgerError):
    """Referenced user or row does not exist."""

    kind = "not_found"
    status_code = 404


class SchemaMissingError(LedgerError):
    """A table or column the code relies on is absent from the live schema."""

    kind = "schema_missing"
    status_code = 500


class StoreError(LedgerError):
    """Opaque backend failure."""

    kind = "store_error"
    status_code = 500


# Wordings used by SQLite, PostgreSQL and MySQL for absent tables/columns
_MISSING_SCHEMA_MARKERS = (
    "no such table",
    "no such column",
    "does not exist",
    "doesn't exist",
    "unknown column",
    "has no column named",
    "undefinedtable",
    "undefinedcolumn",
)

_ALREADY_EXISTS_MARKERS = (
    "already exists",
    "duplicate column",
    "duplicate key name",
    "duplicatetable",
    "duplicatecolumn",
)


def _message_of(exc: BaseException) -> str:
    orig = getattr(exc, "orig", None)
    parts = [str(exc)]
    if orig is not None:
        parts.append(type(orig).__name__)
        parts.append(str(orig))
    return " ".join(parts).lower()


def is_schema_missing(exc: BaseException) -> bool:
    """Whether a database error means a table or column is absent."""
    if not isinstance(exc, (sa_exc.OperationalError, sa_exc.ProgrammingError)):
        return False
    message = _message_of(exc)
    return any(marker in message for marker in _MISSING_SCHEMA_MARKERS)


def is_already_exists(exc: BaseException) -> bool:
    """Whether a DDL error is the benign "already exists" race."""
    message = _message_of(exc)
    return any(marker in message for marker in _ALREADY_EXISTS_MARKERS)


def translate_db_error(exc: Exception, context: Optional[str] = None) -> LedgerError:
    """Map a SQLAlchemy exception onto the domain taxonomy."""
    if isinstance(exc, LedgerError):
        return exc
    prefix = f"{context}: " if context else ""
    if is_schema_missing(exc):
        return SchemaMissingError(f"{prefix}{exc}")
    if isinstance(exc, sa_exc.TimeoutError):
        return StoreError(f"{prefix}database connection pool exhausted")
    return StoreError(f"{prefix}{exc}")
