"""Unified API error body and persistence error classification."""
from __future__ import annotations

from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

# SQLSTATE codes (PostgreSQL)
_UNIQUE_VIOLATION = "23505"
_UNDEFINED_TABLE = "42P01"
_UNDEFINED_COLUMN = "42703"


def error_body(message: str, *, details: str | None = None, trace_id: str | None = None) -> dict:
    out = {"error": message}
    if details:
        out["details"] = details
    if trace_id:
        out["trace_id"] = trace_id
    return out


def error_response(status_code: int, message: str, *, details: str | None = None) -> JSONResponse:
    return JSONResponse(error_body(message, details=details), status_code=status_code)


def _orig_code(exc: SQLAlchemyError) -> str | None:
    orig = getattr(exc, "orig", None)
    return getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)


def is_unique_violation(exc: SQLAlchemyError) -> bool:
    if _orig_code(exc) == _UNIQUE_VIOLATION:
        return True
    msg = str(getattr(exc, "orig", exc)).lower()
    return "unique constraint" in msg or "duplicate key" in msg


def is_missing_table(exc: SQLAlchemyError) -> bool:
    if _orig_code(exc) in (_UNDEFINED_TABLE, _UNDEFINED_COLUMN):
        return True
    msg = str(getattr(exc, "orig", exc)).lower()
    return "no such table" in msg or "no such column" in msg or "does not exist" in msg


SCHEMA_OUTDATED = "Database schema needs to be updated. Please run: alembic upgrade head"


def schema_outdated_response(exc: SQLAlchemyError) -> JSONResponse:
    return error_response(500, SCHEMA_OUTDATED, details=str(getattr(exc, "orig", exc)))


def write_error_response(
    exc: SQLAlchemyError, *, action: str, entity: str, conflict_message: str | None = None
) -> JSONResponse:
    """Map a failed admin write to 400 on a unique conflict, 500 with a migrate hint on a missing table."""
    if conflict_message and is_unique_violation(exc):
        return error_response(400, conflict_message)
    if is_missing_table(exc):
        return schema_outdated_response(exc)
    return error_response(500, f"Failed to {action} {entity}", details=str(exc) or "Unknown error")
