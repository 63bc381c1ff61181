"""
Purpose: Guardrails for session input.
Content: early, predictable failures; a record that fails here never reaches
the store or the storage slot. Used by create, update and edit-commit alike.
"""

from __future__ import annotations
from datetime import date, datetime

from ..models import SessionFields, SessionInput


class SessionValidationError(ValueError):
    """Raised when required session fields are missing or invalid."""


def _clean_subject(value) -> str:
    subject = (value or "").replace("\x00", "").strip()
    if not subject:
        raise SessionValidationError("Subject, duration and date are required.")
    return subject


def _clean_duration(value) -> int:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise SessionValidationError("Subject, duration and date are required.")
    if isinstance(value, bool):
        raise SessionValidationError("Duration must be a whole number of minutes.")
    try:
        minutes = int(str(value).strip()) if isinstance(value, str) else int(value)
    except (TypeError, ValueError, OverflowError):
        raise SessionValidationError("Duration must be a whole number of minutes.")
    if isinstance(value, float) and value != minutes:
        raise SessionValidationError("Duration must be a whole number of minutes.")
    if minutes <= 0:
        raise SessionValidationError("Duration must be at least 1 minute.")
    return minutes


def _clean_date(value) -> str:
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    text = (value or "").strip()
    if not text:
        raise SessionValidationError("Subject, duration and date are required.")
    try:
        return date.fromisoformat(text).isoformat()
    except ValueError:
        raise SessionValidationError(f"Date must be in YYYY-MM-DD format, got {text!r}.")


def _clean_notes(value) -> str:
    # Notes are free text and kept as typed
    return value or ""


class DefaultValidator:
    def validate(self, data: SessionInput) -> SessionFields:
        """Normalize raw form values or raise SessionValidationError."""
        return SessionFields(
            subject=_clean_subject(data.subject),
            duration=_clean_duration(data.duration),
            date=_clean_date(data.date),
            notes=_clean_notes(data.notes),
        )
