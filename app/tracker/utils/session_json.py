"""Utilities for robustly encoding/decoding the persisted session list."""

from __future__ import annotations
import json
import logging
from typing import Any, Optional, Sequence

from ..models import Session

logger = logging.getLogger(__name__)


def _coerce_minutes(value: Any) -> int:
    """Durations from older or hand-edited slots may be strings or junk."""
    if isinstance(value, bool):
        return 0
    try:
        return max(0, int(float(value)))
    except (TypeError, ValueError, OverflowError):
        return 0


def session_from_dict(raw: Any) -> Optional[Session]:
    """
    Build a Session from one decoded JSON entry.
    - Returns None if the entry is not an object or has no usable id.
    - Missing notes/completed fall back to their defaults; completed must be a
      JSON boolean.
    """
    if not isinstance(raw, dict):
        return None
    try:
        session_id = int(raw.get("id"))
    except (TypeError, ValueError, OverflowError):
        return None

    completed = raw.get("completed")
    return Session(
        id=session_id,
        subject=str(raw.get("subject") or ""),
        duration=_coerce_minutes(raw.get("duration")),
        date=str(raw.get("date") or ""),
        notes=str(raw.get("notes") or ""),
        # Only a real JSON boolean counts; "false" or 1 stay pending
        completed=completed if isinstance(completed, bool) else False,
    )


def decode_sessions(text: str) -> Optional[list[Session]]:
    """
    Parse a serialized session list.
    Returns None when the text is empty, not JSON, or not a JSON array, so the
    caller can fall back to seed data. Malformed entries and duplicate ids are
    skipped with a warning.
    """
    if not text or not text.strip():
        return None
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        logger.warning("Persisted sessions are not valid JSON; ignoring slot")
        return None
    if not isinstance(data, list):
        logger.warning("Persisted sessions are not a JSON array; ignoring slot")
        return None

    sessions: list[Session] = []
    seen: set[int] = set()
    for idx, raw in enumerate(data):
        session = session_from_dict(raw)
        if session is None:
            logger.warning("Skipping malformed session entry at index %d", idx)
            continue
        if session.id in seen:
            logger.warning("Skipping duplicate session id %d", session.id)
            continue
        seen.add(session.id)
        sessions.append(session)
    return sessions


def encode_sessions(sessions: Sequence[Session]) -> str:
    return json.dumps([s.to_dict() for s in sessions], ensure_ascii=False, indent=2)
