"""
Purpose: Authoritative in-memory list of study sessions.
Every mutation builds a new list and swaps it in, so snapshots handed to the
view pipeline or statistics are never changed underneath them.

Not-found ids are silent no-ops (methods return False). Invalid input raises
SessionValidationError before anything is touched.

Testing: Pure unit tests; no storage or UI involved.
"""

from __future__ import annotations
import itertools
import logging
from dataclasses import replace
from typing import Iterable, Optional

from .interfaces import SessionValidator
from .models import Session, SessionInput
from .services.validation import DefaultValidator

logger = logging.getLogger(__name__)


class SessionStore:
    def __init__(
        self,
        sessions: Iterable[Session] = (),
        validator: Optional[SessionValidator] = None,
    ) -> None:
        self.validator: SessionValidator = validator or DefaultValidator()
        self._sessions: list[Session] = []
        self._ids = itertools.count(1)
        self.replace_all(sessions)

    def __len__(self) -> int:
        return len(self._sessions)

    def snapshot(self) -> tuple[Session, ...]:
        """Read-only view of the canonical list, in insertion order."""
        return tuple(self._sessions)

    def get(self, session_id: int) -> Optional[Session]:
        return next((s for s in self._sessions if s.id == session_id), None)

    def _next_id(self) -> int:
        return next(self._ids)

    def replace_all(self, sessions: Iterable[Session]) -> None:
        """Swap in a whole new list; ids issued later stay above every id present."""
        new_list = list(sessions)
        ids = [s.id for s in new_list]
        if len(ids) != len(set(ids)):
            raise ValueError("Session ids must be unique.")
        self._sessions = new_list
        self._ids = itertools.count(max(ids, default=0) + 1)

    def create(self, data: SessionInput) -> Session:
        fields = self.validator.validate(data)
        session = Session(
            id=self._next_id(),
            subject=fields.subject,
            duration=fields.duration,
            date=fields.date,
            notes=fields.notes,
            completed=False,
        )
        self._sessions = [*self._sessions, session]
        logger.info("Created session %d (%s)", session.id, session.subject)
        return session

    def update(self, session_id: int, data: SessionInput) -> bool:
        fields = self.validator.validate(data)
        if self.get(session_id) is None:
            logger.debug("Ignoring update for missing session %s", session_id)
            return False
        self._sessions = [
            s.with_fields(fields) if s.id == session_id else s for s in self._sessions
        ]
        logger.info("Updated session %d", session_id)
        return True

    def toggle_completed(self, session_id: int) -> bool:
        if self.get(session_id) is None:
            logger.debug("Ignoring toggle for missing session %s", session_id)
            return False
        self._sessions = [
            replace(s, completed=not s.completed)
            if s.id == session_id
            else s
            for s in self._sessions
        ]
        return True

    def delete(self, session_id: int) -> bool:
        remaining = [s for s in self._sessions if s.id != session_id]
        if len(remaining) == len(self._sessions):
            logger.debug("Ignoring delete for missing session %s", session_id)
            return False
        self._sessions = remaining
        logger.info("Deleted session %d", session_id)
        return True
