"""
Purpose: Transient editing of one session, decoupled from the canonical list.

State machine: closed -> editing -> closing -> closed.
- open() copies a record's fields into a private EditBuffer.
- set_field() touches the buffer only.
- save() validates like create/update; on success commits by id and starts
  closing, on failure stays in editing with `error` set.
- cancel()/dismiss() drop the buffer and start closing.
- request_close() is idempotent: one scheduled finalize_close, which acts
  only while the state is still closing.

Testing: Fake commit callback + DeferredScheduler with a fixed clock.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, fields
from typing import Callable, Optional

from .interfaces import Scheduler, SessionValidator
from .models import EditState, Session, SessionFields, SessionInput
from .services.validation import DefaultValidator, SessionValidationError

logger = logging.getLogger(__name__)

CommitFn = Callable[[int, SessionFields], bool]


@dataclass
class EditBuffer:
    session_id: int
    subject: str
    duration: object
    date: object
    notes: str = ""

    @classmethod
    def from_session(cls, session: Session) -> "EditBuffer":
        return cls(
            session_id=session.id,
            subject=session.subject,
            duration=session.duration,
            date=session.date,
            notes=session.notes or "",
        )

    def to_input(self) -> SessionInput:
        return SessionInput(
            subject=self.subject,
            duration=self.duration,
            date=self.date,
            notes=self.notes,
        )


EDITABLE_FIELDS = frozenset(f.name for f in fields(EditBuffer)) - {"session_id"}


class EditSessionWorkflow:
    def __init__(
        self,
        commit: CommitFn,
        scheduler: Scheduler,
        *,
        close_delay: float = 0.0,
        validator: Optional[SessionValidator] = None,
    ) -> None:
        self.commit = commit
        self.scheduler = scheduler
        self.close_delay = close_delay
        self.validator: SessionValidator = validator or DefaultValidator()
        self.state = EditState.CLOSED
        self.buffer: Optional[EditBuffer] = None
        self.error: Optional[str] = None
        self.close_reason: Optional[str] = None

    @property
    def is_editing(self) -> bool:
        return self.state is EditState.EDITING

    @property
    def background_locked(self) -> bool:
        """True while the editor is up; list actions behind it should be disabled."""
        return self.state is not EditState.CLOSED

    def open(self, session: Session) -> EditBuffer:
        if self.state is not EditState.CLOSED:
            raise RuntimeError(f"Cannot open editor while {self.state.value}.")
        self.buffer = EditBuffer.from_session(session)
        self.error = None
        self.close_reason = None
        self.state = EditState.EDITING
        logger.debug("Editing session %d", session.id)
        return self.buffer

    def set_field(self, name: str, value) -> None:
        if not self.is_editing or self.buffer is None:
            raise RuntimeError("No session is being edited.")
        if name not in EDITABLE_FIELDS:
            raise KeyError(name)
        setattr(self.buffer, name, value)

    def save(self) -> bool:
        """Validate and commit the buffer. Returns the commit result (False if the id vanished)."""
        if not self.is_editing or self.buffer is None:
            return False
        try:
            cleaned = self.validator.validate(self.buffer.to_input())
        except SessionValidationError as e:
            self.error = str(e)
            raise
        self.error = None
        committed = self.commit(self.buffer.session_id, cleaned)
        self.request_close("saved")
        return committed

    def cancel(self) -> None:
        self.request_close("cancelled")

    def dismiss(self) -> None:
        """Escape key or click outside the dialog."""
        self.request_close("dismissed")

    def request_close(self, reason: str) -> bool:
        if self.state is not EditState.EDITING:
            return False
        self.state = EditState.CLOSING
        self.buffer = None
        self.close_reason = reason
        self.scheduler.schedule(self.close_delay, self.finalize_close)
        logger.debug("Edit closing (%s)", reason)
        return True

    def finalize_close(self) -> None:
        if self.state is not EditState.CLOSING:
            return
        self.state = EditState.CLOSED
        self.error = None
