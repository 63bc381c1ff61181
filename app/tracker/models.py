"""
Canonical data shapes, shared truth for typing/validation between layers.

Typical contents:
- Session (id, subject, duration, date, notes, completed).
- SessionInput / SessionFields (raw form values vs. validated values).
- View parameters (StatusFilter, SortSpec, ViewParams) and EditState.

Testing: Trivial; mostly types. Validation lives in services.validation.
"""

from __future__ import annotations
from dataclasses import dataclass, field, asdict, replace
from datetime import date
from typing import Optional, Union
from enum import Enum


class StatusFilter(str, Enum):
    ALL = "all"
    COMPLETED = "completed"
    PENDING = "pending"


class SortKey(str, Enum):
    SUBJECT = "subject"
    DURATION = "duration"
    DATE = "date"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


class EditState(str, Enum):
    CLOSED = "closed"
    EDITING = "editing"
    CLOSING = "closing"


class EmptyState(str, Enum):
    NO_SESSIONS = "no_sessions"
    NO_MATCH = "no_match"


@dataclass(frozen=True)
class Session:
    id: int
    subject: str
    duration: int
    date: str
    notes: str = ""
    completed: bool = False

    def to_dict(self) -> dict:
        return asdict(self)

    def with_fields(self, fields: "SessionFields") -> "Session":
        """Copy with the user-editable fields replaced; id and completed are kept."""
        return replace(
            self,
            subject=fields.subject,
            duration=fields.duration,
            date=fields.date,
            notes=fields.notes,
        )


@dataclass
class SessionInput:
    """Raw values as they come from a form. Nothing here is trusted yet."""

    subject: Optional[str] = ""
    duration: Union[int, str, None] = ""
    date: Union[str, date, None] = ""
    notes: Optional[str] = ""


@dataclass(frozen=True)
class SessionFields:
    """Validated, normalized values ready to be stored."""

    subject: str
    duration: int
    date: str
    notes: str = ""


@dataclass(frozen=True)
class SortSpec:
    key: SortKey = SortKey.DATE
    direction: SortDirection = SortDirection.ASC


@dataclass(frozen=True)
class SessionStats:
    total_sessions: int
    total_minutes: int
    completed_count: int
    pending_count: int
    completion_rate: int


@dataclass
class ViewParams:
    status: StatusFilter = StatusFilter.ALL
    search: str = ""
    sort: SortSpec = field(default_factory=SortSpec)
