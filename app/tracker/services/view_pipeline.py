"""
Purpose: Derived view of the session list for display.
Stage order is fixed: status filter -> search filter -> sort.

Everything here is a pure function of (sessions, status, search, sort).
The source sequence is never reordered or mutated; a fresh tuple comes back.
cached_view is the same computation behind an LRU cache keyed on the
(hashable) inputs. It only saves work; results are identical.
"""

from __future__ import annotations
from datetime import date
from functools import lru_cache
from typing import Callable, Iterable, Optional, Sequence

from ..models import (
    EmptyState,
    Session,
    SortDirection,
    SortKey,
    SortSpec,
    StatusFilter,
    ViewParams,
)

EPOCH = date(1970, 1, 1)
VIEW_CACHE_SIZE = 64


def filter_by_status(sessions: Iterable[Session], status: StatusFilter) -> list[Session]:
    status = StatusFilter(status)
    if status is StatusFilter.COMPLETED:
        return [s for s in sessions if s.completed is True]
    if status is StatusFilter.PENDING:
        return [s for s in sessions if s.completed is False]
    return list(sessions)


def filter_by_search(sessions: Iterable[Session], term: Optional[str]) -> list[Session]:
    needle = (term or "").strip().casefold()
    if not needle:
        return list(sessions)
    return [
        s
        for s in sessions
        if needle in (s.subject or "").casefold() or needle in (s.notes or "").casefold()
    ]


def _date_key(session: Session) -> date:
    try:
        return date.fromisoformat((session.date or "").strip())
    except ValueError:
        return EPOCH


def _duration_key(session: Session) -> int:
    try:
        return int(session.duration)
    except (TypeError, ValueError, OverflowError):
        return 0


SORT_KEYS: dict[SortKey, Callable[[Session], object]] = {
    SortKey.SUBJECT: lambda s: (s.subject or "").casefold(),
    SortKey.DURATION: _duration_key,
    SortKey.DATE: _date_key,
}


def sort_sessions(sessions: Iterable[Session], spec: SortSpec) -> list[Session]:
    """Stable in both directions: sorted(reverse=True) keeps ties in input order."""
    key_fn = SORT_KEYS[SortKey(spec.key)]
    reverse = SortDirection(spec.direction) is SortDirection.DESC
    return sorted(sessions, key=key_fn, reverse=reverse)


def derive_view(
    sessions: Sequence[Session],
    status: StatusFilter = StatusFilter.ALL,
    search: str = "",
    sort: SortSpec = SortSpec(),
) -> tuple[Session, ...]:
    filtered = filter_by_status(sessions, status)
    searched = filter_by_search(filtered, search)
    return tuple(sort_sessions(searched, sort))


@lru_cache(maxsize=VIEW_CACHE_SIZE)
def cached_view(
    sessions: tuple[Session, ...],
    status: StatusFilter,
    search: str,
    sort: SortSpec,
) -> tuple[Session, ...]:
    return derive_view(sessions, status, search, sort)


def view_for(sessions: Sequence[Session], params: ViewParams) -> tuple[Session, ...]:
    return cached_view(tuple(sessions), StatusFilter(params.status), params.search, params.sort)


def next_sort(current: SortSpec, key: SortKey) -> SortSpec:
    """Same key again flips direction; a different key starts ascending."""
    key = SortKey(key)
    if SortKey(current.key) is key:
        flipped = (
            SortDirection.DESC
            if SortDirection(current.direction) is SortDirection.ASC
            else SortDirection.ASC
        )
        return SortSpec(key=key, direction=flipped)
    return SortSpec(key=key, direction=SortDirection.ASC)


def empty_state(
    sessions: Sequence[Session], view: Sequence[Session]
) -> Optional[EmptyState]:
    if not sessions:
        return EmptyState.NO_SESSIONS
    if not view:
        return EmptyState.NO_MATCH
    return None
