"""
Purpose: Aggregate numbers for the statistics tiles.
Always computed from the full session list, independent of the current
filter/search/sort, so the UI and controller never duplicate the math.
"""

from __future__ import annotations
import math
from typing import Any, Iterable

from ..models import Session, SessionStats


def _as_minutes(value: Any) -> int:
    """Non-numeric or missing durations count as zero."""
    if isinstance(value, bool) or value is None:
        return 0
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return 0


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def completion_rate(completed: int, total: int) -> int:
    if total <= 0:
        return 0
    return round_half_up(completed / total * 100)


def compute_stats(sessions: Iterable[Session]) -> SessionStats:
    items = list(sessions)
    total = len(items)
    completed = sum(1 for s in items if s.completed is True)
    return SessionStats(
        total_sessions=total,
        total_minutes=sum(_as_minutes(s.duration) for s in items),
        completed_count=completed,
        pending_count=total - completed,
        completion_rate=completion_rate(completed, total),
    )


def format_minutes(minutes: int) -> str:
    """Format minutes as Hh MMm, skipping hours if zero."""
    minutes = int(max(0, minutes))
    h, m = divmod(minutes, 60)
    if h:
        return f"{h}h {m:02d}m"
    return f"{m}m"
