"""Sample sessions shown on first run, or when the storage slot is unusable."""

from __future__ import annotations

from .models import Session

SEED_SESSIONS: tuple[Session, ...] = (
    Session(
        id=1,
        subject="Data Structures & Algorithms",
        duration=60,
        date="2025-12-10",
        completed=False,
    ),
    Session(
        id=2,
        subject="DBMS Revision",
        duration=45,
        date="2025-12-11",
        completed=True,
    ),
    Session(
        id=3,
        subject="Operating Systems",
        duration=30,
        date="2025-12-12",
        completed=False,
    ),
)


def seed_sessions() -> list[Session]:
    return list(SEED_SESSIONS)
