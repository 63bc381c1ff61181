from tracker.models import Session
from tracker.seed import seed_sessions
from tracker.services.statistics import (
    completion_rate,
    compute_stats,
    format_minutes,
)


def test_seed_statistics() -> None:
    stats = compute_stats(seed_sessions())

    assert stats.total_sessions == 3
    assert stats.total_minutes == 135
    assert stats.completed_count == 1
    assert stats.pending_count == 2
    assert stats.completion_rate == 33


def test_empty_list_has_zero_rate() -> None:
    stats = compute_stats([])

    assert stats.total_sessions == 0
    assert stats.total_minutes == 0
    assert stats.completion_rate == 0


def test_non_numeric_duration_counts_as_zero() -> None:
    sessions = [
        Session(id=1, subject="A", duration=20, date="2025-01-01"),
        Session(id=2, subject="B", duration="abc", date="2025-01-01"),
        Session(id=3, subject="C", duration=None, date="2025-01-01"),
    ]
    assert compute_stats(sessions).total_minutes == 20


def test_completion_rate_rounds_half_up() -> None:
    assert completion_rate(1, 8) == 13
    assert completion_rate(2, 3) == 67
    assert completion_rate(1, 2) == 50
    assert completion_rate(0, 0) == 0


def test_format_minutes() -> None:
    assert format_minutes(45) == "45m"
    assert format_minutes(135) == "2h 15m"
    assert format_minutes(60) == "1h 00m"
    assert format_minutes(-5) == "0m"
