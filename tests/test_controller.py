import pytest

from tracker.config import TrackerConfig
from tracker.controller import StudyTrackerController
from tracker.models import (
    EditState,
    EmptyState,
    Session,
    SessionInput,
    SortDirection,
    SortKey,
    SortSpec,
    StatusFilter,
)
from tracker.persistence.storage import InMemoryStorage, JsonFileStorage, StorageError
from tracker.seed import seed_sessions
from tracker.services.validation import SessionValidationError


class BrokenStorage(InMemoryStorage):
    def save(self, sessions) -> None:
        raise StorageError("disk full")

    def clear(self) -> None:
        raise StorageError("read-only")


def test_starts_from_seed_when_slot_is_empty(controller, storage) -> None:
    assert controller.sessions == tuple(seed_sessions())
    assert storage.saves == 0


def test_starts_from_persisted_list() -> None:
    persisted = [Session(id=10, subject="Saved", duration=15, date="2025-03-03")]
    controller = StudyTrackerController(InMemoryStorage(persisted))

    assert controller.sessions == tuple(persisted)


def test_persisted_empty_list_is_respected() -> None:
    controller = StudyTrackerController(InMemoryStorage([]))

    assert controller.sessions == ()
    assert controller.empty_state() is EmptyState.NO_SESSIONS


def test_add_persists_full_list(controller, storage) -> None:
    controller.add_session(SessionInput(subject="Networks", duration=50, date="2025-12-15"))

    assert storage.saves == 1
    assert storage.load() == list(controller.sessions)


def test_invalid_add_changes_nothing(controller, storage) -> None:
    with pytest.raises(SessionValidationError):
        controller.add_session(SessionInput(subject="Networks", duration="", date="2025-12-15"))

    assert len(controller.sessions) == 3
    assert storage.saves == 0


def test_noop_mutations_do_not_write(controller, storage) -> None:
    assert controller.toggle_completed(999) is False
    assert controller.delete_session(999) is False
    assert controller.update_session(
        999, SessionInput(subject="X", duration=1, date="2025-01-01")
    ) is False

    assert storage.saves == 0


def test_networks_scenario(controller) -> None:
    controller.add_session(SessionInput(subject="Networks", duration=50, date="2025-12-15"))
    assert len(controller.sessions) == 4

    controller.set_filter(StatusFilter.PENDING)
    assert len(controller.visible_sessions()) == 3

    controller.set_filter(StatusFilter.ALL)
    controller.set_sort(SortSpec(SortKey.DURATION, SortDirection.ASC))
    assert [s.duration for s in controller.visible_sessions()] == [30, 45, 50, 60]


def test_search_no_match_state(controller) -> None:
    controller.set_search("zzz")

    assert controller.visible_sessions() == ()
    assert controller.empty_state() is EmptyState.NO_MATCH

    controller.set_search(None)
    assert len(controller.visible_sessions()) == 3
    assert controller.empty_state() is None


def test_view_reflects_mutations(controller) -> None:
    controller.set_filter("completed")
    assert [s.id for s in controller.visible_sessions()] == [2]

    controller.toggle_completed(1)

    assert [s.id for s in controller.visible_sessions()] == [1, 2]


def test_sort_by_toggles_direction(controller) -> None:
    assert controller.sort_by(SortKey.SUBJECT) == SortSpec(SortKey.SUBJECT, SortDirection.ASC)
    assert controller.sort_by(SortKey.SUBJECT) == SortSpec(SortKey.SUBJECT, SortDirection.DESC)
    assert controller.sort_by("duration") == SortSpec(SortKey.DURATION, SortDirection.ASC)


def test_view_never_reorders_canonical_list(controller) -> None:
    controller.set_sort(SortSpec(SortKey.DURATION, SortDirection.ASC))
    controller.visible_sessions()

    assert [s.id for s in controller.sessions] == [1, 2, 3]


def test_stats_ignore_current_view(controller) -> None:
    controller.set_filter(StatusFilter.COMPLETED)
    controller.set_search("dbms")

    stats = controller.stats()

    assert stats.total_sessions == 3
    assert stats.total_minutes == 135
    assert stats.completion_rate == 33


def test_reset_to_seed_clears_slot(controller, storage) -> None:
    controller.add_session(SessionInput(subject="Networks", duration=50, date="2025-12-15"))
    controller.delete_session(1)

    controller.reset_to_seed()

    assert controller.sessions == tuple(seed_sessions())
    assert storage.load() is None


def test_ids_after_reset_do_not_collide(controller) -> None:
    controller.reset_to_seed()
    created = controller.add_session(SessionInput(subject="New", duration=5, date="2025-01-01"))

    assert created.id not in {1, 2, 3}


def test_storage_failures_never_block_in_memory_list(caplog) -> None:
    controller = StudyTrackerController(BrokenStorage())

    controller.add_session(SessionInput(subject="Networks", duration=50, date="2025-12-15"))
    controller.toggle_completed(1)
    controller.reset_to_seed()

    assert controller.sessions == tuple(seed_sessions())
    assert "Could not persist sessions" in caplog.text


def test_edit_round_trip(controller, storage, clock) -> None:
    buffer = controller.open_edit(2)
    assert buffer.subject == "DBMS Revision"

    assert controller.save_edit(subject="DBMS Final", duration=90) is True
    assert controller.edit.state is EditState.CLOSING

    controller.scheduler.run_pending()

    assert controller.edit.state is EditState.CLOSED
    assert controller.get_session(2) == Session(
        id=2, subject="DBMS Final", duration=90, date="2025-12-11", completed=True
    )
    assert storage.saves == 1


def test_edit_with_empty_subject_keeps_record(controller, storage) -> None:
    controller.open_edit(1)

    with pytest.raises(SessionValidationError):
        controller.save_edit(subject="")

    assert controller.edit.state is EditState.EDITING
    assert controller.get_session(1).subject == "Data Structures & Algorithms"
    assert storage.saves == 0


def test_edit_cancel_and_dismiss(controller) -> None:
    controller.open_edit(3)
    controller.edit.set_field("subject", "Discard me")
    controller.cancel_edit()
    controller.scheduler.run_pending()

    assert controller.get_session(3).subject == "Operating Systems"

    controller.open_edit(3)
    controller.dismiss_edit()
    controller.dismiss_edit()
    controller.scheduler.run_pending()

    assert controller.edit.state is EditState.CLOSED


def test_open_edit_unknown_id(controller) -> None:
    assert controller.open_edit(999) is None
    assert controller.edit.state is EditState.CLOSED


def test_from_config_uses_json_slot(tmp_path) -> None:
    config = TrackerConfig(storage_dir=tmp_path, storage_key="slot")
    controller = StudyTrackerController.from_config(config)
    controller.add_session(SessionInput(subject="Networks", duration=50, date="2025-12-15"))

    reloaded = StudyTrackerController.from_config(config)

    assert isinstance(reloaded.storage, JsonFileStorage)
    assert reloaded.sessions == controller.sessions


def test_config_rejects_bad_values() -> None:
    with pytest.raises(ValueError):
        TrackerConfig(storage_key=" ")
    with pytest.raises(ValueError):
        TrackerConfig(close_delay=-1)


def test_slot_with_overflowing_numbers_still_starts(tmp_path) -> None:
    storage = JsonFileStorage(tmp_path, "slot")
    storage.path.write_text(
        '[{"id": 1, "subject": "A", "duration": Infinity, "date": "2025-01-01"},'
        ' {"id": 1e999, "subject": "B", "duration": 10, "date": "2025-01-02"}]',
        encoding="utf-8",
    )

    controller = StudyTrackerController(storage)

    assert controller.sessions == (Session(id=1, subject="A", duration=0, date="2025-01-01"),)
    assert controller.stats().total_minutes == 0
