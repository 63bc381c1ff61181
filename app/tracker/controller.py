"""
Purpose: The single orchestration point for the tracker. Owns the session
store, the storage slot, the view parameters and the edit workflow.
Prevents the UI from knowing how validation, persistence or the view
pipeline work.

Key responsibilities:
- Load the list from storage on startup, falling back to seed data.
- Apply create/update/toggle/delete/reset and persist after each change.
- Hold filter/search/sort and hand out the derived (cached) view.
- Compute statistics from the full list.
- Drive the edit dialog (open/save/cancel/dismiss).

Persistence is best effort: StorageError is logged and swallowed here and
never reaches the UI. Validation errors propagate so the UI can show them.

Testing: Pure unit tests with InMemoryStorage and a DeferredScheduler.
"""

from __future__ import annotations
import logging
from typing import Optional

from .config import TrackerConfig
from .edit_workflow import EditBuffer, EditSessionWorkflow
from .interfaces import SessionStorage
from .models import (
    EmptyState,
    Session,
    SessionFields,
    SessionInput,
    SessionStats,
    SortDirection,
    SortKey,
    SortSpec,
    StatusFilter,
    ViewParams,
)
from .persistence.storage import JsonFileStorage, StorageError
from .scheduler import DeferredScheduler
from .seed import seed_sessions
from .services import view_pipeline
from .services.statistics import compute_stats
from .session_store import SessionStore

logger = logging.getLogger(__name__)


class StudyTrackerController:
    def __init__(
        self,
        storage: SessionStorage,
        *,
        scheduler: Optional[DeferredScheduler] = None,
        close_delay: float = 0.0,
    ):
        self.storage: SessionStorage = storage
        self.scheduler = scheduler or DeferredScheduler()
        self.store = SessionStore(self._initial_sessions())
        self.view = ViewParams()
        self.edit = EditSessionWorkflow(
            self._commit_edit,
            self.scheduler,
            close_delay=close_delay,
            validator=self.store.validator,
        )

    @classmethod
    def from_config(cls, config: TrackerConfig) -> "StudyTrackerController":
        storage = JsonFileStorage(config.storage_dir, config.storage_key)
        return cls(storage, close_delay=config.close_delay)

    def _initial_sessions(self) -> list[Session]:
        try:
            loaded = self.storage.load()
        except (StorageError, OSError):
            logger.warning("Loading persisted sessions failed", exc_info=True)
            loaded = None
        if loaded is None:
            logger.info("Starting from seed sessions")
            return seed_sessions()
        logger.info("Loaded %d persisted sessions", len(loaded))
        return loaded

    def _persist(self) -> None:
        try:
            self.storage.save(self.store.snapshot())
        except StorageError:
            logger.warning("Could not persist sessions", exc_info=True)

    # ---------------------------
    # Read side
    # ---------------------------
    @property
    def sessions(self) -> tuple[Session, ...]:
        return self.store.snapshot()

    def get_session(self, session_id: int) -> Optional[Session]:
        return self.store.get(session_id)

    def visible_sessions(self) -> tuple[Session, ...]:
        """Filtered, searched and sorted sessions for the list view."""
        return view_pipeline.view_for(self.store.snapshot(), self.view)

    def empty_state(self) -> Optional[EmptyState]:
        return view_pipeline.empty_state(self.store.snapshot(), self.visible_sessions())

    def stats(self) -> SessionStats:
        return compute_stats(self.store.snapshot())

    # ---------------------------
    # Mutations
    # ---------------------------
    def add_session(self, data: SessionInput) -> Session:
        session = self.store.create(data)
        self._persist()
        return session

    def update_session(self, session_id: int, data: SessionInput) -> bool:
        changed = self.store.update(session_id, data)
        if changed:
            self._persist()
        return changed

    def toggle_completed(self, session_id: int) -> bool:
        changed = self.store.toggle_completed(session_id)
        if changed:
            self._persist()
        return changed

    def delete_session(self, session_id: int) -> bool:
        """Caller must have confirmed with the user already."""
        changed = self.store.delete(session_id)
        if changed:
            self._persist()
        return changed

    def reset_to_seed(self) -> None:
        """Back to the sample list; the storage slot is cleared, not rewritten."""
        self.store.replace_all(seed_sessions())
        try:
            self.storage.clear()
        except StorageError:
            logger.warning("Could not clear persisted sessions", exc_info=True)
        logger.info("Reset to seed sessions")

    # ---------------------------
    # View parameters
    # ---------------------------
    def set_filter(self, status: StatusFilter) -> None:
        self.view.status = StatusFilter(status)

    def set_search(self, term: Optional[str]) -> None:
        self.view.search = term or ""

    def set_sort(self, spec: SortSpec) -> None:
        self.view.sort = SortSpec(key=SortKey(spec.key), direction=SortDirection(spec.direction))

    def sort_by(self, key: SortKey) -> SortSpec:
        """Header click: same key toggles direction, a new key sorts ascending."""
        self.view.sort = view_pipeline.next_sort(self.view.sort, key)
        return self.view.sort

    # ---------------------------
    # Edit workflow
    # ---------------------------
    def open_edit(self, session_id: int) -> Optional[EditBuffer]:
        session = self.store.get(session_id)
        if session is None:
            return None
        return self.edit.open(session)

    def save_edit(self, **changes) -> bool:
        """Apply widget values to the buffer, then validate and commit."""
        for name, value in changes.items():
            self.edit.set_field(name, value)
        return self.edit.save()

    def cancel_edit(self) -> None:
        self.edit.cancel()

    def dismiss_edit(self) -> None:
        self.edit.dismiss()

    def _commit_edit(self, session_id: int, fields: SessionFields) -> bool:
        return self.update_session(
            session_id,
            SessionInput(
                subject=fields.subject,
                duration=fields.duration,
                date=fields.date,
                notes=fields.notes,
            ),
        )
