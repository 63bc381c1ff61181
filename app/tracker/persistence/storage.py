"""
Purpose: Best-effort persistence of the session list in a named key-value slot.
Why: Keep sessions across browser reloads and app restarts.

What is inside:
InMemoryStorage with load/save/clear (tests, throwaway runs).
JsonFileStorage: one JSON file per slot key under a local directory.

Contract:
load() returns None when the slot is absent or unusable; the caller falls
back to seed data. save()/clear() raise StorageError; the caller logs and
carries on with the in-memory list.

Testing:
In-memory: simple state tests.
JSON file: tmp_path fixture; corrupt/missing slot tests.
"""

from __future__ import annotations
import logging
import os
from pathlib import Path
from typing import Optional, Sequence

from ..models import Session
from ..utils.session_json import decode_sessions, encode_sessions

logger = logging.getLogger(__name__)


class StorageError(RuntimeError):
    """A storage slot could not be written or cleared."""


class InMemoryStorage:
    def __init__(self, sessions: Optional[Sequence[Session]] = None) -> None:
        self._sessions: Optional[list[Session]] = (
            list(sessions) if sessions is not None else None
        )
        self.saves = 0

    def load(self) -> Optional[list[Session]]:
        return None if self._sessions is None else self._sessions[:]

    def save(self, sessions: Sequence[Session]) -> None:
        self._sessions = list(sessions)
        self.saves += 1

    def clear(self) -> None:
        self._sessions = None


class JsonFileStorage:
    def __init__(self, directory: Path, key: str) -> None:
        if not key or "/" in key or "\\" in key:
            raise ValueError(f"Invalid storage key: {key!r}")
        self.directory = Path(directory)
        self.key = key

    @property
    def path(self) -> Path:
        return self.directory / f"{self.key}.json"

    def load(self) -> Optional[list[Session]]:
        """Read and decode the slot. Any read or parse failure yields None."""
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.info("No persisted sessions at %s", self.path)
            return None
        except (OSError, UnicodeDecodeError):
            logger.warning("Cannot read %s", self.path, exc_info=True)
            return None
        return decode_sessions(text)

    def save(self, sessions: Sequence[Session]) -> None:
        """Write the full list atomically: temp file in the same dir, then rename."""
        tmp_path = self.path.with_suffix(".json.tmp")
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as tmp_file:
                tmp_file.write(encode_sessions(sessions))
            os.replace(tmp_path, self.path)
        except OSError as exc:
            # Existing slot stays untouched
            try:
                tmp_path.unlink(missing_ok=True)
            except OSError:
                pass
            raise StorageError(f"Failed to write {self.path}: {exc}") from exc
        logger.debug("Saved %d sessions to %s", len(sessions), self.path)

    def clear(self) -> None:
        try:
            self.path.unlink(missing_ok=True)
        except OSError as exc:
            raise StorageError(f"Failed to clear {self.path}: {exc}") from exc
        logger.info("Cleared persisted sessions at %s", self.path)
