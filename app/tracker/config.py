"""
App-wide settings. Plain defaults; the tracker reads no environment variables.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_STORAGE_DIR = Path(".study_tracker")
DEFAULT_STORAGE_KEY = "study-tracker-sessions"


@dataclass(frozen=True)
class TrackerConfig:
    storage_dir: Path = field(default_factory=lambda: DEFAULT_STORAGE_DIR)
    storage_key: str = DEFAULT_STORAGE_KEY
    # Seconds between "closing" and "closed" for the edit dialog.
    close_delay: float = 0.0
    log_level: int = logging.INFO

    def __post_init__(self) -> None:
        if not self.storage_key.strip():
            raise ValueError("storage_key must not be empty")
        if self.close_delay < 0:
            raise ValueError("close_delay must not be negative")
