"""
Deferred callbacks for UI transitions (e.g. the edit dialog's close step).

Streamlit has no timers: the script reruns top to bottom on each interaction.
DeferredScheduler queues callbacks with a due time and the app drains the
queue with run_pending() at the start of every rerun.
"""

from __future__ import annotations
import logging
import time
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class DeferredScheduler:
    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self.clock = clock
        self._queue: list[tuple[float, int, Callable[[], None]]] = []
        self._seq = 0

    def __len__(self) -> int:
        return len(self._queue)

    def schedule(self, delay: float, callback: Callable[[], None]) -> None:
        due = self.clock() + max(0.0, delay)
        self._seq += 1
        self._queue.append((due, self._seq, callback))

    def run_pending(self, now: Optional[float] = None) -> int:
        """Run every callback whose due time has passed, oldest first. Returns the count."""
        now = self.clock() if now is None else now
        due = sorted((item for item in self._queue if item[0] <= now), key=lambda i: i[:2])
        if not due:
            return 0
        self._queue = [item for item in self._queue if item[0] > now]
        for _, _, callback in due:
            callback()
        logger.debug("Ran %d scheduled callback(s)", len(due))
        return len(due)
