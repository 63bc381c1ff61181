"""
Abstractions for pluggable collaborators. Inversion of control: the controller
depends on interfaces, not concrete storage/scheduling. Enables fakes in tests
and future swaps (e.g. a browser localStorage bridge instead of a JSON file).

Common protocols:
- SessionStorage.load() -> list[Session] | None, save(sessions), clear()
- Scheduler.schedule(delay, callback)
- SessionValidator.validate(SessionInput) -> SessionFields

Testing: InMemoryStorage and DeferredScheduler with a fake clock.
"""

from __future__ import annotations
from typing import Callable, Optional, Protocol, Sequence

from .models import Session, SessionFields, SessionInput


class SessionStorage(Protocol):
    def load(self) -> Optional[list[Session]]: ...

    def save(self, sessions: Sequence[Session]) -> None: ...

    def clear(self) -> None: ...


class Scheduler(Protocol):
    def schedule(self, delay: float, callback: Callable[[], None]) -> None: ...


class SessionValidator(Protocol):
    def validate(self, data: SessionInput) -> SessionFields: ...
