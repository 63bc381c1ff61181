import pytest

from tracker.controller import StudyTrackerController
from tracker.persistence.storage import InMemoryStorage
from tracker.scheduler import DeferredScheduler
from tracker.services import view_pipeline


class FakeClock:
    def __init__(self, start: float = 100.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture(autouse=True)
def _clear_view_cache():
    view_pipeline.cached_view.cache_clear()
    yield
    view_pipeline.cached_view.cache_clear()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def storage() -> InMemoryStorage:
    return InMemoryStorage()


@pytest.fixture
def controller(storage, clock) -> StudyTrackerController:
    return StudyTrackerController(storage, scheduler=DeferredScheduler(clock=clock))
