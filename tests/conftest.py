"""Pytest configuration and shared fixtures."""
from typing import Iterable, List

import pytest

from config import Settings, reset_settings
from shared.models.domain import Lesson
from shared.models.request_log import RequestLogStore, reset_request_log_store
from shared.repositories.lesson_fixtures import reset_lesson_repository
from shared.repositories.lesson_repository import LessonRepository
from shared.services.request_simulator import RequestSimulator, reset_request_simulator


class FakeClock:
    """Monotonic clock whose ``sleep`` advances time instantly."""

    def __init__(self, start: float = 1000.0):
        self.now = start
        self.sleeps: List[float] = []

    def __call__(self) -> float:
        return self.now

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


class ScriptedRandom:
    """Random source that replays fixed draws: latency first, then chaos."""

    def __init__(self, values: Iterable[float]):
        self._values = list(values)
        self.calls = 0

    def random(self) -> float:
        if self.calls >= len(self._values):
            raise AssertionError("ScriptedRandom exhausted")
        value = self._values[self.calls]
        self.calls += 1
        return value


# Draw values that land in each outcome band
UPSTREAM_DRAW = 0.05
AUTH_DRAW = 0.15
LOOKUP_DRAW = 0.5


@pytest.fixture(autouse=True)
def _reset_globals():
    """Keep process-wide singletons from leaking between tests."""
    reset_settings()
    reset_lesson_repository()
    reset_request_simulator()
    reset_request_log_store()
    yield
    reset_settings()
    reset_lesson_repository()
    reset_request_simulator()
    reset_request_log_store()


@pytest.fixture
def settings():
    """Settings with defaults only (no .env file)."""
    return Settings(_env_file=None)


@pytest.fixture
def numbered_lessons():
    """Ten lessons L1..L10 with orders 1..10."""
    return [Lesson(id=f"L{i}", order=i, title=f"Lesson {i}") for i in range(1, 11)]


@pytest.fixture
def repository(numbered_lessons):
    return LessonRepository(numbered_lessons)


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def request_log():
    return RequestLogStore()


@pytest.fixture
def make_simulator(repository, settings, fake_clock, request_log):
    """Factory for simulators wired to the fake clock and a given random source."""

    def _make(rng, **overrides):
        return RequestSimulator(
            overrides.pop("repository", repository),
            settings=overrides.pop("settings", settings),
            rng=rng,
            sleep=overrides.pop("sleep", fake_clock.sleep),
            clock=fake_clock,
            request_log=overrides.pop("request_log", request_log),
            **overrides,
        )

    return _make
