from datetime import date

import pytest

from models import Frequency, Habit
from store import HabitStore


class MemoryBackend:
    """In-process stand-in for a durable key/value backend."""

    def __init__(self, data=None, fail_writes=False):
        self.data = dict(data or {})
        self.fail_writes = fail_writes
        self.writes = []

    def get(self, key):
        return self.data.get(key)

    def set(self, key, value):
        if self.fail_writes:
            return False
        self.data[key] = value
        self.writes.append(value)
        return True


class FixedClock:
    def __init__(self, start=1_700_000_000_000):
        self.value = start

    def __call__(self):
        return self.value


@pytest.fixture
def backend():
    return MemoryBackend()


@pytest.fixture
def store(backend):
    return HabitStore(backend, clock_ms=FixedClock())


@pytest.fixture
def mid_may():
    return date(2024, 5, 15)


@pytest.fixture
def gym():
    return Habit("1", "Gym", ("Mon", "Wed", "Fri"), Frequency.DAILY)


@pytest.fixture
def review():
    return Habit("2", "Review", ("Sun",), Frequency.WEEKLY)
