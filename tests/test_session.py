from datetime import date

import pytest

from completion import toggle
from models import Frequency
from persistence import BackgroundWriter
from session import HabitSession
from store import STORAGE_KEY, decode_habits


@pytest.fixture
def session(store):
    writer = BackgroundWriter(store)
    s = HabitSession(store, writer, today=lambda: date(2024, 5, 15))
    yield s
    writer.close()


def saved(backend):
    return decode_habits(backend.data[STORAGE_KEY])


def test_load_restores_saved_habits(store, backend, gym, review):
    store.persist([gym, review])
    s = HabitSession(store, BackgroundWriter(store))
    assert s.load() == [gym, review]
    s.writer.close()


def test_add_habit_updates_memory_then_persists(session, backend):
    habit = session.add_habit("Review", {"Sun"})
    assert habit.frequency == Frequency.WEEKLY
    assert session.habits == [habit]
    session.writer.flush(5)
    assert saved(backend) == [habit]


def test_rejected_add_changes_nothing(session, backend):
    assert session.add_habit("", ["Mon"]) is None
    assert session.add_habit("Gym", []) is None
    session.writer.flush(5)
    assert session.habits == []
    assert backend.writes == []


def test_toggle_updates_the_right_habit(session, backend):
    gym = session.add_habit("Gym", ["Mon", "Wed", "Fri"])
    read = session.add_habit("Read", ["Tue", "Thu"])
    updated = session.toggle(gym.id, "Mon")
    assert [m.to_wire() for m in updated.completed_days] == ["Mon"]
    assert session.habits == [updated, read]
    session.writer.flush(5)
    assert saved(backend) == [updated, read]


def test_unscheduled_toggle_is_ignored(session):
    gym = session.add_habit("Gym", ["Mon", "Wed"])
    assert session.toggle(gym.id, "Sun") is None
    assert session.get(gym.id) == gym


def test_unknown_habit_raises(session):
    with pytest.raises(KeyError):
        session.toggle("missing", "Mon")


def test_cell_queries_use_session_clock(session):
    review = session.add_habit("Review", ["Sun"])
    review = session.toggle(review.id, "Sun")
    assert [m.to_wire() for m in review.completed_days] == ["2024-05-Sun"]
    assert session.is_completed(review, "Sun")
    assert session.is_completed(review, "Wed")
    assert session.is_marked_day(review, "Sun")
    assert not session.is_marked_day(review, "Wed")


def test_memory_survives_failed_writes(store, backend, gym, mid_may):
    backend.fail_writes = True
    writer = BackgroundWriter(store)
    s = HabitSession(store, writer, today=lambda: mid_may)
    habit = s.add_habit("Gym", ["Mon", "Wed"])
    s.toggle(habit.id, "Wed")
    writer.flush(5)
    assert s.habits == [toggle(habit, "Wed", mid_may)]
    assert STORAGE_KEY not in backend.data
    writer.close()
