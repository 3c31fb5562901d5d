"""In-memory habit state owned by the UI."""

import logging
from datetime import date
from typing import Callable, Iterable, List, Optional

from completion import is_completed, is_marked_day, toggle
from models import Habit, is_scheduled_day
from persistence import BackgroundWriter
from store import HabitStore

logger = logging.getLogger(__name__)


class HabitSession:
    """Holds the habit list for one running app.

    Memory is updated first and is the source of truth; every change is then
    handed to the background writer.
    """

    def __init__(
        self,
        store: HabitStore,
        writer: BackgroundWriter,
        today: Callable[[], date] = date.today,
    ):
        self.store = store
        self.writer = writer
        self.today = today
        self._habits: List[Habit] = []

    @property
    def habits(self) -> List[Habit]:
        return list(self._habits)

    def load(self) -> List[Habit]:
        self._habits = self.store.restore()
        logger.info("Loaded %d habits", len(self._habits))
        return self.habits

    def get(self, habit_id: str) -> Habit:
        for h in self._habits:
            if h.id == habit_id:
                return h
        raise KeyError(habit_id)

    def add_habit(self, name: str, days: Iterable[str]) -> Optional[Habit]:
        self._habits, habit = self.store.add_habit(self._habits, name, days)
        if habit is None:
            return None
        logger.info("Added %s habit %r (%s)", habit.frequency.value, habit.name, habit.id)
        self.writer.submit(self._habits)
        return habit

    def toggle(self, habit_id: str, day: str) -> Optional[Habit]:
        """Toggle a scheduled cell; unscheduled days are ignored."""
        current = self.get(habit_id)
        if not is_scheduled_day(current, day):
            return None
        updated = toggle(current, day, self.today())
        self._habits = [updated if h.id == habit_id else h for h in self._habits]
        self.writer.submit(self._habits)
        return updated

    # -------- Cell queries --------
    def is_completed(self, habit: Habit, day: str) -> bool:
        return is_completed(habit, day, self.today())

    def is_marked_day(self, habit: Habit, day: str) -> bool:
        return is_marked_day(habit, day, self.today())
