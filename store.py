"""Habit collection storage and habit creation.

The whole collection is stored as one JSON array under a single key of a
durable backend (see repo_json.StorageBackend). Loading never raises: an
absent, unreadable or corrupt payload comes back as an empty collection.
"""

import json
import logging
import time
from typing import Callable, Iterable, List, Optional, Tuple

from models import (
    CompletionMarker,
    DAYS,
    Frequency,
    Habit,
    derive_frequency,
    normalize_days,
)
from repo_json import StorageBackend, StorageError

logger = logging.getLogger(__name__)

STORAGE_KEY = "@habits"


def _now_ms() -> int:
    return int(time.time() * 1000)


# ---------- Wire format ----------
def habit_to_dict(h: Habit) -> dict:
    return {
        "id": h.id,
        "name": h.name,
        "days": list(h.scheduled_days),
        "frequency": h.frequency.value,
        "completedDays": [m.to_wire() for m in h.completed_days],
    }


def habit_from_dict(data: dict) -> Habit:
    name = data["name"]
    if not isinstance(name, str) or not name:
        raise ValueError(f"Bad habit name: {name!r}")
    days = tuple(data["days"])
    if not days or any(d not in DAYS for d in days):
        raise ValueError(f"Bad scheduled days: {data['days']!r}")
    markers = tuple(CompletionMarker.from_wire(m) for m in data["completedDays"])
    if len(set(markers)) != len(markers):
        raise ValueError(f"Duplicate completion markers: {data['completedDays']!r}")
    # the stored frequency is authoritative, it is never re-derived here
    return Habit(
        id=str(data["id"]),
        name=name,
        scheduled_days=days,
        frequency=Frequency(data["frequency"]),
        completed_days=markers,
    )


def encode_habits(habits: Iterable[Habit]) -> str:
    return json.dumps([habit_to_dict(h) for h in habits])


def decode_habits(payload: str) -> List[Habit]:
    items = json.loads(payload)
    if not isinstance(items, list):
        raise ValueError("Habit payload is not a list")
    return [habit_from_dict(item) for item in items]


class HabitStore:
    def __init__(
        self,
        backend: StorageBackend,
        key: str = STORAGE_KEY,
        clock_ms: Callable[[], int] = _now_ms,
    ):
        self.backend = backend
        self.key = key
        self._clock_ms = clock_ms
        self._last_id = 0

    # -------- Load / save --------
    def restore(self) -> List[Habit]:
        try:
            payload = self.backend.get(self.key)
        except (OSError, StorageError) as exc:
            logger.warning("Error loading habits: %s", exc)
            return []
        if payload is None:
            return []
        try:
            return decode_habits(payload)
        except (ValueError, KeyError, TypeError) as exc:
            logger.warning("Discarding unreadable habit data: %s", exc)
            return []

    def persist(self, habits: Iterable[Habit]) -> bool:
        try:
            payload = encode_habits(habits)
            return bool(self.backend.set(self.key, payload))
        except (OSError, StorageError, TypeError) as exc:
            logger.error("Error saving habits: %s", exc)
            return False

    # -------- Habits --------
    def add_habit(
        self, habits: List[Habit], name: str, scheduled_days: Iterable[str]
    ) -> Tuple[List[Habit], Optional[Habit]]:
        """Append a new habit; invalid input returns ``(habits, None)``."""
        days = normalize_days(scheduled_days or ())
        if not name or not days:
            return habits, None
        habit = Habit(
            id=self._next_id(habits),
            name=name,
            scheduled_days=days,
            frequency=derive_frequency(days),
        )
        return [*habits, habit], habit

    def _next_id(self, habits: Iterable[Habit]) -> str:
        taken = {h.id for h in habits}
        candidate = max(self._clock_ms(), self._last_id + 1)
        while str(candidate) in taken:
            candidate += 1
        self._last_id = candidate
        return str(candidate)
