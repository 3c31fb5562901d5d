# models.py
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Iterable, Optional, Tuple

DAYS = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")

# date.weekday() is Monday-first
_WEEKDAY_TOKENS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


class Frequency(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"


@dataclass(frozen=True)
class CompletionMarker:
    """One entry of a habit's completed days.

    Daily markers carry only the day token. Weekly markers also carry the
    month bucket ("2024-05") they were recorded in.
    """

    day: str
    period: Optional[str] = None

    def to_wire(self) -> str:
        if self.period is None:
            return self.day
        return f"{self.period}-{self.day}"

    @classmethod
    def from_wire(cls, text: str) -> "CompletionMarker":
        if not isinstance(text, str):
            raise ValueError(f"Completion marker must be a string, got {text!r}")
        if text in DAYS:
            return cls(day=text)
        period, sep, day = text.rpartition("-")
        if not sep or day not in DAYS or not _is_bucket(period):
            raise ValueError(f"Malformed completion marker: {text!r}")
        return cls(day=day, period=period)


@dataclass(frozen=True)
class Habit:
    id: str
    name: str
    scheduled_days: Tuple[str, ...]
    frequency: Frequency
    completed_days: Tuple[CompletionMarker, ...] = ()


def _is_bucket(text: str) -> bool:
    year, sep, month = text.partition("-")
    return (
        bool(sep)
        and len(year) == 4
        and len(month) == 2
        and year.isdigit()
        and month.isdigit()
    )


def month_bucket(now: date) -> str:
    """'YYYY-MM' of the given date (or datetime)."""
    return now.isoformat()[:7]


def day_token(d: date) -> str:
    return _WEEKDAY_TOKENS[d.weekday()]


def derive_frequency(scheduled_days: Iterable[str]) -> Frequency:
    return Frequency.WEEKLY if len(tuple(scheduled_days)) == 1 else Frequency.DAILY


def normalize_days(days: Iterable[str]) -> Tuple[str, ...]:
    """Known day tokens only, deduplicated, in Sun..Sat order."""
    chosen = {d.strip() for d in days if isinstance(d, str)}
    return tuple(d for d in DAYS if d in chosen)


def is_scheduled_day(h: Habit, day: str) -> bool:
    return day in h.scheduled_days
