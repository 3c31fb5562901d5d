"""Completion rules for daily and weekly habits.

Daily habits keep one bare marker per weekday. Weekly habits keep at most
one marker per month bucket; any marker in the current bucket completes the
habit for every day cell of that month, whichever day was ticked.
"""

from dataclasses import replace
from datetime import date

from models import CompletionMarker, Frequency, Habit, month_bucket


def is_completed(habit: Habit, day: str, now: date) -> bool:
    if habit.frequency == Frequency.WEEKLY:
        bucket = month_bucket(now)
        # day is ignored on purpose: one tick covers the whole month
        return any(m.period == bucket for m in habit.completed_days)
    return CompletionMarker(day) in habit.completed_days


def is_marked_day(habit: Habit, day: str, now: date) -> bool:
    """True on the cell whose tick was recorded. Display only."""
    if habit.frequency == Frequency.WEEKLY:
        return CompletionMarker(day, month_bucket(now)) in habit.completed_days
    return is_completed(habit, day, now)


def toggle(habit: Habit, day: str, now: date) -> Habit:
    """Flip completion for ``day`` and return the updated habit.

    Callers must only pass scheduled days.
    """
    if habit.frequency == Frequency.WEEKLY:
        return _toggle_weekly(habit, day, now)
    return _toggle_daily(habit, day)


def _toggle_daily(habit: Habit, day: str) -> Habit:
    marker = CompletionMarker(day)
    if marker in habit.completed_days:
        remaining = tuple(m for m in habit.completed_days if m != marker)
        return replace(habit, completed_days=remaining)
    return replace(habit, completed_days=habit.completed_days + (marker,))


def _toggle_weekly(habit: Habit, day: str, now: date) -> Habit:
    bucket = month_bucket(now)
    if any(m.period == bucket for m in habit.completed_days):
        # clears the whole month, not just the marker for this day
        remaining = tuple(m for m in habit.completed_days if m.period != bucket)
        return replace(habit, completed_days=remaining)
    marker = CompletionMarker(day, bucket)
    return replace(habit, completed_days=habit.completed_days + (marker,))
