"""Consecutive-deficit streaks over completed days."""

from collections.abc import Iterable
from datetime import date, timedelta

from deficit_tracker.domain.progress import DayBalance

_ONE_DAY = timedelta(days=1)


def deficit_runs(
    days: Iterable[DayBalance], today: date
) -> list[tuple[DayBalance, int]]:
    """Pair each completed day with its 1-based position in a deficit run.

    Today is excluded because it is not finished yet. Non-deficit days carry
    index 0, and a missing calendar day restarts the run.
    """
    completed = sorted((entry for entry in days if entry.day < today), key=_by_day)
    indexed: list[tuple[DayBalance, int]] = []
    run = 0
    previous: date | None = None
    for entry in completed:
        if previous is not None and entry.day - previous != _ONE_DAY:
            run = 0
        run = run + 1 if entry.balance < 0 else 0
        indexed.append((entry, run))
        previous = entry.day
    return indexed


def current_streak(days: Iterable[DayBalance], today: date) -> int:
    """Return the deficit run ending yesterday."""
    indexed = deficit_runs(days, today)
    if not indexed:
        return 0
    last, run = indexed[-1]
    if last.day != today - _ONE_DAY:
        return 0
    return run


def max_streak(days: Iterable[DayBalance], today: date) -> int:
    """Return the longest deficit run in the history."""
    return max((run for _, run in deficit_runs(days, today)), default=0)


def _by_day(entry: DayBalance) -> date:
    return entry.day
