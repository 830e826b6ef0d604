"""Monthly calendar classification for progress review."""

import calendar
from collections.abc import Mapping
from datetime import date, timedelta

from deficit_tracker.domain.logs import DailyLog
from deficit_tracker.domain.profile import Entitlement
from deficit_tracker.domain.progress import BalanceBucket, CalendarDay
from deficit_tracker.services.balance import classify_balance, daily_balance
from deficit_tracker.services.rounding import round_half_up


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """Return the first and last date of a month."""
    days_in_month = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, days_in_month)


def project_month(  # noqa: PLR0913
    year: int,
    month: int,
    logs_by_date: Mapping[date, DailyLog],
    tdee: int,
    balance_goal: int,
    entitlement: Entitlement,
    today: date,
) -> list[CalendarDay]:
    """Classify each day of a month.

    ``logs_by_date`` should include the day before the month starts so the
    first day can report a weight delta.
    """
    first, last = month_bounds(year, month)
    days: list[CalendarDay] = []
    current = first
    while current <= last:
        days.append(
            _project_day(current, logs_by_date, tdee, balance_goal, entitlement, today)
        )
        current += timedelta(days=1)
    return days


def weight_delta(day: date, logs_by_date: Mapping[date, DailyLog]) -> float | None:
    """Return the change from the previous calendar day's weight sample."""
    log = logs_by_date.get(day)
    previous = logs_by_date.get(day - timedelta(days=1))
    if log is None or previous is None:
        return None
    if not log.weight_kg or not previous.weight_kg:
        return None
    return round_half_up(log.weight_kg - previous.weight_kg, 1)


def is_locked(day: date, entitlement: Entitlement, today: date) -> bool:
    """Return True when the day is outside an unpaid user's trial window."""
    if entitlement.is_paid or entitlement.trial_ends_at is None:
        return False
    return entitlement.trial_ends_at < day <= today


def _project_day(  # noqa: PLR0913
    day: date,
    logs_by_date: Mapping[date, DailyLog],
    tdee: int,
    balance_goal: int,
    entitlement: Entitlement,
    today: date,
) -> CalendarDay:
    log = logs_by_date.get(day)
    balance = 0.0
    bucket: BalanceBucket | None = None
    if log is not None:
        balance = daily_balance(tdee, log.caloric_intake, log.caloric_outtake)
        bucket = classify_balance(balance, balance_goal)
    return CalendarDay(
        day=day,
        weight=log.weight_kg if log else None,
        weight_delta=weight_delta(day, logs_by_date),
        balance=balance,
        bucket=bucket,
        is_success=bucket is BalanceBucket.SUCCESS,
        is_locked=is_locked(day, entitlement, today),
        is_future=day > today,
        is_today=day == today,
        has_data=log is not None,
    )
