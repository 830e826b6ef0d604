"""Tests for daily balance and its classification."""

from datetime import date, timedelta

from deficit_tracker.domain.progress import BalanceBucket, DayBalance
from deficit_tracker.services.balance import (
    classify_balance,
    daily_balance,
    format_balance,
    format_balance_with_goal,
    goal_budget_percent,
    seven_day_balance,
)


def test_daily_balance_subtracts_total_burn() -> None:
    assert daily_balance(2000, 1500, 300) == -800
    assert daily_balance(2000, 0) == -2000


def test_classify_balance_buckets() -> None:
    assert classify_balance(-800, -500) is BalanceBucket.SUCCESS
    assert classify_balance(-300, -500) is BalanceBucket.WARNING
    assert classify_balance(0, -500) is BalanceBucket.DANGER
    assert classify_balance(250, -500) is BalanceBucket.DANGER


def test_classify_balance_exact_goal_is_success() -> None:
    assert classify_balance(-500, -500) is BalanceBucket.SUCCESS


def test_format_balance_with_goal_exceeded() -> None:
    report = format_balance_with_goal(-800, -500)

    assert report.bucket is BalanceBucket.SUCCESS
    assert report.status == "exceeded"
    assert report.vs_goal_text == "300 extra"
    assert report.to_maintenance == 800
    assert report.is_deficit is True


def test_format_balance_with_goal_behind_and_surplus() -> None:
    behind = format_balance_with_goal(-300, -500)
    surplus = format_balance_with_goal(250, -500)
    even = format_balance_with_goal(0, -500)

    assert behind.status == "behind"
    assert behind.vs_goal_text == "200 to go"
    assert surplus.status == "surplus"
    assert surplus.vs_goal_text == "250 surplus!"
    assert even.vs_goal_text == "500 to go"


def test_format_balance_signs_and_separators() -> None:
    assert format_balance(-1234) == "-1,234"
    assert format_balance(56) == "+56"
    assert format_balance(0) == "0"


def test_seven_day_balance_uses_most_recent_days() -> None:
    start = date(2025, 3, 1)
    balances = [DayBalance(start, 5000), DayBalance(start + timedelta(days=1), 5000)]
    balances += [
        DayBalance(start + timedelta(days=offset), -500) for offset in range(2, 9)
    ]

    summary = seven_day_balance(balances)

    assert summary.total == -3500
    assert summary.average == -500
    assert summary.days_with_data == 7


def test_seven_day_balance_empty() -> None:
    summary = seven_day_balance([])

    assert (summary.total, summary.average, summary.days_with_data) == (0, 0, 0)


def test_goal_budget_percent() -> None:
    assert goal_budget_percent(750, 2000, 0, -500) == 50
    assert goal_budget_percent(750, 2000, 500, -500) == 37.5
    assert goal_budget_percent(750, 400, 0, -500) == 0
