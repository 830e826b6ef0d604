"""Daily caloric balance and its classification against the goal.

Balance is ``intake - (tdee + outtake)``: negative is a deficit, positive a
surplus. Goals are expressed as negative balances (``-daily_deficit``).
"""

from collections.abc import Iterable

from deficit_tracker.domain.progress import (
    BalanceBucket,
    BalanceReport,
    DayBalance,
    SevenDayBalance,
)
from deficit_tracker.services.rounding import round_int

_WINDOW_DAYS = 7


def daily_balance(tdee: float, intake: float, outtake: float = 0) -> float:
    """Return intake minus total burn."""
    return intake - (tdee + outtake)


def classify_balance(balance: float, balance_goal: float) -> BalanceBucket:
    """Classify a balance as success, warning or danger."""
    if balance >= 0:
        return BalanceBucket.DANGER
    if balance <= balance_goal:
        return BalanceBucket.SUCCESS
    return BalanceBucket.WARNING


def format_balance_with_goal(balance: float, balance_goal: float) -> BalanceReport:
    """Describe a balance relative to the goal for display."""
    bucket = classify_balance(balance, balance_goal)
    to_goal = balance - balance_goal
    if bucket is BalanceBucket.DANGER:
        status = "surplus"
        if balance == 0:
            vs_goal_text = f"{_fmt(abs(balance_goal))} to go"
        else:
            vs_goal_text = f"{_fmt(balance)} surplus!"
    elif bucket is BalanceBucket.SUCCESS:
        status = "on-track" if to_goal == 0 else "exceeded"
        extra = abs(balance) - abs(balance_goal)
        vs_goal_text = "On target!" if extra == 0 else f"{_fmt(extra)} extra"
    else:
        status = "behind"
        vs_goal_text = f"{_fmt(abs(balance_goal) - abs(balance))} to go"
    return BalanceReport(
        text=format_balance(balance),
        is_deficit=balance < 0,
        bucket=bucket,
        status=status,
        vs_goal=to_goal,
        vs_goal_text=vs_goal_text,
        to_goal=to_goal,
        to_maintenance=-balance,
    )


def format_balance(balance: float) -> str:
    """Return a signed, thousands-separated balance."""
    if balance == 0:
        return "0"
    sign = "-" if balance < 0 else "+"
    return f"{sign}{_fmt(abs(balance))}"


def seven_day_balance(balances: Iterable[DayBalance]) -> SevenDayBalance:
    """Sum and average the seven most recent daily balances."""
    recent = sorted(balances, key=lambda entry: entry.day, reverse=True)[
        :_WINDOW_DAYS
    ]
    if not recent:
        return SevenDayBalance(total=0, average=0, days_with_data=0)
    total = sum(entry.balance for entry in recent)
    return SevenDayBalance(
        total=round_int(total),
        average=round_int(total / len(recent)),
        days_with_data=len(recent),
    )


def goal_budget_percent(
    intake: float, tdee: float, outtake: float, balance_goal: float
) -> float:
    """Return the share of the goal calorie budget already eaten.

    The budget is what can be eaten while still meeting the goal; a
    non-positive budget reports 0%.
    """
    budget = tdee + outtake + balance_goal
    if budget <= 0:
        return 0.0
    return intake / budget * 100


def _fmt(value: float) -> str:
    if float(value).is_integer():
        return f"{int(value):,}"
    return f"{value:,}"
