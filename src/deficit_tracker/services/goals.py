"""Goal planning: the daily deficit needed to reach a goal weight."""

from datetime import date

from deficit_tracker.domain.progress import GoalPlan, RiskLevel
from deficit_tracker.services.rounding import round_half_up, round_int

KCAL_PER_KG = 7700
MAX_ACHIEVABLE_DEFICIT = 1500
SAFE_DEFICIT = 750
AGGRESSIVE_SAFE_DEFICIT = 1000


def required_daily_deficit(
    current_weight_kg: float,
    goal_weight_kg: float,
    goal_date: date,
    today: date,
) -> GoalPlan:
    """Return the daily deficit required to hit the goal by ``goal_date``.

    Both dates are local calendar days, so the day difference is already whole.
    """
    days_remaining = (goal_date - today).days
    if days_remaining <= 0:
        return GoalPlan(
            daily_deficit=0,
            is_achievable=False,
            is_safe=False,
            days_remaining=0,
            weeks_to_goal=0.0,
            weekly_loss_kg=0.0,
            risk_level=RiskLevel.DANGEROUS,
            message="Goal date has passed. Please set a future date.",
        )

    total_deficit = (current_weight_kg - goal_weight_kg) * KCAL_PER_KG
    daily_deficit = round_int(total_deficit / days_remaining)
    weekly_loss = round_half_up(daily_deficit * 7 / KCAL_PER_KG, 2)
    risk_level, is_safe, message = _assess(daily_deficit, weekly_loss)
    return GoalPlan(
        daily_deficit=daily_deficit,
        is_achievable=0 <= daily_deficit <= MAX_ACHIEVABLE_DEFICIT,
        is_safe=is_safe,
        days_remaining=days_remaining,
        weeks_to_goal=round_half_up(days_remaining / 7, 1),
        weekly_loss_kg=weekly_loss,
        risk_level=risk_level,
        message=message,
    )


def _assess(daily_deficit: int, weekly_loss: float) -> tuple[RiskLevel, bool, str]:
    if daily_deficit < 0:
        return (
            RiskLevel.GAIN,
            False,
            "Your goal is above your current weight; this plan implies a surplus.",
        )
    if daily_deficit == 0:
        return RiskLevel.SAFE, True, "You're already at your goal weight!"
    if daily_deficit <= SAFE_DEFICIT:
        return (
            RiskLevel.SAFE,
            True,
            f"Healthy pace! You'll lose about {weekly_loss}kg per week.",
        )
    if daily_deficit <= AGGRESSIVE_SAFE_DEFICIT:
        return (
            RiskLevel.AGGRESSIVE,
            True,
            f"Aggressive but achievable. You'll lose about {weekly_loss}kg per week.",
        )
    if daily_deficit <= MAX_ACHIEVABLE_DEFICIT:
        return (
            RiskLevel.AGGRESSIVE,
            False,
            f"This is very aggressive ({weekly_loss}kg/week). "
            "Consider extending your goal date.",
        )
    return (
        RiskLevel.DANGEROUS,
        False,
        "This deficit is too extreme and unhealthy. Please extend your goal date.",
    )
