"""Thirty-day linear weight projection."""

from collections.abc import Sequence

from deficit_tracker.domain.progress import WeightPrediction
from deficit_tracker.services.goals import KCAL_PER_KG
from deficit_tracker.services.rounding import round_half_up

PROJECTION_DAYS = 30
_HIGH_CONFIDENCE_POINTS = 6
_MEDIUM_CONFIDENCE_POINTS = 3


def predict_30_days(
    current_real_weight: float, balances: Sequence[float]
) -> WeightPrediction:
    """Extrapolate the average recent balance over thirty days.

    Assumes the mean balance persists unchanged; this is intentionally linear.
    """
    if not balances:
        return WeightPrediction(
            predicted_weight=current_real_weight,
            predicted_change=0.0,
            is_loss=False,
            confidence="low",
        )
    avg_daily_deficit = -sum(balances) / len(balances)
    projected_change = avg_daily_deficit * PROJECTION_DAYS / KCAL_PER_KG
    return WeightPrediction(
        predicted_weight=round_half_up(current_real_weight - projected_change, 1),
        predicted_change=round_half_up(abs(projected_change), 1),
        is_loss=projected_change > 0,
        confidence=_confidence(len(balances)),
    )


def _confidence(points: int) -> str:
    if points >= _HIGH_CONFIDENCE_POINTS:
        return "high"
    if points >= _MEDIUM_CONFIDENCE_POINTS:
        return "medium"
    return "low"
