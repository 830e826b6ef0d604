"""Rolling "real weight" from sparse weight samples."""

from collections.abc import Iterable
from datetime import date

from deficit_tracker.domain.progress import WeightChange
from deficit_tracker.services.rounding import round_half_up

_WINDOW_SAMPLES = 7


def real_weight(samples: Iterable[tuple[date, float | None]]) -> float | None:
    """Average the seven most recent samples, or None without any."""
    valid = [(day, weight) for day, weight in samples if weight and weight > 0]
    if not valid:
        return None
    recent = sorted(valid, key=lambda sample: sample[0], reverse=True)[
        :_WINDOW_SAMPLES
    ]
    return round_half_up(sum(weight for _, weight in recent) / len(recent), 1)


def weight_change(current_kg: float, previous_kg: float) -> WeightChange:
    """Compare two real-weight readings."""
    change = round_half_up(current_kg - previous_kg, 1)
    percentage = (
        round_half_up(abs(change) / previous_kg * 100, 1) if previous_kg > 0 else 0.0
    )
    return WeightChange(change=abs(change), is_loss=change < 0, percentage=percentage)
