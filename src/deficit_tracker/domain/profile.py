"""Domain models for user profiles."""

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from uuid import UUID


class Sex(Enum):
    """Sex used by the BMR equation."""

    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


class ActivityLevel(Enum):
    """Ordinal activity tiers for TDEE."""

    SEDENTARY = "sedentary"
    LIGHT = "light"
    MODERATE = "moderate"
    ACTIVE = "active"
    VERY_ACTIVE = "very_active"


@dataclass(frozen=True)
class ProfileSnapshot:
    """Biometric and goal state for a user at a point in time."""

    user_id: UUID
    date_of_birth: date | None
    sex: Sex | None
    height_cm: float | None
    starting_weight_kg: float
    current_weight_kg: float | None
    goal_weight_kg: float
    goal_date: date
    activity_level: ActivityLevel | None
    created_at: datetime | None = None
    timezone: str = "UTC"

    @property
    def effective_weight_kg(self) -> float:
        """Return the current weight, falling back to the starting weight."""
        return self.current_weight_kg or self.starting_weight_kg


@dataclass(frozen=True)
class Entitlement:
    """Subscription window that gates access to older calendar days."""

    trial_ends_at: date | None
    is_paid: bool
