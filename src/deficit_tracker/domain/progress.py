"""Domain models for computed progress signals."""

from dataclasses import dataclass
from datetime import date
from enum import Enum


class BalanceBucket(Enum):
    """Three-way classification of a balance against the goal."""

    SUCCESS = "success"
    WARNING = "warning"
    DANGER = "danger"


class RiskLevel(Enum):
    """How aggressive a goal deficit is."""

    SAFE = "safe"
    AGGRESSIVE = "aggressive"
    DANGEROUS = "dangerous"
    GAIN = "gain"


@dataclass(frozen=True)
class GoalPlan:
    """Daily deficit required to reach a goal weight by a date."""

    daily_deficit: int
    is_achievable: bool
    is_safe: bool
    days_remaining: int
    weeks_to_goal: float
    weekly_loss_kg: float
    risk_level: RiskLevel
    message: str

    @property
    def balance_goal(self) -> int:
        """Return the deficit as a (negative) balance target."""
        return -self.daily_deficit


@dataclass(frozen=True)
class BalanceReport:
    """Balance formatted relative to the goal."""

    text: str
    is_deficit: bool
    bucket: BalanceBucket
    status: str
    vs_goal: float
    vs_goal_text: str
    to_goal: float
    to_maintenance: float


@dataclass(frozen=True)
class SevenDayBalance:
    """Totals over the seven most recent logged days."""

    total: int
    average: int
    days_with_data: int


@dataclass(frozen=True)
class WeightChange:
    """Change between two real-weight readings."""

    change: float
    is_loss: bool
    percentage: float


@dataclass(frozen=True)
class WeightPrediction:
    """Thirty-day linear weight projection."""

    predicted_weight: float
    predicted_change: float
    is_loss: bool
    confidence: str


@dataclass(frozen=True)
class DayBalance:
    """Balance of a single dated log."""

    day: date
    balance: float


@dataclass(frozen=True)
class Level:
    """XP tier."""

    number: int
    name: str
    threshold: int


@dataclass(frozen=True)
class Badge:
    """Prestige badge unlocked by a historical streak length."""

    name: str
    streak_days: int


@dataclass(frozen=True)
class Milestone:
    """Weight-loss milestone."""

    kg: int
    name: str
    reached: bool


@dataclass(frozen=True)
class GamificationState:
    """XP, level, streaks and badges derived from balance history."""

    total_xp: int
    level: Level
    next_level: Level | None
    progress_percent: float
    current_streak: int
    max_streak: int
    earned_badges: list[Badge]
    next_badge: Badge | None


@dataclass(frozen=True)
class CalendarDay:
    """Display classification of one day of a month."""

    day: date
    weight: float | None
    weight_delta: float | None
    balance: float
    bucket: BalanceBucket | None
    is_success: bool
    is_locked: bool
    is_future: bool
    is_today: bool
    has_data: bool

    @property
    def day_of_month(self) -> int:
        """Return the day number within the month."""
        return self.day.day


@dataclass(frozen=True)
class DaySummary:
    """Per-day outbound aggregate."""

    day: date
    intake: float
    outtake: float
    protein_grams: float
    balance: float
    weight: float | None
    weight_delta: float | None
    bucket: BalanceBucket
    tdee: int
    balance_goal: int
    protein_goal: int
    budget_percent: float


@dataclass(frozen=True)
class RangeSummary:
    """Seven-day and thirty-day outbound aggregate."""

    seven_day_total: int
    seven_day_average: int
    days_with_data: int
    real_weight: float | None
    predicted_weight: float
    predicted_change: float
    is_loss: bool
    confidence: str


@dataclass(frozen=True)
class Dashboard:
    """Everything the progress screen shows for today."""

    today: DaySummary
    week: RangeSummary
    goal: GoalPlan
    gamification: GamificationState
    milestone: Milestone
