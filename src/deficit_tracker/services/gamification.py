"""XP, levels and prestige badges derived from balance history."""

from collections.abc import Sequence
from datetime import date

from deficit_tracker.domain.progress import (
    Badge,
    BalanceBucket,
    DayBalance,
    GamificationState,
    Level,
    Milestone,
)
from deficit_tracker.services.balance import classify_balance
from deficit_tracker.services.rounding import round_int
from deficit_tracker.services.streaks import current_streak, deficit_runs, max_streak

LEVELS: tuple[Level, ...] = (
    Level(1, "Rookie", 0),
    Level(2, "Starter", 300),
    Level(3, "Committed", 800),
    Level(4, "Disciplined", 1800),
    Level(5, "Focused", 3500),
    Level(6, "Relentless", 6000),
    Level(7, "Elite", 10000),
    Level(8, "Champion", 16000),
    Level(9, "Legend", 25000),
    Level(10, "Mythic", 40000),
)

PRESTIGE_BADGES: tuple[Badge, ...] = (
    Badge("One Week Strong", 7),
    Badge("Fortnight Fighter", 14),
    Badge("Three Week Warrior", 21),
    Badge("Month of Iron", 28),
    Badge("Five Week Fury", 35),
    Badge("Six Week Sentinel", 42),
    Badge("Seven Week Sage", 49),
    Badge("Eight Week Elite", 56),
    Badge("Nine Week Titan", 63),
    Badge("Ten Week Legend", 70),
)

WEIGHT_LOSS_MILESTONES: tuple[tuple[int, str], ...] = (
    (1, "First Kilo!"),
    (5, "5kg Club"),
    (10, "Double Digits"),
    (15, "Halfway Hero"),
    (20, "20kg Legend"),
    (25, "Quarter Century"),
    (50, "Half Century"),
)

_STREAK_BONUS = 0.1


def day_xp(balance: float, balance_goal: float, streak_index: int) -> int:
    """Return XP earned by one day.

    Surplus days earn nothing. Deficit days earn a tenth of the deficit,
    boosted 10% per prior day in the streak, halved when the goal was missed.
    """
    bucket = classify_balance(balance, balance_goal)
    if bucket is BalanceBucket.DANGER:
        return 0
    multiplier = 1 + (max(streak_index, 1) - 1) * _STREAK_BONUS
    raw = abs(balance) / 10 * multiplier
    if bucket is BalanceBucket.WARNING:
        raw /= 2
    return round_int(raw)


def total_xp(days: Sequence[DayBalance], balance_goal: float, today: date) -> int:
    """Sum per-day XP over the completed history, oldest first."""
    return sum(
        day_xp(entry.balance, balance_goal, run)
        for entry, run in deficit_runs(days, today)
    )


def level_for_xp(xp: int) -> Level:
    """Return the highest level whose threshold does not exceed ``xp``."""
    current = LEVELS[0]
    for level in LEVELS:
        if level.threshold <= xp:
            current = level
    return current


def next_level(level: Level) -> Level | None:
    """Return the level after ``level``, or None at the top tier."""
    if level.number >= len(LEVELS):
        return None
    return LEVELS[level.number]


def progress_percent(xp: int, level: Level, upcoming: Level | None) -> float:
    """Return progress from the current threshold to the next one."""
    if upcoming is None:
        return 100.0
    span = upcoming.threshold - level.threshold
    return (xp - level.threshold) / span * 100


def earned_badges(max_streak_days: int) -> list[Badge]:
    """Return every badge unlocked by the historical maximum streak."""
    return [badge for badge in PRESTIGE_BADGES if max_streak_days >= badge.streak_days]


def weight_loss_milestone(total_lost_kg: float) -> Milestone:
    """Return the highest milestone reached, or the first one to chase."""
    for kg, name in reversed(WEIGHT_LOSS_MILESTONES):
        if total_lost_kg >= kg:
            return Milestone(kg=kg, name=name, reached=True)
    first_kg, first_name = WEIGHT_LOSS_MILESTONES[0]
    return Milestone(kg=first_kg, name=first_name, reached=False)


def build_state(
    days: Sequence[DayBalance], balance_goal: float, today: date
) -> GamificationState:
    """Derive the full gamification state from balance history."""
    xp = total_xp(days, balance_goal, today)
    longest = max_streak(days, today)
    level = level_for_xp(xp)
    upcoming = next_level(level)
    badges = earned_badges(longest)
    remaining = [badge for badge in PRESTIGE_BADGES if badge not in badges]
    return GamificationState(
        total_xp=xp,
        level=level,
        next_level=upcoming,
        progress_percent=progress_percent(xp, level, upcoming),
        current_streak=current_streak(days, today),
        max_streak=longest,
        earned_badges=badges,
        next_badge=remaining[0] if remaining else None,
    )
