"""Outbound progress aggregates built from profile and daily logs."""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Protocol
from uuid import UUID

from deficit_tracker.domain.logs import DailyLog
from deficit_tracker.domain.profile import ActivityLevel, Entitlement, ProfileSnapshot
from deficit_tracker.domain.progress import (
    CalendarDay,
    Dashboard,
    DayBalance,
    DaySummary,
    GamificationState,
    GoalPlan,
    RangeSummary,
)
from deficit_tracker.services import month_calendar
from deficit_tracker.services.balance import (
    classify_balance,
    daily_balance,
    goal_budget_percent,
    seven_day_balance,
)
from deficit_tracker.services.biometrics import maintenance_calories, protein_goal
from deficit_tracker.services.clock import Clock, local_today
from deficit_tracker.services.gamification import build_state, weight_loss_milestone
from deficit_tracker.services.goals import required_daily_deficit
from deficit_tracker.services.profiles import ProfileService
from deficit_tracker.services.projection import predict_30_days
from deficit_tracker.services.rounding import round_half_up
from deficit_tracker.services.weights import real_weight


class ProgressRepository(Protocol):
    """Read interface for daily logs and the entitlement window."""

    def list_daily_logs(
        self, user_id: UUID, start: date | None = None, end: date | None = None
    ) -> list[DailyLog]:
        """Return a user's daily logs, optionally bounded by dates (inclusive)."""

    def get_entitlement(self, user_id: UUID) -> Entitlement:
        """Return the user's trial and payment state."""


@dataclass(frozen=True)
class _Baseline:
    profile: ProfileSnapshot
    today: date
    tdee: int
    plan: GoalPlan


@dataclass
class ProgressService:
    """Computes day, week, month and gamification views for a user."""

    profiles: ProfileService
    repository: ProgressRepository
    clock: Clock

    def today(self, user_id: UUID) -> date:
        """Return the user's local calendar day."""
        profile = self.profiles.get_snapshot(user_id)
        return local_today(self.clock, profile.timezone)

    def goal_plan(self, user_id: UUID) -> GoalPlan:
        """Return the deficit plan for the user's goal."""
        return self._baseline(user_id).plan

    def day_summary(self, user_id: UUID, day: date | None = None) -> DaySummary:
        """Return the aggregates of one day, today by default."""
        return self._day_summary(user_id, self._baseline(user_id), day)

    def range_summary(self, user_id: UUID) -> RangeSummary:
        """Return the seven-day balance and thirty-day projection."""
        return self._range_summary(user_id, self._baseline(user_id))

    def gamification(self, user_id: UUID) -> GamificationState:
        """Return XP, level, streak and badge state."""
        return self._gamification(user_id, self._baseline(user_id))

    def calendar(
        self, user_id: UUID, year: int | None = None, month: int | None = None
    ) -> list[CalendarDay]:
        """Classify each day of a month, the current one by default."""
        baseline = self._baseline(user_id)
        year = year or baseline.today.year
        month = month or baseline.today.month
        first, last = month_calendar.month_bounds(year, month)
        logs = self.repository.list_daily_logs(
            user_id, first - timedelta(days=1), last
        )
        return month_calendar.project_month(
            year,
            month,
            _by_date(logs),
            baseline.tdee,
            baseline.plan.balance_goal,
            self.repository.get_entitlement(user_id),
            baseline.today,
        )

    def dashboard(self, user_id: UUID) -> Dashboard:
        """Return every progress view for today in one aggregate."""
        baseline = self._baseline(user_id)
        week = self._range_summary(user_id, baseline)
        weight = week.real_weight or baseline.profile.effective_weight_kg
        lost = baseline.profile.starting_weight_kg - weight
        return Dashboard(
            today=self._day_summary(user_id, baseline, None),
            week=week,
            goal=baseline.plan,
            gamification=self._gamification(user_id, baseline),
            milestone=weight_loss_milestone(round_half_up(lost, 1)),
        )

    def _baseline(self, user_id: UUID) -> _Baseline:
        profile = self.profiles.get_snapshot(user_id)
        today = local_today(self.clock, profile.timezone)
        return _Baseline(
            profile=profile,
            today=today,
            tdee=maintenance_calories(profile, today),
            plan=required_daily_deficit(
                profile.effective_weight_kg,
                profile.goal_weight_kg,
                profile.goal_date,
                today,
            ),
        )

    def _day_summary(
        self, user_id: UUID, baseline: _Baseline, day: date | None
    ) -> DaySummary:
        day = day or baseline.today
        logs = _by_date(
            self.repository.list_daily_logs(user_id, day - timedelta(days=1), day)
        )
        log = logs.get(day)
        intake = log.caloric_intake if log else 0.0
        outtake = log.caloric_outtake if log else 0.0
        balance = daily_balance(baseline.tdee, intake, outtake)
        profile = baseline.profile
        return DaySummary(
            day=day,
            intake=intake,
            outtake=outtake,
            protein_grams=log.protein_grams if log else 0.0,
            balance=balance,
            weight=log.weight_kg if log else None,
            weight_delta=month_calendar.weight_delta(day, logs),
            bucket=classify_balance(balance, baseline.plan.balance_goal),
            tdee=baseline.tdee,
            balance_goal=baseline.plan.balance_goal,
            protein_goal=protein_goal(
                profile.effective_weight_kg,
                profile.activity_level not in (None, ActivityLevel.SEDENTARY),
            ),
            budget_percent=goal_budget_percent(
                intake, baseline.tdee, outtake, baseline.plan.balance_goal
            ),
        )

    def _range_summary(self, user_id: UUID, baseline: _Baseline) -> RangeSummary:
        logs = self.repository.list_daily_logs(user_id, end=baseline.today)
        week = _recent(_balances(logs, baseline.tdee))
        totals = seven_day_balance(week)
        weight = real_weight((log.log_date, log.weight_kg) for log in logs)
        prediction = predict_30_days(
            weight or baseline.profile.effective_weight_kg,
            [entry.balance for entry in week],
        )
        return RangeSummary(
            seven_day_total=totals.total,
            seven_day_average=totals.average,
            days_with_data=totals.days_with_data,
            real_weight=weight,
            predicted_weight=prediction.predicted_weight,
            predicted_change=prediction.predicted_change,
            is_loss=prediction.is_loss,
            confidence=prediction.confidence,
        )

    def _gamification(self, user_id: UUID, baseline: _Baseline) -> GamificationState:
        logs = self.repository.list_daily_logs(user_id, end=baseline.today)
        return build_state(
            _balances(logs, baseline.tdee),
            baseline.plan.balance_goal,
            baseline.today,
        )


def _by_date(logs: Iterable[DailyLog]) -> dict[date, DailyLog]:
    return {log.log_date: log for log in logs}


def _balances(logs: Iterable[DailyLog], tdee: int) -> list[DayBalance]:
    return [
        DayBalance(
            day=log.log_date,
            balance=daily_balance(tdee, log.caloric_intake, log.caloric_outtake),
        )
        for log in logs
    ]


def _recent(balances: list[DayBalance], count: int = 7) -> list[DayBalance]:
    return sorted(balances, key=lambda entry: entry.day, reverse=True)[:count]
