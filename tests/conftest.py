"""Shared test fixtures."""

from dataclasses import dataclass, field, replace
from datetime import UTC, date, datetime
from uuid import UUID, uuid4

import pytest

from deficit_tracker.config import Settings
from deficit_tracker.containers import AppContainer
from deficit_tracker.domain.logs import (
    DailyLog,
    DayTotals,
    EntryDraft,
    EntryType,
    LogEntry,
)
from deficit_tracker.domain.notifications import Notification
from deficit_tracker.domain.profile import (
    ActivityLevel,
    Entitlement,
    ProfileSnapshot,
    Sex,
)
from deficit_tracker.services.commands import CommandDispatcher
from deficit_tracker.services.ledger import EntryLedgerService, LedgerRepository
from deficit_tracker.services.notifications import (
    NotificationRepository,
    NotificationService,
)
from deficit_tracker.services.profiles import ProfileRepository, ProfileService
from deficit_tracker.services.progress import ProgressRepository, ProgressService

USER_ID = UUID("00000000-0000-0000-0000-000000000001")
TODAY = date(2025, 3, 20)


@dataclass
class FixedClock:
    """Clock pinned to a single instant."""

    instant: datetime = field(
        default_factory=lambda: datetime(2025, 3, 20, 12, 0, tzinfo=UTC)
    )

    def now(self) -> datetime:
        return self.instant


@dataclass
class InMemoryLedgerStore(LedgerRepository, ProgressRepository):
    """In-memory daily logs and entries shared by ledger and progress reads."""

    logs: dict[UUID, DailyLog] = field(default_factory=dict)
    entries: dict[UUID, LogEntry] = field(default_factory=dict)
    entitlements: dict[UUID, Entitlement] = field(default_factory=dict)
    totals_writes: list[tuple[UUID, DayTotals]] = field(default_factory=list)

    def get_daily_log(self, user_id: UUID, log_date: date) -> DailyLog | None:
        for log in self.logs.values():
            if log.user_id == user_id and log.log_date == log_date:
                return log
        return None

    def create_daily_log(self, user_id: UUID, log_date: date) -> DailyLog:
        log = DailyLog(id=uuid4(), user_id=user_id, log_date=log_date)
        self.logs[log.id] = log
        return log

    def list_entries(self, daily_log_id: UUID) -> list[LogEntry]:
        return [
            entry
            for entry in self.entries.values()
            if entry.daily_log_id == daily_log_id
        ]

    def insert_entries(
        self, daily_log_id: UUID, entry_type: EntryType, drafts: list[EntryDraft]
    ) -> list[LogEntry]:
        created = []
        for draft in drafts:
            entry = LogEntry(
                id=uuid4(),
                daily_log_id=daily_log_id,
                entry_type=entry_type,
                description=draft.description,
                calories=draft.calories,
                protein_grams=(
                    draft.protein_grams if entry_type is EntryType.FOOD else 0.0
                ),
                ai_parsed=draft.ai_parsed,
                raw_input=draft.raw_input,
            )
            self.entries[entry.id] = entry
            created.append(entry)
        return created

    def update_entries(self, daily_log_id: UUID, entries: list[LogEntry]) -> None:
        for entry in entries:
            self.entries[entry.id] = entry

    def delete_entries(self, daily_log_id: UUID, entry_ids: list[UUID]) -> None:
        for entry_id in entry_ids:
            self.entries.pop(entry_id, None)

    def update_totals(self, daily_log_id: UUID, totals: DayTotals) -> None:
        self.totals_writes.append((daily_log_id, totals))
        self.logs[daily_log_id] = replace(
            self.logs[daily_log_id],
            caloric_intake=totals.intake,
            caloric_outtake=totals.outtake,
            protein_grams=totals.protein_grams,
        )

    def upsert_weight(
        self, user_id: UUID, log_date: date, weight_kg: float
    ) -> DailyLog:
        log = self.get_daily_log(user_id, log_date) or self.create_daily_log(
            user_id, log_date
        )
        updated = replace(log, weight_kg=weight_kg)
        self.logs[log.id] = updated
        return updated

    def delete_history(self, user_id: UUID) -> None:
        for log_id in [log.id for log in self.logs.values() if log.user_id == user_id]:
            self.logs.pop(log_id)
            for entry_id in [
                entry.id
                for entry in self.entries.values()
                if entry.daily_log_id == log_id
            ]:
                self.entries.pop(entry_id)

    def list_daily_logs(
        self, user_id: UUID, start: date | None = None, end: date | None = None
    ) -> list[DailyLog]:
        logs = [
            log
            for log in self.logs.values()
            if log.user_id == user_id
            and (start is None or log.log_date >= start)
            and (end is None or log.log_date <= end)
        ]
        return sorted(logs, key=lambda log: log.log_date)

    def get_entitlement(self, user_id: UUID) -> Entitlement:
        return self.entitlements.get(
            user_id, Entitlement(trial_ends_at=None, is_paid=True)
        )

    def seed(  # noqa: PLR0913
        self,
        user_id: UUID,
        log_date: date,
        intake: float = 0.0,
        outtake: float = 0.0,
        protein: float = 0.0,
        weight: float | None = None,
    ) -> DailyLog:
        """Store a daily log with fixed aggregates."""
        log = DailyLog(
            id=uuid4(),
            user_id=user_id,
            log_date=log_date,
            caloric_intake=intake,
            caloric_outtake=outtake,
            protein_grams=protein,
            weight_kg=weight,
        )
        self.logs[log.id] = log
        return log


@dataclass
class InMemoryProfileRepository(ProfileRepository):
    """In-memory profile repository for tests."""

    profiles: dict[UUID, ProfileSnapshot] = field(default_factory=dict)

    def get_profile(self, user_id: UUID) -> ProfileSnapshot | None:
        return self.profiles.get(user_id)


@dataclass
class InMemoryNotificationRepository(NotificationRepository):
    """In-memory notification repository for tests."""

    notifications: list[tuple[UUID, Notification]] = field(default_factory=list)
    fail: bool = False

    def create_notification(self, user_id: UUID, notification: Notification) -> None:
        if self.fail:
            raise RuntimeError("notifications table unavailable")
        self.notifications.append((user_id, notification))


def make_profile(**overrides: object) -> ProfileSnapshot:
    """Build a complete profile; 35-year-old male, 80 kg, 180 cm."""
    values: dict[str, object] = {
        "user_id": USER_ID,
        "date_of_birth": date(1990, 1, 1),
        "sex": Sex.MALE,
        "height_cm": 180.0,
        "starting_weight_kg": 80.0,
        "current_weight_kg": None,
        "goal_weight_kg": 75.0,
        "goal_date": date(2025, 6, 28),
        "activity_level": ActivityLevel.SEDENTARY,
    }
    values.update(overrides)
    return ProfileSnapshot(**values)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
        api_token="api-token",
    )


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def store() -> InMemoryLedgerStore:
    return InMemoryLedgerStore()


@pytest.fixture
def notification_repository() -> InMemoryNotificationRepository:
    return InMemoryNotificationRepository()


@pytest.fixture
def profile_repository() -> InMemoryProfileRepository:
    return InMemoryProfileRepository(profiles={USER_ID: make_profile()})


@pytest.fixture
def ledger_service(
    store: InMemoryLedgerStore,
    notification_repository: InMemoryNotificationRepository,
) -> EntryLedgerService:
    return EntryLedgerService(
        repository=store,
        notifications=NotificationService(notification_repository),
    )


@pytest.fixture
def progress_service(
    store: InMemoryLedgerStore,
    profile_repository: InMemoryProfileRepository,
    clock: FixedClock,
) -> ProgressService:
    return ProgressService(
        profiles=ProfileService(profile_repository),
        repository=store,
        clock=clock,
    )


@pytest.fixture
def container(
    settings: Settings,
    ledger_service: EntryLedgerService,
    progress_service: ProgressService,
) -> AppContainer:
    return AppContainer(
        settings=settings,
        profile_service=progress_service.profiles,
        ledger_service=ledger_service,
        command_dispatcher=CommandDispatcher(ledger_service),
        progress_service=progress_service,
    )
