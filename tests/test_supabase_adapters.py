"""Tests for Supabase adapter implementations."""

from dataclasses import dataclass, field
from datetime import date
from uuid import uuid4

from deficit_tracker.adapters.supabase_ledger_repository import (
    SupabaseLedgerRepository,
)
from deficit_tracker.adapters.supabase_notification_repository import (
    SupabaseNotificationRepository,
)
from deficit_tracker.adapters.supabase_profile_repository import (
    SupabaseProfileRepository,
)
from deficit_tracker.adapters.supabase_progress_repository import (
    SupabaseProgressRepository,
)
from deficit_tracker.domain.logs import DayTotals, EntryDraft, EntryType
from deficit_tracker.domain.notifications import Notification, NotificationType
from deficit_tracker.domain.profile import ActivityLevel, Sex


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None


@dataclass
class FakeTable:
    name: str
    response_queue: dict[str, list[list[dict[str, object]]]] = field(
        default_factory=lambda: {
            "select": [],
            "insert": [],
            "update": [],
            "upsert": [],
            "delete": [],
        }
    )
    last_payload: object | None = None
    last_filters: list[tuple[str, object]] = field(default_factory=list)
    upsert_conflicts: list[str] = field(default_factory=list)

    def queue(self, action: str, data: list[dict[str, object]]) -> None:
        self.response_queue[action].append(data)

    def select(self, *_args) -> "FakeTable":
        self._action = "select"
        return self

    def insert(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "insert"
        self.last_payload = payload
        return self

    def update(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "update"
        self.last_payload = payload
        return self

    def upsert(  # type: ignore[no-untyped-def]
        self, payload, on_conflict: str = ""
    ) -> "FakeTable":
        self._action = "upsert"
        self.last_payload = payload
        self.upsert_conflicts.append(on_conflict)
        return self

    def delete(self) -> "FakeTable":
        self._action = "delete"
        return self

    def eq(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append((column, value))
        return self

    def in_(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append((column, value))
        return self

    def gte(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append((f"{column}>=", value))
        return self

    def lte(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append((f"{column}<=", value))
        return self

    def limit(self, _count: int) -> "FakeTable":
        return self

    def order(self, _column: str, desc: bool = False) -> "FakeTable":
        return self

    def execute(self) -> FakeResponse:
        action = getattr(self, "_action", "select")
        queue = self.response_queue.get(action, [])
        data = queue.pop(0) if queue else []
        return FakeResponse(data=data)


@dataclass
class FakeSupabaseClient:
    tables: dict[str, FakeTable] = field(default_factory=dict)

    def table(self, name: str) -> FakeTable:
        if name not in self.tables:
            self.tables[name] = FakeTable(name=name)
        return self.tables[name]


def _log_row(log_id: str, user_id: str, **values: object) -> dict[str, object]:
    row: dict[str, object] = {
        "id": log_id,
        "user_id": user_id,
        "log_date": "2025-03-20",
        "caloric_intake": 0,
        "caloric_outtake": 0,
        "protein_grams": 0,
        "weight_kg": None,
    }
    row.update(values)
    return row


def test_supabase_profile_repository() -> None:
    client = FakeSupabaseClient()
    user_id = str(uuid4())
    client.table("profiles").queue(
        "select",
        [
            {
                "id": user_id,
                "date_of_birth": "1990-01-01",
                "gender": "female",
                "height_cm": 165,
                "starting_weight_kg": 70,
                "current_weight_kg": None,
                "goal_weight_kg": 62,
                "goal_date": "2025-09-01",
                "activity_level": "moderate",
                "created_at": "2025-01-01T08:00:00+00:00",
            }
        ],
    )

    repository = SupabaseProfileRepository(client, default_timezone="Europe/Berlin")
    profile = repository.get_profile(uuid4())

    assert profile is not None
    assert profile.sex is Sex.FEMALE
    assert profile.activity_level is ActivityLevel.MODERATE
    assert profile.effective_weight_kg == 70
    assert profile.goal_date == date(2025, 9, 1)
    assert profile.timezone == "Europe/Berlin"
    assert repository.get_profile(uuid4()) is None


def test_supabase_profile_repository_leaves_unset_activity_level_empty() -> None:
    client = FakeSupabaseClient()
    client.table("profiles").queue(
        "select",
        [
            {
                "id": str(uuid4()),
                "date_of_birth": "1990-01-01",
                "gender": "male",
                "height_cm": 180,
                "starting_weight_kg": 80,
                "goal_weight_kg": 75,
                "goal_date": "2025-06-28",
                "activity_level": None,
            }
        ],
    )

    profile = SupabaseProfileRepository(client).get_profile(uuid4())

    assert profile is not None
    assert profile.activity_level is None


def test_supabase_ledger_repository_logs_and_entries() -> None:
    client = FakeSupabaseClient()
    user_id = str(uuid4())
    log_id = str(uuid4())
    logs_table = client.table("daily_logs")
    entries_table = client.table("log_entries")
    logs_table.queue("insert", [_log_row(log_id, user_id)])
    entries_table.queue(
        "insert",
        [
            {
                "id": str(uuid4()),
                "daily_log_id": log_id,
                "entry_type": "food",
                "description": "oats",
                "calories": 300,
                "protein_grams": 10,
                "ai_parsed": True,
                "raw_input": "oats",
            }
        ],
    )

    repository = SupabaseLedgerRepository(client)
    log = repository.create_daily_log(uuid4(), date(2025, 3, 20))
    entries = repository.insert_entries(
        log.id, EntryType.FOOD, [EntryDraft("oats", 300, 10, raw_input="oats")]
    )
    repository.update_totals(log.id, DayTotals(300, 0, 10))

    assert str(log.id) == log_id
    assert entries[0].entry_type is EntryType.FOOD
    assert isinstance(logs_table.last_payload, dict)
    assert logs_table.last_payload["caloric_intake"] == 300
    assert repository.get_daily_log(uuid4(), date(2025, 3, 21)) is None


def test_supabase_ledger_repository_exercise_payload_has_no_protein() -> None:
    client = FakeSupabaseClient()
    entries_table = client.table("log_entries")
    log_id = uuid4()
    entries_table.queue(
        "insert",
        [
            {
                "id": str(uuid4()),
                "daily_log_id": str(log_id),
                "entry_type": "exercise",
                "description": "run",
                "calories": 300,
                "protein_grams": 0,
                "ai_parsed": True,
            }
        ],
    )

    SupabaseLedgerRepository(client).insert_entries(
        log_id, EntryType.EXERCISE, [EntryDraft("run", 300, 5)]
    )

    assert isinstance(entries_table.last_payload, list)
    assert entries_table.last_payload[0]["protein_grams"] == 0


def test_supabase_ledger_repository_weight_and_delete() -> None:
    client = FakeSupabaseClient()
    user_id = str(uuid4())
    logs_table = client.table("daily_logs")
    entries_table = client.table("log_entries")
    logs_table.queue("upsert", [_log_row(str(uuid4()), user_id, weight_kg=79.1)])

    repository = SupabaseLedgerRepository(client)
    log = repository.upsert_weight(uuid4(), date(2025, 3, 20), 79.1)
    entry_ids = [uuid4(), uuid4()]
    repository.delete_entries(log.id, entry_ids)

    assert log.weight_kg == 79.1
    assert logs_table.upsert_conflicts == ["user_id,log_date"]
    assert ("id", [str(entry_id) for entry_id in entry_ids]) in (
        entries_table.last_filters
    )


def test_supabase_progress_repository() -> None:
    client = FakeSupabaseClient()
    user_id = str(uuid4())
    logs_table = client.table("daily_logs")
    logs_table.queue(
        "select",
        [
            _log_row(str(uuid4()), user_id, log_date="2025-03-19", weight_kg=80),
            _log_row(str(uuid4()), user_id, caloric_intake=1500),
        ],
    )
    client.table("subscriptions").queue(
        "select", [{"status": "trialing", "trial_ends_at": "2025-03-27T00:00:00Z"}]
    )

    repository = SupabaseProgressRepository(client)
    logs = repository.list_daily_logs(
        uuid4(), start=date(2025, 3, 1), end=date(2025, 3, 31)
    )
    entitlement = repository.get_entitlement(uuid4())

    assert [log.log_date for log in logs] == [date(2025, 3, 19), date(2025, 3, 20)]
    assert logs[1].caloric_intake == 1500
    assert ("log_date>=", "2025-03-01") in logs_table.last_filters
    assert entitlement.trial_ends_at == date(2025, 3, 27)
    assert entitlement.is_paid is False
    missing = repository.get_entitlement(uuid4())
    assert missing.trial_ends_at is None


def test_supabase_notification_repository() -> None:
    client = FakeSupabaseClient()
    table = client.table("notifications")

    SupabaseNotificationRepository(client).create_notification(
        uuid4(),
        Notification(
            type=NotificationType.WEIGHT,
            title="Weight Logged",
            message="Recorded 80 kg",
            metadata={"weight": 80},
        ),
    )

    assert isinstance(table.last_payload, dict)
    assert table.last_payload["type"] == "weight"
    assert table.last_payload["metadata"] == {"weight": 80}
