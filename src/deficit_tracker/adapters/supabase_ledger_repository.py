"""Supabase repository for daily logs and their entries."""

from dataclasses import dataclass
from datetime import UTC, date, datetime
from uuid import UUID

from supabase import Client

from deficit_tracker.domain.logs import (
    DailyLog,
    DayTotals,
    EntryDraft,
    EntryType,
    LogEntry,
)
from deficit_tracker.services.ledger import LedgerRepository

_LOG_COLUMNS = (
    "id, user_id, log_date, caloric_intake, caloric_outtake, protein_grams, "
    "weight_kg"
)
_ENTRY_COLUMNS = (
    "id, daily_log_id, entry_type, description, calories, protein_grams, "
    "ai_parsed, raw_input"
)


@dataclass
class SupabaseLedgerRepository(LedgerRepository):
    """Supabase implementation for the entry ledger."""

    client: Client

    def get_daily_log(self, user_id: UUID, log_date: date) -> DailyLog | None:
        """Return the daily log for a user and date."""
        response = (
            self.client.table("daily_logs")
            .select(_LOG_COLUMNS)
            .eq("user_id", str(user_id))
            .eq("log_date", log_date.isoformat())
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return parse_daily_log(response.data[0])

    def create_daily_log(self, user_id: UUID, log_date: date) -> DailyLog:
        """Create an empty daily log row."""
        response = (
            self.client.table("daily_logs")
            .insert(
                {
                    "user_id": str(user_id),
                    "log_date": log_date.isoformat(),
                    "caloric_intake": 0,
                    "caloric_outtake": 0,
                    "protein_grams": 0,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create daily log")
        return parse_daily_log(response.data[0])

    def list_entries(self, daily_log_id: UUID) -> list[LogEntry]:
        """Return all entries of a daily log."""
        response = (
            self.client.table("log_entries")
            .select(_ENTRY_COLUMNS)
            .eq("daily_log_id", str(daily_log_id))
            .order("created_at", desc=False)
            .execute()
        )
        return [_parse_entry(row) for row in response.data or []]

    def insert_entries(
        self, daily_log_id: UUID, entry_type: EntryType, drafts: list[EntryDraft]
    ) -> list[LogEntry]:
        """Insert entry rows for a daily log."""
        payload = [
            {
                "daily_log_id": str(daily_log_id),
                "entry_type": entry_type.value,
                "description": draft.description,
                "calories": draft.calories,
                "protein_grams": (
                    draft.protein_grams if entry_type is EntryType.FOOD else 0
                ),
                "ai_parsed": draft.ai_parsed,
                "raw_input": draft.raw_input,
            }
            for draft in drafts
        ]
        if not payload:
            return []
        response = self.client.table("log_entries").insert(payload).execute()
        if not response.data:
            raise RuntimeError("Failed to insert log entries")
        return [_parse_entry(row) for row in response.data]

    def update_entries(self, daily_log_id: UUID, entries: list[LogEntry]) -> None:
        """Update edited entry rows."""
        for entry in entries:
            self.client.table("log_entries").update(
                {
                    "description": entry.description,
                    "calories": entry.calories,
                    "protein_grams": entry.protein_grams,
                }
            ).eq("id", str(entry.id)).eq("daily_log_id", str(daily_log_id)).execute()

    def delete_entries(self, daily_log_id: UUID, entry_ids: list[UUID]) -> None:
        """Delete entry rows."""
        if not entry_ids:
            return
        self.client.table("log_entries").delete().eq(
            "daily_log_id", str(daily_log_id)
        ).in_("id", [str(entry_id) for entry_id in entry_ids]).execute()

    def update_totals(self, daily_log_id: UUID, totals: DayTotals) -> None:
        """Write derived aggregates in a single update."""
        self.client.table("daily_logs").update(
            {
                "caloric_intake": totals.intake,
                "caloric_outtake": totals.outtake,
                "protein_grams": totals.protein_grams,
                "updated_at": datetime.now(tz=UTC).isoformat(),
            }
        ).eq("id", str(daily_log_id)).execute()

    def upsert_weight(
        self, user_id: UUID, log_date: date, weight_kg: float
    ) -> DailyLog:
        """Set a day's weight, creating the log row when missing."""
        response = (
            self.client.table("daily_logs")
            .upsert(
                {
                    "user_id": str(user_id),
                    "log_date": log_date.isoformat(),
                    "weight_kg": weight_kg,
                },
                on_conflict="user_id,log_date",
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to save weight")
        return parse_daily_log(response.data[0])

    def delete_history(self, user_id: UUID) -> None:
        """Delete all daily logs of a user; entries cascade."""
        self.client.table("daily_logs").delete().eq("user_id", str(user_id)).execute()


def parse_daily_log(row: dict[str, object]) -> DailyLog:
    """Build a DailyLog from a daily_logs row."""
    weight = row.get("weight_kg")
    return DailyLog(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        log_date=date.fromisoformat(str(row["log_date"])),
        caloric_intake=float(row.get("caloric_intake") or 0.0),
        caloric_outtake=float(row.get("caloric_outtake") or 0.0),
        protein_grams=float(row.get("protein_grams") or 0.0),
        weight_kg=float(weight) if weight is not None else None,
    )


def _parse_entry(row: dict[str, object]) -> LogEntry:
    return LogEntry(
        id=UUID(str(row["id"])),
        daily_log_id=UUID(str(row["daily_log_id"])),
        entry_type=EntryType(row["entry_type"]),
        description=str(row.get("description", "")),
        calories=float(row.get("calories") or 0.0),
        protein_grams=float(row.get("protein_grams") or 0.0),
        ai_parsed=bool(row.get("ai_parsed", True)),
        raw_input=row.get("raw_input"),
    )
