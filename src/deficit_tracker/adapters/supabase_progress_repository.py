"""Supabase repository for progress reads."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from supabase import Client

from deficit_tracker.adapters.supabase_ledger_repository import parse_daily_log
from deficit_tracker.domain.logs import DailyLog
from deficit_tracker.domain.profile import Entitlement
from deficit_tracker.services.progress import ProgressRepository


@dataclass
class SupabaseProgressRepository(ProgressRepository):
    """Supabase implementation for progress queries."""

    client: Client

    def list_daily_logs(
        self, user_id: UUID, start: date | None = None, end: date | None = None
    ) -> list[DailyLog]:
        """Return daily logs in ascending date order."""
        query = (
            self.client.table("daily_logs")
            .select(
                "id, user_id, log_date, caloric_intake, caloric_outtake, "
                "protein_grams, weight_kg"
            )
            .eq("user_id", str(user_id))
        )
        if start is not None:
            query = query.gte("log_date", start.isoformat())
        if end is not None:
            query = query.lte("log_date", end.isoformat())
        response = query.order("log_date", desc=False).execute()
        return [parse_daily_log(row) for row in response.data or []]

    def get_entitlement(self, user_id: UUID) -> Entitlement:
        """Return the trial window and payment status."""
        response = (
            self.client.table("subscriptions")
            .select("status, trial_ends_at")
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return Entitlement(trial_ends_at=None, is_paid=False)
        row = response.data[0]
        trial_ends_at = row.get("trial_ends_at")
        return Entitlement(
            trial_ends_at=(
                date.fromisoformat(str(trial_ends_at)[:10]) if trial_ends_at else None
            ),
            is_paid=row.get("status") == "active",
        )
