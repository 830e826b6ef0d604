"""Supabase repository for profiles."""

from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID

from supabase import Client

from deficit_tracker.domain.profile import ActivityLevel, ProfileSnapshot, Sex
from deficit_tracker.services.profiles import ProfileRepository


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase implementation for profiles."""

    client: Client
    default_timezone: str = "UTC"

    def get_profile(self, user_id: UUID) -> ProfileSnapshot | None:
        """Return the profile row for a user."""
        response = (
            self.client.table("profiles")
            .select("*")
            .eq("id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return self._parse(response.data[0])

    def _parse(self, row: dict[str, object]) -> ProfileSnapshot:
        return ProfileSnapshot(
            user_id=UUID(row["id"]),
            date_of_birth=_optional_date(row.get("date_of_birth")),
            sex=Sex(row["gender"]) if row.get("gender") else None,
            height_cm=_optional_float(row.get("height_cm")),
            starting_weight_kg=float(row["starting_weight_kg"]),
            current_weight_kg=_optional_float(row.get("current_weight_kg")),
            goal_weight_kg=float(row["goal_weight_kg"]),
            goal_date=date.fromisoformat(str(row["goal_date"])),
            activity_level=(
                ActivityLevel(row["activity_level"])
                if row.get("activity_level")
                else None
            ),
            created_at=(
                datetime.fromisoformat(str(row["created_at"]))
                if row.get("created_at")
                else None
            ),
            timezone=str(row.get("timezone") or self.default_timezone),
        )


def _optional_date(value: object) -> date | None:
    return date.fromisoformat(str(value)) if value else None


def _optional_float(value: object) -> float | None:
    return float(value) if value is not None else None
