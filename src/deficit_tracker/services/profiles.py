"""Profile lookup service."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from deficit_tracker.domain.errors import ProfileNotFoundError
from deficit_tracker.domain.profile import ProfileSnapshot


class ProfileRepository(Protocol):
    """Persistence interface for profiles."""

    def get_profile(self, user_id: UUID) -> ProfileSnapshot | None:
        """Return the user's profile, if present."""


@dataclass
class ProfileService:
    """Service for loading profile snapshots."""

    repository: ProfileRepository

    def get_snapshot(self, user_id: UUID) -> ProfileSnapshot:
        """Return the profile or raise when the user has none."""
        profile = self.repository.get_profile(user_id)
        if profile is None:
            raise ProfileNotFoundError(f"No profile for user {user_id}")
        return profile
