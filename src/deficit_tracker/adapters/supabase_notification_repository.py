"""Supabase repository for notifications."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from deficit_tracker.domain.notifications import Notification
from deficit_tracker.services.notifications import NotificationRepository


@dataclass
class SupabaseNotificationRepository(NotificationRepository):
    """Supabase-backed notification repository."""

    client: Client

    def create_notification(self, user_id: UUID, notification: Notification) -> None:
        """Create a notification row."""
        self.client.table("notifications").insert(
            {
                "user_id": str(user_id),
                "type": notification.type.value,
                "title": notification.title,
                "message": notification.message,
                "metadata": notification.metadata,
            }
        ).execute()
