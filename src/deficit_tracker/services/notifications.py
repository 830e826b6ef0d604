"""Notification recording for ledger mutations."""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Protocol
from uuid import UUID

from deficit_tracker.domain.logs import EntryDraft, EntryPatch, EntryType
from deficit_tracker.domain.notifications import Notification, NotificationType

_logger = logging.getLogger(__name__)


class NotificationRepository(Protocol):
    """Persistence interface for notifications."""

    def create_notification(self, user_id: UUID, notification: Notification) -> None:
        """Create a notification row."""


@dataclass
class NotificationService:
    """Service that records notifications without failing the caller."""

    repository: NotificationRepository

    def record(self, user_id: UUID, notification: Notification) -> None:
        """Persist a notification, logging instead of raising on failure."""
        try:
            self.repository.create_notification(user_id, notification)
        except Exception:
            _logger.exception(
                "Failed to record notification",
                extra={"user_id": str(user_id), "type": notification.type.value},
            )


def entries_notification(
    entry_type: EntryType, drafts: list[EntryDraft]
) -> Notification:
    """Build the notification for newly logged food or exercise."""
    total_calories = sum(draft.calories for draft in drafts)
    names = ", ".join(draft.description for draft in drafts)
    items = [
        {"description": draft.description, "calories": draft.calories}
        for draft in drafts
    ]
    if entry_type is EntryType.EXERCISE:
        return Notification(
            type=NotificationType.EXERCISE,
            title="Exercise Logged",
            message=names,
            metadata={"calories": total_calories, "items": items},
        )
    return Notification(
        type=NotificationType.FOOD,
        title="Food Logged",
        message=names,
        metadata={
            "calories": total_calories,
            "protein": sum(draft.protein_grams for draft in drafts),
            "items": items,
        },
    )


def edit_notification(search_term: str, patch: EntryPatch, count: int) -> Notification:
    """Build the notification for an applied edit."""
    parts = []
    if patch.calories is not None:
        parts.append(f"{patch.calories:g} cal")
    if patch.protein_grams is not None:
        parts.append(f"{patch.protein_grams:g}g protein")
    if patch.description is not None:
        parts.append(f'"{patch.description}"')
    return Notification(
        type=NotificationType.EDIT,
        title="Entry Updated",
        message=(
            f'Updated {count} "{search_term}" {entries_word(count)} '
            f"to {' and '.join(parts)}"
        ),
        metadata={
            "search_term": search_term,
            "updates": {
                "calories": patch.calories,
                "protein": patch.protein_grams,
                "description": patch.description,
            },
            "count": count,
        },
    )


def delete_notification(search_term: str, count: int) -> Notification:
    """Build the notification for removed entries."""
    return Notification(
        type=NotificationType.DELETE,
        title="Entry Deleted",
        message=f'Removed {count} "{search_term}" {entries_word(count)}',
        metadata={"search_term": search_term, "count": count},
    )


def weight_notification(weight_kg: float, log_date: date) -> Notification:
    """Build the notification for a weight sample."""
    label = f"{log_date.strftime('%b')} {log_date.day}"
    return Notification(
        type=NotificationType.WEIGHT,
        title="Weight Logged",
        message=f"Recorded {weight_kg:g} kg for {label}",
        metadata={"weight": weight_kg, "date": log_date.isoformat()},
    )


def reset_notification() -> Notification:
    """Build the notification for a full history reset."""
    return Notification(
        type=NotificationType.SYSTEM,
        title="History Reset",
        message="All daily logs and entries were removed.",
    )


def entries_word(count: int) -> str:
    """Return "entry" or "entries" for a count."""
    return "entry" if count == 1 else "entries"
