"""Notification records emitted after ledger mutations."""

from dataclasses import dataclass, field
from enum import Enum


class NotificationType(Enum):
    """Category of a notification."""

    FOOD = "food"
    EXERCISE = "exercise"
    EDIT = "edit"
    DELETE = "delete"
    WEIGHT = "weight"
    SYSTEM = "system"


@dataclass(frozen=True)
class Notification:
    """A user-facing notification awaiting delivery."""

    type: NotificationType
    title: str
    message: str
    metadata: dict[str, object] = field(default_factory=dict)
