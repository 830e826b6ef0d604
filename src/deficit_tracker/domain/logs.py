"""Domain models for daily logs and their entries."""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from uuid import UUID


class EntryType(Enum):
    """Kind of logged item."""

    FOOD = "food"
    EXERCISE = "exercise"


@dataclass(frozen=True)
class DayTotals:
    """Aggregates derived from a day's entries."""

    intake: float
    outtake: float
    protein_grams: float


@dataclass(frozen=True)
class DailyLog:
    """One row per user per calendar date."""

    id: UUID
    user_id: UUID
    log_date: date
    caloric_intake: float = 0.0
    caloric_outtake: float = 0.0
    protein_grams: float = 0.0
    weight_kg: float | None = None

    @property
    def totals(self) -> DayTotals:
        """Return the stored aggregates."""
        return DayTotals(
            intake=self.caloric_intake,
            outtake=self.caloric_outtake,
            protein_grams=self.protein_grams,
        )


@dataclass(frozen=True)
class EntryDraft:
    """Entry that has not been persisted yet."""

    description: str
    calories: float
    protein_grams: float = 0.0
    ai_parsed: bool = True
    raw_input: str | None = None


@dataclass(frozen=True)
class LogEntry:
    """A single food or exercise item owned by a daily log."""

    id: UUID
    daily_log_id: UUID
    entry_type: EntryType
    description: str
    calories: float
    protein_grams: float
    ai_parsed: bool
    raw_input: str | None = None


@dataclass(frozen=True)
class EntryPatch:
    """Partial update applied to matching entries."""

    calories: float | None = None
    protein_grams: float | None = None
    description: str | None = None

    def is_empty(self) -> bool:
        """Return True when the patch changes nothing."""
        return (
            self.calories is None
            and self.protein_grams is None
            and self.description is None
        )


@dataclass(frozen=True)
class MutationResult:
    """Outcome of a ledger mutation reported back to the caller.

    ``unmatched`` names search terms that matched no entry; ``skipped`` names
    edits that carried no changes.
    """

    success: bool
    message: str
    matched: int = 0
    daily_log_id: UUID | None = None
    totals: DayTotals | None = None
    unmatched: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
