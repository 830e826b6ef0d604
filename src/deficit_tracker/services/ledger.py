"""Entry ledger and per-day aggregate reconciliation.

A daily log's intake, outtake and protein are always recomputed from the full
entry set of that day after every mutation; they are never adjusted by deltas.
Once an entry write has been attempted the day is reconciled even if the write
fails, so stored aggregates always match whatever entries were persisted.
"""

import logging
import re
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import date
from typing import Protocol
from uuid import UUID

from deficit_tracker.domain.logs import (
    DailyLog,
    DayTotals,
    EntryDraft,
    EntryPatch,
    EntryType,
    LogEntry,
    MutationResult,
)
from deficit_tracker.services.notifications import (
    NotificationService,
    delete_notification,
    edit_notification,
    entries_notification,
    entries_word,
    reset_notification,
    weight_notification,
)

_logger = logging.getLogger(__name__)

_COUNT_PATTERN = re.compile(r"^\s*(\d+)\s+([a-z]+)\b", re.IGNORECASE)

# Measures rather than counts: "150 grams chicken" is one portion.
_UNIT_WORDS = frozenset(
    {
        "g", "gr", "gram", "grams", "kg", "kgs", "kilo", "kilos", "kilogram",
        "kilograms", "mg", "milligram", "milligrams", "ml", "milliliter",
        "milliliters", "millilitre", "millilitres", "cl", "dl", "l", "liter",
        "liters", "litre", "litres", "oz", "ounce", "ounces", "lb", "lbs",
        "pound", "pounds", "cal", "cals", "kcal", "kcals", "calorie",
        "calories", "cup", "cups", "tbsp", "tablespoon", "tablespoons", "tsp",
        "teaspoon", "teaspoons", "s", "sec", "secs", "second", "seconds",
        "min", "mins", "minute", "minutes", "h", "hr", "hrs", "hour", "hours",
        "m", "meter", "meters", "metre", "metres", "km", "kms", "kilometer",
        "kilometers", "kilometre", "kilometres", "mi", "mile", "miles", "yd",
        "yds", "yard", "yards", "ft", "feet", "foot", "step", "steps", "rep",
        "reps", "set", "sets", "lap", "laps", "round", "rounds", "floor",
        "floors", "percent", "pct", "x",
    }
)  # fmt: skip


class LedgerRepository(Protocol):
    """Persistence interface for daily logs and their entries."""

    def get_daily_log(self, user_id: UUID, log_date: date) -> DailyLog | None:
        """Return the daily log for a user and date, if present."""

    def create_daily_log(self, user_id: UUID, log_date: date) -> DailyLog:
        """Create an empty daily log and return it."""

    def list_entries(self, daily_log_id: UUID) -> list[LogEntry]:
        """Return every entry of a daily log."""

    def insert_entries(
        self, daily_log_id: UUID, entry_type: EntryType, drafts: list[EntryDraft]
    ) -> list[LogEntry]:
        """Insert entries for a daily log."""

    def update_entries(self, daily_log_id: UUID, entries: list[LogEntry]) -> None:
        """Persist edited entries of a daily log."""

    def delete_entries(self, daily_log_id: UUID, entry_ids: list[UUID]) -> None:
        """Delete entries of a daily log."""

    def update_totals(self, daily_log_id: UUID, totals: DayTotals) -> None:
        """Write the derived aggregates of a daily log in one update."""

    def upsert_weight(
        self, user_id: UUID, log_date: date, weight_kg: float
    ) -> DailyLog:
        """Set the weight sample of a day, creating its log if needed."""

    def delete_history(self, user_id: UUID) -> None:
        """Delete every daily log and entry of a user."""


class DayLockRegistry:
    """Hands out one lock per (user, date) so same-day mutations serialize.

    A day's lock lives only while some caller holds or waits for it, so the
    registry never grows beyond the number of days being mutated at once.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[tuple[UUID, date], tuple[threading.Lock, int]] = {}

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)

    @contextmanager
    def hold(self, user_id: UUID, log_date: date) -> Iterator[None]:
        """Hold the lock for a single day."""
        key = (user_id, log_date)
        with self._guard:
            lock, holders = self._locks.get(key, (threading.Lock(), 0))
            self._locks[key] = (lock, holders + 1)
        try:
            with lock:
                yield
        finally:
            with self._guard:
                lock, holders = self._locks[key]
                if holders == 1:
                    del self._locks[key]
                else:
                    self._locks[key] = (lock, holders - 1)


@dataclass
class EntryLedgerService:
    """Applies entry mutations and reconciles the affected day."""

    repository: LedgerRepository
    notifications: NotificationService
    locks: DayLockRegistry = field(default_factory=DayLockRegistry)

    def add_entries(
        self,
        user_id: UUID,
        log_date: date,
        entry_type: EntryType,
        drafts: list[EntryDraft],
    ) -> MutationResult:
        """Insert entries for a day and reconcile it."""
        if not drafts:
            return MutationResult(success=False, message="Nothing to log.")
        with self.locks.hold(user_id, log_date):
            log = self.repository.get_daily_log(user_id, log_date)
            if log is None:
                log = self.repository.create_daily_log(user_id, log_date)
            try:
                self.repository.insert_entries(log.id, entry_type, drafts)
            finally:
                totals = self._reconcile(log.id)
        self.notifications.record(user_id, entries_notification(entry_type, drafts))
        _logger.info(
            "Logged %s %s entries for %s", len(drafts), entry_type.value, log_date
        )
        return MutationResult(
            success=True,
            message=f"Logged {len(drafts)} {entry_type.value} "
            f"{entries_word(len(drafts))}.",
            matched=len(drafts),
            daily_log_id=log.id,
            totals=totals,
        )

    def edit_entries(
        self, user_id: UUID, log_date: date, search_term: str, patch: EntryPatch
    ) -> MutationResult:
        """Update entries matching ``search_term`` and reconcile the day."""
        return self.multi_edit(user_id, log_date, [(search_term, patch)])

    def multi_edit(
        self,
        user_id: UUID,
        log_date: date,
        edits: list[tuple[str, EntryPatch]],
    ) -> MutationResult:
        """Apply several search-and-update edits, then reconcile once.

        Terms that match nothing and edits without changes are reported in
        the result; the call fails only when no edit was applied.
        """
        applied: list[tuple[str, EntryPatch, int]] = []
        unmatched: list[str] = []
        skipped: list[str] = []
        totals: DayTotals | None = None
        with self.locks.hold(user_id, log_date):
            log = self.repository.get_daily_log(user_id, log_date)
            if log is None:
                return _no_entries(log_date)
            written = False
            try:
                for search_term, patch in edits:
                    if patch.is_empty():
                        skipped.append(search_term)
                        continue
                    matches = find_entries(
                        self.repository.list_entries(log.id), search_term
                    )
                    if not matches:
                        unmatched.append(search_term)
                        continue
                    written = True
                    self.repository.update_entries(
                        log.id, [apply_patch(entry, patch) for entry in matches]
                    )
                    applied.append((search_term, patch, len(matches)))
            finally:
                if written:
                    totals = self._reconcile(log.id)
        if not applied:
            return _nothing_applied(unmatched, skipped, log.id)
        for search_term, patch, count in applied:
            self.notifications.record(
                user_id, edit_notification(search_term, patch, count)
            )
        matched = sum(count for _, _, count in applied)
        _logger.info(
            "Edited %s entries for %s",
            matched,
            log_date,
            extra={"unmatched": unmatched, "skipped": skipped},
        )
        return MutationResult(
            success=True,
            message=" ".join(
                [f"Updated {matched} {entries_word(matched)}."]
                + _edit_notes(unmatched, skipped)
            ),
            matched=matched,
            daily_log_id=log.id,
            totals=totals,
            unmatched=unmatched,
            skipped=skipped,
        )

    def delete_entries(
        self, user_id: UUID, log_date: date, search_term: str
    ) -> MutationResult:
        """Remove entries matching ``search_term`` and reconcile the day."""
        with self.locks.hold(user_id, log_date):
            log = self.repository.get_daily_log(user_id, log_date)
            if log is None:
                return _no_entries(log_date)
            matches = find_entries(self.repository.list_entries(log.id), search_term)
            if not matches:
                return _nothing_applied([search_term], [], log.id)
            try:
                self.repository.delete_entries(log.id, [entry.id for entry in matches])
            finally:
                totals = self._reconcile(log.id)
        self.notifications.record(
            user_id, delete_notification(search_term, len(matches))
        )
        _logger.info("Deleted %s entries for %s", len(matches), log_date)
        return MutationResult(
            success=True,
            message=f"Removed {len(matches)} {entries_word(len(matches))}.",
            matched=len(matches),
            daily_log_id=log.id,
            totals=totals,
        )

    def set_weight(
        self, user_id: UUID, log_date: date, weight_kg: float
    ) -> MutationResult:
        """Record the weight sample of a day."""
        if weight_kg <= 0:
            return MutationResult(success=False, message="Weight must be positive.")
        with self.locks.hold(user_id, log_date):
            log = self.repository.upsert_weight(user_id, log_date, weight_kg)
        self.notifications.record(user_id, weight_notification(weight_kg, log_date))
        return MutationResult(
            success=True,
            message=f"Recorded {weight_kg:g} kg.",
            matched=1,
            daily_log_id=log.id,
            totals=log.totals,
        )

    def reconcile(self, user_id: UUID, log_date: date) -> DayTotals | None:
        """Recompute a day's aggregates from its entries."""
        with self.locks.hold(user_id, log_date):
            log = self.repository.get_daily_log(user_id, log_date)
            if log is None:
                return None
            return self._reconcile(log.id)

    def reset_history(self, user_id: UUID) -> MutationResult:
        """Delete every log of a user."""
        self.repository.delete_history(user_id)
        self.notifications.record(user_id, reset_notification())
        _logger.info("Reset history", extra={"user_id": str(user_id)})
        return MutationResult(success=True, message="History reset.")

    def _reconcile(self, daily_log_id: UUID) -> DayTotals:
        totals = compute_totals(self.repository.list_entries(daily_log_id))
        self.repository.update_totals(daily_log_id, totals)
        return totals


def compute_totals(entries: list[LogEntry]) -> DayTotals:
    """Sum entries into intake, outtake and protein by entry type."""
    intake = 0.0
    outtake = 0.0
    protein = 0.0
    for entry in entries:
        if entry.entry_type is EntryType.FOOD:
            intake += entry.calories
            protein += entry.protein_grams
        else:
            outtake += entry.calories
    return DayTotals(intake=intake, outtake=outtake, protein_grams=protein)


def find_entries(entries: list[LogEntry], search_term: str) -> list[LogEntry]:
    """Return entries whose description contains the term, ignoring case."""
    needle = search_term.strip().lower()
    if not needle:
        return []
    return [entry for entry in entries if needle in entry.description.lower()]


def leading_quantity(description: str) -> int:
    """Return the item count of a description such as "3 rice cakes".

    Only a whole number followed by a noun counts; measures such as
    "150 grams chicken" or "10000 steps" are a single portion.
    """
    match = _COUNT_PATTERN.match(description)
    if match is None or match.group(2).lower() in _UNIT_WORDS:
        return 1
    return int(match.group(1)) or 1


def apply_patch(entry: LogEntry, patch: EntryPatch) -> LogEntry:
    """Return ``entry`` with the patch applied.

    Food values are per item and scale by the counted quantity; exercise
    values replace the entry's calories as given.
    """
    quantity = 1
    if entry.entry_type is EntryType.FOOD:
        quantity = leading_quantity(entry.description)
    calories = entry.calories
    if patch.calories is not None:
        calories = patch.calories * quantity
    protein = entry.protein_grams
    if patch.protein_grams is not None and entry.entry_type is EntryType.FOOD:
        protein = patch.protein_grams * quantity
    return LogEntry(
        id=entry.id,
        daily_log_id=entry.daily_log_id,
        entry_type=entry.entry_type,
        description=patch.description or entry.description,
        calories=calories,
        protein_grams=protein,
        ai_parsed=entry.ai_parsed,
        raw_input=entry.raw_input,
    )


def _no_entries(log_date: date) -> MutationResult:
    return MutationResult(
        success=False, message=f"No entries logged for {log_date.isoformat()}."
    )


def _nothing_applied(
    unmatched: list[str], skipped: list[str], daily_log_id: UUID
) -> MutationResult:
    notes = _edit_notes(unmatched, skipped)
    _logger.info("Nothing applied: %s", " ".join(notes))
    return MutationResult(
        success=False,
        message=" ".join(notes) or "Nothing to change.",
        daily_log_id=daily_log_id,
        unmatched=unmatched,
        skipped=skipped,
    )


def _edit_notes(unmatched: list[str], skipped: list[str]) -> list[str]:
    notes = []
    if unmatched:
        notes.append(f"No matching entries for {_quoted(unmatched)}.")
    if skipped:
        notes.append(f"No changes given for {_quoted(skipped)}.")
    return notes


def _quoted(terms: list[str]) -> str:
    return ", ".join(f'"{term}"' for term in terms)
