"""Dispatch parsed conversational commands onto the entry ledger."""

import logging
from dataclasses import dataclass
from datetime import date
from typing import assert_never
from uuid import UUID

from deficit_tracker.domain.commands import (
    ActivitySuggestionCommand,
    ChatCommand,
    CheatCalculationCommand,
    DeleteCommand,
    EditCommand,
    EntryUpdates,
    ExerciseCommand,
    FoodCommand,
    MealRecommendationCommand,
    MultiEditCommand,
    ParsedCommand,
    ParsedItem,
    WeightCommand,
)
from deficit_tracker.domain.logs import (
    EntryDraft,
    EntryPatch,
    EntryType,
    MutationResult,
)
from deficit_tracker.services.ledger import EntryLedgerService

_logger = logging.getLogger(__name__)


@dataclass
class CommandDispatcher:
    """Apply a parsed command to a user's day."""

    ledger: EntryLedgerService

    def apply(
        self,
        user_id: UUID,
        log_date: date,
        command: ParsedCommand,
        raw_input: str | None = None,
    ) -> MutationResult:
        """Run the mutation a command describes, if any."""
        if command.is_error:
            _logger.info("Ignoring %s command flagged as error", command.type)
            return MutationResult(
                success=False, message=command.message or "Nothing was logged."
            )
        if isinstance(command, FoodCommand):
            drafts = [_draft(item, raw_input, protein=True) for item in command.items]
            return self.ledger.add_entries(user_id, log_date, EntryType.FOOD, drafts)
        if isinstance(command, ExerciseCommand):
            drafts = [_draft(item, raw_input, protein=False) for item in command.items]
            return self.ledger.add_entries(
                user_id, log_date, EntryType.EXERCISE, drafts
            )
        if isinstance(command, WeightCommand):
            return self.ledger.set_weight(user_id, log_date, command.weight_kg)
        if isinstance(command, EditCommand):
            return self.ledger.edit_entries(
                user_id, log_date, command.search_term, _patch(command.updates)
            )
        if isinstance(command, MultiEditCommand):
            return self.ledger.multi_edit(
                user_id,
                log_date,
                [(edit.search_term, _patch(edit.updates)) for edit in command.edits],
            )
        if isinstance(command, DeleteCommand):
            return self.ledger.delete_entries(user_id, log_date, command.search_term)
        if isinstance(
            command,
            MealRecommendationCommand
            | ActivitySuggestionCommand
            | CheatCalculationCommand
            | ChatCommand,
        ):
            return MutationResult(success=True, message=command.message)
        assert_never(command)


def _draft(item: ParsedItem, raw_input: str | None, *, protein: bool) -> EntryDraft:
    return EntryDraft(
        description=item.description,
        calories=item.calories,
        protein_grams=(item.protein or 0.0) if protein else 0.0,
        ai_parsed=True,
        raw_input=raw_input,
    )


def _patch(updates: EntryUpdates) -> EntryPatch:
    return EntryPatch(
        calories=updates.calories,
        protein_grams=updates.protein,
        description=updates.description,
    )
