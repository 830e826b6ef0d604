"""Structured commands produced by the conversational parser."""

from typing import Annotated, Literal

from pydantic import BaseModel, Field


class ParsedItem(BaseModel):
    """Single food or exercise item with its calories."""

    description: str = Field(min_length=1)
    calories: float = Field(ge=0)
    protein: float | None = Field(default=None, ge=0)


class EntryUpdates(BaseModel):
    """Partial per-unit update for matching entries."""

    calories: float | None = Field(default=None, ge=0)
    protein: float | None = Field(default=None, ge=0)
    description: str | None = None


class EntryEdit(BaseModel):
    """Search term plus the update to apply to its matches."""

    search_term: str = Field(min_length=1)
    updates: EntryUpdates


class _Command(BaseModel):
    message: str = ""
    is_error: bool = False


class FoodCommand(_Command):
    """Log one or more food items."""

    type: Literal["food"] = "food"
    items: list[ParsedItem] = Field(default_factory=list)


class ExerciseCommand(_Command):
    """Log one or more exercise items."""

    type: Literal["exercise"] = "exercise"
    items: list[ParsedItem] = Field(default_factory=list)


class WeightCommand(_Command):
    """Record a weight sample in kilograms."""

    type: Literal["weight"] = "weight"
    weight_kg: float = Field(gt=0)


class EditCommand(_Command):
    """Update entries whose description matches a search term."""

    type: Literal["edit"] = "edit"
    search_term: str = Field(min_length=1)
    updates: EntryUpdates


class MultiEditCommand(_Command):
    """Several independent edits reconciled once."""

    type: Literal["multi_edit"] = "multi_edit"
    edits: list[EntryEdit] = Field(min_length=1)


class DeleteCommand(_Command):
    """Remove entries whose description matches a search term."""

    type: Literal["delete"] = "delete"
    search_term: str = Field(min_length=1)


class MealRecommendationCommand(_Command):
    """Informational: suggested meals."""

    type: Literal["meal_recommendation"] = "meal_recommendation"


class ActivitySuggestionCommand(_Command):
    """Informational: suggested activities."""

    type: Literal["activity_suggestion"] = "activity_suggestion"


class CheatCalculationCommand(_Command):
    """Informational: what a treat would cost."""

    type: Literal["cheat_calculation"] = "cheat_calculation"


class ChatCommand(_Command):
    """Informational: free conversation."""

    type: Literal["chat"] = "chat"


ParsedCommand = Annotated[
    FoodCommand
    | ExerciseCommand
    | WeightCommand
    | EditCommand
    | MultiEditCommand
    | DeleteCommand
    | MealRecommendationCommand
    | ActivitySuggestionCommand
    | CheatCalculationCommand
    | ChatCommand,
    Field(discriminator="type"),
]
