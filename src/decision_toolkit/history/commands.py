"""
Module: history.commands

Purpose:
    Mutation commands for a comparison document. Each command validates
    itself against the current document, then produces a new document.
    Commands never modify the document they are given.

Key Classes:
    - Command: Abstract base (validate + apply)
    - AddPoint, EditPoint, RemovePoint: Point-level edits
    - AddItem, RemoveItem, RenameItem: Item-level edits
    - SetCategoryImportance, ClearCategoryImportance, ResetPreferences:
      Preference edits
    - CommandError: Raised when a command fails validation

Used By:
    - history.store.HistoryStore
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Optional

from decision_toolkit.core.models import (
    MAX_WEIGHT,
    MIN_WEIGHT,
    Comparison,
    ComparisonItem,
    Point,
    PointType,
    UserPreferences,
    is_valid_rating,
    new_id,
)

IdFactory = Callable[[], str]


class CommandError(ValueError):
    """
    A command was rejected; the document is unchanged.

    Attributes:
        command: Name of the rejected command
        field: Offending field, if the failure is field-specific
    """

    def __init__(self, message: str, command: str = "", field: str = ""):
        super().__init__(message)
        self.command = command
        self.field = field


# ─────────────────────────────────────────────────────────────────────────────
# Base Class
# ─────────────────────────────────────────────────────────────────────────────

class Command(ABC):
    """
    Abstract mutation command.

    HistoryStore always calls validate() before apply(); apply() may
    assume the command is valid for that document.
    """

    @property
    def command_name(self) -> str:
        return type(self).__name__

    @abstractmethod
    def validate(self, comparison: Comparison) -> None:
        """
        Check the command against the document.

        Raises:
            CommandError: If the command cannot be applied
        """

    @abstractmethod
    def apply(self, comparison: Comparison, id_factory: IdFactory = new_id) -> Comparison:
        """
        Produce the new document.

        Args:
            comparison: Current document (not modified)
            id_factory: Generates ids for newly created points/items

        Returns:
            New Comparison value
        """

    # ─────────────────────────────────────────────────────────────────────────
    # Validation Helpers
    # ─────────────────────────────────────────────────────────────────────────

    def _fail(self, message: str, field: str = "") -> CommandError:
        return CommandError(message, command=self.command_name, field=field)

    def _require_item(self, comparison: Comparison, item_id: str) -> ComparisonItem:
        item = comparison.find_item(item_id)
        if item is None:
            raise self._fail(f"Unknown item: {item_id!r}", field="item_id")
        return item

    def _require_point(self, item: ComparisonItem, point_id: str) -> Point:
        point = item.find_point(point_id)
        if point is None:
            raise self._fail(f"Unknown point {point_id!r} in item {item.name!r}", field="point_id")
        return point

    def _require_text(self, value: object, field: str) -> None:
        if not isinstance(value, str) or not value.strip():
            raise self._fail(f"{field} cannot be empty", field=field)

    def _require_rating(self, value: object, field: str) -> None:
        if not is_valid_rating(value):
            raise self._fail(
                f"{field} must be an integer in {MIN_WEIGHT}..{MAX_WEIGHT}: {value!r}",
                field=field,
            )

    def _require_type(self, value: object) -> None:
        try:
            PointType(value)
        except ValueError:
            raise self._fail(f"Invalid point type: {value!r}", field="type") from None

    def _require_unique_name(self, comparison: Comparison, name: str, item_id: str = "") -> None:
        existing = comparison.find_item_by_name(name)
        if existing is not None and existing.id != item_id:
            raise self._fail(f"An item named {existing.name!r} already exists", field="name")


# ─────────────────────────────────────────────────────────────────────────────
# Point Commands
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class AddPoint(Command):
    """Append a new point to an item."""

    item_id: str
    category: str
    text: str
    weight: int
    type: PointType | str

    def validate(self, comparison: Comparison) -> None:
        self._require_item(comparison, self.item_id)
        self._require_text(self.category, "category")
        self._require_text(self.text, "text")
        self._require_rating(self.weight, "weight")
        self._require_type(self.type)

    def apply(self, comparison: Comparison, id_factory: IdFactory = new_id) -> Comparison:
        item = comparison.find_item(self.item_id)
        point = Point.create(self.category, self.text, self.weight, self.type, id=id_factory())
        return comparison.with_replaced_item(item.with_point(point))


@dataclass(frozen=True)
class EditPoint(Command):
    """Change one or more fields of an existing point (None = keep)."""

    item_id: str
    point_id: str
    category: Optional[str] = None
    text: Optional[str] = None
    weight: Optional[int] = None
    type: Optional[PointType | str] = None

    def validate(self, comparison: Comparison) -> None:
        item = self._require_item(comparison, self.item_id)
        self._require_point(item, self.point_id)
        if all(v is None for v in (self.category, self.text, self.weight, self.type)):
            raise self._fail("Nothing to edit")
        if self.category is not None:
            self._require_text(self.category, "category")
        if self.text is not None:
            self._require_text(self.text, "text")
        if self.weight is not None:
            self._require_rating(self.weight, "weight")
        if self.type is not None:
            self._require_type(self.type)

    def apply(self, comparison: Comparison, id_factory: IdFactory = new_id) -> Comparison:
        item = comparison.find_item(self.item_id)
        point = item.find_point(self.point_id).edited(
            category=self.category,
            text=self.text,
            weight=self.weight,
            type=self.type,
        )
        return comparison.with_replaced_item(item.with_replaced_point(point))


@dataclass(frozen=True)
class RemovePoint(Command):
    """Remove a point from an item."""

    item_id: str
    point_id: str

    def validate(self, comparison: Comparison) -> None:
        item = self._require_item(comparison, self.item_id)
        self._require_point(item, self.point_id)

    def apply(self, comparison: Comparison, id_factory: IdFactory = new_id) -> Comparison:
        item = comparison.find_item(self.item_id)
        return comparison.with_replaced_item(item.without_point(self.point_id))


# ─────────────────────────────────────────────────────────────────────────────
# Item Commands
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class AddItem(Command):
    """Append a new, empty item."""

    name: str

    def validate(self, comparison: Comparison) -> None:
        self._require_text(self.name, "name")
        self._require_unique_name(comparison, self.name)

    def apply(self, comparison: Comparison, id_factory: IdFactory = new_id) -> Comparison:
        return comparison.with_item(ComparisonItem.create(self.name, id=id_factory()))


@dataclass(frozen=True)
class RemoveItem(Command):
    """Remove an item and all its points. Preferences are kept."""

    item_id: str

    def validate(self, comparison: Comparison) -> None:
        self._require_item(comparison, self.item_id)

    def apply(self, comparison: Comparison, id_factory: IdFactory = new_id) -> Comparison:
        return comparison.without_item(self.item_id)


@dataclass(frozen=True)
class RenameItem(Command):
    """Rename an item; names stay unique case-insensitively."""

    item_id: str
    name: str

    def validate(self, comparison: Comparison) -> None:
        self._require_item(comparison, self.item_id)
        self._require_text(self.name, "name")
        self._require_unique_name(comparison, self.name, item_id=self.item_id)

    def apply(self, comparison: Comparison, id_factory: IdFactory = new_id) -> Comparison:
        item = comparison.find_item(self.item_id)
        return comparison.with_replaced_item(item.renamed(self.name))


# ─────────────────────────────────────────────────────────────────────────────
# Preference Commands
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class SetCategoryImportance(Command):
    """Set the importance of a category, replacing any case variant."""

    category: str
    importance: int

    def validate(self, comparison: Comparison) -> None:
        self._require_text(self.category, "category")
        self._require_rating(self.importance, "importance")

    def apply(self, comparison: Comparison, id_factory: IdFactory = new_id) -> Comparison:
        preferences = comparison.preferences.with_importance(self.category, self.importance)
        return comparison.with_preferences(preferences)


@dataclass(frozen=True)
class ClearCategoryImportance(Command):
    """Drop an explicit importance so the category falls back to the default."""

    category: str

    def validate(self, comparison: Comparison) -> None:
        self._require_text(self.category, "category")
        if comparison.preferences.get(self.category) is None:
            raise self._fail(f"No importance set for category {self.category!r}", field="category")

    def apply(self, comparison: Comparison, id_factory: IdFactory = new_id) -> Comparison:
        return comparison.with_preferences(comparison.preferences.without_category(self.category))


@dataclass(frozen=True)
class ResetPreferences(Command):
    """Drop every explicit importance."""

    def validate(self, comparison: Comparison) -> None:
        if not comparison.preferences.category_weights:
            raise self._fail("No category importances to reset")

    def apply(self, comparison: Comparison, id_factory: IdFactory = new_id) -> Comparison:
        return comparison.with_preferences(UserPreferences())
