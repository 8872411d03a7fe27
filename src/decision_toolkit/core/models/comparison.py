"""
Module: comparison

Purpose:
    Provides the Comparison dataclass - the aggregate document holding all
    items and the user's preferences. Every mutation produces a new
    Comparison value, which makes it the unit of undo/redo.

Key Functions:
    - Comparison.create(names): Initial document from option names
    - Comparison.find_item(item_id): Look up an item
    - Comparison.categories: Union of categories across ALL items
    - Comparison.with_item / with_replaced_item / without_item
    - Comparison.with_preferences(prefs)

Dependencies:
    - dataclasses (std)
    - .items.ComparisonItem
    - .preferences.UserPreferences

Used By:
    - history.store.HistoryStore
    - history.commands
    - core.utils.serialization
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Iterable, Optional, Tuple

from .items import ComparisonItem, collect_categories
from .points import category_key
from .preferences import UserPreferences


def name_key(name: str) -> str:
    """Normalized item name used for uniqueness checks."""
    return name.strip().lower()


@dataclass(frozen=True, slots=True)
class Comparison:
    """
    The comparison document (immutable).

    Versions share unchanged items and points by reference; a new value
    is built for every mutation.

    Attributes:
        items: Ordered tuple of compared items
        preferences: Category importance ratings

    Invariants:
        - Item ids are unique
        - Item names are unique (case-insensitive); scores are keyed by name

    Example:
        >>> c = Comparison.create(["Car", "Bike"])
        >>> [i.name for i in c.items]
        ['Car', 'Bike']
        >>> c.categories
        ()
    """

    items: Tuple[ComparisonItem, ...] = ()
    preferences: UserPreferences = field(default_factory=UserPreferences)

    def __post_init__(self) -> None:
        """Validate item uniqueness on construction."""
        ids: set[str] = set()
        names: set[str] = set()
        for item in self.items:
            if item.id in ids:
                raise ValueError(f"Duplicate item id: {item.id!r}")
            if name_key(item.name) in names:
                raise ValueError(f"Duplicate item name: {item.name!r}")
            ids.add(item.id)
            names.add(name_key(item.name))

    @classmethod
    def create(
        cls,
        names: Iterable[str],
        preferences: Optional[UserPreferences] = None,
    ) -> Comparison:
        """
        Build the initial document from a list of option names.

        Raises:
            ValueError: If a name is blank or duplicated
        """
        items = tuple(ComparisonItem.create(name) for name in names)
        if preferences is None:
            preferences = UserPreferences()
        return cls(items=items, preferences=preferences)

    # ─────────────────────────────────────────────────────────────────────────
    # Queries
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def categories(self) -> Tuple[str, ...]:
        """
        First-seen, case-preserved union of point categories across ALL items.

        Labels differing only in case collapse to the first one seen.
        """
        return collect_categories(self.items)

    def has_category(self, category: str) -> bool:
        key = category_key(category)
        return any(p.category_key == key for item in self.items for p in item.points)

    def find_item(self, item_id: str) -> Optional[ComparisonItem]:
        for item in self.items:
            if item.id == item_id:
                return item
        return None

    def find_item_by_name(self, name: str) -> Optional[ComparisonItem]:
        key = name_key(name)
        for item in self.items:
            if name_key(item.name) == key:
                return item
        return None

    @property
    def point_count(self) -> int:
        return sum(len(item.points) for item in self.items)

    # ─────────────────────────────────────────────────────────────────────────
    # Copy-on-write Updates
    # ─────────────────────────────────────────────────────────────────────────

    def with_item(self, item: ComparisonItem) -> Comparison:
        return replace(self, items=self.items + (item,))

    def with_replaced_item(self, item: ComparisonItem) -> Comparison:
        """Return a copy with the item sharing item.id replaced in place."""
        if self.find_item(item.id) is None:
            raise KeyError(item.id)
        return replace(
            self,
            items=tuple(item if i.id == item.id else i for i in self.items),
        )

    def without_item(self, item_id: str) -> Comparison:
        if self.find_item(item_id) is None:
            raise KeyError(item_id)
        return replace(self, items=tuple(i for i in self.items if i.id != item_id))

    def with_preferences(self, preferences: UserPreferences) -> Comparison:
        return replace(self, preferences=preferences)

    def to_dict(self) -> dict[str, object]:
        return {
            "items": [item.to_dict() for item in self.items],
            "preferences": self.preferences.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> Comparison:
        return cls(
            items=tuple(ComparisonItem.from_dict(i) for i in data.get("items", [])),
            preferences=UserPreferences.from_dict(data.get("preferences", {})),
        )

    def __repr__(self) -> str:
        """Concise representation for debugging."""
        return (
            f"Comparison(items={len(self.items)}, points={self.point_count}, "
            f"weights={len(self.preferences.category_weights)})"
        )
