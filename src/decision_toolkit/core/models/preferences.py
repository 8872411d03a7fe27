"""
Module: preferences

Purpose:
    Provides CategoryWeight and UserPreferences - the user's explicit
    importance ratings for categories. Categories without an entry
    default to DEFAULT_IMPORTANCE.

Key Functions:
    - UserPreferences.importance_for(category): Matched or default importance
    - UserPreferences.with_importance(category, importance): Upsert
    - UserPreferences.without_category(category): Remove an entry

Dependencies:
    - dataclasses (std)
    - .points (category_key, is_valid_rating)

Used By:
    - core.models.comparison.Comparison
    - scoring.engine
    - history.commands
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from .points import MAX_WEIGHT, MIN_WEIGHT, category_key, is_valid_rating

DEFAULT_IMPORTANCE = 5


@dataclass(frozen=True, slots=True)
class CategoryWeight:
    """
    Explicit importance for one category (immutable).

    Attributes:
        category: Category label as the user entered it
        importance: 1..10

    Example:
        >>> CategoryWeight("Price", 8).key
        'price'
    """

    category: str
    importance: int

    def __post_init__(self) -> None:
        """Validate weight on construction."""
        if not isinstance(self.category, str) or not self.category.strip():
            raise ValueError("Category cannot be blank")
        if not is_valid_rating(self.importance):
            raise ValueError(
                f"Importance must be an integer in {MIN_WEIGHT}..{MAX_WEIGHT}: {self.importance!r}"
            )

    @property
    def key(self) -> str:
        return category_key(self.category)

    def to_dict(self) -> dict[str, object]:
        return {"category": self.category, "importance": self.importance}

    @classmethod
    def from_dict(cls, data: dict) -> CategoryWeight:
        return cls(category=data["category"], importance=data["importance"])


@dataclass(frozen=True, slots=True)
class UserPreferences:
    """
    Set of category weights, keyed uniquely by normalized category (immutable).

    Entries are kept in insertion order so the priority panel can list
    them stably.

    Invariants:
        - No two entries share a category_key

    Example:
        >>> prefs = UserPreferences().with_importance("Price", 9)
        >>> prefs.importance_for("PRICE")
        9
        >>> prefs.importance_for("Comfort")
        5
    """

    category_weights: Tuple[CategoryWeight, ...] = ()

    def __post_init__(self) -> None:
        """Validate key uniqueness on construction."""
        seen: set[str] = set()
        for weight in self.category_weights:
            if weight.key in seen:
                raise ValueError(f"Duplicate category weight for {weight.category!r}")
            seen.add(weight.key)

    @property
    def by_key(self) -> Dict[str, CategoryWeight]:
        """Lookup table from normalized category to its weight."""
        return {w.key: w for w in self.category_weights}

    def get(self, category: str) -> Optional[CategoryWeight]:
        return self.by_key.get(category_key(category))

    def importance_for(self, category: str) -> int:
        """Explicit importance for the category, else DEFAULT_IMPORTANCE."""
        weight = self.get(category)
        return weight.importance if weight is not None else DEFAULT_IMPORTANCE

    def with_importance(self, category: str, importance: int) -> UserPreferences:
        """
        Return preferences with the category's importance set.

        Replaces an existing entry for any case variant of the category,
        keeping its position and adopting the new label.
        """
        new_weight = CategoryWeight(category.strip(), importance)
        if self.get(category) is None:
            return UserPreferences(self.category_weights + (new_weight,))
        return UserPreferences(tuple(
            new_weight if w.key == new_weight.key else w
            for w in self.category_weights
        ))

    def without_category(self, category: str) -> UserPreferences:
        key = category_key(category)
        return UserPreferences(tuple(w for w in self.category_weights if w.key != key))

    def to_dict(self) -> dict[str, object]:
        return {"category_weights": [w.to_dict() for w in self.category_weights]}

    @classmethod
    def from_dict(cls, data: dict) -> UserPreferences:
        return cls(tuple(CategoryWeight.from_dict(w) for w in data.get("category_weights", [])))
