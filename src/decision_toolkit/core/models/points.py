"""
Module: points

Purpose:
    Provides the Point dataclass - a single pro/con/neutral consideration
    attached to a comparison item - together with the helpers every model
    shares: identifier generation and category key normalization.

Key Functions:
    - new_id(): Fresh opaque identifier for points and items
    - category_key(label): Normalized lookup key for a category label
    - Point.create(...): Build a point with a generated id
    - Point.polarity: +1 / -1 / 0 multiplier derived from the type

Dependencies:
    - dataclasses (std)
    - enum (std)
    - uuid (std)

Used By:
    - core.models.items.ComparisonItem
    - core.models.preferences.UserPreferences
    - scoring.engine
    - history.commands
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

MIN_WEIGHT = 1
MAX_WEIGHT = 10


def new_id() -> str:
    """Return a fresh identifier for a point or item."""
    return uuid.uuid4().hex


def category_key(label: str) -> str:
    """
    Normalize a category label into its lookup key.

    Categories are free-form and compared case-insensitively everywhere.
    All comparisons go through this key instead of ad-hoc case folding.

    Example:
        >>> category_key("  Price ")
        'price'
    """
    return label.strip().lower()


def is_valid_rating(value: object) -> bool:
    """True when value is an int (not bool) within [MIN_WEIGHT, MAX_WEIGHT]."""
    return (
        isinstance(value, int)
        and not isinstance(value, bool)
        and MIN_WEIGHT <= value <= MAX_WEIGHT
    )


class PointType(str, Enum):
    """Polarity of a point."""
    PRO = "pro"
    CON = "con"
    NEUTRAL = "neutral"

    def __str__(self) -> str:
        return self.value


_POLARITY = {
    PointType.PRO: 1,
    PointType.CON: -1,
    PointType.NEUTRAL: 0,
}


@dataclass(frozen=True, slots=True)
class Point:
    """
    A weighted consideration attached to one item (immutable).

    Attributes:
        id: Opaque identifier, unique within the comparison
        category: Free-form grouping label (case preserved)
        text: Description shown to the user
        weight: Local strength of the point, 1..10
        type: Polarity - pro, con or neutral

    Invariants:
        - MIN_WEIGHT <= weight <= MAX_WEIGHT
        - text and category are not blank

    Example:
        >>> p = Point(id="p1", category="Cost", text="Cheap", weight=7, type=PointType.PRO)
        >>> p.polarity
        1
    """

    id: str
    category: str
    text: str
    weight: int
    type: PointType

    def __post_init__(self) -> None:
        """Validate point on construction."""
        if not is_valid_rating(self.weight):
            raise ValueError(
                f"Point weight must be an integer in {MIN_WEIGHT}..{MAX_WEIGHT}: {self.weight!r}"
            )
        if not isinstance(self.type, PointType):
            raise ValueError(f"Invalid point type: {self.type!r}")
        if not isinstance(self.text, str) or not self.text.strip():
            raise ValueError("Point text cannot be blank")
        if not isinstance(self.category, str) or not self.category.strip():
            raise ValueError("Point category cannot be blank")

    @classmethod
    def create(
        cls,
        category: str,
        text: str,
        weight: int,
        type: PointType | str,
        *,
        id: Optional[str] = None,
    ) -> Point:
        """
        Create a point with a generated id.

        Text and category are stripped; a string type is coerced
        through PointType.
        """
        return cls(
            id=id or new_id(),
            category=category.strip(),
            text=text.strip(),
            weight=weight,
            type=PointType(type),
        )

    @property
    def polarity(self) -> int:
        """Score multiplier: +1 for pro, -1 for con, 0 for neutral."""
        return _POLARITY[self.type]

    @property
    def category_key(self) -> str:
        """Normalized category used for matching."""
        return category_key(self.category)

    def edited(
        self,
        *,
        category: Optional[str] = None,
        text: Optional[str] = None,
        weight: Optional[int] = None,
        type: Optional[PointType | str] = None,
    ) -> Point:
        """Return a copy with the given fields replaced (id preserved)."""
        changes: dict[str, object] = {}
        if category is not None:
            changes["category"] = category.strip()
        if text is not None:
            changes["text"] = text.strip()
        if weight is not None:
            changes["weight"] = weight
        if type is not None:
            changes["type"] = PointType(type)
        return replace(self, **changes)

    def to_dict(self) -> dict[str, object]:
        return {
            "id": self.id,
            "category": self.category,
            "text": self.text,
            "weight": self.weight,
            "type": self.type.value,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Point:
        return cls(
            id=data["id"],
            category=data["category"],
            text=data["text"],
            weight=data["weight"],
            type=PointType(data["type"]),
        )

    def __repr__(self) -> str:
        """Concise representation for debugging."""
        return f"Point({self.category!r}, {self.type.value}, w={self.weight})"
