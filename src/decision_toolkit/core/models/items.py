"""
Module: items

Purpose:
    Provides the ComparisonItem dataclass - one named option being compared,
    owning an ordered tuple of Points.

Key Functions:
    - ComparisonItem.create(name): New empty item with a generated id
    - ComparisonItem.find_point(point_id): Look up a point
    - ComparisonItem.points_in(category): Points matching a category
    - ComparisonItem.categories: Derived, never stored
    - collect_categories(items): First-seen category union across items

Dependencies:
    - dataclasses (std)
    - .points.Point

Used By:
    - core.models.comparison.Comparison
    - scoring.engine
    - history.commands
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable, Optional, Tuple

from .points import Point, category_key, new_id


@dataclass(frozen=True, slots=True)
class ComparisonItem:
    """
    A named option with its points (immutable).

    Point order is insertion order and only matters for display;
    scoring is order-independent.

    Attributes:
        id: Opaque identifier, unique within the comparison
        name: Display name, unique (case-insensitive) within the comparison
        points: Ordered tuple of points owned by this item

    Invariants:
        - name is not blank
        - point ids are unique within the item

    Example:
        >>> item = ComparisonItem.create("Laptop A")
        >>> item.with_point(Point.create("Cost", "Cheap", 6, "pro")).categories
        ('Cost',)
    """

    id: str
    name: str
    points: Tuple[Point, ...] = ()

    def __post_init__(self) -> None:
        """Validate item on construction."""
        if not isinstance(self.name, str) or not self.name.strip():
            raise ValueError("Item name cannot be blank")
        seen: set[str] = set()
        for point in self.points:
            if point.id in seen:
                raise ValueError(f"Duplicate point id {point.id!r} in item {self.name!r}")
            seen.add(point.id)

    @classmethod
    def create(cls, name: str, *, id: Optional[str] = None) -> ComparisonItem:
        """Create an empty item with a generated id."""
        return cls(id=id or new_id(), name=name.strip())

    # ─────────────────────────────────────────────────────────────────────────
    # Derived Properties (NEVER stored)
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def categories(self) -> Tuple[str, ...]:
        """First-seen category labels of this item's points, de-duplicated by key."""
        return collect_categories((self,))

    def points_in(self, category: str) -> Tuple[Point, ...]:
        """Points whose category matches (case-insensitively) the given label."""
        key = category_key(category)
        return tuple(p for p in self.points if p.category_key == key)

    def find_point(self, point_id: str) -> Optional[Point]:
        for point in self.points:
            if point.id == point_id:
                return point
        return None

    # ─────────────────────────────────────────────────────────────────────────
    # Copy-on-write Updates
    # ─────────────────────────────────────────────────────────────────────────

    def with_point(self, point: Point) -> ComparisonItem:
        """Return a copy with point appended."""
        return replace(self, points=self.points + (point,))

    def with_replaced_point(self, point: Point) -> ComparisonItem:
        """Return a copy with the point sharing point.id replaced in place."""
        if self.find_point(point.id) is None:
            raise KeyError(point.id)
        return replace(
            self,
            points=tuple(point if p.id == point.id else p for p in self.points),
        )

    def without_point(self, point_id: str) -> ComparisonItem:
        """Return a copy without the given point."""
        if self.find_point(point_id) is None:
            raise KeyError(point_id)
        return replace(self, points=tuple(p for p in self.points if p.id != point_id))

    def renamed(self, name: str) -> ComparisonItem:
        return replace(self, name=name.strip())

    def to_dict(self) -> dict[str, object]:
        return {
            "id": self.id,
            "name": self.name,
            "points": [p.to_dict() for p in self.points],
        }

    @classmethod
    def from_dict(cls, data: dict) -> ComparisonItem:
        return cls(
            id=data["id"],
            name=data["name"],
            points=tuple(Point.from_dict(p) for p in data.get("points", [])),
        )

    def __repr__(self) -> str:
        """Concise representation for debugging."""
        return f"ComparisonItem({self.name!r}, points={len(self.points)})"


def collect_categories(items: Iterable[ComparisonItem]) -> Tuple[str, ...]:
    """
    First-seen, case-preserved category labels across items.

    Items are walked in order, then each item's points. Labels that differ
    only in case collapse to the first one seen.
    """
    labels: dict[str, str] = {}
    for item in items:
        for point in item.points:
            labels.setdefault(point.category_key, point.category)
    return tuple(labels.values())
