"""
Module: scoring.engine

Purpose:
    Deterministic, side-effect-free mapping from (items, preferences) to a
    normalized score per item per category. Drives the per-category chart
    and the aggregate ranking.

Key Functions:
    - compute_category_scores(items, preferences): Full score table
    - point_raw_score(point, importance): Signed contribution of one point
    - normalize_score(raw): Map a raw score onto the 0..10 chart axis

Dependencies:
    - dataclasses (std)
    - decision_toolkit.core.models

Used By:
    - scoring.ranking
    - history.store.HistoryStore.scores()

Scoring:
    raw(point)      = polarity * weight * importance / 10
    raw(item, cat)  = sum of raw(point) over matching points (0 if none)
    normalized      = clamp((raw + 10) / 2, 0, 10)

    Raw scores beyond [-10, 10] saturate at the axis bounds. No rounding
    is applied; renderers round for display.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, Mapping, Tuple

from decision_toolkit.core.models import (
    DEFAULT_IMPORTANCE,
    ComparisonItem,
    Point,
    PointType,
    UserPreferences,
    category_key,
    collect_categories,
    is_valid_rating,
    name_key,
)

logger = logging.getLogger(__name__)

IMPORTANCE_SCALE = 10.0
NORMALIZATION_OFFSET = 10.0
NORMALIZATION_DIVISOR = 2.0
SCORE_MIN = 0.0
SCORE_MAX = 10.0
NEUTRAL_SCORE = 5.0


class ScoringError(ValueError):
    """Raised when a document reaching the engine violates a model invariant."""


@dataclass(frozen=True)
class CategoryScores:
    """
    Result of compute_category_scores (immutable).

    Attributes:
        categories: Scoring axes, first-seen union across all items
        per_item: Item name -> normalized scores aligned with categories
        raw_per_item: Item name -> raw (unnormalized) scores aligned with categories

    Invariants:
        - Every score tuple has len(categories) entries
        - Every normalized score is within [SCORE_MIN, SCORE_MAX]
        - per_item preserves input item order

    Example:
        >>> scores.categories
        ('Cost', 'Comfort')
        >>> scores.per_item["Car"]
        (1.0, 5.0)
    """

    categories: Tuple[str, ...]
    per_item: Dict[str, Tuple[float, ...]] = field(default_factory=dict)
    raw_per_item: Dict[str, Tuple[float, ...]] = field(default_factory=dict)

    @property
    def item_names(self) -> Tuple[str, ...]:
        return tuple(self.per_item)

    def score_for(self, item_name: str, category: str) -> float:
        """Normalized score for one item/category pair (category matched case-insensitively)."""
        index = self._category_index(category)
        return self.per_item[item_name][index]

    def raw_score_for(self, item_name: str, category: str) -> float:
        index = self._category_index(category)
        return self.raw_per_item[item_name][index]

    def _category_index(self, category: str) -> int:
        key = category_key(category)
        for index, label in enumerate(self.categories):
            if category_key(label) == key:
                return index
        raise KeyError(category)


def normalize_score(raw: float) -> float:
    """
    Map a raw category score onto the bounded 0..10 chart axis.

    Example:
        >>> normalize_score(-8.0)
        1.0
        >>> normalize_score(25.0)
        10.0
    """
    normalized = (raw + NORMALIZATION_OFFSET) / NORMALIZATION_DIVISOR
    return max(SCORE_MIN, min(SCORE_MAX, normalized))


def point_raw_score(point: Point, importance: int) -> float:
    """
    Signed contribution of one point given its category's importance.

    Raises:
        ScoringError: If weight, importance or type is out of range
    """
    if not is_valid_rating(point.weight):
        raise ScoringError(f"Point {point.id!r} has out-of-range weight: {point.weight!r}")
    if not is_valid_rating(importance):
        raise ScoringError(
            f"Category {point.category!r} has out-of-range importance: {importance!r}"
        )
    if not isinstance(point.type, PointType):
        raise ScoringError(f"Point {point.id!r} has unknown type: {point.type!r}")
    return point.polarity * (point.weight * importance) / IMPORTANCE_SCALE


def _importance_table(preferences: UserPreferences) -> Mapping[str, int]:
    table = {}
    for weight in preferences.category_weights:
        if not is_valid_rating(weight.importance):
            raise ScoringError(
                f"Category {weight.category!r} has out-of-range importance: {weight.importance!r}"
            )
        table[weight.key] = weight.importance
    return table


def compute_category_scores(
    items: Iterable[ComparisonItem],
    preferences: UserPreferences,
) -> CategoryScores:
    """
    Score every item on every category of the comparison.

    Args:
        items: Items in display order
        preferences: Category importance ratings (missing categories use 5)

    Returns:
        CategoryScores with categories in first-seen order and items in
        input order

    Raises:
        ScoringError: If the document violates a model invariant
            (out-of-range weight or importance, duplicate item names)

    Example:
        >>> item = ComparisonItem("a", "A", (Point("p", "Cost", "x", 8, PointType.CON),))
        >>> prefs = UserPreferences((CategoryWeight("cost", 10),))
        >>> compute_category_scores([item], prefs).per_item["A"]
        (1.0,)
    """
    items = tuple(items)
    categories = collect_categories(items)
    keys = [category_key(c) for c in categories]
    importance = _importance_table(preferences)

    per_item: Dict[str, Tuple[float, ...]] = {}
    raw_per_item: Dict[str, Tuple[float, ...]] = {}
    seen_names: set[str] = set()

    for item in items:
        if name_key(item.name) in seen_names:
            raise ScoringError(f"Duplicate item name reached the scoring engine: {item.name!r}")
        seen_names.add(name_key(item.name))

        totals = {key: 0.0 for key in keys}
        for point in item.points:
            key = point.category_key
            totals[key] += point_raw_score(point, importance.get(key, DEFAULT_IMPORTANCE))

        raw = tuple(totals[key] for key in keys)
        raw_per_item[item.name] = raw
        per_item[item.name] = tuple(normalize_score(value) for value in raw)

    logger.debug(f"Scored {len(per_item)} items across {len(categories)} categories")
    return CategoryScores(
        categories=categories,
        per_item=per_item,
        raw_per_item=raw_per_item,
    )
