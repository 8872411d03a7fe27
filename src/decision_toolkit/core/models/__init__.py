"""
Core Models Package

Immutable, validated data models that serve as the single source of truth
for a comparison.

**DESIGN RATIONALE:**

All models in this package are frozen dataclasses. This ensures:
1. No accidental mutation of a document version held in history
2. Unchanged items and points are shared between versions by reference
3. Consumers can be handed the current document without defensive copies
4. Derived values (categories) are always calculated, never stored
"""

from .points import (
    MAX_WEIGHT,
    MIN_WEIGHT,
    Point,
    PointType,
    category_key,
    is_valid_rating,
    new_id,
)
from .items import ComparisonItem, collect_categories
from .preferences import DEFAULT_IMPORTANCE, CategoryWeight, UserPreferences
from .comparison import Comparison, name_key

__all__ = [
    "MAX_WEIGHT",
    "MIN_WEIGHT",
    "DEFAULT_IMPORTANCE",
    "Point",
    "PointType",
    "ComparisonItem",
    "CategoryWeight",
    "UserPreferences",
    "Comparison",
    "category_key",
    "collect_categories",
    "is_valid_rating",
    "name_key",
    "new_id",
]
