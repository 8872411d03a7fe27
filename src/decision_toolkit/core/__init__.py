"""
Decision Toolkit Core Package

Shared data models and utilities. These models are the single source of
truth for the scoring engine and the history store.

**CONVENTIONS:**

1. **Immutable Data Models**
   - Frozen dataclasses; any change produces a new instance

2. **Calculated Categories (Never Stored)**
   - An item's categories are the union of its points' categories
   - The scoring axes are the union across all items

3. **Case-insensitive Categories**
   - Labels keep the user's casing for display
   - Matching always goes through `category_key()`
"""

from .models import (
    CategoryWeight,
    Comparison,
    ComparisonItem,
    Point,
    PointType,
    UserPreferences,
)

__all__ = [
    "CategoryWeight",
    "Comparison",
    "ComparisonItem",
    "Point",
    "PointType",
    "UserPreferences",
]
