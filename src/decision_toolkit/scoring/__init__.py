"""
Module: scoring

Purpose:
    Weighted multi-criteria scoring of comparison items. Pure functions with
    no state of their own; callers pass the current document's items and
    preferences.

Key Functions:
    - compute_category_scores(): Normalized per-item, per-category scores
    - rank_items(): Aggregate ranking derived from the score table

Key Classes:
    - CategoryScores: Score table
    - RankedItem: One ranking row
    - ScoringError: Precondition violation reaching the engine
"""

from .engine import (
    NEUTRAL_SCORE,
    SCORE_MAX,
    SCORE_MIN,
    CategoryScores,
    ScoringError,
    collect_categories,
    compute_category_scores,
    normalize_score,
    point_raw_score,
)
from .ranking import RankedItem, overall_score, rank_items

__all__ = [
    "NEUTRAL_SCORE",
    "SCORE_MAX",
    "SCORE_MIN",
    "CategoryScores",
    "ScoringError",
    "collect_categories",
    "compute_category_scores",
    "normalize_score",
    "point_raw_score",
    "RankedItem",
    "overall_score",
    "rank_items",
]
