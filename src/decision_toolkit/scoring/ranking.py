"""
Module: scoring.ranking

Purpose:
    Derives an aggregate ranking of items from a CategoryScores table.

Key Functions:
    - rank_items(scores): Items ordered best-first
    - overall_score(normalized): Mean of an item's normalized scores

Used By:
    - history.store.HistoryStore.ranking()
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple

from .engine import NEUTRAL_SCORE, CategoryScores


@dataclass(frozen=True)
class RankedItem:
    """
    One row of the ranking.

    Attributes:
        rank: 1-based position
        name: Item name
        overall: Mean normalized score across all categories (0..10)
        raw_total: Sum of raw category scores, used as tie-breaker
    """

    rank: int
    name: str
    overall: float
    raw_total: float


def overall_score(normalized: Sequence[float]) -> float:
    """Mean of normalized scores; NEUTRAL_SCORE when there are no categories."""
    if not normalized:
        return NEUTRAL_SCORE
    return sum(normalized) / len(normalized)


def rank_items(scores: CategoryScores) -> Tuple[RankedItem, ...]:
    """
    Rank items best-first.

    Ordered by overall score, then raw total, both descending. Items that
    tie on both keep their input order.

    Example:
        >>> [r.name for r in rank_items(scores)]
        ['Bike', 'Car']
    """
    rows = [
        (name, overall_score(normalized), sum(scores.raw_per_item[name]))
        for name, normalized in scores.per_item.items()
    ]
    # sorted() is stable, so equal keys keep input order
    rows = sorted(rows, key=lambda row: (-row[1], -row[2]))
    return tuple(
        RankedItem(rank=position, name=name, overall=overall, raw_total=raw_total)
        for position, (name, overall, raw_total) in enumerate(rows, start=1)
    )
