"""
Unit tests for the aggregate ranking.
"""

import pytest

from decision_toolkit.core.models import ComparisonItem, Point, PointType, UserPreferences
from decision_toolkit.scoring import (
    CategoryScores,
    compute_category_scores,
    overall_score,
    rank_items,
)


class TestOverallScore:
    """Tests for overall_score."""

    def test_overall_when_scores_then_mean(self):
        assert overall_score((9.0, 3.5, 5.0)) == pytest.approx(17.5 / 3)

    def test_overall_when_no_categories_then_neutral(self):
        assert overall_score(()) == 5.0


class TestRankItems:
    """Tests for rank_items."""

    def test_rank_when_sample_comparison_then_best_first(self, sample_comparison):
        """Laptop A averages 5.83, Laptop B 4.58."""
        scores = compute_category_scores(sample_comparison.items, sample_comparison.preferences)

        ranking = rank_items(scores)

        assert [(r.rank, r.name) for r in ranking] == [(1, "Laptop A"), (2, "Laptop B")]
        assert ranking[0].overall == pytest.approx(17.5 / 3)
        assert ranking[1].raw_total == pytest.approx(-2.5)

    def test_rank_when_overall_ties_then_raw_total_breaks_tie(self):
        """Saturated scores tie on overall; the larger raw total wins."""
        scores = CategoryScores(
            categories=("Cost",),
            per_item={"Car": (10.0,), "Bike": (10.0,)},
            raw_per_item={"Car": (12.0,), "Bike": (30.0,)},
        )
        assert [r.name for r in rank_items(scores)] == ["Bike", "Car"]

    def test_rank_when_full_tie_then_input_order_kept(self):
        """Items with no points all tie and keep their order."""
        items = [ComparisonItem(str(n), name) for n, name in enumerate(["Car", "Bike", "Bus"])]
        scores = compute_category_scores(items, UserPreferences())

        ranking = rank_items(scores)

        assert [r.name for r in ranking] == ["Car", "Bike", "Bus"]
        assert [r.rank for r in ranking] == [1, 2, 3]
        assert all(r.overall == 5.0 for r in ranking)

    def test_rank_when_con_heavy_item_then_last(self):
        items = [
            ComparisonItem("1", "Bad", (Point("p1", "Cost", "x", 10, PointType.CON),)),
            ComparisonItem("2", "Good", (Point("p2", "Cost", "y", 10, PointType.PRO),)),
        ]
        ranking = rank_items(compute_category_scores(items, UserPreferences()))
        assert [r.name for r in ranking] == ["Good", "Bad"]
