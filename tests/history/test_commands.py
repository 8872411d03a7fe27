"""
Unit tests for history commands.

Commands are exercised directly (validate + apply) without a store.
"""

import pytest

from decision_toolkit.core.models import PointType
from decision_toolkit.history import (
    AddItem,
    AddPoint,
    ClearCategoryImportance,
    CommandError,
    EditPoint,
    RemoveItem,
    RemovePoint,
    RenameItem,
    ResetPreferences,
    SetCategoryImportance,
)


def _run(command, comparison, new_id=lambda: "new"):
    command.validate(comparison)
    return command.apply(comparison, new_id)


class TestAddPoint:
    """Tests for AddPoint."""

    def test_apply_when_valid_then_appends_point(self, sample_comparison):
        """New point goes to the end of the item's sequence with a fresh id."""
        result = _run(AddPoint("a", " Weight ", " Light ", 4, "pro"), sample_comparison)

        point = result.find_item("a").points[-1]
        assert point.id == "new"
        assert point.category == "Weight"
        assert point.text == "Light"
        assert point.type is PointType.PRO
        assert len(sample_comparison.find_item("a").points) == 2

    def test_validate_when_unknown_item_then_raises(self, sample_comparison):
        with pytest.raises(CommandError, match="Unknown item") as exc:
            AddPoint("missing-id", "Cost", "x", 5, "pro").validate(sample_comparison)
        assert exc.value.command == "AddPoint"
        assert exc.value.field == "item_id"

    @pytest.mark.parametrize("weight", [0, 11, 5.0, True, None])
    def test_validate_when_weight_invalid_then_raises(self, sample_comparison, weight):
        with pytest.raises(CommandError) as exc:
            AddPoint("a", "Cost", "x", weight, "pro").validate(sample_comparison)
        assert exc.value.field == "weight"

    @pytest.mark.parametrize("text", ["", "   ", "\n\t"])
    def test_validate_when_text_blank_then_raises(self, sample_comparison, text):
        with pytest.raises(CommandError, match="text cannot be empty"):
            AddPoint("a", "Cost", text, 5, "pro").validate(sample_comparison)

    def test_validate_when_category_blank_then_raises(self, sample_comparison):
        with pytest.raises(CommandError, match="category cannot be empty"):
            AddPoint("a", " ", "x", 5, "pro").validate(sample_comparison)

    def test_validate_when_type_unknown_then_raises(self, sample_comparison):
        with pytest.raises(CommandError, match="Invalid point type"):
            AddPoint("a", "Cost", "x", 5, "great").validate(sample_comparison)


class TestEditPoint:
    """Tests for EditPoint."""

    def test_apply_when_weight_and_type_then_other_fields_kept(self, sample_comparison):
        result = _run(EditPoint("a", "a1", weight=2, type="con"), sample_comparison)

        point = result.find_item("a").find_point("a1")
        assert (point.weight, point.type, point.text) == (2, PointType.CON, "Affordable")
        assert result.find_item("a").points[0].id == "a1"

    def test_validate_when_nothing_given_then_raises(self, sample_comparison):
        with pytest.raises(CommandError, match="Nothing to edit"):
            EditPoint("a", "a1").validate(sample_comparison)

    def test_validate_when_point_in_other_item_then_raises(self, sample_comparison):
        with pytest.raises(CommandError, match="Unknown point"):
            EditPoint("a", "b1", text="x").validate(sample_comparison)

    def test_validate_when_weight_invalid_then_raises(self, sample_comparison):
        with pytest.raises(CommandError, match="weight"):
            EditPoint("a", "a1", weight=12).validate(sample_comparison)


class TestRemovePoint:
    """Tests for RemovePoint."""

    def test_apply_when_valid_then_removed(self, sample_comparison):
        result = _run(RemovePoint("b", "b2"), sample_comparison)
        assert [p.id for p in result.find_item("b").points] == ["b1", "b3"]

    def test_validate_when_unknown_point_then_raises(self, sample_comparison):
        with pytest.raises(CommandError, match="Unknown point"):
            RemovePoint("b", "zz").validate(sample_comparison)


class TestItemCommands:
    """Tests for AddItem, RemoveItem and RenameItem."""

    def test_add_item_when_valid_then_appended_empty(self, sample_comparison):
        result = _run(AddItem(" Laptop C "), sample_comparison)
        assert result.items[-1].name == "Laptop C"
        assert result.items[-1].id == "new"
        assert result.items[-1].points == ()

    def test_add_item_when_name_taken_then_raises(self, sample_comparison):
        with pytest.raises(CommandError, match="already exists"):
            AddItem("laptop a").validate(sample_comparison)

    def test_remove_item_when_valid_then_preferences_kept(self, sample_comparison):
        result = _run(RemoveItem("a"), sample_comparison)
        assert [i.id for i in result.items] == ["b"]
        assert result.preferences == sample_comparison.preferences

    def test_rename_item_when_only_case_changes_then_allowed(self, sample_comparison):
        result = _run(RenameItem("a", "LAPTOP A"), sample_comparison)
        assert result.find_item("a").name == "LAPTOP A"

    def test_rename_item_when_name_taken_by_other_then_raises(self, sample_comparison):
        with pytest.raises(CommandError, match="already exists"):
            RenameItem("a", "Laptop B").validate(sample_comparison)


class TestPreferenceCommands:
    """Tests for SetCategoryImportance, ClearCategoryImportance and ResetPreferences."""

    def test_set_importance_when_case_variant_exists_then_replaced(self, sample_comparison):
        result = _run(SetCategoryImportance("price", 3), sample_comparison)
        weights = result.preferences.category_weights
        assert [(w.category, w.importance) for w in weights] == [("price", 3)]

    def test_set_importance_when_new_category_then_added(self, sample_comparison):
        result = _run(SetCategoryImportance("Screen", 8), sample_comparison)
        assert result.preferences.importance_for("screen") == 8
        assert result.preferences.importance_for("price") == 10

    @pytest.mark.parametrize("importance", [0, 11, 7.5, False])
    def test_set_importance_when_out_of_range_then_raises(self, sample_comparison, importance):
        with pytest.raises(CommandError) as exc:
            SetCategoryImportance("Price", importance).validate(sample_comparison)
        assert exc.value.field == "importance"

    def test_clear_importance_when_present_then_default_again(self, sample_comparison):
        result = _run(ClearCategoryImportance("Price"), sample_comparison)
        assert result.preferences.importance_for("Price") == 5

    def test_clear_importance_when_absent_then_raises(self, sample_comparison):
        with pytest.raises(CommandError, match="No importance set"):
            ClearCategoryImportance("Screen").validate(sample_comparison)

    def test_reset_preferences_when_present_then_empty(self, sample_comparison):
        result = _run(ResetPreferences(), sample_comparison)
        assert result.preferences.category_weights == ()
        assert result.items is sample_comparison.items

    def test_reset_preferences_when_already_empty_then_raises(self, sample_comparison):
        empty = _run(ResetPreferences(), sample_comparison)
        with pytest.raises(CommandError, match="No category importances"):
            ResetPreferences().validate(empty)
