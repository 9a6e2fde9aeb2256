"""
Sort engine: direction toggling, missing-last numeric order, text order.
"""
import pytest

from cryonics_core.aggregation import DisplayRow
from cryonics_core.sorting import (
    SortState,
    apply_sort_clicks,
    compare_numeric,
    next_sort_state,
    sort_rows,
)


def _row(name, value, location="—"):
    return DisplayRow(name, location, "—", value, value)


def _names(rows):
    return [r.name for r in rows]


class TestSortState:
    def test_first_click_is_ascending(self):
        assert next_sort_state(SortState(), 2) == SortState(column=2, ascending=True)

    def test_same_column_toggles(self):
        assert next_sort_state(SortState(2, True), 2) == SortState(2, False)
        assert next_sort_state(SortState(2, False), 2) == SortState(2, True)

    def test_new_column_resets_to_ascending(self):
        assert next_sort_state(SortState(2, False), 4) == SortState(4, True)

    def test_mark(self):
        assert SortState().mark is None
        assert SortState(1, True).mark == "sort-asc"
        assert SortState(1, False).mark == "sort-desc"


class TestNumericSort:
    def test_ascending_then_descending_missing_last(self):
        rows = [_row("A", 30.0), _row("B", None), _row("C", 10.0)]

        state = sort_rows(rows, 3)
        assert state == SortState(3, True)
        assert _names(rows) == ["C", "A", "B"]

        state = sort_rows(rows, 3, state)
        assert state == SortState(3, False)
        assert _names(rows) == ["A", "C", "B"]

    def test_missing_rows_keep_their_relative_order(self):
        rows = [_row("M1", None), _row("X", 5.0), _row("M2", None), _row("Y", 1.0)]
        sort_rows(rows, 4)
        assert _names(rows) == ["Y", "X", "M1", "M2"]
        sort_rows(rows, 4, SortState(4, True))
        assert _names(rows) == ["X", "Y", "M1", "M2"]

    def test_zero_is_a_value_not_missing(self):
        rows = [_row("Z", 0.0), _row("N", None), _row("P", 2.0)]
        sort_rows(rows, 3)
        assert _names(rows) == ["Z", "P", "N"]

    def test_compare_numeric_direction_invariant_for_missing(self):
        assert compare_numeric(None, None, True) == 0
        assert compare_numeric(None, 5.0, True) == 1
        assert compare_numeric(None, 5.0, False) == 1
        assert compare_numeric(5.0, None, False) == -1
        assert compare_numeric(1.0, 2.0, True) == -1
        assert compare_numeric(1.0, 2.0, False) == 1


class TestTextSort:
    def test_names_case_insensitive_and_reversible(self):
        rows = [_row("beta cryo", 1.0), _row("Alpha cryo", 2.0), _row("gamma cryo", 3.0)]
        sort_rows(rows, 0)
        assert _names(rows) == ["Alpha cryo", "beta cryo", "gamma cryo"]
        sort_rows(rows, 0, SortState(0, True))
        assert _names(rows) == ["gamma cryo", "beta cryo", "Alpha cryo"]

    def test_visible_name_is_compared(self):
        """Known orgs sort by their display name, not the CSV spelling."""
        rows = [_row("yinfeng", 1.0), _row("ALCOR", 1.0), _row("kriorus", 1.0)]
        sort_rows(rows, 0)
        assert _names(rows) == ["ALCOR", "kriorus", "yinfeng"]

    def test_location_column_is_text(self):
        rows = [_row("A", 1.0, "Moscow"), _row("B", 1.0, "Berlin"), _row("C", 1.0, "Jinan")]
        sort_rows(rows, 1)
        assert [r.location for r in rows] == ["Berlin", "Jinan", "Moscow"]

    def test_case_only_tie_puts_lowercase_first(self):
        rows = [_row("Alpha cryo", 1.0), _row("alpha cryo", 2.0)]
        sort_rows(rows, 0)
        assert [r.members for r in rows] == [2.0, 1.0]
        sort_rows(rows, 0, SortState(0, True))
        assert [r.members for r in rows] == [1.0, 2.0]


class TestSortRowsEdges:
    def test_empty_rows_only_move_state(self):
        rows = []
        assert sort_rows(rows, 3) == SortState(3, True)
        assert rows == []

    def test_unknown_column(self):
        with pytest.raises(ValueError, match="Unknown column index"):
            sort_rows([_row("A", 1.0)], 7)
        with pytest.raises(ValueError):
            sort_rows([_row("A", 1.0)], -1)

    def test_click_sequence(self):
        rows = [_row("A", 30.0), _row("B", None), _row("C", 10.0)]
        state = apply_sort_clicks(rows, [4, 4])
        assert state == SortState(4, False)
        assert _names(rows) == ["A", "C", "B"]
        state = apply_sort_clicks(rows, [3], state)
        assert state == SortState(3, True)
        assert _names(rows) == ["C", "A", "B"]
