"""
cryonics_core.sorting
Click-to-sort engine over display rows.

The caller owns a SortState and gets a new one back from every sort.
Rows are reordered in place. Numeric columns keep missing values at the
bottom in both directions; text columns use locale collation.
"""
from __future__ import annotations
import locale
import logging
import math
from dataclasses import dataclass
from functools import cmp_to_key
from typing import Iterable, List, Mapping, Optional
from .aggregation import DisplayRow
from .config import TABLE_HEADERS
from .orgs import OrgInfo
from .parsing import Metric, sort_value
from .table import SORT_ASC, SORT_DESC, Cell, render_cell

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class SortState:
    column: Optional[int] = None
    ascending: bool = True

    @property
    def mark(self) -> Optional[str]:
        if self.column is None:
            return None
        return SORT_ASC if self.ascending else SORT_DESC


def next_sort_state(state: Optional[SortState], column: int) -> SortState:
    state = state or SortState()
    if state.column == column:
        return SortState(column=column, ascending=not state.ascending)
    return SortState(column=column, ascending=True)


def compare_numeric(a: Metric, b: Metric, ascending: bool) -> int:
    va, vb = sort_value(a), sort_value(b)
    if va == -math.inf and vb == -math.inf:
        return 0
    if va == -math.inf:
        return 1
    if vb == -math.inf:
        return -1
    if va == vb:
        return 0
    if ascending:
        return -1 if va < vb else 1
    return -1 if vb < va else 1


def _collate(text: str) -> tuple:
    t = (text or "").strip()
    # case-only ties: lowercase first, whatever the locale's own order
    return (locale.strxfrm(t.casefold()), tuple(c.isupper() for c in t), locale.strxfrm(t))


def compare_text(a: str, b: str, ascending: bool) -> int:
    ka, kb = _collate(a), _collate(b)
    if not ascending:
        ka, kb = kb, ka
    return (ka > kb) - (ka < kb)


def _cell_at(row: DisplayRow, column: int, metadata: Optional[Mapping[str, OrgInfo]]) -> Cell:
    return render_cell(row.values()[column], column, metadata)


def sort_rows(
    rows: List[DisplayRow],
    column: int,
    state: Optional[SortState] = None,
    metadata: Optional[Mapping[str, OrgInfo]] = None,
    num_columns: int = len(TABLE_HEADERS),
) -> SortState:
    """
    One header click: works out the new direction, reorders rows in
    place and returns the new state. Whether the column is numeric is
    read from the first row's cell.
    """
    if column < 0 or column >= num_columns:
        raise ValueError(f"Unknown column index: {column}")

    new_state = next_sort_state(state, column)
    if not rows:
        return new_state

    numeric = _cell_at(rows[0], column, metadata).numeric
    asc = new_state.ascending

    if numeric:
        def cmp(ra: DisplayRow, rb: DisplayRow) -> int:
            return compare_numeric(
                _cell_at(ra, column, metadata).sort_value,
                _cell_at(rb, column, metadata).sort_value,
                asc,
            )
    else:
        def cmp(ra: DisplayRow, rb: DisplayRow) -> int:
            return compare_text(
                _cell_at(ra, column, metadata).text,
                _cell_at(rb, column, metadata).text,
                asc,
            )

    rows.sort(key=cmp_to_key(cmp))
    log.debug("Sorted %d rows by column %d (%s)", len(rows), column, "asc" if asc else "desc")
    return new_state


def apply_sort_clicks(
    rows: List[DisplayRow],
    columns: Iterable[int],
    state: Optional[SortState] = None,
    metadata: Optional[Mapping[str, OrgInfo]] = None,
) -> SortState:
    state = state or SortState()
    for col in columns:
        state = sort_rows(rows, col, state, metadata)
    return state
