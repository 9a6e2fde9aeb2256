"""
cryonics_core.table
Projects display rows + totals into a renderable table structure.
Nothing here mutates its inputs; writers (html/xlsx/pdf) read the result.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, List, Mapping, Optional, Sequence
from .config import EM_DASH, NUMERIC_COLUMN_START
from .orgs import OrgInfo, lookup
from .parsing import Metric, format_metric, parse_metric

if TYPE_CHECKING:
    from .aggregation import DisplayRow, Totals
    from .sorting import SortState

SORT_ASC = "sort-asc"
SORT_DESC = "sort-desc"


@dataclass(frozen=True)
class HeaderCell:
    label: str
    index: int
    sort_mark: Optional[str] = None


@dataclass(frozen=True)
class Cell:
    text: str
    numeric: bool = False
    sort_value: Metric = None
    na: bool = False
    org: Optional[OrgInfo] = None


@dataclass(frozen=True)
class Table:
    headers: List[HeaderCell]
    body: List[List[Cell]]
    footer: Optional[List[Cell]] = None
    period: str = ""


def _as_metric(value: Any) -> Metric:
    if value is None or isinstance(value, (int, float)):
        return None if value is None else float(value)
    return parse_metric(value)


def render_cell(value: Any, index: int, metadata: Optional[Mapping[str, OrgInfo]] = None) -> Cell:
    if index == 0:
        name = "" if value is None else str(value)
        info = lookup(name, metadata)
        if info is not None and info.has_identity:
            return Cell(text=info.name, org=info)
        return Cell(text=name)

    if index >= NUMERIC_COLUMN_START:
        metric = _as_metric(value)
        return Cell(text=format_metric(metric), numeric=True, sort_value=metric)

    text = "" if value is None else str(value)
    return Cell(text=text, na=text.strip() in ("", EM_DASH))


def render_row(row: "DisplayRow", metadata: Optional[Mapping[str, OrgInfo]] = None) -> List[Cell]:
    return [render_cell(v, i, metadata) for i, v in enumerate(row.values())]


def render_headers(headers: Sequence[str], state: Optional["SortState"] = None) -> List[HeaderCell]:
    active = state.column if state is not None else None
    out: List[HeaderCell] = []
    for i, label in enumerate(headers):
        mark = state.mark if active == i else None
        out.append(HeaderCell(label=label, index=i, sort_mark=mark))
    return out


def render_footer(totals: "Totals") -> List[Cell]:
    # totals are display-only: no sort metadata
    return [Cell(text=t) for t in totals.values()]


def render_table(
    headers: Sequence[str],
    rows: Sequence["DisplayRow"],
    totals: Optional["Totals"] = None,
    state: Optional["SortState"] = None,
    metadata: Optional[Mapping[str, OrgInfo]] = None,
    period: str = "",
) -> Table:
    return Table(
        headers=render_headers(headers, state),
        body=[render_row(r, metadata) for r in rows],
        footer=render_footer(totals) if totals is not None else None,
        period=period,
    )


def table_as_text_rows(table: Table) -> List[List[str]]:
    """Header, body and footer as plain strings (console / xlsx / pdf)."""
    out = [[h.label for h in table.headers]]
    out.extend([c.text for c in row] for row in table.body)
    if table.footer:
        out.append([c.text for c in table.footer])
    return out
