"""
cryonics_core.aggregation
Group rows by period, keep the latest period, build display rows + totals.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Sequence, Tuple
from .config import EM_DASH, TOTAL_LABEL
from .orgs import OrgInfo, org_or_default
from .parsing import Metric, format_metric, parse_metric, sum_value

log = logging.getLogger(__name__)

Row = List[str]


class NoDataError(ValueError):
    pass


@dataclass(frozen=True)
class DisplayRow:
    name: str
    location: str
    founded: str
    patients: Metric
    members: Metric

    def values(self) -> list:
        return [self.name, self.location, self.founded, self.patients, self.members]


@dataclass(frozen=True)
class Totals:
    patients: float = 0.0
    members: float = 0.0

    def values(self) -> List[str]:
        return [TOTAL_LABEL, EM_DASH, EM_DASH, format_metric(self.patients), format_metric(self.members)]


@dataclass
class QuarterSnapshot:
    period: str
    rows: List[DisplayRow]
    totals: Totals
    skipped: int = 0
    periods: List[str] = field(default_factory=list)


def _cell(row: Sequence[str], idx: int) -> str:
    return row[idx] if idx < len(row) else ""


def is_total_row(name: str) -> bool:
    return (name or "").strip().lower() == TOTAL_LABEL.lower()


def group_by_period(rows: Sequence[Row]) -> Tuple[Dict[str, List[Row]], int]:
    """
    Groups data rows (header already removed) by their first cell.
    Rows with fewer than two cells or an empty period are skipped.
    """
    groups: Dict[str, List[Row]] = {}
    skipped = 0
    for r in rows:
        if len(r) < 2:
            skipped += 1
            continue
        period = (r[0] or "").strip()
        if not period:
            skipped += 1
            continue
        groups.setdefault(period, []).append(r)
    if skipped:
        log.debug("Skipped %d malformed rows while grouping", skipped)
    return groups, skipped


def list_periods(groups: Mapping[str, List[Row]]) -> List[str]:
    return sorted(groups.keys())


def latest_period(groups: Mapping[str, List[Row]]) -> str:
    if not groups:
        raise NoDataError("No quarterly data found")
    return max(groups.keys())


def build_display_rows(
    group_rows: Sequence[Row],
    metadata: Optional[Mapping[str, OrgInfo]] = None,
) -> Tuple[List[DisplayRow], Totals, int]:
    out: List[DisplayRow] = []
    total_patients = 0.0
    total_members = 0.0
    dropped = 0

    for r in group_rows:
        raw_name = _cell(r, 1)
        if not raw_name or is_total_row(raw_name):
            dropped += 1
            continue

        info = org_or_default(raw_name, metadata)
        location, founded = info.location, info.founded

        patients = sum_value(parse_metric(_cell(r, 2)))
        members = sum_value(parse_metric(_cell(r, 3)))

        # zero and missing both contribute nothing
        if patients > 0:
            total_patients += patients
        if members > 0:
            total_members += members

        out.append(DisplayRow(raw_name, location, founded, patients, members))

    return out, Totals(total_patients, total_members), dropped


def aggregate_latest(
    rows: Sequence[Row],
    metadata: Optional[Mapping[str, OrgInfo]] = None,
) -> QuarterSnapshot:
    """
    rows[0] is the header. Picks the lexically greatest period and
    returns its display rows (input order kept) plus totals.
    """
    if not rows or len(rows) < 2:
        raise NoDataError("No data found")

    groups, skipped = group_by_period(rows[1:])
    period = latest_period(groups)
    display_rows, totals, dropped = build_display_rows(groups[period], metadata)

    log.info(
        "Latest period %s: %d organisations, patients=%s members=%s",
        period, len(display_rows), format_metric(totals.patients), format_metric(totals.members),
    )
    return QuarterSnapshot(
        period=period,
        rows=display_rows,
        totals=totals,
        skipped=skipped + dropped,
        periods=list_periods(groups),
    )
