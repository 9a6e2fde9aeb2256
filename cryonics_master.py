#!/usr/bin/env python3
"""
cryonics_master.py

Cryonics organisations table: CSV -> latest quarter -> sortable table.

Reads the quarterly CSV (period, organisation, patients, members), keeps
the most recent quarter, adds a totals row and writes:
- html     : interactive page (click headers to sort)
- excel    : .xlsx table
- pdf      : .pdf table
- quick    : print the table to the console
- periods  : list the quarters found in the CSV
- all      : html + excel + pdf

On failure the HTML page is replaced by a status message.

Install:
  pip3 install -e .

Examples:
  python3 cryonics_master.py --in data.csv html
  python3 cryonics_master.py --in https://example.org/data.csv all
  python3 cryonics_master.py --in data.csv --sort 4 --sort 4 quick   # members, high -> low
"""

from __future__ import annotations

import argparse
import locale
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Tuple

from cryonics_core.config import (
    DEFAULT_INPUT_CSV,
    DEFAULT_HTML_OUT,
    DEFAULT_EXCEL_OUT,
    DEFAULT_PDF_OUT,
    FETCH_TIMEOUT_SECONDS,
    REPORT_TITLE,
    TABLE_HEADERS,
)
from cryonics_core.paths import out_path
from cryonics_core.io_csv import SourceError, is_url, load_rows
from cryonics_core.aggregation import NoDataError, QuarterSnapshot, aggregate_latest, group_by_period, list_periods
from cryonics_core.sorting import SortState, apply_sort_clicks
from cryonics_core.table import Table, render_table, table_as_text_rows
from cryonics_core.html_report import write_html_report, write_status_page
from cryonics_core.excel_reports import write_excel_table
from cryonics_core.pdf_reports import write_pdf_table


# -----------------------------
# Logging
# -----------------------------
def setup_logging(base_dir: Path) -> Path:
    log_path = out_path("logs", f"cryonics_master_{datetime.now().strftime('%Y%m%d_%H%M%S')}.log", base_dir)

    root = logging.getLogger()
    root.setLevel(logging.INFO)

    # avoid duplicate handlers if user imports/runs in unusual way
    if not root.handlers:
        fmt = logging.Formatter("%(asctime)s | %(levelname)s | %(message)s")

        fh = logging.FileHandler(str(log_path), encoding="utf-8")
        fh.setLevel(logging.INFO)
        fh.setFormatter(fmt)

        sh = logging.StreamHandler()
        sh.setLevel(logging.INFO)
        sh.setFormatter(fmt)

        root.addHandler(fh)
        root.addHandler(sh)

    logging.info("Logging started: %s", log_path)
    return log_path


def setup_locale() -> None:
    # text sort order and number grouping follow the environment
    for category, name in ((locale.LC_COLLATE, "collation"), (locale.LC_NUMERIC, "number format")):
        try:
            locale.setlocale(category, "")
        except locale.Error as e:
            logging.warning("Locale %s unavailable, using C defaults: %s", name, e)


# ============================================================
# Helpers
# ============================================================
def resolve_input(location: str) -> str:
    if is_url(location):
        return location
    p = Path(location).expanduser()
    if p.exists():
        return str(p.resolve())
    alt = Path(__file__).resolve().parent / location
    if alt.exists():
        return str(alt.resolve())
    return str(p)


def load_table(location: str, sort_clicks: List[int], timeout: float) -> Tuple[QuarterSnapshot, Table, SortState]:
    rows = load_rows(location, timeout=timeout)
    snapshot = aggregate_latest(rows)
    state = apply_sort_clicks(snapshot.rows, sort_clicks)
    table = render_table(TABLE_HEADERS, snapshot.rows, snapshot.totals, state=state, period=snapshot.period)
    return snapshot, table, state


def format_console_table(table: Table) -> str:
    rows = table_as_text_rows(table)
    widths = [max(len(r[i]) for r in rows) for i in range(len(rows[0]))]
    lines = []
    for n, r in enumerate(rows):
        cells = []
        for i, text in enumerate(r):
            cells.append(text.rjust(widths[i]) if i >= 3 else text.ljust(widths[i]))
        lines.append("  ".join(cells).rstrip())
        if n == 0 or (table.footer and n == len(rows) - 2):
            lines.append("  ".join("-" * w for w in widths))
    return "\n".join(lines)


# ============================================================
# Commands
# ============================================================
def run_html(table: Table, state: SortState, out_name: str, base_dir: Path) -> List[Path]:
    p = write_html_report(table, out_path("html", out_name, base_dir), REPORT_TITLE,
                          sort_column=state.column, ascending=state.ascending)
    print(f"✅ HTML: {p}")
    return [p]


def run_excel(table: Table, out_name: str, base_dir: Path) -> List[Path]:
    p = write_excel_table(table, out_path("xlsx", out_name, base_dir), REPORT_TITLE)
    print(f"✅ Excel: {p}")
    return [p]


def run_pdf(table: Table, out_name: str, base_dir: Path) -> List[Path]:
    p = write_pdf_table(table, out_path("pdf", out_name, base_dir), REPORT_TITLE)
    print(f"✅ PDF: {p}")
    return [p]


def run_quick(snapshot: QuarterSnapshot, table: Table) -> List[Path]:
    print(f"{REPORT_TITLE} — {snapshot.period}")
    print(format_console_table(table))
    if snapshot.skipped:
        print(f"ℹ️ Skipped rows: {snapshot.skipped}")
    return []


def run_periods(location: str, timeout: float) -> List[Path]:
    rows = load_rows(location, timeout=timeout)
    if len(rows) < 2:
        raise NoDataError("No data found")
    groups, _skipped = group_by_period(rows[1:])
    periods = list_periods(groups)
    if not periods:
        raise NoDataError("No quarterly data found")
    for period in periods:
        print(f"{period}  ({len(groups[period])} rows)")
    return []


def run_all(table: Table, state: SortState, base_dir: Path) -> List[Path]:
    created: List[Path] = []
    created += run_html(table, state, DEFAULT_HTML_OUT, base_dir)
    created += run_excel(table, DEFAULT_EXCEL_OUT, base_dir)
    created += run_pdf(table, DEFAULT_PDF_OUT, base_dir)
    print("🎉 Done")
    return created


# ============================================================
# CLI
# ============================================================
def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Cryonics organisations: CSV -> latest quarter -> sortable table.")
    p.add_argument("--in", dest="input_csv", default=DEFAULT_INPUT_CSV, help="CSV path or http(s) URL.")
    p.add_argument("--outdir", default=".", help="Base folder for output/ (default: current folder).")
    p.add_argument("--sort", dest="sort_clicks", type=int, action="append", default=[],
                   choices=range(len(TABLE_HEADERS)),
                   help="Column index to sort by; repeat to toggle direction (e.g. --sort 4 --sort 4).")
    p.add_argument("--timeout", type=float, default=FETCH_TIMEOUT_SECONDS, help="HTTP fetch timeout in seconds.")

    sub = p.add_subparsers(dest="cmd", required=True)

    h = sub.add_parser("html", help="Write the interactive HTML table.")
    h.add_argument("--out", default=DEFAULT_HTML_OUT)

    x = sub.add_parser("excel", help="Write the table as .xlsx.")
    x.add_argument("--out", default=DEFAULT_EXCEL_OUT)

    pdf = sub.add_parser("pdf", help="Write the table as .pdf.")
    pdf.add_argument("--out", default=DEFAULT_PDF_OUT)

    sub.add_parser("quick", help="Print the table to the console.")
    sub.add_parser("periods", help="List the quarters found in the CSV.")
    sub.add_parser("all", help="html + excel + pdf.")
    return p


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    base_dir = Path(args.outdir).expanduser()
    setup_logging(base_dir)
    setup_locale()

    location = resolve_input(args.input_csv)

    try:
        if args.cmd == "periods":
            run_periods(location, args.timeout)
            return 0

        snapshot, table, state = load_table(location, args.sort_clicks, args.timeout)

        if args.cmd == "html":
            run_html(table, state, args.out, base_dir)
        elif args.cmd == "excel":
            run_excel(table, args.out, base_dir)
        elif args.cmd == "pdf":
            run_pdf(table, args.out, base_dir)
        elif args.cmd == "quick":
            run_quick(snapshot, table)
        elif args.cmd == "all":
            run_all(table, state, base_dir)
        else:
            raise ValueError(f"Unknown command: {args.cmd}")
    except (SourceError, NoDataError) as e:
        logging.error("Error loading data: %s", e)
        print(f"❌ Unable to load data: {e}")
        if args.cmd in ("html", "all"):
            out_name = args.out if args.cmd == "html" else DEFAULT_HTML_OUT
            write_status_page(str(e), out_path("html", out_name, base_dir), REPORT_TITLE)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
