"""
cryonics_core.excel_reports
Excel creation (openpyxl).
"""
from __future__ import annotations
import logging
from pathlib import Path
from .config import NUMERIC_COLUMN_START, REPORT_TITLE
from .table import Table
from .utils import timestamp_line

log = logging.getLogger(__name__)

def require_openpyxl():
    try:
        from openpyxl import Workbook  # noqa
        from openpyxl.styles import Font  # noqa
        return Workbook, Font
    except Exception:
        raise SystemExit("Missing dependency: openpyxl\nInstall with: pip3 install openpyxl\n")

def write_excel_table(table: Table, xlsx_path: Path, title: str = REPORT_TITLE) -> Path:
    """
    Row 1 timestamp, row 2 period, row 3 headers, then the body in its
    current order and a bold totals row. Numeric cells are written as
    numbers (blank when missing) so Excel can re-sort them.
    """
    Workbook, Font = require_openpyxl()
    BOLD = Font(bold=True)

    wb = Workbook()
    ws = wb.active
    ws.title = title[:31]

    ws.append([timestamp_line("Generated")])
    ws.append([f"Period: {table.period}" if table.period else ""])
    ws.append([h.label for h in table.headers])

    ws["A1"].font = BOLD
    for c in range(1, len(table.headers) + 1):
        ws.cell(row=3, column=c).font = BOLD

    for row in table.body:
        values = []
        for i, cell in enumerate(row):
            if i >= NUMERIC_COLUMN_START:
                values.append(cell.sort_value)
            else:
                values.append(cell.text)
        ws.append(values)

    if table.footer:
        ws.append([c.text for c in table.footer])
        last = ws.max_row
        for c in range(1, len(table.footer) + 1):
            ws.cell(row=last, column=c).font = BOLD

    for r in range(4, ws.max_row + 1):
        for c in range(NUMERIC_COLUMN_START + 1, len(table.headers) + 1):
            ws.cell(row=r, column=c).number_format = "#,##0"

    ws.column_dimensions["A"].width = 30
    ws.column_dimensions["B"].width = 36
    ws.column_dimensions["C"].width = 10
    ws.column_dimensions["D"].width = 12
    ws.column_dimensions["E"].width = 12

    wb.save(xlsx_path)
    log.info("Excel table written: %s", xlsx_path)
    return Path(xlsx_path)
