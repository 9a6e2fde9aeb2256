"""
cryonics_core.pdf_reports
PDF creation (reportlab).
"""
from __future__ import annotations
import logging
from pathlib import Path
from .config import REPORT_TITLE
from .table import Table, table_as_text_rows
from .utils import timestamp_line

log = logging.getLogger(__name__)

def require_reportlab():
    try:
        from reportlab.lib.pagesizes import letter, landscape  # noqa
        from reportlab.lib.units import inch  # noqa
        from reportlab.lib import colors  # noqa
        from reportlab.lib.styles import getSampleStyleSheet  # noqa
        from reportlab.platypus import (  # noqa
            SimpleDocTemplate, Paragraph, Spacer, Table, TableStyle
        )
        return (letter, landscape, inch, colors, getSampleStyleSheet,
                SimpleDocTemplate, Paragraph, Spacer, Table, TableStyle)
    except Exception:
        raise SystemExit("Missing dependency: reportlab\nInstall with: pip3 install reportlab\n")

def _style_table(TableStyle, colors, has_footer: bool):
    st = TableStyle([
        ("BACKGROUND", (0, 0), (-1, 0), colors.lightgrey),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("GRID", (0, 0), (-1, -1), 0.25, colors.grey),
        ("ALIGN", (3, 1), (-1, -1), "RIGHT"),
        ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
        ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.whitesmoke, colors.white]),
    ])
    if has_footer:
        st.add("FONTNAME", (0, -1), (-1, -1), "Helvetica-Bold")
        st.add("BACKGROUND", (0, -1), (-1, -1), colors.whitesmoke)
    return st

def _arrowed_headers(table: Table, header_row):
    out = list(header_row)
    for h in table.headers:
        if h.sort_mark == "sort-asc":
            out[h.index] = f"{h.label} ^"
        elif h.sort_mark == "sort-desc":
            out[h.index] = f"{h.label} v"
    return out

def write_pdf_table(table: Table, pdf_path: Path, title: str = REPORT_TITLE) -> Path:
    (letter, landscape, inch, colors, getSampleStyleSheet,
     SimpleDocTemplate, Paragraph, Spacer, RLTable, TableStyle) = require_reportlab()

    margin_in = 0.6
    doc = SimpleDocTemplate(
        str(pdf_path),
        pagesize=landscape(letter),
        leftMargin=margin_in * inch,
        rightMargin=margin_in * inch,
        topMargin=margin_in * inch,
        bottomMargin=margin_in * inch,
    )
    styles = getSampleStyleSheet()

    story = []
    story.append(Paragraph(title, styles["Title"]))
    story.append(Spacer(1, 0.06 * inch))
    if table.period:
        story.append(Paragraph(f"<b>Last updated:</b> {table.period}", styles["Normal"]))
    story.append(Paragraph(timestamp_line("Generated"), styles["Normal"]))
    story.append(Spacer(1, 0.14 * inch))

    data = table_as_text_rows(table)
    data[0] = _arrowed_headers(table, data[0])

    tbl = RLTable(
        data,
        colWidths=[2.6 * inch, 3.2 * inch, 0.9 * inch, 1.1 * inch, 1.1 * inch],
        repeatRows=1,
    )
    tbl.setStyle(_style_table(TableStyle, colors, has_footer=bool(table.footer)))
    story.append(tbl)

    doc.build(story)
    log.info("PDF table written: %s", pdf_path)
    return Path(pdf_path)
