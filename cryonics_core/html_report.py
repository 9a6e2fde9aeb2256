"""
cryonics_core.html_report
Standalone HTML page (inline CSS + click-to-sort script) and the
status page shown instead of the table when loading fails.
"""
from __future__ import annotations
import html
import json
import logging
from pathlib import Path
from typing import List, Optional
from .config import REPORT_TITLE
from .table import Cell, Table
from .utils import now_local, timestamp_line

log = logging.getLogger(__name__)

CSS = """
:root {
  --bg: #f6f7f9;
  --card: #ffffff;
  --text: #0f172a;
  --text-muted: #64748b;
  --border: rgba(15,23,42,0.12);
  --accent: #0284c7;
}
html, body { margin:0; padding:0; font-family: ui-sans-serif, system-ui, -apple-system, Segoe UI, Roboto, Arial; background: var(--bg); color: var(--text); }
header { padding: 22px 24px 6px; }
h1 { margin:0; font-size: 22px; }
main { padding: 12px 24px 40px; max-width: 1100px; }
.last-updated, footer, small { color: var(--text-muted); font-size: 13px; }
#status-message { padding: 24px; text-align: center; color: var(--text-muted); }
.hidden { display: none; }
table { width: 100%; border-collapse: collapse; background: var(--card); font-size: 14px; }
th, td { padding: 8px 10px; border-bottom: 1px solid var(--border); text-align: left; }
th { cursor: pointer; user-select: none; white-space: nowrap; }
th.sort-asc .th-content::after { content: " \\25B2"; color: var(--accent); }
th.sort-desc .th-content::after { content: " \\25BC"; color: var(--accent); }
td.num { text-align: right; font-variant-numeric: tabular-nums; }
td.na-cell { color: var(--text-muted); }
tfoot td { font-weight: 650; border-top: 2px solid var(--border); }
.org-cell { display: flex; align-items: center; gap: 8px; }
.org-cell a { display: flex; align-items: center; gap: 8px; color: inherit; text-decoration: none; }
.org-cell img { width: 24px; height: 24px; object-fit: contain; }
footer { padding: 0 24px 24px; }
"""

# Same rules as cryonics_core.sorting: missing numbers stay at the bottom
# in both directions, text uses localeCompare.
JS = r"""
(function () {
  const table = document.getElementById('data-table');
  let currentSortColumn = __SORT_COLUMN__;
  let isAscending = __SORT_ASC__;

  function sortTable(columnIndex) {
    const tbody = table.tBodies[0];
    const rows = Array.from(tbody.rows);
    const ths = table.querySelectorAll('thead th');

    if (currentSortColumn === columnIndex) {
      isAscending = !isAscending;
    } else {
      currentSortColumn = columnIndex;
      isAscending = true;
    }

    ths.forEach(th => th.classList.remove('sort-asc', 'sort-desc'));
    ths[columnIndex].classList.add(isAscending ? 'sort-asc' : 'sort-desc');

    const firstValue = rows[0] ? rows[0].cells[columnIndex].dataset.value : undefined;
    const isNumericCol = firstValue !== undefined;

    rows.sort((rowA, rowB) => {
      const cellA = rowA.cells[columnIndex];
      const cellB = rowB.cells[columnIndex];
      if (isNumericCol) {
        const valA = cellA.dataset.value ? parseFloat(cellA.dataset.value) : -Infinity;
        const valB = cellB.dataset.value ? parseFloat(cellB.dataset.value) : -Infinity;
        if (valA === -Infinity && valB === -Infinity) return 0;
        if (valA === -Infinity) return 1;
        if (valB === -Infinity) return -1;
        return isAscending ? valA - valB : valB - valA;
      }
      const textA = cellA.innerText.trim();
      const textB = cellB.innerText.trim();
      return isAscending ? textA.localeCompare(textB) : textB.localeCompare(textA);
    });

    tbody.append(...rows);
  }

  table.querySelectorAll('thead th').forEach((th, index) => {
    th.addEventListener('click', () => sortTable(index));
  });
})();
"""


def _esc(text) -> str:
    return html.escape("" if text is None else str(text))


def _data_value(cell: Cell) -> str:
    if cell.sort_value is None:
        return ""
    v = cell.sort_value
    return str(int(v)) if float(v).is_integer() else repr(v)


def _org_cell_html(cell: Cell) -> str:
    if cell.org is not None:
        org = cell.org
        return (
            '<div class="org-cell">'
            f'<a href="{_esc(org.url)}" target="_blank" rel="noopener noreferrer">'
            f'<img src="{_esc(org.logo)}" alt="{_esc(org.name)} logo" loading="lazy">'
            f'<span>{_esc(org.name)}</span>'
            '</a></div>'
        )
    return f'<div class="org-cell"><span>{_esc(cell.text)}</span></div>'


def _body_cell_html(cell: Cell, index: int) -> str:
    if index == 0:
        return f"<td>{_org_cell_html(cell)}</td>"
    if cell.numeric:
        return f'<td class="num" data-value="{_esc(_data_value(cell))}">{_esc(cell.text)}</td>'
    cls = ' class="na-cell"' if cell.na else ""
    return f"<td{cls}>{_esc(cell.text)}</td>"


def table_html(table: Table) -> str:
    p: List[str] = []
    p.append('<table id="data-table">')

    p.append("<thead><tr>")
    for h in table.headers:
        cls = f' class="{h.sort_mark}"' if h.sort_mark else ""
        p.append(f'<th{cls} data-index="{h.index}"><div class="th-content">{_esc(h.label)}</div></th>')
    p.append("</tr></thead>")

    p.append("<tbody>")
    for row in table.body:
        p.append("<tr>" + "".join(_body_cell_html(c, i) for i, c in enumerate(row)) + "</tr>")
    p.append("</tbody>")

    if table.footer:
        p.append("<tfoot><tr>")
        for i, c in enumerate(table.footer):
            if i == 0:
                p.append(f'<td><div class="org-cell"><span>{_esc(c.text)}</span></div></td>')
            else:
                p.append(f"<td>{_esc(c.text)}</td>")
        p.append("</tr></tfoot>")

    p.append("</table>")
    return "\n".join(p)


def _page(body: str, title: str, period: str = "", script: str = "") -> str:
    p: List[str] = []
    p.append("<!DOCTYPE html>")
    p.append('<html lang="en">')
    p.append("<head>")
    p.append('<meta charset="UTF-8">')
    p.append('<meta name="viewport" content="width=device-width, initial-scale=1.0">')
    p.append(f"<title>{_esc(title)}</title>")
    p.append(f"<style>{CSS}</style>")
    p.append("</head>")
    p.append("<body>")
    p.append(f"<header><h1>{_esc(title)}</h1>")
    if period:
        p.append(f'<p class="last-updated">Last updated: <strong>{_esc(period)}</strong></p>')
    p.append("</header>")
    p.append(f"<main>{body}</main>")
    p.append(
        f'<footer>&copy; <span id="year">{now_local().year}</span> '
        f"&middot; {_esc(timestamp_line('Generated'))}</footer>"
    )
    if script:
        p.append(f"<script>{script}</script>")
    p.append("</body>")
    p.append("</html>")
    return "\n".join(p)


def build_html_report(table: Table, title: str = REPORT_TITLE, sort_column: Optional[int] = None,
                      ascending: bool = True) -> str:
    script = (
        JS.replace("__SORT_COLUMN__", json.dumps(-1 if sort_column is None else int(sort_column)))
        .replace("__SORT_ASC__", json.dumps(bool(ascending)))
    )
    return _page(table_html(table), title=title, period=table.period, script=script)


def build_status_page(message: str, title: str = REPORT_TITLE) -> str:
    body = f'<div id="status-message">Unable to load data.<br><small>{_esc(message)}</small></div>'
    return _page(body, title=title)


def write_html_report(table: Table, html_path: Path, title: str = REPORT_TITLE,
                      sort_column: Optional[int] = None, ascending: bool = True) -> Path:
    html_path = Path(html_path)
    html_path.write_text(build_html_report(table, title, sort_column, ascending), encoding="utf-8")
    log.info("HTML report written: %s", html_path)
    return html_path


def write_status_page(message: str, html_path: Path, title: str = REPORT_TITLE) -> Path:
    html_path = Path(html_path)
    html_path.write_text(build_status_page(message, title), encoding="utf-8")
    log.warning("Status page written: %s (%s)", html_path, message)
    return html_path
