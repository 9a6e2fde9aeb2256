"""
cryonics_core.io_csv
CSV text parsing + source loading (local file or one HTTP fetch).
"""
from __future__ import annotations
import logging
import time
from pathlib import Path
from typing import List
from urllib.parse import urlencode, urlparse, urlunparse, parse_qsl

import requests

from .config import FETCH_TIMEOUT_SECONDS

log = logging.getLogger(__name__)


class SourceError(RuntimeError):
    pass


def parse_csv(text: str) -> List[List[str]]:
    """
    Splits CSV text into rows of trimmed cells.

    Any double quote toggles quote mode, wherever it sits in the field
    ('a,b"c,d"' -> ['a', 'bc,d']); inside quotes a doubled quote is a
    literal quote and commas / line breaks are literal. Blank lines
    yield no row. An unterminated quote swallows the rest of the text
    into the last field, with no size limit and no error.
    """
    rows: List[List[str]] = []
    row: List[str] = []
    cell: List[str] = []
    in_quotes = False
    i, n = 0, len(text or "")

    while i < n:
        ch = text[i]
        if ch == '"':
            if in_quotes and i + 1 < n and text[i + 1] == '"':
                cell.append('"')
                i += 1
            else:
                in_quotes = not in_quotes
        elif ch == "," and not in_quotes:
            row.append("".join(cell).strip())
            cell = []
        elif ch in "\r\n" and not in_quotes:
            if cell or row:
                row.append("".join(cell).strip())
            if row:
                rows.append(row)
            row, cell = [], []
        else:
            cell.append(ch)
        i += 1

    if cell or row:
        row.append("".join(cell).strip())
        rows.append(row)
    if in_quotes:
        log.debug("Unterminated quote: last field runs to end of input")
    return rows


def is_url(location: str) -> bool:
    return urlparse(str(location)).scheme in ("http", "https")


def _cache_busted(url: str) -> str:
    parts = urlparse(url)
    query = parse_qsl(parts.query, keep_blank_values=True)
    query.append(("t", str(int(time.time() * 1000))))
    return urlunparse(parts._replace(query=urlencode(query)))


def fetch_text(url: str, timeout: float = FETCH_TIMEOUT_SECONDS) -> str:
    target = _cache_busted(url)
    log.info("Fetching %s", target)
    try:
        r = requests.get(target, timeout=timeout)
    except requests.RequestException as e:
        raise SourceError(str(e)) from e
    if r.status_code != 200:
        raise SourceError(f"Response was not OK: {r.status_code}")
    r.encoding = r.encoding or "utf-8"
    return r.text


def read_text(path: Path) -> str:
    p = Path(path)
    if not p.exists():
        raise SourceError(f"Source not found: {p}")
    try:
        with open(p, newline="", encoding="utf-8-sig") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise SourceError(f"Could not read {p}: {e}") from e


def load_source(location, timeout: float = FETCH_TIMEOUT_SECONDS) -> str:
    if is_url(str(location)):
        return fetch_text(str(location), timeout=timeout)
    return read_text(Path(location))


def load_rows(location, timeout: float = FETCH_TIMEOUT_SECONDS) -> List[List[str]]:
    text = load_source(location, timeout=timeout)
    rows = parse_csv(text.strip())
    log.info("Parsed %d rows from %s", len(rows), location)
    return rows
