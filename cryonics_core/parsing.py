"""
cryonics_core.parsing
Metric normalization and display formatting.

A metric is Optional[float]: None means the source reported nothing
(empty cell, em-dash, #N/A). Each consumer decides what missing means:
sort_value() sinks it to -inf, sum_value() counts it as zero.
"""
from __future__ import annotations
import locale
import math
import re
from typing import Any, Optional
from .config import EM_DASH, MISSING_MARKERS

Metric = Optional[float]

# leading numeric prefix, the way a browser's parseFloat reads it
_NUMBER_PREFIX = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")

def is_missing(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() in MISSING_MARKERS
    return False

def parse_metric(value: Any) -> Metric:
    """
    '1,234' -> 1234.0, '12 patients' -> 12.0, 'n/a' -> 0.0, '—' -> None.
    Unparseable text is a reported zero, not a missing value.
    """
    if is_missing(value):
        return None
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        if isinstance(value, float) and math.isnan(value):
            return 0.0
        return float(value)

    s = str(value).strip().replace(",", "")
    m = _NUMBER_PREFIX.match(s)
    if not m:
        return 0.0
    try:
        return float(m.group(0))
    except ValueError:
        return 0.0

def sort_value(metric: Metric) -> float:
    return -math.inf if metric is None else metric

def sum_value(metric: Metric) -> float:
    return 0.0 if metric is None else metric

def _grouped(value: float, decimals: int) -> str:
    # LC_NUMERIC grouping when the locale has one, else ',' and '.'
    conv = locale.localeconv()
    if conv.get("thousands_sep") and conv.get("grouping"):
        text = locale.format_string(f"%.{decimals}f", value, grouping=True)
        point = conv.get("decimal_point") or "."
    else:
        text = f"{value:,.{decimals}f}"
        point = "."
    if decimals:
        text = text.rstrip("0").rstrip(point)
    return text

def format_metric(metric: Metric) -> str:
    """
    Grouped display text with up to 3 decimals. Anything that is not a
    finite non-zero number shows as an em-dash.
    """
    if metric is None or metric == 0 or math.isinf(metric):
        return EM_DASH
    if float(metric).is_integer():
        return _grouped(metric, 0)
    return _grouped(metric, 3)
