"""
cryonics_core.utils
Small reusable helpers.
"""
from __future__ import annotations
from datetime import datetime
from zoneinfo import ZoneInfo
from .config import REPORT_TIMEZONE

def lookup_key(name: str) -> str:
    return (name or "").strip().lower()

def now_local(tz_name: str = REPORT_TIMEZONE) -> datetime:
    try:
        return datetime.now(ZoneInfo(tz_name))
    except Exception:
        return datetime.now()

def timestamp_line(prefix: str = "Generated", tz_name: str = REPORT_TIMEZONE) -> str:
    dt = now_local(tz_name)
    return f"{prefix}: {dt.strftime('%Y-%m-%d %H:%M:%S')} {tz_name}"
