# Rev 0.1.0
"""Date formatting / parsing for task timestamps (ms since epoch, local time).

Every helper returns None instead of raising: a bad timestamp or a half-typed
due date must never take the UI down.
"""
from __future__ import annotations
from datetime import date, datetime
from typing import Optional

DUE_DATE_FORMAT = "%Y-%m-%d"


def _to_local(ts: Optional[int]) -> Optional[datetime]:
    if not ts:
        return None
    try:
        return datetime.fromtimestamp(ts / 1000)
    except (OverflowError, OSError, ValueError, TypeError):
        return None


def human_date(ts: Optional[int]) -> Optional[str]:
    """'Mar 7, 2025' style label, or None."""
    dt = _to_local(ts)
    if dt is None:
        return None
    return f"{dt:%b} {dt.day}, {dt.year}"


def due_date_text(ts: Optional[int]) -> str:
    """Editor field text: YYYY-MM-DD, empty when unset or unrenderable."""
    dt = _to_local(ts)
    return dt.strftime(DUE_DATE_FORMAT) if dt else ""


def parse_due_date(text: str) -> Optional[int]:
    """
    Parse editor input into ms since epoch.
    Accepts YYYY-MM-DD (local midnight) or a full ISO datetime.
    Returns None when the text is not a date.
    """
    text = (text or "").strip()
    if not text:
        return None
    try:
        if len(text) == 10:
            d = date.fromisoformat(text)
            dt = datetime(d.year, d.month, d.day)
        else:
            dt = datetime.fromisoformat(text.replace("Z", "+00:00"))
        return int(dt.timestamp() * 1000)
    except (ValueError, OverflowError, OSError):
        return None
