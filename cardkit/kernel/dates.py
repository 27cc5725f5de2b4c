"""
CardKit Kernel — Date collaborator

Default date parsing and formatting for article eyebrows.
Neither function raises for bad input: unparseable dates come back as
None / "".
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any


def parse_date(raw: Any) -> date | None:
    """
    Parse an ISO-8601 date or datetime string.

    Accepts "2024-01-15", "2024-01-15T10:30:00", "2024-01-15T10:30:00Z" and
    offsets. Returns None for anything else, including non-strings.
    """
    if not isinstance(raw, str):
        return None
    text = raw.strip()
    if not text:
        return None
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        return None


def is_parseable_date(raw: Any) -> bool:
    return parse_date(raw) is not None


def format_date_safely(raw: Any) -> str:
    """
    Format a date as "January 15, 2024". Returns "" when it does not parse.
    """
    parsed = parse_date(raw)
    if parsed is None:
        return ""
    return f"{parsed:%B} {parsed.day}, {parsed.year}"
