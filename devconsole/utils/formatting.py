"""
Text rendering for log lines.  Kept free of any UI toolkit so it can be
used (and tested) without a display.
"""

import re
from datetime import datetime
from typing import Optional

from devconsole.config import ZERO_TIMESTAMP

# Older fromisoformat() wants exactly 3 or 6 fraction digits; providers send 1-9.
_FRACTION = re.compile(r"\.(\d+)")


def parse_timestamp(timestamp: Optional[str]) -> Optional[datetime]:
    """Parse an ISO-8601 instant.  None for absent, zero-valued or invalid input."""
    if not timestamp or timestamp == ZERO_TIMESTAMP:
        return None
    text = timestamp.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    text = _FRACTION.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), text, count=1)
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def format_timestamp(timestamp: Optional[str]) -> str:
    """Local wall-clock time for display, or "" when there is nothing to show."""
    parsed = parse_timestamp(timestamp)
    if parsed is None:
        return ""
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone()
    return parsed.strftime("%X")


def render_log_line(entry) -> list[str]:
    """Return the display rows for one LogLine (a header row, a text row, or both)."""
    rows = []
    if entry.header:
        rows.append(f"== {entry.header}")
    if entry.line:
        stamp = format_timestamp(entry.timestamp)
        rows.append(f"[{stamp}] {entry.line}" if stamp else entry.line)
    return rows
