"""Helpers for the ISO-8601 timestamps stored on catalog assets."""

import re
from datetime import datetime, timezone
from typing import Optional

# Seconds followed by a fraction of any length
FRACTION_PATTERN = re.compile(r"(\d{2}:\d{2}:\d{2})\.(\d+)")


def utc_now_iso() -> str:
    """Current UTC time as an ISO-8601 string with millisecond precision and a ``Z`` suffix."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _normalize_fraction(match: "re.Match[str]") -> str:
    return f"{match.group(1)}.{match.group(2)[:6].ljust(6, '0')}"


def parse_iso_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO-8601 date or date-time into an aware UTC datetime.

    Date-only values and naive date-times are read as UTC. Returns None for
    empty or unparseable input instead of raising.

    Args:
        value: Timestamp string such as ``2024-01-01`` or ``2024-01-01T10:00:00.000Z``

    Returns:
        Parsed datetime or None
    """
    if not value or not isinstance(value, str):
        return None

    text = value.strip()
    if text.endswith("Z") or text.endswith("z"):
        text = text[:-1] + "+00:00"

    # fromisoformat on 3.10 only takes 3 or 6 fractional digits
    text = FRACTION_PATTERN.sub(_normalize_fraction, text, count=1)

    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)
