"""Best-effort parsing helpers shared by every adapter.

Every helper here is parse-or-absent: input that cannot be understood yields
``None`` (or an empty string for labels), never ``0``. Adapters rely on this
to keep "the source did not say" distinct from "the source said zero".
"""

from __future__ import annotations

import re
from datetime import UTC, datetime
from typing import Any

UNKNOWN_CATEGORY = "Unknown"

# Category markers that sources use to mean "no category"
_UNCATEGORIZED_MARKERS = frozenset({"", "0", "unknown", "none", "null"})

_SIZE_UNITS = ("B", "KB", "MB", "GB", "TB", "PB")

_SIZE_MULTIPLIERS = {
    "B": 1,
    "KB": 1024,
    "KIB": 1024,
    "MB": 1024**2,
    "MIB": 1024**2,
    "GB": 1024**3,
    "GIB": 1024**3,
    "TB": 1024**4,
    "TIB": 1024**4,
    "PB": 1024**5,
    "PIB": 1024**5,
}

_SIZE_PATTERN = re.compile(r"^\s*([\d.]+)\s*([KMGTP]?I?B)\s*$", re.IGNORECASE)

_DATETIME_FORMATS = ("%Y-%m-%d %H:%M:%S", "%Y-%m-%d %H:%M", "%Y-%m-%d")


def parse_optional_int(value: Any) -> int | None:
    """Parse an integer from an int, float or numeric string.

    Returns ``None`` for ``None``, booleans, empty strings and anything that
    does not look like a whole number.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return int(text)
        except ValueError:
            return None
    return None


def parse_size_string(value: Any) -> int | None:
    """Parse a human-readable size such as ``"2.0 GiB"`` into bytes."""
    if not isinstance(value, str):
        return None
    match = _SIZE_PATTERN.match(value)
    if not match:
        return None
    try:
        number = float(match.group(1))
    except ValueError:
        return None
    multiplier = _SIZE_MULTIPLIERS.get(match.group(2).upper())
    if multiplier is None:
        return None
    try:
        size = int(number * multiplier)
    except (OverflowError, ValueError):
        return None
    return size if size > 0 else None


def format_size(size: int | None) -> str:
    """Format a byte count for display (``1536`` → ``"1.5 KB"``).

    Returns an empty string for absent or non-positive sizes.
    """
    if size is None or size <= 0:
        return ""
    value = float(size)
    unit = 0
    while value >= 1024 and unit < len(_SIZE_UNITS) - 1:
        value /= 1024
        unit += 1
    precision = 1 if value < 10 and unit > 0 else 0
    return f"{value:.{precision}f} {_SIZE_UNITS[unit]}"


def parse_unix_timestamp(value: Any) -> datetime | None:
    """Parse seconds since the epoch (int or numeric string) as a UTC datetime."""
    seconds = parse_optional_int(value)
    if seconds is None or seconds <= 0:
        return None
    try:
        return datetime.fromtimestamp(seconds, tz=UTC)
    except (OverflowError, OSError, ValueError):
        return None


def parse_datetime(value: Any) -> datetime | None:
    """Parse an ISO-8601 or ``YYYY-MM-DD HH:MM[:SS]`` string as UTC."""
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    try:
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        parsed = None
        for fmt in _DATETIME_FORMATS:
            try:
                parsed = datetime.strptime(text, fmt)
                break
            except ValueError:
                continue
    if parsed is None:
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    try:
        return parsed.astimezone(UTC)
    except (OverflowError, ValueError):
        return None


def normalize_category(value: Any) -> str:
    """Return the category text, or the unknown sentinel for uncategorized input."""
    if value is None:
        return UNKNOWN_CATEGORY
    text = str(value).strip()
    if text.lower() in _UNCATEGORIZED_MARKERS:
        return UNKNOWN_CATEGORY
    return text


def coalesce(*values: str | None) -> str:
    """Return the first value that is not blank, or an empty string."""
    for value in values:
        if value and value.strip():
            return value
    return ""
