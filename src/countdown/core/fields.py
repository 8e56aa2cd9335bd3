"""Input normalization for the raw minutes and seconds text."""

from __future__ import annotations

import re

MAX_MINUTES = 99
MAX_SECONDS = 59
DEFAULT_FIELD = "0"

_LEADING_INT = re.compile(r"\s*([+-]?)([0-9]+)")

# Any run longer than this already exceeds every clamp bound.
_MAX_DIGITS = 4


def parse_field(text: str) -> int:
    """Read the leading integer of *text*, or 0 when there is none.

    Trailing characters are ignored, so ``"12abc"`` is 12 and ``"3.9"`` is 3.
    Only ASCII digits count, and very long digit runs saturate at 9999
    instead of being converted in full.
    """
    match = _LEADING_INT.match(text)
    if match is None:
        return 0
    sign, digits = match.groups()
    digits = digits.lstrip("0") or "0"
    if len(digits) > _MAX_DIGITS:
        digits = "9" * _MAX_DIGITS
    value = int(digits)
    return -value if sign == "-" else value


def clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


def minutes_value(text: str) -> int:
    """Numeric minutes for *text*, clamped to 0--99."""
    return clamp(parse_field(text), 0, MAX_MINUTES)


def seconds_value(text: str) -> int:
    """Numeric seconds for *text*, clamped to 0--59."""
    return clamp(parse_field(text), 0, MAX_SECONDS)


def derive_duration(minutes_field: str, seconds_field: str) -> int:
    """Total seconds described by the two raw fields."""
    return minutes_value(minutes_field) * 60 + seconds_value(seconds_field)


def format_time(total_seconds: int) -> str:
    """Format *total_seconds* as ``MM:SS``."""
    minutes, seconds = divmod(total_seconds, 60)
    return f"{minutes:02d}:{seconds:02d}"
