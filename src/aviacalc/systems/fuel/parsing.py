"""Lenient parsers for the raw text typed into the fuel form.

Both parsers return None on failure instead of raising, so the form can turn
a failure into a FORMAT error result.
"""

import math
import re

_INTEGER_RE = re.compile(r"^\s*[+-]?\d+\s*$")

# Checked in this order: "-" wins when a string holds both separators.
DURATION_SEPARATORS = ("-", ":")


def _parse_int(text: str) -> int | None:
    if not _INTEGER_RE.match(text):
        return None
    return int(text)


def parse_decimal(text: str | None) -> float | None:
    """Parse a decimal number typed by the user.

    Accepts "." or "," as the decimal separator. Rejects empty text,
    digit-group underscores and non-finite values (nan, inf).

    Args:
        text: Raw field text.

    Returns:
        Parsed value, or None if the text is not a finite number.

    Examples:
        >>> parse_decimal("0,785")
        0.785
        >>> parse_decimal("abc") is None
        True
    """
    if text is None or "_" in text:
        return None

    try:
        value = float(text.strip().replace(",", "."))
    except ValueError:
        return None

    if not math.isfinite(value):
        return None

    return value


def parse_duration_minutes(text: str | None) -> float | None:
    """Convert a flight-time entry to minutes.

    Accepted forms, tried in order:
    1. empty or None: 0
    2. "H-M" or "H:M" with integer parts: hours * 60 + minutes. When both
       separators appear the text is split on "-".
    3. a bare decimal number of minutes, e.g. "45" or "12,5"

    Negative integer parts are accepted as-is; rejecting negative totals is
    up to the caller.

    Args:
        text: Raw field text.

    Returns:
        Duration in minutes, or None if the text matches none of the forms.

    Examples:
        >>> parse_duration_minutes("1:30")
        90
        >>> parse_duration_minutes("1-30")
        90
        >>> parse_duration_minutes("45")
        45.0
        >>> parse_duration_minutes("abc") is None
        True
    """
    if not text:
        return 0

    separator = next((sep for sep in DURATION_SEPARATORS if sep in text), None)
    if separator is not None:
        parts = text.split(separator)
        if len(parts) == 2:
            hours = _parse_int(parts[0])
            minutes = _parse_int(parts[1])
            if hours is not None and minutes is not None:
                return hours * 60 + minutes

    return parse_decimal(text)
