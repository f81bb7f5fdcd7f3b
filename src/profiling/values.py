"""Cell-level parsing helpers shared by the classifier, KPI and chart builders."""

import math
import numbers
import re
from datetime import date, datetime, time
from typing import Any, Optional

from dateutil import parser as date_parser

_NUMBER_PATTERN = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$")

INVALID_DATE_LABEL = "Invalid Date"

# dateutil fills missing fields from `default`. Parsing against two defaults that
# differ in year and month exposes values ("Mon", "May", "1st") lacking either.
_DEFAULT_STAMPS = (datetime(2000, 1, 1), datetime(2001, 2, 1))


def is_blank(value: Any) -> bool:
    """Return True for None, NaN markers and empty or whitespace-only strings."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, float):
        return math.isnan(value)
    return False


def parse_number(value: Any) -> Optional[float]:
    """Parse a cell as a finite number.

    Accepts real numbers and plain decimal/exponent strings. Booleans, infinities,
    hex literals, digit separators and trailing garbage ("12abc") are rejected.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, numbers.Real):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip()
        if not _NUMBER_PATTERN.match(text):
            return None
        number = float(text)
    else:
        return None
    return number if math.isfinite(number) else None


def number_or_zero(value: Any) -> float:
    number = parse_number(value)
    return 0 if number is None else number


def parse_datetime(value: Any) -> Optional[datetime]:
    """Parse a cell as a calendar date/time, or return None.

    The value must carry at least a year and a month; a missing day means the first.
    """
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time())
    if isinstance(value, bool) or is_blank(value):
        return None
    if isinstance(value, numbers.Real):
        value = as_label(value)
    if not isinstance(value, str):
        return None
    text = value.strip()
    try:
        first, second = (date_parser.parse(text, default=stamp) for stamp in _DEFAULT_STAMPS)
    except (ValueError, OverflowError):
        return None
    return first if first == second else None


def format_day(value: Any, pattern: Optional[str] = None) -> str:
    """Render a cell as a day label (month/day/year unless a strftime pattern is given)."""
    parsed = parse_datetime(value)
    if parsed is None:
        return INVALID_DATE_LABEL
    if pattern:
        return parsed.strftime(pattern)
    return f"{parsed.month}/{parsed.day}/{parsed.year}"


def as_label(value: Any) -> str:
    """String form of a cell used for grouping keys and labels."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
