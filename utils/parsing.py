"""
utils/parsing.py
----------------
Lenient converters for values coming out of the persisted JSON state.
None of these raise: bad input degrades to 0.0 / None so that a single
broken record can never crash a reduction.
"""

import math
from datetime import date, datetime
from typing import Any, Optional


def safe_float(value: Any) -> float:
    """
    Convert a stored amount to float.

    Accepts numbers and numeric strings (commas are stripped, as in
    "1,200.50"). Anything else, including NaN and infinities, becomes 0.0.
    """
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        try:
            number = float(str(value).replace(",", "").strip())
        except ValueError:
            return 0.0
    if math.isnan(number) or math.isinf(number):
        return 0.0
    return number


def is_number(value: Any) -> bool:
    """Returns True if `value` is a finite number or a numeric string."""
    if value is None or isinstance(value, bool):
        return False
    if isinstance(value, (int, float)):
        return math.isfinite(value)
    try:
        return math.isfinite(float(str(value).replace(",", "").strip()))
    except ValueError:
        return False


def safe_int(value: Any) -> int:
    """Integer variant of `safe_float` (truncates toward zero)."""
    return int(safe_float(value))


def parse_date(value: Any) -> Optional[date]:
    """
    Parse a calendar date.

    Accepts ``date``/``datetime`` objects, ``YYYY-MM-DD`` strings and full
    ISO timestamps (only the date part is kept). Returns None when the value
    is empty or cannot be parsed.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None
    text = value.strip()
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        return None


def as_date(value: date | datetime) -> date:
    """Normalize a `now` argument to a plain date."""
    if isinstance(value, datetime):
        return value.date()
    return value


def date_to_str(value: Optional[date]) -> Optional[str]:
    """Serialize a date to ``YYYY-MM-DD`` (None stays None)."""
    return value.isoformat() if value else None
