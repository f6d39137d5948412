"""Helper utility functions for coercing request input and shaping output."""

import math
import re
from datetime import date, datetime, timedelta, timezone
from typing import Any, Optional, Union

EPOCH_DATE = "1970-01-01"
INVALID_DATE = "Invalid Date"

_DAY_NAMES = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
_MONTH_NAMES = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

_HEX_PREFIX = re.compile(r"([+-]?)0[xX]([0-9a-fA-F]+)")
_HEX_MARKER = re.compile(r"[+-]?0[xX]")
_DECIMAL_PREFIX = re.compile(r"[+-]?\d+")
_ISO_DATE = re.compile(r"(\d{4})-(\d{2})-(\d{2})")

# Integers outside this range do not fit a BSON int64 and are stored as doubles
_INT64_MIN = -2 ** 63
_INT64_MAX = 2 ** 63 - 1


def today_iso() -> str:
    """Current UTC date as YYYY-MM-DD."""
    return datetime.now(timezone.utc).date().isoformat()


def parse_int(value: Any) -> Union[int, float]:
    """Parse the leading integer of a value the way JavaScript parseInt does.

    Trailing garbage is ignored ("30min" -> 30, "12.7" -> 12). Anything
    without a leading integer, including a missing value, gives NaN.
    """
    if value is None or isinstance(value, bool):
        return math.nan

    text = str(value).lstrip()

    if _HEX_MARKER.match(text):
        match = _HEX_PREFIX.match(text)
        if not match:
            return math.nan
        sign, digits = match.groups()
        return _fit_int64(int(sign + digits, 16))

    match = _DECIMAL_PREFIX.match(text)
    if not match:
        return math.nan
    return _fit_int64(int(match.group()))


def _fit_int64(number: int) -> Union[int, float]:
    if _INT64_MIN <= number <= _INT64_MAX:
        return number
    try:
        return float(number)
    except OverflowError:
        return math.inf if number > 0 else -math.inf


def parse_limit(value: Optional[str]) -> int:
    """Coerce a limit query parameter like JavaScript `Number(value) || 0`.

    0 means no limit. Fractions are truncated and negative values use their
    magnitude, as MongoDB does for negative limits.
    """
    if value is None:
        return 0

    text = value.strip()
    if not text or "_" in text:
        return 0

    try:
        number = float(text)
    except ValueError:
        match = _HEX_PREFIX.fullmatch(text)
        if not match or match.group(1):
            return 0
        number = float(int(match.group(2), 16))

    if math.isnan(number) or math.isinf(number):
        return 0
    return abs(int(number))


def format_long_date(value: Optional[str]) -> str:
    """Render a YYYY-MM-DD string as e.g. 'Sun Jan 01 2023'.

    Days past the end of the month roll over into the next one
    ("2023-02-30" -> "Thu Mar 02 2023"), as JavaScript Date does. Months
    outside 1-12 and days outside 1-31 are invalid.
    """
    match = _ISO_DATE.fullmatch(value or "")
    if not match:
        return INVALID_DATE

    year, month, day = (int(part) for part in match.groups())
    if not 1 <= month <= 12 or not 1 <= day <= 31:
        return INVALID_DATE

    try:
        parsed = date(year, month, 1) + timedelta(days=day - 1)
    except (ValueError, OverflowError):
        return INVALID_DATE
    return _long_form(parsed)


def _long_form(day: date) -> str:
    return "{} {} {:02d} {:04d}".format(
        _DAY_NAMES[day.weekday()],
        _MONTH_NAMES[day.month - 1],
        day.day,
        day.year,
    )


def json_number(value: Any) -> Any:
    """NaN and infinities are not valid JSON; render them as null."""
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value
