"""
Utility functions for sales-lens: text normalization, lenient date parsing,
numeric coercion and rounding.
"""

import math
from numbers import Number
from typing import Iterable, Optional

import pandas as pd


def clean_text(value) -> Optional[str]:
    """Return the trimmed string, or None for missing, blank or non-string values."""
    if not isinstance(value, str):
        return None
    value = value.strip()
    return value or None


def match_key(value) -> Optional[str]:
    """
    Key used for case- and whitespace-insensitive comparisons.

    Example:
        match_key("  Georgia ") == match_key("georgia")  # True
    """
    text = clean_text(value)
    return text.lower() if text is not None else None


def to_number(value) -> float:
    """Coerce a metric to float. Missing, boolean and non-numeric values count as 0."""
    if isinstance(value, bool) or value is None:
        return 0.0
    if isinstance(value, Number):
        number = float(value)
    else:
        try:
            number = float(str(value).strip())
        except ValueError:
            return 0.0
    if math.isnan(number) or math.isinf(number):
        return 0.0
    return number


def parse_dates(values: Iterable) -> pd.Series:
    """
    Parse order dates leniently into a Series of midnight timestamps.

    Accepts ISO dates, US month/day/year dates and full timestamps. Values with
    an offset are converted to UTC before the calendar date is taken. Anything
    that is not a non-blank string, or does not parse, becomes NaT.

    Args:
        values: Raw date values, one per record

    Returns:
        tz-naive datetime64 Series aligned with the input order
    """
    cleaned = pd.Series([clean_text(v) for v in values], dtype=object)
    parsed = pd.to_datetime(cleaned, errors='coerce', utc=True, format='mixed')
    return parsed.dt.tz_localize(None).dt.normalize()


def parse_date(value) -> Optional[pd.Timestamp]:
    """Parse a single date the same way as parse_dates. Returns None if it doesn't parse."""
    parsed = parse_dates([value]).iloc[0]
    return None if pd.isna(parsed) else parsed


def format_date(value: pd.Timestamp) -> str:
    """Calendar-date string with no time component (YYYY-MM-DD)."""
    return value.strftime('%Y-%m-%d')


def round_half_away(value: float, places: int = 2) -> float:
    """
    Round half away from zero on the scaled value.

    Python's round() uses banker's rounding, which would turn 0.125 into 0.12.
    """
    scale = 10 ** places
    scaled = value * scale
    rounded = math.floor(abs(scaled) + 0.5)
    if rounded == 0:
        return 0.0
    return math.copysign(rounded, scaled) / scale
