"""Tolerant parsers for raw checklist values.

All helpers return None instead of raising when a value cannot be read.
"""

import math
import re
from typing import Any

from property_checklist.models import NoValue

_NUMBER_RE = re.compile(r"-?\d+(?:\.\d+)?")
_NON_PRICE_CHARS_RE = re.compile(r"[^0-9.]")
_MBPS_RE = re.compile(r"(\d+(?:\.\d+)?)\s*(?:mb|mbps|mbit)", re.IGNORECASE)
_LEASE_YEARS_RE = re.compile(r"(\d+)\s*years?", re.IGNORECASE)
_LEASE_MONTHS_RE = re.compile(r"(\d+)\s*months?", re.IGNORECASE)
_COUNCIL_TAX_BAND_RE = re.compile(r"^(?:council\s+tax\s+)?(?:band\s*)?:?\s*([A-I])\b", re.IGNORECASE)

_YES_WORDS = frozenset({"yes", "y", "true"})
_NO_WORDS = frozenset({"no", "n", "false", "none"})


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 rounding upwards.

    Python's ``round`` uses banker's rounding; scores must round the same way
    for every caller.
    """
    return math.floor(value + 0.5)


def clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(upper, value))


def _finite(raw: Any) -> float | None:
    """Convert to float, rejecting overflow, NaN and infinity."""
    try:
        number = float(raw)
    except (OverflowError, ValueError):
        return None
    return number if math.isfinite(number) else None


def parse_monetary_value(value: Any) -> float | None:
    """Parse a currency amount such as "£1,200" or "1200.50".

    Everything except digits and ``.`` is stripped before parsing, so
    "£250 per annum" reads as 250.

    Args:
        value: Raw value (string or number).

    Returns:
        The amount as a float, or None if nothing numeric remains.
    """
    if value is None or isinstance(value, (bool, NoValue)):
        return None
    if isinstance(value, (int, float)):
        return _finite(value)
    if not isinstance(value, str):
        return None
    cleaned = _NON_PRICE_CHARS_RE.sub("", value)
    if not cleaned:
        return None
    return _finite(cleaned)


def parse_number(value: Any) -> float | None:
    """Parse the first number in a value ("3.5 miles" -> 3.5)."""
    if value is None or isinstance(value, (bool, NoValue)):
        return None
    if isinstance(value, (int, float)):
        return _finite(value)
    if not isinstance(value, str):
        return None
    match = _NUMBER_RE.search(value.replace(",", ""))
    return _finite(match.group(0)) if match else None


def parse_percentage(value: Any) -> float | None:
    """Parse a ratio expressed as a fraction or a percentage.

    "8.3%", 8.3 and 0.083 all return 0.083. A number without a ``%`` sign is
    read as a fraction when its magnitude is at most 1.
    """
    number = parse_number(value)
    if number is None:
        return None
    if isinstance(value, str) and "%" in value:
        return number / 100
    return number / 100 if abs(number) > 1 else number


def parse_yes_no(value: Any) -> bool | None:
    """Read a yes/no answer ("Yes", "no", True); anything else is None."""
    if isinstance(value, bool):
        return value
    if not isinstance(value, str) or isinstance(value, NoValue):
        return None
    words = value.strip().lower().split()
    if not words:
        return None
    first = words[0].strip(",.;:")
    if first in _YES_WORDS:
        return True
    if first in _NO_WORDS:
        return False
    return None


def extract_mbps(value: Any) -> float | None:
    """Extract a download speed in Mbps ("Ultrafast 1000Mb" -> 1000.0).

    Bare numbers are taken as Mbps. "Gb" speeds are converted.
    """
    if value is None or isinstance(value, (bool, NoValue)):
        return None
    if isinstance(value, (int, float)):
        return _finite(value)
    if not isinstance(value, str):
        return None
    match = _MBPS_RE.search(value)
    if match:
        return _finite(match.group(1))
    gb_match = re.search(r"(\d+(?:\.\d+)?)\s*gb", value, re.IGNORECASE)
    if gb_match:
        return _finite(float(gb_match.group(1)) * 1000)
    return parse_number(value)


def parse_lease_months(value: Any) -> int | None:
    """Read remaining lease length in months.

    Accepts "95 years, 3 months remaining", "125 years" or a bare month count.
    """
    if value is None or isinstance(value, (bool, NoValue)):
        return None
    if isinstance(value, (int, float)):
        return int(value) if math.isfinite(value) and value >= 0 else None
    if not isinstance(value, str):
        return None
    years = _LEASE_YEARS_RE.search(value)
    months = _LEASE_MONTHS_RE.search(value)
    if not years and not months:
        return None
    total = int(years.group(1)) * 12 if years else 0
    if months:
        total += int(months.group(1))
    return total


def parse_council_tax_band(value: Any) -> str | None:
    """Extract the band letter from "Band D", "D" or "Council tax band: d"."""
    if not isinstance(value, str) or isinstance(value, NoValue):
        return None
    match = _COUNCIL_TAX_BAND_RE.search(value.strip())
    return match.group(1).upper() if match else None


def parse_year(value: Any) -> int | None:
    """Parse a four-digit year, or None."""
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if not isinstance(value, str):
        return None
    match = re.search(r"\d{4}", value)
    return int(match.group(0)) if match else None


def split_terms(value: Any) -> list[str]:
    """Split a list or comma/semicolon separated string into trimmed terms."""
    if isinstance(value, list):
        return [str(v).strip() for v in value if str(v).strip()]
    if not isinstance(value, str) or isinstance(value, NoValue):
        return []
    return [t.strip() for t in re.split(r"[,;]", value) if t.strip()]
