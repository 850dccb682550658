"""Value and status helpers for building checklist items."""

import math
import re
from datetime import date, datetime
from typing import Final

from property_checklist.models import DataStatus, NoValue

ASK_AGENT_TEXT: Final = "ask agent"
LISTING_STALE_DAYS: Final = 90

_ADDED_ON_RE = re.compile(r"Added on (\d{2})/(\d{2})/(\d{4})")


def is_unanswered(value: str | None) -> bool:
    """True for empty values and the scraped "Ask agent" placeholder."""
    return value is None or not value.strip() or value.strip().lower() == ASK_AGENT_TEXT


def text_status(value: str | None) -> DataStatus:
    return DataStatus.ASK_AGENT if is_unanswered(value) else DataStatus.FOUND_POSITIVE


def text_value(value: str | None) -> str | NoValue:
    if value is None or is_unanswered(value):
        return NoValue.NOT_MENTIONED
    return value.strip()


def yes_no_value(flag: bool | None) -> str | NoValue:
    if flag is None:
        return NoValue.NOT_MENTIONED
    return "Yes" if flag else "No"


def flag_status(flag: bool | None, *, yes_is_concern: bool = False) -> DataStatus:
    """Status for a yes/no fact.

    Unknown answers need the agent. When ``yes_is_concern`` is set (a right of
    way, a listed building, past flooding), a "yes" is also worth raising.
    """
    if flag is None:
        return DataStatus.ASK_AGENT
    if flag and yes_is_concern:
        return DataStatus.ASK_AGENT
    return DataStatus.FOUND_POSITIVE


def format_time_on_market(days: float) -> str:
    """Format a day count as "1 year, 2 months, 3 weeks, 4 days"."""
    years = int(days // 365)
    months = int((days % 365) // 30)
    weeks = int((days % 30) // 7)
    remaining_days = math.ceil(days % 7)

    parts = []
    units = ((years, "year"), (months, "month"), (weeks, "week"), (remaining_days, "day"))
    for amount, unit in units:
        if amount > 0:
            parts.append(f"{amount} {unit}{'s' if amount > 1 else ''}")
    return ", ".join(parts)


def listing_history_details(
    listing_history: str | None, *, today: date, stale_days: int = LISTING_STALE_DAYS
) -> tuple[DataStatus, str | NoValue]:
    """Status and display value for the listing history line.

    Listings on the market for more than ``stale_days`` are flagged with a
    time-on-market note.
    """
    if is_unanswered(listing_history):
        return DataStatus.ASK_AGENT, NoValue.NOT_MENTIONED
    assert listing_history is not None

    if listing_history.strip().lower() in ("added today", "added yesterday"):
        return DataStatus.FOUND_POSITIVE, listing_history

    match = _ADDED_ON_RE.search(listing_history)
    if not match:
        return DataStatus.ASK_AGENT, listing_history

    day, month, year = (int(g) for g in match.groups())
    try:
        listed = datetime(year, month, day).date()
    except ValueError:
        return DataStatus.ASK_AGENT, listing_history

    days_on_market = (today - listed).days
    if days_on_market > stale_days:
        on_market = format_time_on_market(days_on_market)
        return (
            DataStatus.ASK_AGENT,
            f"{listing_history}, this property has been on the market for {on_market}. "
            "It's worth asking the agent why this is the case.",
        )
    return DataStatus.FOUND_POSITIVE, listing_history


def format_lease_term(months: int) -> str:
    years, rem = divmod(months, 12)
    return f"{years} years, {rem} months remaining"
