"""Sales insights: price discrepancy, CAGR and volatility from sale history."""

import math
import statistics
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date
from typing import Final

from property_checklist.logging import get_logger
from property_checklist.models import (
    DataStatus,
    PriceDiscrepancyReason,
    PriceDiscrepancyResult,
    SaleHistoryEntry,
    SalesInsights,
)
from property_checklist.scoring import constants as c
from property_checklist.scoring.parsing import parse_monetary_value, parse_percentage, parse_year

logger = get_logger(__name__)

_BASE_EXPLAINER = (
    "Price Discrepancy compares the current listing price (even though it hasn't sold) "
    "with the last sold price, to indicate whether the property might be overvalued.\n\n"
)


@dataclass(frozen=True)
class ReasonMessages:
    ask_agent_message: str
    tooltip: str


PRICE_DISCREPANCY_MESSAGES: Final[dict[PriceDiscrepancyReason, ReasonMessages]] = {
    PriceDiscrepancyReason.NO_PREVIOUS_SOLD_HISTORY: ReasonMessages(
        "",
        _BASE_EXPLAINER + "Since there is no past sale data to compare, the current listing "
        "price isn't assessed for discrepancy.",
    ),
    PriceDiscrepancyReason.MISSING_OR_INVALID_PRICE_DATA: ReasonMessages(
        "Could you confirm the current asking price and the previous sold prices?",
        _BASE_EXPLAINER + "Certain information is missing or contains errors. "
        "A reliable comparison cannot be made.",
    ),
    PriceDiscrepancyReason.PRICE_GAP_WITHIN_EXPECTED_RANGE: ReasonMessages(
        "",
        _BASE_EXPLAINER + "The current listing is in line with historical trends, with the "
        "price difference falling within expected limits based on past growth.",
    ),
    PriceDiscrepancyReason.PRICE_GAP_EXCEEDS_EXPECTED_RANGE: ReasonMessages(
        "The current asking price appears significantly higher than what the historical "
        "growth would suggest. Could you please explain why this discrepancy exists?",
        _BASE_EXPLAINER + "When comparing the current listing price against historical data, "
        "the implied annual growth rate exceeds expectations (by more than 50%). This "
        "suggests the price may be inflated relative to past trends.",
    ),
    PriceDiscrepancyReason.PRICE_DROP: ReasonMessages(
        "The current asking price is lower than the last sold price. "
        "Is there a specific reason for this reduction?",
        _BASE_EXPLAINER + "A negative price discrepancy indicates that the current listing "
        "price is below the previous sold price. This might mean the property is offered at "
        "a discount or reflects a market adjustment.",
    ),
}

assert set(PRICE_DISCREPANCY_MESSAGES) == set(PriceDiscrepancyReason), (
    "PRICE_DISCREPANCY_MESSAGES out of sync with PriceDiscrepancyReason"
)


REASON_STATUS: Final[dict[PriceDiscrepancyReason, DataStatus]] = {
    PriceDiscrepancyReason.NO_PREVIOUS_SOLD_HISTORY: DataStatus.FOUND_POSITIVE,
    PriceDiscrepancyReason.MISSING_OR_INVALID_PRICE_DATA: DataStatus.ASK_AGENT,
    PriceDiscrepancyReason.PRICE_GAP_WITHIN_EXPECTED_RANGE: DataStatus.FOUND_POSITIVE,
    PriceDiscrepancyReason.PRICE_GAP_EXCEEDS_EXPECTED_RANGE: DataStatus.ASK_AGENT,
    PriceDiscrepancyReason.PRICE_DROP: DataStatus.ASK_AGENT,
}

assert set(REASON_STATUS) == set(PriceDiscrepancyReason), (
    "REASON_STATUS out of sync with PriceDiscrepancyReason"
)


@dataclass(frozen=True)
class _Sale:
    year: int
    price: float | None
    entry: SaleHistoryEntry


def parse_sold_price(price: str) -> float | None:
    """Parse a sold price; only positive amounts are valid."""
    value = parse_monetary_value(price)
    if value is None or value <= 0:
        return None
    return value


def _normalise_history(entries: Sequence[SaleHistoryEntry]) -> list[_Sale]:
    """Parse and sort entries newest first, dropping rows without a year."""
    sales: list[_Sale] = []
    for entry in entries:
        year = parse_year(entry.year)
        if year is None:
            logger.warning("sale_history_year_unparseable", year=entry.year)
            continue
        sales.append(_Sale(year=year, price=parse_sold_price(entry.sold_price), entry=entry))
    return sorted(sales, key=lambda s: s.year, reverse=True)


def compound_annual_growth_rate(sales: Sequence[_Sale]) -> float | None:
    """CAGR between the earliest and latest sale.

    Returns None with fewer than two sales, identical start and end years, or
    an unreadable price at either end.
    """
    if len(sales) < 2:
        return None
    ordered = sorted(sales, key=lambda s: s.year)
    start, end = ordered[0], ordered[-1]
    if start.year == end.year:
        logger.debug("cagr_identical_years", year=start.year)
        return None
    if start.price is None or end.price is None:
        return None
    years = end.year - start.year
    return (end.price / start.price) ** (1 / years) - 1


def volatility(sales: Sequence[_Sale]) -> str:
    """Population standard deviation of successive % changes, as "x.xx%".

    Needs at least three data points and readable prices throughout.
    """
    if len(sales) < 3:
        return c.NOT_APPLICABLE_TEXT
    prices = [s.price for s in sorted(sales, key=lambda s: s.year) if s.price is not None]
    if len(prices) != len(sales):
        return c.NOT_APPLICABLE_TEXT
    changes = [(curr - prev) / prev * 100 for prev, curr in zip(prices, prices[1:])]
    if not all(math.isfinite(change) for change in changes):
        return c.NOT_APPLICABLE_TEXT
    return f"{statistics.pstdev(changes):.2f}%"


def _result(
    value: str, status: DataStatus, reason: PriceDiscrepancyReason
) -> PriceDiscrepancyResult:
    return PriceDiscrepancyResult(value=value, status=status, reason=reason)


def calculate_sales_insights(
    sale_history: Sequence[SaleHistoryEntry],
    current_price: str | None,
    *,
    current_year: int | None = None,
    cagr_multiplier_threshold: float = c.CAGR_MULTIPLIER_THRESHOLD,
) -> SalesInsights:
    """Compare the asking price with the sale history.

    The asking price becomes an entry for ``current_year`` at the head of the
    history. Malformed input never raises; it is reported through the
    discrepancy reason instead.

    Args:
        sale_history: Scraped sale history, any order.
        current_price: Current asking price, e.g. "£320,000".
        current_year: Year of the synthesised listing entry; defaults to this year.
        cagr_multiplier_threshold: How far local growth may exceed the
            historical CAGR before the gap is flagged.

    Returns:
        Sales insights for the listing.
    """
    year = current_year if current_year is not None else date.today().year
    history = _normalise_history(sale_history)
    most_recent_sale = history[0].entry if history else None

    sales = list(history)
    if current_price:
        listing = SaleHistoryEntry(year=str(year), sold_price=current_price)
        sales.insert(0, _Sale(year=year, price=parse_sold_price(current_price), entry=listing))

    if len(sales) < 2:
        return SalesInsights(
            price_discrepancy=_result(
                c.NOT_APPLICABLE_TEXT,
                DataStatus.FOUND_POSITIVE,
                PriceDiscrepancyReason.NO_PREVIOUS_SOLD_HISTORY,
            ),
            cagr=None,
            volatility=c.NOT_APPLICABLE_TEXT,
            most_recent_sale=most_recent_sale,
        )

    cagr = compound_annual_growth_rate(sales)
    spread = volatility(sales)
    latest, previous = sales[0], sales[1]

    if latest.price is None or previous.price is None:
        logger.info("sales_insights_invalid_price", latest=latest.entry.sold_price)
        return SalesInsights(
            price_discrepancy=_result(
                c.NOT_APPLICABLE_TEXT,
                DataStatus.ASK_AGENT,
                PriceDiscrepancyReason.MISSING_OR_INVALID_PRICE_DATA,
            ),
            cagr=cagr,
            volatility=spread,
            most_recent_sale=most_recent_sale,
        )

    change_pct = (latest.price - previous.price) / previous.price * 100
    gap = max(1, latest.year - previous.year)
    value = f"{change_pct:.2f}% over {gap} year{'s' if gap > 1 else ''}"

    reason = PriceDiscrepancyReason.PRICE_GAP_WITHIN_EXPECTED_RANGE
    if change_pct < 0:
        reason = PriceDiscrepancyReason.PRICE_DROP
    else:
        local_growth = (latest.price / previous.price) ** (1 / gap) - 1
        # Growth implied by every sale before the latest entry.
        historical_cagr = compound_annual_growth_rate(sales[1:])
        if historical_cagr is not None and local_growth > historical_cagr * cagr_multiplier_threshold:
            reason = PriceDiscrepancyReason.PRICE_GAP_EXCEEDS_EXPECTED_RANGE
    discrepancy = _result(value, REASON_STATUS[reason], reason)

    logger.debug(
        "sales_insights_calculated",
        reason=discrepancy.reason,
        cagr=cagr,
        volatility=spread,
        entries=len(sales),
    )
    return SalesInsights(
        price_discrepancy=discrepancy,
        cagr=cagr,
        volatility=spread,
        most_recent_sale=most_recent_sale,
    )


def cagr_status(cagr: float | None, *, threshold: float = c.CAGR_ASK_AGENT_BELOW) -> DataStatus:
    """ASK_AGENT when growth is unknown or below ``threshold``."""
    if cagr is None or cagr < threshold:
        return DataStatus.ASK_AGENT
    return DataStatus.FOUND_POSITIVE


def volatility_status(
    volatility_text: str | None, *, threshold: float = c.VOLATILITY_ASK_AGENT_ABOVE
) -> DataStatus:
    """ASK_AGENT when volatility is unreadable or above ``threshold`` percent."""
    if not volatility_text:
        return DataStatus.ASK_AGENT
    if volatility_text == c.NOT_APPLICABLE_TEXT:
        return DataStatus.FOUND_POSITIVE
    ratio = parse_percentage(volatility_text)
    if ratio is not None and ratio * 100 <= threshold:
        return DataStatus.FOUND_POSITIVE
    return DataStatus.ASK_AGENT


def format_cagr(cagr: float | None) -> str:
    if cagr is None:
        return c.NOT_APPLICABLE_TEXT
    return f"{cagr * 100:.2f}%"
