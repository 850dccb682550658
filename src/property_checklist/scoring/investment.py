"""Investment-value category score."""

from collections.abc import Sequence
from dataclasses import dataclass, field

from property_checklist.logging import get_logger
from property_checklist.models import (
    CategoryScoreData,
    ChecklistItem,
    ChecklistKey,
    DashboardScoreCategory,
    PremiumData,
)
from property_checklist.scoring import constants as c
from property_checklist.scoring.items import present_item
from property_checklist.scoring.parsing import (
    clamp,
    parse_monetary_value,
    parse_percentage,
    round_half_up,
)

logger = get_logger(__name__)


@dataclass
class InvestmentInputs:
    """Figures the investment score is built from; None where unavailable.

    Ratios (CAGR, yield, turnover, propensities, volatility) are fractions.
    """

    asking_price: float | None = None
    estimated_value: float | None = None
    estimate_is_area_average: bool = False
    cagr: float | None = None
    volatility: float | None = None
    rental_yield: float | None = None
    turnover_rate: float | None = None
    sell_propensity: float | None = None
    let_propensity: float | None = None
    contributing_keys: list[ChecklistKey] = field(default_factory=list)

    @property
    def has_any(self) -> bool:
        has_value_pair = self.asking_price is not None and self.estimated_value is not None
        return has_value_pair or any(
            v is not None
            for v in (
                self.cagr,
                self.volatility,
                self.rental_yield,
                self.turnover_rate,
                self.sell_propensity,
                self.let_propensity,
            )
        )


def _ratio_from_item(item: ChecklistItem | None) -> float | None:
    if item is None:
        return None
    if item.score is not None:
        return item.score
    return parse_percentage(item.value)


def _ratio(value: float | None) -> float | None:
    return None if value is None else parse_percentage(value)


def gather_investment_inputs(
    items: Sequence[ChecklistItem], premium: PremiumData | None
) -> InvestmentInputs:
    """Collect investment figures from the checklist, falling back to premium data."""
    inputs = InvestmentInputs()

    price_item = present_item(items, ChecklistKey.PRICE)
    if price_item is not None:
        inputs.asking_price = parse_monetary_value(price_item.value)
        if inputs.asking_price is not None and inputs.asking_price <= 0:
            inputs.asking_price = None

    cagr_item = present_item(items, ChecklistKey.COMPOUND_ANNUAL_GROWTH_RATE)
    inputs.cagr = _ratio_from_item(cagr_item)

    volatility_item = present_item(items, ChecklistKey.VOLATILITY)
    inputs.volatility = _ratio_from_item(volatility_item)

    for key, item in (
        (ChecklistKey.PRICE, price_item),
        (ChecklistKey.COMPOUND_ANNUAL_GROWTH_RATE, cagr_item if inputs.cagr is not None else None),
        (ChecklistKey.VOLATILITY, volatility_item if inputs.volatility is not None else None),
    ):
        if item is not None:
            inputs.contributing_keys.append(key)

    if premium is None:
        return inputs

    if premium.estimated_sale_value:
        inputs.estimated_value = premium.estimated_sale_value
        inputs.contributing_keys.append(ChecklistKey.ESTIMATED_SALE_VALUE)
    elif premium.outcode_avg_sales_price:
        inputs.estimated_value = premium.outcode_avg_sales_price
        inputs.estimate_is_area_average = True
        inputs.contributing_keys.append(ChecklistKey.OUTCODE_AVG_SALES_PRICE)

    inputs.rental_yield = _ratio(premium.estimated_annual_rental_yield)
    inputs.turnover_rate = _ratio(premium.market_turnover_rate)
    inputs.sell_propensity = _ratio(premium.propensity_to_sell)
    inputs.let_propensity = _ratio(premium.propensity_to_let)
    for key, value in (
        (ChecklistKey.ESTIMATED_ANNUAL_RENTAL_YIELD, inputs.rental_yield),
        (ChecklistKey.MARKET_TURNOVER_RATE, inputs.turnover_rate),
        (ChecklistKey.PROPENSITY_TO_SELL, inputs.sell_propensity),
        (ChecklistKey.PROPENSITY_TO_LET, inputs.let_propensity),
    ):
        if value is not None:
            inputs.contributing_keys.append(key)
    return inputs


def value_discrepancy_modifier(
    asking_price: float,
    estimated_value: float,
    *,
    is_area_average: bool = False,
    thresholds: c.InvestmentThresholds = c.INVESTMENT_THRESHOLDS,
) -> float:
    """Bonus when the estimate exceeds the asking price, penalty when below.

    Reaches the cap when the gap is ``value_sensitivity`` (30%) of the asking
    price. Area-average estimates are less specific, so the result is scaled
    by ``value_fallback_factor``.
    """
    difference = (estimated_value - asking_price) / asking_price
    scaled = clamp(difference / thresholds.value_sensitivity, -1.0, 1.0)
    modifier = scaled * thresholds.value_max_modifier
    if is_area_average:
        modifier *= thresholds.value_fallback_factor
    return modifier


def investment_modifiers(
    inputs: InvestmentInputs,
    *,
    thresholds: c.InvestmentThresholds = c.INVESTMENT_THRESHOLDS,
) -> dict[str, float]:
    """Individual score adjustments, keyed by factor name."""
    t = thresholds
    modifiers: dict[str, float] = {}

    if inputs.cagr is not None:
        if inputs.cagr < t.cagr_low:
            modifiers["cagr"] = -t.cagr_modifier
        elif inputs.cagr > t.cagr_high:
            modifiers["cagr"] = t.cagr_modifier

    if inputs.asking_price is not None and inputs.estimated_value is not None:
        modifiers["value"] = value_discrepancy_modifier(
            inputs.asking_price,
            inputs.estimated_value,
            is_area_average=inputs.estimate_is_area_average,
            thresholds=t,
        )

    if inputs.rental_yield is not None:
        if inputs.rental_yield > t.rental_yield_high:
            modifiers["rental_yield"] = t.rental_yield_bonus
        elif inputs.rental_yield < t.rental_yield_low:
            modifiers["rental_yield"] = t.rental_yield_penalty

    if inputs.turnover_rate is not None:
        if inputs.turnover_rate < t.turnover_low:
            modifiers["turnover"] = -t.turnover_modifier
        elif inputs.turnover_rate > t.turnover_high:
            modifiers["turnover"] = t.turnover_modifier

    if inputs.sell_propensity is not None and inputs.sell_propensity >= t.sell_propensity_threshold:
        modifiers["sell_propensity"] = t.sell_propensity_bonus
    if inputs.let_propensity is not None and inputs.let_propensity >= t.let_propensity_threshold:
        modifiers["let_propensity"] = t.let_propensity_bonus

    if inputs.volatility is not None and inputs.volatility > t.volatility_threshold:
        modifiers["volatility"] = t.volatility_penalty

    return modifiers


def score_investment_value(
    items: Sequence[ChecklistItem],
    premium: PremiumData | None = None,
    *,
    thresholds: c.InvestmentThresholds = c.INVESTMENT_THRESHOLDS,
) -> CategoryScoreData:
    """Score investment potential around a neutral base of 50."""
    category = DashboardScoreCategory.INVESTMENT_VALUE
    inputs = gather_investment_inputs(items, premium)
    if not inputs.has_any:
        return CategoryScoreData.missing(
            category,
            warning_messages=("No growth, valuation or market data available.",),
        )

    modifiers = investment_modifiers(inputs, thresholds=thresholds)
    raw = thresholds.base_score + sum(modifiers.values())
    score = round_half_up(clamp(raw, c.MIN_SCORE, c.MAX_SCORE))

    warnings: list[str] = []
    if inputs.estimated_value is None:
        warnings.append("No valuation estimate; asking price not compared.")
    elif inputs.estimate_is_area_average:
        warnings.append("Compared against the area average price, not a property estimate.")
    if inputs.cagr is None:
        warnings.append("Historical growth rate unavailable.")

    logger.debug("investment_value_scored", score=score, modifiers=modifiers)
    return CategoryScoreData.calculated(
        category,
        score,
        c.label_for(score),
        contributing_keys=tuple(inputs.contributing_keys),
        warning_messages=tuple(warnings),
    )
