"""Running-costs category score."""

from collections.abc import Mapping, Sequence

from property_checklist.logging import get_logger
from property_checklist.models import (
    CategoryScoreData,
    ChecklistItem,
    ChecklistKey,
    DashboardScoreCategory,
    PremiumData,
)
from property_checklist.scoring import constants as c
from property_checklist.scoring.items import present_item, weighted_mean
from property_checklist.scoring.normalizers import (
    council_tax_cost_score,
    epc_score,
    ground_rent_cost_score,
    service_charge_cost_score,
    tenure_cost_score,
)
from property_checklist.scoring.parsing import clamp, round_half_up

logger = get_logger(__name__)

_COMPONENT_KEYS: dict[str, ChecklistKey] = {
    "council_tax": ChecklistKey.COUNCIL_TAX,
    "epc": ChecklistKey.EPC,
    "service_charge": ChecklistKey.SERVICE_CHARGE,
    "ground_rent": ChecklistKey.GROUND_RENT,
    "tenure": ChecklistKey.TENURE,
}

assert set(_COMPONENT_KEYS) == set(c.RUNNING_COST_WEIGHTS), (
    "_COMPONENT_KEYS out of sync with RUNNING_COST_WEIGHTS"
)

_MISSING_WARNINGS: dict[str, str] = {
    "council_tax": "Council tax band unknown.",
    "epc": "EPC rating unknown, energy costs not assessed.",
    "service_charge": "Service charge unknown.",
    "ground_rent": "Ground rent unknown.",
    "tenure": "Tenure unknown.",
}


def _component_cost(name: str, item: ChecklistItem) -> float:
    """Cost (0 cheap - 100 expensive) of one present component."""
    if name == "council_tax":
        return council_tax_cost_score(item.value)
    if name == "epc":
        return c.MAX_SCORE - epc_score(item.value)
    if name == "service_charge":
        return service_charge_cost_score(item.value, item.status)
    if name == "ground_rent":
        return ground_rent_cost_score(item.value, item.status)
    return tenure_cost_score(item.value)


def score_running_costs(
    items: Sequence[ChecklistItem],
    premium: PremiumData | None = None,
    *,
    weights: Mapping[str, float] = c.RUNNING_COST_WEIGHTS,
) -> CategoryScoreData:
    """Score how cheap the property is to run (100 = cheapest).

    Each available component is turned into a cost; the weights of the
    components that are present are renormalised so missing ones neither help
    nor hurt. Without any component the category is uncalculated.
    """
    costs: dict[str, float] = {}
    contributing: list[ChecklistKey] = []
    warnings: list[str] = []

    for name, key in _COMPONENT_KEYS.items():
        item = present_item(items, key)
        if item is None:
            warnings.append(_MISSING_WARNINGS[name])
            continue
        costs[name] = _component_cost(name, item)
        contributing.append(key)

    category = DashboardScoreCategory.RUNNING_COSTS
    if not costs:
        return CategoryScoreData.missing(category, warning_messages=tuple(warnings))

    total_cost = weighted_mean(costs, weights)
    score = round_half_up(clamp(c.MAX_SCORE - total_cost, c.MIN_SCORE, c.MAX_SCORE))
    logger.debug("running_costs_scored", score=score, costs=costs)
    return CategoryScoreData.calculated(
        category,
        score,
        c.label_for(score),
        contributing_keys=tuple(contributing),
        warning_messages=tuple(warnings),
    )
