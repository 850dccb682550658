"""Environmental-risk category score (higher is safer)."""

from collections.abc import Callable, Mapping, Sequence

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
from property_checklist.scoring.normalizers import (
    airport_noise_multiplier,
    building_safety_risk_multiplier,
    coastal_erosion_multiplier,
    crime_risk_multiplier,
    flag_risk_multiplier,
    flood_risk_multiplier,
)
from property_checklist.scoring.parsing import clamp, parse_yes_no, round_half_up, split_terms

logger = get_logger(__name__)

FLOOD_KEYS: tuple[ChecklistKey, ...] = (
    ChecklistKey.FLOODED_IN_LAST_FIVE_YEARS,
    ChecklistKey.FLOOD_DEFENCES,
    ChecklistKey.FLOOD_SOURCES,
    ChecklistKey.DETAILED_FLOOD_RISK_ASSESSMENT,
)


def _flood_multiplier(items: Sequence[ChecklistItem]) -> tuple[float | None, list[ChecklistKey]]:
    present = {key: present_item(items, key) for key in FLOOD_KEYS}
    used = [key for key, item in present.items() if item is not None]
    if not used:
        return None, used

    def value(key: ChecklistKey) -> object:
        item = present[key]
        return item.value if item is not None else None

    multiplier = flood_risk_multiplier(
        flooded_recently=parse_yes_no(value(ChecklistKey.FLOODED_IN_LAST_FIVE_YEARS)),
        has_defences=parse_yes_no(value(ChecklistKey.FLOOD_DEFENCES)),
        sources=split_terms(value(ChecklistKey.FLOOD_SOURCES)),
        risk_level=value(ChecklistKey.DETAILED_FLOOD_RISK_ASSESSMENT),
    )
    return multiplier, used


def _flag(value: object) -> float:
    return flag_risk_multiplier(parse_yes_no(value))


# Single-item factors: checklist key and value -> risk multiplier in [0, 1].
SINGLE_ITEM_FACTORS: Mapping[str, tuple[ChecklistKey, Callable[[object], float]]] = {
    "crime": (ChecklistKey.CRIME_SCORE, crime_risk_multiplier),
    "building_safety": (ChecklistKey.BUILDING_SAFETY, building_safety_risk_multiplier),
    "coastal_erosion": (ChecklistKey.COASTAL_EROSION, coastal_erosion_multiplier),
    "mining": (ChecklistKey.MINING_IMPACT, _flag),
    "airport_noise": (ChecklistKey.AIRPORT_NOISE_ASSESSMENT, airport_noise_multiplier),
    "conservation_area": (ChecklistKey.CONSERVATION_AREA, _flag),
}

assert set(SINGLE_ITEM_FACTORS) | {"flood"} == set(c.ENVIRONMENT_WEIGHTS), (
    "environment factors out of sync with ENVIRONMENT_WEIGHTS"
)


def environment_risk(multipliers: Mapping[str, float], weights: Mapping[str, float]) -> float:
    """Weighted risk (0-100) over the factors present in ``multipliers``."""
    total_weight = sum(weights[name] for name in multipliers)
    weighted = sum(m * weights[name] for name, m in multipliers.items())
    return weighted / total_weight * 100


def score_environment_risk(
    items: Sequence[ChecklistItem],
    premium: PremiumData | None = None,
    *,
    weights: Mapping[str, float] = c.ENVIRONMENT_WEIGHTS,
) -> CategoryScoreData:
    """Score environmental safety as 100 minus the weighted risk.

    Each available factor yields a risk multiplier in [0, 1]. Weights of
    missing factors are dropped rather than counted as zero risk.
    """
    multipliers: dict[str, float] = {}
    contributing: list[ChecklistKey] = []
    warnings: list[str] = []

    flood, flood_keys = _flood_multiplier(items)
    if flood is not None:
        multipliers["flood"] = flood
        contributing.extend(flood_keys)
    else:
        warnings.append("Flood risk information unavailable.")

    for name, (key, to_multiplier) in SINGLE_ITEM_FACTORS.items():
        item = present_item(items, key)
        if item is None:
            continue
        multipliers[name] = clamp(to_multiplier(item.value), 0.0, 1.0)
        contributing.append(key)

    if "crime" not in multipliers:
        warnings.append("Crime rating unavailable.")

    category = DashboardScoreCategory.ENVIRONMENT_RISK
    if not multipliers:
        return CategoryScoreData.missing(category, warning_messages=tuple(warnings))

    risk = environment_risk(multipliers, weights)
    score = round_half_up(clamp(c.MAX_SCORE - risk, c.MIN_SCORE, c.MAX_SCORE))
    logger.debug("environment_risk_scored", score=score, multipliers=multipliers)
    return CategoryScoreData.calculated(
        category,
        score,
        c.label_for(score, c.ENVIRONMENT_LABELS, c.ENVIRONMENT_FLOOR_LABEL),
        contributing_keys=tuple(contributing),
        warning_messages=tuple(warnings),
    )
