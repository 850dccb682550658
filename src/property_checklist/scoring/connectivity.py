"""Connectivity category score: transport, broadband, schools and mobile signal."""

from collections.abc import Mapping, Sequence

from property_checklist.logging import get_logger
from property_checklist.models import (
    CategoryScoreData,
    ChecklistItem,
    ChecklistKey,
    DashboardScoreCategory,
    DataStatus,
    NoValue,
    PremiumData,
)
from property_checklist.scoring import constants as c
from property_checklist.scoring.items import find_item, present_item, weighted_mean
from property_checklist.scoring.normalizers import (
    broadband_score,
    mobile_coverage_score,
    station_score,
)
from property_checklist.scoring.parsing import clamp, extract_mbps, round_half_up

logger = get_logger(__name__)


def _usable(item: ChecklistItem | None) -> ChecklistItem | None:
    """Return ``item`` if it holds data or explicitly reports nothing nearby."""
    if item is None or item.is_loading:
        return None
    if item.is_missing and item.value != NoValue.NONE_FOUND:
        return None
    return item


def _station_component(items: Sequence[ChecklistItem]) -> float | None:
    item = _usable(find_item(items, ChecklistKey.NEAREST_STATIONS))
    if item is None:
        return None
    return station_score(item.status == DataStatus.FOUND_POSITIVE and not item.is_missing)


def _broadband_component(items: Sequence[ChecklistItem]) -> float | None:
    item = present_item(items, ChecklistKey.BROADBAND)
    if item is None:
        return None
    if item.score is not None:
        return item.score
    score, _ = broadband_score(extract_mbps(item.value))
    return score


def _schools_component(items: Sequence[ChecklistItem]) -> float | None:
    item = _usable(find_item(items, ChecklistKey.NEARBY_SCHOOLS))
    if item is None:
        return None
    return item.score if item.score is not None else c.NO_SCHOOLS_SCORE


def _mobile_component(
    items: Sequence[ChecklistItem], premium: PremiumData | None
) -> float | None:
    item = present_item(items, ChecklistKey.MOBILE_SERVICE_COVERAGE)
    if item is not None and item.score is not None:
        return item.score
    if premium is not None and premium.mobile_coverage:
        return mobile_coverage_score(premium.mobile_coverage)
    return None


_COMPONENT_KEYS: dict[str, ChecklistKey] = {
    "stations": ChecklistKey.NEAREST_STATIONS,
    "broadband": ChecklistKey.BROADBAND,
    "schools": ChecklistKey.NEARBY_SCHOOLS,
    "mobile": ChecklistKey.MOBILE_SERVICE_COVERAGE,
}

assert set(_COMPONENT_KEYS) == set(c.CONNECTIVITY_WEIGHTS), (
    "_COMPONENT_KEYS out of sync with CONNECTIVITY_WEIGHTS"
)


def score_connectivity(
    items: Sequence[ChecklistItem],
    premium: PremiumData | None = None,
    *,
    weights: Mapping[str, float] = c.CONNECTIVITY_WEIGHTS,
) -> CategoryScoreData:
    """Weighted connectivity score over whichever components are available."""
    found = {
        "stations": _station_component(items),
        "broadband": _broadband_component(items),
        "schools": _schools_component(items),
        "mobile": _mobile_component(items, premium),
    }
    components = {name: value for name, value in found.items() if value is not None}

    warnings: list[str] = []
    stations = find_item(items, ChecklistKey.NEAREST_STATIONS)
    if stations is None or stations.status != DataStatus.FOUND_POSITIVE:
        warnings.append("Station data limited/unavailable.")
    broadband = find_item(items, ChecklistKey.BROADBAND)
    if broadband is None or broadband.status != DataStatus.FOUND_POSITIVE:
        warnings.append("Broadband speed unknown/unavailable.")
    schools = find_item(items, ChecklistKey.NEARBY_SCHOOLS)
    if schools is None or schools.status != DataStatus.FOUND_POSITIVE:
        warnings.append("School data limited/unavailable.")

    category = DashboardScoreCategory.CONNECTIVITY
    if not components:
        return CategoryScoreData.missing(category, warning_messages=tuple(warnings))

    score = round_half_up(clamp(weighted_mean(components, weights), c.MIN_SCORE, c.MAX_SCORE))
    logger.debug("connectivity_scored", score=score, components=components)
    return CategoryScoreData.calculated(
        category,
        score,
        c.label_for(score, c.CONNECTIVITY_LABELS, c.CONNECTIVITY_FLOOR_LABEL),
        contributing_keys=tuple(_COMPONENT_KEYS[name] for name in components),
        warning_messages=tuple(warnings),
    )
