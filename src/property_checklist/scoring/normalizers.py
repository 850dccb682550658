"""Value normalizers: raw field values to scores, costs and modifiers.

Each function is pure, never raises, and returns a documented default for
input it cannot read. Lookup tables are injectable keyword arguments.
"""

import math
from collections.abc import Mapping, Sequence
from typing import Any

from property_checklist.logging import get_logger
from property_checklist.models import DataStatus, MobileCoverage, NoValue, School
from property_checklist.scoring import constants as c
from property_checklist.scoring.parsing import (
    clamp,
    parse_council_tax_band,
    parse_monetary_value,
    parse_number,
    round_half_up,
    split_terms,
)

logger = get_logger(__name__)


def _text(value: Any) -> str | None:
    """Lower-cased text of a present value, else None."""
    if value is None or isinstance(value, NoValue):
        return None
    if isinstance(value, list):
        value = ", ".join(str(v) for v in value)
    text = str(value).strip().lower()
    return text or None


def _first_fragment(text: str, table: Sequence[tuple[str, Any]]) -> Any | None:
    for fragment, result in table:
        if fragment in text:
            return result
    return None


# ── Condition ──────────────────────────────────────────────────────────────────


def epc_score(
    rating: Any,
    *,
    scores: Mapping[str, int] = c.EPC_SCORES,
    unknown: int = c.EPC_UNKNOWN_SCORE,
) -> int:
    """Map an EPC letter (A-G) to a 0-100 efficiency score.

    Only an exact letter (case and surrounding whitespace ignored) is matched;
    everything else, including missing input, scores ``unknown``.
    """
    if isinstance(rating, str) and not isinstance(rating, NoValue):
        score = scores.get(rating.strip().upper())
        if score is not None:
            return score
    logger.debug("epc_rating_unrecognised", raw=rating)
    return unknown


def construction_age_modifier(
    age_band: Any,
    *,
    table: Sequence[tuple[str, int]] = c.CONSTRUCTION_AGE_MODIFIERS,
) -> int:
    """Newer construction bands score positively, older ones negatively."""
    text = _text(age_band)
    if text is None:
        return 0
    modifier = _first_fragment(text, table)
    if modifier is None:
        logger.debug("construction_age_band_unmatched", raw=age_band)
        return 0
    return int(modifier)


def heating_modifier(
    heating: Any,
    *,
    rules: Sequence[c.HeatingRule] = c.HEATING_RULES,
    missing: int = c.HEATING_MISSING_MODIFIER,
) -> int:
    """Modifier for the heating system. Missing information is penalised."""
    text = _text(heating)
    if text is None:
        return missing
    for rule in rules:
        if all(keyword in text for keyword in rule.keywords):
            return rule.modifier
    return 0


def windows_modifier(
    windows: Any,
    *,
    glazing: Sequence[tuple[tuple[str, ...], int]] = c.WINDOW_GLAZING_MODIFIERS,
    frames: Sequence[tuple[tuple[str, ...], int]] = c.WINDOW_FRAME_MODIFIERS,
    missing: int = c.WINDOWS_MISSING_MODIFIER,
) -> int:
    """Glazing modifier plus frame-material modifier, clamped to [-5, 6]."""
    text = _text(windows)
    if text is None:
        return missing

    total = 0
    for keywords, modifier in glazing:
        if any(k in text for k in keywords):
            total += modifier
            break
    for keywords, modifier in frames:
        if any(k in text for k in keywords):
            total += modifier
            break
    return int(clamp(total, c.WINDOWS_MIN_MODIFIER, c.WINDOWS_MAX_MODIFIER))


def _material_modifier(material: Any, table: Sequence[tuple[str, int]]) -> int:
    text = _text(material)
    if text is None:
        return 0
    modifier = _first_fragment(text, table)
    return 0 if modifier is None else int(modifier)


def floor_material_modifier(
    material: Any, *, table: Sequence[tuple[str, int]] = c.FLOOR_MATERIAL_MODIFIERS
) -> int:
    return _material_modifier(material, table)


def roof_material_modifier(
    material: Any, *, table: Sequence[tuple[str, int]] = c.ROOF_MATERIAL_MODIFIERS
) -> int:
    return _material_modifier(material, table)


def wall_material_modifier(
    material: Any, *, table: Sequence[tuple[str, int]] = c.WALL_MATERIAL_MODIFIERS
) -> int:
    return _material_modifier(material, table)


def classify_safety_term(
    term: str,
    *,
    severe: frozenset[str] = c.BUILDING_SAFETY_SEVERE_TERMS,
    negative: frozenset[str] = c.BUILDING_SAFETY_NEGATIVE_TERMS,
    positive: frozenset[str] = c.BUILDING_SAFETY_POSITIVE_TERMS,
) -> str | None:
    """Classify a building-safety term as "severe", "negative", "positive" or None."""
    text = term.strip().lower()
    if any(word in text for word in severe):
        return "severe"
    if any(word in text for word in negative):
        return "negative"
    if any(word in text for word in positive):
        return "positive"
    return None


_SAFETY_MODIFIERS = {
    "severe": c.BUILDING_SAFETY_SEVERE_MODIFIER,
    "negative": c.BUILDING_SAFETY_NEGATIVE_MODIFIER,
    "positive": c.BUILDING_SAFETY_POSITIVE_MODIFIER,
}


def building_safety_modifier(terms: Any) -> float:
    """Sum of per-term modifiers; unrecognised terms contribute nothing."""
    total = 0.0
    for term in split_terms(terms):
        kind = classify_safety_term(term)
        if kind is not None:
            total += _SAFETY_MODIFIERS[kind]
    return total


def occupancy_modifier(
    occupancy: Any, *, table: Mapping[str, int] = c.OCCUPANCY_MODIFIERS
) -> int:
    text = _text(occupancy)
    if text is None:
        return 0
    return table.get(text, 0)


# ── Running costs ──────────────────────────────────────────────────────────────


def council_tax_cost_score(
    band: Any,
    *,
    costs: Mapping[str, int] = c.COUNCIL_TAX_BAND_COSTS,
    unknown: int = c.COUNCIL_TAX_UNKNOWN_COST,
) -> int:
    """Cost score (0 cheap - 100 expensive) for a council tax band."""
    letter = parse_council_tax_band(band)
    if letter is None or letter not in costs:
        logger.debug("council_tax_band_unparseable", raw=band)
        return unknown
    return costs[letter]


def tenure_cost_score(tenure: Any) -> int:
    """Leasehold carries ongoing costs; unknown tenure sits in between."""
    text = _text(tenure)
    if text is None:
        return c.TENURE_UNKNOWN_COST
    if "leasehold" in text:
        return c.TENURE_LEASEHOLD_COST
    return c.TENURE_OTHER_COST


def annual_charge_cost_score(
    value: Any, status: DataStatus | None, thresholds: c.CostThresholds
) -> int:
    """Map an annual charge to its cost band.

    A peppercorn or non-positive charge costs nothing. Anything that is not a
    confirmed (FOUND_POSITIVE) readable amount scores ``unknown_score``.
    """
    text = _text(value)
    if text is not None and "peppercorn" in text:
        return thresholds.peppercorn_score
    if status != DataStatus.FOUND_POSITIVE:
        return thresholds.unknown_score
    amount = parse_monetary_value(value)
    if amount is None:
        logger.debug("annual_charge_unparseable", raw=value)
        return thresholds.unknown_score
    if amount <= 0:
        return thresholds.peppercorn_score
    if amount < thresholds.low:
        return thresholds.low_score
    if amount < thresholds.medium:
        return thresholds.medium_score
    return thresholds.high_score


def ground_rent_cost_score(
    value: Any,
    status: DataStatus | None = DataStatus.FOUND_POSITIVE,
    *,
    thresholds: c.CostThresholds = c.GROUND_RENT_THRESHOLDS,
) -> int:
    return annual_charge_cost_score(value, status, thresholds)


def service_charge_cost_score(
    value: Any,
    status: DataStatus | None = DataStatus.FOUND_POSITIVE,
    *,
    thresholds: c.CostThresholds = c.SERVICE_CHARGE_THRESHOLDS,
) -> int:
    return annual_charge_cost_score(value, status, thresholds)


# ── Connectivity ───────────────────────────────────────────────────────────────


def broadband_score(
    speed_mbps: float | None,
    *,
    uk_average: float = c.UK_AVERAGE_BROADBAND_MBPS,
    buckets: Sequence[tuple[float, int]] = c.BROADBAND_SCORE_BUCKETS,
) -> tuple[int, DataStatus]:
    """Score a download speed relative to the UK average.

    Returns:
        ``(score, status)``; status is ASK_AGENT when the speed is unknown or
        below half the UK average.
    """
    if speed_mbps is None or not math.isfinite(speed_mbps):
        return c.BROADBAND_UNKNOWN_SCORE, DataStatus.ASK_AGENT

    ratio = speed_mbps / uk_average
    first_bound, first_score = buckets[0]
    if ratio < first_bound:
        return first_score, DataStatus.ASK_AGENT
    for bound, score in buckets[1:]:
        if ratio <= bound:
            return score, DataStatus.FOUND_POSITIVE
    return c.BROADBAND_TOP_SCORE, DataStatus.FOUND_POSITIVE


def station_score(found: bool) -> int:
    return c.FOUND_STATIONS_SCORE if found else c.NO_STATIONS_SCORE


def ofsted_score(
    rating: str | None, *, scores: Mapping[str, int] = c.OFSTED_RATING_SCORES
) -> int:
    text = _text(rating)
    if text is None:
        return c.OFSTED_UNKNOWN_SCORE
    return scores.get(text, c.OFSTED_UNKNOWN_SCORE)


def nearby_schools_score(
    schools: Sequence[School],
    *,
    max_distance: float = c.SCHOOL_MAX_DISTANCE_MILES,
    distance_floor: float = c.SCHOOL_DISTANCE_FLOOR,
) -> int:
    """Best distance-adjusted Ofsted score among schools within range.

    A school qualifies when it has a rating and a known distance of at most
    ``max_distance`` miles. Its score is discounted linearly with distance, by
    up to ``1 - distance_floor`` at the edge of the range.
    """
    if not schools:
        return c.NO_SCHOOLS_SCORE

    best: float | None = None
    for school in schools:
        distance = school.distance_miles
        if school.ofsted_rating is None or distance is None or distance > max_distance:
            continue
        penalty = min(1.0, distance / max_distance) * (1 - distance_floor)
        adjusted = ofsted_score(school.ofsted_rating) * (1 - penalty)
        if best is None or adjusted > best:
            best = adjusted

    if best is None:
        return c.NO_QUALIFYING_SCHOOLS_SCORE
    return round_half_up(best)


def _mean(values: Sequence[float | None]) -> float | None:
    present = [v for v in values if v is not None]
    return sum(present) / len(present) if present else None


def mobile_network_score(network: MobileCoverage) -> float | None:
    """Score one network: 4G ratings, else discounted no-4G ratings."""
    rating = _mean([network.data_indoor_4g, network.data_outdoor_4g])
    if rating is not None:
        return rating * c.MOBILE_RATING_MULTIPLIER
    fallback = _mean([network.data_indoor_no_4g, network.data_outdoor_no_4g])
    if fallback is not None:
        return fallback * c.MOBILE_RATING_MULTIPLIER * c.MOBILE_NO_4G_FACTOR
    return None


def mobile_coverage_score(coverage: Sequence[MobileCoverage] | None) -> int:
    """Best network's coverage score, or the neutral default without data."""
    scores = [s for s in (mobile_network_score(n) for n in coverage or ()) if s is not None]
    if not scores:
        return c.MOBILE_UNKNOWN_SCORE
    return round_half_up(max(scores))


def mobile_coverage_label(score: float) -> str:
    return c.label_for(score, c.MOBILE_COVERAGE_LABELS, c.MOBILE_COVERAGE_FLOOR_LABEL)


# ── Environment risk multipliers (0 = no risk, 1 = maximum) ────────────────────


def crime_risk_multiplier(rating: Any) -> float:
    """Crime rating word, or a 0-100 crime score, to a risk multiplier."""
    text = _text(rating)
    if text is None:
        return c.UNKNOWN_RISK_MULTIPLIER
    for word, multiplier in c.CRIME_RATING_MULTIPLIERS.items():
        if word in text:
            return multiplier
    score = parse_number(rating)
    if score is None:
        logger.debug("crime_rating_unparseable", raw=rating)
        return c.UNKNOWN_RISK_MULTIPLIER
    if score >= c.CRIME_SCORE_HIGH:
        return c.CRIME_RATING_MULTIPLIERS["high"]
    if score >= c.CRIME_SCORE_MODERATE:
        return c.CRIME_RATING_MULTIPLIERS["moderate"]
    return c.CRIME_RATING_MULTIPLIERS["low"]


def flood_level_multiplier(level: Any) -> float | None:
    text = _text(level)
    if text is None:
        return None
    return _first_fragment(text, c.FLOOD_LEVEL_MULTIPLIERS)


def flood_risk_multiplier(
    *,
    flooded_recently: bool | None,
    has_defences: bool | None,
    sources: Sequence[str],
    risk_level: Any,
) -> float:
    """Composite flood risk from history, defences, sources and assessed level."""
    points = 0.0
    if flooded_recently:
        points += c.FLOOD_RECENT_POINTS
    if has_defences is False:
        points += c.FLOOD_NO_DEFENCES_POINTS
    if sources:
        points += c.FLOOD_SOURCES_POINTS
    level = flood_level_multiplier(risk_level)
    if level is not None:
        points += c.FLOOD_ASSESSMENT_POINTS * level
    return points / 100


def coastal_erosion_multiplier(risk: Any) -> float:
    text = _text(risk)
    # "unknown" contains "no"
    if text is None or "unknown" in text:
        return c.UNKNOWN_RISK_MULTIPLIER
    multiplier = _first_fragment(text, c.COASTAL_EROSION_MULTIPLIERS)
    return c.UNKNOWN_RISK_MULTIPLIER if multiplier is None else float(multiplier)


def airport_noise_multiplier(
    category: Any, *, table: Mapping[str, float] = c.AIRPORT_NOISE_MULTIPLIERS
) -> float:
    text = _text(category)
    if text is None or text not in table:
        logger.debug("airport_noise_category_unrecognised", raw=category)
        return c.UNKNOWN_RISK_MULTIPLIER
    return table[text]


def building_safety_risk_multiplier(terms: Any) -> float:
    kinds = {classify_safety_term(t) for t in split_terms(terms)}
    if "severe" in kinds:
        return c.BUILDING_SAFETY_SEVERE_RISK
    if "negative" in kinds:
        return c.BUILDING_SAFETY_NEGATIVE_RISK
    return 0.0


def flag_risk_multiplier(flag: bool | None) -> float:
    """A yes/no hazard: present 1.0, absent 0.0, unreadable neutral."""
    if flag is None:
        return c.UNKNOWN_RISK_MULTIPLIER
    return 1.0 if flag else 0.0
