"""Fixed scoring tables: weights, thresholds and keyword vocabularies.

Every table is immutable (tuples or ``MappingProxyType``). Normalizers and
scorers take them as keyword arguments defaulting to these values, so a caller
can inject alternatives without touching module state.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Final

from property_checklist.models import DashboardScoreCategory

MAX_SCORE: Final = 100
MIN_SCORE: Final = 0

# ── EPC ────────────────────────────────────────────────────────────────────────

EPC_SCORES: Final = MappingProxyType(
    {"A": 100, "B": 85, "C": 70, "D": 55, "E": 40, "F": 25, "G": 10}
)
EPC_UNKNOWN_SCORE: Final = 30

# ── Condition modifiers ────────────────────────────────────────────────────────

# Ordered: the first fragment contained in the band label wins.
CONSTRUCTION_AGE_MODIFIERS: Final[tuple[tuple[str, int], ...]] = (
    ("2020", 10),
    ("2010-2019", 8),
    ("2010", 7),
    ("2000-2009", 5),
    ("2000", 4),
    ("1990", 3),
    ("1980", 1),
    ("1970", 0),
    ("1960", -3),
    ("1950", -5),
    ("1900-1949", -8),
    ("pre-1900", -10),
    ("before 1900", -10),
)

HEATING_MISSING_MODIFIER: Final = -1


@dataclass(frozen=True)
class HeatingRule:
    """Heating modifier applied when every keyword appears in the description."""

    keywords: tuple[str, ...]
    modifier: int


HEATING_RULES: Final[tuple[HeatingRule, ...]] = (
    HeatingRule(("gas", "central"), 3),
    HeatingRule(("gas",), 2),
    HeatingRule(("modern boiler",), 4),
    HeatingRule(("new boiler",), 4),
    HeatingRule(("electric storage",), -3),
    HeatingRule(("storage heater",), -3),
    HeatingRule(("electric",), -1),
    HeatingRule(("oil",), -2),
    HeatingRule(("underfloor",), 5),
)

WINDOWS_MISSING_MODIFIER: Final = -1
# Glazing keywords are checked in order; only the first match counts.
WINDOW_GLAZING_MODIFIERS: Final[tuple[tuple[tuple[str, ...], int], ...]] = (
    (("triple glazed", "triple glazing"), 5),
    (("double glazed", "double glazing"), 3),
    (("single glazed", "single glazing"), -5),
)
WINDOW_FRAME_MODIFIERS: Final[tuple[tuple[tuple[str, ...], int], ...]] = (
    (("upvc",), 1),
    (("wood", "timber"), -1),
    (("aluminium",), 0),
)
WINDOWS_MIN_MODIFIER: Final = -5
WINDOWS_MAX_MODIFIER: Final = 6

FLOOR_MATERIAL_MODIFIERS: Final[tuple[tuple[str, int], ...]] = (
    ("concrete", 1),
    ("wood", 0),
    ("timber", 0),
)
ROOF_MATERIAL_MODIFIERS: Final[tuple[tuple[str, int], ...]] = (
    ("slate", 3),
    ("tile", 2),
    ("metal", 1),
    ("asphalt", -1),
    ("felt", -1),
    ("flat", -5),
    ("thatched", -5),
)
WALL_MATERIAL_MODIFIERS: Final[tuple[tuple[str, int], ...]] = (
    ("cavity wall insulation", 5),
    ("insulated", 3),
    ("brick", 2),
    ("stone", 1),
    ("concrete", 0),
    ("timber frame", -1),
    ("render", 0),
    ("cladding", -1),
    ("clad", -1),
    ("single skin", -5),
)

BUILDING_SAFETY_SEVERE_TERMS: Final = frozenset({"mould", "mold", "damp", "asbestos", "radon"})
BUILDING_SAFETY_NEGATIVE_TERMS: Final = frozenset(
    {
        "subsidence",
        "structural movement",
        "cracking",
        "japanese knotweed",
        "dry rot",
        "wet rot",
        "woodworm",
        "unsafe cladding",
        "fire risk",
        "lead pipes",
    }
)
BUILDING_SAFETY_POSITIVE_TERMS: Final = frozenset(
    {
        "fire alarm",
        "smoke alarm",
        "sprinkler",
        "fire door",
        "carbon monoxide detector",
        "ews1",
        "new wiring",
        "rewired",
    }
)
BUILDING_SAFETY_SEVERE_MODIFIER: Final = -5.0
BUILDING_SAFETY_NEGATIVE_MODIFIER: Final = -1.0
BUILDING_SAFETY_POSITIVE_MODIFIER: Final = 0.5

OCCUPANCY_MODIFIERS: Final = MappingProxyType(
    {"owner-occupied": 2, "rented (private)": -1, "rented (social)": -1}
)

# ── Running costs ──────────────────────────────────────────────────────────────

RUNNING_COST_WEIGHTS: Final = MappingProxyType(
    {
        "council_tax": 0.4,
        "epc": 0.4,
        "service_charge": 0.15,
        "ground_rent": 0.05,
        "tenure": 0.05,
    }
)

COUNCIL_TAX_BAND_COSTS: Final = MappingProxyType(
    {"A": 10, "B": 20, "C": 30, "D": 45, "E": 60, "F": 75, "G": 90, "H": 100, "I": 100}
)
COUNCIL_TAX_UNKNOWN_COST: Final = 50

TENURE_LEASEHOLD_COST: Final = 60
TENURE_UNKNOWN_COST: Final = 30
TENURE_OTHER_COST: Final = 0


@dataclass(frozen=True)
class CostThresholds:
    """Annual-charge bands: below ``low`` costs ``low_score``, and so on."""

    low: float
    medium: float
    low_score: int
    medium_score: int
    high_score: int
    unknown_score: int
    peppercorn_score: int = 0


GROUND_RENT_THRESHOLDS: Final = CostThresholds(
    low=100, medium=250, low_score=10, medium_score=40, high_score=80, unknown_score=30
)
SERVICE_CHARGE_THRESHOLDS: Final = CostThresholds(
    low=1000, medium=2500, low_score=15, medium_score=50, high_score=90, unknown_score=40
)

# ── Connectivity ───────────────────────────────────────────────────────────────

CONNECTIVITY_WEIGHTS: Final = MappingProxyType(
    {"stations": 0.4, "broadband": 0.2, "schools": 0.25, "mobile": 0.15}
)

FOUND_STATIONS_SCORE: Final = 80
NO_STATIONS_SCORE: Final = 30

UK_AVERAGE_BROADBAND_MBPS: Final = 75
BROADBAND_UNKNOWN_SCORE: Final = 50
# (upper bound of speed / UK average, score); the first bucket is exclusive.
BROADBAND_SCORE_BUCKETS: Final[tuple[tuple[float, int], ...]] = (
    (0.5, 20),
    (0.9, 40),
    (1.5, 75),
    (5.0, 90),
)
BROADBAND_TOP_SCORE: Final = 100

SCHOOL_MAX_DISTANCE_MILES: Final = 3.0
SCHOOL_DISTANCE_FLOOR: Final = 0.7
OFSTED_RATING_SCORES: Final = MappingProxyType(
    {"outstanding": 100, "good": 75, "requires improvement": 40, "inadequate": 20}
)
OFSTED_UNKNOWN_SCORE: Final = 30
NO_QUALIFYING_SCHOOLS_SCORE: Final = 40
NO_SCHOOLS_SCORE: Final = 30

MOBILE_RATING_MULTIPLIER: Final = 25
MOBILE_NO_4G_FACTOR: Final = 0.7
MOBILE_UNKNOWN_SCORE: Final = 50
MOBILE_COVERAGE_LABELS: Final[tuple[tuple[int, str], ...]] = (
    (90, "Excellent"),
    (70, "Good"),
    (50, "Fair"),
    (30, "Poor"),
)
MOBILE_COVERAGE_FLOOR_LABEL: Final = "Very Poor"

# ── Investment value ───────────────────────────────────────────────────────────


@dataclass(frozen=True)
class InvestmentThresholds:
    base_score: float = 50
    cagr_low: float = 0.03
    cagr_high: float = 0.06
    cagr_modifier: float = 10
    value_sensitivity: float = 0.3
    value_max_modifier: float = 15
    value_fallback_factor: float = 0.5
    rental_yield_high: float = 0.06
    rental_yield_low: float = 0.04
    rental_yield_bonus: float = 15
    rental_yield_penalty: float = -10
    turnover_low: float = 0.03
    turnover_high: float = 0.06
    turnover_modifier: float = 5
    sell_propensity_threshold: float = 0.7
    sell_propensity_bonus: float = 3
    let_propensity_threshold: float = 0.2
    let_propensity_bonus: float = 2
    volatility_threshold: float = 0.10
    volatility_penalty: float = -5


INVESTMENT_THRESHOLDS: Final = InvestmentThresholds()

# ── Sales insights ─────────────────────────────────────────────────────────────

CAGR_MULTIPLIER_THRESHOLD: Final = 1.5
CAGR_ASK_AGENT_BELOW: Final = 0.03
VOLATILITY_ASK_AGENT_ABOVE: Final = 10.0
NOT_APPLICABLE_TEXT: Final = "N/A"

# ── Environment risk ───────────────────────────────────────────────────────────

ENVIRONMENT_WEIGHTS: Final = MappingProxyType(
    {
        "crime": 18,
        "flood": 27,
        "building_safety": 14,
        "coastal_erosion": 14,
        "mining": 9,
        "airport_noise": 9,
        "conservation_area": 9,
    }
)
assert sum(ENVIRONMENT_WEIGHTS.values()) == 100, "environment weights must sum to 100"

UNKNOWN_RISK_MULTIPLIER: Final = 0.5

CRIME_RATING_MULTIPLIERS: Final = MappingProxyType({"high": 1.0, "moderate": 0.6, "low": 0.1})
CRIME_SCORE_HIGH: Final = 60
CRIME_SCORE_MODERATE: Final = 30

FLOOD_RECENT_POINTS: Final = 50
FLOOD_NO_DEFENCES_POINTS: Final = 20
FLOOD_SOURCES_POINTS: Final = 15
FLOOD_ASSESSMENT_POINTS: Final = 15
# Ordered so "very high" and "very low" are matched before "high" and "low".
FLOOD_LEVEL_MULTIPLIERS: Final[tuple[tuple[str, float], ...]] = (
    ("very high", 1.0),
    ("very low", 0.0),
    ("high", 0.75),
    ("medium", 0.5),
    ("low", 0.25),
)

COASTAL_EROSION_MULTIPLIERS: Final[tuple[tuple[str, float], ...]] = (
    ("high", 1.0),
    ("medium", 0.6),
    ("low", 0.3),
    ("no", 0.0),
    ("none", 0.0),
)

AIRPORT_NOISE_MULTIPLIERS: Final = MappingProxyType(
    {
        "none": 0.0,
        "minimal": 0.1,
        "occasional": 0.25,
        "regular": 0.4,
        "frequent": 0.55,
        "high": 0.7,
        "very high": 0.85,
        "extremely high": 1.0,
    }
)

BUILDING_SAFETY_SEVERE_RISK: Final = 1.0
BUILDING_SAFETY_NEGATIVE_RISK: Final = 0.5

# ── Legal constraints ──────────────────────────────────────────────────────────

LEGAL_POINTS: Final = MappingProxyType(
    {
        "LOW": 10,
        "LOW_MEDIUM": 15,
        "MEDIUM": 20,
        "HIGH": 30,
        "SEVERE": 40,
        "UNKNOWN_TENURE": 10,
    }
)
SHORT_LEASE_MONTHS: Final = 80 * 12
LEGAL_LABELS: Final[tuple[tuple[int, str], ...]] = (
    (80, "Severe"),
    (60, "Medium-High"),
    (40, "Medium"),
    (20, "Low-Medium"),
)
LEGAL_FLOOR_LABEL: Final = "Low"

# ── Labels ─────────────────────────────────────────────────────────────────────

DEFAULT_LABELS: Final[tuple[tuple[int, str], ...]] = (
    (80, "Excellent"),
    (60, "Good"),
    (40, "Average"),
    (20, "Poor"),
)
DEFAULT_FLOOR_LABEL: Final = "Very Poor"

CONNECTIVITY_LABELS: Final[tuple[tuple[int, str], ...]] = (
    (90, "Excellent"),
    (80, "Very Good"),
    (70, "Well Connected"),
    (60, "Above Average"),
    (50, "Average"),
    (40, "Below Average"),
    (30, "Poorly Connected"),
    (20, "Very Poor"),
)
CONNECTIVITY_FLOOR_LABEL: Final = "Extremely Poor"

ENVIRONMENT_LABELS: Final[tuple[tuple[int, str], ...]] = (
    (80, "Very Low Risk"),
    (60, "Low Risk"),
    (40, "Moderate Risk"),
    (20, "High Risk"),
)
ENVIRONMENT_FLOOR_LABEL: Final = "Very High Risk"

COVERAGE_LABELS: Final[tuple[tuple[int, str], ...]] = (
    (95, "Very Complete"),
    (80, "Mostly Complete"),
    (60, "Partially Complete"),
    (40, "Somewhat Incomplete"),
)
COVERAGE_FLOOR_LABEL: Final = "Very Incomplete"

# Categories averaged into the overall score.
OVERALL_SCORE_CATEGORIES: Final = frozenset(DashboardScoreCategory) - {
    DashboardScoreCategory.DATA_COVERAGE
}


def label_for(
    score: float,
    thresholds: tuple[tuple[int, str], ...] = DEFAULT_LABELS,
    floor_label: str = DEFAULT_FLOOR_LABEL,
) -> str:
    """Return the label of the first threshold ``score`` reaches."""
    for minimum, label in thresholds:
        if score >= minimum:
            return label
    return floor_label
