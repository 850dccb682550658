"""Legal-constraints category score (points; higher means more constrained)."""

from collections.abc import Mapping, Sequence

from property_checklist.logging import get_logger
from property_checklist.models import (
    CategoryScoreData,
    ChecklistItem,
    ChecklistKey,
    DashboardScoreCategory,
    DataStatus,
    PremiumData,
)
from property_checklist.scoring import constants as c
from property_checklist.scoring.items import find_item, present_item
from property_checklist.scoring.parsing import (
    clamp,
    parse_lease_months,
    parse_yes_no,
    round_half_up,
)

logger = get_logger(__name__)

# Constraint item -> tier of points added when the constraint applies.
CONSTRAINT_TIERS: Mapping[ChecklistKey, str] = {
    ChecklistKey.LISTED_PROPERTY: "HIGH",
    ChecklistKey.RESTRICTIVE_COVENANTS: "MEDIUM",
    ChecklistKey.PUBLIC_RIGHT_OF_WAY: "LOW_MEDIUM",
    ChecklistKey.PRIVATE_RIGHT_OF_WAY: "LOW_MEDIUM",
    ChecklistKey.PLANNING_PERMISSIONS: "LOW",
    ChecklistKey.NEARBY_PLANNING_PERMISSIONS: "LOW",
}

assert set(CONSTRAINT_TIERS.values()) <= set(c.LEGAL_POINTS), "unknown legal point tier"

LEGAL_KEYS: tuple[ChecklistKey, ...] = (
    ChecklistKey.TENURE,
    ChecklistKey.LEASE_TERM,
    *CONSTRAINT_TIERS,
)

_MISSING_WARNINGS: Mapping[ChecklistKey, str] = {
    ChecklistKey.TENURE: "Tenure information missing, score may be less reliable.",
    ChecklistKey.LISTED_PROPERTY: "Listed property status missing.",
    ChecklistKey.RESTRICTIVE_COVENANTS: (
        "Restrictive covenants status missing, score may be less reliable."
    ),
    ChecklistKey.PUBLIC_RIGHT_OF_WAY: (
        "Public Right of Way status missing, score may be less reliable."
    ),
    ChecklistKey.PRIVATE_RIGHT_OF_WAY: "Private Right of Way status missing.",
    ChecklistKey.PLANNING_PERMISSIONS: "Property planning permission status missing.",
    ChecklistKey.NEARBY_PLANNING_PERMISSIONS: (
        "Nearby planning permission status missing, score may be less reliable."
    ),
}


def tenure_points(tenure: object, *, points: Mapping[str, int] = c.LEGAL_POINTS) -> int:
    """Points for the tenure type; unknown tenure gets its own tier."""
    if not isinstance(tenure, str) or not tenure.strip():
        return points["UNKNOWN_TENURE"]
    text = tenure.lower()
    if "share of freehold" in text or "commonhold" in text:
        return points["LOW"]
    if "leasehold" in text:
        return points["LOW_MEDIUM"]
    if "freehold" in text:
        return 0
    return points["UNKNOWN_TENURE"]


def constraint_applies(item: ChecklistItem) -> bool:
    """A constraint applies if the value reads "yes", or it was confirmed found.

    Confirmed items (FOUND_POSITIVE) count unless their value explicitly says no.
    """
    answer = parse_yes_no(item.value)
    if answer is not None:
        return answer
    return item.status == DataStatus.FOUND_POSITIVE


def is_short_lease(items: Sequence[ChecklistItem]) -> bool:
    tenure = present_item(items, ChecklistKey.TENURE)
    if tenure is None or "leasehold" not in str(tenure.value).lower():
        return False
    if "share of freehold" in str(tenure.value).lower():
        return False
    lease = present_item(items, ChecklistKey.LEASE_TERM)
    if lease is None:
        return False
    months = int(lease.score) if lease.score is not None else parse_lease_months(lease.value)
    return months is not None and months < c.SHORT_LEASE_MONTHS


def legal_constraints_label(score: float) -> str:
    return c.label_for(score, c.LEGAL_LABELS, c.LEGAL_FLOOR_LABEL)


def score_legal_constraints(
    items: Sequence[ChecklistItem],
    premium: PremiumData | None = None,
    *,
    points: Mapping[str, int] = c.LEGAL_POINTS,
) -> CategoryScoreData:
    """Accumulate constraint points from tenure, lease and legal encumbrances.

    The stored score is the clamped points total. It is not inverted, so a
    higher score means more constraints.
    """
    category = DashboardScoreCategory.LEGAL_CONSTRAINTS
    if all(present_item(items, key) is None for key in LEGAL_KEYS):
        return CategoryScoreData.missing(
            category, warning_messages=("No tenure or legal information available.",)
        )

    breakdown: dict[str, int] = {}
    contributing: list[ChecklistKey] = []
    warnings: list[str] = []

    tenure = present_item(items, ChecklistKey.TENURE)
    breakdown["tenure"] = tenure_points(tenure.value if tenure is not None else None, points=points)
    if tenure is not None:
        contributing.append(ChecklistKey.TENURE)
    else:
        warnings.append(_MISSING_WARNINGS[ChecklistKey.TENURE])

    if is_short_lease(items):
        breakdown["short_lease"] = points["SEVERE"]
        contributing.append(ChecklistKey.LEASE_TERM)
    elif tenure is not None and "leasehold" in str(tenure.value).lower():
        if present_item(items, ChecklistKey.LEASE_TERM) is None:
            warnings.append("Lease term information missing.")

    for key, tier in CONSTRAINT_TIERS.items():
        item = present_item(items, key)
        if item is None:
            existing = find_item(items, key)
            if existing is None or not existing.is_loading:
                warnings.append(_MISSING_WARNINGS[key])
            continue
        contributing.append(key)
        if constraint_applies(item):
            breakdown[key.value] = points[tier]

    score = round_half_up(clamp(sum(breakdown.values()), c.MIN_SCORE, c.MAX_SCORE))
    logger.debug("legal_constraints_scored", score=score, breakdown=breakdown)
    return CategoryScoreData.calculated(
        category,
        score,
        legal_constraints_label(score),
        contributing_keys=tuple(contributing),
        warning_messages=tuple(warnings),
    )
