"""Condition category score: EPC baseline adjusted by construction details."""

from collections.abc import Callable, Sequence
from typing import Any

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
    building_safety_modifier,
    construction_age_modifier,
    epc_score,
    floor_material_modifier,
    heating_modifier,
    occupancy_modifier,
    roof_material_modifier,
    wall_material_modifier,
    windows_modifier,
)
from property_checklist.scoring.parsing import clamp, round_half_up

logger = get_logger(__name__)

# Heating and windows penalise missing input; the other modifiers treat it as 0.
CONDITION_MODIFIERS: tuple[tuple[ChecklistKey, Callable[[Any], float]], ...] = (
    (ChecklistKey.CONSTRUCTION_AGE_BAND, construction_age_modifier),
    (ChecklistKey.HEATING_TYPE, heating_modifier),
    (ChecklistKey.WINDOWS, windows_modifier),
    (ChecklistKey.FLOOR_MATERIAL, floor_material_modifier),
    (ChecklistKey.WALL_MATERIAL, wall_material_modifier),
    (ChecklistKey.ROOF_MATERIAL, roof_material_modifier),
    (ChecklistKey.BUILDING_SAFETY, building_safety_modifier),
    (ChecklistKey.OCCUPANCY_STATUS, occupancy_modifier),
)


def score_condition(
    items: Sequence[ChecklistItem], premium: PremiumData | None = None
) -> CategoryScoreData:
    """Score physical condition starting from the EPC efficiency score.

    The EPC rating is required; every other factor adds or subtracts a small
    modifier. An EPC item that is present but unreadable starts from the
    unknown-rating score.
    """
    category = DashboardScoreCategory.CONDITION
    epc_item = present_item(items, ChecklistKey.EPC)
    if epc_item is None:
        return CategoryScoreData.missing(
            category,
            warning_messages=("EPC rating unavailable, condition cannot be assessed.",),
        )

    base = epc_score(epc_item.value)
    contributing = [ChecklistKey.EPC]
    modifiers: dict[str, float] = {}
    for key, normalize in CONDITION_MODIFIERS:
        item = present_item(items, key)
        modifiers[key.value] = normalize(item.value if item is not None else None)
        if item is not None:
            contributing.append(key)

    score = round_half_up(clamp(base + sum(modifiers.values()), c.MIN_SCORE, c.MAX_SCORE))

    warnings = []
    if present_item(items, ChecklistKey.CONSTRUCTION_AGE_BAND) is None:
        warnings.append("Construction age unknown.")
    if present_item(items, ChecklistKey.HEATING_TYPE) is None:
        warnings.append("Heating type unknown.")

    logger.debug("condition_scored", score=score, base=base, modifiers=modifiers)
    return CategoryScoreData.calculated(
        category,
        score,
        c.label_for(score),
        contributing_keys=tuple(contributing),
        warning_messages=tuple(warnings),
    )
