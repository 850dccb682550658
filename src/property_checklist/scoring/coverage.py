"""Data-coverage category: how much of the checklist carries real data."""

from collections.abc import Sequence

from property_checklist.models import (
    CategoryScoreData,
    ChecklistItem,
    DashboardScoreCategory,
    PremiumData,
)
from property_checklist.scoring import constants as c
from property_checklist.scoring.parsing import round_half_up


def score_data_coverage(
    items: Sequence[ChecklistItem], premium: PremiumData | None = None
) -> CategoryScoreData:
    """Percentage of items that are resolved and hold a real value.

    Always calculated: an empty checklist has 0% coverage.
    """
    total = len(items)
    covered = [item for item in items if not item.is_absent]
    score = round_half_up(len(covered) / total * 100) if total else 0

    unresolved = total - len(covered)
    warnings = (f"{unresolved} item(s) have no data yet.",) if unresolved else ()
    return CategoryScoreData.calculated(
        DashboardScoreCategory.DATA_COVERAGE,
        score,
        c.label_for(score, c.COVERAGE_LABELS, c.COVERAGE_FLOOR_LABEL),
        contributing_keys=tuple(item.key for item in covered),
        warning_messages=warnings,
    )
