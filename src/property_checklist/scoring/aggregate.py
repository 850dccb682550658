"""Combine category scores into the dashboard and the overall score."""

from collections.abc import Callable, Mapping, Sequence

from property_checklist.logging import get_logger
from property_checklist.models import (
    CalculationStatus,
    CategoryScoreData,
    ChecklistItem,
    DashboardScoreCategory,
    DashboardScores,
    PremiumData,
)
from property_checklist.scoring import constants as c
from property_checklist.scoring.condition import score_condition
from property_checklist.scoring.connectivity import score_connectivity
from property_checklist.scoring.coverage import score_data_coverage
from property_checklist.scoring.environment import score_environment_risk
from property_checklist.scoring.investment import score_investment_value
from property_checklist.scoring.legal import score_legal_constraints
from property_checklist.scoring.parsing import round_half_up
from property_checklist.scoring.running_costs import score_running_costs

logger = get_logger(__name__)

Scorer = Callable[[Sequence[ChecklistItem], PremiumData | None], CategoryScoreData]

SCORERS: Mapping[DashboardScoreCategory, Scorer] = {
    DashboardScoreCategory.RUNNING_COSTS: score_running_costs,
    DashboardScoreCategory.INVESTMENT_VALUE: score_investment_value,
    DashboardScoreCategory.CONNECTIVITY: score_connectivity,
    DashboardScoreCategory.CONDITION: score_condition,
    DashboardScoreCategory.ENVIRONMENT_RISK: score_environment_risk,
    DashboardScoreCategory.LEGAL_CONSTRAINTS: score_legal_constraints,
    DashboardScoreCategory.DATA_COVERAGE: score_data_coverage,
}

assert set(SCORERS) == set(DashboardScoreCategory), "SCORERS out of sync with categories"


def calculate_overall_score(
    scores: Mapping[DashboardScoreCategory, CategoryScoreData],
) -> int | None:
    """Unweighted mean of the calculated category scores, rounded half up.

    Data coverage is never included. Returns None when no other category
    has a calculated score.
    """
    included = [
        data.score.score_value
        for category, data in scores.items()
        if category in c.OVERALL_SCORE_CATEGORIES
        and data.calculation_status == CalculationStatus.CALCULATED
        and data.score.score_value is not None
    ]
    if not included:
        return None
    return round_half_up(sum(included) / len(included))


def calculate_dashboard_scores(
    items: Sequence[ChecklistItem], premium: PremiumData | None = None
) -> DashboardScores:
    """Run every category scorer and aggregate the results.

    Scorers are independent of each other, so evaluation order does not matter.
    """
    categories = {category: scorer(items, premium) for category, scorer in SCORERS.items()}
    overall = calculate_overall_score(categories)
    logger.info(
        "dashboard_scores_calculated",
        overall=overall,
        calculated=sum(
            1
            for data in categories.values()
            if data.calculation_status == CalculationStatus.CALCULATED
        ),
        total_items=len(items),
    )
    return DashboardScores(categories=categories, overall_score=overall)
