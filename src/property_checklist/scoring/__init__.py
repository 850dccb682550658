"""Normalizers, category scorers and aggregation."""

from property_checklist.scoring.aggregate import (
    SCORERS,
    calculate_dashboard_scores,
    calculate_overall_score,
)
from property_checklist.scoring.condition import score_condition
from property_checklist.scoring.connectivity import score_connectivity
from property_checklist.scoring.coverage import score_data_coverage
from property_checklist.scoring.environment import score_environment_risk
from property_checklist.scoring.investment import score_investment_value
from property_checklist.scoring.legal import score_legal_constraints
from property_checklist.scoring.running_costs import score_running_costs

__all__ = [
    "SCORERS",
    "calculate_dashboard_scores",
    "calculate_overall_score",
    "score_condition",
    "score_connectivity",
    "score_data_coverage",
    "score_environment_risk",
    "score_investment_value",
    "score_legal_constraints",
    "score_running_costs",
]
