"""Tests for dashboard aggregation."""

from collections.abc import Callable

import pytest

from property_checklist.models import (
    CalculationStatus,
    CategoryScoreData,
    ChecklistItem,
    ChecklistKey,
    DashboardScoreCategory,
)
from property_checklist.scoring.aggregate import (
    SCORERS,
    calculate_dashboard_scores,
    calculate_overall_score,
)
from property_checklist.scoring.items import weighted_mean

C = DashboardScoreCategory
K = ChecklistKey
ItemFactory = Callable[..., ChecklistItem]


def _calculated(category: DashboardScoreCategory, score: int) -> CategoryScoreData:
    return CategoryScoreData.calculated(category, score, "label")


class TestCalculateOverallScore:
    def test_mean_rounded_half_up(self) -> None:
        scores = {
            C.RUNNING_COSTS: _calculated(C.RUNNING_COSTS, 80),
            C.CONNECTIVITY: _calculated(C.CONNECTIVITY, 61),
        }
        assert calculate_overall_score(scores) == 71

    def test_data_coverage_excluded(self) -> None:
        scores = {
            C.CONDITION: _calculated(C.CONDITION, 60),
            C.DATA_COVERAGE: _calculated(C.DATA_COVERAGE, 0),
        }
        assert calculate_overall_score(scores) == 60

    def test_uncalculated_excluded(self) -> None:
        scores = {
            C.CONDITION: _calculated(C.CONDITION, 60),
            C.INVESTMENT_VALUE: CategoryScoreData.missing(C.INVESTMENT_VALUE),
        }
        assert calculate_overall_score(scores) == 60

    def test_none_without_scores(self) -> None:
        assert calculate_overall_score({}) is None
        assert calculate_overall_score({C.DATA_COVERAGE: _calculated(C.DATA_COVERAGE, 90)}) is None


class TestCalculateDashboardScores:
    def test_every_category_reported(self) -> None:
        assert set(SCORERS) == set(DashboardScoreCategory)
        dashboard = calculate_dashboard_scores([])
        assert set(dashboard.categories) == set(DashboardScoreCategory)

    def test_empty_checklist(self) -> None:
        dashboard = calculate_dashboard_scores([])
        assert dashboard.overall_score is None
        assert dashboard[C.DATA_COVERAGE].score_value == 0
        for category in C:
            if category != C.DATA_COVERAGE:
                assert (
                    dashboard[category].calculation_status
                    == CalculationStatus.UNCALCULATED_MISSING_DATA
                )

    def test_overall_from_available_categories(self, make_item: ItemFactory) -> None:
        items = [make_item(K.TENURE, "Freehold"), make_item(K.EPC, "A")]
        dashboard = calculate_dashboard_scores(items)
        # Condition loses a point each for unknown heating and windows.
        assert dashboard[C.RUNNING_COSTS].score_value == 100
        assert dashboard[C.CONDITION].score_value == 98
        assert dashboard[C.LEGAL_CONSTRAINTS].score_value == 0
        assert dashboard.overall_score == 66

    def test_scorers_are_order_independent(self, make_item: ItemFactory) -> None:
        items = [make_item(K.TENURE, "Leasehold"), make_item(K.CRIME_SCORE, "Low")]
        forward = calculate_dashboard_scores(items)
        backward = calculate_dashboard_scores(list(reversed(items)))
        assert forward.overall_score == backward.overall_score
        for category in C:
            assert forward[category].score == backward[category].score


class TestWeightedMean:
    def test_renormalises(self) -> None:
        assert weighted_mean({"a": 100}, {"a": 0.2, "b": 0.8}) == pytest.approx(100)

    def test_rejects_zero_weight(self) -> None:
        with pytest.raises(ValueError, match="weighted component"):
            weighted_mean({}, {"a": 1.0})
