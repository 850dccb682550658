"""Tests for end-to-end property evaluation."""

from datetime import date

import pytest
from hypothesis import given
from hypothesis import strategies as st

from property_checklist.checklist import PREMIUM_KEYS
from property_checklist.config import Settings
from property_checklist.engine import PropertyEvaluation, evaluate_property
from property_checklist.models import (
    CalculationStatus,
    ChecklistKey,
    DashboardScoreCategory,
    DataStatus,
    ExtractedPropertyData,
    PremiumData,
    PriceDiscrepancyReason,
    SaleHistoryEntry,
)

K = ChecklistKey


@pytest.fixture
def settings() -> Settings:
    return Settings(reference_date=date(2024, 6, 1))


class TestEvaluateProperty:
    def test_listing_only(self, sample_listing: ExtractedPropertyData, settings: Settings) -> None:
        evaluation = evaluate_property(sample_listing, settings=settings)

        assert isinstance(evaluation, PropertyEvaluation)
        assert len(evaluation.checklist) == 33
        assert (
            evaluation.sales_insights.reason
            == PriceDiscrepancyReason.PRICE_GAP_WITHIN_EXPECTED_RANGE
        )
        assert set(evaluation.dashboard.categories) == set(DashboardScoreCategory)
        assert evaluation.dashboard.overall_score is not None
        assert 0 <= evaluation.dashboard.overall_score <= 100

    def test_with_premium(
        self,
        sample_listing: ExtractedPropertyData,
        sample_premium: PremiumData,
        settings: Settings,
    ) -> None:
        evaluation = evaluate_property(sample_listing, sample_premium, settings=settings)

        assert len(evaluation.checklist) == 33 + len(PREMIUM_KEYS)
        keys = [item.key for item in evaluation.checklist]
        assert len(keys) == len(set(keys))
        coverage = evaluation.dashboard[DashboardScoreCategory.DATA_COVERAGE]
        assert coverage.score_value is not None
        assert coverage.score_value > 80

    def test_premium_loading(
        self,
        sample_listing: ExtractedPropertyData,
        sample_premium: PremiumData,
        settings: Settings,
    ) -> None:
        evaluation = evaluate_property(
            sample_listing, sample_premium, premium_loading=True, settings=settings
        )
        loading = {item.key for item in evaluation.checklist if item.is_loading}
        assert loading == set(PREMIUM_KEYS)
        broadband = next(item for item in evaluation.checklist if item.key == K.BROADBAND)
        assert broadband.value == "Ultrafast 900Mb"

    def test_reference_date_from_environment(
        self, sample_listing: ExtractedPropertyData, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("PROPERTY_CHECKLIST_REFERENCE_DATE", "2024-10-01")
        evaluation = evaluate_property(sample_listing)
        history = next(item for item in evaluation.checklist if item.key == K.LISTING_HISTORY)
        assert history.status == DataStatus.ASK_AGENT

    def test_empty_listing(self, settings: Settings) -> None:
        evaluation = evaluate_property(ExtractedPropertyData(), settings=settings)
        assert evaluation.dashboard.overall_score is None
        assert evaluation.sales_insights.reason == PriceDiscrepancyReason.NO_PREVIOUS_SOLD_HISTORY
        connectivity = evaluation.dashboard[DashboardScoreCategory.CONNECTIVITY]
        assert connectivity.calculation_status == CalculationStatus.UNCALCULATED_MISSING_DATA


class TestPropertyEvaluation:
    def test_items_for(self, sample_listing: ExtractedPropertyData, settings: Settings) -> None:
        evaluation = evaluate_property(sample_listing, settings=settings)
        legal = evaluation.items_for(DashboardScoreCategory.LEGAL_CONSTRAINTS)
        assert {item.key for item in legal} == {
            K.TENURE,
            K.LEASE_TERM,
            K.LISTED_PROPERTY,
            K.PUBLIC_RIGHT_OF_WAY,
            K.PRIVATE_RIGHT_OF_WAY,
        }

    def test_ask_agent_items(
        self, sample_listing: ExtractedPropertyData, settings: Settings
    ) -> None:
        evaluation = evaluate_property(sample_listing, settings=settings)
        questions = evaluation.ask_agent_items
        assert all(item.status == DataStatus.ASK_AGENT for item in questions)
        # The sample listing does not mention flood sources.
        assert K.FLOOD_SOURCES in {item.key for item in questions}

    def test_serialises_to_json(
        self, sample_listing: ExtractedPropertyData, settings: Settings
    ) -> None:
        evaluation = evaluate_property(sample_listing, settings=settings)
        restored = PropertyEvaluation.model_validate_json(evaluation.model_dump_json())
        assert restored.dashboard.overall_score == evaluation.dashboard.overall_score
        assert len(restored.checklist) == len(evaluation.checklist)


short_text = st.one_of(st.none(), st.text(max_size=20))
listings = st.builds(
    ExtractedPropertyData,
    price=short_text,
    tenure=st.one_of(st.none(), st.sampled_from(["Freehold", "Leasehold"])),
    epc=short_text,
    council_tax=short_text,
    broadband=short_text,
    lease_term=short_text,
    windows=short_text,
    listing_history=short_text,
    sale_history=st.lists(
        st.builds(
            lambda year, price: SaleHistoryEntry(year=str(year), sold_price=f"£{price:,}"),
            st.integers(min_value=1995, max_value=2023),
            st.integers(min_value=1, max_value=2_000_000),
        ),
        max_size=4,
    ),
)


class TestDeterminism:
    @given(listings, st.booleans())
    def test_same_input_same_evaluation(
        self, listing: ExtractedPropertyData, premium_loading: bool
    ) -> None:
        settings = Settings(reference_date=date(2024, 6, 1))
        premium = PremiumData(estimated_sale_value=350_000, conservation_area=False)
        before = listing.model_dump()

        first = evaluate_property(
            listing, premium, premium_loading=premium_loading, settings=settings
        )
        second = evaluate_property(
            listing, premium, premium_loading=premium_loading, settings=settings
        )

        assert first == second
        assert first.model_dump_json() == second.model_dump_json()
        assert listing.model_dump() == before
