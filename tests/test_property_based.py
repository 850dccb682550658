"""Property-based tests using Hypothesis.

Tests invariants of the normalizers, the sales-insight calculator and the
dashboard: scores stay in range, parsing never raises, and better inputs never
score worse. These discover edge cases that example-based tests miss.
"""

import math
from datetime import date

from hypothesis import given
from hypothesis import strategies as st

from property_checklist.checklist import build_checklist
from property_checklist.models import (
    CalculationStatus,
    DashboardScoreCategory,
    ExtractedPropertyData,
    SaleHistoryEntry,
    School,
)
from property_checklist.sales_insights import calculate_sales_insights
from property_checklist.scoring import calculate_dashboard_scores
from property_checklist.scoring.normalizers import (
    broadband_score,
    epc_score,
    nearby_schools_score,
)
from property_checklist.scoring.parsing import (
    parse_lease_months,
    parse_monetary_value,
    parse_percentage,
    round_half_up,
)

# ---------------------------------------------------------------------------
# Strategies
# ---------------------------------------------------------------------------

finite_floats = st.floats(min_value=-1e6, max_value=1e6, allow_nan=False, allow_infinity=False)
speeds = st.floats(min_value=0, max_value=10_000, allow_nan=False, allow_infinity=False)
amounts = st.integers(min_value=1, max_value=5_000_000)
short_text = st.one_of(st.none(), st.text(max_size=30))

sale_entries = st.builds(
    lambda year, price: SaleHistoryEntry(year=str(year), sold_price=f"£{price:,}"),
    st.integers(min_value=1995, max_value=2023),
    amounts,
)

listings = st.builds(
    ExtractedPropertyData,
    price=short_text,
    tenure=st.one_of(st.none(), st.sampled_from(["Freehold", "Leasehold", "Share of freehold"])),
    epc=short_text,
    council_tax=short_text,
    broadband=short_text,
    ground_rent=short_text,
    service_charge=short_text,
    lease_term=short_text,
    heating=short_text,
    windows=short_text,
    listing_history=short_text,
    crime_rating=short_text,
    listed_property=st.one_of(st.none(), st.booleans()),
    flooded_in_last_five_years=st.one_of(st.none(), st.booleans()),
    sale_history=st.lists(sale_entries, max_size=5),
)


# ---------------------------------------------------------------------------
# round_half_up
# ---------------------------------------------------------------------------


class TestRoundHalfUpProperties:
    @given(finite_floats)
    def test_within_half_of_value(self, value: float) -> None:
        assert abs(round_half_up(value) - value) <= 0.5 + 1e-9

    @given(st.integers(min_value=-10_000, max_value=10_000))
    def test_half_rounds_up(self, n: int) -> None:
        assert round_half_up(n + 0.5) == n + 1

    @given(st.integers(min_value=-10_000, max_value=10_000))
    def test_integers_unchanged(self, n: int) -> None:
        assert round_half_up(float(n)) == n


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


class TestParsingProperties:
    @given(st.text(max_size=40))
    def test_monetary_never_crashes(self, text: str) -> None:
        result = parse_monetary_value(text)
        assert result is None or isinstance(result, float)

    @given(amounts)
    def test_formatted_price_parses_back(self, amount: int) -> None:
        assert parse_monetary_value(f"£{amount:,}") == amount

    @given(st.floats(min_value=0.0, max_value=1.0, allow_nan=False))
    def test_fraction_kept(self, ratio: float) -> None:
        assert parse_percentage(ratio) == ratio

    @given(st.integers(min_value=0, max_value=10_000))
    def test_percent_sign_divides(self, basis_points: int) -> None:
        percent = basis_points / 100
        result = parse_percentage(f"{percent}%")
        assert result is not None
        assert math.isclose(result, percent / 100)

    @given(st.integers(min_value=0, max_value=999), st.integers(min_value=0, max_value=11))
    def test_lease_months(self, years: int, months: int) -> None:
        text = f"{years} years, {months} months remaining"
        assert parse_lease_months(text) == years * 12 + months

    @given(st.text(max_size=40))
    def test_lease_never_crashes(self, text: str) -> None:
        result = parse_lease_months(text)
        assert result is None or result >= 0


# ---------------------------------------------------------------------------
# Normalizers
# ---------------------------------------------------------------------------


class TestNormalizerProperties:
    def test_epc_monotonic(self) -> None:
        scores = [epc_score(letter) for letter in "ABCDEFG"]
        assert scores == sorted(scores, reverse=True)

    @given(st.sampled_from("ABCDEFG"), st.text(alphabet=" \t", max_size=3))
    def test_epc_case_and_whitespace_ignored(self, letter: str, pad: str) -> None:
        assert epc_score(f"{pad}{letter.lower()}{pad}") == epc_score(letter)

    @given(st.text(max_size=20))
    def test_epc_in_range(self, text: str) -> None:
        assert 0 <= epc_score(text) <= 100

    @given(speeds, speeds)
    def test_broadband_monotonic(self, a: float, b: float) -> None:
        slow, fast = sorted((a, b))
        assert broadband_score(slow)[0] <= broadband_score(fast)[0]
        assert 0 <= broadband_score(fast)[0] <= 100

    @given(
        st.floats(min_value=0, max_value=3, allow_nan=False),
        st.floats(min_value=0, max_value=3, allow_nan=False),
        st.sampled_from(["Outstanding", "Good", "Requires improvement", "Inadequate"]),
    )
    def test_closer_school_never_worse(self, d1: float, d2: float, rating: str) -> None:
        near, far = sorted((d1, d2))

        def score(distance: float) -> int:
            return nearby_schools_score(
                [School(name="School", distance_miles=distance, ofsted_rating=rating)]
            )

        assert score(near) >= score(far)
        assert 0 <= score(near) <= 100


# ---------------------------------------------------------------------------
# Sales insights
# ---------------------------------------------------------------------------


class TestSalesInsightProperties:
    @given(st.lists(sale_entries, max_size=6), st.one_of(st.none(), amounts))
    def test_never_crashes(self, history: list[SaleHistoryEntry], price: int | None) -> None:
        asking = f"£{price:,}" if price is not None else None
        insights = calculate_sales_insights(history, asking, current_year=2024)
        assert insights.cagr is None or math.isfinite(insights.cagr)
        assert insights.volatility == "N/A" or insights.volatility.endswith("%")

    @given(st.lists(sale_entries, max_size=6))
    def test_most_recent_sale_is_latest_year(self, history: list[SaleHistoryEntry]) -> None:
        insights = calculate_sales_insights(history, None, current_year=2024)
        if history:
            assert insights.most_recent_sale is not None
            assert int(insights.most_recent_sale.year) == max(int(e.year) for e in history)
        else:
            assert insights.most_recent_sale is None


# ---------------------------------------------------------------------------
# Dashboard
# ---------------------------------------------------------------------------


class TestDashboardProperties:
    @given(listings)
    def test_scores_in_range(self, listing: ExtractedPropertyData) -> None:
        sales = calculate_sales_insights(listing.sale_history, listing.price, current_year=2024)
        items = build_checklist(listing, sales=sales, today=date(2024, 6, 1))
        dashboard = calculate_dashboard_scores(items)

        assert set(dashboard.categories) == set(DashboardScoreCategory)
        for data in dashboard.categories.values():
            calculated = data.calculation_status == CalculationStatus.CALCULATED
            assert calculated == (data.score_value is not None)
            if data.score_value is not None:
                assert 0 <= data.score_value <= 100
        if dashboard.overall_score is not None:
            assert 0 <= dashboard.overall_score <= 100

    @given(listings)
    def test_coverage_always_calculated(self, listing: ExtractedPropertyData) -> None:
        items = build_checklist(listing, today=date(2024, 6, 1))
        coverage = calculate_dashboard_scores(items)[DashboardScoreCategory.DATA_COVERAGE]
        assert coverage.calculation_status == CalculationStatus.CALCULATED
        present = sum(1 for item in items if not item.is_absent)
        assert coverage.score_value == round_half_up(present / len(items) * 100)
