"""Tests for the legal-constraints category scorer."""

from collections.abc import Callable

import pytest

from property_checklist.models import (
    CalculationStatus,
    ChecklistItem,
    ChecklistKey,
    DataStatus,
    NoValue,
)
from property_checklist.scoring.legal import (
    constraint_applies,
    is_short_lease,
    score_legal_constraints,
    tenure_points,
)

K = ChecklistKey
ItemFactory = Callable[..., ChecklistItem]

_CONSTRAINT_KEYS = (
    K.LISTED_PROPERTY,
    K.RESTRICTIVE_COVENANTS,
    K.PUBLIC_RIGHT_OF_WAY,
    K.PRIVATE_RIGHT_OF_WAY,
    K.PLANNING_PERMISSIONS,
    K.NEARBY_PLANNING_PERMISSIONS,
)


def _no_constraints(make_item: ItemFactory) -> list[ChecklistItem]:
    return [make_item(key, "No") for key in _CONSTRAINT_KEYS]


class TestHelpers:
    @pytest.mark.parametrize(
        ("tenure", "expected"),
        [
            ("Freehold", 0),
            ("Leasehold", 15),
            ("Share of Freehold", 10),
            ("Commonhold", 10),
            ("Unusual", 10),
            (None, 10),
        ],
    )
    def test_tenure_points(self, tenure: object, expected: int) -> None:
        assert tenure_points(tenure) == expected

    def test_constraint_applies(self, make_item: ItemFactory) -> None:
        assert constraint_applies(make_item(K.LISTED_PROPERTY, "Yes", DataStatus.ASK_AGENT))
        assert not constraint_applies(make_item(K.LISTED_PROPERTY, "No"))
        assert constraint_applies(make_item(K.PLANNING_PERMISSIONS, ["23/001 - Extension"]))
        assert not constraint_applies(
            make_item(K.PLANNING_PERMISSIONS, "No applications found")
        )
        assert not constraint_applies(make_item(K.RESTRICTIONS, "Unclear", DataStatus.ASK_AGENT))

    def test_short_lease(self, make_item: ItemFactory) -> None:
        leasehold = make_item(K.TENURE, "Leasehold")
        assert is_short_lease([leasehold, make_item(K.LEASE_TERM, "70 years", score=840)])
        assert not is_short_lease([leasehold, make_item(K.LEASE_TERM, "80 years", score=960)])
        assert is_short_lease([leasehold, make_item(K.LEASE_TERM, "65 years remaining")])
        share = make_item(K.TENURE, "Share of freehold (leasehold)")
        assert not is_short_lease([share, make_item(K.LEASE_TERM, "50 years", score=600)])


class TestScoreLegalConstraints:
    def test_missing_without_legal_data(self, make_item: ItemFactory) -> None:
        result = score_legal_constraints([make_item(K.PRICE, "£300,000")])
        assert result.calculation_status == CalculationStatus.UNCALCULATED_MISSING_DATA

    def test_unencumbered_freehold(self, make_item: ItemFactory) -> None:
        items = [make_item(K.TENURE, "Freehold"), *_no_constraints(make_item)]
        result = score_legal_constraints(items)
        assert result.score_value == 0
        assert result.score.score_label == "Low"
        assert result.warning_messages == ()

    def test_short_leasehold_listed(self, make_item: ItemFactory) -> None:
        items = [
            make_item(K.TENURE, "Leasehold"),
            make_item(K.LEASE_TERM, "70 years", score=840),
            make_item(K.LISTED_PROPERTY, "Yes", DataStatus.ASK_AGENT),
        ]
        result = score_legal_constraints(items)
        # 15 (leasehold) + 40 (short lease) + 30 (listed)
        assert result.score_value == 85
        assert result.score.score_label == "Severe"
        assert K.LEASE_TERM in result.contributing_keys

    def test_unknown_tenure(self, make_item: ItemFactory) -> None:
        items = [make_item(K.LISTED_PROPERTY, "Yes")]
        result = score_legal_constraints(items)
        assert result.score_value == 40
        assert result.score.score_label == "Medium"
        assert any("Tenure information missing" in w for w in result.warning_messages)

    def test_planning_applications_found(self, make_item: ItemFactory) -> None:
        items = [
            make_item(K.TENURE, "Freehold"),
            make_item(K.NEARBY_PLANNING_PERMISSIONS, ["2023/1234 - Rear extension - Granted"]),
        ]
        assert score_legal_constraints(items).score_value == 10

    def test_clamped_at_100(self, make_item: ItemFactory) -> None:
        items = [
            make_item(K.TENURE, "Leasehold"),
            make_item(K.LEASE_TERM, "40 years", score=480),
            *(make_item(key, "Yes") for key in _CONSTRAINT_KEYS),
        ]
        assert score_legal_constraints(items).score_value == 100

    def test_leasehold_without_lease_term_warns(self, make_item: ItemFactory) -> None:
        items = [make_item(K.TENURE, "Leasehold"), *_no_constraints(make_item)]
        result = score_legal_constraints(items)
        assert result.score_value == 15
        assert result.warning_messages == ("Lease term information missing.",)

    def test_loading_items_do_not_warn(self, make_item: ItemFactory) -> None:
        items = [
            make_item(K.TENURE, "Freehold"),
            *(make_item(key, None, DataStatus.IS_LOADING) for key in _CONSTRAINT_KEYS),
        ]
        result = score_legal_constraints(items)
        assert result.score_value == 0
        assert result.warning_messages == ()

    def test_sentinel_values_warn(self, make_item: ItemFactory) -> None:
        items = [
            make_item(K.TENURE, "Freehold"),
            make_item(K.LISTED_PROPERTY, NoValue.NOT_MENTIONED, DataStatus.ASK_AGENT),
        ]
        result = score_legal_constraints(items)
        assert "Listed property status missing." in result.warning_messages
