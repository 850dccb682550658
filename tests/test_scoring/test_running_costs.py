"""Tests for the running-costs category scorer."""

from collections.abc import Callable

from property_checklist.models import (
    CalculationStatus,
    ChecklistItem,
    ChecklistKey,
    DataStatus,
    NoValue,
)
from property_checklist.scoring.running_costs import score_running_costs

K = ChecklistKey
ItemFactory = Callable[..., ChecklistItem]


class TestScoreRunningCosts:
    def test_all_components(self, make_item: ItemFactory) -> None:
        items = [
            make_item(K.COUNCIL_TAX, "Band B"),
            make_item(K.EPC, "B"),
            make_item(K.SERVICE_CHARGE, "£800"),
            make_item(K.GROUND_RENT, "Peppercorn"),
            make_item(K.TENURE, "Leasehold"),
        ]
        result = score_running_costs(items)
        # cost = 0.4*20 + 0.4*15 + 0.15*15 + 0.05*0 + 0.05*60 = 19.25
        assert result.score_value == 81
        assert result.score.score_label == "Excellent"
        assert result.warning_messages == ()
        assert set(result.contributing_keys) == {
            K.COUNCIL_TAX,
            K.EPC,
            K.SERVICE_CHARGE,
            K.GROUND_RENT,
            K.TENURE,
        }

    def test_weights_renormalised_over_present_components(self, make_item: ItemFactory) -> None:
        items = [make_item(K.COUNCIL_TAX, "Band D"), make_item(K.EPC, "D")]
        result = score_running_costs(items)
        assert result.score_value == 55
        assert "Service charge unknown." in result.warning_messages

    def test_freehold_only(self, make_item: ItemFactory) -> None:
        result = score_running_costs([make_item(K.TENURE, "Freehold")])
        assert result.score_value == 100
        assert result.contributing_keys == (K.TENURE,)

    def test_no_components_is_missing(self, make_item: ItemFactory) -> None:
        items = [
            make_item(K.COUNCIL_TAX, NoValue.NOT_MENTIONED, DataStatus.ASK_AGENT),
            make_item(K.EPC, None, DataStatus.IS_LOADING),
        ]
        result = score_running_costs(items)
        assert result.calculation_status == CalculationStatus.UNCALCULATED_MISSING_DATA
        assert result.score_value is None
        assert len(result.warning_messages) == 5

    def test_loading_items_do_not_contribute(self, make_item: ItemFactory) -> None:
        items = [make_item(K.TENURE, "Freehold"), make_item(K.EPC, None, DataStatus.IS_LOADING)]
        result = score_running_costs(items)
        assert K.EPC not in result.contributing_keys
        assert result.score_value == 100

    def test_unconfirmed_service_charge_scores_unknown(self, make_item: ItemFactory) -> None:
        items = [make_item(K.SERVICE_CHARGE, "£800", DataStatus.ASK_AGENT)]
        # Unconfirmed charges cost 40 rather than the 15 their amount would imply.
        assert score_running_costs(items).score_value == 60
