"""Which checklist items feed each dashboard category."""

from collections.abc import Mapping, Sequence
from types import MappingProxyType
from typing import Final

from property_checklist.models import ChecklistItem, ChecklistKey, DashboardScoreCategory

K = ChecklistKey

CATEGORY_ITEM_MAP: Final[Mapping[DashboardScoreCategory, tuple[ChecklistKey, ...]]] = (
    MappingProxyType(
        {
            DashboardScoreCategory.RUNNING_COSTS: (
                K.COUNCIL_TAX,
                K.EPC,
                K.SERVICE_CHARGE,
                K.GROUND_RENT,
                K.TENURE,
            ),
            DashboardScoreCategory.INVESTMENT_VALUE: (
                K.PRICE,
                K.COMPOUND_ANNUAL_GROWTH_RATE,
                K.VOLATILITY,
                K.PRICE_DISCREPANCY,
                K.ESTIMATED_SALE_VALUE,
                K.OUTCODE_AVG_SALES_PRICE,
                K.ESTIMATED_ANNUAL_RENTAL_YIELD,
                K.MARKET_TURNOVER_RATE,
                K.PROPENSITY_TO_SELL,
                K.PROPENSITY_TO_LET,
            ),
            DashboardScoreCategory.CONNECTIVITY: (
                K.NEAREST_STATIONS,
                K.BROADBAND,
                K.NEARBY_SCHOOLS,
                K.MOBILE_SERVICE_COVERAGE,
            ),
            DashboardScoreCategory.CONDITION: (
                K.EPC,
                K.CONSTRUCTION_AGE_BAND,
                K.HEATING_TYPE,
                K.WINDOWS,
                K.FLOOR_MATERIAL,
                K.WALL_MATERIAL,
                K.ROOF_MATERIAL,
                K.BUILDING_SAFETY,
                K.OCCUPANCY_STATUS,
            ),
            DashboardScoreCategory.ENVIRONMENT_RISK: (
                K.FLOODED_IN_LAST_FIVE_YEARS,
                K.FLOOD_DEFENCES,
                K.FLOOD_SOURCES,
                K.DETAILED_FLOOD_RISK_ASSESSMENT,
                K.CRIME_SCORE,
                K.BUILDING_SAFETY,
                K.COASTAL_EROSION,
                K.MINING_IMPACT,
                K.AIRPORT_NOISE_ASSESSMENT,
                K.CONSERVATION_AREA,
            ),
            DashboardScoreCategory.LEGAL_CONSTRAINTS: (
                K.TENURE,
                K.LEASE_TERM,
                K.LISTED_PROPERTY,
                K.RESTRICTIVE_COVENANTS,
                K.PUBLIC_RIGHT_OF_WAY,
                K.PRIVATE_RIGHT_OF_WAY,
                K.PLANNING_PERMISSIONS,
                K.NEARBY_PLANNING_PERMISSIONS,
            ),
            # Coverage counts every item on the checklist.
            DashboardScoreCategory.DATA_COVERAGE: tuple(ChecklistKey),
        }
    )
)

assert set(CATEGORY_ITEM_MAP) == set(DashboardScoreCategory), (
    "CATEGORY_ITEM_MAP out of sync with DashboardScoreCategory"
)


def items_for_category(
    items: Sequence[ChecklistItem], category: DashboardScoreCategory
) -> list[ChecklistItem]:
    """Checklist items relevant to ``category``, in checklist order."""
    keys = set(CATEGORY_ITEM_MAP[category])
    return [item for item in items if item.key in keys]
