"""Checklist items, status codes and dashboard score models."""

from enum import StrEnum
from typing import Any, Final, Self

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class DataStatus(StrEnum):
    """Resolution state of a single checklist fact."""

    FOUND_POSITIVE = "FOUND_POSITIVE"
    ASK_AGENT = "ASK_AGENT"
    IS_LOADING = "IS_LOADING"


class CalculationStatus(StrEnum):
    """Whether a category score could be computed."""

    CALCULATED = "CALCULATED"
    UNCALCULATED_MISSING_DATA = "UNCALCULATED_MISSING_DATA"
    NOT_APPLICABLE = "NOT_APPLICABLE"


class DashboardScoreCategory(StrEnum):
    """Dashboard categories, one scorer each."""

    RUNNING_COSTS = "RUNNING_COSTS"
    INVESTMENT_VALUE = "INVESTMENT_VALUE"
    CONNECTIVITY = "CONNECTIVITY"
    CONDITION = "CONDITION"
    ENVIRONMENT_RISK = "ENVIRONMENT_RISK"
    LEGAL_CONSTRAINTS = "LEGAL_CONSTRAINTS"
    DATA_COVERAGE = "DATA_COVERAGE"

    @property
    def display_name(self) -> str:
        """Human-readable category name."""
        return CATEGORY_DISPLAY_NAMES[self]


CATEGORY_DISPLAY_NAMES: Final[dict[DashboardScoreCategory, str]] = {
    DashboardScoreCategory.RUNNING_COSTS: "Running Costs",
    DashboardScoreCategory.INVESTMENT_VALUE: "Investment Value",
    DashboardScoreCategory.CONNECTIVITY: "Connectivity",
    DashboardScoreCategory.CONDITION: "Condition",
    DashboardScoreCategory.ENVIRONMENT_RISK: "Environment Risk",
    DashboardScoreCategory.LEGAL_CONSTRAINTS: "Legal Constraints",
    DashboardScoreCategory.DATA_COVERAGE: "Data Coverage",
}

assert set(CATEGORY_DISPLAY_NAMES) == set(DashboardScoreCategory), (
    "CATEGORY_DISPLAY_NAMES out of sync with DashboardScoreCategory"
)


class PriceDiscrepancyReason(StrEnum):
    """Why a listing price was (or was not) flagged against its sale history."""

    NO_PREVIOUS_SOLD_HISTORY = "noPreviousSoldHistory"
    MISSING_OR_INVALID_PRICE_DATA = "missingOrInvalidPriceData"
    PRICE_GAP_WITHIN_EXPECTED_RANGE = "priceGapWithinExpectedRange"
    PRICE_GAP_EXCEEDS_EXPECTED_RANGE = "priceGapExceedsExpectedRange"
    PRICE_DROP = "priceDrop"


class NoValue(StrEnum):
    """Explicit "no data" values.

    Scraped and premium sources report absent data with these phrases. They are
    parsed into members of this enum so they can never be scored as real data.
    """

    NOT_MENTIONED = "Not mentioned"
    NOT_FOUND = "Not found"
    NOT_APPLICABLE = "Not applicable"
    NOT_AVAILABLE = "Not available"
    NOT_KNOWN = "Not known"
    NOT_SPECIFIED = "Not specified"
    NONE_FOUND = "None found"
    NO_SALES_HISTORY = "No sales history"


_NO_VALUE_LOOKUP: Final[dict[str, NoValue]] = {m.value.lower(): m for m in NoValue}


def as_no_value(value: Any) -> NoValue | None:
    """Return the matching NoValue member for a sentinel phrase, else None."""
    if isinstance(value, NoValue):
        return value
    if isinstance(value, str):
        return _NO_VALUE_LOOKUP.get(value.strip().lower())
    return None


class PropertyGroup(StrEnum):
    """Display grouping for checklist items (informational only)."""

    GENERAL = "General"
    INTERIOR = "Interior"
    EXTERIOR = "Exterior"
    UTILITIES = "Utilities"
    RIGHTS_AND_RESTRICTIONS = "Rights and Restrictions"
    RISKS = "Risks"
    NEIGHBOURHOOD = "Neighbourhood"
    INVESTMENT = "Investment Potential"
    CONSTRUCTION = "Construction"


class ChecklistKey(StrEnum):
    """Stable identifiers for every checklist fact."""

    # Listing
    PRICE = "price"
    LOCATION = "location"
    PROPERTY_TYPE = "propertyType"
    TENURE = "tenure"
    LISTING_HISTORY = "listingHistory"
    ACCESSIBILITY = "accessibility"
    BEDROOMS = "bedrooms"
    BATHROOMS = "bathrooms"
    HEATING_TYPE = "heatingType"
    SIZE = "size"
    FLOOR_PLAN = "floorPlan"
    PARKING = "parking"
    GARDEN = "garden"
    WINDOWS = "windows"
    EPC = "epc"
    COUNCIL_TAX = "councilTax"
    BROADBAND = "broadband"
    PUBLIC_RIGHT_OF_WAY = "publicRightOfWayObligation"
    PRIVATE_RIGHT_OF_WAY = "privateRightOfWayObligation"
    LISTED_PROPERTY = "listedProperty"
    RESTRICTIONS = "restrictions"
    FLOOD_DEFENCES = "floodDefences"
    FLOOD_SOURCES = "floodSources"
    FLOODED_IN_LAST_FIVE_YEARS = "floodedInLastFiveYears"
    GROUND_RENT = "groundRent"
    SERVICE_CHARGE = "serviceCharge"
    LEASE_TERM = "leaseTerm"
    NEAREST_STATIONS = "nearestStations"
    NEARBY_SCHOOLS = "nearbySchools"
    CRIME_SCORE = "crimeScore"
    # Sales history
    PRICE_DISCREPANCY = "priceDiscrepancy"
    COMPOUND_ANNUAL_GROWTH_RATE = "compoundAnnualGrowthRate"
    VOLATILITY = "volatility"
    # Premium
    DETAILED_FLOOD_RISK_ASSESSMENT = "detailedFloodRiskAssessment"
    PLANNING_PERMISSIONS = "planningPermissions"
    NEARBY_PLANNING_PERMISSIONS = "nearbyPlanningPermissions"
    MOBILE_SERVICE_COVERAGE = "mobileServiceCoverage"
    OCCUPANCY_STATUS = "occupancyStatus"
    CONSTRUCTION_AGE_BAND = "constructionAgeBand"
    FLOOR_MATERIAL = "floorMaterial"
    WALL_MATERIAL = "wallMaterial"
    ROOF_MATERIAL = "roofMaterial"
    BUILDING_SAFETY = "buildingSafety"
    CONSERVATION_AREA = "conservationArea"
    AIRPORT_NOISE_ASSESSMENT = "airportNoiseAssessment"
    COASTAL_EROSION = "coastalErosion"
    MINING_IMPACT = "miningImpact"
    RESTRICTIVE_COVENANTS = "restrictiveCovenants"
    ESTIMATED_SALE_VALUE = "estimatedSaleValue"
    OUTCODE_AVG_SALES_PRICE = "outcodeAvgSalesPrice"
    ESTIMATED_ANNUAL_RENTAL_YIELD = "estimatedAnnualRentalYield"
    PROPENSITY_TO_SELL = "propensityToSell"
    PROPENSITY_TO_LET = "propensityToLet"
    MARKET_TURNOVER_RATE = "marketTurnoverRate"


ItemValue = NoValue | str | int | float | list[str] | None


class ChecklistItem(BaseModel):
    """One fact about a property, as shown on the checklist and read by scorers.

    ``score`` carries a pre-normalized 0-100 value (or raw numeric figure) when
    the builder derived one, so scorers need not re-parse display strings.
    """

    model_config = ConfigDict(frozen=True)

    key: ChecklistKey
    group: PropertyGroup
    label: str
    value: ItemValue = Field(default=None, union_mode="left_to_right")
    status: DataStatus
    ask_agent_message: str = ""
    tooltip: str | None = None
    score: float | None = None

    @field_validator("value", mode="before")
    @classmethod
    def tag_no_value(cls, v: Any) -> Any:
        """Turn "no data" phrases into NoValue members."""
        return as_no_value(v) or v

    @property
    def is_missing(self) -> bool:
        """True if the value carries no usable data."""
        v = self.value
        if v is None or isinstance(v, NoValue):
            return True
        if isinstance(v, str):
            return not v.strip()
        if isinstance(v, list):
            return len(v) == 0
        return False

    @property
    def is_loading(self) -> bool:
        return self.status == DataStatus.IS_LOADING

    @property
    def is_absent(self) -> bool:
        """True if scorers must treat this item as not supplied."""
        return self.is_loading or self.is_missing

    @property
    def text(self) -> str | None:
        """The value as plain text, or None if absent."""
        if self.is_missing:
            return None
        if isinstance(self.value, list):
            return ", ".join(self.value)
        return str(self.value)


class DashboardScore(BaseModel):
    """A 0-100 score and its qualitative label."""

    model_config = ConfigDict(frozen=True)

    score_value: int | None = Field(default=None, ge=0, le=100)
    max_score: int = 100
    score_label: str | None = None


class CategoryScoreData(BaseModel):
    """Result of one category scorer."""

    model_config = ConfigDict(frozen=True)

    category: DashboardScoreCategory
    score: DashboardScore
    calculation_status: CalculationStatus
    contributing_keys: tuple[ChecklistKey, ...] = ()
    warning_messages: tuple[str, ...] = ()

    @model_validator(mode="after")
    def score_matches_status(self) -> Self:
        """A score value is present exactly when the category was calculated."""
        calculated = self.calculation_status == CalculationStatus.CALCULATED
        if calculated != (self.score.score_value is not None):
            raise ValueError(
                f"{self.category}: score_value must be set iff calculation_status is CALCULATED"
            )
        return self

    @classmethod
    def calculated(
        cls,
        category: DashboardScoreCategory,
        score_value: int,
        score_label: str,
        *,
        contributing_keys: tuple[ChecklistKey, ...] = (),
        warning_messages: tuple[str, ...] = (),
    ) -> Self:
        return cls(
            category=category,
            score=DashboardScore(score_value=score_value, score_label=score_label),
            calculation_status=CalculationStatus.CALCULATED,
            contributing_keys=contributing_keys,
            warning_messages=warning_messages,
        )

    @classmethod
    def missing(
        cls,
        category: DashboardScoreCategory,
        *,
        contributing_keys: tuple[ChecklistKey, ...] = (),
        warning_messages: tuple[str, ...] = (),
    ) -> Self:
        return cls(
            category=category,
            score=DashboardScore(score_value=None, score_label="Insufficient data"),
            calculation_status=CalculationStatus.UNCALCULATED_MISSING_DATA,
            contributing_keys=contributing_keys,
            warning_messages=warning_messages,
        )

    @property
    def score_value(self) -> int | None:
        return self.score.score_value


class DashboardScores(BaseModel):
    """All category scores plus the overall score."""

    model_config = ConfigDict(frozen=True)

    categories: dict[DashboardScoreCategory, CategoryScoreData]
    overall_score: int | None = None

    def __getitem__(self, category: DashboardScoreCategory) -> CategoryScoreData:
        return self.categories[category]
