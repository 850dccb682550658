"""Input payloads: scraped listing data and the premium data provider response.

Both accept the camelCase keys used by the upstream providers as well as the
snake_case field names.
"""

from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from pydantic.functional_validators import BeforeValidator

from property_checklist.models.sales import SaleHistoryEntry

_UNKNOWN_FLAG_WORDS = frozenset({"", "ask agent", "unknown", "not known", "not mentioned", "n/a"})


def _coerce_unknown_flag_to_none(v: Any) -> Any:
    """Map 'ask agent' style answers to None so the flag stays tri-state."""
    if isinstance(v, str) and v.strip().lower() in _UNKNOWN_FLAG_WORDS:
        return None
    return v


def _coerce_none_to_empty_list(v: Any) -> Any:
    return [] if v is None else v


# True / False / not known
OptionalFlag = Annotated[bool | None, BeforeValidator(_coerce_unknown_flag_to_none)]
StrList = Annotated[list[str], BeforeValidator(_coerce_none_to_empty_list)]

_CAMEL_CONFIG = ConfigDict(
    frozen=True,
    extra="ignore",
    alias_generator=to_camel,
    populate_by_name=True,
)


class Station(BaseModel):
    """A nearby railway or underground station."""

    model_config = _CAMEL_CONFIG

    name: str
    distance_miles: float | None = Field(default=None, ge=0)


class School(BaseModel):
    """A nearby school with its most recent Ofsted rating."""

    model_config = _CAMEL_CONFIG

    name: str
    distance_miles: float | None = Field(default=None, ge=0)
    ofsted_rating: str | None = None


class ExtractedPropertyData(BaseModel):
    """Fields scraped from a listing page.

    ``None`` means the field was not present on the page. For the station and
    school lists ``None`` means "not scraped" while ``[]`` means "none nearby".
    """

    model_config = _CAMEL_CONFIG

    price: str | None = None
    location: str | None = None
    property_type: str | None = None
    tenure: str | None = None
    listing_history: str | None = None
    accessibility: str | None = None
    bedrooms: int | None = None
    bathrooms: int | None = None
    heating: str | None = None
    size: str | None = None
    floor_plan: str | None = None
    parking: str | None = None
    garden: str | None = None
    windows: str | None = None
    epc: str | None = None
    council_tax: str | None = None
    broadband: str | None = None
    ground_rent: str | None = None
    service_charge: str | None = None
    lease_term: str | None = None

    public_right_of_way_obligation: OptionalFlag = None
    private_right_of_way_obligation: OptionalFlag = None
    listed_property: OptionalFlag = None
    restrictions: OptionalFlag = None
    flood_defences: OptionalFlag = None
    flooded_in_last_five_years: OptionalFlag = None
    flood_sources: StrList = Field(default_factory=list)

    nearest_stations: list[Station] | None = None
    nearby_schools: list[School] | None = None
    sale_history: list[SaleHistoryEntry] = Field(default_factory=list)

    # Resolved by the crime provider: a rating word or a 0-100 crime score.
    crime_rating: str | float | None = None


class FloodRisk(BaseModel):
    model_config = _CAMEL_CONFIG

    flooded_in_last_five_years: OptionalFlag = None
    flood_defences: OptionalFlag = None
    flood_sources: StrList = Field(default_factory=list)
    risk_level: str | None = None


class PlanningApplication(BaseModel):
    model_config = _CAMEL_CONFIG

    reference: str | None = None
    description: str | None = None
    status: str | None = None
    decision: str | None = None

    @property
    def summary(self) -> str:
        parts = [p for p in (self.reference, self.description, self.decision or self.status) if p]
        return " - ".join(parts) if parts else "Planning application"


class MobileCoverage(BaseModel):
    """Per-network coverage ratings on a 0-4 scale."""

    model_config = _CAMEL_CONFIG

    network: str
    data_indoor_4g: float | None = Field(default=None, ge=0, le=4)
    data_outdoor_4g: float | None = Field(default=None, ge=0, le=4)
    data_indoor_no_4g: float | None = Field(default=None, ge=0, le=4)
    data_outdoor_no_4g: float | None = Field(default=None, ge=0, le=4)


class PremiumData(BaseModel):
    """Enrichment from the premium street-data provider.

    Every field is optional: the provider omits what it does not know.
    Ratio fields (yield, propensities, turnover) may arrive as fractions or
    as percentages; the scorers normalise them.
    """

    model_config = _CAMEL_CONFIG

    flood_risk: FloodRisk | None = None
    planning_applications: list[PlanningApplication] | None = None
    nearby_planning_applications: list[PlanningApplication] | None = None
    mobile_coverage: list[MobileCoverage] | None = None
    occupancy_type: str | None = None
    broadband_max_download_mbps: float | None = Field(default=None, ge=0)

    construction_age_band: str | None = None
    floor_material: str | None = None
    wall_material: str | None = None
    roof_material: str | None = None
    building_safety: list[str] | None = None

    conservation_area: OptionalFlag = None
    listed_building: OptionalFlag = None
    mining_impact: OptionalFlag = None
    airport_noise_category: str | None = None
    coastal_erosion_risk: str | None = None
    restrictive_covenants: list[str] | None = None
    lease_remaining_months: int | None = Field(default=None, ge=0)

    estimated_sale_value: float | None = Field(default=None, ge=0)
    outcode_avg_sales_price: float | None = Field(default=None, ge=0)
    estimated_annual_rental_yield: float | None = None
    propensity_to_sell: float | None = None
    propensity_to_let: float | None = None
    market_turnover_rate: float | None = None
