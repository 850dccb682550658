"""Build checklist items from scraped, sales and premium data."""

from collections.abc import Sequence
from datetime import date

from property_checklist.checklist.helpers import (
    flag_status,
    format_lease_term,
    is_unanswered,
    listing_history_details,
    text_status,
    text_value,
    yes_no_value,
)
from property_checklist.logging import get_logger
from property_checklist.models import (
    ChecklistItem,
    ChecklistKey,
    DataStatus,
    ExtractedPropertyData,
    NoValue,
    PlanningApplication,
    PremiumData,
    PropertyGroup,
    SalesInsights,
    School,
    Station,
)
from property_checklist.sales_insights import (
    PRICE_DISCREPANCY_MESSAGES,
    cagr_status,
    format_cagr,
    volatility_status,
)
from property_checklist.scoring import constants as c
from property_checklist.scoring.normalizers import (
    broadband_score,
    classify_safety_term,
    crime_risk_multiplier,
    flood_level_multiplier,
    mobile_coverage_label,
    mobile_coverage_score,
    nearby_schools_score,
)
from property_checklist.scoring.parsing import extract_mbps, parse_lease_months, parse_percentage

logger = get_logger(__name__)

G = PropertyGroup
K = ChecklistKey

# Items that only the premium provider supplies.
PREMIUM_KEYS: tuple[ChecklistKey, ...] = (
    K.DETAILED_FLOOD_RISK_ASSESSMENT,
    K.PLANNING_PERMISSIONS,
    K.NEARBY_PLANNING_PERMISSIONS,
    K.MOBILE_SERVICE_COVERAGE,
    K.OCCUPANCY_STATUS,
    K.CONSTRUCTION_AGE_BAND,
    K.FLOOR_MATERIAL,
    K.WALL_MATERIAL,
    K.ROOF_MATERIAL,
    K.BUILDING_SAFETY,
    K.CONSERVATION_AREA,
    K.AIRPORT_NOISE_ASSESSMENT,
    K.COASTAL_EROSION,
    K.MINING_IMPACT,
    K.RESTRICTIVE_COVENANTS,
    K.ESTIMATED_SALE_VALUE,
    K.OUTCODE_AVG_SALES_PRICE,
    K.ESTIMATED_ANNUAL_RENTAL_YIELD,
    K.PROPENSITY_TO_SELL,
    K.PROPENSITY_TO_LET,
    K.MARKET_TURNOVER_RATE,
)

SALES_KEYS: tuple[ChecklistKey, ...] = (
    K.PRICE_DISCREPANCY,
    K.COMPOUND_ANNUAL_GROWTH_RATE,
    K.VOLATILITY,
)

# key -> (group, label, ask-agent message)
ITEM_META: dict[ChecklistKey, tuple[PropertyGroup, str, str]] = {
    K.PRICE: (G.GENERAL, "Price", "What's the price?"),
    K.LOCATION: (G.GENERAL, "Location", "Where's the property located?"),
    K.PROPERTY_TYPE: (G.GENERAL, "Property Type", "What's the property type?"),
    K.TENURE: (G.GENERAL, "Tenure", "What's the tenure?"),
    K.LISTING_HISTORY: (G.GENERAL, "Listing history", "What's the listing history?"),
    K.ACCESSIBILITY: (G.GENERAL, "Accessibility", "Is the property accessible-friendly?"),
    K.OCCUPANCY_STATUS: (G.GENERAL, "Occupancy status", "Who currently occupies the property?"),
    K.BEDROOMS: (G.INTERIOR, "Bedrooms", "How many bedrooms?"),
    K.BATHROOMS: (G.INTERIOR, "Bathrooms", "How many bathrooms?"),
    K.HEATING_TYPE: (G.INTERIOR, "Heating Type", "What's the heating type?"),
    K.SIZE: (G.INTERIOR, "Size", "What's the size?"),
    K.FLOOR_PLAN: (G.INTERIOR, "Floor Plan", "Do you have a floor plan?"),
    K.PARKING: (G.EXTERIOR, "Parking", "Is there parking?"),
    K.GARDEN: (G.EXTERIOR, "Garden", "Is there a garden?"),
    K.WINDOWS: (G.EXTERIOR, "Windows", "Windows - material & glazing?"),
    K.EPC: (G.UTILITIES, "EPC Certificate", "Do you have the EPC certificate?"),
    K.COUNCIL_TAX: (G.UTILITIES, "Council Tax Band", "What council tax band?"),
    K.BROADBAND: (G.UTILITIES, "Broadband", "How's the broadband?"),
    K.MOBILE_SERVICE_COVERAGE: (
        G.UTILITIES,
        "Mobile coverage",
        "How is the mobile signal inside the property?",
    ),
    K.GROUND_RENT: (G.UTILITIES, "Ground rent", "What is the annual ground rent?"),
    K.SERVICE_CHARGE: (G.UTILITIES, "Service charge", "What is the annual service charge?"),
    K.LEASE_TERM: (G.RIGHTS_AND_RESTRICTIONS, "Lease term", "How long is left on the lease?"),
    K.PUBLIC_RIGHT_OF_WAY: (
        G.RIGHTS_AND_RESTRICTIONS,
        "Public right of way obligation",
        "Public right of way obligation?",
    ),
    K.PRIVATE_RIGHT_OF_WAY: (
        G.RIGHTS_AND_RESTRICTIONS,
        "Private right of way obligation",
        "Private right of way obligation?",
    ),
    K.LISTED_PROPERTY: (G.RIGHTS_AND_RESTRICTIONS, "Listed property", "Is the property listed?"),
    K.RESTRICTIONS: (G.RIGHTS_AND_RESTRICTIONS, "Restrictions", "Any restrictions?"),
    K.RESTRICTIVE_COVENANTS: (
        G.RIGHTS_AND_RESTRICTIONS,
        "Restrictive covenants",
        "Are there any restrictive covenants on the title?",
    ),
    K.PLANNING_PERMISSIONS: (
        G.RIGHTS_AND_RESTRICTIONS,
        "Planning permissions",
        "Are there any planning applications on the property?",
    ),
    K.NEARBY_PLANNING_PERMISSIONS: (
        G.RIGHTS_AND_RESTRICTIONS,
        "Nearby planning permissions",
        "Are there planning applications nearby that could affect the property?",
    ),
    K.CONSERVATION_AREA: (
        G.RIGHTS_AND_RESTRICTIONS,
        "Conservation area",
        "Is the property in a conservation area?",
    ),
    K.FLOOD_DEFENCES: (G.RISKS, "Flood Defences", "Any flood defences?"),
    K.FLOOD_SOURCES: (G.RISKS, "Flood Sources", "Any flood sources?"),
    K.FLOODED_IN_LAST_FIVE_YEARS: (G.RISKS, "Flooded in last 5 years", "Flooded in last 5 years?"),
    K.DETAILED_FLOOD_RISK_ASSESSMENT: (
        G.RISKS,
        "Flood risk assessment",
        "Has a flood risk assessment been carried out?",
    ),
    K.BUILDING_SAFETY: (G.RISKS, "Building safety", "Are there any known building safety issues?"),
    K.COASTAL_EROSION: (G.RISKS, "Coastal erosion", "Is the property at risk of coastal erosion?"),
    K.MINING_IMPACT: (G.RISKS, "Mining impact", "Is the area affected by past mining?"),
    K.AIRPORT_NOISE_ASSESSMENT: (
        G.RISKS,
        "Airport noise",
        "How much aircraft noise affects the property?",
    ),
    K.CRIME_SCORE: (G.NEIGHBOURHOOD, "Crime score", "How safe is the area?"),
    K.NEAREST_STATIONS: (G.NEIGHBOURHOOD, "Nearest stations", "Which stations are nearby?"),
    K.NEARBY_SCHOOLS: (G.NEIGHBOURHOOD, "Nearby schools", "Which schools are nearby?"),
    K.CONSTRUCTION_AGE_BAND: (
        G.CONSTRUCTION,
        "Construction age",
        "When was the property built?",
    ),
    K.FLOOR_MATERIAL: (G.CONSTRUCTION, "Floor construction", "What are the floors made of?"),
    K.WALL_MATERIAL: (G.CONSTRUCTION, "Wall construction", "What are the walls made of?"),
    K.ROOF_MATERIAL: (G.CONSTRUCTION, "Roof construction", "What is the roof made of?"),
    K.PRICE_DISCREPANCY: (G.INVESTMENT, "Price discrepancy", ""),
    K.COMPOUND_ANNUAL_GROWTH_RATE: (
        G.INVESTMENT,
        "Compound annual growth rate",
        "Why has the property grown slowly in value?",
    ),
    K.VOLATILITY: (
        G.INVESTMENT,
        "Volatility",
        "Why has the sale price of this property fluctuated so much?",
    ),
    K.ESTIMATED_SALE_VALUE: (G.INVESTMENT, "Estimated sale value", ""),
    K.OUTCODE_AVG_SALES_PRICE: (G.INVESTMENT, "Area average sale price", ""),
    K.ESTIMATED_ANNUAL_RENTAL_YIELD: (G.INVESTMENT, "Estimated rental yield", ""),
    K.PROPENSITY_TO_SELL: (G.INVESTMENT, "Propensity to sell", ""),
    K.PROPENSITY_TO_LET: (G.INVESTMENT, "Propensity to let", ""),
    K.MARKET_TURNOVER_RATE: (G.INVESTMENT, "Market turnover rate", ""),
}

assert set(ITEM_META) == set(ChecklistKey), "ITEM_META out of sync with ChecklistKey"


def make_item(
    key: ChecklistKey,
    value: object,
    status: DataStatus,
    *,
    score: float | None = None,
    tooltip: str | None = None,
    ask_agent_message: str | None = None,
) -> ChecklistItem:
    group, label, default_message = ITEM_META[key]
    return ChecklistItem(
        key=key,
        group=group,
        label=label,
        value=value,
        status=status,
        score=score,
        tooltip=tooltip,
        ask_agent_message=default_message if ask_agent_message is None else ask_agent_message,
    )


def loading_item(key: ChecklistKey) -> ChecklistItem:
    return make_item(key, None, DataStatus.IS_LOADING)


def _text_item(key: ChecklistKey, value: str | None) -> ChecklistItem:
    return make_item(key, text_value(value), text_status(value))


def _count_item(key: ChecklistKey, count: int | None) -> ChecklistItem:
    if count is None:
        return make_item(key, NoValue.NOT_MENTIONED, DataStatus.ASK_AGENT)
    return make_item(key, count, DataStatus.FOUND_POSITIVE)


def _flag_item(key: ChecklistKey, flag: bool | None, *, yes_is_concern: bool) -> ChecklistItem:
    return make_item(key, yes_no_value(flag), flag_status(flag, yes_is_concern=yes_is_concern))


def _override(scraped: bool | None, premium_value: bool | None) -> bool | None:
    return premium_value if premium_value is not None else scraped


# ── Listing items ──────────────────────────────────────────────────────────────


def _council_tax_item(council_tax: str | None) -> ChecklistItem:
    unanswered = is_unanswered(council_tax) or (council_tax or "").strip().lower() == "tbc"
    status = DataStatus.ASK_AGENT if unanswered else DataStatus.FOUND_POSITIVE
    return make_item(K.COUNCIL_TAX, text_value(council_tax), status)


def _broadband_item(scraped: str | None, premium: PremiumData | None) -> ChecklistItem:
    if premium is not None and premium.broadband_max_download_mbps is not None:
        mbps = premium.broadband_max_download_mbps
        score, status = broadband_score(mbps)
        return make_item(K.BROADBAND, f"{mbps:g} Mbps", status, score=score)
    if is_unanswered(scraped):
        return make_item(K.BROADBAND, NoValue.NOT_MENTIONED, DataStatus.ASK_AGENT)
    score, status = broadband_score(extract_mbps(scraped))
    return make_item(K.BROADBAND, text_value(scraped), status, score=score)


def _lease_item(
    tenure: str | None, lease_term: str | None, premium: PremiumData | None
) -> ChecklistItem:
    months = premium.lease_remaining_months if premium is not None else None
    if months is None:
        months = parse_lease_months(lease_term)
    is_leasehold = tenure is not None and "leasehold" in tenure.lower()

    if months is not None:
        status = (
            DataStatus.ASK_AGENT
            if is_leasehold and months < c.SHORT_LEASE_MONTHS
            else DataStatus.FOUND_POSITIVE
        )
        return make_item(K.LEASE_TERM, format_lease_term(months), status, score=months)
    if is_leasehold or is_unanswered(tenure):
        return make_item(K.LEASE_TERM, NoValue.NOT_MENTIONED, DataStatus.ASK_AGENT)
    return make_item(K.LEASE_TERM, NoValue.NOT_APPLICABLE, DataStatus.FOUND_POSITIVE)


def _stations_item(stations: Sequence[Station] | None) -> ChecklistItem:
    if stations is None:
        return make_item(K.NEAREST_STATIONS, NoValue.NOT_MENTIONED, DataStatus.ASK_AGENT)
    if not stations:
        return make_item(K.NEAREST_STATIONS, NoValue.NONE_FOUND, DataStatus.ASK_AGENT)
    names = [
        f"{s.name} ({s.distance_miles:.1f} mi)" if s.distance_miles is not None else s.name
        for s in stations
    ]
    return make_item(K.NEAREST_STATIONS, names, DataStatus.FOUND_POSITIVE)


def _schools_item(schools: Sequence[School] | None) -> ChecklistItem:
    if schools is None:
        return make_item(K.NEARBY_SCHOOLS, NoValue.NOT_MENTIONED, DataStatus.ASK_AGENT)
    score = nearby_schools_score(schools)
    if not schools:
        return make_item(K.NEARBY_SCHOOLS, NoValue.NONE_FOUND, DataStatus.ASK_AGENT, score=score)
    names = [f"{s.name} ({s.ofsted_rating})" if s.ofsted_rating else s.name for s in schools]
    return make_item(K.NEARBY_SCHOOLS, names, DataStatus.FOUND_POSITIVE, score=score)


def _crime_item(rating: str | float | None) -> ChecklistItem:
    if rating is None or (isinstance(rating, str) and is_unanswered(rating)):
        return make_item(K.CRIME_SCORE, NoValue.NOT_AVAILABLE, DataStatus.ASK_AGENT)
    high = crime_risk_multiplier(rating) >= c.CRIME_RATING_MULTIPLIERS["high"]
    status = DataStatus.ASK_AGENT if high else DataStatus.FOUND_POSITIVE
    return make_item(K.CRIME_SCORE, rating, status)


def _flood_items(
    extracted: ExtractedPropertyData, premium: PremiumData | None
) -> list[ChecklistItem]:
    flood = premium.flood_risk if premium is not None else None
    defences = extracted.flood_defences
    flooded = extracted.flooded_in_last_five_years
    sources = list(extracted.flood_sources)
    if flood is not None:
        defences = _override(defences, flood.flood_defences)
        flooded = _override(flooded, flood.flooded_in_last_five_years)
        sources = list(flood.flood_sources) or sources

    return [
        _flag_item(K.FLOOD_DEFENCES, defences, yes_is_concern=False),
        make_item(
            K.FLOOD_SOURCES,
            sources if sources else NoValue.NOT_MENTIONED,
            DataStatus.FOUND_POSITIVE if sources else DataStatus.ASK_AGENT,
        ),
        _flag_item(K.FLOODED_IN_LAST_FIVE_YEARS, flooded, yes_is_concern=True),
    ]


def listing_items(
    extracted: ExtractedPropertyData, premium: PremiumData | None, *, today: date
) -> list[ChecklistItem]:
    """Items derived from the scraped listing, with premium overrides applied."""
    e = extracted
    history_status, history_value = listing_history_details(e.listing_history, today=today)
    listed = _override(e.listed_property, premium.listed_building if premium else None)

    return [
        _text_item(K.PRICE, e.price),
        _text_item(K.LOCATION, e.location),
        _text_item(K.PROPERTY_TYPE, e.property_type),
        _text_item(K.TENURE, e.tenure),
        make_item(K.LISTING_HISTORY, history_value, history_status),
        _text_item(K.ACCESSIBILITY, e.accessibility),
        _count_item(K.BEDROOMS, e.bedrooms),
        _count_item(K.BATHROOMS, e.bathrooms),
        _text_item(K.HEATING_TYPE, e.heating),
        _text_item(K.SIZE, e.size),
        _text_item(K.FLOOR_PLAN, e.floor_plan),
        _text_item(K.PARKING, e.parking),
        _text_item(K.GARDEN, e.garden),
        _text_item(K.WINDOWS, e.windows),
        _text_item(K.EPC, e.epc),
        _council_tax_item(e.council_tax),
        _broadband_item(e.broadband, premium),
        _text_item(K.GROUND_RENT, e.ground_rent),
        _text_item(K.SERVICE_CHARGE, e.service_charge),
        _lease_item(e.tenure, e.lease_term, premium),
        _flag_item(K.PUBLIC_RIGHT_OF_WAY, e.public_right_of_way_obligation, yes_is_concern=True),
        _flag_item(K.PRIVATE_RIGHT_OF_WAY, e.private_right_of_way_obligation, yes_is_concern=True),
        _flag_item(K.LISTED_PROPERTY, listed, yes_is_concern=True),
        _flag_item(K.RESTRICTIONS, e.restrictions, yes_is_concern=True),
        *_flood_items(e, premium),
        _stations_item(e.nearest_stations),
        _schools_item(e.nearby_schools),
        _crime_item(e.crime_rating),
    ]


# ── Sales items ────────────────────────────────────────────────────────────────


def sales_items(sales: SalesInsights) -> list[ChecklistItem]:
    """Price discrepancy, CAGR and volatility items."""
    messages = PRICE_DISCREPANCY_MESSAGES[sales.reason]
    discrepancy = make_item(
        K.PRICE_DISCREPANCY,
        sales.value,
        sales.status,
        tooltip=messages.tooltip,
        ask_agent_message=messages.ask_agent_message,
    )

    if sales.cagr is not None:
        cagr = make_item(
            K.COMPOUND_ANNUAL_GROWTH_RATE,
            format_cagr(sales.cagr),
            cagr_status(sales.cagr),
            score=sales.cagr,
        )
    elif sales.most_recent_sale is None:
        cagr = make_item(
            K.COMPOUND_ANNUAL_GROWTH_RATE, NoValue.NO_SALES_HISTORY, DataStatus.FOUND_POSITIVE
        )
    else:
        cagr = make_item(K.COMPOUND_ANNUAL_GROWTH_RATE, NoValue.NOT_AVAILABLE, DataStatus.ASK_AGENT)

    vol_ratio = parse_percentage(sales.volatility)
    volatility = make_item(
        K.VOLATILITY,
        sales.volatility,
        volatility_status(sales.volatility),
        score=vol_ratio,
    )
    return [discrepancy, cagr, volatility]


# ── Premium items ──────────────────────────────────────────────────────────────


def _planning_item(
    key: ChecklistKey, applications: Sequence[PlanningApplication] | None, none_text: str
) -> ChecklistItem:
    if applications is None:
        return make_item(key, NoValue.NOT_AVAILABLE, DataStatus.ASK_AGENT)
    if not applications:
        return make_item(key, none_text, DataStatus.FOUND_POSITIVE)
    return make_item(key, [a.summary for a in applications], DataStatus.FOUND_POSITIVE)


def _money_item(key: ChecklistKey, amount: float | None) -> ChecklistItem:
    if amount is None:
        return make_item(key, NoValue.NOT_AVAILABLE, DataStatus.ASK_AGENT)
    return make_item(key, f"£{amount:,.0f}", DataStatus.FOUND_POSITIVE, score=amount)


def _ratio_item(key: ChecklistKey, raw: float | None) -> ChecklistItem:
    ratio = parse_percentage(raw)
    if ratio is None:
        return make_item(key, NoValue.NOT_AVAILABLE, DataStatus.ASK_AGENT)
    return make_item(key, f"{ratio * 100:.1f}%", DataStatus.FOUND_POSITIVE, score=ratio)


def _premium_text_item(key: ChecklistKey, value: str | None) -> ChecklistItem:
    if value is None or not value.strip():
        return make_item(key, NoValue.NOT_AVAILABLE, DataStatus.ASK_AGENT)
    return make_item(key, value.strip(), DataStatus.FOUND_POSITIVE)


def _building_safety_item(terms: Sequence[str] | None) -> ChecklistItem:
    if terms is None:
        return make_item(K.BUILDING_SAFETY, NoValue.NOT_AVAILABLE, DataStatus.ASK_AGENT)
    if not terms:
        return make_item(K.BUILDING_SAFETY, "No issues reported", DataStatus.FOUND_POSITIVE)
    concerning = any(classify_safety_term(t) in ("severe", "negative") for t in terms)
    status = DataStatus.ASK_AGENT if concerning else DataStatus.FOUND_POSITIVE
    return make_item(K.BUILDING_SAFETY, list(terms), status)


def _mobile_item(premium: PremiumData) -> ChecklistItem:
    if not premium.mobile_coverage:
        return make_item(K.MOBILE_SERVICE_COVERAGE, NoValue.NOT_AVAILABLE, DataStatus.ASK_AGENT)
    score = mobile_coverage_score(premium.mobile_coverage)
    label = mobile_coverage_label(score)
    status = DataStatus.FOUND_POSITIVE if score >= 50 else DataStatus.ASK_AGENT
    return make_item(K.MOBILE_SERVICE_COVERAGE, f"{label} ({score}/100)", status, score=score)


def _flood_assessment_item(premium: PremiumData) -> ChecklistItem:
    level = premium.flood_risk.risk_level if premium.flood_risk is not None else None
    if level is None or not level.strip():
        return make_item(K.DETAILED_FLOOD_RISK_ASSESSMENT, NoValue.NOT_AVAILABLE, DataStatus.ASK_AGENT)
    multiplier = flood_level_multiplier(level)
    status = (
        DataStatus.ASK_AGENT
        if multiplier is not None and multiplier >= 0.75
        else DataStatus.FOUND_POSITIVE
    )
    return make_item(K.DETAILED_FLOOD_RISK_ASSESSMENT, level.strip(), status)


def _covenants_item(covenants: Sequence[str] | None) -> ChecklistItem:
    if covenants is None:
        return make_item(K.RESTRICTIVE_COVENANTS, NoValue.NOT_AVAILABLE, DataStatus.ASK_AGENT)
    if not covenants:
        return make_item(K.RESTRICTIVE_COVENANTS, "No", DataStatus.FOUND_POSITIVE)
    return make_item(K.RESTRICTIVE_COVENANTS, list(covenants), DataStatus.FOUND_POSITIVE)


def premium_items(premium: PremiumData) -> list[ChecklistItem]:
    """Items available only with premium data."""
    p = premium
    return [
        _flood_assessment_item(p),
        _planning_item(K.PLANNING_PERMISSIONS, p.planning_applications, "No applications found"),
        _planning_item(
            K.NEARBY_PLANNING_PERMISSIONS,
            p.nearby_planning_applications,
            "No nearby applications found",
        ),
        _mobile_item(p),
        _premium_text_item(K.OCCUPANCY_STATUS, p.occupancy_type),
        _premium_text_item(K.CONSTRUCTION_AGE_BAND, p.construction_age_band),
        _premium_text_item(K.FLOOR_MATERIAL, p.floor_material),
        _premium_text_item(K.WALL_MATERIAL, p.wall_material),
        _premium_text_item(K.ROOF_MATERIAL, p.roof_material),
        _building_safety_item(p.building_safety),
        _flag_item(K.CONSERVATION_AREA, p.conservation_area, yes_is_concern=True),
        _premium_text_item(K.AIRPORT_NOISE_ASSESSMENT, p.airport_noise_category),
        _premium_text_item(K.COASTAL_EROSION, p.coastal_erosion_risk),
        _flag_item(K.MINING_IMPACT, p.mining_impact, yes_is_concern=True),
        _covenants_item(p.restrictive_covenants),
        _money_item(K.ESTIMATED_SALE_VALUE, p.estimated_sale_value),
        _money_item(K.OUTCODE_AVG_SALES_PRICE, p.outcode_avg_sales_price),
        _ratio_item(K.ESTIMATED_ANNUAL_RENTAL_YIELD, p.estimated_annual_rental_yield),
        _ratio_item(K.PROPENSITY_TO_SELL, p.propensity_to_sell),
        _ratio_item(K.PROPENSITY_TO_LET, p.propensity_to_let),
        _ratio_item(K.MARKET_TURNOVER_RATE, p.market_turnover_rate),
    ]


# ── Assembly ───────────────────────────────────────────────────────────────────


def build_checklist(
    extracted: ExtractedPropertyData,
    premium: PremiumData | None = None,
    sales: SalesInsights | None = None,
    *,
    premium_loading: bool = False,
    sales_loading: bool = False,
    today: date | None = None,
) -> list[ChecklistItem]:
    """Assemble the full checklist for one listing.

    Args:
        extracted: Scraped listing fields.
        premium: Premium provider data, if purchased and resolved.
        sales: Sales insights, if calculated.
        premium_loading: Premium data is still in flight; its items are IS_LOADING.
        sales_loading: Sale history is still in flight; its items are IS_LOADING.
        today: Reference date for listing-age checks; defaults to today.

    Returns:
        A fresh list of immutable checklist items.
    """
    reference = today or date.today()
    items = listing_items(extracted, None if premium_loading else premium, today=reference)

    if sales_loading:
        items.extend(loading_item(key) for key in SALES_KEYS)
    elif sales is not None:
        items.extend(sales_items(sales))

    if premium_loading:
        items.extend(loading_item(key) for key in PREMIUM_KEYS)
    elif premium is not None:
        items.extend(premium_items(premium))

    logger.debug(
        "checklist_built",
        items=len(items),
        premium=premium is not None,
        premium_loading=premium_loading,
        sales_loading=sales_loading,
    )
    return items
