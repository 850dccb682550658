"""Shared pytest fixtures."""

import os
import sys
from collections.abc import Callable
from typing import Any

import pytest
from hypothesis import HealthCheck, settings

from property_checklist.config import Settings
from property_checklist.models import (
    ChecklistItem,
    ChecklistKey,
    DataStatus,
    ExtractedPropertyData,
    PremiumData,
    PropertyGroup,
)


def pytest_configure(config: pytest.Config) -> None:
    """Force line-buffered stdout when piped."""
    if hasattr(sys.stdout, "reconfigure") and not sys.stdout.isatty():
        sys.stdout.reconfigure(line_buffering=True)
    if hasattr(sys.stderr, "reconfigure") and not sys.stderr.isatty():
        sys.stderr.reconfigure(line_buffering=True)


# Hypothesis settings profiles for different environments
settings.register_profile("fast", max_examples=10)
settings.register_profile(
    "ci",
    max_examples=200,
    suppress_health_check=[HealthCheck.too_slow],
)
settings.register_profile(
    "mutmut",
    max_examples=10,
    suppress_health_check=[HealthCheck.too_slow, HealthCheck.differing_executors],
)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "fast"))


@pytest.fixture(autouse=True)
def _isolate_settings_from_dotenv(monkeypatch: pytest.MonkeyPatch) -> None:
    """Prevent the local .env file from leaking into test Settings instances."""
    monkeypatch.setattr(
        Settings,
        "model_config",
        {**Settings.model_config, "env_file": None},
    )


ItemFactory = Callable[..., ChecklistItem]


def _make_item(
    key: ChecklistKey,
    value: Any,
    status: DataStatus = DataStatus.FOUND_POSITIVE,
    *,
    score: float | None = None,
) -> ChecklistItem:
    return ChecklistItem(
        key=key,
        group=PropertyGroup.GENERAL,
        label=key.value,
        value=value,
        status=status,
        score=score,
    )


@pytest.fixture
def make_item() -> ItemFactory:
    """Factory for checklist items with a throwaway group and label."""
    return _make_item


@pytest.fixture
def sample_listing() -> ExtractedPropertyData:
    """A leasehold flat with most listing fields filled in."""
    return ExtractedPropertyData.model_validate(
        {
            "price": "£320,000",
            "location": "Hackney, London E8",
            "propertyType": "Flat",
            "tenure": "Leasehold",
            "listingHistory": "Added on 01/05/2024",
            "accessibility": "Lift access",
            "bedrooms": 2,
            "bathrooms": 1,
            "heating": "Gas central heating",
            "size": "650 sq ft",
            "floorPlan": "Yes",
            "parking": "Permit parking",
            "garden": "Communal garden",
            "windows": "Double glazed uPVC",
            "epc": "C",
            "councilTax": "Band C",
            "broadband": "Ultrafast 900Mb",
            "groundRent": "£150 per annum",
            "serviceCharge": "£1,200 per annum",
            "leaseTerm": "120 years remaining",
            "publicRightOfWayObligation": "No",
            "privateRightOfWayObligation": "No",
            "listedProperty": "No",
            "restrictions": "No",
            "floodDefences": "Yes",
            "floodedInLastFiveYears": "No",
            "floodSources": [],
            "nearestStations": [
                {"name": "Hackney Central", "distanceMiles": 0.3},
                {"name": "Dalston Junction", "distanceMiles": 0.6},
            ],
            "nearbySchools": [
                {"name": "Mandeville Primary", "distanceMiles": 0.0, "ofstedRating": "Good"},
            ],
            "saleHistory": [
                {"year": "2019", "soldPrice": "£280,000"},
                {"year": "2014", "soldPrice": "£220,000"},
            ],
            "crimeRating": "Moderate",
        }
    )


@pytest.fixture
def sample_premium() -> PremiumData:
    return PremiumData.model_validate(
        {
            "floodRisk": {
                "floodedInLastFiveYears": False,
                "floodDefences": True,
                "floodSources": [],
                "riskLevel": "Very low",
            },
            "planningApplications": [],
            "nearbyPlanningApplications": [
                {"reference": "2023/1234", "description": "Rear extension", "decision": "Granted"}
            ],
            "mobileCoverage": [
                {"network": "EE", "dataIndoor4g": 3, "dataOutdoor4g": 4},
                {"network": "O2", "dataIndoor4g": 2, "dataOutdoor4g": 3},
            ],
            "occupancyType": "Owner-occupied",
            "broadbandMaxDownloadMbps": 1000,
            "constructionAgeBand": "1900-1949",
            "floorMaterial": "Suspended timber",
            "wallMaterial": "Solid brick",
            "roofMaterial": "Pitched slate",
            "buildingSafety": ["Smoke alarm fitted"],
            "conservationArea": False,
            "listedBuilding": False,
            "miningImpact": False,
            "airportNoiseCategory": "None",
            "coastalErosionRisk": "No risk",
            "restrictiveCovenants": [],
            "leaseRemainingMonths": 1440,
            "estimatedSaleValue": 340000,
            "outcodeAvgSalesPrice": 450000,
            "estimatedAnnualRentalYield": 0.045,
            "propensityToSell": 0.4,
            "propensityToLet": 0.3,
            "marketTurnoverRate": 0.05,
        }
    )
