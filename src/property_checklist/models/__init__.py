"""Data models for the checklist and scoring engine."""

from property_checklist.models.core import (
    CATEGORY_DISPLAY_NAMES,
    CalculationStatus,
    CategoryScoreData,
    ChecklistItem,
    ChecklistKey,
    DashboardScore,
    DashboardScoreCategory,
    DashboardScores,
    DataStatus,
    ItemValue,
    NoValue,
    PriceDiscrepancyReason,
    PropertyGroup,
    as_no_value,
)
from property_checklist.models.inputs import (
    ExtractedPropertyData,
    FloodRisk,
    MobileCoverage,
    PlanningApplication,
    PremiumData,
    School,
    Station,
)
from property_checklist.models.sales import (
    PriceDiscrepancyResult,
    SaleHistoryEntry,
    SalesInsights,
)

__all__ = [
    "CATEGORY_DISPLAY_NAMES",
    "CalculationStatus",
    "CategoryScoreData",
    "ChecklistItem",
    "ChecklistKey",
    "DashboardScore",
    "DashboardScoreCategory",
    "DashboardScores",
    "DataStatus",
    "ExtractedPropertyData",
    "FloodRisk",
    "ItemValue",
    "MobileCoverage",
    "NoValue",
    "PlanningApplication",
    "PremiumData",
    "PriceDiscrepancyReason",
    "PriceDiscrepancyResult",
    "PropertyGroup",
    "SaleHistoryEntry",
    "SalesInsights",
    "School",
    "Station",
    "as_no_value",
]
