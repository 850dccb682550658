"""Checklist item construction."""

from property_checklist.checklist.builder import (
    PREMIUM_KEYS,
    SALES_KEYS,
    build_checklist,
    listing_items,
    premium_items,
    sales_items,
)
from property_checklist.checklist.category_map import CATEGORY_ITEM_MAP, items_for_category

__all__ = [
    "CATEGORY_ITEM_MAP",
    "PREMIUM_KEYS",
    "SALES_KEYS",
    "build_checklist",
    "items_for_category",
    "listing_items",
    "premium_items",
    "sales_items",
]
