"""Lookup helpers shared by the category scorers."""

from collections.abc import Iterable, Mapping, Sequence

from property_checklist.models import ChecklistItem, ChecklistKey


def find_item(items: Sequence[ChecklistItem], key: ChecklistKey) -> ChecklistItem | None:
    """Return the first item with ``key``, or None."""
    return next((item for item in items if item.key == key), None)


def present_item(items: Sequence[ChecklistItem], key: ChecklistKey) -> ChecklistItem | None:
    """Return the item with ``key`` only if it carries usable, resolved data.

    Loading items and items holding a "no data" value count as absent.
    """
    item = find_item(items, key)
    if item is None or item.is_absent:
        return None
    return item


def keys_present(
    items: Sequence[ChecklistItem], keys: Iterable[ChecklistKey]
) -> tuple[ChecklistKey, ...]:
    """Keys from ``keys`` whose items are present, in the given order."""
    return tuple(k for k in keys if present_item(items, k) is not None)


def weighted_mean(components: Mapping[str, float], weights: Mapping[str, float]) -> float:
    """Weighted mean of the available components, renormalising the weights.

    Raises:
        ValueError: If no component has a positive weight.
    """
    total_weight = sum(weights[name] for name in components)
    if total_weight <= 0:
        raise ValueError("weighted_mean needs at least one weighted component")
    return sum(value * weights[name] for name, value in components.items()) / total_weight
