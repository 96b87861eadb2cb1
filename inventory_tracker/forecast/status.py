"""
Stock status classifier.

Rules are checked in order, first match wins:

    1. current_stock == 0              -> Out of Stock
    2. current_stock <= reorder_level  -> Low
    3. otherwise                       -> Healthy

Stock equal to the reorder level counts as Low.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from inventory_tracker.taxonomy.inventory_taxonomy import ItemStatus

if TYPE_CHECKING:
    from inventory_tracker.models.item import InventoryItem


def classify_status(item: InventoryItem) -> ItemStatus:
    """Return the stock health tier of ``item``."""
    if item.current_stock == 0:
        return ItemStatus.OUT_OF_STOCK
    if item.current_stock <= item.reorder_level:
        return ItemStatus.LOW
    return ItemStatus.HEALTHY


def needs_reorder(item: InventoryItem) -> bool:
    """True when ``item`` is Low or Out of Stock."""
    return classify_status(item) is not ItemStatus.HEALTHY
