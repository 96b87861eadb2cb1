"""
Stock alerts: one notice per item that needs attention.

Only the alert content is produced here.  Delivering it (push, email) is
left to the caller.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from inventory_tracker.forecast.status import classify_status
from inventory_tracker.models.item import InventoryItem
from inventory_tracker.taxonomy.inventory_taxonomy import ItemStatus

_TITLES: dict[ItemStatus, str] = {
    ItemStatus.OUT_OF_STOCK: "Out of Stock!",
    ItemStatus.LOW:          "Low Stock Warning",
}


@dataclass(frozen=True)
class StockAlert:
    item_id: int | None
    status:  ItemStatus
    title:   str
    message: str


def derive_stock_alerts(items: Iterable[InventoryItem]) -> list[StockAlert]:
    """Return an alert for every Low or Out of Stock item, in input order."""
    alerts: list[StockAlert] = []
    for item in items:
        status = classify_status(item)
        if status is ItemStatus.HEALTHY:
            continue
        alerts.append(
            StockAlert(
                item_id=item.item_id,
                status=status,
                title=_TITLES[status],
                message=f"{item.name} needs attention ({item.current_stock} left)",
            )
        )
    return alerts
