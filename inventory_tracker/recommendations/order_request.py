"""
Order request builder.

Lists every item that is Low or Out of Stock with a suggested order quantity
of ``max(reorder_level * 2, 10)`` units.  Lines keep inventory order.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Mapping, Optional

from inventory_tracker.forecast.status import classify_status
from inventory_tracker.models.item import InventoryItem
from inventory_tracker.models.supplier import Supplier
from inventory_tracker.taxonomy.inventory_taxonomy import ItemStatus

MIN_ORDER_QUANTITY = 10
REORDER_MULTIPLIER = 2


@dataclass(frozen=True)
class OrderLine:
    """One line of an order request.

    Attributes:
        item:           The item to reorder.
        status:         Low or Out of Stock.
        order_quantity: Units to order.
        supplier_name:  Resolved supplier name, or ``None`` if unknown.
        estimated_cost: ``order_quantity * unit_price``.
    """

    item:           InventoryItem
    status:         ItemStatus
    order_quantity: int
    supplier_name:  Optional[str]
    estimated_cost: float


def order_quantity(item: InventoryItem) -> int:
    """Suggested units to order for ``item``."""
    return max(item.reorder_level * REORDER_MULTIPLIER, MIN_ORDER_QUANTITY)


def build_order_request(
    items: Iterable[InventoryItem],
    suppliers: Optional[Iterable[Supplier]] = None,
) -> list[OrderLine]:
    """Build order lines for all items needing a reorder.

    Args:
        items:     Inventory items.
        suppliers: Optional suppliers used to resolve names.  Dangling
                   ``supplier_id`` values resolve to ``None``.
    """
    lookup: Mapping[int, str] = {
        s.supplier_id: s.name for s in (suppliers or []) if s.supplier_id is not None
    }

    lines: list[OrderLine] = []
    for item in items:
        status = classify_status(item)
        if status is ItemStatus.HEALTHY:
            continue
        qty = order_quantity(item)
        lines.append(
            OrderLine(
                item=item,
                status=status,
                order_quantity=qty,
                supplier_name=lookup.get(item.supplier_id) if item.supplier_id is not None else None,
                estimated_cost=round(qty * item.unit_price, 2),
            )
        )
    return lines


def order_total(lines: Iterable[OrderLine]) -> float:
    """Sum of estimated line costs."""
    return round(sum(line.estimated_cost for line in lines), 2)
