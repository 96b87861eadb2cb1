"""
Inventory item model.

``InventoryItem`` is the stored record for one stocked product.  Only raw
fields are persisted; ``status`` and ``days_until_stockout`` are derived on
read through the forecast engine so they always reflect the current stock.

Validation here is the data-entry boundary: once an ``InventoryItem`` exists,
the engine trusts that ``current_stock >= 0``, ``reorder_level >= 1`` and
that ``daily_usage`` is a finite, non-negative number.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from inventory_tracker.taxonomy.inventory_taxonomy import ItemCategory, ItemStatus

if TYPE_CHECKING:
    from inventory_tracker.forecast.stockout import StockoutProjection


class InventoryItem(BaseModel):
    """A stocked item with its reorder threshold and usage rate.

    Attributes:
        item_id: Auto-assigned database PK; ``None`` before DB insertion.
        name: Display name (non-empty).
        category: One of the fixed ``ItemCategory`` values.
        current_stock: Units on hand; never negative.
        reorder_level: Stock at or below this is "Low"; at least 1.
        daily_usage: Estimated average units consumed per day.
        unit_price: Informational unit cost.
        supplier_id: Optional supplier reference.  Not enforced; deleting a
            supplier leaves the id in place.
        sku: Optional stock-keeping unit code.
        description: Optional free-form text.
    """

    model_config = ConfigDict(frozen=True)

    item_id: Optional[int] = None
    name: str
    category: ItemCategory
    current_stock: int = 0
    reorder_level: int
    daily_usage: float = 0.0
    unit_price: float = 0.0
    supplier_id: Optional[int] = None
    sku: Optional[str] = None
    description: Optional[str] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("name must not be empty.")
        return v.strip()

    @field_validator("current_stock")
    @classmethod
    def validate_stock(cls, v: int) -> int:
        if v < 0:
            raise ValueError(f"current_stock must be non-negative, got {v}.")
        return v

    @field_validator("reorder_level")
    @classmethod
    def validate_reorder_level(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"reorder_level must be >= 1, got {v}.")
        return v

    @field_validator("daily_usage", "unit_price")
    @classmethod
    def validate_non_negative(cls, v: float) -> float:
        if not math.isfinite(v):
            raise ValueError(f"value must be a finite number, got {v}.")
        if v < 0:
            raise ValueError(f"value must be non-negative, got {v}.")
        return v

    @field_validator("sku", "description")
    @classmethod
    def blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = v.strip()
        return v or None

    @property
    def status(self) -> ItemStatus:
        """Current stock health tier."""
        from inventory_tracker.forecast.status import classify_status

        return classify_status(self)

    @property
    def days_until_stockout(self) -> "StockoutProjection":
        """Linear burn-down projection at the current usage rate."""
        from inventory_tracker.forecast.stockout import days_until_stockout

        return days_until_stockout(self)
