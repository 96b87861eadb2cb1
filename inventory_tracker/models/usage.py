"""
Usage record model.

A ``UsageRecord`` is written whenever stock is consumed.  ``item_name`` and
``category`` are copied from the item at record time so the history stays
readable after the item is renamed or deleted.

Usage history is append-with-compensation rather than immutable: deleting a
record puts its quantity back onto the item (see ``ledger.delete_usage``).
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from inventory_tracker.utils.time_utils import to_utc, utcnow


class UsageRecord(BaseModel):
    """One consumption event against an inventory item.

    Attributes:
        usage_id: Auto-assigned DB PK; ``None`` before insertion.
        item_id: The consumed item.  May dangle once the item is deleted.
        item_name: Item name snapshot at record time.
        category: Item category snapshot at record time.
        quantity: Units consumed; at least 1.
        used_at: When the stock was used (UTC). Defaults to now.
        notes: Optional free-form annotation.
    """

    model_config = ConfigDict(frozen=True)

    usage_id: Optional[int] = None
    item_id: int
    item_name: str
    category: str
    quantity: int
    used_at: datetime = Field(default_factory=utcnow)
    notes: Optional[str] = None

    @field_validator("quantity")
    @classmethod
    def validate_quantity(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"quantity must be >= 1, got {v}.")
        return v

    @field_validator("used_at")
    @classmethod
    def normalize_used_at(cls, v: datetime) -> datetime:
        return to_utc(v)
