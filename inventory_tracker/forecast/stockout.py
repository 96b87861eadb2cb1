"""
Stockout estimator: whole days until an item runs out at its current rate.

The projection is a tagged value rather than a float: either a finite day
count or ``NEVER_RUNS_OUT`` when the item has no recorded consumption.  This
keeps sorting explicit; every finite projection sorts before "never".

    daily_usage <= 0   -> NEVER_RUNS_OUT
    otherwise          -> floor(current_stock / daily_usage)
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from inventory_tracker.models.item import InventoryItem

_NEVER_LABEL = "N/A"


@dataclass(frozen=True)
class StockoutProjection:
    """Days until stockout.

    Attributes:
        days: Whole days remaining, or ``None`` when the item never runs out.
    """

    days: Optional[int]

    @classmethod
    def finite(cls, days: int) -> "StockoutProjection":
        if days < 0:
            raise ValueError(f"days must be non-negative, got {days}.")
        return cls(days=days)

    @property
    def never_runs_out(self) -> bool:
        return self.days is None

    @property
    def sort_key(self) -> tuple[int, int]:
        """Ascending key: finite projections by days, then never-runs-out."""
        if self.days is None:
            return (1, 0)
        return (0, self.days)

    def within(self, days: int) -> bool:
        """True when the projection is finite and at most ``days``."""
        return self.days is not None and self.days <= days

    def beyond(self, days: int) -> bool:
        """True when the projection is finite and strictly greater than ``days``."""
        return self.days is not None and self.days > days

    def __str__(self) -> str:
        return _NEVER_LABEL if self.days is None else str(self.days)


NEVER_RUNS_OUT = StockoutProjection(days=None)


def days_until_stockout(item: InventoryItem) -> StockoutProjection:
    """Project whole days of stock left for ``item``.

    Uses floor, not round: 10 units at 3/day is 3 days.
    """
    if item.daily_usage <= 0:
        return NEVER_RUNS_OUT
    return StockoutProjection.finite(math.floor(item.current_stock / item.daily_usage))
