"""
Inventory snapshot: the three collections the engine reads, captured together.

A snapshot is owned by the caller (CLI command, dashboard request) and passed
explicitly into engine functions.  Nothing in the engine holds module-level
state.
"""

from __future__ import annotations

import logging
import sqlite3
from dataclasses import dataclass, field
from datetime import datetime

from inventory_tracker.models.item import InventoryItem
from inventory_tracker.models.supplier import Supplier
from inventory_tracker.models.usage import UsageRecord
from inventory_tracker.utils.time_utils import utcnow

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InventorySnapshot:
    """Items, usage history and suppliers as of ``taken_at``."""

    items:     tuple[InventoryItem, ...] = ()
    usage:     tuple[UsageRecord, ...] = ()
    suppliers: tuple[Supplier, ...] = ()
    taken_at:  datetime = field(default_factory=utcnow)

    @property
    def is_empty(self) -> bool:
        return not self.items


def load_snapshot(conn: sqlite3.Connection) -> InventorySnapshot:
    """Read all items, usage records and suppliers from the store."""
    from inventory_tracker.db.repositories.item_repo import InventoryItemRepository
    from inventory_tracker.db.repositories.supplier_repo import SupplierRepository
    from inventory_tracker.db.repositories.usage_repo import UsageRecordRepository

    snapshot = InventorySnapshot(
        items=tuple(InventoryItemRepository(conn).get_all()),
        usage=tuple(UsageRecordRepository(conn).get_all()),
        suppliers=tuple(SupplierRepository(conn).get_all()),
    )
    logger.debug(
        "Loaded snapshot: %d items, %d usage records, %d suppliers",
        len(snapshot.items), len(snapshot.usage), len(snapshot.suppliers),
    )
    return snapshot
