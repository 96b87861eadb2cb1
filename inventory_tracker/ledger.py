"""
Write path for the inventory store.

Every mutation goes through ``InventoryLedger`` so the stored data keeps its
invariants and every change leaves an audit entry:

  - usage never drives stock below zero (it clamps at 0);
  - deleting a usage record puts its quantity back on the item, if the item
    still exists;
  - deleting an item or supplier leaves dangling references in place;
  - the audit trail is trimmed to ``retention`` entries on every append.

The ledger does not commit; the caller's ``get_connection()`` block does.

Errors
------
  RecordNotFoundError      -- an id does not exist
  ValueError               -- non-positive quantity, unknown field
  pydantic.ValidationError -- a field value fails model validation
"""

from __future__ import annotations

import logging
import sqlite3
from datetime import datetime
from typing import Any, Iterable, Optional

from inventory_tracker.db.repositories.audit_repo import DEFAULT_RETENTION, AuditLogRepository
from inventory_tracker.db.repositories.item_repo import InventoryItemRepository
from inventory_tracker.db.repositories.supplier_repo import SupplierRepository
from inventory_tracker.db.repositories.usage_repo import UsageRecordRepository
from inventory_tracker.db.schema import truncate_all
from inventory_tracker.models.audit import AuditLogEntry
from inventory_tracker.models.item import InventoryItem
from inventory_tracker.models.supplier import Supplier
from inventory_tracker.models.usage import UsageRecord
from inventory_tracker.taxonomy.inventory_taxonomy import AuditAction

logger = logging.getLogger(__name__)

DEFAULT_USER = "Admin"


class RecordNotFoundError(LookupError):
    """Raised when an item, usage record or supplier id does not exist."""

    def __init__(self, kind: str, record_id: int) -> None:
        super().__init__(f"{kind} {record_id} not found.")
        self.kind = kind
        self.record_id = record_id


def _require_positive(quantity: int, what: str) -> None:
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
        raise ValueError(f"{what} quantity must be a positive integer, got {quantity!r}.")


class InventoryLedger:
    """Audited write operations over one open connection.

    Args:
        conn:      Open SQLite connection (schema applied).
        user:      Name recorded on audit entries.
        retention: Maximum audit entries kept.
    """

    def __init__(
        self,
        conn: sqlite3.Connection,
        user: str = DEFAULT_USER,
        retention: int = DEFAULT_RETENTION,
    ) -> None:
        self.conn = conn
        self.user = user
        self.retention = retention
        self.items = InventoryItemRepository(conn)
        self.usage = UsageRecordRepository(conn)
        self.suppliers = SupplierRepository(conn)
        self.audit = AuditLogRepository(conn)

    # ── Audit ──────────────────────────────────────────────────────────────────

    def log(self, action: AuditAction, details: str) -> int:
        """Append an audit entry attributed to ``self.user``."""
        entry = AuditLogEntry(action=action, details=details, user=self.user)
        return self.audit.append(entry, retention=self.retention)

    # ── Items ──────────────────────────────────────────────────────────────────

    def add_item(self, item: InventoryItem) -> InventoryItem:
        """Store a new item and return it with its assigned ``item_id``."""
        item_id = self.items.insert(item)
        self.log(AuditAction.ADD, f"Added new item: {item.name}")
        logger.info("Added item %d (%s)", item_id, item.name)
        return item.model_copy(update={"item_id": item_id})

    def import_items(self, items: Iterable[InventoryItem]) -> list[InventoryItem]:
        """Store several items under a single audit entry."""
        stored = [
            item.model_copy(update={"item_id": self.items.insert(item)})
            for item in items
        ]
        if stored:
            self.log(AuditAction.ADD, f"Imported {len(stored)} items")
        logger.info("Imported %d items", len(stored))
        return stored

    def get_item(self, item_id: int) -> InventoryItem:
        item = self.items.get_by_id(item_id)
        if item is None:
            raise RecordNotFoundError("Item", item_id)
        return item

    def update_item(self, item_id: int, **changes: Any) -> InventoryItem:
        """Apply field changes to an item, re-validating the whole record.

        Raises:
            RecordNotFoundError: If the item does not exist.
            ValueError: If ``changes`` names an unknown or read-only field.
            pydantic.ValidationError: If the updated record is invalid.
        """
        current = self.get_item(item_id)
        unknown = set(changes) - (set(InventoryItem.model_fields) - {"item_id"})
        if unknown:
            raise ValueError(f"Unknown item field(s): {sorted(unknown)}.")

        updated = InventoryItem.model_validate({**current.model_dump(), **changes})
        self.items.update(updated)
        self.log(AuditAction.EDIT, f"Updated item: {updated.name}")
        logger.info("Updated item %d: %s", item_id, sorted(changes))
        return updated

    def delete_item(self, item_id: int, purge_usage: bool = False) -> InventoryItem:
        """Delete an item.

        Usage history is kept unless ``purge_usage`` is set; kept records
        resolve to "Unknown" in usage aggregates.
        """
        item = self.get_item(item_id)
        self.items.delete(item_id)
        if purge_usage:
            removed = self.usage.delete_for_item(item_id)
            logger.info("Purged %d usage records of item %d", removed, item_id)
        self.log(AuditAction.DELETE, f"Deleted item: {item.name}")
        logger.info("Deleted item %d (%s)", item_id, item.name)
        return item

    def restock_item(self, item_id: int, quantity: int) -> InventoryItem:
        """Add ``quantity`` units to an item's stock."""
        _require_positive(quantity, "Restock")
        item = self.get_item(item_id)
        new_stock = item.current_stock + quantity
        self.items.set_stock(item_id, new_stock)
        self.log(AuditAction.RESTOCK, f"Restocked {quantity} of {item.name}")
        logger.info("Restocked item %d: %d -> %d", item_id, item.current_stock, new_stock)
        return item.model_copy(update={"current_stock": new_stock})

    # ── Usage ──────────────────────────────────────────────────────────────────

    def record_usage(
        self,
        item_id: int,
        quantity: int,
        used_at: Optional[datetime] = None,
        notes: Optional[str] = None,
    ) -> tuple[UsageRecord, InventoryItem]:
        """Record consumption and reduce stock, clamping at zero.

        The item's name and category are copied onto the usage record.

        Returns:
            The stored usage record and the item with its new stock.
        """
        _require_positive(quantity, "Usage")
        item = self.get_item(item_id)

        fields: dict[str, Any] = {
            "item_id": item_id,
            "item_name": item.name,
            "category": str(item.category),
            "quantity": quantity,
            "notes": notes or None,
        }
        if used_at is not None:
            fields["used_at"] = used_at
        record = UsageRecord(**fields)

        usage_id = self.usage.insert(record)
        new_stock = max(0, item.current_stock - quantity)
        self.items.set_stock(item_id, new_stock)
        self.log(AuditAction.USAGE, f"Used {quantity} of {item.name}")

        if quantity > item.current_stock:
            logger.warning(
                "Usage of %d exceeds stock %d for item %d; stock clamped to 0",
                quantity, item.current_stock, item_id,
            )
        logger.info("Recorded usage %d: %d of item %d", usage_id, quantity, item_id)
        return (
            record.model_copy(update={"usage_id": usage_id}),
            item.model_copy(update={"current_stock": new_stock}),
        )

    def delete_usage(self, usage_id: int) -> Optional[InventoryItem]:
        """Delete a usage record and restore its quantity to the item.

        Returns:
            The item with restored stock, or ``None`` if the item no longer
            exists (the record is still deleted).
        """
        record = self.usage.get_by_id(usage_id)
        if record is None:
            raise RecordNotFoundError("Usage record", usage_id)

        restored: Optional[InventoryItem] = None
        item = self.items.get_by_id(record.item_id)
        if item is not None:
            new_stock = item.current_stock + record.quantity
            self.items.set_stock(record.item_id, new_stock)
            restored = item.model_copy(update={"current_stock": new_stock})
        else:
            logger.info("Usage %d references deleted item %d; no stock restored",
                        usage_id, record.item_id)

        self.usage.delete(usage_id)
        self.log(
            AuditAction.USAGE,
            f"Deleted usage of {record.quantity} {record.item_name} (stock restored)"
            if restored is not None
            else f"Deleted usage of {record.quantity} {record.item_name}",
        )
        return restored

    # ── Suppliers ──────────────────────────────────────────────────────────────

    def add_supplier(self, supplier: Supplier) -> Supplier:
        supplier_id = self.suppliers.insert(supplier)
        self.log(AuditAction.ADD, f"Added supplier: {supplier.name}")
        logger.info("Added supplier %d (%s)", supplier_id, supplier.name)
        return supplier.model_copy(update={"supplier_id": supplier_id})

    def get_supplier(self, supplier_id: int) -> Supplier:
        supplier = self.suppliers.get_by_id(supplier_id)
        if supplier is None:
            raise RecordNotFoundError("Supplier", supplier_id)
        return supplier

    def update_supplier(self, supplier_id: int, **changes: Any) -> Supplier:
        current = self.get_supplier(supplier_id)
        unknown = set(changes) - (set(Supplier.model_fields) - {"supplier_id"})
        if unknown:
            raise ValueError(f"Unknown supplier field(s): {sorted(unknown)}.")

        updated = Supplier.model_validate({**current.model_dump(), **changes})
        self.suppliers.update(updated)
        self.log(AuditAction.EDIT, f"Updated supplier: {updated.name}")
        logger.info("Updated supplier %d: %s", supplier_id, sorted(changes))
        return updated

    def delete_supplier(self, supplier_id: int) -> Supplier:
        """Delete a supplier.  Items keep their ``supplier_id``."""
        supplier = self.get_supplier(supplier_id)
        self.suppliers.delete(supplier_id)
        self.log(AuditAction.DELETE, f"Deleted supplier: {supplier.name}")
        logger.info("Deleted supplier %d (%s)", supplier_id, supplier.name)
        return supplier

    # ── Bulk ───────────────────────────────────────────────────────────────────

    def clear_audit_log(self) -> int:
        """Delete every audit entry.  Returns entries removed."""
        removed = self.audit.clear()
        logger.warning("Cleared audit log (%d entries)", removed)
        return removed

    def clear_all_data(self) -> dict[str, int]:
        return clear_all_data(self.conn)


def clear_all_data(conn: sqlite3.Connection) -> dict[str, int]:
    """Wipe items, usage, suppliers and the audit trail.

    Returns:
        Rows removed per table.
    """
    removed = truncate_all(conn)
    logger.warning("Cleared all data: %s", removed)
    return removed
