"""
Repository for inventory items.
"""

from __future__ import annotations

import logging
import sqlite3
from typing import Optional

from inventory_tracker.db.repositories.base import BaseRepository, page_offset
from inventory_tracker.models.item import InventoryItem

logger = logging.getLogger(__name__)

_COLUMNS = (
    "name, category, current_stock, reorder_level, daily_usage, "
    "unit_price, supplier_id, sku, description"
)


class InventoryItemRepository(BaseRepository):
    """Read/write access to the ``inventory_items`` table."""

    def insert(self, item: InventoryItem) -> int:
        """Insert a new item and return its assigned ``item_id``.

        ``item.item_id`` is ignored; ids are auto-incremented.
        """
        self.execute(
            f"INSERT INTO inventory_items ({_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?);",
            _item_params(item),
        )
        return self.last_insert_rowid()

    def update(self, item: InventoryItem) -> bool:
        """Overwrite all stored fields of ``item`` (matched by ``item_id``).

        Returns:
            ``True`` if a row was updated.

        Raises:
            ValueError: If ``item.item_id`` is ``None``.
        """
        if item.item_id is None:
            raise ValueError("Cannot update an item without item_id.")
        cur = self.execute(
            """
            UPDATE inventory_items SET
                name = ?, category = ?, current_stock = ?, reorder_level = ?,
                daily_usage = ?, unit_price = ?, supplier_id = ?, sku = ?,
                description = ?
            WHERE item_id = ?;
            """,
            (*_item_params(item), item.item_id),
        )
        return cur.rowcount > 0

    def set_stock(self, item_id: int, current_stock: int) -> bool:
        """Set ``current_stock`` for one item.  Returns ``True`` if it exists."""
        cur = self.execute(
            "UPDATE inventory_items SET current_stock = ? WHERE item_id = ?;",
            (current_stock, item_id),
        )
        return cur.rowcount > 0

    def delete(self, item_id: int) -> bool:
        cur = self.execute("DELETE FROM inventory_items WHERE item_id = ?;", (item_id,))
        return cur.rowcount > 0

    def get_by_id(self, item_id: int) -> Optional[InventoryItem]:
        row = self.fetchone("SELECT * FROM inventory_items WHERE item_id = ?;", (item_id,))
        return _row_to_item(row) if row else None

    def get_all(self, category: Optional[str] = None) -> list[InventoryItem]:
        """All items in insertion order, optionally limited to one category."""
        if category is None:
            rows = self.fetchall("SELECT * FROM inventory_items ORDER BY item_id;")
        else:
            rows = self.fetchall(
                "SELECT * FROM inventory_items WHERE category = ? ORDER BY item_id;",
                (category,),
            )
        return [_row_to_item(r) for r in rows]

    def list_page(
        self,
        page: int = 1,
        limit: int = 50,
        category: Optional[str] = None,
    ) -> list[InventoryItem]:
        """One page of items in insertion order.

        Args:
            page:     1-based page number.
            limit:    Page size.
            category: Optional category filter.
        """
        offset = page_offset(page, limit)
        if category is None:
            rows = self.fetchall(
                "SELECT * FROM inventory_items ORDER BY item_id LIMIT ? OFFSET ?;",
                (limit, offset),
            )
        else:
            rows = self.fetchall(
                "SELECT * FROM inventory_items WHERE category = ? "
                "ORDER BY item_id LIMIT ? OFFSET ?;",
                (category, limit, offset),
            )
        return [_row_to_item(r) for r in rows]

    def get_by_supplier(self, supplier_id: int) -> list[InventoryItem]:
        rows = self.fetchall(
            "SELECT * FROM inventory_items WHERE supplier_id = ? ORDER BY item_id;",
            (supplier_id,),
        )
        return [_row_to_item(r) for r in rows]

    def count(self, category: Optional[str] = None) -> int:
        if category is None:
            return self.scalar_int("SELECT COUNT(*) FROM inventory_items;")
        return self.scalar_int(
            "SELECT COUNT(*) FROM inventory_items WHERE category = ?;", (category,)
        )


# ── Private helpers ────────────────────────────────────────────────────────────

def _item_params(item: InventoryItem) -> tuple:
    return (
        item.name,
        str(item.category),
        item.current_stock,
        item.reorder_level,
        item.daily_usage,
        item.unit_price,
        item.supplier_id,
        item.sku,
        item.description,
    )


def _row_to_item(row: sqlite3.Row) -> InventoryItem:
    return InventoryItem(
        item_id=row["item_id"],
        name=row["name"],
        category=row["category"],
        current_stock=row["current_stock"],
        reorder_level=row["reorder_level"],
        daily_usage=row["daily_usage"],
        unit_price=row["unit_price"],
        supplier_id=row["supplier_id"],
        sku=row["sku"],
        description=row["description"],
    )
