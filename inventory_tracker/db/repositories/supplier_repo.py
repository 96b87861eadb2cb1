"""
Repository for suppliers.
"""

from __future__ import annotations

import logging
import sqlite3
from typing import Optional

from inventory_tracker.db.repositories.base import BaseRepository
from inventory_tracker.models.supplier import Supplier

logger = logging.getLogger(__name__)


class SupplierRepository(BaseRepository):
    """Read/write access to the ``suppliers`` table."""

    def insert(self, supplier: Supplier) -> int:
        self.execute(
            """
            INSERT INTO suppliers (name, contact, email, phone, category, address, rating)
            VALUES (?, ?, ?, ?, ?, ?, ?);
            """,
            _supplier_params(supplier),
        )
        return self.last_insert_rowid()

    def update(self, supplier: Supplier) -> bool:
        """Overwrite a supplier matched by ``supplier_id``.

        Raises:
            ValueError: If ``supplier.supplier_id`` is ``None``.
        """
        if supplier.supplier_id is None:
            raise ValueError("Cannot update a supplier without supplier_id.")
        cur = self.execute(
            """
            UPDATE suppliers SET
                name = ?, contact = ?, email = ?, phone = ?,
                category = ?, address = ?, rating = ?
            WHERE supplier_id = ?;
            """,
            (*_supplier_params(supplier), supplier.supplier_id),
        )
        return cur.rowcount > 0

    def delete(self, supplier_id: int) -> bool:
        """Delete a supplier.  Items referencing it are left untouched."""
        cur = self.execute("DELETE FROM suppliers WHERE supplier_id = ?;", (supplier_id,))
        return cur.rowcount > 0

    def get_by_id(self, supplier_id: int) -> Optional[Supplier]:
        row = self.fetchone("SELECT * FROM suppliers WHERE supplier_id = ?;", (supplier_id,))
        return _row_to_supplier(row) if row else None

    def get_all(self) -> list[Supplier]:
        rows = self.fetchall("SELECT * FROM suppliers ORDER BY supplier_id;")
        return [_row_to_supplier(r) for r in rows]

    def count(self) -> int:
        return self.scalar_int("SELECT COUNT(*) FROM suppliers;")


# ── Private helpers ────────────────────────────────────────────────────────────

def _supplier_params(supplier: Supplier) -> tuple:
    return (
        supplier.name,
        supplier.contact,
        supplier.email,
        supplier.phone,
        str(supplier.category),
        supplier.address,
        supplier.rating,
    )


def _row_to_supplier(row: sqlite3.Row) -> Supplier:
    return Supplier(
        supplier_id=row["supplier_id"],
        name=row["name"],
        contact=row["contact"],
        email=row["email"],
        phone=row["phone"],
        category=row["category"],
        address=row["address"],
        rating=row["rating"],
    )
