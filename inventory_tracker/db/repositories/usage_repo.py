"""
Repository for usage records.

Records keep their ``item_id`` after the item is deleted; nothing here joins
against ``inventory_items``.
"""

from __future__ import annotations

import logging
import sqlite3
from datetime import datetime
from typing import Optional

from inventory_tracker.db.repositories.base import BaseRepository
from inventory_tracker.models.usage import UsageRecord
from inventory_tracker.utils.time_utils import format_timestamp, parse_iso_timestamp

logger = logging.getLogger(__name__)


class UsageRecordRepository(BaseRepository):
    """Read/write access to the ``usage_records`` table."""

    def insert(self, record: UsageRecord) -> int:
        self.execute(
            """
            INSERT INTO usage_records (item_id, item_name, category, quantity, used_at, notes)
            VALUES (?, ?, ?, ?, ?, ?);
            """,
            (
                record.item_id,
                record.item_name,
                record.category,
                record.quantity,
                format_timestamp(record.used_at),
                record.notes,
            ),
        )
        return self.last_insert_rowid()

    def delete(self, usage_id: int) -> bool:
        cur = self.execute("DELETE FROM usage_records WHERE usage_id = ?;", (usage_id,))
        return cur.rowcount > 0

    def delete_for_item(self, item_id: int) -> int:
        """Delete all usage history of one item.  Returns rows removed."""
        cur = self.execute("DELETE FROM usage_records WHERE item_id = ?;", (item_id,))
        return cur.rowcount

    def get_by_id(self, usage_id: int) -> Optional[UsageRecord]:
        row = self.fetchone("SELECT * FROM usage_records WHERE usage_id = ?;", (usage_id,))
        return _row_to_usage(row) if row else None

    def get_all(self) -> list[UsageRecord]:
        """All records, oldest first."""
        rows = self.fetchall("SELECT * FROM usage_records ORDER BY used_at, usage_id;")
        return [_row_to_usage(r) for r in rows]

    def get_for_item(self, item_id: int) -> list[UsageRecord]:
        rows = self.fetchall(
            "SELECT * FROM usage_records WHERE item_id = ? ORDER BY used_at, usage_id;",
            (item_id,),
        )
        return [_row_to_usage(r) for r in rows]

    def get_since(self, since: datetime) -> list[UsageRecord]:
        """Records with ``used_at >= since``, oldest first."""
        rows = self.fetchall(
            "SELECT * FROM usage_records WHERE used_at >= ? ORDER BY used_at, usage_id;",
            (format_timestamp(since),),
        )
        return [_row_to_usage(r) for r in rows]

    def count(self) -> int:
        return self.scalar_int("SELECT COUNT(*) FROM usage_records;")


# ── Private helpers ────────────────────────────────────────────────────────────

def _row_to_usage(row: sqlite3.Row) -> UsageRecord:
    return UsageRecord(
        usage_id=row["usage_id"],
        item_id=row["item_id"],
        item_name=row["item_name"],
        category=row["category"],
        quantity=row["quantity"],
        used_at=parse_iso_timestamp(row["used_at"]),
        notes=row["notes"],
    )
