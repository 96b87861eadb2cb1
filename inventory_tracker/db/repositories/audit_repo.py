"""
Repository for the audit trail.

``append()`` inserts an entry and trims the table back to ``retention``
entries, dropping the oldest by insertion order.  Listing is newest first.
"""

from __future__ import annotations

import logging
import sqlite3
from datetime import date, datetime, time, timedelta, timezone
from typing import Any, Optional

from inventory_tracker.db.repositories.base import BaseRepository, page_offset
from inventory_tracker.models.audit import AuditLogEntry
from inventory_tracker.utils.time_utils import format_timestamp, parse_iso_timestamp

logger = logging.getLogger(__name__)

DEFAULT_RETENTION = 500


class AuditLogRepository(BaseRepository):
    """Read/write access to the ``audit_log`` table."""

    def append(self, entry: AuditLogEntry, retention: int = DEFAULT_RETENTION) -> int:
        """Insert ``entry`` and keep only the ``retention`` most recent entries.

        Returns:
            The new ``entry_id``.
        """
        if retention < 1:
            raise ValueError(f"retention must be >= 1, got {retention}.")
        self.execute(
            "INSERT INTO audit_log (action, details, user, timestamp) VALUES (?, ?, ?, ?);",
            (str(entry.action), entry.details, entry.user, format_timestamp(entry.timestamp)),
        )
        entry_id = self.last_insert_rowid()

        trimmed = self.execute(
            """
            DELETE FROM audit_log WHERE entry_id NOT IN (
                SELECT entry_id FROM audit_log ORDER BY entry_id DESC LIMIT ?
            );
            """,
            (retention,),
        ).rowcount
        if trimmed:
            logger.debug("Audit log trimmed by %d entries (retention=%d)", trimmed, retention)
        return entry_id

    def list_entries(
        self,
        action: Optional[str] = None,
        start: Optional[date] = None,
        end: Optional[date] = None,
        page: int = 1,
        limit: int = DEFAULT_RETENTION,
    ) -> list[AuditLogEntry]:
        """Entries newest first, optionally filtered.

        Args:
            action: Only entries with this action.
            start:  Only entries on or after this UTC day.
            end:    Only entries on or before this UTC day (inclusive).
            page:   1-based page number.
            limit:  Page size.
        """
        clauses: list[str] = []
        params: list[Any] = []
        if action is not None:
            clauses.append("action = ?")
            params.append(str(action))
        if start is not None:
            clauses.append("timestamp >= ?")
            params.append(format_timestamp(_day_start(start)))
        if end is not None:
            clauses.append("timestamp < ?")
            params.append(format_timestamp(_day_start(end + timedelta(days=1))))

        where = f"WHERE {' AND '.join(clauses)} " if clauses else ""
        params.extend([limit, page_offset(page, limit)])
        rows = self.fetchall(
            f"SELECT * FROM audit_log {where}"
            "ORDER BY timestamp DESC, entry_id DESC LIMIT ? OFFSET ?;",
            tuple(params),
        )
        return [_row_to_entry(r) for r in rows]

    def clear(self) -> int:
        """Delete every entry.  Returns rows removed."""
        return self.execute("DELETE FROM audit_log;").rowcount

    def count(self) -> int:
        return self.scalar_int("SELECT COUNT(*) FROM audit_log;")


# ── Private helpers ────────────────────────────────────────────────────────────

def _day_start(day: date) -> datetime:
    return datetime.combine(day, time.min, tzinfo=timezone.utc)


def _row_to_entry(row: sqlite3.Row) -> AuditLogEntry:
    return AuditLogEntry(
        entry_id=row["entry_id"],
        action=row["action"],
        details=row["details"],
        user=row["user"],
        timestamp=parse_iso_timestamp(row["timestamp"]),
    )
