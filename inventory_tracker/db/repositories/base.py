"""
Base repository providing shared SQLite execution helpers.

Repositories receive an open ``sqlite3.Connection`` (usually from
``get_connection()``) and never commit or close it themselves.

Design:
  - No ORM; all SQL is explicit and lives in repository methods.
  - Repositories speak pydantic models in and out, not raw dicts.
  - ``sqlite3.Row`` rows give dict-like access in ``_row_to_*`` helpers.
"""

from __future__ import annotations

import logging
import sqlite3
from typing import Any, Optional

logger = logging.getLogger(__name__)

Params = tuple[Any, ...] | dict[str, Any]


class BaseRepository:
    """Shared SQL execution helpers for all repository classes.

    Attributes:
        conn: The active ``sqlite3.Connection``.
    """

    def __init__(self, conn: sqlite3.Connection) -> None:
        self.conn = conn

    def execute(self, sql: str, params: Params = ()) -> sqlite3.Cursor:
        """Execute a single statement with ``?`` or ``:name`` placeholders."""
        logger.debug("SQL: %s | params: %s", sql.strip(), params)
        return self.conn.execute(sql, params)

    def fetchone(self, sql: str, params: Params = ()) -> Optional[sqlite3.Row]:
        """Execute a query and return the first row, or ``None``."""
        return self.execute(sql, params).fetchone()

    def fetchall(self, sql: str, params: Params = ()) -> list[sqlite3.Row]:
        return self.execute(sql, params).fetchall()

    def scalar_int(self, sql: str, params: Params = ()) -> int:
        """Return the first column of the first row as an int (0 when NULL)."""
        row = self.fetchone(sql, params)
        if row is None or row[0] is None:
            return 0
        return int(row[0])

    def last_insert_rowid(self) -> int:
        """Return the rowid of the last successful INSERT."""
        row = self.fetchone("SELECT last_insert_rowid() AS rowid;")
        assert row is not None
        return int(row["rowid"])


def page_offset(page: int, limit: int) -> int:
    """Row offset for a 1-based ``page`` of ``limit`` rows.

    Raises:
        ValueError: If ``page < 1`` or ``limit < 1``.
    """
    if page < 1:
        raise ValueError(f"page must be >= 1, got {page}.")
    if limit < 1:
        raise ValueError(f"limit must be >= 1, got {limit}.")
    return (page - 1) * limit
