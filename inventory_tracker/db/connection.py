"""
SQLite connection management for the inventory store.

``get_connection()`` yields a connection that:
  - enforces foreign keys (no table declares any today, but the pragma keeps
    behaviour predictable if one is added);
  - uses WAL journal mode so the dashboard can read while the CLI writes;
  - waits ``busy_timeout_ms`` on lock contention;
  - returns ``sqlite3.Row`` rows;
  - commits on clean exit and rolls back on exception.

Usage::

    from inventory_tracker.db.connection import get_connection

    with get_connection("data/db/inventory.db") as conn:
        items = InventoryItemRepository(conn).get_all()
"""

from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING, Generator

if TYPE_CHECKING:
    from inventory_tracker.config import AppConfig

logger = logging.getLogger(__name__)

IN_MEMORY = ":memory:"


@contextmanager
def get_connection(
    db_path: str,
    wal_mode: bool = True,
    busy_timeout_ms: int = 5000,
) -> Generator[sqlite3.Connection, None, None]:
    """Context manager yielding a configured SQLite connection.

    The database file and its parent directories are created on first use.

    Args:
        db_path: Path to the SQLite file, or ``":memory:"``.
        wal_mode: Enable WAL journal mode.  Ignored for in-memory databases.
        busy_timeout_ms: Milliseconds to wait on a locked database.

    Yields:
        An open, configured ``sqlite3.Connection``.

    Raises:
        sqlite3.OperationalError: If the database cannot be opened or is locked.
    """
    if db_path != IN_MEMORY:
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(db_path, timeout=busy_timeout_ms / 1000)
    conn.row_factory = sqlite3.Row
    logger.debug("Opened SQLite connection to %s", db_path)

    try:
        conn.execute("PRAGMA foreign_keys = ON;")
        conn.execute(f"PRAGMA busy_timeout = {int(busy_timeout_ms)};")
        if wal_mode and db_path != IN_MEMORY:
            conn.execute("PRAGMA journal_mode = WAL;")

        yield conn
        conn.commit()

    except Exception:
        conn.rollback()
        raise

    finally:
        conn.close()


@contextmanager
def open_store(config: "AppConfig") -> Generator[sqlite3.Connection, None, None]:
    """``get_connection()`` using the ``[database]`` config section."""
    with get_connection(
        config.database.db_path,
        wal_mode=config.database.wal_mode,
        busy_timeout_ms=config.database.busy_timeout_ms,
    ) as conn:
        yield conn
