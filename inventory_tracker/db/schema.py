"""
SQLite schema DDL for the inventory store.

Every statement uses ``IF NOT EXISTS`` so ``apply_schema()`` is idempotent.

Tables
------
  suppliers        vendors
  inventory_items  stocked items; ``supplier_id`` is a plain column
  usage_records    consumption history; ``item_id`` is a plain column
  audit_log        append-only change trail, trimmed to a retention cap

No foreign keys are declared.  Deleting a supplier leaves items pointing at
it, and deleting an item leaves its usage history in place; readers resolve
dangling references to a placeholder.

Timestamps are stored as fixed-width UTC text (``YYYY-MM-DDTHH:MM:SS.ffffffZ``)
so string comparison is chronological.
"""

from __future__ import annotations

import logging
import sqlite3

logger = logging.getLogger(__name__)

# ── DDL statements ─────────────────────────────────────────────────────────────

_DDL_SUPPLIERS = """
CREATE TABLE IF NOT EXISTS suppliers (
    supplier_id INTEGER PRIMARY KEY AUTOINCREMENT,
    name        TEXT    NOT NULL,
    contact     TEXT    NOT NULL,
    email       TEXT    NOT NULL,
    phone       TEXT    NOT NULL,
    category    TEXT    NOT NULL DEFAULT 'general',
    address     TEXT,
    rating      INTEGER NOT NULL DEFAULT 3 CHECK (rating BETWEEN 1 AND 5),
    created_at  TEXT    NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ', 'now'))
);
"""

_DDL_INVENTORY_ITEMS = """
CREATE TABLE IF NOT EXISTS inventory_items (
    item_id       INTEGER PRIMARY KEY AUTOINCREMENT,
    name          TEXT    NOT NULL,
    category      TEXT    NOT NULL,
    current_stock INTEGER NOT NULL DEFAULT 0 CHECK (current_stock >= 0),
    reorder_level INTEGER NOT NULL CHECK (reorder_level >= 1),
    daily_usage   REAL    NOT NULL DEFAULT 0 CHECK (daily_usage >= 0),
    unit_price    REAL    NOT NULL DEFAULT 0 CHECK (unit_price >= 0),
    supplier_id   INTEGER,
    sku           TEXT,
    description   TEXT,
    created_at    TEXT    NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ', 'now'))
);
CREATE INDEX IF NOT EXISTS idx_inventory_items_category
    ON inventory_items (category);
"""

_DDL_USAGE_RECORDS = """
CREATE TABLE IF NOT EXISTS usage_records (
    usage_id  INTEGER PRIMARY KEY AUTOINCREMENT,
    item_id   INTEGER NOT NULL,
    item_name TEXT    NOT NULL,
    category  TEXT    NOT NULL,
    quantity  INTEGER NOT NULL CHECK (quantity >= 1),
    used_at   TEXT    NOT NULL,
    notes     TEXT
);
CREATE INDEX IF NOT EXISTS idx_usage_records_item
    ON usage_records (item_id);
CREATE INDEX IF NOT EXISTS idx_usage_records_used_at
    ON usage_records (used_at);
"""

_DDL_AUDIT_LOG = """
CREATE TABLE IF NOT EXISTS audit_log (
    entry_id  INTEGER PRIMARY KEY AUTOINCREMENT,
    action    TEXT    NOT NULL,
    details   TEXT    NOT NULL,
    user      TEXT    NOT NULL DEFAULT 'Admin',
    timestamp TEXT    NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_audit_log_timestamp
    ON audit_log (timestamp);
CREATE INDEX IF NOT EXISTS idx_audit_log_action
    ON audit_log (action);
"""

_ALL_DDL = [
    _DDL_SUPPLIERS,
    _DDL_INVENTORY_ITEMS,
    _DDL_USAGE_RECORDS,
    _DDL_AUDIT_LOG,
]

# Table names for introspection / tests
ALL_TABLE_NAMES = [
    "suppliers",
    "inventory_items",
    "usage_records",
    "audit_log",
]


def apply_schema(conn: sqlite3.Connection) -> None:
    """Create all tables and indexes on ``conn``.  Safe to call repeatedly."""
    logger.debug("Applying schema to database...")

    for ddl in _ALL_DDL:
        for statement in _split_ddl(ddl):
            conn.execute(statement)

    conn.commit()
    logger.info("Schema applied: %d tables, indexes created/verified.", len(ALL_TABLE_NAMES))


def truncate_all(conn: sqlite3.Connection) -> dict[str, int]:
    """Delete every row from every table.

    Returns:
        Mapping of table name to number of rows removed.
    """
    removed: dict[str, int] = {}
    for table in ALL_TABLE_NAMES:
        cur = conn.execute(f"DELETE FROM {table};")
        removed[table] = cur.rowcount
    return removed


def _split_ddl(ddl: str) -> list[str]:
    """Split a multi-statement DDL block on semicolons."""
    return [s.strip() for s in ddl.split(";") if s.strip()]


def get_existing_tables(conn: sqlite3.Connection) -> list[str]:
    """Return user table names present in the database, sorted."""
    rows = conn.execute(
        "SELECT name FROM sqlite_master "
        "WHERE type='table' AND name NOT LIKE 'sqlite_%' ORDER BY name;"
    ).fetchall()
    return [row["name"] for row in rows]


def get_existing_indexes(conn: sqlite3.Connection) -> list[str]:
    """Return explicitly created index names, sorted."""
    rows = conn.execute(
        "SELECT name FROM sqlite_master "
        "WHERE type='index' AND name LIKE 'idx_%' ORDER BY name;"
    ).fetchall()
    return [row["name"] for row in rows]
