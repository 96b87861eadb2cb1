"""
Dashboard data loader.

Reads the inventory store once per refresh and turns engine output into
pandas DataFrames for ``st.dataframe`` / ``st.bar_chart``.

This module does not import Streamlit; ``app.py`` wraps the loaders in
``st.cache_data`` so the store is re-read at most every ``ttl`` seconds.

Loaders return an empty snapshot (rather than raising) when the database
file does not exist yet, so every view can show a graceful "no data" message.
Nothing here writes to the store.
"""

from __future__ import annotations

import logging
import sqlite3
from datetime import date
from pathlib import Path
from typing import Optional, Sequence

import pandas as pd

from inventory_tracker.analytics.usage import TopUsedItem, TrendBucket
from inventory_tracker.db.repositories.audit_repo import AuditLogRepository
from inventory_tracker.db.repositories.usage_repo import UsageRecordRepository
from inventory_tracker.forecast.table import ForecastRow
from inventory_tracker.models.audit import AuditLogEntry
from inventory_tracker.models.item import InventoryItem
from inventory_tracker.models.supplier import Supplier
from inventory_tracker.models.usage import UsageRecord
from inventory_tracker.recommendations.order_request import OrderLine
from inventory_tracker.reporting.export import (
    forecast_rows_for_export,
    inventory_rows_for_export,
    order_request_rows_for_export,
)
from inventory_tracker.snapshot import InventorySnapshot, load_snapshot

logger = logging.getLogger(__name__)


def _connect_existing(db_path: str) -> Optional[sqlite3.Connection]:
    if not Path(db_path).exists():
        return None
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    return conn


# ── Loaders ──────────────────────────────────────────────────────────────────


def read_snapshot(db_path: str) -> InventorySnapshot:
    """Snapshot of items, usage and suppliers; empty if the DB is missing."""
    conn = _connect_existing(db_path)
    if conn is None:
        logger.info("No database at %s; showing empty dashboard", db_path)
        return InventorySnapshot()
    try:
        return load_snapshot(conn)
    finally:
        conn.close()


def read_audit_entries(
    db_path: str,
    action: Optional[str] = None,
    start: Optional[date] = None,
    end: Optional[date] = None,
    limit: int = 500,
) -> list[AuditLogEntry]:
    """Filtered audit entries, newest first; empty if the DB is missing."""
    conn = _connect_existing(db_path)
    if conn is None:
        return []
    try:
        return AuditLogRepository(conn).list_entries(
            action=action, start=start, end=end, limit=limit
        )
    finally:
        conn.close()


def read_usage_records(db_path: str, item_id: Optional[int] = None) -> list[UsageRecord]:
    """Usage records newest first, optionally for one item; empty if the DB is missing."""
    conn = _connect_existing(db_path)
    if conn is None:
        return []
    try:
        repo = UsageRecordRepository(conn)
        records = repo.get_all() if item_id is None else repo.get_for_item(item_id)
    finally:
        conn.close()
    return records[::-1]


# ── DataFrame builders ───────────────────────────────────────────────────────


def items_frame(items: Sequence[InventoryItem]) -> pd.DataFrame:
    return pd.DataFrame(inventory_rows_for_export(items))


def forecast_frame(rows: Sequence[ForecastRow]) -> pd.DataFrame:
    """Forecast rows with ``N/A`` shown for never-runs-out projections."""
    records = forecast_rows_for_export(rows)
    for rec in records:
        if rec["days_until_stockout"] == "":
            rec["days_until_stockout"] = "N/A"
        if rec["suggested_order_date"] == "":
            rec["suggested_order_date"] = "N/A"
    return pd.DataFrame(records)


def order_frame(lines: Sequence[OrderLine]) -> pd.DataFrame:
    return pd.DataFrame(order_request_rows_for_export(lines))


def top_used_frame(top: Sequence[TopUsedItem]) -> pd.DataFrame:
    return pd.DataFrame(
        [{"Item": t.name, "Total used": t.total_quantity} for t in top]
    )


def trend_frame(trend: Sequence[TrendBucket]) -> pd.DataFrame:
    """One row per day, indexed by day, for ``st.bar_chart``."""
    df = pd.DataFrame(
        [{"day": b.day.isoformat(), "Units used": b.total} for b in trend]
    )
    return df.set_index("day") if not df.empty else df


def category_frame(breakdown: dict[str, int]) -> pd.DataFrame:
    df = pd.DataFrame(
        [{"category": k, "Items": v} for k, v in breakdown.items()]
    )
    return df.set_index("category") if not df.empty else df


def suppliers_frame(suppliers: Sequence[Supplier]) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {
                "ID":       s.supplier_id,
                "Name":     s.name,
                "Contact":  s.contact,
                "Email":    s.email,
                "Phone":    s.phone,
                "Category": str(s.category),
                "Address":  s.address or "",
                "Rating":   s.rating,
            }
            for s in suppliers
        ]
    )


def audit_frame(entries: Sequence[AuditLogEntry]) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {
                "Timestamp": e.timestamp.strftime("%Y-%m-%d %H:%M:%S"),
                "Action":    str(e.action),
                "User":      e.user,
                "Details":   e.details,
            }
            for e in entries
        ]
    )


def usage_frame(records: Sequence[UsageRecord]) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {
                "ID":       r.usage_id,
                "Used at":  r.used_at.strftime("%Y-%m-%d %H:%M"),
                "Item":     r.item_name,
                "Category": r.category,
                "Quantity": r.quantity,
                "Notes":    r.notes or "",
            }
            for r in records
        ]
    )
