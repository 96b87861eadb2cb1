"""
Shared pytest fixtures for the Department Inventory Tracker test suite.

Provides:
  - ``in_memory_db``: A fresh in-memory SQLite connection with the full
    schema applied. Created anew for each test that requests it.
  - ``make_item`` / ``make_supplier`` / ``make_usage``: factories for valid
    domain objects with overridable fields.
  - ``ledger``: an ``InventoryLedger`` over ``in_memory_db``.
"""

from __future__ import annotations

import sqlite3
from datetime import datetime, timezone
from typing import Any, Callable, Generator

import pytest

from inventory_tracker.db.schema import apply_schema
from inventory_tracker.ledger import InventoryLedger
from inventory_tracker.models.item import InventoryItem
from inventory_tracker.models.supplier import Supplier
from inventory_tracker.models.usage import UsageRecord


# ── Database fixture ──────────────────────────────────────────────────────────

@pytest.fixture
def in_memory_db() -> Generator[sqlite3.Connection, None, None]:
    """Yield a fresh in-memory SQLite connection with the full schema applied.

    Connection is closed after the test.
    """
    conn = sqlite3.connect(":memory:")
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON;")
    apply_schema(conn)
    yield conn
    conn.close()


@pytest.fixture
def ledger(in_memory_db: sqlite3.Connection) -> InventoryLedger:
    """Ledger over ``in_memory_db`` attributing audit entries to "Tester"."""
    return InventoryLedger(in_memory_db, user="Tester", retention=500)


# ── Sample domain object factories ────────────────────────────────────────────

@pytest.fixture
def make_item() -> Callable[..., InventoryItem]:
    """Factory for a valid Healthy ``InventoryItem``; override any field."""

    def _make(**overrides: Any) -> InventoryItem:
        fields: dict[str, Any] = {
            "name": "A4 Paper (Ream)",
            "category": "stationery",
            "current_stock": 45,
            "reorder_level": 20,
            "daily_usage": 2.5,
            "unit_price": 5.99,
            "sku": "SKU-001",
        }
        fields.update(overrides)
        return InventoryItem(**fields)

    return _make


@pytest.fixture
def make_supplier() -> Callable[..., Supplier]:
    def _make(**overrides: Any) -> Supplier:
        fields: dict[str, Any] = {
            "name": "Office Supplies Co",
            "contact": "John Smith",
            "email": "john@officesupplies.com",
            "phone": "555-0101",
            "category": "stationery",
            "rating": 4,
            "address": "123 Main St",
        }
        fields.update(overrides)
        return Supplier(**fields)

    return _make


@pytest.fixture
def make_usage() -> Callable[..., UsageRecord]:
    def _make(**overrides: Any) -> UsageRecord:
        fields: dict[str, Any] = {
            "item_id": 1,
            "item_name": "A4 Paper (Ream)",
            "category": "stationery",
            "quantity": 3,
            "used_at": datetime(2026, 3, 10, 9, 30, tzinfo=timezone.utc),
        }
        fields.update(overrides)
        return UsageRecord(**fields)

    return _make
