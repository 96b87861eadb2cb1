"""
Tests for inventory_tracker/forecast/status.py.

What we test
------------
classify_status():
  - stock 0 is Out of Stock regardless of reorder level.
  - stock == reorder level is Low (boundary).
  - stock one above reorder level is Healthy.
  - Always returns exactly one ItemStatus.
needs_reorder():
  - True for Low and Out of Stock, False for Healthy.
"""

from __future__ import annotations

import pytest

from inventory_tracker.forecast.status import classify_status, needs_reorder
from inventory_tracker.taxonomy.inventory_taxonomy import ItemStatus


@pytest.mark.parametrize("reorder", [1, 5, 100])
def test_zero_stock_is_out_of_stock(make_item, reorder):
    assert classify_status(make_item(current_stock=0, reorder_level=reorder)) is ItemStatus.OUT_OF_STOCK


@pytest.mark.parametrize(
    "stock, reorder, expected",
    [
        (1, 1, ItemStatus.LOW),
        (5, 5, ItemStatus.LOW),
        (3, 5, ItemStatus.LOW),
        (6, 5, ItemStatus.HEALTHY),
        (2, 1, ItemStatus.HEALTHY),
    ],
)
def test_tiers(make_item, stock, reorder, expected):
    assert classify_status(make_item(current_stock=stock, reorder_level=reorder)) is expected


def test_returns_member_of_item_status(make_item):
    for stock in range(0, 30):
        assert classify_status(make_item(current_stock=stock, reorder_level=10)) in set(ItemStatus)


def test_needs_reorder(make_item):
    assert needs_reorder(make_item(current_stock=0))
    assert needs_reorder(make_item(current_stock=20, reorder_level=20))
    assert not needs_reorder(make_item(current_stock=21, reorder_level=20))
