"""Tests for stock alert derivation."""

from __future__ import annotations

from inventory_tracker.recommendations.alerts import derive_stock_alerts
from inventory_tracker.taxonomy.inventory_taxonomy import ItemStatus


def test_alerts_for_low_and_out_of_stock(make_item):
    items = [
        make_item(item_id=1, name="Paper"),
        make_item(item_id=2, name="Toner", current_stock=0),
        make_item(item_id=3, name="Pens", current_stock=4, reorder_level=10),
    ]
    alerts = derive_stock_alerts(items)
    assert [(a.item_id, a.status, a.title) for a in alerts] == [
        (2, ItemStatus.OUT_OF_STOCK, "Out of Stock!"),
        (3, ItemStatus.LOW, "Low Stock Warning"),
    ]
    assert alerts[1].message == "Pens needs attention (4 left)"


def test_no_alerts_when_healthy(make_item):
    assert derive_stock_alerts([make_item(), make_item()]) == []
