"""Tests for the ASCII terminal formatters."""

from __future__ import annotations

from datetime import date, datetime, timezone

from inventory_tracker.analytics.aggregates import compute_dashboard_totals, needs_attention
from inventory_tracker.analytics.usage import TopUsedItem, usage_peak, usage_trend
from inventory_tracker.forecast.table import build_forecast
from inventory_tracker.models.audit import AuditLogEntry
from inventory_tracker.recommendations.alerts import derive_stock_alerts
from inventory_tracker.recommendations.order_request import build_order_request
from inventory_tracker.recommendations.ranker import generate_recommendations
from inventory_tracker.reporting.formatters import (
    format_audit_log,
    format_dashboard_summary,
    format_forecast_table,
    format_inventory_table,
    format_order_request,
    format_recommendations,
    format_stock_alerts,
    format_supplier_table,
    format_usage_log,
)

TODAY = date(2026, 3, 10)


class TestInventoryTable:
    def test_rows_and_status(self, make_item, make_supplier):
        items = [
            make_item(item_id=1, supplier_id=1),
            make_item(item_id=2, name="Toner", current_stock=0, supplier_id=9),
        ]
        out = format_inventory_table(items, [make_supplier(supplier_id=1)])
        assert "=== Inventory ===" in out
        assert "Office Supplies Co" in out
        assert "Out of Stock" in out
        assert "2 item(s)" in out

    def test_empty(self):
        assert "no items" in format_inventory_table([])


def test_supplier_table(make_supplier):
    out = format_supplier_table([make_supplier(supplier_id=1, rating=4)])
    assert "john@officesupplies.com" in out
    assert "****" in out
    assert "(no suppliers)" in format_supplier_table([])


class TestForecastTable:
    def test_never_runs_out_shows_na(self, make_item):
        rows = build_forecast([make_item(name="Idle", daily_usage=0)], TODAY)
        out = format_forecast_table(rows)
        assert "=== Reorder Forecast ===" in out
        line = next(l for l in out.splitlines() if "Idle" in l)
        assert line.count("N/A") == 2

    def test_order_date_rendered(self, make_item):
        rows = build_forecast([make_item(current_stock=20, daily_usage=1)], TODAY)
        assert "2026-03-23" in format_forecast_table(rows)

    def test_empty(self):
        assert "(no items to forecast)" in format_forecast_table([])


def test_recommendations(make_item):
    cards = generate_recommendations([make_item(name="Toner", current_stock=0)], [])
    out = format_recommendations(cards)
    assert "[!]  Urgent: Out of Stock Items" in out
    assert "action: reorder" in out
    assert "empty" in format_recommendations([])


def test_dashboard_summary(make_item, make_usage):
    items = [make_item(item_id=1), make_item(item_id=2, name="Toner", current_stock=0)]
    usage = [make_usage(item_id=1, quantity=4, used_at=datetime(2026, 3, 9, tzinfo=timezone.utc))]
    trend = usage_trend(usage, window_days=7, today=TODAY)
    out = format_dashboard_summary(
        totals=compute_dashboard_totals(items),
        attention=needs_attention(items),
        top_used=[TopUsedItem(1, "A4 Paper (Ream)", 4)],
        trend=trend,
        peak=usage_peak(trend),
    )
    assert "Total items:      2" in out
    assert "Out of stock:     1" in out
    assert "Toner" in out
    assert "Peak 2026-03-09 (4)" in out


def test_dashboard_summary_empty():
    trend = usage_trend([], window_days=3, today=TODAY)
    out = format_dashboard_summary(compute_dashboard_totals([]), [], [], trend, None)
    assert "All items are healthy." in out
    assert "No usage recorded." in out
    assert "No usage in this window." in out


def test_order_request(make_item):
    lines = build_order_request([make_item(current_stock=0, reorder_level=20, unit_price=5.99)])
    out = format_order_request(lines)
    assert "SKU-001" in out
    assert "Estimated total: 239.60" in out
    assert "Nothing to order" in format_order_request([])


def test_stock_alerts(make_item):
    out = format_stock_alerts(derive_stock_alerts([make_item(name="Pens", current_stock=2)]))
    assert "Low Stock Warning" in out
    assert "Pens needs attention (2 left)" in out
    assert "No alerts." in format_stock_alerts([])


def test_audit_log():
    entry = AuditLogEntry(
        action="restock",
        details="Restocked 5 of Pens",
        timestamp=datetime(2026, 3, 10, 14, 5, tzinfo=timezone.utc),
    )
    out = format_audit_log([entry])
    assert "2026-03-10 14:05:00" in out
    assert "restock" in out
    assert "(no entries match)" in format_audit_log([])


def test_usage_log(make_usage):
    records = [
        make_usage(usage_id=2, quantity=4, notes="print run",
                   used_at=datetime(2026, 3, 9, 8, 0, tzinfo=timezone.utc)),
        make_usage(usage_id=1, quantity=2),
    ]
    out = format_usage_log(records)
    lines = out.splitlines()
    assert lines.index(next(l for l in lines if "2026-03-09 08:00" in l)) < lines.index(
        next(l for l in lines if "2026-03-10 09:30" in l)
    )
    assert "print run" in out
    assert "2 record(s), 6 unit(s)" in out
    assert "(no usage recorded)" in format_usage_log([])
