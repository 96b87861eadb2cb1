"""
Tests for inventory_tracker/forecast/table.py.

What we test
------------
build_forecast():
  - Priority boundaries: 7 -> high, 8 -> medium, 14 -> medium, 15 -> low.
  - Never-runs-out rows are low priority with no order date, sorted last.
  - Suggested order date = today + max(0, days - lead_time).
  - Ascending order by days; ties keep input order.
  - Configurable thresholds and lead time.
  - Empty input -> empty list; same input twice -> identical output.
"""

from __future__ import annotations

from datetime import date, timedelta

import pytest

from inventory_tracker.forecast.table import build_forecast, forecast_priority
from inventory_tracker.forecast.stockout import NEVER_RUNS_OUT, StockoutProjection
from inventory_tracker.taxonomy.inventory_taxonomy import ForecastPriority, ItemStatus

TODAY = date(2026, 3, 1)


@pytest.mark.parametrize(
    "stock, expected_days, expected_priority, order_offset",
    [
        (14, 7, ForecastPriority.HIGH, 0),
        (16, 8, ForecastPriority.MEDIUM, 1),
        (28, 14, ForecastPriority.MEDIUM, 7),
        (30, 15, ForecastPriority.LOW, 8),
        (0, 0, ForecastPriority.HIGH, 0),
    ],
)
def test_priority_boundaries(make_item, stock, expected_days, expected_priority, order_offset):
    [row] = build_forecast([make_item(current_stock=stock, reorder_level=1, daily_usage=2)], TODAY)
    assert row.projection.days == expected_days
    assert row.priority is expected_priority
    assert row.suggested_order_date == TODAY + timedelta(days=order_offset)


def test_scenario_a_out_of_stock_item(make_item):
    item = make_item(current_stock=0, reorder_level=5, daily_usage=1)
    assert item.status is ItemStatus.OUT_OF_STOCK
    [row] = build_forecast([item], TODAY)
    assert row.projection.days == 0
    assert row.priority is ForecastPriority.HIGH


def test_scenario_b_zero_usage_item(make_item):
    item = make_item(current_stock=100, reorder_level=10, daily_usage=0)
    assert item.status is ItemStatus.HEALTHY
    [row] = build_forecast([item], TODAY)
    assert row.projection == NEVER_RUNS_OUT
    assert row.priority is ForecastPriority.LOW
    assert row.suggested_order_date is None


def test_scenario_c_ordering(make_item):
    healthy = make_item(name="Laptop", current_stock=50, reorder_level=10, daily_usage=0.2)
    low = make_item(name="Stapler", current_stock=3, reorder_level=5, daily_usage=1)
    rows = build_forecast([healthy, low], TODAY)
    assert [r.item.name for r in rows] == ["Stapler", "Laptop"]
    assert rows[0].priority is ForecastPriority.HIGH
    assert rows[1].projection.days == 250
    assert rows[1].priority is ForecastPriority.LOW


def test_never_runs_out_sorted_last(make_item):
    items = [
        make_item(name="Idle", current_stock=5, daily_usage=0),
        make_item(name="Slow", current_stock=1000, daily_usage=0.01),
        make_item(name="Fast", current_stock=5, daily_usage=5),
    ]
    rows = build_forecast(items, TODAY)
    assert [r.item.name for r in rows] == ["Fast", "Slow", "Idle"]


def test_ties_keep_input_order(make_item):
    items = [make_item(name=n, current_stock=10, daily_usage=1) for n in ("b", "a", "c")]
    items.append(make_item(name="z", current_stock=1, daily_usage=0))
    items.append(make_item(name="y", current_stock=1, daily_usage=0))
    rows = build_forecast(items, TODAY)
    assert [r.item.name for r in rows] == ["b", "a", "c", "z", "y"]


def test_sorted_ascending_property(make_item):
    items = [
        make_item(name=str(i), current_stock=s, daily_usage=u)
        for i, (s, u) in enumerate([(40, 3), (5, 0), (12, 1), (0, 2), (90, 0.5), (7, 7)])
    ]
    keys = [r.projection.sort_key for r in build_forecast(items, TODAY)]
    assert keys == sorted(keys)


def test_custom_thresholds(make_item):
    [row] = build_forecast(
        [make_item(current_stock=10, daily_usage=1)],
        TODAY,
        lead_time_days=3,
        high_priority_days=5,
        medium_priority_days=10,
    )
    assert row.priority is ForecastPriority.MEDIUM
    assert row.suggested_order_date == TODAY + timedelta(days=7)


def test_forecast_priority_for_never():
    assert forecast_priority(NEVER_RUNS_OUT) is ForecastPriority.LOW
    assert forecast_priority(StockoutProjection.finite(0)) is ForecastPriority.HIGH


def test_empty_input():
    assert build_forecast([], TODAY) == []


def test_idempotent(make_item):
    items = [make_item(name=str(i), current_stock=i * 3, daily_usage=i % 4) for i in range(10)]
    assert build_forecast(items, TODAY) == build_forecast(items, TODAY)


def test_default_today_is_used(make_item):
    [row] = build_forecast([make_item(current_stock=1, daily_usage=1)])
    assert row.suggested_order_date is not None
