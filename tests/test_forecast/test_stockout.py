"""
Tests for inventory_tracker/forecast/stockout.py.

What we test
------------
days_until_stockout():
  - Zero usage never runs out.
  - Uses floor, not round.
  - Monotone non-increasing as usage grows (stock fixed).
StockoutProjection:
  - sort_key puts every finite projection before NEVER_RUNS_OUT.
  - Renders as the integer or "N/A".
  - within()/beyond() are false for NEVER_RUNS_OUT.
"""

from __future__ import annotations

import pytest

from inventory_tracker.forecast.stockout import (
    NEVER_RUNS_OUT,
    StockoutProjection,
    days_until_stockout,
)


class TestDaysUntilStockout:
    def test_zero_usage_never_runs_out(self, make_item):
        proj = days_until_stockout(make_item(current_stock=100, daily_usage=0))
        assert proj.never_runs_out
        assert proj is NEVER_RUNS_OUT or proj == NEVER_RUNS_OUT

    def test_floor_not_round(self, make_item):
        # 10 / 3 = 3.33 -> 3 ; 11 / 3 = 3.67 -> 3 (round would give 4)
        assert days_until_stockout(make_item(current_stock=10, daily_usage=3)).days == 3
        assert days_until_stockout(make_item(current_stock=11, daily_usage=3)).days == 3

    def test_zero_stock_with_usage_is_zero_days(self, make_item):
        assert days_until_stockout(make_item(current_stock=0, daily_usage=1)).days == 0

    def test_fractional_usage(self, make_item):
        assert days_until_stockout(make_item(current_stock=50, daily_usage=0.2)).days == 250

    def test_monotone_in_usage(self, make_item):
        usages = [0.1, 0.5, 1, 2, 2.5, 5, 7.5, 10, 40]
        days = [days_until_stockout(make_item(current_stock=45, daily_usage=u)).days for u in usages]
        assert days == sorted(days, reverse=True)


class TestStockoutProjection:
    def test_sort_key_orders_never_last(self):
        projections = [NEVER_RUNS_OUT, StockoutProjection.finite(10_000), StockoutProjection.finite(0)]
        ordered = sorted(projections, key=lambda p: p.sort_key)
        assert [p.days for p in ordered] == [0, 10_000, None]

    def test_str(self):
        assert str(StockoutProjection.finite(12)) == "12"
        assert str(NEVER_RUNS_OUT) == "N/A"

    def test_negative_finite_raises(self):
        with pytest.raises(ValueError):
            StockoutProjection.finite(-1)

    def test_within_and_beyond(self):
        seven = StockoutProjection.finite(7)
        assert seven.within(7)
        assert not seven.beyond(7)
        assert StockoutProjection.finite(8).beyond(7)
        assert not NEVER_RUNS_OUT.within(10**9)
        assert not NEVER_RUNS_OUT.beyond(0)
