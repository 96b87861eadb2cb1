"""Tests for InventoryItem, UsageRecord, Supplier, AuditLogEntry and Recommendation."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from inventory_tracker.forecast.stockout import NEVER_RUNS_OUT
from inventory_tracker.models.audit import AuditLogEntry
from inventory_tracker.models.item import InventoryItem
from inventory_tracker.models.recommendation import Recommendation
from inventory_tracker.models.supplier import Supplier
from inventory_tracker.models.usage import UsageRecord
from inventory_tracker.taxonomy.inventory_taxonomy import (
    AuditAction,
    ItemCategory,
    ItemStatus,
    SupplierCategory,
)


class TestInventoryItem:
    def test_valid_construction(self, make_item):
        item = make_item()
        assert item.item_id is None
        assert item.category is ItemCategory.STATIONERY
        assert item.current_stock == 45

    def test_name_is_stripped(self, make_item):
        assert make_item(name="  Stapler ").name == "Stapler"

    def test_blank_name_raises(self, make_item):
        with pytest.raises(ValidationError, match="name"):
            make_item(name="   ")

    def test_negative_stock_raises(self, make_item):
        with pytest.raises(ValidationError, match="non-negative"):
            make_item(current_stock=-1)

    def test_reorder_level_zero_raises(self, make_item):
        with pytest.raises(ValidationError, match="reorder_level"):
            make_item(reorder_level=0)

    def test_negative_usage_raises(self, make_item):
        with pytest.raises(ValidationError):
            make_item(daily_usage=-0.5)

    @pytest.mark.parametrize("field", ["daily_usage", "unit_price"])
    @pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_numbers_raise(self, make_item, field, value):
        with pytest.raises(ValidationError, match="finite"):
            make_item(**{field: value})

    def test_unknown_category_raises(self, make_item):
        with pytest.raises(ValidationError):
            make_item(category="food")

    def test_blank_sku_becomes_none(self, make_item):
        assert make_item(sku="  ").sku is None

    def test_frozen(self, make_item):
        item = make_item()
        with pytest.raises(ValidationError):
            item.current_stock = 3  # type: ignore[misc]

    def test_status_property(self, make_item):
        assert make_item(current_stock=0).status is ItemStatus.OUT_OF_STOCK
        assert make_item(current_stock=20, reorder_level=20).status is ItemStatus.LOW
        assert make_item(current_stock=21, reorder_level=20).status is ItemStatus.HEALTHY

    def test_days_until_stockout_property(self, make_item):
        assert make_item(current_stock=10, daily_usage=3).days_until_stockout.days == 3
        assert make_item(daily_usage=0).days_until_stockout == NEVER_RUNS_OUT

    def test_supplier_id_is_optional(self, make_item):
        assert make_item().supplier_id is None
        assert make_item(supplier_id=7).supplier_id == 7


class TestUsageRecord:
    def test_quantity_must_be_positive(self, make_usage):
        with pytest.raises(ValidationError, match="quantity"):
            make_usage(quantity=0)

    def test_naive_timestamp_tagged_utc(self, make_usage):
        rec = make_usage(used_at=datetime(2026, 3, 10, 9, 30))
        assert rec.used_at.tzinfo == timezone.utc
        assert rec.used_at.hour == 9

    def test_offset_timestamp_converted_to_utc(self, make_usage):
        est = timezone(timedelta(hours=-5))
        rec = make_usage(used_at=datetime(2026, 3, 9, 23, 30, tzinfo=est))
        assert rec.used_at == datetime(2026, 3, 10, 4, 30, tzinfo=timezone.utc)

    def test_default_used_at_is_now(self):
        before = datetime.now(tz=timezone.utc)
        rec = UsageRecord(item_id=1, item_name="Pens", category="stationery", quantity=1)
        assert rec.used_at >= before


class TestSupplier:
    def test_defaults(self):
        s = Supplier(name="Acme", contact="Ann", email="ann@acme.test", phone="555")
        assert s.category is SupplierCategory.GENERAL
        assert s.rating == 3

    def test_email_lowercased(self, make_supplier):
        assert make_supplier(email=" John@Office.COM ").email == "john@office.com"

    def test_invalid_email_raises(self, make_supplier):
        with pytest.raises(ValidationError, match="email"):
            make_supplier(email="not-an-email")

    @pytest.mark.parametrize("rating", [0, 6])
    def test_rating_out_of_range_raises(self, make_supplier, rating):
        with pytest.raises(ValidationError, match="rating"):
            make_supplier(rating=rating)


class TestAuditLogEntry:
    def test_default_user_is_admin(self):
        entry = AuditLogEntry(action="add", details="Added new item: Pens")
        assert entry.user == "Admin"
        assert entry.action is AuditAction.ADD

    def test_empty_details_raises(self):
        with pytest.raises(ValidationError, match="details"):
            AuditLogEntry(action="add", details=" ")

    def test_unknown_action_raises(self):
        with pytest.raises(ValidationError):
            AuditLogEntry(action="rename", details="x")


class TestRecommendation:
    def test_priority_bounds(self):
        with pytest.raises(ValidationError, match="priority"):
            Recommendation(rule_slug="x", type="info", title="t", text="t", priority=7)

    def test_action_optional(self):
        card = Recommendation(rule_slug="x", type="success", title="t", text="t", priority=5)
        assert card.action is None
