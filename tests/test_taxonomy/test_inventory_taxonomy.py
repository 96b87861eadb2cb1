"""Tests for inventory taxonomy integrity: enums, display strings, uniqueness."""

from __future__ import annotations

import pytest

from inventory_tracker.taxonomy.inventory_taxonomy import (
    AuditAction,
    ForecastPriority,
    ItemCategory,
    ItemStatus,
    RecommendationType,
    SupplierCategory,
)


class TestItemCategory:
    def test_expected_categories(self):
        assert {c.value for c in ItemCategory} == {
            "stationery", "equipment", "electronics", "furniture", "other",
        }

    def test_values_are_lowercase_slugs(self):
        for member in ItemCategory:
            assert member.value == member.value.lower()
            assert " " not in member.value


class TestSupplierCategory:
    def test_general_is_a_supplier_category(self):
        assert SupplierCategory("general") is SupplierCategory.GENERAL

    def test_other_is_not_a_supplier_category(self):
        with pytest.raises(ValueError):
            SupplierCategory("other")


class TestItemStatus:
    def test_display_strings(self):
        assert ItemStatus.HEALTHY == "Healthy"
        assert ItemStatus.LOW == "Low"
        assert ItemStatus.OUT_OF_STOCK == "Out of Stock"

    def test_exactly_three_statuses(self):
        assert len(ItemStatus) == 3


@pytest.mark.parametrize(
    "enum_cls", [ItemCategory, SupplierCategory, ItemStatus, ForecastPriority,
                 AuditAction, RecommendationType],
)
def test_no_duplicate_values(enum_cls):
    values = [m.value for m in enum_cls]
    assert len(values) == len(set(values))


def test_audit_actions():
    assert {a.value for a in AuditAction} == {
        "add", "edit", "delete", "usage", "restock", "system",
    }


def test_str_of_member_is_its_value():
    assert str(ForecastPriority.HIGH) == "high"
    assert f"{RecommendationType.WARNING}" == "warning"
