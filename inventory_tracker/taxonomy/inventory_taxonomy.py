"""
Inventory taxonomy: the fixed vocabularies used across the tracker.

  - ``ItemCategory``      : what kind of stock an item is.
  - ``SupplierCategory``  : what a supplier mainly provides.
  - ``ItemStatus``        : derived stock health tier (never stored).
  - ``ForecastPriority``  : reorder urgency bucket in the forecast table.
  - ``AuditAction``       : kind of change recorded in the audit trail.
  - ``RecommendationType``: visual tone of a dashboard recommendation card.

``ItemStatus`` values keep the display strings shown on the dashboard
(``"Out of Stock"`` includes spaces).

This module has NO imports from any other ``inventory_tracker`` package.
"""

from enum import StrEnum


class ItemCategory(StrEnum):
    """Category of a stocked item."""

    STATIONERY = "stationery"
    EQUIPMENT = "equipment"
    ELECTRONICS = "electronics"
    FURNITURE = "furniture"
    OTHER = "other"


class SupplierCategory(StrEnum):
    """Primary line of goods a supplier provides."""

    GENERAL = "general"
    STATIONERY = "stationery"
    EQUIPMENT = "equipment"
    ELECTRONICS = "electronics"
    FURNITURE = "furniture"


class ItemStatus(StrEnum):
    """Stock health tier derived from current stock and reorder level."""

    HEALTHY = "Healthy"
    LOW = "Low"
    OUT_OF_STOCK = "Out of Stock"


class ForecastPriority(StrEnum):
    """Reorder urgency derived from days until stockout."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class AuditAction(StrEnum):
    """Kind of change recorded in the audit trail."""

    ADD = "add"
    EDIT = "edit"
    DELETE = "delete"
    USAGE = "usage"
    RESTOCK = "restock"
    SYSTEM = "system"


class RecommendationType(StrEnum):
    """Tone of a recommendation card."""

    WARNING = "warning"
    INFO = "info"
    SUCCESS = "success"
