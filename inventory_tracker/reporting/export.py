"""
Export helpers for spreadsheets and manual analysis.

All writers return the written ``Path`` and accept generic ``list[dict]``
data so they stay decoupled from specific report shapes.  The
``*_rows_for_export`` adapters flatten engine output into such rows.

CSV exports are flat (no nested values) so they open directly in Excel or
pandas.
"""

from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import Sequence

from inventory_tracker.forecast.table import ForecastRow
from inventory_tracker.models.item import InventoryItem
from inventory_tracker.recommendations.order_request import OrderLine

FORECAST_EXPORT_COLUMNS = [
    "item_id", "name", "category", "current_stock", "reorder_level",
    "daily_usage", "status", "days_until_stockout", "priority",
    "suggested_order_date",
]

ORDER_EXPORT_COLUMNS = [
    "item_id", "name", "sku", "category", "current_stock", "reorder_level",
    "status", "order_quantity", "unit_price", "estimated_cost", "supplier",
]

INVENTORY_EXPORT_COLUMNS = [
    "item_id", "name", "category", "current_stock", "reorder_level",
    "daily_usage", "unit_price", "status", "supplier_id", "sku", "description",
]


def export_to_csv(
    records: list[dict],
    path: Path,
    fieldnames: list[str] | None = None,
) -> Path:
    """Write ``records`` to a UTF-8 CSV file.

    Args:
        records:    List of row dicts.
        path:       Destination file path (parent dirs created if missing).
        fieldnames: Column order.  If None, uses the keys of the first record.

    Returns:
        ``path`` as written.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    if not records and fieldnames is None:
        path.write_text("", encoding="utf-8")
        return path
    cols = fieldnames or list(records[0].keys())
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=cols, extrasaction="ignore")
        writer.writeheader()
        writer.writerows(records)
    return path


def export_to_json(data: dict | list, path: Path) -> Path:
    """Write ``data`` to a pretty-printed JSON file (dates via ``str``)."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2, default=str), encoding="utf-8")
    return path


def forecast_rows_for_export(rows: Sequence[ForecastRow]) -> list[dict]:
    """Flatten forecast rows.  Never-runs-out projections export as empty cells."""
    return [
        {
            "item_id":              r.item.item_id,
            "name":                 r.item.name,
            "category":             str(r.item.category),
            "current_stock":        r.item.current_stock,
            "reorder_level":        r.item.reorder_level,
            "daily_usage":          r.item.daily_usage,
            "status":               str(r.item.status),
            "days_until_stockout":  r.projection.days if r.projection.days is not None else "",
            "priority":             str(r.priority),
            "suggested_order_date": (
                r.suggested_order_date.isoformat() if r.suggested_order_date else ""
            ),
        }
        for r in rows
    ]


def order_request_rows_for_export(lines: Sequence[OrderLine]) -> list[dict]:
    return [
        {
            "item_id":        line.item.item_id,
            "name":           line.item.name,
            "sku":            line.item.sku or "",
            "category":       str(line.item.category),
            "current_stock":  line.item.current_stock,
            "reorder_level":  line.item.reorder_level,
            "status":         str(line.status),
            "order_quantity": line.order_quantity,
            "unit_price":     line.item.unit_price,
            "estimated_cost": line.estimated_cost,
            "supplier":       line.supplier_name or "",
        }
        for line in lines
    ]


def inventory_rows_for_export(items: Sequence[InventoryItem]) -> list[dict]:
    """Flatten items with their derived status (the inventory report)."""
    return [
        {
            "item_id":       i.item_id,
            "name":          i.name,
            "category":      str(i.category),
            "current_stock": i.current_stock,
            "reorder_level": i.reorder_level,
            "daily_usage":   i.daily_usage,
            "unit_price":    i.unit_price,
            "status":        str(i.status),
            "supplier_id":   i.supplier_id if i.supplier_id is not None else "",
            "sku":           i.sku or "",
            "description":   i.description or "",
        }
        for i in items
    ]
