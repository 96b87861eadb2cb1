"""
CSV import parser for inventory items.

Format: comma delimited with a header row.  Header names are matched
case-insensitively and spaces count as underscores, so a spreadsheet export
with ``Name, Category, Stock, Reorder Level`` works as well as the canonical
names below.

Required columns:
  name, category, current_stock (alias: stock), reorder_level

Optional columns (empty string -> default):
  daily_usage  (default 0)
  unit_price   (default 0)
  sku, description

Category values are lowercased and must be one of ``ItemCategory``:
  stationery, equipment, electronics, furniture, other

See ``config/items/item_import_template.csv`` for an example.
"""

from __future__ import annotations

import csv
import logging
import math
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from inventory_tracker.models.item import InventoryItem
from inventory_tracker.taxonomy.inventory_taxonomy import ItemCategory

logger = logging.getLogger(__name__)

REQUIRED_CSV_COLUMNS = frozenset({"name", "category", "current_stock", "reorder_level"})

_COLUMN_ALIASES: dict[str, str] = {
    "stock": "current_stock",
    "item": "name",
    "item_name": "name",
}

_MAX_ERRORS_SHOWN = 10


def parse_item_csv(path: Path) -> list[InventoryItem]:
    """Parse a CSV file into validated :class:`InventoryItem` objects.

    All rows are validated before any are returned.  If any row fails, a
    single :class:`ValueError` lists the first 10 failures.

    Args:
        path: Path to the CSV file.

    Returns:
        Validated items without ``item_id`` (assigned on insert).

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        ValueError: If required columns are missing or any row is invalid.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Item CSV file not found: {path}")

    with open(path, encoding="utf-8-sig", newline="") as f:
        reader = csv.DictReader(f)

        if reader.fieldnames is None:
            raise ValueError(f"CSV file is empty or has no header row: {path}")

        header_map = {raw: normalize_column(raw) for raw in reader.fieldnames if raw}
        missing = REQUIRED_CSV_COLUMNS - set(header_map.values())
        if missing:
            raise ValueError(
                f"CSV missing required columns: {sorted(missing)}\n"
                f"Found columns: {sorted(reader.fieldnames)}"
            )

        rows = [
            {header_map[k]: (v or "") for k, v in raw_row.items() if k in header_map}
            for raw_row in reader
        ]

    if not rows:
        logger.warning("Item CSV is empty (header only): %s", path)
        return []

    items: list[InventoryItem] = []
    errors: list[tuple[int, str]] = []

    for i, row in enumerate(rows):
        line_no = i + 2  # 1-based, skip header row
        try:
            items.append(_row_to_item(row))
        except (ValueError, ValidationError) as exc:
            errors.append((line_no, str(exc)))

    if errors:
        detail = "\n".join(f"  Row {ln}: {msg}" for ln, msg in errors[:_MAX_ERRORS_SHOWN])
        extra = len(errors) - _MAX_ERRORS_SHOWN
        suffix = f"\n  ... and {extra} more" if extra > 0 else ""
        raise ValueError(
            f"{len(errors)} row(s) failed validation in {path.name}:\n{detail}{suffix}"
        )

    logger.info("Parsed %d items from %s", len(items), path.name)
    return items


def normalize_column(header: str) -> str:
    """Map a raw header cell to its canonical column name."""
    key = header.strip().lower().replace(" ", "_")
    return _COLUMN_ALIASES.get(key, key)


# ── Private helpers ────────────────────────────────────────────────────────────

def _row_to_item(row: dict[str, str]) -> InventoryItem:
    return InventoryItem(
        name=_req(row, "name"),
        category=_parse_category(row),
        current_stock=_parse_int(row, "current_stock", required=True),
        reorder_level=_parse_int(row, "reorder_level", required=True),
        daily_usage=_parse_float(row, "daily_usage", default=0.0),
        unit_price=_parse_float(row, "unit_price", default=0.0),
        sku=_opt(row, "sku"),
        description=_opt(row, "description"),
    )


def _req(row: dict[str, str], key: str) -> str:
    v = row.get(key, "").strip()
    if not v:
        raise ValueError(f"Required field '{key}' is empty.")
    return v


def _opt(row: dict[str, str], key: str) -> Optional[str]:
    v = row.get(key, "").strip()
    return v if v else None


def _parse_category(row: dict[str, str]) -> ItemCategory:
    raw = _req(row, "category").lower()
    try:
        return ItemCategory(raw)
    except ValueError:
        valid = sorted(c.value for c in ItemCategory)
        raise ValueError(f"Invalid category '{raw}'. Valid values: {valid}")


def _parse_int(row: dict[str, str], key: str, required: bool = False, default: int = 0) -> int:
    v = _opt(row, key)
    if v is None:
        if required:
            raise ValueError(f"Required field '{key}' is empty.")
        return default
    try:
        return int(v)
    except ValueError:
        raise ValueError(f"Invalid integer for '{key}': '{v}'.")


def _parse_float(row: dict[str, str], key: str, default: float = 0.0) -> float:
    v = _opt(row, key)
    if v is None:
        return default
    try:
        value = float(v)
    except ValueError:
        raise ValueError(f"Invalid number for '{key}': '{v}'.")
    if not math.isfinite(value):
        raise ValueError(f"Invalid number for '{key}': '{v}'.")
    return value
