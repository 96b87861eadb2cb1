"""
Department Inventory Tracker: CLI entry point.

All commands follow this pattern:
  1. Load ``AppConfig`` via ``load_config()``.
  2. Configure logging.
  3. Open the store (schema applied on first use).
  4. Call the ledger (writes) or the engine (derived views).
  5. Print the result via ``reporting.formatters``.

Install and run::

    pip install -e .
    inventory-tracker --help
    inventory-tracker init-db
    inventory-tracker import-items config/items/item_import_template.csv
    inventory-tracker record-usage 2 5
    inventory-tracker list-usage --item 2
    inventory-tracker dashboard
    inventory-tracker forecast
    inventory-tracker export-forecast --format csv
"""

from __future__ import annotations

import json
from contextlib import contextmanager
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Optional

import typer

app = typer.Typer(
    name="inventory-tracker",
    help="Department inventory tracker: stock, usage, forecasts and reorder advice.",
    add_completion=False,
)


# ── Helpers ───────────────────────────────────────────────────────────────────

def _load_config_or_exit(config_path: Optional[str] = None):
    """Load AppConfig, printing a friendly error and exiting on failure."""
    from inventory_tracker.config import load_config

    try:
        cfg_path = Path(config_path) if config_path else None
        return load_config(cfg_path)
    except FileNotFoundError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except Exception as exc:
        typer.echo(f"[ERROR] Config validation failed: {exc}", err=True)
        raise typer.Exit(code=1)


def _configure_logging(config):
    """Set up logging from config."""
    from inventory_tracker.utils.logging import configure_logging
    configure_logging(config.logging)


def _setup(config_path: Optional[str]):
    config = _load_config_or_exit(config_path)
    _configure_logging(config)
    return config


@contextmanager
def _store(config):
    """Open the configured database with the schema applied."""
    from inventory_tracker.db.connection import open_store
    from inventory_tracker.db.schema import apply_schema

    with open_store(config) as conn:
        apply_schema(conn)
        yield conn


def _ledger(conn, config):
    from inventory_tracker.ledger import InventoryLedger
    return InventoryLedger(
        conn,
        user=config.audit.default_user,
        retention=config.audit.retention,
    )


def _fail(exc: Exception) -> None:
    """Print a write-path error and exit with code 1."""
    typer.echo(f"[ERROR] {exc}", err=True)
    raise typer.Exit(code=1)


def _write_errors():
    """Exception types the write path raises for bad user input."""
    import sqlite3

    from pydantic import ValidationError

    from inventory_tracker.ledger import RecordNotFoundError
    return (RecordNotFoundError, ValidationError, ValueError, sqlite3.IntegrityError)


def _parse_date_option(value: Optional[str], option: str) -> Optional[date]:
    if value is None:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise typer.BadParameter(f"Expected YYYY-MM-DD, got '{value}'.", param_hint=option)


# ── Setup commands ────────────────────────────────────────────────────────────

@app.command("init-db")
def init_db(
    db_path: Optional[str] = typer.Option(
        None,
        "--db-path",
        help="Override DB path from config (e.g. data/db/test.db).",
    ),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
) -> None:
    """Initialize the SQLite database and apply the schema.

    Safe to run multiple times; all DDL uses IF NOT EXISTS.
    """
    from inventory_tracker.db.connection import get_connection
    from inventory_tracker.db.schema import ALL_TABLE_NAMES, apply_schema

    config = _setup(config_path)

    target_path = db_path or config.database.db_path
    typer.echo(f"Initializing database at: {target_path}")

    with get_connection(
        target_path,
        wal_mode=config.database.wal_mode,
        busy_timeout_ms=config.database.busy_timeout_ms,
    ) as conn:
        apply_schema(conn)

    typer.echo(f"  Tables: {len(ALL_TABLE_NAMES)} created/verified.")
    typer.echo("[OK] Database ready.")


@app.command("validate-config")
def validate_config(
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file (default: config/default.toml).",
    ),
    show_full: bool = typer.Option(
        False,
        "--full",
        help="Print full config including all fields.",
    ),
) -> None:
    """Validate the configuration file and print parsed values.

    Exits with code 1 if the config fails validation.
    """
    config = _load_config_or_exit(config_path)

    typer.echo("Configuration validated successfully.")
    typer.echo("")
    typer.echo(f"  Database path:     {config.database.db_path}")
    typer.echo(f"  Lead time (days):  {config.forecast.lead_time_days}")
    typer.echo(
        f"  Priority buckets:  high <= {config.forecast.high_priority_days}d, "
        f"medium <= {config.forecast.medium_priority_days}d"
    )
    typer.echo(f"  Max cards:         {config.recommendations.max_cards}")
    typer.echo(f"  Audit retention:   {config.audit.retention}")
    typer.echo(f"  Log level:         {config.logging.level}")
    typer.echo(f"  Debug mode:        {config.debug}")

    if show_full:
        typer.echo("")
        typer.echo("Full config (JSON):")
        typer.echo(json.dumps(config.model_dump(), indent=2, default=str))


# ── Item commands ─────────────────────────────────────────────────────────────

@app.command("add-item")
def add_item(
    name: str = typer.Option(..., "--name", help="Item name."),
    category: str = typer.Option(
        ..., "--category",
        help="stationery, equipment, electronics, furniture or other.",
    ),
    stock: int = typer.Option(0, "--stock", help="Initial stock on hand."),
    reorder_level: int = typer.Option(1, "--reorder-level", help="Low-stock threshold (>= 1)."),
    daily_usage: float = typer.Option(0.0, "--daily-usage", help="Estimated units used per day."),
    unit_price: float = typer.Option(0.0, "--unit-price", help="Unit cost."),
    supplier_id: Optional[int] = typer.Option(None, "--supplier-id", help="Supplier id."),
    sku: Optional[str] = typer.Option(None, "--sku", help="Stock-keeping unit code."),
    description: Optional[str] = typer.Option(None, "--description", help="Free-form text."),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """Add a new inventory item."""
    from inventory_tracker.models.item import InventoryItem

    config = _setup(config_path)
    with _store(config) as conn:
        try:
            item = InventoryItem(
                name=name,
                category=category.lower(),
                current_stock=stock,
                reorder_level=reorder_level,
                daily_usage=daily_usage,
                unit_price=unit_price,
                supplier_id=supplier_id,
                sku=sku,
                description=description,
            )
            stored = _ledger(conn, config).add_item(item)
        except _write_errors() as exc:
            _fail(exc)

    typer.echo(f"[OK] Added item {stored.item_id}: {stored.name} ({stored.status})")


@app.command("update-item")
def update_item(
    item_id: int = typer.Argument(..., help="Item id."),
    name: Optional[str] = typer.Option(None, "--name"),
    category: Optional[str] = typer.Option(None, "--category"),
    stock: Optional[int] = typer.Option(None, "--stock"),
    reorder_level: Optional[int] = typer.Option(None, "--reorder-level"),
    daily_usage: Optional[float] = typer.Option(None, "--daily-usage"),
    unit_price: Optional[float] = typer.Option(None, "--unit-price"),
    supplier_id: Optional[int] = typer.Option(None, "--supplier-id"),
    sku: Optional[str] = typer.Option(None, "--sku"),
    description: Optional[str] = typer.Option(None, "--description"),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """Change fields of an existing item.  Only given options are changed."""
    changes = {
        "name": name,
        "category": category.lower() if category else None,
        "current_stock": stock,
        "reorder_level": reorder_level,
        "daily_usage": daily_usage,
        "unit_price": unit_price,
        "supplier_id": supplier_id,
        "sku": sku,
        "description": description,
    }
    changes = {k: v for k, v in changes.items() if v is not None}
    if not changes:
        typer.echo("[ERROR] Nothing to update; pass at least one option.", err=True)
        raise typer.Exit(code=1)

    config = _setup(config_path)
    with _store(config) as conn:
        try:
            updated = _ledger(conn, config).update_item(item_id, **changes)
        except _write_errors() as exc:
            _fail(exc)

    typer.echo(f"[OK] Updated item {item_id}: {updated.name} ({updated.status})")


@app.command("delete-item")
def delete_item(
    item_id: int = typer.Argument(..., help="Item id."),
    purge_usage: bool = typer.Option(
        False, "--purge-usage", help="Also delete this item's usage history.",
    ),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """Delete an item.  Usage history is kept unless --purge-usage is given."""
    config = _setup(config_path)
    with _store(config) as conn:
        try:
            item = _ledger(conn, config).delete_item(item_id, purge_usage=purge_usage)
        except _write_errors() as exc:
            _fail(exc)

    typer.echo(f"[OK] Deleted item {item_id}: {item.name}")


@app.command("list-items")
def list_items(
    category: Optional[str] = typer.Option(None, "--category", help="Filter by category."),
    page: int = typer.Option(1, "--page", help="1-based page number."),
    limit: int = typer.Option(50, "--limit", help="Items per page."),
    export: Optional[Path] = typer.Option(
        None, "--export", help="Also write every listed item to this CSV file.",
    ),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """List inventory items with their current status."""
    from inventory_tracker.db.repositories.item_repo import InventoryItemRepository
    from inventory_tracker.db.repositories.supplier_repo import SupplierRepository
    from inventory_tracker.reporting.export import (
        INVENTORY_EXPORT_COLUMNS,
        export_to_csv,
        inventory_rows_for_export,
    )
    from inventory_tracker.reporting.formatters import format_inventory_table

    config = _setup(config_path)
    with _store(config) as conn:
        repo = InventoryItemRepository(conn)
        try:
            items = repo.list_page(page=page, limit=limit, category=category)
        except ValueError as exc:
            _fail(exc)
        total = repo.count(category=category)
        suppliers = SupplierRepository(conn).get_all()

    typer.echo(format_inventory_table(items, suppliers))
    if total > len(items):
        typer.echo(f"  Page {page} ({len(items)} of {total} items)")

    if export is not None:
        written = export_to_csv(
            inventory_rows_for_export(items), export, fieldnames=INVENTORY_EXPORT_COLUMNS
        )
        typer.echo(f"[OK] {len(items)} item(s) written to {written}")


@app.command("import-items")
def import_items(
    csv_file: Path = typer.Argument(..., help="CSV file with a header row."),
    dry_run: bool = typer.Option(
        False, "--dry-run", help="Validate and print items without writing.",
    ),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """Import inventory items from a CSV file.

    Every row is validated first; nothing is written if any row fails.
    """
    from inventory_tracker.ingestion.item_csv import parse_item_csv
    from inventory_tracker.reporting.formatters import format_inventory_table

    config = _setup(config_path)

    try:
        items = parse_item_csv(csv_file)
    except (FileNotFoundError, ValueError) as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)

    if dry_run:
        typer.echo(format_inventory_table(items))
        typer.echo(f"[DRY RUN] {len(items)} item(s) validated; nothing written.")
        return

    with _store(config) as conn:
        stored = _ledger(conn, config).import_items(items)

    typer.echo(f"[OK] Imported {len(stored)} item(s) from {csv_file.name}")


# ── Stock movement ────────────────────────────────────────────────────────────

@app.command("record-usage")
def record_usage(
    item_id: int = typer.Argument(..., help="Item id."),
    quantity: int = typer.Argument(..., help="Units used (> 0)."),
    used_on: Optional[str] = typer.Option(
        None, "--date", help="Day of use, YYYY-MM-DD (default: now).",
    ),
    notes: Optional[str] = typer.Option(None, "--notes", help="Optional note."),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """Record consumption of an item.  Stock never drops below zero."""
    day = _parse_date_option(used_on, "--date")
    used_at = (
        datetime.combine(day, datetime.min.time(), tzinfo=timezone.utc) if day else None
    )

    config = _setup(config_path)
    with _store(config) as conn:
        try:
            record, item = _ledger(conn, config).record_usage(
                item_id, quantity, used_at=used_at, notes=notes
            )
        except _write_errors() as exc:
            _fail(exc)

    typer.echo(
        f"[OK] Usage {record.usage_id}: {record.quantity} of {item.name}; "
        f"stock now {item.current_stock} ({item.status})"
    )
    if item.status != "Healthy":
        typer.echo(f"  [ALERT] {item.name} needs attention ({item.current_stock} left)")


@app.command("delete-usage")
def delete_usage(
    usage_id: int = typer.Argument(..., help="Usage record id."),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """Delete a usage record and put its quantity back on the item."""
    config = _setup(config_path)
    with _store(config) as conn:
        try:
            item = _ledger(conn, config).delete_usage(usage_id)
        except _write_errors() as exc:
            _fail(exc)

    if item is None:
        typer.echo(f"[OK] Deleted usage {usage_id}; its item no longer exists.")
    else:
        typer.echo(
            f"[OK] Deleted usage {usage_id}; {item.name} stock restored to {item.current_stock}"
        )


@app.command("list-usage")
def list_usage(
    item_id: Optional[int] = typer.Option(None, "--item", help="Only this item's records."),
    since: Optional[str] = typer.Option(None, "--since", help="First day, YYYY-MM-DD."),
    limit: int = typer.Option(50, "--limit", help="Show at most this many records."),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """Show usage records, newest first.  Ids feed 'delete-usage'."""
    from inventory_tracker.db.repositories.usage_repo import UsageRecordRepository
    from inventory_tracker.reporting.formatters import format_usage_log

    if limit < 1:
        raise typer.BadParameter(f"must be >= 1, got {limit}.", param_hint="--limit")
    day = _parse_date_option(since, "--since")
    since_dt = (
        datetime.combine(day, datetime.min.time(), tzinfo=timezone.utc) if day else None
    )

    config = _setup(config_path)
    with _store(config) as conn:
        repo = UsageRecordRepository(conn)
        if item_id is not None:
            records = repo.get_for_item(item_id)
            if since_dt is not None:
                records = [r for r in records if r.used_at >= since_dt]
        elif since_dt is not None:
            records = repo.get_since(since_dt)
        else:
            records = repo.get_all()

    newest_first = list(reversed(records))
    typer.echo(format_usage_log(newest_first[:limit]))
    if len(newest_first) > limit:
        typer.echo(f"  Showing {limit} of {len(newest_first)} records")


@app.command("restock")
def restock(
    item_id: int = typer.Argument(..., help="Item id."),
    quantity: int = typer.Argument(..., help="Units received (> 0)."),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """Add received units to an item's stock."""
    config = _setup(config_path)
    with _store(config) as conn:
        try:
            item = _ledger(conn, config).restock_item(item_id, quantity)
        except _write_errors() as exc:
            _fail(exc)

    typer.echo(f"[OK] Restocked {item.name}: stock now {item.current_stock} ({item.status})")


# ── Suppliers ─────────────────────────────────────────────────────────────────

@app.command("add-supplier")
def add_supplier(
    name: str = typer.Option(..., "--name", help="Company name."),
    contact: str = typer.Option(..., "--contact", help="Contact person."),
    email: str = typer.Option(..., "--email", help="Contact email."),
    phone: str = typer.Option(..., "--phone", help="Contact phone."),
    category: str = typer.Option("general", "--category", help="Primary line of goods."),
    address: Optional[str] = typer.Option(None, "--address", help="Postal address."),
    rating: int = typer.Option(3, "--rating", help="1 (poor) to 5 (excellent)."),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """Add a supplier."""
    from inventory_tracker.models.supplier import Supplier

    config = _setup(config_path)
    with _store(config) as conn:
        try:
            supplier = Supplier(
                name=name,
                contact=contact,
                email=email,
                phone=phone,
                category=category.lower(),
                address=address,
                rating=rating,
            )
            stored = _ledger(conn, config).add_supplier(supplier)
        except _write_errors() as exc:
            _fail(exc)

    typer.echo(f"[OK] Added supplier {stored.supplier_id}: {stored.name}")


@app.command("update-supplier")
def update_supplier(
    supplier_id: int = typer.Argument(..., help="Supplier id."),
    name: Optional[str] = typer.Option(None, "--name"),
    contact: Optional[str] = typer.Option(None, "--contact"),
    email: Optional[str] = typer.Option(None, "--email"),
    phone: Optional[str] = typer.Option(None, "--phone"),
    category: Optional[str] = typer.Option(None, "--category"),
    address: Optional[str] = typer.Option(None, "--address"),
    rating: Optional[int] = typer.Option(None, "--rating"),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """Change fields of an existing supplier.  Only given options are changed."""
    changes = {
        "name": name,
        "contact": contact,
        "email": email,
        "phone": phone,
        "category": category.lower() if category else None,
        "address": address,
        "rating": rating,
    }
    changes = {k: v for k, v in changes.items() if v is not None}
    if not changes:
        typer.echo("[ERROR] Nothing to update; pass at least one option.", err=True)
        raise typer.Exit(code=1)

    config = _setup(config_path)
    with _store(config) as conn:
        try:
            updated = _ledger(conn, config).update_supplier(supplier_id, **changes)
        except _write_errors() as exc:
            _fail(exc)

    typer.echo(f"[OK] Updated supplier {supplier_id}: {updated.name}")


@app.command("delete-supplier")
def delete_supplier(
    supplier_id: int = typer.Argument(..., help="Supplier id."),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """Delete a supplier.  Items keep their supplier reference."""
    config = _setup(config_path)
    with _store(config) as conn:
        try:
            supplier = _ledger(conn, config).delete_supplier(supplier_id)
        except _write_errors() as exc:
            _fail(exc)

    typer.echo(f"[OK] Deleted supplier {supplier_id}: {supplier.name}")


@app.command("list-suppliers")
def list_suppliers(
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """List suppliers."""
    from inventory_tracker.db.repositories.supplier_repo import SupplierRepository
    from inventory_tracker.reporting.formatters import format_supplier_table

    config = _setup(config_path)
    with _store(config) as conn:
        suppliers = SupplierRepository(conn).get_all()

    typer.echo(format_supplier_table(suppliers))


# ── Derived views ─────────────────────────────────────────────────────────────

@app.command("forecast")
def forecast(
    today: Optional[str] = typer.Option(
        None, "--today", help="Reference date YYYY-MM-DD (default: today, UTC).",
    ),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """Show the reorder forecast, most urgent first."""
    from inventory_tracker.forecast.table import build_forecast
    from inventory_tracker.reporting.formatters import format_forecast_table
    from inventory_tracker.snapshot import load_snapshot

    ref = _parse_date_option(today, "--today")
    config = _setup(config_path)
    with _store(config) as conn:
        snapshot = load_snapshot(conn)

    rows = build_forecast(snapshot.items, ref, **config.forecast.model_dump())
    typer.echo(format_forecast_table(rows))


@app.command("recommend")
def recommend(
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """Show the ranked recommendation cards."""
    from inventory_tracker.recommendations.ranker import generate_recommendations
    from inventory_tracker.reporting.formatters import format_recommendations
    from inventory_tracker.snapshot import load_snapshot

    config = _setup(config_path)
    with _store(config) as conn:
        snapshot = load_snapshot(conn)

    cards = generate_recommendations(
        snapshot.items, snapshot.suppliers, **config.recommendations.model_dump()
    )
    typer.echo(format_recommendations(cards))


@app.command("dashboard")
def dashboard(
    today: Optional[str] = typer.Option(
        None, "--today", help="Last day of the usage trend, YYYY-MM-DD.",
    ),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """Print the dashboard summary: totals, cards, attention list, top used, trend."""
    from inventory_tracker.analytics.aggregates import compute_dashboard_totals, needs_attention
    from inventory_tracker.analytics.usage import top_used_items, usage_peak, usage_trend
    from inventory_tracker.recommendations.ranker import generate_recommendations
    from inventory_tracker.reporting.formatters import format_dashboard_summary
    from inventory_tracker.snapshot import load_snapshot

    ref = _parse_date_option(today, "--today")
    config = _setup(config_path)
    with _store(config) as conn:
        snapshot = load_snapshot(conn)

    dash = config.dashboard
    trend = usage_trend(snapshot.usage, window_days=dash.trend_window_days, today=ref)
    typer.echo(
        format_dashboard_summary(
            totals=compute_dashboard_totals(snapshot.items),
            attention=needs_attention(snapshot.items, limit=dash.attention_limit),
            top_used=top_used_items(snapshot.usage, snapshot.items, n=dash.top_used_limit),
            trend=trend,
            peak=usage_peak(trend),
            cards=generate_recommendations(
                snapshot.items, snapshot.suppliers, **config.recommendations.model_dump()
            ),
        )
    )


@app.command("order-request")
def order_request(
    export: Optional[Path] = typer.Option(
        None, "--export", help="Also write the order lines to this CSV file.",
    ),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """List items to reorder with suggested quantities."""
    from inventory_tracker.recommendations.order_request import build_order_request
    from inventory_tracker.reporting.export import (
        ORDER_EXPORT_COLUMNS,
        export_to_csv,
        order_request_rows_for_export,
    )
    from inventory_tracker.reporting.formatters import format_order_request
    from inventory_tracker.snapshot import load_snapshot

    config = _setup(config_path)
    with _store(config) as conn:
        snapshot = load_snapshot(conn)

    lines = build_order_request(snapshot.items, snapshot.suppliers)
    typer.echo(format_order_request(lines))

    if export is not None:
        written = export_to_csv(
            order_request_rows_for_export(lines), export, fieldnames=ORDER_EXPORT_COLUMNS
        )
        typer.echo(f"[OK] Order request written to {written}")


@app.command("alerts")
def alerts(
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """Show a stock alert for every Low or Out of Stock item."""
    from inventory_tracker.recommendations.alerts import derive_stock_alerts
    from inventory_tracker.reporting.formatters import format_stock_alerts
    from inventory_tracker.snapshot import load_snapshot

    config = _setup(config_path)
    with _store(config) as conn:
        snapshot = load_snapshot(conn)

    typer.echo(format_stock_alerts(derive_stock_alerts(snapshot.items)))


@app.command("audit-log")
def audit_log(
    action: Optional[str] = typer.Option(
        None, "--action", help="add, edit, delete, usage, restock or system.",
    ),
    start: Optional[str] = typer.Option(None, "--start", help="First day, YYYY-MM-DD."),
    end: Optional[str] = typer.Option(None, "--end", help="Last day (inclusive), YYYY-MM-DD."),
    page: int = typer.Option(1, "--page", help="1-based page number."),
    limit: int = typer.Option(50, "--limit", help="Entries per page."),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """Show the audit trail, newest first."""
    from inventory_tracker.db.repositories.audit_repo import AuditLogRepository
    from inventory_tracker.reporting.formatters import format_audit_log
    from inventory_tracker.taxonomy.inventory_taxonomy import AuditAction

    if action is not None and action not in {a.value for a in AuditAction}:
        raise typer.BadParameter(
            f"Unknown action '{action}'. Valid: {sorted(a.value for a in AuditAction)}",
            param_hint="--action",
        )
    start_day = _parse_date_option(start, "--start")
    end_day = _parse_date_option(end, "--end")

    config = _setup(config_path)
    with _store(config) as conn:
        try:
            entries = AuditLogRepository(conn).list_entries(
                action=action, start=start_day, end=end_day, page=page, limit=limit
            )
        except ValueError as exc:
            _fail(exc)

    typer.echo(format_audit_log(entries))


@app.command("clear-audit")
def clear_audit(
    yes: bool = typer.Option(False, "--yes", help="Skip the confirmation prompt."),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """Delete every audit entry.  Items, usage and suppliers are untouched."""
    if not yes:
        typer.confirm("This permanently deletes the audit trail. Continue?", abort=True)

    config = _setup(config_path)
    with _store(config) as conn:
        removed = _ledger(conn, config).clear_audit_log()

    typer.echo(f"[OK] Audit log cleared ({removed} entries removed).")


@app.command("export-forecast")
def export_forecast(
    fmt: str = typer.Option("csv", "--format", help="csv or json."),
    output: Optional[Path] = typer.Option(
        None, "--output", help="Destination file (default: <export_dir>/forecast_<date>.<fmt>).",
    ),
    today: Optional[str] = typer.Option(None, "--today", help="Reference date YYYY-MM-DD."),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """Export the reorder forecast to CSV or JSON."""
    from inventory_tracker.forecast.table import build_forecast
    from inventory_tracker.reporting.export import (
        FORECAST_EXPORT_COLUMNS,
        export_to_csv,
        export_to_json,
        forecast_rows_for_export,
    )
    from inventory_tracker.snapshot import load_snapshot
    from inventory_tracker.utils.time_utils import utc_today

    fmt = fmt.lower()
    if fmt not in ("csv", "json"):
        raise typer.BadParameter("Expected 'csv' or 'json'.", param_hint="--format")
    ref = _parse_date_option(today, "--today") or utc_today()

    config = _setup(config_path)
    with _store(config) as conn:
        snapshot = load_snapshot(conn)

    rows = forecast_rows_for_export(
        build_forecast(snapshot.items, ref, **config.forecast.model_dump())
    )
    target = output or Path(config.data.export_dir) / f"forecast_{ref.isoformat()}.{fmt}"

    if fmt == "csv":
        written = export_to_csv(rows, target, fieldnames=FORECAST_EXPORT_COLUMNS)
    else:
        written = export_to_json(
            {"generated_on": ref.isoformat(), "rows": rows}, target
        )
    typer.echo(f"[OK] {len(rows)} forecast row(s) written to {written}")


@app.command("clear-data")
def clear_data(
    yes: bool = typer.Option(False, "--yes", help="Skip the confirmation prompt."),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """Delete ALL items, usage, suppliers and audit entries."""
    from inventory_tracker.ledger import clear_all_data

    if not yes:
        typer.confirm("This permanently deletes all data. Continue?", abort=True)

    config = _setup(config_path)
    with _store(config) as conn:
        removed = clear_all_data(conn)

    for table, count in removed.items():
        typer.echo(f"  {table:<16} {count:>6} row(s) removed")
    typer.echo("[OK] All data cleared.")


if __name__ == "__main__":
    app()
