"""
ASCII terminal formatters for CLI commands.

Every formatter takes engine output (models, rows, cards) and returns a plain
multi-line string suitable for ``typer.echo()``.

No third-party dependencies (no ``rich``, no ``colorama``).

Never-runs-out projections and their order dates render as ``N/A``.
"""

from __future__ import annotations

from typing import Iterable, Optional, Sequence

from inventory_tracker.analytics.aggregates import DashboardTotals
from inventory_tracker.analytics.usage import TopUsedItem, TrendBucket, UsagePeak
from inventory_tracker.forecast.table import ForecastRow
from inventory_tracker.models.audit import AuditLogEntry
from inventory_tracker.models.item import InventoryItem
from inventory_tracker.models.recommendation import Recommendation
from inventory_tracker.models.supplier import Supplier
from inventory_tracker.models.usage import UsageRecord
from inventory_tracker.recommendations.alerts import StockAlert
from inventory_tracker.recommendations.order_request import OrderLine, order_total

_NA = "N/A"

_CARD_TAGS = {
    "warning": "[!]",
    "info":    "[i]",
    "success": "[ok]",
}


def _rule(header: str) -> str:
    return "  " + "-" * (len(header) - 2)


def _clip(text: str, width: int) -> str:
    return text if len(text) <= width else text[: width - 3] + "..."


# ── Inventory ─────────────────────────────────────────────────────────────────


def format_inventory_table(
    items: Sequence[InventoryItem],
    suppliers: Optional[Iterable[Supplier]] = None,
) -> str:
    """Format the inventory list with derived status.

    Dangling supplier references render as ``-``.
    """
    names = {s.supplier_id: s.name for s in (suppliers or [])}
    lines = ["", "=== Inventory ==="]
    if not items:
        lines.append("  (no items; add one with 'add-item' or 'import-items')")
        return "\n".join(lines)

    header = (
        f"  {'ID':>4}  {'Name':<24}  {'Category':<11}  {'Stock':>6}  "
        f"{'Reorder':>7}  {'Use/day':>7}  {'Status':<12}  {'Supplier':<18}"
    )
    lines.append(header)
    lines.append(_rule(header))
    for item in items:
        supplier = names.get(item.supplier_id, "-") if item.supplier_id is not None else "-"
        lines.append(
            f"  {item.item_id or '':>4}  {_clip(item.name, 24):<24}  "
            f"{str(item.category):<11}  {item.current_stock:>6}  "
            f"{item.reorder_level:>7}  {item.daily_usage:>7.2f}  "
            f"{str(item.status):<12}  {_clip(supplier, 18):<18}"
        )
    lines.append("")
    lines.append(f"  {len(items)} item(s)")
    return "\n".join(lines)


def format_supplier_table(suppliers: Sequence[Supplier]) -> str:
    lines = ["", "=== Suppliers ==="]
    if not suppliers:
        lines.append("  (no suppliers)")
        return "\n".join(lines)

    header = (
        f"  {'ID':>4}  {'Name':<24}  {'Contact':<18}  {'Email':<28}  "
        f"{'Phone':<12}  {'Category':<11}  {'Rating':>6}"
    )
    lines.append(header)
    lines.append(_rule(header))
    for s in suppliers:
        lines.append(
            f"  {s.supplier_id or '':>4}  {_clip(s.name, 24):<24}  "
            f"{_clip(s.contact, 18):<18}  {_clip(s.email, 28):<28}  "
            f"{_clip(s.phone, 12):<12}  {str(s.category):<11}  {'*' * s.rating:>6}"
        )
    return "\n".join(lines)


# ── Forecast ──────────────────────────────────────────────────────────────────


def format_forecast_table(rows: Sequence[ForecastRow]) -> str:
    """Format the reorder forecast, most urgent first (as ordered by the builder)."""
    lines = ["", "=== Reorder Forecast ==="]
    if not rows:
        lines.append("  (no items to forecast)")
        return "\n".join(lines)

    header = (
        f"  {'Item':<24}  {'Stock':>6}  {'Use/day':>7}  {'Days left':>9}  "
        f"{'Priority':<8}  {'Order by':<10}"
    )
    lines.append(header)
    lines.append(_rule(header))
    for row in rows:
        order_by = row.suggested_order_date.isoformat() if row.suggested_order_date else _NA
        lines.append(
            f"  {_clip(row.item.name, 24):<24}  {row.item.current_stock:>6}  "
            f"{row.item.daily_usage:>7.2f}  {str(row.projection):>9}  "
            f"{str(row.priority):<8}  {order_by:<10}"
        )
    return "\n".join(lines)


# ── Recommendations ───────────────────────────────────────────────────────────


def format_recommendations(cards: Sequence[Recommendation]) -> str:
    lines = ["", "=== Recommendations ==="]
    if not cards:
        lines.append("  (nothing to recommend; the inventory is empty)")
        return "\n".join(lines)

    for card in cards:
        tag = _CARD_TAGS.get(str(card.type), "[-]")
        lines.append(f"  {tag:<4} {card.title}")
        lines.append(f"       {card.text}")
        if card.action:
            lines.append(f"       action: {card.action}")
    return "\n".join(lines)


# ── Dashboard ─────────────────────────────────────────────────────────────────


def format_dashboard_summary(
    totals: DashboardTotals,
    attention: Sequence[InventoryItem],
    top_used: Sequence[TopUsedItem],
    trend: Sequence[TrendBucket],
    peak: Optional[UsagePeak],
    cards: Sequence[Recommendation] = (),
) -> str:
    """Format the full dashboard: totals, cards, attention list, top used, trend."""
    lines = ["", "=== Dashboard ==="]
    lines.append(f"  Total items:      {totals.total}")
    lines.append(f"  Low stock:        {totals.low}")
    lines.append(f"  Out of stock:     {totals.out_of_stock}")
    lines.append(f"  Daily usage:      {totals.daily_usage_sum:.2f} units/day")

    if cards:
        lines.append(format_recommendations(cards))

    lines.append("")
    lines.append("  [NEEDS ATTENTION]")
    if attention:
        for item in attention:
            lines.append(
                f"    {_clip(item.name, 24):<24}  {item.current_stock:>6} / "
                f"{item.reorder_level:<6}  {item.status}"
            )
    else:
        lines.append("    All items are healthy.")

    lines.append("")
    lines.append("  [TOP USED]")
    if top_used:
        for rank, entry in enumerate(top_used, start=1):
            lines.append(f"    {rank:>2}. {_clip(entry.name, 24):<24}  {entry.total_quantity:>6}")
    else:
        lines.append("    No usage recorded.")

    lines.append("")
    lines.append(f"  [USAGE TREND, last {len(trend)} days]")
    scale = max((b.total for b in trend), default=0)
    for bucket in trend:
        bar = "#" * (round(bucket.total / scale * 30) if scale else 0)
        lines.append(f"    {bucket.day.isoformat()}  {bucket.total:>5}  {bar}")
    if peak is None:
        lines.append("    No usage in this window.")
    else:
        lines.append(
            f"    Peak {peak.peak_day.isoformat()} ({peak.peak_total}), "
            f"low {peak.low_day.isoformat()} ({peak.low_total}), "
            f"avg {peak.average:.1f}/day"
        )
    return "\n".join(lines)


# ── Order request & alerts ────────────────────────────────────────────────────


def format_order_request(lines_in: Sequence[OrderLine]) -> str:
    lines = ["", "=== Order Request ==="]
    if not lines_in:
        lines.append("  Nothing to order; all items are healthy.")
        return "\n".join(lines)

    header = (
        f"  {'Item':<24}  {'SKU':<10}  {'Stock':>6}  {'Status':<12}  "
        f"{'Order qty':>9}  {'Est. cost':>10}  {'Supplier':<18}"
    )
    lines.append(header)
    lines.append(_rule(header))
    for line in lines_in:
        lines.append(
            f"  {_clip(line.item.name, 24):<24}  {line.item.sku or '-':<10}  "
            f"{line.item.current_stock:>6}  {str(line.status):<12}  "
            f"{line.order_quantity:>9}  {line.estimated_cost:>10.2f}  "
            f"{_clip(line.supplier_name or '-', 18):<18}"
        )
    lines.append("")
    lines.append(f"  Estimated total: {order_total(lines_in):.2f}")
    return "\n".join(lines)


def format_stock_alerts(alerts: Sequence[StockAlert]) -> str:
    lines = ["", "=== Stock Alerts ==="]
    if not alerts:
        lines.append("  No alerts.")
        return "\n".join(lines)
    for alert in alerts:
        lines.append(f"  {alert.title:<18}  {alert.message}")
    return "\n".join(lines)


# ── Usage history ─────────────────────────────────────────────────────────────


def format_usage_log(records: Sequence[UsageRecord]) -> str:
    """Format usage records in the order given (callers pass newest first)."""
    lines = ["", "=== Usage History ==="]
    if not records:
        lines.append("  (no usage recorded)")
        return "\n".join(lines)

    header = (
        f"  {'ID':>4}  {'Used at':<16}  {'Item':<24}  {'Category':<11}  "
        f"{'Qty':>5}  Notes"
    )
    lines.append(header)
    lines.append(_rule(header) + "-" * 10)
    for r in records:
        lines.append(
            f"  {r.usage_id or '':>4}  {r.used_at.strftime('%Y-%m-%d %H:%M'):<16}  "
            f"{_clip(r.item_name, 24):<24}  {r.category:<11}  {r.quantity:>5}  {r.notes or ''}"
        )
    lines.append("")
    lines.append(f"  {len(records)} record(s), {sum(r.quantity for r in records)} unit(s)")
    return "\n".join(lines)


# ── Audit log ─────────────────────────────────────────────────────────────────


def format_audit_log(entries: Sequence[AuditLogEntry]) -> str:
    lines = ["", "=== Audit Log ==="]
    if not entries:
        lines.append("  (no entries match)")
        return "\n".join(lines)

    header = f"  {'Timestamp':<20}  {'Action':<8}  {'User':<10}  Details"
    lines.append(header)
    lines.append(_rule(header) + "-" * 30)
    for e in entries:
        lines.append(
            f"  {e.timestamp.strftime('%Y-%m-%d %H:%M:%S'):<20}  {str(e.action):<8}  "
            f"{_clip(e.user, 10):<10}  {e.details}"
        )
    return "\n".join(lines)
