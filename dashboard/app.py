"""
Department Inventory Tracker: Streamlit Dashboard
=================================================

Optional local UI.  Reads the SQLite store only; all changes go through the
``inventory-tracker`` CLI.

Why optional?
-------------
- Streamlit and pandas are heavy dependencies not needed for the CLI.
- Everything shown here is also available via ``inventory-tracker dashboard``,
  ``forecast``, ``order-request``, ``list-usage`` and ``audit-log``.

App structure (6 tabs)
----------------------
  1. Overview      : totals, recommendation cards, attention list,
                     top used items, usage trend with peak, category chart.
  2. Forecast      : reorder forecast table, filterable by priority.
  3. Order Request : items to reorder with suggested quantities.
  4. Usage         : usage history, newest first, filterable by item.
  5. Suppliers     : supplier directory.
  6. Audit Log     : change trail, filterable by action and date range.

Usage
-----
    pip install -e ".[dashboard]"
    streamlit run dashboard/app.py
"""

from __future__ import annotations

import sys
from pathlib import Path

# ── Ensure project root is importable ────────────────────────────────────────
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import streamlit as st

# ── Must be the first Streamlit call ─────────────────────────────────────────
st.set_page_config(
    page_title="Department Inventory Tracker",
    layout="wide",
    initial_sidebar_state="expanded",
)

from dashboard.data_loader import (
    audit_frame,
    category_frame,
    forecast_frame,
    items_frame,
    order_frame,
    read_audit_entries,
    read_snapshot,
    read_usage_records,
    suppliers_frame,
    top_used_frame,
    trend_frame,
    usage_frame,
)
from inventory_tracker.analytics.aggregates import (
    category_breakdown,
    compute_dashboard_totals,
    needs_attention,
)
from inventory_tracker.analytics.usage import top_used_items, usage_peak, usage_trend
from inventory_tracker.config import load_config
from inventory_tracker.forecast.table import build_forecast
from inventory_tracker.recommendations.order_request import build_order_request, order_total
from inventory_tracker.recommendations.ranker import generate_recommendations
from inventory_tracker.taxonomy.inventory_taxonomy import AuditAction, ForecastPriority

config = load_config()
_DB_PATH = str(_ROOT / config.database.db_path)

_load_snapshot = st.cache_data(ttl=60)(read_snapshot)
_load_audit = st.cache_data(ttl=60)(read_audit_entries)
_load_usage = st.cache_data(ttl=60)(read_usage_records)

_CARD_RENDERERS = {
    "warning": st.warning,
    "info":    st.info,
    "success": st.success,
}


# ── Sidebar ───────────────────────────────────────────────────────────────────

with st.sidebar:
    st.title("Inventory Tracker")
    st.caption("Read-only view of the local inventory store")
    st.divider()
    st.text(f"Database: {config.database.db_path}")

    if st.button("Refresh", help="Re-read the database."):
        st.cache_data.clear()
        st.rerun()

    st.divider()
    st.caption("Record changes from the terminal:")
    st.code("inventory-tracker record-usage <item-id> <qty>\ninventory-tracker restock <item-id> <qty>")


snapshot = _load_snapshot(_DB_PATH)

if snapshot.is_empty:
    st.info(
        "No inventory yet. Run `inventory-tracker init-db` then "
        "`inventory-tracker import-items <file.csv>` or `add-item`."
    )

tab_overview, tab_fc, tab_order, tab_usage, tab_sup, tab_audit = st.tabs(
    ["Overview", "Forecast", "Order Request", "Usage", "Suppliers", "Audit Log"]
)


# ══════════════════════════════════════════════════════════════════════════════
# Tab 1: Overview
# ══════════════════════════════════════════════════════════════════════════════

with tab_overview:
    totals = compute_dashboard_totals(snapshot.items)
    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Total items", totals.total)
    c2.metric("Low stock", totals.low)
    c3.metric("Out of stock", totals.out_of_stock)
    c4.metric("Daily usage", f"{totals.daily_usage_sum:.1f}")

    st.subheader("Recommendations")
    cards = generate_recommendations(
        snapshot.items, snapshot.suppliers, **config.recommendations.model_dump()
    )
    if not cards:
        st.caption("Nothing to recommend yet.")
    for card in cards:
        render = _CARD_RENDERERS.get(str(card.type), st.info)
        render(f"**{card.title}**: {card.text}")

    left, right = st.columns(2)

    with left:
        st.subheader("Needs attention")
        attention = needs_attention(snapshot.items, limit=config.dashboard.attention_limit)
        if attention:
            st.dataframe(
                items_frame(attention)[["name", "current_stock", "reorder_level", "status"]],
                use_container_width=True,
                hide_index=True,
            )
        else:
            st.success("All items are healthy.")

        st.subheader("Top used items")
        top = top_used_items(
            snapshot.usage, snapshot.items, n=config.dashboard.top_used_limit
        )
        if top:
            st.dataframe(top_used_frame(top), use_container_width=True, hide_index=True)
        else:
            st.caption("No usage recorded.")

    with right:
        window = config.dashboard.trend_window_days
        st.subheader(f"Usage, last {window} days")
        trend = usage_trend(snapshot.usage, window_days=window)
        st.bar_chart(trend_frame(trend))
        peak = usage_peak(trend)
        if peak is None:
            st.caption("No usage in this window.")
        else:
            p1, p2, p3 = st.columns(3)
            p1.metric("Peak day", peak.peak_day.strftime("%a %d %b"), peak.peak_total)
            p2.metric("Lowest day", peak.low_day.strftime("%a %d %b"), peak.low_total)
            p3.metric("Average / day", f"{peak.average:.1f}")

        st.subheader("Items by category")
        breakdown = category_breakdown(snapshot.items)
        if breakdown:
            st.bar_chart(category_frame(breakdown))


# ══════════════════════════════════════════════════════════════════════════════
# Tab 2: Forecast
# ══════════════════════════════════════════════════════════════════════════════

with tab_fc:
    st.header("Reorder Forecast")
    st.caption(
        f"Days until stockout at the current usage rate. Order dates assume a "
        f"{config.forecast.lead_time_days}-day lead time."
    )
    rows = build_forecast(snapshot.items, **config.forecast.model_dump())
    if not rows:
        st.info("No items to forecast.")
    else:
        selected = st.multiselect(
            "Priority",
            options=[p.value for p in ForecastPriority],
            default=[p.value for p in ForecastPriority],
        )
        df_fc = forecast_frame(rows)
        st.dataframe(
            df_fc[df_fc["priority"].isin(selected)],
            use_container_width=True,
            hide_index=True,
        )


# ══════════════════════════════════════════════════════════════════════════════
# Tab 3: Order Request
# ══════════════════════════════════════════════════════════════════════════════

with tab_order:
    st.header("Order Request")
    lines = build_order_request(snapshot.items, snapshot.suppliers)
    if not lines:
        st.success("Nothing to order; all items are healthy.")
    else:
        df_order = order_frame(lines)
        st.dataframe(df_order, use_container_width=True, hide_index=True)
        st.metric("Estimated total", f"{order_total(lines):.2f}")
        st.download_button(
            "Download CSV",
            data=df_order.to_csv(index=False),
            file_name="order_request.csv",
            mime="text/csv",
        )


# ══════════════════════════════════════════════════════════════════════════════
# Tab 4: Usage
# ══════════════════════════════════════════════════════════════════════════════

with tab_usage:
    st.header("Usage History")
    item_names = {i.item_id: i.name for i in snapshot.items}
    picked = st.selectbox(
        "Item",
        [None] + list(item_names),
        format_func=lambda i: "All items" if i is None else item_names[i],
    )
    records = _load_usage(_DB_PATH, item_id=picked)
    if records:
        u1, u2 = st.columns(2)
        u1.metric("Records", len(records))
        u2.metric("Units used", sum(r.quantity for r in records))
        st.dataframe(usage_frame(records), use_container_width=True, hide_index=True)
    else:
        st.caption("No usage recorded.")
    st.caption("Remove a record (and restore its stock) with `inventory-tracker delete-usage <id>`.")


# ══════════════════════════════════════════════════════════════════════════════
# Tab 5: Suppliers
# ══════════════════════════════════════════════════════════════════════════════

with tab_sup:
    st.header("Suppliers")
    if snapshot.suppliers:
        st.dataframe(suppliers_frame(snapshot.suppliers), use_container_width=True, hide_index=True)
    else:
        st.info("No suppliers. Add one with `inventory-tracker add-supplier`.")


# ══════════════════════════════════════════════════════════════════════════════
# Tab 6: Audit Log
# ══════════════════════════════════════════════════════════════════════════════

with tab_audit:
    st.header("Audit Log")
    f1, f2, f3 = st.columns(3)
    with f1:
        action = st.selectbox("Action", ["All"] + [a.value for a in AuditAction])
    with f2:
        start = st.date_input("From", value=None)
    with f3:
        end = st.date_input("To", value=None)

    entries = _load_audit(
        _DB_PATH,
        action=None if action == "All" else action,
        start=start,
        end=end,
        limit=config.audit.retention,
    )
    if entries:
        st.dataframe(audit_frame(entries), use_container_width=True, hide_index=True)
    else:
        st.caption("No entries match.")
