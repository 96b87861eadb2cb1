"""
Recommendation rules, expressed as data.

Each rule is a ``RecommendationRule`` descriptor: a slug, a fixed priority,
a card type, a predicate over a ``RecommendationContext`` and a builder that
renders the card.  ``RULES`` lists them in priority order; the ranker simply
evaluates every rule and keeps the matches.

Rule table
----------
    1  out_of_stock      warning  any item Out of Stock
    2  low_stock_week    warning  finite days <= 7 and not Out of Stock
    3  high_consumption  info     daily_usage > 5
    4  excess_stock      info     finite days > 90 and stock > reorder * 3
    5  all_healthy       success  items present and rules 1-4 all silent
    6  add_suppliers     info     items present and no suppliers

Rules 1 and 2 never count the same item twice: an Out of Stock item has
0 days left, so rule 2 skips it explicitly.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from inventory_tracker.forecast.status import classify_status
from inventory_tracker.forecast.stockout import days_until_stockout
from inventory_tracker.models.item import InventoryItem
from inventory_tracker.models.recommendation import Recommendation
from inventory_tracker.models.supplier import Supplier
from inventory_tracker.taxonomy.inventory_taxonomy import ItemStatus, RecommendationType

_OUT_OF_STOCK_NAMED = 3
_LOW_STOCK_NAMED = 2


@dataclass(frozen=True)
class RecommendationContext:
    """Inputs and thresholds shared by every rule.

    Attributes:
        items:                   Inventory snapshot.
        suppliers:               Supplier snapshot (only emptiness matters).
        low_stock_days:          Horizon for the "runs out this week" rule.
        high_usage_threshold:    Daily usage strictly above this is "high".
        excess_stock_days:       Projection strictly above this may be excess.
        excess_stock_multiplier: Stock must exceed reorder_level times this.
    """

    items:                   Sequence[InventoryItem]
    suppliers:               Sequence[Supplier]
    low_stock_days:          int = 7
    high_usage_threshold:    float = 5.0
    excess_stock_days:       int = 90
    excess_stock_multiplier: int = 3


@dataclass(frozen=True)
class RecommendationRule:
    """One recommendation rule.

    Attributes:
        slug:      Stable identifier, copied onto the produced card.
        priority:  Rank used for sorting; lower is more urgent.
        card_type: Tone of the produced card.
        predicate: True when the rule fires for a context.
        builder:   Returns ``(title, text, action)`` for a firing context.
    """

    slug:      str
    priority:  int
    card_type: RecommendationType
    predicate: Callable[[RecommendationContext], bool]
    builder:   Callable[[RecommendationContext], tuple[str, str, Optional[str]]]

    def evaluate(self, context: RecommendationContext) -> Optional[Recommendation]:
        """Return this rule's card for ``context``, or ``None`` if it does not fire."""
        if not self.predicate(context):
            return None
        title, text, action = self.builder(context)
        return Recommendation(
            rule_slug=self.slug,
            type=self.card_type,
            title=title,
            text=text,
            action=action,
            priority=self.priority,
        )


def _name_list(items: Sequence[InventoryItem], limit: int) -> str:
    names = ", ".join(i.name for i in items[:limit])
    if len(items) > limit:
        names += "..."
    return names


# ── Item selectors ─────────────────────────────────────────────────────────────

def out_of_stock_items(ctx: RecommendationContext) -> list[InventoryItem]:
    return [i for i in ctx.items if classify_status(i) is ItemStatus.OUT_OF_STOCK]


def running_low_items(ctx: RecommendationContext) -> list[InventoryItem]:
    """Items that run out within ``low_stock_days`` but still have stock."""
    return [
        i for i in ctx.items
        if days_until_stockout(i).within(ctx.low_stock_days)
        and classify_status(i) is not ItemStatus.OUT_OF_STOCK
    ]


def high_usage_items(ctx: RecommendationContext) -> list[InventoryItem]:
    return [i for i in ctx.items if i.daily_usage > ctx.high_usage_threshold]


def excess_stock_items(ctx: RecommendationContext) -> list[InventoryItem]:
    return [
        i for i in ctx.items
        if days_until_stockout(i).beyond(ctx.excess_stock_days)
        and i.current_stock > i.reorder_level * ctx.excess_stock_multiplier
    ]


def _nothing_to_flag(ctx: RecommendationContext) -> bool:
    return bool(ctx.items) and not (
        out_of_stock_items(ctx)
        or running_low_items(ctx)
        or high_usage_items(ctx)
        or excess_stock_items(ctx)
    )


# ── Card builders ──────────────────────────────────────────────────────────────

def _out_of_stock_card(ctx: RecommendationContext) -> tuple[str, str, Optional[str]]:
    names = _name_list(out_of_stock_items(ctx), _OUT_OF_STOCK_NAMED)
    return (
        "Urgent: Out of Stock Items",
        f"Reorder immediately: {names}",
        "reorder",
    )


def _running_low_card(ctx: RecommendationContext) -> tuple[str, str, Optional[str]]:
    names = _name_list(running_low_items(ctx), _LOW_STOCK_NAMED)
    return (
        "Low Stock This Week",
        f"{names} will run out within {ctx.low_stock_days} days.",
        None,
    )


def _high_usage_card(ctx: RecommendationContext) -> tuple[str, str, Optional[str]]:
    return (
        "High Consumption Items",
        "Some items are used heavily every day. Consider bulk ordering to reduce costs.",
        None,
    )


def _excess_stock_card(ctx: RecommendationContext) -> tuple[str, str, Optional[str]]:
    return (
        "Optimize Stock Levels",
        "Some items hold more than a quarter's supply. Consider reducing reorder quantities.",
        None,
    )


def _all_healthy_card(ctx: RecommendationContext) -> tuple[str, str, Optional[str]]:
    return (
        "Inventory Looks Healthy",
        "All stock levels are within safe limits. Keep it up!",
        None,
    )


def _add_suppliers_card(ctx: RecommendationContext) -> tuple[str, str, Optional[str]]:
    return (
        "Add Suppliers",
        "No suppliers on file. Add suppliers to streamline reordering.",
        "add-supplier",
    )


# ── Rule table ─────────────────────────────────────────────────────────────────

RULES: tuple[RecommendationRule, ...] = (
    RecommendationRule(
        slug="out_of_stock",
        priority=1,
        card_type=RecommendationType.WARNING,
        predicate=lambda ctx: bool(out_of_stock_items(ctx)),
        builder=_out_of_stock_card,
    ),
    RecommendationRule(
        slug="low_stock_week",
        priority=2,
        card_type=RecommendationType.WARNING,
        predicate=lambda ctx: bool(running_low_items(ctx)),
        builder=_running_low_card,
    ),
    RecommendationRule(
        slug="high_consumption",
        priority=3,
        card_type=RecommendationType.INFO,
        predicate=lambda ctx: bool(high_usage_items(ctx)),
        builder=_high_usage_card,
    ),
    RecommendationRule(
        slug="excess_stock",
        priority=4,
        card_type=RecommendationType.INFO,
        predicate=lambda ctx: bool(excess_stock_items(ctx)),
        builder=_excess_stock_card,
    ),
    RecommendationRule(
        slug="all_healthy",
        priority=5,
        card_type=RecommendationType.SUCCESS,
        predicate=_nothing_to_flag,
        builder=_all_healthy_card,
    ),
    RecommendationRule(
        slug="add_suppliers",
        priority=6,
        card_type=RecommendationType.INFO,
        predicate=lambda ctx: bool(ctx.items) and not ctx.suppliers,
        builder=_add_suppliers_card,
    ),
)

RULES_BY_SLUG: dict[str, RecommendationRule] = {r.slug: r for r in RULES}
