"""
Recommendation ranker: evaluate every rule, order matches by priority and
keep the first ``max_cards``.

The sort is stable, so rules sharing a priority keep their table order.
"""

from __future__ import annotations

from typing import Iterable, Optional, Sequence

from inventory_tracker.models.item import InventoryItem
from inventory_tracker.models.recommendation import Recommendation
from inventory_tracker.models.supplier import Supplier
from inventory_tracker.recommendations.rules import (
    RULES,
    RecommendationContext,
    RecommendationRule,
)

DEFAULT_MAX_CARDS = 3


def evaluate_rules(
    context: RecommendationContext,
    rules: Sequence[RecommendationRule] = RULES,
) -> list[Recommendation]:
    """Return every matching card, in priority order, without a cap."""
    matched: list[Recommendation] = []
    for rule in rules:
        card = rule.evaluate(context)
        if card is not None:
            matched.append(card)
    matched.sort(key=lambda c: c.priority)
    return matched


def generate_recommendations(
    items: Iterable[InventoryItem],
    suppliers: Iterable[Supplier],
    *,
    max_cards: int = DEFAULT_MAX_CARDS,
    low_stock_days: int = 7,
    high_usage_threshold: float = 5.0,
    excess_stock_days: int = 90,
    excess_stock_multiplier: int = 3,
    rules: Optional[Sequence[RecommendationRule]] = None,
) -> list[Recommendation]:
    """Rank the recommendation cards for an inventory snapshot.

    Args:
        items:                   Inventory items.
        suppliers:               Suppliers; only emptiness is checked.
        max_cards:               Maximum number of cards returned.
        low_stock_days:          Horizon for the "runs out this week" rule.
        high_usage_threshold:    Daily usage strictly above this is "high".
        excess_stock_days:       Projection strictly above this may be excess.
        excess_stock_multiplier: Excess means stock > reorder_level times this.
        rules:                   Override the rule table (tests).

    Returns:
        At most ``max_cards`` cards, most urgent first.
    """
    if max_cards < 1:
        raise ValueError(f"max_cards must be >= 1, got {max_cards}.")

    context = RecommendationContext(
        items=tuple(items),
        suppliers=tuple(suppliers),
        low_stock_days=low_stock_days,
        high_usage_threshold=high_usage_threshold,
        excess_stock_days=excess_stock_days,
        excess_stock_multiplier=excess_stock_multiplier,
    )
    matched = evaluate_rules(context, RULES if rules is None else rules)
    return matched[:max_cards]
