"""
Recommendation card model.

A ``Recommendation`` is one dashboard card produced by a rule in
``recommendations.rules``.  Cards are derived on demand and never persisted.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from inventory_tracker.taxonomy.inventory_taxonomy import RecommendationType


class Recommendation(BaseModel):
    """A ranked, actionable suggestion.

    Attributes:
        rule_slug: Slug of the rule that produced the card.
        type: Card tone (warning / info / success).
        title: Short heading.
        text: One-sentence body.
        action: Optional bound action, e.g. ``"reorder"``.
        priority: Rank; 1 is most urgent.
    """

    model_config = ConfigDict(frozen=True)

    rule_slug: str
    type: RecommendationType
    title: str
    text: str
    action: Optional[str] = None
    priority: int

    @field_validator("priority")
    @classmethod
    def validate_priority(cls, v: int) -> int:
        if not 1 <= v <= 6:
            raise ValueError(f"priority must be in [1, 6], got {v}.")
        return v
