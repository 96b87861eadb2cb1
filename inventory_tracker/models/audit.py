"""
Audit trail entry model.

The audit trail is a side channel: the forecast engine never reads it.
Entries are append-only and the store keeps only the most recent ones
(``audit.retention`` in config, 500 by default).
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from inventory_tracker.taxonomy.inventory_taxonomy import AuditAction
from inventory_tracker.utils.time_utils import to_utc, utcnow


class AuditLogEntry(BaseModel):
    """A single recorded change.

    Attributes:
        entry_id: Auto-assigned DB PK; ``None`` before insertion.
        action: Kind of change.
        details: Human-readable description, e.g. ``"Used 3 of Stapler"``.
        user: Who made the change.
        timestamp: When the change happened (UTC).
    """

    model_config = ConfigDict(frozen=True)

    entry_id: Optional[int] = None
    action: AuditAction
    details: str
    user: str = "Admin"
    timestamp: datetime = Field(default_factory=utcnow)

    @field_validator("details")
    @classmethod
    def validate_details(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("details must not be empty.")
        return v.strip()

    @field_validator("timestamp")
    @classmethod
    def normalize_timestamp(cls, v: datetime) -> datetime:
        return to_utc(v)
