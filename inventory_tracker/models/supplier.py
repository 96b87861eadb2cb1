"""
Supplier model.

No engine logic depends on supplier fields; suppliers are only looked up for
display and counted by the "add suppliers" recommendation.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from inventory_tracker.taxonomy.inventory_taxonomy import SupplierCategory


class Supplier(BaseModel):
    """A vendor that items can be ordered from.

    Attributes:
        supplier_id: Auto-assigned DB PK; ``None`` before insertion.
        name: Company name.
        contact: Contact person.
        email: Contact email, stored lowercase.
        phone: Contact phone number.
        category: Primary line of goods.
        address: Optional postal address.
        rating: 1 (poor) to 5 (excellent); defaults to 3.
    """

    model_config = ConfigDict(frozen=True)

    supplier_id: Optional[int] = None
    name: str
    contact: str
    email: str
    phone: str
    category: SupplierCategory = SupplierCategory.GENERAL
    address: Optional[str] = None
    rating: int = 3

    @field_validator("name", "contact", "phone")
    @classmethod
    def validate_required_text(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("field must not be empty.")
        return v.strip()

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        v = v.strip().lower()
        if "@" not in v:
            raise ValueError(f"email '{v}' is not a valid address.")
        return v

    @field_validator("rating")
    @classmethod
    def validate_rating(cls, v: int) -> int:
        if not 1 <= v <= 5:
            raise ValueError(f"rating must be in [1, 5], got {v}.")
        return v
