"""Product DTOs for the Service Layer.

Immutable Pydantic v2 models carrying input from the API layer.  Field rules
run on the built entity (``validators.py``), so the DTOs only fix types and
normalise strings.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, field_validator


class CreateCategoryDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    parent_category_id: Optional[UUID] = None


class CreateProductDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    sku: str
    name: str
    description: str
    price: Decimal
    stock_quantity: int = 0
    category_id: Optional[UUID] = None

    @field_validator("sku")
    @classmethod
    def normalise_sku(cls, v: str) -> str:
        return v.strip().upper()

