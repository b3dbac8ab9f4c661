"""
Maison Catalog API: Product Schemas
=====================================

What:  Pydantic models for the product API contract.

Input:
    Product forms arrive as multipart text fields, so every value starts as a
    string. ProductCreate / ProductUpdate coerce `price` to float and
    `quantity` to int; an empty or missing quantity means 0.

Output:
    ProductResponse keeps the field names the storefront already reads:
    `_id`, `mainImage`, `otherImages`, `createdAt`, `updatedAt`.
"""

import uuid
from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _blank_quantity_is_zero(v: Any) -> Any:
    if v is None or (isinstance(v, str) and not v.strip()):
        return 0
    return v


class ProductCreate(BaseModel):
    """Validated text fields of a create request."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(min_length=1)
    category: str = Field(min_length=1)
    price: float = Field(allow_inf_nan=False)
    description: Optional[str] = None
    quantity: int = 0

    @field_validator("quantity", mode="before")
    @classmethod
    def blank_quantity_is_zero(cls, v: Any) -> Any:
        return _blank_quantity_is_zero(v)


class ProductUpdate(BaseModel):
    """
    Validated text fields of an update request.

    Only fields the client actually sent are set; services apply
    `model_dump(exclude_unset=True)` so omitted fields stay untouched.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    name: Optional[str] = Field(default=None, min_length=1)
    category: Optional[str] = Field(default=None, min_length=1)
    price: Optional[float] = Field(default=None, allow_inf_nan=False)
    description: Optional[str] = None
    quantity: Optional[int] = None

    @field_validator("quantity", mode="before")
    @classmethod
    def blank_quantity_is_zero(cls, v: Any) -> Any:
        return _blank_quantity_is_zero(v)


class ProductResponse(BaseModel):
    """Full representation of a stored product."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: uuid.UUID = Field(alias="_id")
    name: str
    category: str
    price: float
    main_image: str = Field(alias="mainImage")
    other_images: List[str] = Field(default_factory=list, alias="otherImages")
    description: Optional[str] = None
    quantity: int = 0
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")
