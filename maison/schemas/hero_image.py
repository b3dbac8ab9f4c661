"""
Maison Catalog API: Hero Image Schemas
========================================
"""

import uuid
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


def parse_is_active(value: Any) -> bool:
    """
    Normalizes the `isActive` form value.

    Multipart forms deliver the text "true"; JSON-ish clients may send a
    native boolean. Both mean active. Anything else, omission included,
    means inactive.
    """
    return value is True or value == "true"


class HeroImageResponse(BaseModel):
    """Full representation of a stored hero image."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: uuid.UUID = Field(alias="_id")
    image_url: str = Field(alias="imageUrl")
    is_active: bool = Field(default=False, alias="isActive")
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")
