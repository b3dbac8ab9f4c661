"""
Maison Catalog API: Product Model
===================================

What:  ORM model for the `products` table.
Who:   Used by ProductService for CRUD and by Alembic for schema management.

Column notes:
    - id: UUID generated in Python, serialized to clients as `_id`
    - main_image: hosted URL of the first uploaded file (card thumbnail)
    - other_images: hosted URLs of the remaining files, in submission order.
      Stored as JSON so the same model runs on PostgreSQL and SQLite.
    - created_at / updated_at: UTC, maintained on insert and on every update

Index on created_at DESC:
    The list endpoint always returns newest first with no limit.
"""

import uuid
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import JSON, DateTime, Float, Index, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from maison.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Product(Base):
    """
    A catalog product.

    Lifecycle:
        1. Created by POST /api/products once at least one image is hosted
        2. Fields replaced by PUT; images replaced wholesale only when new
           files arrive
        3. Removed by DELETE
    """

    __tablename__ = "products"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    category: Mapped[str] = mapped_column(String(255), nullable=False)
    price: Mapped[float] = mapped_column(Float, nullable=False)

    main_image: Mapped[str] = mapped_column(Text, nullable=False)
    other_images: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)

    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True, default=None)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        onupdate=_utcnow,
    )

    __table_args__ = (
        Index("idx_products_created_at", created_at.desc()),
    )

    def __repr__(self) -> str:
        return f"<Product(id={self.id}, name='{self.name}', images={1 + len(self.other_images or [])})>"
