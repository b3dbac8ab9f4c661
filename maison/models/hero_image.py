"""
Maison Catalog API: Hero Image Model
======================================

What:  ORM model for the `hero_images` table (the homepage banner carousel).

State machine for is_active:
    inactive (initial) ⇄ active, flipped only by the toggle endpoint.
    Nothing limits how many rows are active at once.
"""

import uuid
from datetime import datetime

from sqlalchemy import Boolean, DateTime, Index, Text, Uuid, false
from sqlalchemy.orm import Mapped, mapped_column

from maison.database import Base
from maison.models.product import _utcnow


class HeroImage(Base):
    __tablename__ = "hero_images"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    image_url: Mapped[str] = mapped_column(Text, nullable=False)
    is_active: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=false(),
    )

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
        Index("idx_hero_images_created_at", created_at.desc()),
    )

    def toggle(self) -> bool:
        """Flips the active flag and returns the new value."""
        self.is_active = not self.is_active
        return self.is_active

    def __repr__(self) -> str:
        return f"<HeroImage(id={self.id}, is_active={self.is_active})>"
