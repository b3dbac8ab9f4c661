"""
Maison Catalog API: Hero Image Service
========================================

What:  Business logic behind the /api/hero-images endpoints.

Toggle is the only real state transition in the system:
    is_active ∈ {False, True}, flipped by logical negation, triggered only
    by PATCH /api/hero-images/{id}/toggle. Several hero images may be active
    at the same time; the storefront decides how to rotate them.
"""

import logging
from typing import Any, List, Optional

from sqlalchemy import delete, desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from maison.config import settings
from maison.exceptions import DatabaseError, NotFoundError, ValidationError
from maison.models.hero_image import HeroImage
from maison.schemas.common import MessageResponse
from maison.schemas.hero_image import HeroImageResponse, parse_is_active
from maison.services.forms import parse_record_id
from maison.services.image_host_base import ImageHost

logger = logging.getLogger(__name__)


class HeroImageService:

    async def create_hero_image(
        self,
        db: AsyncSession,
        image_host: ImageHost,
        image: Optional[bytes],
        is_active: Any = None,
    ) -> HeroImageResponse:
        """
        Upload exactly one image and persist it as a hero image.

        Raises:
            ValidationError: no image part was sent. A zero-byte part is
                             forwarded; the host decides whether it is an image
            UploadError: the image host rejected the file
            DatabaseError: the insert or its commit failed (the hosted image is
                           cleaned up)
        """
        if image is None:
            raise ValidationError(message="No image uploaded", field="image")

        result = await image_host.upload(image, settings.hero_image_folder)

        try:
            hero = HeroImage(image_url=result.url, is_active=parse_is_active(is_active))
            db.add(hero)
            await db.commit()
            await db.refresh(hero)
        except Exception as e:
            logger.error("Failed to save hero image: %s", str(e), exc_info=True)
            await image_host.destroy_many([result.public_id])
            raise DatabaseError(
                message="Could not save the hero image. Please try again.",
                context={"error_type": type(e).__name__},
            )

        logger.info("Hero image %s created (active=%s)", hero.id, hero.is_active)
        return HeroImageResponse.model_validate(hero)

    async def list_hero_images(self, db: AsyncSession) -> List[HeroImageResponse]:
        """All hero images, newest first, active or not."""
        try:
            result = await db.execute(select(HeroImage).order_by(desc(HeroImage.created_at)))
            heroes = result.scalars().all()
        except Exception as e:
            logger.error("Database error listing hero images: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve hero images. Please try again.",
                context={"error_type": type(e).__name__},
            )
        return [HeroImageResponse.model_validate(h) for h in heroes]

    async def toggle_hero_image(self, db: AsyncSession, hero_id: str) -> HeroImageResponse:
        """
        Invert isActive and persist it.

        Raises:
            NotFoundError: no hero image has this id (→ 404)
        """
        record_id = parse_record_id(hero_id)
        try:
            hero = await db.get(HeroImage, record_id) if record_id else None
        except Exception as e:
            logger.error("Database error loading hero image %s: %s", hero_id, str(e))
            raise DatabaseError(context={"hero_id": hero_id})

        if hero is None:
            raise NotFoundError(resource="Hero image", resource_id=hero_id)

        hero.toggle()
        try:
            await db.commit()
            await db.refresh(hero)
        except Exception as e:
            logger.error("Failed to toggle hero image %s: %s", hero_id, str(e), exc_info=True)
            raise DatabaseError(context={"hero_id": hero_id})

        logger.info("Hero image %s toggled (active=%s)", hero.id, hero.is_active)
        return HeroImageResponse.model_validate(hero)

    async def delete_hero_image(self, db: AsyncSession, hero_id: str) -> MessageResponse:
        """Deletes by id. Reports success whether or not the hero image existed."""
        record_id = parse_record_id(hero_id)
        if record_id is not None:
            try:
                await db.execute(delete(HeroImage).where(HeroImage.id == record_id))
                await db.commit()
            except Exception as e:
                logger.error("Database error deleting hero image %s: %s", hero_id, str(e))
                raise DatabaseError(context={"hero_id": hero_id})
        return MessageResponse(message="Hero image deleted")


hero_image_service = HeroImageService()
