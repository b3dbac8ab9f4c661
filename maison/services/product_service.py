"""
Maison Catalog API: Product Service
=====================================

What:  Business logic behind the /api/products endpoints.
How:   Stateless; each call receives the request's session and the
       process-wide image host from the route.

Create / Update Flow (two phases):
    ┌──────────┐    ┌────────────────┐    ┌──────────────┐
    │ Validate │───▶│ Phase 1:       │───▶│ Phase 2:     │
    │ files +  │    │ upload all     │    │ persist      │
    │ fields   │    │ (concurrently) │    │ record       │
    └──────────┘    └────────────────┘    └──────────────┘

    Phase 1 fails → UploadError (500); nothing is persisted.
    Phase 2 fails → the images hosted in phase 1 are destroyed, then
                    DatabaseError (500). Phase 2 includes the commit.

Absent ids:
    Update on an unknown id returns None (serialized as `null`) and uploads
    nothing. Delete on an unknown id still reports success.
"""

import logging
from typing import Dict, List, Optional, Sequence

from sqlalchemy import delete, desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from maison.config import settings
from maison.exceptions import DatabaseError, ValidationError
from maison.models.product import Product
from maison.schemas.common import MessageResponse
from maison.schemas.product import ProductCreate, ProductResponse, ProductUpdate
from maison.services.forms import parse_form, parse_record_id
from maison.services.image_host_base import ImageHost, UploadResult

logger = logging.getLogger(__name__)


class ProductService:
    """
    Responsibilities:
        - create_product(): upload images, then persist a new product
        - list_products(): every product, newest first
        - update_product(): partial field replacement, optional image swap
        - delete_product(): idempotent removal by id
    """

    def _check_image_count(self, images: Sequence[bytes], required: bool) -> None:
        if required and not images:
            raise ValidationError(message="No images uploaded", field="images")
        if len(images) > settings.max_product_images:
            raise ValidationError(
                message=f"At most {settings.max_product_images} images can be uploaded",
                field="images",
                context={"received": len(images)},
            )

    @staticmethod
    def _image_fields(results: List[UploadResult]) -> Dict[str, object]:
        # First upload becomes the card image; the rest keep submission order
        return {
            "main_image": results[0].url,
            "other_images": [r.url for r in results[1:]],
        }

    async def create_product(
        self,
        db: AsyncSession,
        image_host: ImageHost,
        fields: Dict[str, Optional[str]],
        images: Sequence[bytes],
    ) -> ProductResponse:
        """
        Create a product from multipart fields and 1..N image buffers.

        Raises:
            ValidationError: no images, too many images, or bad text fields
            UploadError: any upload failed
            DatabaseError: the insert or its commit failed (uploaded images are
                           cleaned up)
        """
        self._check_image_count(images, required=True)
        data = parse_form(ProductCreate, fields)

        # ── Phase 1: host every image ─────────────────────────────────────
        results = await image_host.upload_many(images, settings.product_image_folder)

        # ── Phase 2: persist ──────────────────────────────────────────────
        try:
            product = Product(**data.model_dump(), **self._image_fields(results))
            db.add(product)
            await db.commit()
            await db.refresh(product)
        except Exception as e:
            logger.error("Failed to save product '%s': %s", data.name, str(e), exc_info=True)
            await image_host.destroy_many([r.public_id for r in results])
            raise DatabaseError(
                message="Could not save the product. Please try again.",
                context={"error_type": type(e).__name__},
            )

        logger.info("Product %s created with %d image(s)", product.id, len(results))
        return ProductResponse.model_validate(product)

    async def list_products(self, db: AsyncSession) -> List[ProductResponse]:
        """All products ordered by createdAt descending. No pagination."""
        try:
            result = await db.execute(select(Product).order_by(desc(Product.created_at)))
            products = result.scalars().all()
        except Exception as e:
            logger.error("Database error listing products: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve products. Please try again.",
                context={"error_type": type(e).__name__},
            )
        return [ProductResponse.model_validate(p) for p in products]

    async def update_product(
        self,
        db: AsyncSession,
        image_host: ImageHost,
        product_id: str,
        fields: Dict[str, Optional[str]],
        images: Sequence[bytes],
    ) -> Optional[ProductResponse]:
        """
        Replace the supplied fields of a product.

        When images are supplied they are all uploaded and replace
        mainImage/otherImages wholesale. The previous images stay on the
        image host. With no images, the stored URLs are left untouched.

        Returns:
            The updated product, or None when the id matches nothing
        """
        self._check_image_count(images, required=False)
        changes = parse_form(ProductUpdate, fields).model_dump(exclude_unset=True)

        record_id = parse_record_id(product_id)
        try:
            product = await db.get(Product, record_id) if record_id else None
        except Exception as e:
            logger.error("Database error loading product %s: %s", product_id, str(e))
            raise DatabaseError(
                message="Could not update the product. Please try again.",
                context={"product_id": product_id},
            )

        if product is None:
            logger.info("Update requested for unknown product %s", product_id)
            return None

        results: List[UploadResult] = []
        if images:
            results = await image_host.upload_many(images, settings.product_image_folder)
            changes.update(self._image_fields(results))

        try:
            for name, value in changes.items():
                setattr(product, name, value)
            await db.commit()
            await db.refresh(product)
        except Exception as e:
            logger.error("Failed to update product %s: %s", product_id, str(e), exc_info=True)
            await image_host.destroy_many([r.public_id for r in results])
            raise DatabaseError(
                message="Could not update the product. Please try again.",
                context={"product_id": product_id, "error_type": type(e).__name__},
            )

        logger.info(
            "Product %s updated (%s)", product.id, ", ".join(sorted(changes)) or "no changes",
        )
        return ProductResponse.model_validate(product)

    async def delete_product(self, db: AsyncSession, product_id: str) -> MessageResponse:
        """Deletes by id. Reports success whether or not the product existed."""
        record_id = parse_record_id(product_id)
        if record_id is not None:
            try:
                result = await db.execute(delete(Product).where(Product.id == record_id))
                await db.commit()
            except Exception as e:
                logger.error("Database error deleting product %s: %s", product_id, str(e))
                raise DatabaseError(
                    message="Could not delete the product. Please try again.",
                    context={"product_id": product_id},
                )
            logger.info("Delete product %s: %d row(s) removed", product_id, result.rowcount)
        return MessageResponse(message="Product deleted")


product_service = ProductService()
