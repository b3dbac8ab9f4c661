"""
Maison Catalog API: Product Route Handlers
============================================

What:  POST/GET /api/products, PUT/DELETE /api/products/{id}.
How:   Reads multipart fields and files, delegates to ProductService.
       Errors are formatted by the global exception handlers.

Multipart layout (create and update):
    name, category, price, description, quantity   text fields
    images                                         0-5 file parts
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from maison.database import get_db_session
from maison.dependencies import get_image_host, read_uploads
from maison.schemas.common import ErrorResponse, MessageResponse
from maison.schemas.product import ProductResponse
from maison.services.image_host_base import ImageHost
from maison.services.product_service import product_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Products"])


@router.post(
    "/products",
    status_code=201,
    response_model=ProductResponse,
    responses={
        400: {"description": "No images, too many images, or invalid fields", "model": ErrorResponse},
        500: {"description": "Upload or database failure", "model": ErrorResponse},
    },
    summary="Create a product",
)
async def create_product(
    name: Optional[str] = Form(default=None),
    category: Optional[str] = Form(default=None),
    price: Optional[str] = Form(default=None),
    description: Optional[str] = Form(default=None),
    quantity: Optional[str] = Form(default=None),
    images: Optional[List[UploadFile]] = File(
        default=None,
        description="1 to 5 images; the first becomes mainImage",
    ),
    db: AsyncSession = Depends(get_db_session),
    image_host: ImageHost = Depends(get_image_host),
) -> ProductResponse:
    buffers = await read_uploads(images)
    logger.info("Create product request: name=%s, images=%d", name, len(buffers))

    return await product_service.create_product(
        db=db,
        image_host=image_host,
        fields={
            "name": name,
            "category": category,
            "price": price,
            "description": description,
            "quantity": quantity,
        },
        images=buffers,
    )


@router.get(
    "/products",
    response_model=List[ProductResponse],
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="List all products, newest first",
)
async def list_products(
    db: AsyncSession = Depends(get_db_session),
) -> List[ProductResponse]:
    return await product_service.list_products(db)


@router.put(
    "/products/{product_id}",
    response_model=Optional[ProductResponse],
    responses={
        200: {"description": "Updated product, or null when the id is unknown"},
        400: {"description": "Too many images or invalid fields", "model": ErrorResponse},
        500: {"description": "Upload or database failure", "model": ErrorResponse},
    },
    summary="Update a product",
    description=(
        "Replaces only the fields that are sent. New images, when sent, replace "
        "mainImage and otherImages entirely; otherwise the images are kept."
    ),
)
async def update_product(
    product_id: str,
    name: Optional[str] = Form(default=None),
    category: Optional[str] = Form(default=None),
    price: Optional[str] = Form(default=None),
    description: Optional[str] = Form(default=None),
    quantity: Optional[str] = Form(default=None),
    images: Optional[List[UploadFile]] = File(default=None),
    db: AsyncSession = Depends(get_db_session),
    image_host: ImageHost = Depends(get_image_host),
) -> Optional[ProductResponse]:
    buffers = await read_uploads(images)

    return await product_service.update_product(
        db=db,
        image_host=image_host,
        product_id=product_id,
        fields={
            "name": name,
            "category": category,
            "price": price,
            "description": description,
            "quantity": quantity,
        },
        images=buffers,
    )


@router.delete(
    "/products/{product_id}",
    response_model=MessageResponse,
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="Delete a product",
)
async def delete_product(
    product_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    return await product_service.delete_product(db, product_id)
