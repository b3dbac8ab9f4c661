"""
Maison Catalog API: Hero Image Route Handlers
===============================================

What:  POST/GET /api/hero-images, PATCH /api/hero-images/{id}/toggle,
       DELETE /api/hero-images/{id}.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from maison.database import get_db_session
from maison.dependencies import get_image_host, read_uploads
from maison.schemas.common import ErrorResponse, MessageResponse
from maison.schemas.hero_image import HeroImageResponse
from maison.services.hero_image_service import hero_image_service
from maison.services.image_host_base import ImageHost

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Hero Images"])


@router.post(
    "/hero-images",
    status_code=201,
    response_model=HeroImageResponse,
    responses={
        400: {"description": "No image uploaded", "model": ErrorResponse},
        500: {"description": "Upload or database failure", "model": ErrorResponse},
    },
    summary="Create a hero image",
)
async def create_hero_image(
    image: Optional[UploadFile] = File(default=None, description="Exactly one banner image"),
    is_active: Optional[str] = Form(default=None, alias="isActive"),
    db: AsyncSession = Depends(get_db_session),
    image_host: ImageHost = Depends(get_image_host),
) -> HeroImageResponse:
    buffers = await read_uploads([image] if image is not None else [])

    return await hero_image_service.create_hero_image(
        db=db,
        image_host=image_host,
        image=buffers[0] if buffers else None,
        is_active=is_active,
    )


@router.get(
    "/hero-images",
    response_model=List[HeroImageResponse],
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="List all hero images, newest first",
)
async def list_hero_images(
    db: AsyncSession = Depends(get_db_session),
) -> List[HeroImageResponse]:
    return await hero_image_service.list_hero_images(db)


@router.patch(
    "/hero-images/{hero_id}/toggle",
    response_model=HeroImageResponse,
    responses={
        404: {"description": "Hero image not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Flip the active flag of a hero image",
)
async def toggle_hero_image(
    hero_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> HeroImageResponse:
    return await hero_image_service.toggle_hero_image(db, hero_id)


@router.delete(
    "/hero-images/{hero_id}",
    response_model=MessageResponse,
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="Delete a hero image",
)
async def delete_hero_image(
    hero_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    return await hero_image_service.delete_hero_image(db, hero_id)
