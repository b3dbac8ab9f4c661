"""
Maison Catalog API: Hero Image Service Unit Tests
===================================================

What we test:
    ✅ isActive normalization ("true"/True → active, everything else → inactive)
    ✅ A missing image is rejected before any upload
    ✅ Toggle flips the flag; unknown and malformed ids raise NotFoundError
    ✅ Persistence failure destroys the hosted image
"""

import uuid
from unittest.mock import AsyncMock

import pytest

from maison.exceptions import DatabaseError, NotFoundError, ValidationError
from maison.models.hero_image import HeroImage
from maison.schemas.hero_image import parse_is_active
from maison.services.hero_image_service import HeroImageService


class TestParseIsActive:

    @pytest.mark.parametrize("value", ["true", True])
    def test_active_values(self, value):
        assert parse_is_active(value) is True

    @pytest.mark.parametrize("value", [None, "", "false", "True", "1", "yes", False])
    def test_everything_else_is_inactive(self, value):
        assert parse_is_active(value) is False


class TestHeroImageService:

    def setup_method(self):
        self.service = HeroImageService()

    @pytest.mark.asyncio
    async def test_missing_image_rejected(self, mock_db_session, fake_image_host):
        with pytest.raises(ValidationError, match="No image uploaded"):
            await self.service.create_hero_image(mock_db_session, fake_image_host, None, "true")

        assert fake_image_host.uploads == []

    @pytest.mark.asyncio
    async def test_empty_file_is_forwarded(self, mock_db_session, fake_image_host):
        await self.service.create_hero_image(mock_db_session, fake_image_host, b"")

        assert fake_image_host.uploads == [("maison_hero", b"")]

    @pytest.mark.asyncio
    async def test_create_uploads_to_hero_folder(self, mock_db_session, fake_image_host):
        result = await self.service.create_hero_image(
            mock_db_session, fake_image_host, b"banner", "true",
        )

        assert result.image_url == "https://cdn.test/maison_hero/banner"
        assert result.is_active is True
        assert fake_image_host.uploads == [("maison_hero", b"banner")]

    @pytest.mark.asyncio
    async def test_create_defaults_to_inactive(self, mock_db_session, fake_image_host):
        result = await self.service.create_hero_image(mock_db_session, fake_image_host, b"banner")

        assert result.is_active is False

    @pytest.mark.asyncio
    async def test_persist_failure_cleans_up(self, mock_db_session, fake_image_host):
        mock_db_session.commit = AsyncMock(side_effect=RuntimeError("disk full"))

        with pytest.raises(DatabaseError):
            await self.service.create_hero_image(mock_db_session, fake_image_host, b"banner")

        assert fake_image_host.destroyed == ["maison_hero/banner"]

    @pytest.mark.asyncio
    async def test_toggle_unknown_id(self, mock_db_session):
        with pytest.raises(NotFoundError) as exc_info:
            await self.service.toggle_hero_image(mock_db_session, str(uuid.uuid4()))

        assert exc_info.value.message == "Hero image not found"

    @pytest.mark.asyncio
    async def test_toggle_malformed_id(self, mock_db_session):
        with pytest.raises(NotFoundError):
            await self.service.toggle_hero_image(mock_db_session, "nope")

        mock_db_session.get.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_toggle_flips_flag(self, mock_db_session):
        hero = HeroImage(image_url="https://cdn.test/maison_hero/banner", is_active=False)
        hero.id = uuid.uuid4()
        mock_db_session.get = AsyncMock(return_value=hero)

        first = await self.service.toggle_hero_image(mock_db_session, str(hero.id))
        second = await self.service.toggle_hero_image(mock_db_session, str(hero.id))

        assert first.is_active is True
        assert second.is_active is False

    @pytest.mark.asyncio
    async def test_delete_always_succeeds(self, mock_db_session):
        result = await self.service.delete_hero_image(mock_db_session, "whatever")

        assert result.message == "Hero image deleted"
