"""
Maison Catalog API: Hero Image Endpoint Tests
===============================================

What we test:
    ✅ isActive "true" → true, omitted → false
    ✅ Missing image → 400, zero-byte image forwarded to the host
    ✅ Toggle twice returns to the original state
    ✅ Toggle unknown id → 404 and the collection is unchanged
    ✅ Delete always reports success
    ✅ Writes are committed before the response; a failed commit → 500 + cleanup
"""

import uuid
from unittest.mock import AsyncMock, patch

import pytest


def _banner(name: str = "banner"):
    return {"image": (f"{name}.jpg", name.encode(), "image/jpeg")}


class TestCreateHeroImage:

    @pytest.mark.asyncio
    async def test_create_active(self, test_client, fake_image_host):
        response = await test_client.post(
            "/api/hero-images", data={"isActive": "true"}, files=_banner(),
        )

        assert response.status_code == 201
        body = response.json()
        assert body["imageUrl"] == "https://cdn.test/maison_hero/banner"
        assert body["isActive"] is True
        assert fake_image_host.uploads == [("maison_hero", b"banner")]

    @pytest.mark.asyncio
    async def test_create_defaults_to_inactive(self, test_client):
        response = await test_client.post("/api/hero-images", files=_banner())

        assert response.status_code == 201
        assert response.json()["isActive"] is False

    @pytest.mark.asyncio
    async def test_create_non_true_value_is_inactive(self, test_client):
        response = await test_client.post(
            "/api/hero-images", data={"isActive": "yes"}, files=_banner(),
        )

        assert response.json()["isActive"] is False

    @pytest.mark.asyncio
    async def test_create_without_image(self, test_client, fake_image_host):
        response = await test_client.post("/api/hero-images", data={"isActive": "true"})

        assert response.status_code == 400
        assert response.json()["message"] == "No image uploaded"
        assert fake_image_host.uploads == []

    @pytest.mark.asyncio
    async def test_zero_byte_image_reaches_host(self, test_client, fake_image_host):
        response = await test_client.post(
            "/api/hero-images", files={"image": ("empty.jpg", b"", "image/jpeg")},
        )

        # The host is the only judge of image content
        assert response.status_code == 201
        assert fake_image_host.uploads == [("maison_hero", b"")]


class TestListHeroImages:

    @pytest.mark.asyncio
    async def test_newest_first_active_or_not(self, test_client):
        await test_client.post("/api/hero-images", files=_banner("old"))
        await test_client.post("/api/hero-images", data={"isActive": "true"}, files=_banner("new"))

        response = await test_client.get("/api/hero-images")

        assert response.status_code == 200
        urls = [h["imageUrl"] for h in response.json()]
        assert urls == [
            "https://cdn.test/maison_hero/new",
            "https://cdn.test/maison_hero/old",
        ]


class TestToggleHeroImage:

    @pytest.mark.asyncio
    async def test_toggle_twice(self, test_client):
        created = (await test_client.post("/api/hero-images", files=_banner())).json()
        url = f"/api/hero-images/{created['_id']}/toggle"

        first = await test_client.patch(url)
        second = await test_client.patch(url)

        assert first.status_code == 200
        assert first.json()["isActive"] is True
        assert second.json()["isActive"] is False

    @pytest.mark.asyncio
    async def test_toggle_unknown(self, test_client):
        await test_client.post("/api/hero-images", files=_banner())
        before = (await test_client.get("/api/hero-images")).json()

        response = await test_client.patch(f"/api/hero-images/{uuid.uuid4()}/toggle")

        assert response.status_code == 404
        assert response.json()["message"] == "Hero image not found"
        assert (await test_client.get("/api/hero-images")).json() == before


class TestDeleteHeroImage:

    @pytest.mark.asyncio
    async def test_delete_existing(self, test_client):
        created = (await test_client.post("/api/hero-images", files=_banner())).json()

        response = await test_client.delete(f"/api/hero-images/{created['_id']}")

        assert response.json() == {"message": "Hero image deleted"}
        assert (await test_client.get("/api/hero-images")).json() == []

    @pytest.mark.asyncio
    async def test_delete_unknown(self, test_client):
        response = await test_client.delete(f"/api/hero-images/{uuid.uuid4()}")

        assert response.status_code == 200
        assert response.json() == {"message": "Hero image deleted"}


class TestHeroImageCommit:

    @pytest.mark.asyncio
    async def test_toggle_is_committed_before_response(self, test_client):
        from maison.database import async_session_factory
        from maison.models.hero_image import HeroImage

        created = (await test_client.post("/api/hero-images", files=_banner())).json()
        await test_client.patch(f"/api/hero-images/{created['_id']}/toggle")

        async with async_session_factory() as session:
            stored = await session.get(HeroImage, uuid.UUID(created["_id"]))

        assert stored.is_active is True

    @pytest.mark.asyncio
    async def test_commit_failure_returns_500_and_cleans_up(self, test_client, fake_image_host):
        from sqlalchemy.ext.asyncio import AsyncSession

        failing_commit = AsyncMock(side_effect=RuntimeError("commit failed"))
        with patch.object(AsyncSession, "commit", failing_commit):
            response = await test_client.post("/api/hero-images", files=_banner())

        assert response.status_code == 500
        assert fake_image_host.destroyed == ["maison_hero/banner"]
        assert (await test_client.get("/api/hero-images")).json() == []
