"""
Maison Catalog API: Test Configuration (conftest.py)
======================================================

Fixture Hierarchy:
    Function-scoped:
    ├── fake_image_host: in-memory ImageHost recording uploads and deletes
    ├── mock_db_session: AsyncMock session for service unit tests
    ├── db_tables: creates/drops the schema in the SQLite test database
    └── test_client: HTTPX AsyncClient wired to the app with fake_image_host
"""

import asyncio
import os
import tempfile
import uuid
from datetime import datetime, timezone
from typing import Dict, List, Optional, Set
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# ══════════════════════════════════════════════════════════════════════════
# Environment Setup (before any maison import builds settings or the engine)
# ══════════════════════════════════════════════════════════════════════════

_test_dir = tempfile.mkdtemp(prefix="maison_test_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_test_dir}/maison_test.db"
os.environ["CLOUDINARY_CLOUD_NAME"] = "test-cloud"
os.environ["CLOUDINARY_API_KEY"] = "test-key"
os.environ["CLOUDINARY_API_SECRET"] = "test-secret"
os.environ["CLEANUP_MAX_ATTEMPTS"] = "2"
os.environ["CLEANUP_MIN_WAIT"] = "0"
os.environ["CLEANUP_MAX_WAIT"] = "0"
os.environ["LOG_LEVEL"] = "WARNING"

from maison.exceptions import UploadError  # noqa: E402
from maison.services.image_host_base import ImageHost, UploadResult  # noqa: E402


class FakeImageHost(ImageHost):
    """
    ImageHost double.

    URLs are derived from the uploaded bytes, so b"front" uploaded to
    "maison_products" becomes https://cdn.test/maison_products/front.
    `delays` slows chosen buffers down to scramble completion order;
    `fail_on` makes chosen buffers raise UploadError.
    """

    def __init__(self):
        self.uploads: List[tuple] = []
        self.destroyed: List[str] = []
        self.delays: Dict[bytes, float] = {}
        self.fail_on: Set[bytes] = set()
        self.status = "available"

    async def upload(self, buffer: bytes, folder: str) -> UploadResult:
        await asyncio.sleep(self.delays.get(buffer, 0))
        if buffer in self.fail_on:
            raise UploadError(context={"folder": folder})
        self.uploads.append((folder, buffer))
        name = buffer.decode("latin-1")
        return UploadResult(
            url=f"https://cdn.test/{folder}/{name}",
            public_id=f"{folder}/{name}",
            metadata={"bytes": len(buffer)},
        )

    async def destroy(self, public_id: str) -> bool:
        self.destroyed.append(public_id)
        return True

    async def health_check(self) -> str:
        return self.status


def stamp_record(obj) -> None:
    """Stands in for the defaults the database fills in on flush/refresh."""
    now = datetime.now(timezone.utc)
    if getattr(obj, "id", None) is None:
        obj.id = uuid.uuid4()
    if getattr(obj, "created_at", None) is None:
        obj.created_at = now
    obj.updated_at = now
    if hasattr(obj, "quantity") and obj.quantity is None:
        obj.quantity = 0
    if hasattr(obj, "is_active") and obj.is_active is None:
        obj.is_active = False


# ══════════════════════════════════════════════════════════════════════════
# Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def fake_image_host():
    return FakeImageHost()


@pytest.fixture
def mock_db_session():
    """
    A mock async session.

    refresh() stamps id and timestamps on the object, the way a real flush +
    refresh would, so response models can be built from it.
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.get = AsyncMock(return_value=None)
    session.refresh = AsyncMock(side_effect=stamp_record)
    session.add = MagicMock()
    return session


@pytest_asyncio.fixture
async def db_tables():
    """Fresh products and hero_images tables for each API test."""
    import maison.models  # noqa: F401
    from maison.database import Base, engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest_asyncio.fixture
async def test_client(db_tables, fake_image_host):
    """
    HTTPX AsyncClient talking to the real app through ASGITransport, with
    the image host dependency swapped for fake_image_host.
    """
    from maison.dependencies import get_image_host
    from maison.main import app

    app.dependency_overrides[get_image_host] = lambda: fake_image_host
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def product_form() -> Dict[str, Optional[str]]:
    return {
        "name": "Linen Shirt",
        "category": "Shirts",
        "price": "49.90",
        "description": "Relaxed fit",
        "quantity": "12",
    }
