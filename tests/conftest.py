"""
ShopDesk Backend: Test Configuration (conftest.py)
==================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── mock_db_session: Mock AsyncSession for service unit tests
    ├── sample_image_bytes / sample_png_bytes: Small image payloads
    ├── test_settings: Settings pointing at a temp SQLite file and static dir
    ├── test_app: App built from test_settings with the schema created
    └── test_client: HTTPX AsyncClient talking to test_app over ASGI
"""

import os
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Quiet startup logging from the module-level app created on import
os.environ.setdefault("LOG_LEVEL", "WARNING")

from shopdesk.config import Settings  # noqa: E402
from shopdesk.main import create_app  # noqa: E402


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_get_product(mock_db_session):
            mock_db_session.execute.return_value.scalar_one_or_none.return_value = product
            result = await product_service.get_product(mock_db_session, 1)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def sample_image_bytes():
    """Minimal JPEG: SOI marker + JFIF header + EOI marker."""
    return (
        b'\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00'
        b'\xff\xd9'
    )


@pytest.fixture
def sample_png_bytes():
    """PNG signature followed by an empty IEND chunk."""
    return b'\x89PNG\r\n\x1a\n\x00\x00\x00\x00IEND\xaeB`\x82'


@pytest.fixture
def rice_fields():
    return {"name": "Rice", "price": "50", "stock": "100", "unit": "kg", "category": "grains"}


@pytest.fixture
def test_settings(tmp_path):
    """Settings for one test: its own database file and static directory."""
    static_dir = tmp_path / "public"
    static_dir.mkdir()
    (static_dir / "home.html").write_text("<html><body>ShopDesk test home</body></html>")
    (static_dir / "style.css").write_text("body { color: black; }")

    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        static_dir=str(static_dir),
        log_level="WARNING",
    )


@pytest_asyncio.fixture
async def test_app(test_settings):
    """
    App with its schema created.

    ASGITransport does not run the lifespan, so the schema step is invoked
    here the same way the lifespan does it.
    """
    app = create_app(test_settings)
    await app.state.store.create_schema()
    yield app
    await app.state.store.dispose()


@pytest_asyncio.fixture
async def test_client(test_app):
    """
    Provides an async HTTP test client for endpoint testing.

    Usage:
        async def test_bills(test_client):
            response = await test_client.get("/getBills")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
