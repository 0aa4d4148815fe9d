"""API test fixtures backed by the in-memory database."""

from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from workforce_engine.api.app import create_app
from workforce_engine.api.dependencies import get_db_session
from workforce_engine.config import Settings, get_settings


@pytest.fixture
def app(session: AsyncSession, test_settings: Settings):
    """App whose requests share the test session and settings."""
    app = create_app()

    async def override_db_session() -> AsyncGenerator[AsyncSession, None]:
        yield session

    app.dependency_overrides[get_db_session] = override_db_session
    app.dependency_overrides[get_settings] = lambda: test_settings
    return app


@pytest_asyncio.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """Create async HTTP client for API testing."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def lenient_client(app) -> AsyncGenerator[AsyncClient, None]:
    """Client that returns 500 responses instead of re-raising app errors."""
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def company_headers(test_company) -> dict[str, str]:
    return {"X-Company-ID": str(test_company.company_id)}
