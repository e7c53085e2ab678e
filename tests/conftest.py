"""Pytest configuration and fixtures."""

import os
from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient

# Set test environment before any app code runs
os.environ["ENV"] = "test"


@pytest.fixture(scope="session", autouse=True)
def configure_logging() -> None:
    """Quiet structured logging; stdout is asserted on by the CLI tests."""
    from api.config import get_settings
    from api.logging import setup_logging

    get_settings.cache_clear()
    setup_logging(log_level="WARNING")


@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """Create async test client."""
    from api.main import app

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
