"""Global pytest fixtures for Rankline.

This module provides shared fixtures for testing including:
- Settings / tier table cache isolation
- Player XP factories
- Async HTTP client against the FastAPI app
"""

from collections.abc import AsyncGenerator, Callable, Iterator
from uuid import uuid4

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from rankline.progression.config import get_settings, get_tier_table
from rankline.progression.schemas import PlayerXP


# ===========================================
# CONFIGURATION ISOLATION
# ===========================================


@pytest.fixture(autouse=True)
def clear_rank_caches(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Drop cached settings and tier table so every test sees its own env."""
    for var in (
        "RANKS_TIER_TABLE_PATH",
        "RANKS_STRICT_TIER_TABLE",
        "RANKS_LENIENT_NEGATIVE_XP",
        "RANKS_LEADERBOARD_LIMIT",
        "RANKS_MAX_LEADERBOARD_LIMIT",
        "RANKS_MAX_BATCH_SIZE",
    ):
        monkeypatch.delenv(var, raising=False)
    get_settings.cache_clear()
    get_tier_table.cache_clear()
    yield
    get_settings.cache_clear()
    get_tier_table.cache_clear()


# ===========================================
# TEST DATA FIXTURES
# ===========================================


@pytest.fixture
def make_player() -> Callable[..., PlayerXP]:
    """Factory for PlayerXP records."""

    def _make(username: str, xp: int) -> PlayerXP:
        return PlayerXP(user_id=uuid4(), username=username, xp=xp)

    return _make


# ===========================================
# HTTP CLIENT FIXTURES
# ===========================================


@pytest.fixture
def app():
    """A fresh application instance."""
    from rankline.main import create_app

    return create_app()


@pytest_asyncio.fixture
async def async_client(app) -> AsyncGenerator[AsyncClient, None]:
    """Create an async HTTP client for API testing."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
