"""API test fixtures - in-memory Storage Gateway + FastAPI test client.

Invariants:
    - Every test gets a fresh InMemoryUserRepository
    - The gateway is injected through create_app(), the lifespan never runs
"""

import pytest
from httpx import ASGITransport, AsyncClient

from simple_api.config import Settings
from simple_api.infrastructure.memory_store import InMemoryUserRepository
from simple_api.main import create_app


@pytest.fixture
def repository():
    return InMemoryUserRepository()


@pytest.fixture
def test_app(repository):
    return create_app(Settings(storage_backend="memory"), repository=repository)


@pytest.fixture
async def client(test_app):
    async with AsyncClient(
        transport=ASGITransport(app=test_app), base_url="http://test",
    ) as c:
        yield c


@pytest.fixture
async def seeded_user(client):
    """A user created through the API."""
    res = await client.post(
        "/users", json={"name": "Alice Johnson", "email": "alice@example.com"},
    )
    assert res.status_code == 201
    return res.json()
