"""Seed Users - admin verbs share the Storage Gateway with the API.

Invariants:
    - seed into an empty collection inserts every mock user
    - seed into a non-empty collection is a no-op
    - reseed always ends with exactly the mock users
"""

import pytest

from simple_api.core.domain_types import NewUser
from simple_api.infrastructure.memory_store import InMemoryUserRepository
from simple_api.services.seed_users import (
    MOCK_USERS, clear_users, count_users, reseed_users, seed_users,
)


@pytest.fixture
def repo():
    return InMemoryUserRepository()


async def test_seed_empty_collection(repo):
    assert await seed_users(repo) == len(MOCK_USERS) == 8
    names = [u.name for u in await repo.find_all()]
    assert names[0] == "Alice Johnson"
    assert names[-1] == "Henry Moore"


async def test_seed_skips_non_empty_collection(repo):
    await repo.insert(NewUser("Existing", "existing@example.com"))
    assert await seed_users(repo) == 0
    assert await count_users(repo) == 1


async def test_reseed_replaces_existing_users(repo):
    await repo.insert(NewUser("Existing", "existing@example.com"))
    assert await reseed_users(repo) == 8
    names = {u.name for u in await repo.find_all()}
    assert "Existing" not in names
    assert await count_users(repo) == 8


async def test_clear_reports_deleted_count(repo):
    await seed_users(repo)
    assert await clear_users(repo) == 8
    assert await count_users(repo) == 0
