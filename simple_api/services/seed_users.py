"""Seed Users - administrative verbs over the same Storage Gateway as the API.

Invariants:
    - seed is a no-op when the collection already holds users
    - reseed = clear + seed, so it always ends with exactly len(MOCK_USERS) users
    - Mock users pass through new_user(), the same validation as POST /users
"""

import logging

from simple_api.core.repository_protocols import UserRepository
from simple_api.core.users import new_user

logger = logging.getLogger(__name__)

MOCK_USERS: tuple[tuple[str, str], ...] = (
    ("Alice Johnson", "alice.johnson@example.com"),
    ("Bob Smith", "bob.smith@example.com"),
    ("Carol Williams", "carol.williams@example.com"),
    ("David Brown", "david.brown@example.com"),
    ("Eva Davis", "eva.davis@example.com"),
    ("Frank Miller", "frank.miller@example.com"),
    ("Grace Wilson", "grace.wilson@example.com"),
    ("Henry Moore", "henry.moore@example.com"),
)


async def seed_users(repository: UserRepository) -> int:
    """Insert the mock users into an empty collection. Returns inserted count."""
    existing = await repository.count()
    if existing > 0:
        logger.info(
            f"Collection already contains {existing} users, skipping seed",
            extra={"count": existing},
        )
        return 0
    inserted = await repository.insert_many(
        [new_user(name, email) for name, email in MOCK_USERS],
    )
    logger.info(f"Seeded {inserted} users", extra={"count": inserted})
    return inserted


async def clear_users(repository: UserRepository) -> int:
    deleted = await repository.clear()
    logger.info(f"Deleted {deleted} users", extra={"count": deleted})
    return deleted


async def count_users(repository: UserRepository) -> int:
    return await repository.count()


async def reseed_users(repository: UserRepository) -> int:
    """Clear the collection and insert fresh mock users."""
    await clear_users(repository)
    return await seed_users(repository)
