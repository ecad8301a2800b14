"""User Service - orchestrates validation and storage for the user routes.

Invariants:
    - Every storage call goes through the injected UserRepository
    - Domain errors propagate untouched; the API layer maps them to HTTP

Design Decisions:
    - Service built per request from the injected repository: no process-wide state
"""

import logging

from simple_api.core.domain_types import StoredUser
from simple_api.core.repository_protocols import UserRepository
from simple_api.core.users import new_user

logger = logging.getLogger(__name__)


class UserService:
    """Create and read users."""

    def __init__(self, repository: UserRepository):
        self._repository = repository

    async def list_users(self) -> list[StoredUser]:
        return await self._repository.find_all()

    async def get_user(self, user_id: str) -> StoredUser:
        return await self._repository.find_by_id(user_id)

    async def create_user(self, name: str, email: str) -> StoredUser:
        user = new_user(name, email)
        stored = await self._repository.insert(user)
        logger.info("Created user", extra={"user_id": stored.id})
        return stored
