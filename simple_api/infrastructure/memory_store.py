"""In-Memory Storage Gateway - process-local UserRepository.

Invariants:
    - Same contract as MongoUserRepository: ObjectId ids, insertion order, same errors
    - No await inside a mutation, so each operation is atomic under asyncio

Design Decisions:
    - dict keyed by id preserves insertion order (find_all matches natural order)
    - Selected with STORAGE_BACKEND=memory; also the test double for route tests
"""

from datetime import datetime, timezone
from typing import Sequence

from bson import ObjectId

from simple_api.core.domain_types import NewUser, StoredUser, UserId
from simple_api.core.errors import ResourceNotFoundError
from simple_api.core.users import parse_user_id


class InMemoryUserRepository:
    """UserRepository backed by a dict."""

    def __init__(self):
        self._users: dict[UserId, StoredUser] = {}

    async def insert(self, user: NewUser) -> StoredUser:
        stored = StoredUser(
            id=UserId(str(ObjectId())),
            name=user.name,
            email=user.email,
            created_at=datetime.now(timezone.utc),
        )
        self._users[stored.id] = stored
        return stored

    async def find_all(self) -> list[StoredUser]:
        return list(self._users.values())

    async def find_by_id(self, user_id: str) -> StoredUser:
        parsed = parse_user_id(user_id)
        try:
            return self._users[parsed]
        except KeyError:
            raise ResourceNotFoundError("User", parsed) from None

    async def insert_many(self, users: Sequence[NewUser]) -> int:
        for user in users:
            await self.insert(user)
        return len(users)

    async def count(self) -> int:
        return len(self._users)

    async def clear(self) -> int:
        deleted = len(self._users)
        self._users.clear()
        return deleted

    async def ping(self) -> bool:
        return True
