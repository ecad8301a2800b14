"""Boundary Protocols - contracts between core and shell.

Invariants:
    - Core NEVER imports from shell; dependency arrows point inward only
    - Every storage operation is reached through UserRepository
    - Implementations are handed to handlers via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, Mongo and in-memory gateways
      share no base class
    - Async methods: implementations do network IO
"""

from typing import Protocol, Sequence

from simple_api.core.domain_types import NewUser, StoredUser


class UserRepository(Protocol):
    """Contract for user persistence (the Storage Gateway)."""
    async def insert(self, user: NewUser) -> StoredUser: ...
    async def find_all(self) -> list[StoredUser]: ...
    async def find_by_id(self, user_id: str) -> StoredUser:
        """Raises InvalidIdFormatError, then ResourceNotFoundError."""
        ...

    # Administrative operations (seed / clear / count / reseed)
    async def insert_many(self, users: Sequence[NewUser]) -> int: ...
    async def count(self) -> int: ...
    async def clear(self) -> int: ...

    async def ping(self) -> bool: ...
