"""Database Manager - async MongoDB client, the Mongo Storage Gateway and its DI hook.

Invariants:
    - One AsyncMongoClient per process, owned by the FastAPI lifespan (or the CLI)
    - Every PyMongoError is mapped to StorageUnavailableError (core/errors.py)
    - Handlers never reach the client directly; they receive a UserRepository
      through Depends(get_user_repository)

Design Decisions:
    - Repository stored on app.state instead of a module singleton: tests swap it
      with app.dependency_overrides or by assigning app.state
    - tz_aware=True: created_at comes back as an aware UTC datetime
    - insert() reads the document back so the response carries the stored
      (millisecond-truncated) timestamp, identical to a later GET
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncGenerator, Sequence

from bson import ObjectId
from fastapi import Request
from pymongo import AsyncMongoClient
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.errors import PyMongoError

from simple_api.config import Settings
from simple_api.core.domain_types import (
    NewUser, StorageBackend, StoredUser, UserId,
)
from simple_api.core.errors import ResourceNotFoundError, StorageUnavailableError
from simple_api.core.repository_protocols import UserRepository
from simple_api.core.users import parse_user_id
from simple_api.infrastructure.memory_store import InMemoryUserRepository

logger = logging.getLogger(__name__)


class DatabaseManager:
    """Owns the MongoDB client and hands out collections."""

    def __init__(
        self, mongodb_uri: str, database_name: str, timeout_ms: int = 5000,
    ):
        self.client = AsyncMongoClient(
            mongodb_uri,
            serverSelectionTimeoutMS=timeout_ms,
            tz_aware=True,
        )
        self.database = self.client[database_name]
        self.database_name = database_name

    def collection(self, name: str) -> AsyncCollection:
        return self.database[name]

    async def health_check(self) -> bool:
        """Check database connectivity (for readiness probes)."""
        try:
            await self.client.admin.command("ping")
            return True
        except PyMongoError as e:
            logger.error(f"DB health check failed: {e}")
            return False

    async def close(self) -> None:
        await self.client.close()
        logger.info(f"Closed MongoDB client for {self.database_name}")


@asynccontextmanager
async def _storage_errors(operation: str) -> AsyncGenerator[None, None]:
    """Map driver failures to StorageUnavailableError."""
    try:
        yield
    except PyMongoError as e:
        logger.error(
            f"DB {operation} failed: {e}", extra={"operation": operation},
        )
        raise StorageUnavailableError(operation) from e


def _to_document(user: NewUser) -> dict:
    now = datetime.now(timezone.utc)
    return {
        "name": user.name,
        "email": user.email,
        "created_at": now,
        "updated_at": now,
    }


def _from_document(doc: dict) -> StoredUser:
    created_at = doc["created_at"]
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=timezone.utc)
    return StoredUser(
        id=UserId(str(doc["_id"])),
        name=doc["name"],
        email=doc["email"],
        created_at=created_at,
    )


class MongoUserRepository:
    """UserRepository over a single MongoDB collection."""

    def __init__(self, collection: AsyncCollection, manager: DatabaseManager | None = None):
        self._collection = collection
        self._manager = manager

    async def insert(self, user: NewUser) -> StoredUser:
        async with _storage_errors("insert"):
            result = await self._collection.insert_one(_to_document(user))
            doc = await self._collection.find_one({"_id": result.inserted_id})
        if doc is None:
            raise StorageUnavailableError("insert")
        return _from_document(doc)

    async def find_all(self) -> list[StoredUser]:
        async with _storage_errors("find_all"):
            return [_from_document(doc) async for doc in self._collection.find({})]

    async def find_by_id(self, user_id: str) -> StoredUser:
        parsed = parse_user_id(user_id)
        async with _storage_errors("find_by_id"):
            doc = await self._collection.find_one({"_id": ObjectId(parsed)})
        if doc is None:
            raise ResourceNotFoundError("User", parsed)
        return _from_document(doc)

    async def insert_many(self, users: Sequence[NewUser]) -> int:
        if not users:
            return 0
        async with _storage_errors("insert_many"):
            result = await self._collection.insert_many(
                [_to_document(u) for u in users],
            )
        return len(result.inserted_ids)

    async def count(self) -> int:
        async with _storage_errors("count"):
            return await self._collection.count_documents({})

    async def clear(self) -> int:
        async with _storage_errors("clear"):
            result = await self._collection.delete_many({})
        return result.deleted_count

    async def ping(self) -> bool:
        if self._manager is None:
            return True
        return await self._manager.health_check()


def build_user_repository(
    settings: Settings,
) -> tuple[UserRepository, DatabaseManager | None]:
    """Create the configured gateway; the manager is None for the memory backend."""
    if settings.storage_backend == StorageBackend.MEMORY:
        logger.info("Using in-memory user storage")
        return InMemoryUserRepository(), None
    manager = DatabaseManager(
        settings.mongodb_uri,
        settings.database_name,
        timeout_ms=settings.mongodb_timeout_ms,
    )
    logger.info(f"Connected to MongoDB database: {settings.database_name}")
    repository = MongoUserRepository(
        manager.collection(settings.users_collection), manager,
    )
    return repository, manager


def get_user_repository(request: Request) -> UserRepository:
    """FastAPI dependency for the Storage Gateway."""
    repository = getattr(request.app.state, "user_repository", None)
    if repository is None:
        raise RuntimeError("User storage not initialized")
    return repository
