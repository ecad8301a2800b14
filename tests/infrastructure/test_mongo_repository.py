"""Mongo Storage Gateway - document mapping and driver error translation.

Invariants:
    - insert() returns the document as read back from the collection
    - Invalid ids fail before any collection call
    - Every PyMongoError surfaces as StorageUnavailableError
"""

from datetime import datetime, timezone

import pytest
from bson import ObjectId

from simple_api.core.domain_types import NewUser
from simple_api.core.errors import (
    InvalidIdFormatError, ResourceNotFoundError, StorageUnavailableError,
)
from simple_api.infrastructure.database import MongoUserRepository
from tests.infrastructure.fake_mongo import FakeCollection


@pytest.fixture
def collection():
    return FakeCollection()


@pytest.fixture
def repo(collection):
    return MongoUserRepository(collection)


async def test_insert_writes_document_with_timestamps(repo, collection):
    stored = await repo.insert(NewUser("Alice", "alice@example.com"))

    doc = collection.docs[0]
    assert str(doc["_id"]) == stored.id
    assert doc["name"] == "Alice"
    assert doc["created_at"] == doc["updated_at"] == stored.created_at
    assert collection.calls == ["insert_one", "find_one"]


async def test_find_all_maps_documents(repo):
    await repo.insert(NewUser("a", "a@example.com"))
    await repo.insert(NewUser("b", "b@example.com"))
    users = await repo.find_all()
    assert [u.name for u in users] == ["a", "b"]


async def test_find_by_id_round_trip(repo):
    stored = await repo.insert(NewUser("Alice", "alice@example.com"))
    assert await repo.find_by_id(stored.id) == stored


async def test_find_by_id_invalid_format_skips_collection(repo, collection):
    with pytest.raises(InvalidIdFormatError):
        await repo.find_by_id("not-an-id")
    assert collection.calls == []


async def test_find_by_id_absent(repo):
    with pytest.raises(ResourceNotFoundError):
        await repo.find_by_id("507f1f77bcf86cd799439011")


async def test_naive_datetimes_are_read_as_utc(repo, collection):
    oid = ObjectId()
    collection.docs.append({
        "_id": oid, "name": "Old", "email": "old@example.com",
        "created_at": datetime(2023, 1, 1, 12, 0, 0),
    })
    user = await repo.find_by_id(str(oid))
    assert user.created_at == datetime(2023, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


async def test_admin_operations(repo):
    assert await repo.insert_many([]) == 0
    assert await repo.insert_many([NewUser("a", "a@x"), NewUser("b", "b@x")]) == 2
    assert await repo.count() == 2
    assert await repo.clear() == 2
    assert await repo.count() == 0


async def test_ping_without_manager_is_true(repo):
    assert await repo.ping() is True


@pytest.mark.parametrize("fail_on, call", [
    ("insert_one", lambda r: r.insert(NewUser("a", "a@x"))),
    ("find", lambda r: r.find_all()),
    ("find_one", lambda r: r.find_by_id("507f1f77bcf86cd799439011")),
    ("count_documents", lambda r: r.count()),
    ("delete_many", lambda r: r.clear()),
    ("insert_many", lambda r: r.insert_many([NewUser("a", "a@x")])),
])
async def test_driver_errors_become_storage_unavailable(fail_on, call):
    repo = MongoUserRepository(FakeCollection(fail_on={fail_on}))
    with pytest.raises(StorageUnavailableError):
        await call(repo)
