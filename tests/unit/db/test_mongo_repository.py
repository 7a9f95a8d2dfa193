from __future__ import annotations

import pytest
from bson import ObjectId
from bson.errors import InvalidId

from crud_gateway.db.nosql.repository import MongoRepository, to_json_document


@pytest.fixture
def repo(users_collection) -> MongoRepository:
    return MongoRepository(users_collection)


def test_to_json_document_renders_object_id():
    oid = ObjectId()
    assert to_json_document({"_id": oid, "name": "Ana"}) == {"_id": str(oid), "name": "Ana"}
    assert to_json_document({"_id": "already-a-string"}) == {"_id": "already-a-string"}


@pytest.mark.asyncio
async def test_create_assigns_fresh_string_id(repo, users_collection):
    first = await repo.create({"name": "Ana", "email": "ana@x.com"})
    second = await repo.create({"name": "Bia", "email": "bia@x.com"})

    assert ObjectId.is_valid(first["_id"])
    assert first["_id"] != second["_id"]
    assert first["name"] == "Ana" and first["email"] == "ana@x.com"
    assert len(users_collection.docs) == 2


@pytest.mark.asyncio
async def test_get_returns_created_document(repo):
    created = await repo.create({"name": "Ana", "email": "ana@x.com"})
    assert await repo.get(created["_id"]) == created


@pytest.mark.asyncio
async def test_get_missing_returns_none(repo):
    assert await repo.get(str(ObjectId())) is None


@pytest.mark.asyncio
async def test_malformed_id_raises_driver_error(repo):
    with pytest.raises(InvalidId):
        await repo.get("not-an-object-id")
    with pytest.raises(InvalidId):
        await repo.delete("123")


@pytest.mark.asyncio
async def test_list_returns_all_documents(repo):
    await repo.create({"name": "Ana", "email": "ana@x.com"})
    await repo.create({"name": "Bia", "email": "bia@x.com"})

    names = sorted(u["name"] for u in await repo.list())
    assert names == ["Ana", "Bia"]


@pytest.mark.asyncio
async def test_update_merges_fields_and_keeps_others(repo):
    created = await repo.create({"name": "Ana", "email": "ana@x.com"})

    updated = await repo.update(created["_id"], {"name": "X", "phone": "555"})

    assert updated == {"_id": created["_id"], "name": "X", "email": "ana@x.com", "phone": "555"}


@pytest.mark.asyncio
async def test_update_ignores_id_in_body(repo):
    created = await repo.create({"name": "Ana", "email": "ana@x.com"})
    updated = await repo.update(created["_id"], {"_id": str(ObjectId()), "name": "X"})
    assert updated["_id"] == created["_id"]


@pytest.mark.asyncio
async def test_update_with_empty_body_returns_current(repo, users_collection):
    created = await repo.create({"name": "Ana", "email": "ana@x.com"})
    writes = users_collection.writes

    assert await repo.update(created["_id"], {}) == created
    assert users_collection.writes == writes


@pytest.mark.asyncio
async def test_update_missing_returns_none(repo):
    assert await repo.update(str(ObjectId()), {"name": "X"}) is None


@pytest.mark.asyncio
async def test_delete_reports_affected_count(repo):
    created = await repo.create({"name": "Ana", "email": "ana@x.com"})
    assert await repo.delete(created["_id"]) == 1
    assert await repo.delete(created["_id"]) == 0
