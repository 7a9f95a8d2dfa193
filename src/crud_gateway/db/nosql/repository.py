from __future__ import annotations

from typing import Any, Mapping, Optional

from bson import ObjectId
from pymongo import ReturnDocument


def to_json_document(doc: Mapping[str, Any]) -> dict[str, Any]:
    """Render a stored document for JSON output: ObjectId ``_id`` becomes its hex string."""
    out = dict(doc)
    if isinstance(out.get("_id"), ObjectId):
        out["_id"] = str(out["_id"])
    return out


class MongoRepository:
    """Async CRUD over a single motor collection, keyed by ObjectId.

    - Ids arrive as strings; a string that is not a valid ObjectId raises
      ``bson.errors.InvalidId`` like any other driver failure.
    - Returned documents are already rendered with :func:`to_json_document`.
    """

    def __init__(self, collection: Any):
        self.collection = collection

    @staticmethod
    def _by_id(id: str) -> dict[str, Any]:
        return {"_id": ObjectId(id)}

    async def create(self, data: Mapping[str, Any]) -> dict[str, Any]:
        doc = dict(data)
        result = await self.collection.insert_one(doc)
        doc["_id"] = result.inserted_id
        return to_json_document(doc)

    async def list(self) -> list[dict[str, Any]]:
        docs = await self.collection.find({}).to_list(length=None)
        return [to_json_document(d) for d in docs]

    async def get(self, id: str) -> Optional[dict[str, Any]]:
        doc = await self.collection.find_one(self._by_id(id))
        return to_json_document(doc) if doc is not None else None

    async def update(self, id: str, data: Mapping[str, Any]) -> Optional[dict[str, Any]]:
        fields = {k: v for k, v in data.items() if k != "_id"}
        if not fields:
            # $set with nothing to set is rejected by the server
            return await self.get(id)
        doc = await self.collection.find_one_and_update(
            self._by_id(id),
            {"$set": fields},
            return_document=ReturnDocument.AFTER,
        )
        return to_json_document(doc) if doc is not None else None

    async def delete(self, id: str) -> int:
        result = await self.collection.delete_one(self._by_id(id))
        return result.deleted_count
