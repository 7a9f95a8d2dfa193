from __future__ import annotations

from fastapi import Request

from .nosql.mongo.engine import MongoEngine
from .nosql.repository import MongoRepository


def get_mongo(request: Request) -> MongoEngine:
    return request.app.state.mongo  # type: ignore[attr-defined]


def get_users_repository(request: Request) -> MongoRepository:
    return MongoRepository(get_mongo(request).collection())
