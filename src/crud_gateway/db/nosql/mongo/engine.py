from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Callable, Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection, AsyncIOMotorDatabase

from crud_gateway.app.core.logging import log_error, log_info
from crud_gateway.db.settings import MongoSettings
from crud_gateway.results import Err, capture

ClientFactory = Callable[..., Any]


def _connect(settings: MongoSettings, client_factory: ClientFactory) -> AsyncIOMotorClient:
    return client_factory(
        settings.resolved_uri,
        serverSelectionTimeoutMS=settings.server_selection_timeout_ms,
    )


def _database_of(settings: MongoSettings, client: AsyncIOMotorClient) -> AsyncIOMotorDatabase:
    if settings.database:
        return client[settings.database]
    return client.get_default_database(default="test")


async def probe(
    settings: MongoSettings,
    *,
    client_factory: ClientFactory = AsyncIOMotorClient,
    collection: Optional[str] = None,
) -> Optional[dict[str, Any]]:
    """
    Open a dedicated client, read one document, and close that client.

    Nothing else is opened, so callers without a shared engine (the CLI)
    connect exactly once.
    """
    client = _connect(settings, client_factory)
    try:
        db = _database_of(settings, client)
        return await db[collection or settings.users_collection].find_one()
    finally:
        client.close()


class MongoEngine:
    """Holds the shared motor client and the database it points at."""

    def __init__(self, settings: MongoSettings, client_factory: ClientFactory = AsyncIOMotorClient):
        self.settings = settings
        self._client_factory = client_factory
        self._client = _connect(settings, client_factory)
        self._db: AsyncIOMotorDatabase = _database_of(settings, self._client)

    @property
    def client(self) -> AsyncIOMotorClient:
        return self._client

    @property
    def database(self) -> AsyncIOMotorDatabase:
        return self._db

    def collection(self, name: Optional[str] = None) -> AsyncIOMotorCollection:
        return self._db[name or self.settings.users_collection]

    async def ping(self) -> dict[str, Any]:
        return await self._client.admin.command("ping")

    async def probe(self, collection: Optional[str] = None) -> Optional[dict[str, Any]]:
        # the shared client stays open; the probe tears down only its own
        return await probe(self.settings, client_factory=self._client_factory, collection=collection)

    def close(self) -> None:
        self._client.close()


@asynccontextmanager
async def open_mongo(
    settings: MongoSettings, *, client_factory: ClientFactory = AsyncIOMotorClient
) -> AsyncIterator[MongoEngine]:
    engine = MongoEngine(settings, client_factory=client_factory)
    # an unreachable server is logged, not fatal; requests will surface it as 500s
    outcome = await capture(engine.ping())
    if isinstance(outcome, Err):
        log_error("Erro ao conectar no MongoDB", error=outcome.error)
    else:
        log_info("MongoDB conectado")
    try:
        yield engine
    finally:
        engine.close()
