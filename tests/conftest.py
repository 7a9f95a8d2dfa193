"""
Root conftest.py for crud-gateway tests.

Fixtures are organized by category:
- Document store fixtures (fake server, engine, repository)
- Object storage fixtures (fake S3 client, gateway)
- API fixtures (FastAPI app, sync and async clients)
"""

from __future__ import annotations

import pytest
import pytest_asyncio
from fastapi import FastAPI
from fastapi.testclient import TestClient
from httpx import ASGITransport, AsyncClient

from crud_gateway.api.fastapi import create_app
from crud_gateway.app.settings import AppSettings
from crud_gateway.db.nosql.mongo.engine import MongoEngine
from crud_gateway.db.settings import MongoSettings
from crud_gateway.storage.s3 import S3Gateway
from crud_gateway.storage.settings import StorageSettings
from tests.fakes import FakeMongoServer, FakeS3Client


# =============================================================================
# DOCUMENT STORE
# =============================================================================


@pytest.fixture
def mongo_settings() -> MongoSettings:
    return MongoSettings(uri="mongodb://fake:27017/", database="test")


@pytest.fixture
def mongo_server() -> FakeMongoServer:
    return FakeMongoServer()


@pytest.fixture
def mongo_engine(mongo_settings, mongo_server) -> MongoEngine:
    engine = MongoEngine(mongo_settings, client_factory=mongo_server.client)
    yield engine
    engine.close()


@pytest.fixture
def users_collection(mongo_server):
    return mongo_server.collection("usuarios")


# =============================================================================
# OBJECT STORAGE
# =============================================================================


@pytest.fixture
def storage_settings() -> StorageSettings:
    return StorageSettings(region="sa-east-1")


@pytest.fixture
def s3_client() -> FakeS3Client:
    return FakeS3Client(buckets={"docs": {}, "fotos": {}})


@pytest.fixture
def storage(s3_client, storage_settings) -> S3Gateway:
    return S3Gateway(s3_client, storage_settings)


# =============================================================================
# API
# =============================================================================


@pytest.fixture
def app(mongo_engine, storage) -> FastAPI:
    return create_app(
        mongo=mongo_engine,
        storage=storage,
        app_settings=AppSettings(name="Test Gateway", version="9.9.9"),
    )


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


@pytest_asyncio.fixture
async def api_client(app: FastAPI) -> AsyncClient:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as c:
        yield c
