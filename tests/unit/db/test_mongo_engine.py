from __future__ import annotations

import logging

import pytest
from pymongo.errors import ServerSelectionTimeoutError

from crud_gateway.db.nosql.mongo.engine import MongoEngine, open_mongo, probe
from crud_gateway.db.settings import MongoSettings
from crud_gateway.exceptions import ConfigurationError


def test_engine_uses_configured_database_and_collection(mongo_engine, mongo_server):
    assert mongo_engine.collection() is mongo_server.collection("usuarios", "test")
    assert mongo_engine.collection("outra") is mongo_server.collection("outra", "test")


def test_engine_passes_uri_and_timeout_to_client(mongo_server):
    settings = MongoSettings(uri="mongodb://db:27017/app", server_selection_timeout_ms=1500)
    engine = MongoEngine(settings, client_factory=mongo_server.client)

    shared = mongo_server.clients[0]
    assert shared.uri == "mongodb://db:27017/app"
    assert shared.kwargs == {"serverSelectionTimeoutMS": 1500}
    # no explicit database: driver default from the URI, then "test"
    assert engine.database.name == "test"


def test_missing_uri_is_a_configuration_error(mongo_server):
    with pytest.raises(ConfigurationError):
        MongoEngine(MongoSettings(uri=None), client_factory=mongo_server.client)


@pytest.mark.asyncio
async def test_probe_uses_its_own_client_and_closes_it(mongo_engine, mongo_server):
    await mongo_engine.collection().insert_one({"name": "Ana", "email": "ana@x.com"})

    found = await mongo_engine.probe()

    assert found["name"] == "Ana"
    shared, probe_client = mongo_server.clients
    assert probe_client.closed is True
    assert shared.closed is False


@pytest.mark.asyncio
async def test_probe_on_empty_collection_returns_none(mongo_engine):
    assert await mongo_engine.probe() is None


@pytest.mark.asyncio
async def test_probe_closes_client_even_on_failure(mongo_engine, mongo_server):
    mongo_server.down = True

    with pytest.raises(ServerSelectionTimeoutError):
        await mongo_engine.probe()

    assert mongo_server.clients[-1].closed is True
    assert mongo_server.clients[0].closed is False


@pytest.mark.asyncio
async def test_open_mongo_logs_connected_and_closes_on_exit(mongo_settings, mongo_server, caplog):
    caplog.set_level(logging.INFO, logger="crud_gateway.events")

    async with open_mongo(mongo_settings, client_factory=mongo_server.client) as engine:
        assert engine.client.closed is False

    assert engine.client.closed is True
    assert "MongoDB conectado" in caplog.messages


@pytest.mark.asyncio
async def test_open_mongo_survives_unreachable_server(mongo_settings, mongo_server, caplog):
    caplog.set_level(logging.INFO, logger="crud_gateway.events")
    mongo_server.down = True

    async with open_mongo(mongo_settings, client_factory=mongo_server.client) as engine:
        assert isinstance(engine, MongoEngine)

    errors = [r for r in caplog.records if r.levelno == logging.ERROR]
    assert errors and errors[0].getMessage() == "Erro ao conectar no MongoDB"
    assert isinstance(errors[0].exc_info[1], ServerSelectionTimeoutError)


@pytest.mark.asyncio
async def test_standalone_probe_opens_a_single_client(mongo_settings, mongo_server):
    mongo_server.collection("usuarios").docs["x"] = {"_id": "x", "name": "Ana"}

    found = await probe(mongo_settings, client_factory=mongo_server.client)

    assert found["name"] == "Ana"
    (only,) = mongo_server.clients
    assert only.closed is True


@pytest.mark.asyncio
async def test_standalone_probe_without_uri_opens_nothing(mongo_server):
    with pytest.raises(ConfigurationError):
        await probe(MongoSettings(uri=None), client_factory=mongo_server.client)
    assert mongo_server.clients == []
