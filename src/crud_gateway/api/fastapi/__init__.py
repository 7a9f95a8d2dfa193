from __future__ import annotations

import logging
from collections import defaultdict
from contextlib import AsyncExitStack, asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.routing import APIRoute

from crud_gateway.api.fastapi.middleware.errors.catchall import CatchAllExceptionMiddleware
from crud_gateway.api.fastapi.routers import register_all_routers
from crud_gateway.api.fastapi.settings import ApiConfig
from crud_gateway.app.core.env import get_env
from crud_gateway.app.settings import AppSettings, get_app_settings
from crud_gateway.db.nosql.mongo.engine import MongoEngine, open_mongo
from crud_gateway.db.settings import MongoSettings, get_mongo_settings
from crud_gateway.storage.s3 import S3Gateway, open_s3
from crud_gateway.storage.settings import StorageSettings, get_storage_settings

logger = logging.getLogger(__name__)

OPENAPI_TAGS = [
    {"name": "CRUD MongoDb", "description": "Operações de CRUD para usuários no MongoDb."},
    {
        "name": "Buckets",
        "description": "Operações de Listar buckets, upload e remoção de arquivo para um bucket S3.",
    },
]


def _gen_operation_id_factory():
    used: dict[str, int] = defaultdict(int)

    def _normalize(s: str) -> str:
        return "_".join(x for x in s.strip().replace(" ", "_").split("_") if x)

    def _gen(route: APIRoute) -> str:
        base = _normalize(route.name or getattr(route.endpoint, "__name__", "op"))
        method = next(iter(route.methods or ["GET"])).lower()

        candidate = base
        if used[candidate]:
            # append method, then a counter if still taken
            if not candidate.endswith(f"_{method}"):
                candidate = f"{candidate}_{method}"
            if used[candidate]:
                candidate = f"{candidate}_{used[candidate] + 1}"

        used[candidate] += 1
        return candidate

    return _gen


def create_app(
        *,
        mongo: Optional[MongoEngine] = None,
        storage: Optional[S3Gateway] = None,
        app_settings: Optional[AppSettings] = None,
        api_config: Optional[ApiConfig] = None,
        mongo_settings: Optional[MongoSettings] = None,
        storage_settings: Optional[StorageSettings] = None,
) -> FastAPI:
    """
    Build the API.

    Handles passed in (``mongo``, ``storage``) are used as-is and never closed
    by the app. Missing handles are opened from settings in the lifespan and
    closed on shutdown.
    """
    app_settings = app_settings or get_app_settings()
    api_config = api_config or ApiConfig()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        async with AsyncExitStack() as stack:
            if app.state.mongo is None:
                app.state.mongo = await stack.enter_async_context(
                    open_mongo(mongo_settings or get_mongo_settings())
                )
            if app.state.storage is None:
                app.state.storage = await stack.enter_async_context(
                    open_s3(storage_settings or get_storage_settings())
                )
            yield

    docs = app_settings.docs_enabled
    app = FastAPI(
        title=app_settings.name,
        version=app_settings.version,
        description=app_settings.description,
        openapi_tags=OPENAPI_TAGS,
        generate_unique_id_function=_gen_operation_id_factory(),
        lifespan=lifespan,
        docs_url="/docs" if docs else None,
        redoc_url="/redoc" if docs else None,
        openapi_url="/openapi.json" if docs else None,
    )
    app.state.mongo = mongo
    app.state.storage = storage

    # CORS is added last so it wraps the catch-all
    app.add_middleware(CatchAllExceptionMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=api_config.cors_origins,
        allow_methods=api_config.cors_methods,
        allow_headers=api_config.cors_headers,
    )

    register_all_routers(app, base_package="crud_gateway.api.fastapi.routers")
    if api_config.routers_path:
        register_all_routers(app, base_package=api_config.routers_path)

    logger.info(f"{app_settings.version} version of {app_settings.name} initialized [env: {get_env()}]")
    return app


__all__ = ["OPENAPI_TAGS", "create_app"]
