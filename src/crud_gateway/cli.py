from __future__ import annotations

import asyncio

import typer

from crud_gateway.api.fastapi.routers.mongodb import CONNECTION_FAILED, NO_USER, USER_FOUND
from crud_gateway.app.core.logging import setup_logging
from crud_gateway.db.nosql.mongo.engine import probe
from crud_gateway.db.settings import get_mongo_settings
from crud_gateway.exceptions import ConfigurationError
from crud_gateway.results import Err, capture

app = typer.Typer(no_args_is_help=True, add_completion=False, help="CRUD MongoDb & Buckets API")


@app.command("serve")
def serve(
    host: str = typer.Option("0.0.0.0", help="Bind address"),
    port: int = typer.Option(3000, help="Bind port"),
    reload: bool = typer.Option(False, help="Reload on code changes (development only)"),
):
    """Run the API with uvicorn."""
    import uvicorn

    setup_logging()
    uvicorn.run("crud_gateway.main:app", host=host, port=port, reload=reload, log_config=None)


async def _probe() -> tuple[bool, str]:
    outcome = await capture(probe(get_mongo_settings()))
    if isinstance(outcome, Err):
        if isinstance(outcome.error, ConfigurationError):
            raise outcome.error
        return False, f"{CONNECTION_FAILED}: {outcome.message}"
    if outcome.value is None:
        return True, NO_USER
    return True, USER_FOUND


@app.command("check-mongo")
def check_mongo():
    """Probe the configured MongoDB (MONGO_URI) the same way GET /mongodb/testar-conexao does."""
    try:
        ok, message = asyncio.run(_probe())
    except ConfigurationError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=2)
    typer.echo(message)
    if not ok:
        raise typer.Exit(code=1)


def main():
    app()


if __name__ == "__main__":
    main()
