from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse

from crud_gateway.app.core.logging import log_error, log_info
from crud_gateway.db.deps import get_mongo
from crud_gateway.db.nosql.mongo.engine import MongoEngine
from crud_gateway.results import Err, capture

ROUTER_PREFIX = "/mongodb"
ROUTER_TAG = "CRUD MongoDb"

router = APIRouter()

USER_FOUND = "Conexão com o MongoDB bem-sucedida e usuário encontrado!"
NO_USER = "Conexão com o MongoDB bem-sucedida, mas nenhum usuário encontrado."
CONNECTION_FAILED = "Erro na conexão com o MongoDB"


@router.get(
    "/testar-conexao",
    response_class=PlainTextResponse,
    responses={500: {"description": CONNECTION_FAILED}},
)
async def test_connection(request: Request, mongo: MongoEngine = Depends(get_mongo)):
    """Abre uma conexão própria com o MongoDB, lê um usuário e fecha a conexão."""
    outcome = await capture(mongo.probe())
    if isinstance(outcome, Err):
        log_error("Erro ao conectar no MongoDb", request, outcome.error)
        return PlainTextResponse(CONNECTION_FAILED, status_code=outcome.status_code)
    log_info("Conexão com o MongoDB efetuada com sucesso", request)
    return PlainTextResponse(USER_FOUND if outcome.value is not None else NO_USER)
