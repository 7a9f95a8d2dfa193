from __future__ import annotations

from typing import Any

from bson import ObjectId
from fastapi import APIRouter, Depends, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, PlainTextResponse

from crud_gateway.app.core.logging import log_error, log_info
from crud_gateway.db.deps import get_users_repository
from crud_gateway.db.nosql.repository import MongoRepository
from crud_gateway.results import Err, ErrorKind, Ok, Outcome, capture
from crud_gateway.users import MessageOut, UserCreate, UserOut, UserService

ROUTER_PREFIX = "/usuarios"
ROUTER_TAG = "CRUD MongoDb"

router = APIRouter()

INTERNAL_ERROR = "Ocorreu um erro interno"

_TEXT_ERRORS = {
    404: {"description": "Usuário não encontrado", "content": {"text/plain": {}}},
    500: {"description": INTERNAL_ERROR, "content": {"text/plain": {}}},
}


def _json(value: Any) -> Any:
    # documents written by other clients may hold ObjectIds or datetimes beyond _id
    return jsonable_encoder(value, custom_encoder={ObjectId: str})


def get_user_service(repo: MongoRepository = Depends(get_users_repository)) -> UserService:
    return UserService(repo)


def _text_failure(err: Err, request: Request, log_message: str) -> PlainTextResponse:
    log_error(log_message, request, err.error)
    # store failures are masked; not-found carries its own text
    text = err.message if err.kind is ErrorKind.NOT_FOUND else INTERNAL_ERROR
    return PlainTextResponse(text, status_code=err.status_code)


async def _read_body(request: Request) -> Outcome[Any]:
    """Decode the JSON body as sent; an empty body reads as ``None``."""
    raw = await request.body()
    if not raw.strip():
        return Ok(None)
    return await capture(request.json())


@router.post(
    "",
    status_code=201,
    response_model=UserOut,
    responses={400: {"model": MessageOut}, 500: {"description": "Erro ao criar usuário"}},
    openapi_extra={
        "requestBody": {"content": {"application/json": {"schema": UserCreate.model_json_schema()}}}
    },
)
async def create_user(request: Request, service: UserService = Depends(get_user_service)):
    """Cria um usuário a partir de `name` e `email` (ambos obrigatórios)."""
    body = await _read_body(request)
    # unreadable or non-object bodies carry no fields and fail the presence check
    fields = body.value if isinstance(body, Ok) and isinstance(body.value, dict) else {}
    outcome = await service.create(fields.get("name"), fields.get("email"))
    if isinstance(outcome, Err):
        if outcome.kind is ErrorKind.VALIDATION:
            log_error(outcome.message, request)
            return JSONResponse({"message": outcome.message}, status_code=outcome.status_code)
        log_error("Erro ao criar usuário", request, outcome.error)
        return JSONResponse(
            {"message": "Erro ao criar usuário", "error": outcome.message},
            status_code=outcome.status_code,
        )
    log_info("Usuário criado", request, outcome.value)
    return JSONResponse(_json(outcome.value), status_code=201)


@router.get("", response_model=list[UserOut], responses={500: _TEXT_ERRORS[500]})
async def list_users(request: Request, service: UserService = Depends(get_user_service)):
    """Lista todos os usuários, na ordem devolvida pelo banco."""
    outcome = await service.list()
    if isinstance(outcome, Err):
        return _text_failure(outcome, request, "Erro ao buscar usuários")
    log_info("Usuários encontrados", request, outcome.value)
    return JSONResponse(_json(outcome.value))


@router.get("/{user_id}", response_model=UserOut, responses=_TEXT_ERRORS)
async def get_user(request: Request, user_id: str, service: UserService = Depends(get_user_service)):
    """Busca um usuário pelo id."""
    outcome = await service.get(user_id)
    if isinstance(outcome, Err):
        return _text_failure(outcome, request, "Erro ao buscar usuário")
    log_info("Usuário encontrado", request, outcome.value)
    return JSONResponse(_json(outcome.value))


@router.put(
    "/{user_id}",
    response_model=UserOut,
    responses=_TEXT_ERRORS,
    openapi_extra={
        "requestBody": {
            "content": {"application/json": {"schema": {"type": "object", "additionalProperties": True}}}
        }
    },
)
async def update_user(request: Request, user_id: str, service: UserService = Depends(get_user_service)):
    """Mescla os campos do corpo no usuário e devolve o registro atualizado."""
    body = await _read_body(request)
    if isinstance(body, Ok) and not isinstance(body.value, (dict, type(None))):
        body = Err.dependency(TypeError(f"Update body must be a JSON object, got {type(body.value).__name__}"))
    if isinstance(body, Err):
        return _text_failure(body, request, "Erro ao atualizar usuário")
    outcome = await service.update(user_id, body.value or {})
    if isinstance(outcome, Err):
        return _text_failure(outcome, request, "Erro ao atualizar usuário")
    log_info("Usuário atualizado", request, outcome.value)
    return JSONResponse(_json(outcome.value))


@router.delete("/{user_id}", response_model=MessageOut, responses=_TEXT_ERRORS)
async def delete_user(request: Request, user_id: str, service: UserService = Depends(get_user_service)):
    """Remove um usuário pelo id."""
    outcome = await service.delete(user_id)
    if isinstance(outcome, Err):
        return _text_failure(outcome, request, "Erro ao remover usuário")
    log_info("Usuário removido", request)
    return JSONResponse({"message": "Usuário removido com sucesso"})
