from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from starlette.datastructures import UploadFile

from crud_gateway.app.core.logging import log_error, log_info
from crud_gateway.results import Err, capture
from crud_gateway.storage.deps import get_storage
from crud_gateway.storage.s3 import S3Gateway, describe_error

ROUTER_PREFIX = "/buckets"
ROUTER_TAG = "Buckets"

router = APIRouter()

NO_FILE = "Nenhum arquivo enviado."


def _details_failure(err: Err, request: Request, log_message: str, error: str) -> JSONResponse:
    log_error(log_message, request, err.error)
    return JSONResponse(
        {"error": error, "details": describe_error(err.error)},
        status_code=err.status_code,
    )


def _message_failure(err: Err, request: Request, log_message: str, message: str) -> JSONResponse:
    log_error(log_message, request, err.error)
    return JSONResponse({"message": message, "error": err.message}, status_code=err.status_code)


@router.get("")
async def list_buckets(request: Request, storage: S3Gateway = Depends(get_storage)):
    """Lista os buckets visíveis para as credenciais configuradas."""
    outcome = await capture(storage.list_buckets())
    if isinstance(outcome, Err):
        return _details_failure(outcome, request, "Erro ao buscar buckets", "Erro ao listar buckets")
    buckets = jsonable_encoder(outcome.value)
    log_info("Buckets encontrados", request, buckets)
    return JSONResponse(buckets)


@router.get("/{bucket_name}")
async def list_objects(request: Request, bucket_name: str, storage: S3Gateway = Depends(get_storage)):
    """Lista os objetos de um bucket."""
    outcome = await capture(storage.list_objects(bucket_name))
    if isinstance(outcome, Err):
        return _details_failure(outcome, request, "Erro ao buscar objetos", "Erro ao listar objetos do bucket")
    objects = jsonable_encoder(outcome.value)
    log_info("Objetos encontrados", request, objects)
    return JSONResponse(objects)


@router.post(
    "/{bucket_name}/upload",
    openapi_extra={
        "requestBody": {
            "content": {
                "multipart/form-data": {
                    "schema": {
                        "type": "object",
                        "properties": {"file": {"type": "string", "format": "binary"}},
                    }
                }
            }
        }
    },
)
async def upload_file(request: Request, bucket_name: str, storage: S3Gateway = Depends(get_storage)):
    """Envia um arquivo (campo multipart `file`) para o bucket, usando o nome original como chave."""
    async with request.form() as form:
        # a text field named `file` is not an upload
        file = form.get("file")
        if not isinstance(file, UploadFile) or not file.filename:
            err = Err.validation(NO_FILE)
            log_error(err.message, request)
            return JSONResponse({"message": err.message}, status_code=err.status_code)

        # whole payload in memory; no streaming or size limit
        body = await file.read()
        key, content_type = file.filename, file.content_type

    outcome = await capture(storage.upload(bucket_name, key, body, content_type))
    if isinstance(outcome, Err):
        return _message_failure(outcome, request, "Erro ao efetuar upload", "Erro no upload")
    data = jsonable_encoder(outcome.value)
    log_info("Upload efetuado", request, data)
    return JSONResponse({"message": "Upload concluído com sucesso", "data": data})


@router.delete("/{bucket_name}/file/{file_name:path}")
async def delete_file(
    request: Request,
    bucket_name: str,
    file_name: str,
    storage: S3Gateway = Depends(get_storage),
):
    """Remove um objeto do bucket. Remover uma chave inexistente também é sucesso."""
    outcome = await capture(storage.delete(bucket_name, file_name))
    if isinstance(outcome, Err):
        return _message_failure(outcome, request, "Erro ao remover objeto", "Erro ao remover arquivo")
    log_info("Objeto removido", request)
    return JSONResponse({"message": "Arquivo deletado com sucesso"})
