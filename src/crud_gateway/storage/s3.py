"""
S3 gateway: one shared aioboto3 client, one SDK call per operation.

Nothing here catches exceptions. Callers await these coroutines through
``crud_gateway.results.capture`` and render failures with :func:`describe_error`.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Optional
from urllib.parse import quote

import aioboto3
from botocore.exceptions import ClientError

from .settings import StorageSettings

DEFAULT_CONTENT_TYPE = "application/octet-stream"


class S3Gateway:
    def __init__(self, client: Any, settings: StorageSettings):
        self.client = client
        self.settings = settings

    async def list_buckets(self) -> list[dict[str, Any]]:
        resp = await self.client.list_buckets()
        return resp.get("Buckets", [])

    async def list_objects(self, bucket: str) -> list[dict[str, Any]]:
        resp = await self.client.list_objects_v2(Bucket=bucket)
        # S3 omits Contents entirely for an empty bucket
        return resp.get("Contents", [])

    async def upload(
        self,
        bucket: str,
        key: str,
        body: bytes,
        content_type: Optional[str] = None,
    ) -> dict[str, Any]:
        """Store ``body`` under ``key`` (overwriting) and echo the storage metadata."""
        resp = await self.client.put_object(
            Bucket=bucket,
            Key=key,
            Body=body,
            ContentType=content_type or DEFAULT_CONTENT_TYPE,
        )
        result: dict[str, Any] = {
            "Location": self.object_url(bucket, key),
            "ETag": resp.get("ETag"),
            "Bucket": bucket,
            "Key": key,
        }
        if resp.get("VersionId"):
            result["VersionId"] = resp["VersionId"]
        return result

    async def delete(self, bucket: str, key: str) -> None:
        await self.client.delete_object(Bucket=bucket, Key=key)

    def object_url(self, bucket: str, key: str) -> str:
        quoted = quote(key, safe="/")
        if self.settings.endpoint_url:
            return f"{self.settings.endpoint_url.rstrip('/')}/{bucket}/{quoted}"
        region = self.settings.region
        if not region or region == "us-east-1":
            return f"https://{bucket}.s3.amazonaws.com/{quoted}"
        return f"https://{bucket}.s3.{region}.amazonaws.com/{quoted}"


def describe_error(exc: BaseException | None) -> dict[str, Any]:
    """JSON-safe detail of an SDK failure, including the service error code when there is one."""
    if exc is None:
        return {}
    detail: dict[str, Any] = {"name": type(exc).__name__, "message": str(exc)}
    if isinstance(exc, ClientError):
        error = exc.response.get("Error", {})
        meta = exc.response.get("ResponseMetadata", {})
        if error.get("Code"):
            detail["code"] = error["Code"]
        if meta.get("HTTPStatusCode"):
            detail["statusCode"] = meta["HTTPStatusCode"]
    return detail


@asynccontextmanager
async def open_s3(settings: StorageSettings) -> AsyncIterator[S3Gateway]:
    session = aioboto3.Session()
    async with session.client("s3", **settings.client_kwargs()) as client:
        yield S3Gateway(client, settings)
