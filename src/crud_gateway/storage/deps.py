from __future__ import annotations

from fastapi import Request

from .s3 import S3Gateway


def get_storage(request: Request) -> S3Gateway:
    return request.app.state.storage  # type: ignore[attr-defined]
