"""
Object storage (S3 / S3-compatible) access for the bucket routes.
"""
from .s3 import S3Gateway, describe_error, open_s3
from .settings import StorageSettings, get_storage_settings

__all__ = [
    "S3Gateway",
    "StorageSettings",
    "describe_error",
    "get_storage_settings",
    "open_s3",
]
