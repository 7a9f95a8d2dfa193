from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """
    Object storage settings.

    Region is read from S3_REGION, then REGION, then AWS_REGION. Leave the
    credentials unset to use the default AWS credential chain; set
    S3_ENDPOINT_URL for S3-compatible services (MinIO, LocalStack, R2).
    """

    region: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("S3_REGION", "REGION", "AWS_REGION"),
    )
    endpoint_url: Optional[str] = Field(default=None)
    access_key: Optional[str] = Field(default=None)
    secret_key: Optional[str] = Field(default=None)

    model_config = SettingsConfigDict(
        env_prefix="S3_",
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )

    def client_kwargs(self) -> dict[str, str]:
        kwargs = {
            "region_name": self.region,
            "endpoint_url": self.endpoint_url,
            "aws_access_key_id": self.access_key,
            "aws_secret_access_key": self.secret_key,
        }
        return {k: v for k, v in kwargs.items() if v}


@lru_cache
def get_storage_settings(**kwargs) -> StorageSettings:
    filtered = {k: v for k, v in kwargs.items() if v is not None}
    return StorageSettings(**filtered)
