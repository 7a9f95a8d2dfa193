from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from crud_gateway.exceptions import ConfigurationError


class MongoSettings(BaseSettings):
    """
    Document store settings.

    Env support:
      MONGO_URI, MONGO_DATABASE, MONGO_USERS_COLLECTION,
      MONGO_SERVER_SELECTION_TIMEOUT_MS
    """

    uri: Optional[str] = Field(default=None)
    database: Optional[str] = Field(default=None)
    users_collection: str = Field(default="usuarios")
    server_selection_timeout_ms: int = Field(default=5000)

    model_config = SettingsConfigDict(
        env_prefix="MONGO_",
        env_file=".env",
        extra="ignore",
    )

    @property
    def resolved_uri(self) -> str:
        if not self.uri:
            raise ConfigurationError("MONGO_URI must be set for document store connectivity")
        return self.uri


@lru_cache
def get_mongo_settings(**kwargs) -> MongoSettings:
    filtered = {k: v for k, v in kwargs.items() if v is not None}
    return MongoSettings(**filtered)
