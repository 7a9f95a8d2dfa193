from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    # flat = easy env overrides
    name: str = "CRUD MongoDb & Buckets API"
    version: str = "1.0.0"
    description: str = "CRUD de usuários no MongoDb e operações em buckets S3."
    docs_enabled: bool = True

    model_config = SettingsConfigDict(
        env_prefix="APP_",            # APP_NAME, APP_VERSION, APP_DOCS_ENABLED
        env_file=".env",
        extra="ignore",
    )


@lru_cache
def get_app_settings(**kwargs) -> AppSettings:
    # Only include kwargs that are not None, so defaults in AppSettings are used
    filtered_kwargs = {k: v for k, v in kwargs.items() if v is not None}
    return AppSettings(**filtered_kwargs)
