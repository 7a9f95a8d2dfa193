from pydantic import BaseModel


class ApiConfig(BaseModel):
    routers_path: str | None = None
    cors_origins: list[str] = ["*"]
    cors_methods: list[str] = ["GET", "POST", "PUT", "DELETE"]
    cors_headers: list[str] = ["*"]
