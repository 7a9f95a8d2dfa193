from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class UserCreate(BaseModel):
    """Documented body of ``POST /usuarios``.

    The route reads the raw JSON itself; presence is checked by the service.
    """

    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = Field(default=None, examples=["Ana"])
    email: Optional[str] = Field(default=None, examples=["ana@x.com"])


class UserOut(BaseModel):
    """Shape of a stored user as rendered in responses (extra merged fields pass through)."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str = Field(alias="_id")
    name: Optional[str] = None
    email: Optional[str] = None


class MessageOut(BaseModel):
    message: str
