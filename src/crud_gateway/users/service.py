from __future__ import annotations

from typing import Any, Mapping

from crud_gateway.db.nosql.repository import MongoRepository
from crud_gateway.results import Err, Ok, Outcome, capture

MISSING_FIELDS = "Nome e email são obrigatórios."
NOT_FOUND = "Usuário não encontrado"


class UserService:
    """User record operations expressed as outcomes.

    Presence of ``name``/``email`` is the only validation; scalar values are
    stored as text. Absent records become ``not_found``; every driver
    failure (including a malformed id) becomes ``dependency``.
    """

    def __init__(self, repo: MongoRepository):
        self.repo = repo

    async def create(self, name: Any, email: Any) -> Outcome[dict[str, Any]]:
        if not name or not email:
            return Err.validation(MISSING_FIELDS)
        try:
            doc = {"name": _as_text(name), "email": _as_text(email)}
        except TypeError as exc:
            return Err.dependency(exc)
        return await capture(self.repo.create(doc))

    async def list(self) -> Outcome[list[dict[str, Any]]]:
        return await capture(self.repo.list())

    async def get(self, user_id: str) -> Outcome[dict[str, Any]]:
        return _found(await capture(self.repo.get(user_id)))

    async def update(self, user_id: str, data: Mapping[str, Any]) -> Outcome[dict[str, Any]]:
        return _found(await capture(self.repo.update(user_id, data)))

    async def delete(self, user_id: str) -> Outcome[int]:
        outcome = await capture(self.repo.delete(user_id))
        if isinstance(outcome, Ok) and outcome.value == 0:
            return Err.not_found(NOT_FOUND)
        return outcome


def _as_text(value: Any) -> str:
    # scalars are stored as text; objects and arrays cannot be
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (str, int, float)):
        return str(value)
    raise TypeError(f"Cast to string failed for value {value!r}")


def _found(outcome: Outcome[Any]) -> Outcome[Any]:
    if isinstance(outcome, Ok) and outcome.value is None:
        return Err.not_found(NOT_FOUND)
    return outcome
