"""
Explicit outcomes for calls against the document store and the storage service.

Handlers never wrap client calls in try/except themselves. They await the call
through :func:`capture` and branch on the returned ``Ok`` / ``Err``:

    outcome = await capture(repo.get(user_id))
    if isinstance(outcome, Err):
        ...
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Awaitable, Generic, TypeVar, Union

T = TypeVar("T")


class ErrorKind(StrEnum):
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    DEPENDENCY = "dependency"


# Shared kind -> HTTP status mapping used by every router
STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.DEPENDENCY: 500,
}


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class Err:
    kind: ErrorKind
    message: str
    error: BaseException | None = None

    @property
    def status_code(self) -> int:
        return STATUS_BY_KIND[self.kind]

    @classmethod
    def validation(cls, message: str) -> "Err":
        return cls(ErrorKind.VALIDATION, message)

    @classmethod
    def not_found(cls, message: str) -> "Err":
        return cls(ErrorKind.NOT_FOUND, message)

    @classmethod
    def dependency(cls, error: BaseException) -> "Err":
        return cls(ErrorKind.DEPENDENCY, str(error), error)


Outcome = Union[Ok[T], Err]


async def capture(awaitable: Awaitable[T]) -> Outcome[T]:
    """Await a client call and turn any exception it raises into a dependency ``Err``."""
    try:
        return Ok(await awaitable)
    except Exception as exc:
        return Err.dependency(exc)

