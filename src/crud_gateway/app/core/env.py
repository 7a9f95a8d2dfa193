from __future__ import annotations

import os
import warnings
from enum import StrEnum
from functools import cache


class Env(StrEnum):
    LOCAL = "local"
    DEV = "dev"
    TEST = "test"
    PROD = "prod"


_ALIASES = {
    "development": Env.DEV,
    "staging": Env.DEV,
    "testing": Env.TEST,
    "production": Env.PROD,
}


@cache
def get_env() -> Env:
    """APP_ENV, then ENVIRONMENT; unset or unknown values resolve to local."""
    raw = (os.getenv("APP_ENV") or os.getenv("ENVIRONMENT") or "").strip().lower()
    if not raw:
        return Env.LOCAL
    if raw in _ALIASES:
        return _ALIASES[raw]
    if raw in {e.value for e in Env}:
        return Env(raw)
    warnings.warn(f"Unrecognized environment '{raw}', defaulting to 'local'.", RuntimeWarning, stacklevel=2)
    return Env.LOCAL


def is_prod() -> bool:
    return get_env() is Env.PROD
