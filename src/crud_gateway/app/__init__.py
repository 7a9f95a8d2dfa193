from .core.env import Env, get_env, is_prod
from .core.logging import log_error, log_info, setup_logging
from .settings import AppSettings, get_app_settings

__all__ = [
    "AppSettings",
    "Env",
    "get_app_settings",
    "get_env",
    "is_prod",
    "log_error",
    "log_info",
    "setup_logging",
]
