from __future__ import annotations

import json
import logging
import os
from logging.config import dictConfig
from typing import Any

from crud_gateway.app.core.env import is_prod

# Single named logger for request-tagged events; handlers live on root
event_logger = logging.getLogger("crud_gateway.events")


def _dump(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False, default=str)


def _http_context(record: logging.LogRecord) -> dict[str, object]:
    return {
        k: v for k, v in {
            "method": getattr(record, "http_method", None),
            "path": getattr(record, "path", None),
            "client_ip": getattr(record, "client_ip", None),
            "user_agent": getattr(record, "user_agent", None),
        }.items() if v is not None
    }


class JsonFormatter(logging.Formatter):
    """Structured JSON formatter for prod logs."""

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        from traceback import format_exception

        payload: dict[str, object] = {
            "time": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "pid": record.process,
            "message": record.getMessage(),
        }

        http_ctx = _http_context(record)
        if http_ctx:
            payload["http"] = http_ctx

        if getattr(record, "data", None) is not None:
            payload["data"] = record.data  # type: ignore[attr-defined]

        if record.exc_info:
            exc_type = record.exc_info[0].__name__ if record.exc_info[0] else None
            exc_message = str(record.exc_info[1]) if record.exc_info[1] else None
            stack = "".join(format_exception(*record.exc_info))

            err_obj: dict[str, object] = {}
            if exc_type:
                err_obj["type"] = exc_type
            if exc_message:
                err_obj["message"] = exc_message

            # Truncate very long stacks to keep lines readable in hosted logs.
            max_stack = int(os.getenv("LOG_STACK_LIMIT", "4000"))
            err_obj["stack"] = stack[:max_stack] + ("...(truncated)" if len(stack) > max_stack else "")

            payload["error"] = err_obj

        return _dump(payload)


class PlainFormatter(logging.Formatter):
    """Human-readable lines; request context and data are appended when present."""

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        line = super().format(record)
        http_ctx = _http_context(record)
        if http_ctx:
            line += f" [{http_ctx.get('method', '-')} {http_ctx.get('path', '-')}]"
        if getattr(record, "data", None) is not None:
            line += f" data={_dump(record.data)}"  # type: ignore[attr-defined]
        return line


def _read_level() -> str:
    explicit = os.getenv("LOG_LEVEL")
    if explicit:
        return explicit.upper()
    return "INFO" if is_prod() else "DEBUG"


def _read_format() -> str:
    fmt = os.getenv("LOG_FORMAT")
    if fmt:
        return fmt.lower()
    return "json" if is_prod() else "plain"


def setup_logging(*, level: str | None = None, fmt: str | None = None, log_file: str | None = None) -> None:
    level = (level or _read_level()).upper()
    formatter_name = "json" if (fmt or _read_format()) == "json" else "plain"
    log_file = log_file or os.getenv("LOG_FILE")

    handlers: dict[str, dict[str, Any]] = {
        "stream": {
            "class": "logging.StreamHandler",
            "level": level,
            "formatter": formatter_name,
        }
    }
    if log_file:
        # append-only sink
        handlers["file"] = {
            "class": "logging.FileHandler",
            "level": level,
            "formatter": formatter_name,
            "filename": log_file,
            "mode": "a",
            "encoding": "utf-8",
        }

    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,  # keep uvicorn & friends
            "formatters": {
                "plain": {
                    "()": PlainFormatter,
                    "fmt": "%(asctime)s %(levelname)-5s [pid:%(process)d] %(name)s: %(message)s",
                    "datefmt": "%Y-%m-%dT%H:%M:%S",
                },
                "json": {
                    "()": JsonFormatter,
                    "datefmt": "%Y-%m-%dT%H:%M:%S",
                },
            },
            "handlers": handlers,
            "root": {
                "level": level,
                "handlers": list(handlers),
            },
            "loggers": {
                "uvicorn": {"level": "INFO", "handlers": [], "propagate": True},
                "uvicorn.error": {"level": "INFO", "handlers": [], "propagate": True},
                "uvicorn.access": {"level": "INFO", "handlers": [], "propagate": True},
                # driver heartbeat chatter
                "pymongo": {"level": "WARNING", "propagate": True},
                "botocore": {"level": "WARNING", "propagate": True},
            },
        }
    )


def request_context(request: Any | None) -> dict[str, Any]:
    """Extract loggable fields from a Starlette request (or nothing)."""
    if request is None:
        return {}
    client = getattr(request, "client", None)
    ctx = {
        "http_method": request.method,
        "path": request.url.path,
        "client_ip": client.host if client else None,
        "user_agent": request.headers.get("user-agent"),
    }
    return {k: v for k, v in ctx.items() if v is not None}


def log_info(message: str, request: Any | None = None, data: Any = None) -> None:
    extra = request_context(request)
    if data is not None:
        extra["data"] = data
    event_logger.info(message, extra=extra)


def log_error(message: str, request: Any | None = None, error: BaseException | None = None) -> None:
    extra = request_context(request)
    # exc_info accepts the exception instance itself
    event_logger.error(message, extra=extra, exc_info=error if error is not None else False)


__all__ = [
    "JsonFormatter",
    "PlainFormatter",
    "event_logger",
    "log_error",
    "log_info",
    "request_context",
    "setup_logging",
]
