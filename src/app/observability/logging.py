"""Logging configuration using Loguru.

Production emits one JSON object per line (serialized with orjson); every
other environment gets colourised, human-readable output. Standard library
logging (uvicorn, asyncpg) is intercepted and routed through Loguru, and a
request-scoped context (request id, user id) is appended to every record.
"""

from __future__ import annotations

import logging
import sys
from contextvars import ContextVar
from typing import TYPE_CHECKING, Any

import orjson
from loguru import logger


if TYPE_CHECKING:
    from loguru import Logger, Record

    from app.core.config import Settings


_log_context: ContextVar[dict[str, Any]] = ContextVar("log_context", default={})

_NOISY_LOGGERS = ("uvicorn", "uvicorn.access", "uvicorn.error", "asyncpg", "asyncio")


class InterceptHandler(logging.Handler):
    """Redirect standard library log records to Loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Walk out of the logging module so Loguru reports the real caller
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def _format_json(record: Record) -> str:
    """Serialize a record (plus the request context) as a JSON line."""
    payload: dict[str, Any] = {
        "timestamp": record["time"].isoformat(),
        "level": record["level"].name,
        "message": record["message"],
        "logger": record["extra"].get("name", record["name"]),
        "function": record["function"],
        "line": record["line"],
        **_log_context.get(),
        **{k: v for k, v in record["extra"].items() if k != "name"},
    }

    exception = record["exception"]
    if exception:
        payload["exception"] = {
            "type": exception.type.__name__ if exception.type else None,
            "value": str(exception.value) if exception.value else None,
        }

    # Loguru treats the returned string as a template; braces must be escaped
    line = orjson.dumps(payload, default=str).decode()
    return line.replace("{", "{{").replace("}", "}}") + "\n{exception}"


def _format_pretty(record: Record) -> str:
    """Human-readable format with the request context appended."""
    context = {**_log_context.get(), **record["extra"]}
    context.pop("name", None)
    record["extra"]["_context"] = (
        " | " + " ".join(f"{k}={v}" for k, v in context.items()) if context else ""
    )
    return (
        "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
        "<level>{level: <8}</level> | "
        "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan>"
        "{extra[_context]} - <level>{message}</level>\n{exception}"
    )


def setup_logging(settings: Settings) -> None:
    """Configure Loguru sinks and intercept standard library logging."""
    logger.remove()

    level = settings.logging.level.upper()
    if settings.logging.format == "json" and not settings.is_development:
        logger.add(
            sys.stdout,
            format=_format_json,
            level=level,
            colorize=False,
            backtrace=False,
            diagnose=False,
        )
    else:
        logger.add(
            sys.stdout,
            format=_format_pretty,
            level=level,
            colorize=True,
            backtrace=True,
            diagnose=settings.is_development,
        )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> Logger:
    """Get a Loguru logger bound to ``name`` (typically ``__name__``)."""
    return logger.bind(name=name)


def bind_context(**kwargs: Any) -> None:
    """Add key/values to the logging context of the current task."""
    current = _log_context.get().copy()
    current.update(kwargs)
    _log_context.set(current)


def clear_context() -> None:
    """Reset the logging context (called at the start of every request)."""
    _log_context.set({})


def get_context() -> dict[str, Any]:
    """Return a copy of the current logging context."""
    return _log_context.get().copy()


__all__ = [
    "bind_context",
    "clear_context",
    "get_context",
    "get_logger",
    "logger",
    "setup_logging",
]
