"""Logging configuration using Loguru.

This module provides:
- Structured JSON logging (one orjson-encoded object per line)
- Colorized human-readable output for development
- Request-scoped context (request id, user id) via a ContextVar
- Interception of standard library logging (uvicorn, SQLAlchemy, httpx)
"""

from __future__ import annotations

import logging
import sys
from contextvars import ContextVar
from pathlib import Path
from typing import TYPE_CHECKING, Final

import orjson
from loguru import logger


if TYPE_CHECKING:
    from typing import Any


_log_context: ContextVar[dict[str, Any]] = ContextVar("log_context", default={})

# Libraries that are chatty at INFO and below
NOISY_LOGGERS: Final[tuple[str, ...]] = (
    "uvicorn",
    "uvicorn.access",
    "uvicorn.error",
    "sqlalchemy.engine",
    "httpx",
    "httpcore",
    "asyncio",
)


class InterceptHandler(logging.Handler):
    """Forward standard library log records to Loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        """Emit a log record by forwarding to Loguru."""
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


def _serialize_record(record: dict[str, Any]) -> bytes:
    """Build the JSON document for a single record."""
    extra = record["extra"]
    fields: dict[str, Any] = {
        "timestamp": record["time"].isoformat(),
        "level": record["level"].name,
        "message": record["message"],
        "logger": extra.get("name", record["name"]),
        "function": record["function"],
        "line": record["line"],
        **_log_context.get(),
        **{k: v for k, v in extra.items() if k not in ("name", "_json")},
    }

    exception = record["exception"]
    if exception:
        fields["exception"] = {
            "type": exception.type.__name__ if exception.type else None,
            "value": str(exception.value) if exception.value else None,
        }

    return orjson.dumps(fields, default=str)


def _format_json(record: dict[str, Any]) -> str:
    """Loguru format callable for JSON sinks.

    The serialized payload is stashed in ``extra`` and referenced by name so
    Loguru does not try to interpret braces inside it.
    """
    record["extra"]["_json"] = _serialize_record(record).decode()
    return "{extra[_json]}\n"


def _format_dev(record: dict[str, Any]) -> str:
    """Loguru format callable for development output."""
    context = {
        **_log_context.get(),
        **{k: v for k, v in record["extra"].items() if k not in ("name", "_json")},
    }
    context_str = ""
    if context:
        pairs = " ".join(f"{k}={v}" for k, v in context.items())
        # Escape braces and tags so Loguru does not parse them
        pairs = pairs.replace("{", "{{").replace("}", "}}").replace("<", r"\<")
        context_str = " | " + pairs

    fmt = (
        "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
        "<level>{level: <8}</level> | "
        "<cyan>{extra[name]}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan>"
        f"{context_str} - "
        "<level>{message}</level>\n"
    )
    if record["exception"]:
        fmt += "{exception}\n"
    return fmt


def setup_logging(
    log_level: str = "INFO",
    log_format: str = "json",
    *,
    is_development: bool = False,
    log_file: Path | str | None = None,
) -> None:
    """Configure Loguru logging.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Output format ("json" or "text")
        is_development: Force the human-readable format
        log_file: Optional file path for JSON output with rotation
    """
    logger.remove()
    logger.configure(extra={"name": "recipe_finder"})

    level = log_level.upper()
    if log_format == "json" and not is_development:
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
            format=_format_dev,
            level=level,
            colorize=True,
            backtrace=True,
            diagnose=is_development,
        )

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_path,
            format=_format_json,
            level=level,
            rotation="50 MB",
            retention="7 days",
            compression="gz",
            backtrace=False,
            diagnose=False,
        )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> Any:
    """Get a Loguru logger bound to a module name.

    Args:
        name: Logger name (typically __name__)
    """
    return logger.bind(name=name)


def bind_context(**kwargs: Any) -> None:
    """Add fields to every log entry of the current request or task.

    Example:
        bind_context(request_id="abc-123", user_id=42)
    """
    _log_context.set({**_log_context.get(), **kwargs})


def clear_context() -> None:
    """Drop all request-scoped logging fields."""
    _log_context.set({})


def get_context() -> dict[str, Any]:
    """Return a copy of the current logging context."""
    return _log_context.get().copy()


__all__ = [
    "InterceptHandler",
    "bind_context",
    "clear_context",
    "get_context",
    "get_logger",
    "logger",
    "setup_logging",
]
