"""Structured logging helpers with correlation and Alexa request metadata."""

from __future__ import annotations

import logging
import sys
from contextlib import contextmanager
from contextvars import ContextVar, Token
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Iterator, Optional

from pythonjsonlogger import jsonlogger

from cookidoo_skill.core.config import settings

_correlation_id: ContextVar[Optional[str]] = ContextVar("correlation_id", default=None)
_alexa_request_id: ContextVar[Optional[str]] = ContextVar("alexa_request_id", default=None)

LEVEL_NAME = str(getattr(settings, "SKILL_LOG_LEVEL", "info")).upper()
LOG_LEVEL = getattr(logging, LEVEL_NAME, logging.INFO)
LOG_SCHEMA_VERSION = "1.0.0"
LOG_FILE_NAME = "cookidoo_skill.log"
LOG_MAX_BYTES = 5 * 1024 * 1024
LOG_BACKUP_COUNT = 5


def _resolve_log_file_path() -> Path | None:
    """Return the rotating log file path, or ``None`` when only stdout is used."""

    configured_dir = getattr(settings, "SKILL_LOG_DIR", None)
    if not configured_dir:
        return None
    log_dir = Path(configured_dir)
    try:
        log_dir.mkdir(parents=True, exist_ok=True)
    except PermissionError:
        return None
    return log_dir / LOG_FILE_NAME


LOG_FILE_PATH = _resolve_log_file_path()


class VersionedJsonFormatter(jsonlogger.JsonFormatter):
    """Inject a schema version into each structured log entry."""

    def __init__(self, *args, schema_version: str, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._schema_version = schema_version

    def add_fields(
        self,
        log_record: dict[str, Any],
        record: logging.LogRecord,
        message_dict: dict[str, Any],
    ) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record.setdefault("schema_version", self._schema_version)


class CorrelationIdFilter(logging.Filter):  # pylint: disable=too-few-public-methods
    """Attach correlation and Alexa request ids to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = get_correlation_id() or "-"
        record.alexa_request_id = get_alexa_request_id() or "-"
        return True


def bind_correlation_id(value: Optional[str]) -> Token[Optional[str]]:
    """Bind ``value`` to the correlation id context variable."""

    return _correlation_id.set(value)


def reset_correlation_id(token: Token[Optional[str]]) -> None:
    """Reset the correlation id context variable to a previous state."""

    _correlation_id.reset(token)


def get_correlation_id() -> Optional[str]:
    """Return the current correlation id if bound."""

    return _correlation_id.get()


def bind_alexa_request_id(value: Optional[str]) -> Token[Optional[str]]:
    """Bind the Alexa ``requestId`` of the envelope being handled."""

    return _alexa_request_id.set(value)


def reset_alexa_request_id(token: Token[Optional[str]]) -> None:
    """Reset the Alexa request id context variable."""

    _alexa_request_id.reset(token)


def get_alexa_request_id() -> Optional[str]:
    """Return the current Alexa request id if bound."""

    return _alexa_request_id.get()


@contextmanager
def correlation_id_context(value: Optional[str]) -> Iterator[None]:
    """Context manager that temporarily binds a correlation id."""

    token = bind_correlation_id(value)
    try:
        yield
    finally:
        reset_correlation_id(token)


@contextmanager
def alexa_request_id_context(value: Optional[str]) -> Iterator[None]:
    """Context manager that temporarily binds an Alexa request id."""

    token = bind_alexa_request_id(value)
    try:
        yield
    finally:
        reset_alexa_request_id(token)


def _build_formatter() -> VersionedJsonFormatter:
    return VersionedJsonFormatter(
        " ".join(
            [
                "%(asctime)s",
                "%(levelname)s",
                "%(name)s",
                "%(message)s",
                "%(correlation_id)s",
                "%(alexa_request_id)s",
            ]
        ),
        rename_fields={
            "asctime": "timestamp",
            "levelname": "level",
            "name": "logger",
            "correlation_id": "cid",
            "alexa_request_id": "rid",
        },
        datefmt="%Y-%m-%d %H:%M:%S",
        json_ensure_ascii=False,
        schema_version=LOG_SCHEMA_VERSION,
    )


def _ensure_handlers(logger: logging.Logger) -> None:
    if logger.handlers:
        return

    formatter = _build_formatter()
    correlation_filter = CorrelationIdFilter()

    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.addFilter(correlation_filter)
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)

    if LOG_FILE_PATH is not None:
        file_handler = RotatingFileHandler(
            LOG_FILE_PATH, maxBytes=LOG_MAX_BYTES, backupCount=LOG_BACKUP_COUNT, encoding="utf-8"
        )
        file_handler.addFilter(correlation_filter)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)


def get_logger(name: str) -> logging.Logger:
    """Return a configured logger with correlation id filtering."""

    logger = logging.getLogger(name)
    logger.setLevel(LOG_LEVEL)
    _ensure_handlers(logger)
    return logger


__all__ = [
    "CorrelationIdFilter",
    "VersionedJsonFormatter",
    "alexa_request_id_context",
    "bind_alexa_request_id",
    "bind_correlation_id",
    "correlation_id_context",
    "get_alexa_request_id",
    "get_correlation_id",
    "get_logger",
    "reset_alexa_request_id",
    "reset_correlation_id",
    "LOG_FILE_PATH",
    "LOG_SCHEMA_VERSION",
]
