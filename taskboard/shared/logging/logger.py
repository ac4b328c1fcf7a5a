# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""loguru setup for the API process.

Every record carries the id of the request that produced it; the request
middleware sets it, and code outside a request logs ``-``.
"""

from __future__ import annotations

import logging
import os
import sys
from contextvars import ContextVar
from pathlib import Path

from loguru import logger as _loguru

from .sensitive_filter import sanitize_record

_CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> "
    "<lvl>{level:<7}</lvl> "
    "[<magenta>{extra[correlation_id]}</magenta>] "
    "<cyan>{name}:{line}</cyan> {message}"
)
_FILE_FORMAT = (
    "{time:YYYY-MM-DDTHH:mm:ss.SSSZ} {level:<7} [{extra[correlation_id]}] "
    "{name}:{function}:{line} {message}"
)
_DEFAULT_LOG_FILE = Path(__file__).resolve().parents[2] / "instance" / "taskboard.log"
_QUIET_LIBRARIES = {"werkzeug": logging.INFO, "sqlalchemy.engine": logging.WARNING}

_request_id: ContextVar[str] = ContextVar("correlation_id", default="-")

_loguru.configure(extra={"correlation_id": "-"})


class _StdlibBridge(logging.Handler):
    """Routes records from stdlib loggers (werkzeug, SQLAlchemy) into loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = _loguru.level(record.levelname).name
        except ValueError:
            level = record.levelno
        _loguru.bind(correlation_id=_request_id.get()).opt(
            depth=6, exception=record.exc_info
        ).log(level, record.getMessage())


class ContextualLogger:
    """Looks like the loguru logger, binds the current request id per call."""

    def __getattr__(self, name: str):
        return getattr(_loguru.bind(correlation_id=_request_id.get()), name)


def set_correlation_id(value: str | None) -> None:
    _request_id.set(value or "-")


def get_correlation_id() -> str:
    return _request_id.get()


def clear_correlation_id() -> None:
    _request_id.set("-")


def setup_logging(level: str | None = None, *, debug_mode: bool = False) -> None:
    resolved = (level or os.getenv("LOG_LEVEL") or ("DEBUG" if debug_mode else "INFO")).upper()
    log_file = Path(os.getenv("LOG_FILE") or _DEFAULT_LOG_FILE)
    log_file.parent.mkdir(parents=True, exist_ok=True)

    _loguru.remove()
    _loguru.add(
        sys.stderr,
        level=resolved,
        format=_CONSOLE_FORMAT,
        filter=sanitize_record,
        colorize=True,
        backtrace=debug_mode,
        diagnose=False,
    )
    _loguru.add(
        str(log_file),
        level=resolved,
        format=_FILE_FORMAT,
        filter=sanitize_record,
        rotation="10 MB",
        retention=5,
        enqueue=True,
        encoding="utf-8",
        diagnose=False,
    )

    logging.basicConfig(handlers=[_StdlibBridge()], level=0, force=True)
    for name, lib_level in _QUIET_LIBRARIES.items():
        logging.getLogger(name).setLevel(lib_level)


logger = ContextualLogger()

__all__ = [
    "clear_correlation_id",
    "get_correlation_id",
    "logger",
    "set_correlation_id",
    "setup_logging",
]
