# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Flask, g, request
from werkzeug.exceptions import HTTPException

from taskboard.shared.config import load_config
from taskboard.shared.errors import (
    AppError,
    handle_app_error,
    handle_http_exception,
    internal_error_response,
)
from taskboard.shared.logging import logger


def configure_error_handling(app: Flask) -> None:
    """Turns every exception escaping a view into the JSON error envelope."""
    verbose = load_config().debug_logging

    @app.errorhandler(AppError)
    def _app_error(exc: AppError):
        log = logger.warning if int(exc.status) >= 500 else logger.info
        log(f"{request.method} {request.path} -> {exc.code} ({int(exc.status)})")
        return handle_app_error(exc)

    @app.errorhandler(HTTPException)
    def _http_error(exc: HTTPException):
        return handle_http_exception(exc)

    @app.errorhandler(Exception)
    def _unexpected(exc: Exception):
        where = f"{request.method} {request.path} user={g.get('user_id')}"
        if verbose:
            logger.opt(exception=exc).error(f"unhandled exception on {where}")
        else:
            logger.error(f"unhandled {type(exc).__name__} on {where}")
        return internal_error_response()


__all__ = ["configure_error_handling"]
