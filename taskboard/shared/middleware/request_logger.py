# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import hashlib
import re
import secrets
import time
from collections.abc import Mapping

from flask import Flask, Response, g, request

from taskboard.infrastructure.observability import record_request
from taskboard.shared.config import load_config
from taskboard.shared.logging import clear_correlation_id, logger, set_correlation_id

REQUEST_ID_HEADER = "X-Request-ID"
_REQUEST_ID_RE = re.compile(r"^[A-Za-z0-9._\-]{1,64}$")
_HASHED_HEADERS = frozenset({"authorization", "cookie", "x-api-key", "x-auth-token"})
_SECRET_PARAM_HINTS = ("password", "token", "secret", "key", "auth")


def _incoming_request_id() -> str:
    supplied = request.headers.get(REQUEST_ID_HEADER, "")
    if _REQUEST_ID_RE.match(supplied):
        return supplied
    return secrets.token_urlsafe(8)


def _remote() -> str:
    forwarded = request.headers.get("X-Forwarded-For", "")
    return forwarded.split(",")[0].strip() or request.remote_addr or "unknown"


def _fingerprint(value: str) -> str:
    return "<sha256:" + hashlib.sha256(value.encode()).hexdigest()[:8] + ">"


def _safe_headers(headers: Mapping[str, str]) -> dict[str, str]:
    return {
        name: _fingerprint(value) if name.lower() in _HASHED_HEADERS else value
        for name, value in headers.items()
    }


def _safe_args(args: Mapping[str, str]) -> dict[str, str]:
    return {
        name: "<redacted>" if any(hint in name.lower() for hint in _SECRET_PARAM_HINTS) else value
        for name, value in args.items()
    }


def _route_label() -> str:
    return request.url_rule.rule if request.url_rule is not None else "<unmatched>"


def configure_request_logging(app: Flask) -> None:
    """Tags each request with an id and logs its start, outcome and failures."""
    verbose = load_config().debug_logging

    @app.before_request
    def _open() -> None:
        request_id = _incoming_request_id()
        set_correlation_id(request_id)
        g.correlation_id = request_id
        g.started_at = time.perf_counter()

        if verbose:
            logger.debug(
                f"--> {request.method} {request.full_path.rstrip('?')} ip={_remote()} "
                f"args={_safe_args(request.args)} headers={_safe_headers(request.headers)} "
                f"bytes={request.content_length or 0}"
            )
        else:
            logger.info(f"--> {request.method} {request.path} ip={_remote()}")

    @app.after_request
    def _close(response: Response) -> Response:
        elapsed = time.perf_counter() - g.get("started_at", time.perf_counter())
        user_id = g.get("user_id")
        logger.info(
            f"<-- {request.method} {request.path} {response.status_code} "
            f"in {elapsed * 1000:.1f}ms user={user_id}"
        )
        record_request(_route_label(), response.status_code, elapsed)
        response.headers.setdefault(REQUEST_ID_HEADER, g.get("correlation_id", "-"))
        return response

    @app.teardown_request
    def _cleanup(exc: BaseException | None) -> None:
        if exc is not None:
            message = f"request failed: {request.method} {request.path} ({type(exc).__name__})"
            if verbose:
                logger.opt(exception=exc).error(message)
            else:
                logger.error(message)
        clear_correlation_id()


__all__ = ["REQUEST_ID_HEADER", "configure_request_logging"]
