# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""JSON error bodies shared by every handler: ``{success: false, error, message}``."""

from __future__ import annotations

from http import HTTPStatus
from typing import Any

from flask import Response, jsonify
from werkzeug.exceptions import HTTPException

from .base import AppError

_HTTP_MESSAGES = {
    HTTPStatus.NOT_FOUND: "API endpoint not found",
    HTTPStatus.METHOD_NOT_ALLOWED: "Method not allowed for this endpoint",
}


def error_body(code: str, message: str, **extra: Any) -> dict[str, Any]:
    return {"success": False, "error": code, "message": message, **extra}


def handle_app_error(error: AppError) -> tuple[Response, HTTPStatus]:
    return jsonify(error.to_dict()), error.status


def handle_http_exception(exc: HTTPException) -> tuple[Response, int]:
    status = exc.code or HTTPStatus.INTERNAL_SERVER_ERROR
    code = (exc.name or "http error").lower().replace(" ", "_")
    message = _HTTP_MESSAGES.get(status, exc.description or "")
    return jsonify(error_body(code, message)), status


def internal_error_response() -> tuple[Response, HTTPStatus]:
    body = error_body("internal_error", "Internal Server Error")
    return jsonify(body), HTTPStatus.INTERNAL_SERVER_ERROR


__all__ = [
    "error_body",
    "handle_app_error",
    "handle_http_exception",
    "internal_error_response",
]
