# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from functools import wraps
from typing import Any

from flask import Flask, current_app, g, request

from taskboard.application.services.session_validator import SessionValidator
from taskboard.domain.users.entities import User
from taskboard.shared.logging import logger

_EXTENSION_KEY = "taskboard.session_validator"


def configure_auth(app: Flask, validator: SessionValidator) -> None:
    app.extensions[_EXTENSION_KEY] = validator


def _validator() -> SessionValidator:
    return current_app.extensions[_EXTENSION_KEY]


def bearer_token() -> str | None:
    """Return the credential from ``Authorization: Bearer <token>``, if any."""

    scheme, _, token = request.headers.get("Authorization", "").partition(" ")
    if scheme.lower() != "bearer":
        return None
    return token.strip() or None


def current_user() -> User:
    return g.current_user


def _attach(user: User) -> None:
    g.current_user = user
    g.user_id = user.id
    logger.debug(f"Auth OK: user={user.id} {request.method} {request.path}")


def auth_required(f: Callable[..., Any]) -> Callable[..., Any]:
    @wraps(f)
    def inner(*a: Any, **kw: Any) -> Any:
        token = bearer_token()
        if token is None:
            logger.warning(
                f"No bearer token on {request.method} {request.path} "
                f"from {request.headers.get('X-Forwarded-For', request.remote_addr)}"
            )
        _attach(_validator().validate(token))
        return f(*a, **kw)

    return inner


def admin_required(f: Callable[..., Any]) -> Callable[..., Any]:
    @wraps(f)
    def inner(*a: Any, **kw: Any) -> Any:
        _attach(_validator().validate_admin(bearer_token()))
        return f(*a, **kw)

    return inner


__all__ = [
    "admin_required",
    "auth_required",
    "bearer_token",
    "configure_auth",
    "current_user",
]
