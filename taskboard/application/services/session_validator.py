# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from taskboard.domain.users.entities import User
from taskboard.domain.users.repositories import TokenService, UserRepository
from taskboard.shared.errors import AccessDeniedError, UnauthenticatedError
from taskboard.shared.logging import logger


class SessionValidator:
    """Resolves a bearer token to exactly one active user, or fails."""

    def __init__(self, *, users: UserRepository, tokens: TokenService) -> None:
        self._users = users
        self._tokens = tokens

    def validate(self, token: str | None) -> User:
        if not token:
            raise UnauthenticatedError("No token, authorization denied")

        claims = self._tokens.decode(token)
        user = self._users.find_by_id(claims.user_id)
        if user is None:
            logger.warning(f"auth.validate: token for unknown user_id={claims.user_id}")
            raise UnauthenticatedError("Token is not valid")
        if not user.is_active:
            logger.warning(f"auth.validate: inactive user_id={user.id}")
            raise UnauthenticatedError("Account is deactivated")
        return user

    def validate_admin(self, token: str | None) -> User:
        user = self.validate(token)
        if not user.is_admin:
            logger.warning(f"auth.validate: admin access denied for user_id={user.id}")
            raise AccessDeniedError("Admin access required")
        return user
