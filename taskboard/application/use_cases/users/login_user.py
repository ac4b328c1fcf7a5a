# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import UTC, datetime

from taskboard.domain.users.entities import User
from taskboard.domain.users.exceptions import AccountInactiveError, InvalidCredentialsError
from taskboard.domain.users.repositories import PasswordHasher, TokenService, UserRepository


class LoginUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        tokens: TokenService,
        password_hasher: PasswordHasher,
    ) -> None:
        self._users = users
        self._tokens = tokens
        self._password_hasher = password_hasher

    def execute(self, email: str, password: str) -> tuple[User, str]:
        user = self._users.find_by_email(email)
        if user is None or not self._password_hasher.verify(password, user.password_hash):
            raise InvalidCredentialsError()
        if not user.is_active:
            raise AccountInactiveError()

        stamped = self._users.update(user.id, last_login=datetime.now(UTC)) or user
        token = self._tokens.issue(stamped.id)
        return stamped, token.token
