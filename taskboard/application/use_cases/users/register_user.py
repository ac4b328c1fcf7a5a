# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import UTC, datetime

from taskboard.domain.users.entities import User, UserRole
from taskboard.domain.users.exceptions import UserAlreadyExistsError
from taskboard.domain.users.repositories import PasswordHasher, TokenService, UserRepository
from taskboard.shared.logging import logger


class RegisterUserUseCase:
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

    def execute(
        self,
        username: str,
        email: str,
        password: str,
        first_name: str | None = None,
        last_name: str | None = None,
    ) -> tuple[User, str]:
        if self._users.exists_with(username=username, email=email):
            logger.info(f"auth.register: conflict username={username}")
            raise UserAlreadyExistsError()
        now = datetime.now(UTC)
        user = User(
            id=0,
            username=username,
            email=email.lower(),
            password_hash=self._password_hasher.hash(password),
            created_at=now,
            first_name=first_name,
            last_name=last_name,
            role=UserRole.USER,
            is_active=True,
        )
        persisted = self._users.add(user)
        token = self._tokens.issue(persisted.id)
        return persisted, token.token
