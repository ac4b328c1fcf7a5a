# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from taskboard.domain.users.entities import User
from taskboard.domain.users.exceptions import (
    IncorrectPasswordError,
    UserAlreadyExistsError,
    UserNotFoundError,
)
from taskboard.domain.users.repositories import PasswordHasher, UserRepository

PROFILE_FIELDS = ("username", "email", "first_name", "last_name", "profile_picture")


class GetProfileUseCase:
    def __init__(self, *, users: UserRepository) -> None:
        self._users = users

    def execute(self, user_id: int) -> User:
        user = self._users.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError()
        return user


class UpdateProfileUseCase:
    def __init__(self, *, users: UserRepository) -> None:
        self._users = users

    def execute(self, user_id: int, changes: Mapping[str, Any]) -> User:
        fields = {key: value for key, value in changes.items() if key in PROFILE_FIELDS}

        username = fields.get("username")
        email = fields.get("email")
        if (username or email) and self._users.exists_with(
            username=username, email=email, exclude_id=user_id
        ):
            raise UserAlreadyExistsError()

        updated = self._users.update(user_id, **fields)
        if updated is None:
            raise UserNotFoundError()
        return updated


class ChangePasswordUseCase:
    def __init__(self, *, users: UserRepository, password_hasher: PasswordHasher) -> None:
        self._users = users
        self._password_hasher = password_hasher

    def execute(self, user_id: int, current_password: str, new_password: str) -> None:
        user = self._users.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError()
        if not self._password_hasher.verify(current_password, user.password_hash):
            raise IncorrectPasswordError()
        self._users.update(user_id, password_hash=self._password_hasher.hash(new_password))
