# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from taskboard.domain.users.entities import User
from taskboard.domain.users.exceptions import UserNotFoundError
from taskboard.domain.users.repositories import UserRepository
from taskboard.shared.errors import ValidationError
from taskboard.shared.logging import logger


class SetUserActiveUseCase:
    def __init__(self, *, users: UserRepository) -> None:
        self._users = users

    def execute(self, actor_id: int, user_id: int, active: bool) -> User:
        if actor_id == user_id and not active:
            raise ValidationError.for_field("isActive", "Admins cannot deactivate themselves")
        updated = self._users.update(user_id, is_active=active)
        if updated is None:
            raise UserNotFoundError()
        logger.info(f"admin.users: user_id={user_id} active={active} by={actor_id}")
        return updated


__all__ = ["SetUserActiveUseCase"]
