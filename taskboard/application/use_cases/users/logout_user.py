# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Use-case for ending a client session."""

from __future__ import annotations

from taskboard.domain.users.entities import User
from taskboard.shared.logging import logger


class LogoutUserUseCase:
    # Tokens are stateless; the client drops its copy and nothing is stored here.
    def execute(self, user: User) -> None:
        logger.info(f"auth.logout: user_id={user.id}")
