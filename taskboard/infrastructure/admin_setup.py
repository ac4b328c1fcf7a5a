# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from taskboard.domain.users.entities import UserRole
from taskboard.domain.users.repositories import UserRepository
from taskboard.shared.config import load_config
from taskboard.shared.logging import logger


def setup_admin_user(users: UserRepository) -> bool:
    """Promote the account named by ``ADMIN_EMAIL``; returns whether it is an admin now."""

    config = load_config()
    if not config.admin_email:
        logger.info("admin_setup: No ADMIN_EMAIL configured, skipping admin setup")
        return False

    user = users.find_by_email(config.admin_email)
    if user is None:
        logger.warning(
            "admin_setup: ADMIN_EMAIL does not match a registered user yet; "
            "register it and restart to grant admin rights"
        )
        return False

    if user.is_admin:
        logger.info(f"admin_setup: user_id={user.id} already has admin privileges")
        return True

    users.update(user.id, role=UserRole.ADMIN)
    logger.info(f"admin_setup: granted admin privileges to user_id={user.id}")
    return True


__all__ = ["setup_admin_user"]
