# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class UserRole(str, Enum):
    USER = "user"
    ADMIN = "admin"


@dataclass(slots=True, frozen=True)
class User:

    id: int
    username: str
    email: str
    password_hash: str
    created_at: datetime
    first_name: str | None = None
    last_name: str | None = None
    profile_picture: str | None = None
    role: UserRole = UserRole.USER
    is_active: bool = True
    last_login: datetime | None = None

    @property
    def is_admin(self) -> bool:
        return self.role is UserRole.ADMIN


@dataclass(slots=True, frozen=True)
class IssuedToken:

    user_id: int
    token: str
    expires_at: datetime


@dataclass(slots=True, frozen=True)
class TokenClaims:

    user_id: int
    expires_at: datetime
