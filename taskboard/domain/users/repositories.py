# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol

from .entities import IssuedToken, TokenClaims, User


class UserRepository(Protocol):
    def find_by_id(self, user_id: int) -> User | None: ...
    def find_by_email(self, email: str) -> User | None: ...
    def exists_with(
        self,
        *,
        username: str | None = None,
        email: str | None = None,
        exclude_id: int | None = None,
    ) -> bool: ...
    def add(self, user: User) -> User: ...
    def update(self, user_id: int, **fields: Any) -> User | None: ...
    def list_all(self) -> Sequence[User]: ...


class TokenService(Protocol):
    def issue(self, user_id: int) -> IssuedToken: ...
    def decode(self, token: str) -> TokenClaims: ...


class PasswordHasher(Protocol):
    def hash(self, password: str) -> str: ...
    def verify(self, password: str, hashed: str) -> bool: ...
