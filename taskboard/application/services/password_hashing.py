# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Password hashing strategies."""

from __future__ import annotations

from werkzeug.security import check_password_hash, generate_password_hash

from taskboard.domain.users.repositories import PasswordHasher


class WerkzeugPasswordHasher(PasswordHasher):
    """Salted hashes via werkzeug; the method string is stored in the hash itself."""

    def __init__(self, method: str = "scrypt", salt_length: int = 16) -> None:
        self._method = method
        self._salt_length = salt_length

    def hash(self, password: str) -> str:
        return str(
            generate_password_hash(password, method=self._method, salt_length=self._salt_length)
        )

    def verify(self, password: str, hashed: str) -> bool:
        if not hashed:
            return False
        return bool(check_password_hash(hashed, password))
