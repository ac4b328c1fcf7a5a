# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Stateless bearer tokens.

A token is a Fernet ciphertext of ``{"sub": <user id>, "exp": <unix ts>}``.
Fernet authenticates the payload, so a token that decrypts is one we issued;
expiry is checked against the embedded ``exp``.
"""

from __future__ import annotations

import base64
import binascii
import hashlib
import json
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from cryptography.fernet import Fernet, InvalidToken

from taskboard.domain.users.entities import IssuedToken, TokenClaims
from taskboard.domain.users.repositories import TokenService
from taskboard.shared.config import AppConfig
from taskboard.shared.errors import UnauthenticatedError
from taskboard.shared.logging import logger


def derive_key(secret: str) -> bytes:
    return base64.urlsafe_b64encode(hashlib.sha256(secret.encode("utf-8")).digest())


def _validate_key(key_str: str) -> bytes:
    try:
        raw = base64.urlsafe_b64decode(key_str)
    except (binascii.Error, ValueError) as exc:
        raise ValueError("TOKEN_KEY must be url-safe base64") from exc
    if len(raw) != 32:
        raise ValueError("TOKEN_KEY must decode to 32 bytes")
    return key_str.encode("utf-8")


class FernetTokenService(TokenService):
    def __init__(
        self,
        key: bytes,
        *,
        ttl_seconds: int,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._fernet = Fernet(key)
        self._ttl = timedelta(seconds=ttl_seconds)
        self._clock = clock or (lambda: datetime.now(UTC))

    def issue(self, user_id: int) -> IssuedToken:
        expires_at = self._clock() + self._ttl
        payload = json.dumps({"sub": user_id, "exp": int(expires_at.timestamp())})
        token = self._fernet.encrypt(payload.encode("utf-8")).decode("ascii")
        logger.debug(f"tokens.issue: user_id={user_id} exp={expires_at.isoformat()}")
        return IssuedToken(user_id=user_id, token=token, expires_at=expires_at)

    def decode(self, token: str) -> TokenClaims:
        try:
            raw = self._fernet.decrypt(token.encode("ascii"))
            payload = json.loads(raw)
            user_id = int(payload["sub"])
            expires_at = datetime.fromtimestamp(int(payload["exp"]), tz=UTC)
        except (InvalidToken, UnicodeEncodeError, ValueError, KeyError, TypeError) as exc:
            raise UnauthenticatedError("Token is not valid") from exc

        if expires_at <= self._clock():
            raise UnauthenticatedError("Token has expired")
        return TokenClaims(user_id=user_id, expires_at=expires_at)


def token_service_from_config(config: AppConfig) -> FernetTokenService:
    if config.security.token_key:
        key = _validate_key(config.security.token_key)
    else:
        if not config.is_production():
            logger.warning("TOKEN_KEY not set, deriving the token key from SECRET_KEY")
        key = derive_key(config.secret_key)
    return FernetTokenService(key, ttl_seconds=config.security.token_ttl_seconds)


__all__ = ["FernetTokenService", "derive_key", "token_service_from_config"]
