# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import re
from typing import Any

_MASK = "***REDACTED***"

# (pattern, replacement) pairs applied in order to every log message.
_REDACTIONS: list[tuple[re.Pattern[str], str]] = [
    # Authorization: Bearer <token>, in headers and free text
    (re.compile(r"(bearer\s+)[A-Za-z0-9_\-.=]{16,}", re.IGNORECASE), rf"\g<1>{_MASK}"),
    (re.compile(r"(authorization['\"]?\s*[:=]\s*['\"]?)(?!bearer\s)[^'\",\s]{10,}", re.IGNORECASE), rf"\g<1>{_MASK}"),
    # token=..., "token": "...", TOKEN_KEY=...
    (re.compile(r"(token(?:_key)?['\"]?\s*[:=]\s*['\"]?)[A-Za-z0-9_\-.=]{16,}", re.IGNORECASE), rf"\g<1>{_MASK}"),
    (re.compile(r"(secret_key['\"]?\s*[:=]\s*['\"]?)[^'\",\s}]+", re.IGNORECASE), rf"\g<1>{_MASK}"),
    # password, currentPassword, new_password, password_hash ...
    (
        re.compile(
            r"((?:current|new)?_?password(?:_hash)?['\"]?\s*[:=]\s*['\"]?)[^'\",\s}]+",
            re.IGNORECASE,
        ),
        rf"\g<1>{_MASK}",
    ),
    # credentials inside DATABASE_URL
    (re.compile(r"(\w+(?:\+\w+)?://[^:/@\s]+:)[^@\s]+@"), rf"\g<1>{_MASK}@"),
    # emails keep their domain only
    (re.compile(r"[A-Za-z0-9._%+-]+@([A-Za-z0-9.-]+\.[A-Za-z]{2,})"), r"***@\1"),
]


def sanitize_message(message: str) -> str:
    for pattern, replacement in _REDACTIONS:
        message = pattern.sub(replacement, message)
    return message


def sanitize_record(record: dict[str, Any]) -> bool:
    """loguru ``filter`` hook: rewrites the message in place, never drops it."""
    record["message"] = sanitize_message(record["message"])
    return True
