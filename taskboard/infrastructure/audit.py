# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Security-relevant events: written to the log and to the ``audit_logs`` table."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any

from sqlalchemy.exc import SQLAlchemyError

from taskboard.infrastructure.db.models import AuditLog
from taskboard.infrastructure.db.session import session_scope
from taskboard.shared.logging import logger

_DETAILS_LIMIT = 2048
_SECRET_KEY_HINTS = ("password", "token", "secret", "key")


class AuditAction(str, Enum):
    REGISTER = "register"
    LOGIN_SUCCESS = "login_success"
    LOGIN_FAILED = "login_failed"
    LOGOUT = "logout"
    PROFILE_UPDATED = "profile_updated"
    PASSWORD_CHANGED = "password_changed"
    TASK_CREATED = "task_created"
    TASK_UPDATED = "task_updated"
    TASK_STATUS_CHANGED = "task_status_changed"
    TASK_DELETED = "task_deleted"
    USER_ACTIVATED = "user_activated"
    USER_DEACTIVATED = "user_deactivated"


def _redact(details: dict[str, Any]) -> dict[str, Any]:
    return {
        key: "***REDACTED***" if any(hint in key.lower() for hint in _SECRET_KEY_HINTS) else value
        for key, value in details.items()
    }


@dataclass(slots=True)
class AuditEvent:
    action: AuditAction
    user_id: int | None
    ip_address: str | None
    success: bool
    details: dict[str, Any] = field(default_factory=dict)
    at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def describe(self) -> str:
        text = f"AUDIT {self.action.value} user={self.user_id} ip={self.ip_address} ok={self.success}"
        return f"{text} details={self.details}" if self.details else text

    def to_row(self) -> AuditLog:
        encoded = json.dumps(self.details, default=str)[:_DETAILS_LIMIT] if self.details else None
        return AuditLog(
            timestamp=self.at,
            action=self.action.value,
            user_id=self.user_id,
            ip_address=self.ip_address,
            success=self.success,
            details_json=encoded,
        )


def audit_log(
    action: AuditAction,
    user_id: int | None = None,
    ip_address: str | None = None,
    details: dict[str, Any] | None = None,
    success: bool = True,
) -> AuditEvent:
    event = AuditEvent(action, user_id, ip_address, success, _redact(details or {}))
    (logger.info if success else logger.warning)(event.describe())

    try:
        with session_scope() as session:
            session.add(event.to_row())
    except SQLAlchemyError as exc:
        # a lost audit row must not fail the request
        logger.warning(f"audit row for {action.value} not stored: {type(exc).__name__}")
    return event


__all__ = ["AuditAction", "AuditEvent", "audit_log"]
