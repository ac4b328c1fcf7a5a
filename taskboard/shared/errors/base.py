# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, cast


@dataclass(slots=True)
class AppError(Exception):
    code: str
    status: HTTPStatus
    message: str | None = None
    context: Mapping[str, Any] | None = None

    def __post_init__(self) -> None:
        Exception.__init__(self, self.message or self.code)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "success": False,
            "error": self.code,
            "message": self.message or self.code.replace("_", " ").capitalize(),
        }
        if self.context:
            context = dict(self.context)
            errors = context.pop("errors", None)
            if errors is not None:
                payload["errors"] = errors
            if context:
                payload["context"] = context
        return payload


class DomainError(AppError):
    def __init__(
        self,
        *,
        code: str | None = None,
        status: HTTPStatus | None = None,
        message: str | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        resolved_code = code or cast(str, getattr(self, "code", "domain_error"))
        resolved_status = status or cast(
            HTTPStatus, getattr(self, "status", HTTPStatus.BAD_REQUEST)
        )
        resolved_message = message or cast(str | None, getattr(self, "message", None))
        super().__init__(
            code=resolved_code,
            status=resolved_status,
            message=resolved_message,
            context=context,
        )


class InfrastructureError(AppError):
    def __init__(
        self,
        code: str = "infrastructure_error",
        *,
        status: HTTPStatus | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        resolved_status = status or HTTPStatus.INTERNAL_SERVER_ERROR
        super().__init__(
            code=code,
            status=resolved_status,
            message="Server error",
            context=context,
        )


class ValidationError(AppError):
    """User-correctable input problem; ``errors`` names every offending field."""

    def __init__(
        self,
        errors: Sequence[Mapping[str, Any]] = (),
        *,
        code: str = "validation_error",
        message: str = "Validation failed",
    ) -> None:
        super().__init__(
            code=code,
            status=HTTPStatus.BAD_REQUEST,
            message=message,
            context={"errors": [dict(item) for item in errors]},
        )

    @property
    def fields(self) -> list[str]:
        return [str(item.get("field")) for item in (self.context or {}).get("errors", [])]

    @classmethod
    def for_field(cls, field: str, message: str) -> ValidationError:
        return cls([{"field": field, "message": message}])


class UnauthenticatedError(AppError):
    def __init__(self, message: str = "Not authorized, please log in") -> None:
        super().__init__(
            code="unauthenticated",
            status=HTTPStatus.UNAUTHORIZED,
            message=message,
        )


class AccessDeniedError(AppError):
    def __init__(self, message: str = "Access denied") -> None:
        super().__init__(
            code="access_denied",
            status=HTTPStatus.FORBIDDEN,
            message=message,
        )


class NotFoundError(DomainError):
    code = "not_found"
    status = HTTPStatus.NOT_FOUND
    message = "Resource not found"


class ConflictError(DomainError):
    code = "conflict"
    status = HTTPStatus.CONFLICT
    message = "Resource already exists"
