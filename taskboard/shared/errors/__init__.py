# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .base import (
    AccessDeniedError,
    AppError,
    ConflictError,
    DomainError,
    InfrastructureError,
    NotFoundError,
    UnauthenticatedError,
    ValidationError,
)
from .http import (
    error_body,
    handle_app_error,
    handle_http_exception,
    internal_error_response,
)
from .validation import parse_payload, raise_validation_error

__all__ = [
    "AccessDeniedError",
    "AppError",
    "ConflictError",
    "DomainError",
    "InfrastructureError",
    "NotFoundError",
    "UnauthenticatedError",
    "ValidationError",
    "error_body",
    "handle_app_error",
    "handle_http_exception",
    "internal_error_response",
    "parse_payload",
    "raise_validation_error",
]
