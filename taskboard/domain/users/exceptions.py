# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from taskboard.shared.errors.base import ConflictError, DomainError, NotFoundError


class UserAlreadyExistsError(ConflictError):
    code = "user_already_exists"
    message = "Username or email already exists"


class UserNotFoundError(NotFoundError):
    code = "user_not_found"
    message = "User not found"


class InvalidCredentialsError(DomainError):
    code = "invalid_credentials"
    status = HTTPStatus.UNAUTHORIZED
    message = "Invalid credentials"


class AccountInactiveError(DomainError):
    code = "account_inactive"
    status = HTTPStatus.UNAUTHORIZED
    message = "Account is deactivated"


class IncorrectPasswordError(DomainError):
    code = "incorrect_password"
    status = HTTPStatus.BAD_REQUEST
    message = "Current password is incorrect"
