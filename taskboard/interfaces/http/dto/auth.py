# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import re
from datetime import datetime

from pydantic import EmailStr, Field, field_validator
from pydantic_core import PydanticCustomError

from taskboard.domain.users.entities import UserRole

from .common import CamelModel

USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 30
PASSWORD_MIN_LENGTH = 6
NAME_MAX_LENGTH = 50


def validate_password_strength(value: str) -> str:
    if len(value) < PASSWORD_MIN_LENGTH:
        raise PydanticCustomError(
            "password_too_short",
            "Password must be at least {min_length} characters",
            {"min_length": PASSWORD_MIN_LENGTH},
        )
    if not (re.search(r"[a-z]", value) and re.search(r"[A-Z]", value) and re.search(r"\d", value)):
        raise PydanticCustomError(
            "password_too_weak",
            "Password must contain at least one uppercase, one lowercase, and one number",
        )
    return value


def strip_optional_name(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


class RegisterRequestDTO(CamelModel):
    username: str = Field(min_length=USERNAME_MIN_LENGTH, max_length=USERNAME_MAX_LENGTH)
    email: EmailStr
    password: str = Field(max_length=128)
    first_name: str | None = Field(None, max_length=NAME_MAX_LENGTH)
    last_name: str | None = Field(None, max_length=NAME_MAX_LENGTH)

    @field_validator("username", mode="before")
    @classmethod
    def strip_username(cls, value: object) -> object:
        if isinstance(value, str):
            value = value.strip()
            if not value:
                raise PydanticCustomError("missing", "Username is required")
        return value

    @field_validator("email", mode="after")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return value.lower()

    @field_validator("password")
    @classmethod
    def check_password(cls, value: str) -> str:
        return validate_password_strength(value)

    @field_validator("first_name", "last_name")
    @classmethod
    def strip_names(cls, value: str | None) -> str | None:
        return strip_optional_name(value)


class LoginRequestDTO(CamelModel):
    email: EmailStr
    password: str = Field(min_length=1, max_length=128)  # No strength check on login

    @field_validator("email", mode="after")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return value.lower()


class UserDTO(CamelModel):
    id: int
    username: str
    email: str
    first_name: str | None = None
    last_name: str | None = None
    profile_picture: str | None = None
    role: UserRole
    is_active: bool
    created_at: datetime
    last_login: datetime | None = None


class AuthPayloadDTO(CamelModel):
    user: UserDTO
    token: str
