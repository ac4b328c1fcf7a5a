# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Any

from pydantic import EmailStr, Field, field_validator

from .auth import (
    NAME_MAX_LENGTH,
    USERNAME_MAX_LENGTH,
    USERNAME_MIN_LENGTH,
    strip_optional_name,
    validate_password_strength,
)
from .common import CamelModel


class UpdateProfileDTO(CamelModel):
    # any "password" key is dropped by extra="ignore"
    username: str | None = Field(
        None, min_length=USERNAME_MIN_LENGTH, max_length=USERNAME_MAX_LENGTH
    )
    email: EmailStr | None = None
    first_name: str | None = Field(None, max_length=NAME_MAX_LENGTH)
    last_name: str | None = Field(None, max_length=NAME_MAX_LENGTH)
    profile_picture: str | None = Field(None, max_length=500)

    @field_validator("username", mode="before")
    @classmethod
    def strip_username(cls, value: object) -> object:
        return value.strip() if isinstance(value, str) else value

    @field_validator("email", mode="after")
    @classmethod
    def normalize_email(cls, value: str | None) -> str | None:
        return value.lower() if value else value

    @field_validator("first_name", "last_name")
    @classmethod
    def strip_names(cls, value: str | None) -> str | None:
        return strip_optional_name(value)

    def changes(self) -> dict[str, Any]:
        fields = self.model_dump(exclude_unset=True)
        # username and email cannot be cleared
        for key in ("username", "email"):
            if key in fields and fields[key] is None:
                fields.pop(key)
        return fields


class ChangePasswordDTO(CamelModel):
    current_password: str = Field(min_length=1, max_length=128)
    new_password: str = Field(max_length=128)

    @field_validator("new_password")
    @classmethod
    def check_new_password(cls, value: str) -> str:
        return validate_password_strength(value)


class SetUserActiveDTO(CamelModel):
    is_active: bool
