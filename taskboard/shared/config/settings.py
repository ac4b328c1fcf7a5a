# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

import sys
from functools import lru_cache
from typing import Annotated

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

_PLACEHOLDER_SECRETS = frozenset({"", "dev", "development", "test", "changeme"})

_GROUP_SETTINGS = SettingsConfigDict(
    env_file=".env",
    env_file_encoding="utf-8",
    extra="ignore",
    validate_by_name=True,
)


class DatabaseConfig(BaseSettings):
    url: str = Field("sqlite:///taskboard.db", alias="DATABASE_URL")
    pool_size: int = Field(10, ge=1, alias="DATABASE_POOL_SIZE")
    max_overflow: int = Field(5, ge=0, alias="DATABASE_MAX_OVERFLOW")
    pool_timeout: float = Field(30.0, ge=0.1, alias="DATABASE_POOL_TIMEOUT")

    model_config = _GROUP_SETTINGS


class ObservabilityConfig(BaseSettings):
    metrics_enabled: bool = Field(True, alias="METRICS_ENABLED")
    service_name: str = Field("Task Management API", alias="SERVICE_NAME")

    model_config = _GROUP_SETTINGS


class TasksConfig(BaseSettings):
    default_page_size: int = Field(10, ge=1, alias="DEFAULT_PAGE_SIZE")
    max_page_size: int = Field(100, ge=1, alias="MAX_PAGE_SIZE")
    # Soft-deleted tasks are excluded from every read path unless disabled.
    hide_deleted: bool = Field(True, alias="HIDE_DELETED_TASKS")

    model_config = _GROUP_SETTINGS

    @field_validator("hide_deleted", mode="before")
    @classmethod
    def _parse_bool(cls, value: str | bool) -> bool:
        if isinstance(value, str):
            return value.lower() in ("1", "true", "yes")
        return bool(value)

    @model_validator(mode="after")
    def _check_page_sizes(self) -> "TasksConfig":
        if self.default_page_size > self.max_page_size:
            raise ValueError("DEFAULT_PAGE_SIZE must not exceed MAX_PAGE_SIZE")
        return self


class SecurityConfig(BaseSettings):
    # CORS
    allowed_origins: Annotated[list[str], NoDecode] = Field(
        ["http://localhost:3000"], alias="ALLOWED_ORIGINS"
    )

    # Bearer tokens
    token_key: str | None = Field(None, alias="TOKEN_KEY")
    token_ttl_seconds: int = Field(7 * 24 * 60 * 60, ge=60, alias="TOKEN_TTL_SECONDS")

    # HSTS
    enable_hsts: bool = Field(False, alias="ENABLE_HSTS")

    model_config = _GROUP_SETTINGS

    @field_validator("allowed_origins", mode="before")
    @classmethod
    def _parse_origins(cls, value: str | list[str]) -> list[str]:
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value

    @field_validator("enable_hsts", mode="before")
    @classmethod
    def _parse_bool(cls, value: str | bool) -> bool:
        if isinstance(value, str):
            return value.lower() in ("1", "true", "yes")
        return bool(value)


def _database_config_factory() -> DatabaseConfig:
    return DatabaseConfig()  # type: ignore[call-arg]


def _observability_config_factory() -> ObservabilityConfig:
    return ObservabilityConfig()  # type: ignore[call-arg]


def _tasks_config_factory() -> TasksConfig:
    return TasksConfig()  # type: ignore[call-arg]


def _security_config_factory() -> SecurityConfig:
    return SecurityConfig()  # type: ignore[call-arg]


class AppConfig(BaseSettings):
    app_env: str = Field("development", alias="APP_ENV")
    secret_key: str = Field("dev", alias="SECRET_KEY")
    admin_email: str | None = Field(None, alias="ADMIN_EMAIL")
    debug_logging: bool = Field(False, alias="DEBUG_LOGGING")

    database: DatabaseConfig = Field(default_factory=_database_config_factory)
    observability: ObservabilityConfig = Field(default_factory=_observability_config_factory)
    tasks: TasksConfig = Field(default_factory=_tasks_config_factory)
    security: SecurityConfig = Field(default_factory=_security_config_factory)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        validate_assignment=True,
        extra="ignore",
    )

    @field_validator("debug_logging", mode="before")
    @classmethod
    def _parse_debug_logging(cls, value: str | bool) -> bool:
        if isinstance(value, str):
            return value.lower() in ("1", "true", "yes")
        return bool(value)

    @model_validator(mode="after")
    def _guard_production(self) -> "AppConfig":
        if not self.is_production():
            return self

        if self.secret_key in _PLACEHOLDER_SECRETS:
            raise ValueError(
                "SECRET_KEY is a development placeholder; set a random value "
                "(e.g. secrets.token_urlsafe(32)) before running with APP_ENV=production"
            )

        notes = [
            note
            for failing, note in (
                ("*" in self.security.allowed_origins, "ALLOWED_ORIGINS contains '*'"),
                (not self.security.enable_hsts, "ENABLE_HSTS is off"),
                (not self.security.token_key, "TOKEN_KEY unset, tokens derive their key from SECRET_KEY"),
            )
            if failing
        ]
        for note in notes:
            print(f"[taskboard config] production warning: {note}", file=sys.stderr)
        return self

    def is_production(self) -> bool:
        return self.app_env.lower() in ("production", "prod")


@lru_cache(maxsize=1)
def load_config() -> AppConfig:
    return AppConfig()


__all__ = ["AppConfig", "load_config"]
