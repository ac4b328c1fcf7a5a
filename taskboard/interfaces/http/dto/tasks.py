# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import UTC, datetime
from typing import Annotated, Any

from pydantic import Field, StringConstraints, field_validator
from pydantic_core import PydanticCustomError

from taskboard.domain.tasks.entities import (
    DESCRIPTION_MAX_LENGTH,
    MAX_TAGS,
    TAG_MAX_LENGTH,
    TITLE_MAX_LENGTH,
    PageRequest,
    Task,
    TaskDraft,
    TaskFilters,
    TaskPage,
    TaskPriority,
    TaskSort,
    TaskStatus,
    normalize_tags,
)

from .common import CamelModel

Tag = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=TAG_MAX_LENGTH)]


def _check_title(value: str) -> str:
    value = value.strip()
    if not value:
        raise PydanticCustomError("missing", "Title is required")
    return value


def _strip_text(value: Any) -> Any:
    return value.strip() if isinstance(value, str) else value


def _to_utc(value: datetime | None) -> datetime | None:
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


class TaskCreateDTO(CamelModel):
    title: str = Field(max_length=TITLE_MAX_LENGTH)
    description: str | None = Field(None, max_length=DESCRIPTION_MAX_LENGTH)
    status: TaskStatus = TaskStatus.PENDING
    priority: TaskPriority = TaskPriority.MEDIUM
    due_date: datetime | None = None
    tags: list[Tag] = Field(default_factory=list, max_length=MAX_TAGS)

    @field_validator("title", mode="before")
    @classmethod
    def strip_title(cls, value: Any) -> Any:
        return _strip_text(value)

    @field_validator("title")
    @classmethod
    def check_title(cls, value: str) -> str:
        return _check_title(value)

    @field_validator("due_date", mode="before")
    @classmethod
    def blank_due_date(cls, value: Any) -> Any:
        return _blank_to_none(value)

    @field_validator("due_date")
    @classmethod
    def due_date_utc(cls, value: datetime | None) -> datetime | None:
        return _to_utc(value)

    def to_draft(self) -> TaskDraft:
        return TaskDraft(
            title=self.title,
            description=self.description or None,
            status=self.status,
            priority=self.priority,
            due_date=self.due_date,
            tags=normalize_tags(self.tags),
        )


class TaskUpdateDTO(CamelModel):
    """Partial update: only keys present in the payload are applied."""

    title: str | None = Field(None, max_length=TITLE_MAX_LENGTH)
    description: str | None = Field(None, max_length=DESCRIPTION_MAX_LENGTH)
    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    due_date: datetime | None = None
    tags: list[Tag] | None = Field(None, max_length=MAX_TAGS)

    @field_validator("title", mode="before")
    @classmethod
    def strip_title(cls, value: Any) -> Any:
        return _strip_text(value)

    @field_validator("due_date", mode="before")
    @classmethod
    def blank_due_date(cls, value: Any) -> Any:
        return _blank_to_none(value)

    @field_validator("due_date")
    @classmethod
    def due_date_utc(cls, value: datetime | None) -> datetime | None:
        return _to_utc(value)

    @field_validator("title")
    @classmethod
    def check_title(cls, value: str | None) -> str:
        if value is None:
            raise PydanticCustomError("missing", "Title is required")
        return _check_title(value)

    @field_validator("status", "priority", mode="before")
    @classmethod
    def reject_null(cls, value: Any) -> Any:
        if value is None:
            raise PydanticCustomError("missing", "Value cannot be null")
        return value

    def changes(self) -> dict[str, Any]:
        fields = self.model_dump(exclude_unset=True)
        if "tags" in fields:
            fields["tags"] = normalize_tags(fields["tags"])
        if "description" in fields:
            fields["description"] = fields["description"] or None
        return fields


class TaskStatusDTO(CamelModel):
    status: TaskStatus


class TaskQueryDTO(CamelModel):
    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    search: str | None = Field(None, max_length=200)
    sort: TaskSort = TaskSort.NEWEST
    page: int = Field(1, ge=1)
    limit: int = Field(10, ge=1)

    @field_validator("status", "priority", "search", mode="before")
    @classmethod
    def empty_means_unset(cls, value: Any) -> Any:
        return _blank_to_none(value)

    @field_validator("sort", mode="before")
    @classmethod
    def default_sort(cls, value: Any) -> Any:
        return _blank_to_none(value) or TaskSort.NEWEST

    def filters(self) -> TaskFilters:
        return TaskFilters(status=self.status, priority=self.priority, search=self.search)

    def page_request(self) -> PageRequest:
        return PageRequest(page=self.page, limit=self.limit)


class TaskDTO(CamelModel):
    id: int
    owner_id: int
    title: str
    description: str | None
    status: TaskStatus
    priority: TaskPriority
    due_date: datetime | None
    tags: list[str]
    is_deleted: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_task(cls, task: Task) -> dict[str, Any]:
        return cls.model_validate(task).to_json()


class PaginationDTO(CamelModel):
    page: int
    limit: int
    total: int
    pages: int

    @classmethod
    def from_page(cls, page: TaskPage) -> dict[str, Any]:
        return cls(page=page.page, limit=page.limit, total=page.total, pages=page.pages).to_json()
