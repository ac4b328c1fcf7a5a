# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Task records and the value objects used to query them."""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

TITLE_MAX_LENGTH = 200
DESCRIPTION_MAX_LENGTH = 1000
TAG_MAX_LENGTH = 30
MAX_TAGS = 20


class TaskStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    ARCHIVED = "archived"


class TaskPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"

    @property
    def rank(self) -> int:
        return _PRIORITY_RANK[self]


_PRIORITY_RANK = {
    TaskPriority.LOW: 0,
    TaskPriority.MEDIUM: 1,
    TaskPriority.HIGH: 2,
    TaskPriority.URGENT: 3,
}


class SortField(str, Enum):
    CREATED_AT = "created_at"
    UPDATED_AT = "updated_at"
    DUE_DATE = "due_date"
    PRIORITY = "priority"
    TITLE = "title"


class TaskSort(str, Enum):
    """Accepted ``sort`` values; a leading ``-`` means descending."""

    NEWEST = "-createdAt"
    OLDEST = "createdAt"
    RECENTLY_UPDATED = "-updatedAt"
    LEAST_RECENTLY_UPDATED = "updatedAt"
    DUE_SOONEST = "dueDate"
    DUE_LATEST = "-dueDate"
    PRIORITY_ASC = "priority"
    PRIORITY_DESC = "-priority"
    TITLE_ASC = "title"
    TITLE_DESC = "-title"

    @property
    def descending(self) -> bool:
        return self.value.startswith("-")

    @property
    def sort_field(self) -> SortField:
        return _SORT_FIELDS[self.value.lstrip("-")]


_SORT_FIELDS = {
    "createdAt": SortField.CREATED_AT,
    "updatedAt": SortField.UPDATED_AT,
    "dueDate": SortField.DUE_DATE,
    "priority": SortField.PRIORITY,
    "title": SortField.TITLE,
}


def normalize_tags(tags: Sequence[str] | None) -> tuple[str, ...]:
    """Trim, drop blanks and duplicates while keeping first-seen order."""

    seen: dict[str, None] = {}
    for tag in tags or ():
        cleaned = tag.strip()
        if cleaned:
            seen.setdefault(cleaned, None)
    return tuple(seen)


@dataclass(slots=True, frozen=True)
class Task:

    id: int
    owner_id: int
    title: str
    description: str | None
    status: TaskStatus
    priority: TaskPriority
    due_date: datetime | None
    tags: tuple[str, ...]
    is_deleted: bool
    created_at: datetime
    updated_at: datetime


@dataclass(slots=True, frozen=True)
class TaskDraft:
    """Validated input for a new task; the owner is supplied separately."""

    title: str
    description: str | None = None
    status: TaskStatus = TaskStatus.PENDING
    priority: TaskPriority = TaskPriority.MEDIUM
    due_date: datetime | None = None
    tags: tuple[str, ...] = ()


@dataclass(slots=True, frozen=True)
class TaskFilters:
    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    search: str | None = None


@dataclass(slots=True, frozen=True)
class PageRequest:
    page: int = 1
    limit: int = 10

    def __post_init__(self) -> None:
        if self.page < 1:
            raise ValueError("page must be >= 1")
        if self.limit < 1:
            raise ValueError("limit must be >= 1")

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass(slots=True, frozen=True)
class TaskPage:
    items: Sequence[Task]
    total: int
    page: int
    limit: int

    @property
    def pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.total else 0


@dataclass(slots=True)
class TaskStats:
    """Per-status task counts over the whole status enumeration."""

    counts: dict[TaskStatus, int] = field(
        default_factory=lambda: {status: 0 for status in TaskStatus}
    )

    @classmethod
    def from_counts(cls, grouped: Mapping[TaskStatus, int]) -> TaskStats:
        stats = cls()
        for status, count in grouped.items():
            stats.counts[status] = count
        return stats

    @property
    def total(self) -> int:
        return sum(self.counts.values())

    def to_dict(self) -> dict[str, int]:
        payload = {"total": self.total}
        payload.update({status.value: count for status, count in self.counts.items()})
        return payload
