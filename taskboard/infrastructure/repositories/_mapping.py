# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import UTC, datetime

from taskboard.domain.tasks.entities import Task, TaskPriority, TaskStatus
from taskboard.domain.users.entities import User, UserRole
from taskboard.infrastructure.db import models

# signed 64-bit INTEGER, the widest primary key SQLite and Postgres store
ROW_ID_MAX = 2**63 - 1


def storable_id(value: int) -> bool:
    return 0 < value <= ROW_ID_MAX


def as_utc(value: datetime | None) -> datetime | None:
    # SQLite hands back naive datetimes even for timezone-aware columns.
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def user_from_row(row: models.User) -> User:
    return User(
        id=row.id,
        username=row.username,
        email=row.email,
        password_hash=row.password_hash,
        created_at=as_utc(row.created_at) or datetime.now(UTC),
        first_name=row.first_name,
        last_name=row.last_name,
        profile_picture=row.profile_picture,
        role=UserRole(row.role),
        is_active=bool(row.is_active),
        last_login=as_utc(row.last_login),
    )


def task_from_row(row: models.Task) -> Task:
    created_at = as_utc(row.created_at) or datetime.now(UTC)
    return Task(
        id=row.id,
        owner_id=row.owner_id,
        title=row.title,
        description=row.description,
        status=TaskStatus(row.status),
        priority=TaskPriority(row.priority),
        due_date=as_utc(row.due_date),
        tags=tuple(row.tags or ()),
        is_deleted=bool(row.is_deleted),
        created_at=created_at,
        updated_at=as_utc(row.updated_at) or created_at,
    )
