from __future__ import annotations

import os
import tempfile
from collections.abc import Mapping, Sequence
from dataclasses import replace
from datetime import UTC, datetime, timedelta
from typing import Any

_TMP_DIR = tempfile.mkdtemp(prefix="taskboard-tests-")
os.environ.update(
    DATABASE_URL=f"sqlite:///{os.path.join(_TMP_DIR, 'test.db')}",
    LOG_FILE=os.path.join(_TMP_DIR, "taskboard.log"),
    APP_ENV="test",
    SECRET_KEY="test-secret-key",
    ADMIN_EMAIL="admin@example.com",
    METRICS_ENABLED="true",
    HIDE_DELETED_TASKS="true",
)
os.environ.pop("TOKEN_KEY", None)

import pytest  # noqa: E402
from cryptography.fernet import Fernet  # noqa: E402

from taskboard.domain.tasks.entities import (  # noqa: E402
    PageRequest,
    SortField,
    Task,
    TaskDraft,
    TaskFilters,
    TaskSort,
    TaskStatus,
)
from taskboard.domain.tasks.repositories import TaskRepository  # noqa: E402
from taskboard.domain.users.entities import User  # noqa: E402
from taskboard.domain.users.exceptions import UserAlreadyExistsError  # noqa: E402
from taskboard.domain.users.repositories import PasswordHasher, UserRepository  # noqa: E402
from taskboard.infrastructure.tokens import FernetTokenService  # noqa: E402


class InMemoryUserRepository(UserRepository):
    def __init__(self) -> None:
        self._users: dict[int, User] = {}
        self._seq = 1

    def find_by_id(self, user_id: int) -> User | None:
        return self._users.get(user_id)

    def find_by_email(self, email: str) -> User | None:
        return next((u for u in self._users.values() if u.email == email.lower()), None)

    def exists_with(
        self,
        *,
        username: str | None = None,
        email: str | None = None,
        exclude_id: int | None = None,
    ) -> bool:
        for user in self._users.values():
            if user.id == exclude_id:
                continue
            if username and user.username == username:
                return True
            if email and user.email == email.lower():
                return True
        return False

    def add(self, user: User) -> User:
        if self.exists_with(username=user.username, email=user.email):
            raise UserAlreadyExistsError()
        stored = replace(user, id=self._seq, email=user.email.lower())
        self._seq += 1
        self._users[stored.id] = stored
        return stored

    def update(self, user_id: int, **fields: Any) -> User | None:
        user = self._users.get(user_id)
        if user is None:
            return None
        updated = replace(user, **fields)
        self._users[user_id] = updated
        return updated

    def list_all(self) -> Sequence[User]:
        return [self._users[key] for key in sorted(self._users)]


class InMemoryTaskRepository(TaskRepository):
    def __init__(self, *, hide_deleted: bool = True) -> None:
        self._tasks: dict[int, Task] = {}
        self._seq = 1
        self._hide_deleted = hide_deleted
        self._clock = datetime(2025, 1, 1, tzinfo=UTC)

    def _tick(self) -> datetime:
        self._clock += timedelta(seconds=1)
        return self._clock

    def _visible(self, owner_id: int) -> list[Task]:
        return [
            task
            for task in self._tasks.values()
            if task.owner_id == owner_id and not (self._hide_deleted and task.is_deleted)
        ]

    def search(
        self,
        owner_id: int,
        filters: TaskFilters,
        sort: TaskSort,
        page: PageRequest,
    ) -> tuple[Sequence[Task], int]:
        items = self._visible(owner_id)
        if filters.status is not None:
            items = [t for t in items if t.status is filters.status]
        if filters.priority is not None:
            items = [t for t in items if t.priority is filters.priority]
        if filters.search:
            term = filters.search.lower()
            items = [
                t
                for t in items
                if term in t.title.lower() or term in (t.description or "").lower()
            ]

        items.sort(key=lambda t: t.id, reverse=True)
        key = {
            SortField.CREATED_AT: lambda t: t.created_at,
            SortField.UPDATED_AT: lambda t: t.updated_at,
            SortField.PRIORITY: lambda t: t.priority.rank,
            SortField.TITLE: lambda t: t.title.lower(),
        }.get(sort.sort_field)
        if key is not None:
            items.sort(key=key, reverse=sort.descending)
        else:
            dated = [t for t in items if t.due_date is not None]
            undated = [t for t in items if t.due_date is None]
            dated.sort(key=lambda t: t.due_date, reverse=sort.descending)
            items = dated + undated

        return items[page.offset : page.offset + page.limit], len(items)

    def get(self, owner_id: int, task_id: int) -> Task | None:
        return next((t for t in self._visible(owner_id) if t.id == task_id), None)

    def add(self, owner_id: int, draft: TaskDraft) -> Task:
        now = self._tick()
        task = Task(
            id=self._seq,
            owner_id=owner_id,
            title=draft.title,
            description=draft.description,
            status=draft.status,
            priority=draft.priority,
            due_date=draft.due_date,
            tags=tuple(draft.tags),
            is_deleted=False,
            created_at=now,
            updated_at=now,
        )
        self._seq += 1
        self._tasks[task.id] = task
        return task

    def update(self, owner_id: int, task_id: int, changes: Mapping[str, Any]) -> Task | None:
        task = self.get(owner_id, task_id)
        if task is None:
            return None
        updated = replace(task, **dict(changes), updated_at=self._tick())
        self._tasks[task_id] = updated
        return updated

    def soft_delete(self, owner_id: int, task_id: int) -> bool:
        task = self.get(owner_id, task_id)
        if task is None:
            return False
        self._tasks[task_id] = replace(task, is_deleted=True)
        return True

    def count_by_status(self, owner_id: int) -> Mapping[TaskStatus, int]:
        counts: dict[TaskStatus, int] = {}
        for task in self._visible(owner_id):
            counts[task.status] = counts.get(task.status, 0) + 1
        return counts

    def raw(self, task_id: int) -> Task:
        return self._tasks[task_id]


class DeterministicHasher(PasswordHasher):
    def hash(self, password: str) -> str:
        return f"hashed:{password}"

    def verify(self, password: str, hashed: str) -> bool:
        return hashed == f"hashed:{password}"



@pytest.fixture()
def users() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture()
def tasks() -> InMemoryTaskRepository:
    return InMemoryTaskRepository()


@pytest.fixture()
def hasher() -> DeterministicHasher:
    return DeterministicHasher()


@pytest.fixture()
def token_service() -> FernetTokenService:
    return FernetTokenService(Fernet.generate_key(), ttl_seconds=3600)
