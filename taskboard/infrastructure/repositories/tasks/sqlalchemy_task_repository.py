# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from datetime import UTC, datetime
from enum import Enum
from typing import Any

from sqlalchemy import case, func, or_, select, update
from sqlalchemy.orm import Session
from sqlalchemy.sql.elements import ColumnElement

from taskboard.domain.tasks.entities import (
    PageRequest,
    SortField,
    Task,
    TaskDraft,
    TaskFilters,
    TaskPriority,
    TaskSort,
    TaskStatus,
)
from taskboard.domain.tasks.repositories import TaskRepository
from taskboard.infrastructure.db.models import Task as TaskRow
from taskboard.infrastructure.db.session import SessionLocal, session_scope
from taskboard.infrastructure.repositories._mapping import storable_id, task_from_row

_MUTABLE = frozenset({"title", "description", "status", "priority", "due_date", "tags"})

_PRIORITY_RANK = case(
    {priority.value: priority.rank for priority in TaskPriority},
    value=TaskRow.priority,
    else_=-1,
)


def escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _sort_column(field: SortField) -> ColumnElement[Any]:
    if field is SortField.PRIORITY:
        return _PRIORITY_RANK
    if field is SortField.TITLE:
        return func.lower(TaskRow.title)
    return {
        SortField.CREATED_AT: TaskRow.created_at,
        SortField.UPDATED_AT: TaskRow.updated_at,
        SortField.DUE_DATE: TaskRow.due_date,
    }[field]


def _order_by(sort: TaskSort) -> list[ColumnElement[Any]]:
    column = _sort_column(sort.sort_field)
    primary = column.desc() if sort.descending else column.asc()
    if sort.sort_field is SortField.DUE_DATE:
        primary = primary.nulls_last()
    return [primary, TaskRow.id.desc()]


def _column_value(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, tuple):
        return list(value)
    return value


class SqlAlchemyTaskRepository(TaskRepository):
    """Task store; every statement is constrained to a single owner."""

    def __init__(
        self,
        session_factory: Callable[[], Session] = SessionLocal,
        *,
        hide_deleted: bool = True,
    ) -> None:
        self._session_factory = session_factory
        self._hide_deleted = hide_deleted

    def _scope(self, owner_id: int) -> list[ColumnElement[bool]]:
        clauses: list[ColumnElement[bool]] = [TaskRow.owner_id == owner_id]
        if self._hide_deleted:
            clauses.append(TaskRow.is_deleted.is_(False))
        return clauses

    def search(
        self,
        owner_id: int,
        filters: TaskFilters,
        sort: TaskSort,
        page: PageRequest,
    ) -> tuple[Sequence[Task], int]:
        clauses = self._scope(owner_id)
        if filters.status is not None:
            clauses.append(TaskRow.status == filters.status.value)
        if filters.priority is not None:
            clauses.append(TaskRow.priority == filters.priority.value)
        if filters.search:
            pattern = f"%{escape_like(filters.search)}%"
            clauses.append(
                or_(
                    TaskRow.title.ilike(pattern, escape="\\"),
                    TaskRow.description.ilike(pattern, escape="\\"),
                )
            )

        with session_scope(self._session_factory) as session:
            total = session.scalar(select(func.count(TaskRow.id)).where(*clauses)) or 0
            if page.offset >= total:
                return [], int(total)
            rows = session.scalars(
                select(TaskRow)
                .where(*clauses)
                .order_by(*_order_by(sort))
                .offset(page.offset)
                .limit(page.limit)
            ).all()
            return [task_from_row(row) for row in rows], int(total)

    def get(self, owner_id: int, task_id: int) -> Task | None:
        if not storable_id(task_id):
            return None
        with session_scope(self._session_factory) as session:
            row = session.scalars(
                select(TaskRow).where(TaskRow.id == task_id, *self._scope(owner_id))
            ).first()
            return task_from_row(row) if row else None

    def add(self, owner_id: int, draft: TaskDraft) -> Task:
        now = datetime.now(UTC)
        with session_scope(self._session_factory) as session:
            row = TaskRow(
                owner_id=owner_id,
                title=draft.title,
                description=draft.description,
                status=draft.status.value,
                priority=draft.priority.value,
                due_date=draft.due_date,
                tags=list(draft.tags),
                is_deleted=False,
                created_at=now,
                updated_at=now,
            )
            session.add(row)
            session.flush()
            session.refresh(row)
            return task_from_row(row)

    def update(self, owner_id: int, task_id: int, changes: Mapping[str, Any]) -> Task | None:
        unknown = set(changes) - _MUTABLE
        if unknown:
            raise ValueError(f"cannot update task fields: {sorted(unknown)}")
        if not storable_id(task_id):
            return None
        values = {key: _column_value(value) for key, value in changes.items()}
        values["updated_at"] = datetime.now(UTC)

        with session_scope(self._session_factory) as session:
            result = session.execute(
                update(TaskRow)
                .where(TaskRow.id == task_id, *self._scope(owner_id))
                .values(**values)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                return None
            row = session.get(TaskRow, task_id, populate_existing=True)
            return task_from_row(row) if row else None

    def soft_delete(self, owner_id: int, task_id: int) -> bool:
        if not storable_id(task_id):
            return False
        with session_scope(self._session_factory) as session:
            result = session.execute(
                update(TaskRow)
                .where(TaskRow.id == task_id, *self._scope(owner_id))
                .values(is_deleted=True, updated_at=datetime.now(UTC))
                .execution_options(synchronize_session=False)
            )
            return result.rowcount > 0

    def count_by_status(self, owner_id: int) -> Mapping[TaskStatus, int]:
        with session_scope(self._session_factory) as session:
            rows = session.execute(
                select(TaskRow.status, func.count(TaskRow.id))
                .where(*self._scope(owner_id))
                .group_by(TaskRow.status)
            ).all()
        return {TaskStatus(status): int(count) for status, count in rows}
