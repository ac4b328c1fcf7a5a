# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from taskboard.domain.tasks.entities import PageRequest, TaskFilters, TaskPage, TaskSort
from taskboard.domain.tasks.repositories import TaskRepository
from taskboard.shared.errors import ValidationError


class ListTasksUseCase:
    """Filtered, sorted, paginated view over one user's tasks."""

    def __init__(self, *, tasks: TaskRepository, max_page_size: int = 100) -> None:
        self._tasks = tasks
        self._max_page_size = max_page_size

    def execute(
        self,
        user_id: int,
        filters: TaskFilters | None = None,
        sort: TaskSort = TaskSort.NEWEST,
        page: PageRequest | None = None,
    ) -> TaskPage:
        filters = filters or TaskFilters()
        page = page or PageRequest()
        if page.limit > self._max_page_size:
            raise ValidationError.for_field(
                "limit", f"Limit must be between 1 and {self._max_page_size}"
            )

        items, total = self._tasks.search(user_id, filters, sort, page)
        return TaskPage(items=items, total=total, page=page.page, limit=page.limit)
