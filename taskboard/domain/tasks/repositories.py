# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Protocol

from .entities import PageRequest, Task, TaskDraft, TaskFilters, TaskSort, TaskStatus


class TaskRepository(Protocol):
    def search(
        self,
        owner_id: int,
        filters: TaskFilters,
        sort: TaskSort,
        page: PageRequest,
    ) -> tuple[Sequence[Task], int]: ...

    def get(self, owner_id: int, task_id: int) -> Task | None: ...

    def add(self, owner_id: int, draft: TaskDraft) -> Task: ...

    def update(self, owner_id: int, task_id: int, changes: Mapping[str, Any]) -> Task | None: ...

    def soft_delete(self, owner_id: int, task_id: int) -> bool: ...

    def count_by_status(self, owner_id: int) -> Mapping[TaskStatus, int]: ...
