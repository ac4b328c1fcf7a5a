# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from taskboard.domain.tasks.entities import Task
from taskboard.domain.tasks.exceptions import TaskNotFoundError
from taskboard.domain.tasks.repositories import TaskRepository


class GetTaskUseCase:
    def __init__(self, *, tasks: TaskRepository) -> None:
        self._tasks = tasks

    def execute(self, user_id: int, task_id: int) -> Task:
        task = self._tasks.get(user_id, task_id)
        if task is None:
            raise TaskNotFoundError()
        return task
