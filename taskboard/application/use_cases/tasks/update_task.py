# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from taskboard.domain.tasks.entities import Task
from taskboard.domain.tasks.exceptions import TaskNotFoundError
from taskboard.domain.tasks.repositories import TaskRepository
from taskboard.infrastructure.observability import record_task_mutation
from taskboard.shared.logging import logger


class UpdateTaskUseCase:
    def __init__(self, *, tasks: TaskRepository) -> None:
        self._tasks = tasks

    def execute(self, user_id: int, task_id: int, changes: Mapping[str, Any]) -> Task:
        if not changes:
            # nothing to write, but ownership still decides visibility
            task = self._tasks.get(user_id, task_id)
        else:
            task = self._tasks.update(user_id, task_id, changes)
        if task is None:
            logger.info(f"tasks.update: not_found (user_id={user_id}, task_id={task_id})")
            raise TaskNotFoundError()

        record_task_mutation("update")
        logger.info(
            f"tasks.update: ok (user_id={user_id}, task_id={task_id}, fields={sorted(changes)})"
        )
        return task
