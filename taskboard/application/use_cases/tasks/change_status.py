# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from taskboard.domain.tasks.entities import Task, TaskStatus
from taskboard.domain.tasks.exceptions import TaskNotFoundError
from taskboard.domain.tasks.repositories import TaskRepository
from taskboard.infrastructure.observability import record_task_mutation
from taskboard.shared.logging import logger


class ChangeTaskStatusUseCase:
    def __init__(self, *, tasks: TaskRepository) -> None:
        self._tasks = tasks

    def execute(self, user_id: int, task_id: int, status: TaskStatus) -> Task:
        task = self._tasks.update(user_id, task_id, {"status": status})
        if task is None:
            logger.info(f"tasks.status: not_found (user_id={user_id}, task_id={task_id})")
            raise TaskNotFoundError()
        record_task_mutation("status")
        logger.info(
            f"tasks.status: ok (user_id={user_id}, task_id={task_id}, status={status.value})"
        )
        return task
