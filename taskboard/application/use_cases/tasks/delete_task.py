# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from taskboard.domain.tasks.exceptions import TaskNotFoundError
from taskboard.domain.tasks.repositories import TaskRepository
from taskboard.infrastructure.observability import record_task_mutation
from taskboard.shared.logging import logger


class DeleteTaskUseCase:
    """Soft delete: the row stays, flagged ``is_deleted``."""

    def __init__(self, *, tasks: TaskRepository) -> None:
        self._tasks = tasks

    def execute(self, user_id: int, task_id: int) -> None:
        if not self._tasks.soft_delete(user_id, task_id):
            logger.info(f"tasks.delete: not_found (user_id={user_id}, task_id={task_id})")
            raise TaskNotFoundError()
        record_task_mutation("delete")
        logger.info(f"tasks.delete: ok (user_id={user_id}, task_id={task_id})")
