# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from taskboard.domain.tasks.entities import Task, TaskDraft
from taskboard.domain.tasks.repositories import TaskRepository
from taskboard.infrastructure.observability import record_task_mutation
from taskboard.shared.logging import logger


class CreateTaskUseCase:
    def __init__(self, *, tasks: TaskRepository) -> None:
        self._tasks = tasks

    def execute(self, user_id: int, draft: TaskDraft) -> Task:
        task = self._tasks.add(user_id, draft)
        record_task_mutation("create")
        logger.info(f"tasks.create: ok (user_id={user_id}, task_id={task.id})")
        return task
