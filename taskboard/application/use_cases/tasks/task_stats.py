# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from taskboard.domain.tasks.entities import TaskStats
from taskboard.domain.tasks.repositories import TaskRepository


class TaskStatsUseCase:
    def __init__(self, *, tasks: TaskRepository) -> None:
        self._tasks = tasks

    def execute(self, user_id: int) -> TaskStats:
        return TaskStats.from_counts(self._tasks.count_by_status(user_id))
