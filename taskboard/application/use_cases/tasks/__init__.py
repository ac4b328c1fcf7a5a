# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .change_status import ChangeTaskStatusUseCase
from .create_task import CreateTaskUseCase
from .delete_task import DeleteTaskUseCase
from .get_task import GetTaskUseCase
from .list_tasks import ListTasksUseCase
from .task_stats import TaskStatsUseCase
from .update_task import UpdateTaskUseCase

__all__ = [
    "ChangeTaskStatusUseCase",
    "CreateTaskUseCase",
    "DeleteTaskUseCase",
    "GetTaskUseCase",
    "ListTasksUseCase",
    "TaskStatsUseCase",
    "UpdateTaskUseCase",
]
