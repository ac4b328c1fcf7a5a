# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .tasks.entities import (
    PageRequest,
    Task,
    TaskDraft,
    TaskFilters,
    TaskPage,
    TaskPriority,
    TaskSort,
    TaskStats,
    TaskStatus,
)
from .tasks.exceptions import TaskNotFoundError
from .users.entities import IssuedToken, TokenClaims, User, UserRole

__all__ = [
    "IssuedToken",
    "PageRequest",
    "Task",
    "TaskDraft",
    "TaskFilters",
    "TaskNotFoundError",
    "TaskPage",
    "TaskPriority",
    "TaskSort",
    "TaskStats",
    "TaskStatus",
    "TokenClaims",
    "User",
    "UserRole",
]
