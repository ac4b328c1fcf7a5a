# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from taskboard.shared.errors.base import NotFoundError


class TaskNotFoundError(NotFoundError):
    """Raised for missing tasks and for tasks owned by someone else alike."""

    code = "task_not_found"
    message = "Task not found"
