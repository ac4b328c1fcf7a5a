# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from time import perf_counter

from flask import Blueprint, Response, g, jsonify, request

from taskboard.application.use_cases.tasks import (
    ChangeTaskStatusUseCase,
    CreateTaskUseCase,
    DeleteTaskUseCase,
    GetTaskUseCase,
    ListTasksUseCase,
    TaskStatsUseCase,
    UpdateTaskUseCase,
)
from taskboard.infrastructure.audit import AuditAction, audit_log
from taskboard.infrastructure.auth import auth_required
from taskboard.interfaces.http.dto.common import envelope
from taskboard.interfaces.http.dto.tasks import (
    PaginationDTO,
    TaskCreateDTO,
    TaskDTO,
    TaskQueryDTO,
    TaskStatusDTO,
    TaskUpdateDTO,
)
from taskboard.interfaces.http.request_context import client_ip, json_body
from taskboard.shared.errors import parse_payload
from taskboard.shared.logging import logger


class TasksController:
    def __init__(
        self,
        *,
        list_use_case: ListTasksUseCase,
        get_use_case: GetTaskUseCase,
        create_use_case: CreateTaskUseCase,
        update_use_case: UpdateTaskUseCase,
        status_use_case: ChangeTaskStatusUseCase,
        delete_use_case: DeleteTaskUseCase,
        stats_use_case: TaskStatsUseCase,
        default_page_size: int = 10,
    ) -> None:
        self._list = list_use_case
        self._get = get_use_case
        self._create = create_use_case
        self._update = update_use_case
        self._status = status_use_case
        self._delete = delete_use_case
        self._stats = stats_use_case
        self._default_page_size = default_page_size

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("tasks", __name__, url_prefix="/api/tasks")
        bp.add_url_rule("", view_func=self.list_tasks, methods=["GET"])
        bp.add_url_rule("", view_func=self.create, methods=["POST"])
        bp.add_url_rule("/stats/overview", view_func=self.stats, methods=["GET"])
        bp.add_url_rule("/<int:task_id>", view_func=self.get, methods=["GET"])
        bp.add_url_rule("/<int:task_id>", view_func=self.update, methods=["PUT"])
        bp.add_url_rule("/<int:task_id>", view_func=self.delete, methods=["DELETE"])
        bp.add_url_rule("/<int:task_id>/status", view_func=self.change_status, methods=["PATCH"])
        return bp

    @auth_required
    def list_tasks(self) -> tuple[Response, int]:
        t0 = perf_counter()
        user_id = g.user_id
        query = request.args.to_dict()
        query.setdefault("limit", str(self._default_page_size))
        dto = parse_payload(TaskQueryDTO, query)

        page = self._list.execute(user_id, dto.filters(), dto.sort, dto.page_request())

        dt = (perf_counter() - t0) * 1000
        logger.info(
            f"tasks.list: ok (user_id={user_id}, n={len(page.items)}, "
            f"total={page.total}, dt_ms={dt:.0f})"
        )
        body = envelope(
            [TaskDTO.from_task(task) for task in page.items],
            pagination=PaginationDTO.from_page(page),
        )
        return jsonify(body), 200

    @auth_required
    def get(self, task_id: int) -> tuple[Response, int]:
        task = self._get.execute(g.user_id, task_id)
        return jsonify(envelope(TaskDTO.from_task(task))), 200

    @auth_required
    def create(self) -> tuple[Response, int]:
        dto = parse_payload(TaskCreateDTO, json_body())
        task = self._create.execute(g.user_id, dto.to_draft())
        audit_log(
            AuditAction.TASK_CREATED,
            user_id=g.user_id,
            ip_address=client_ip(),
            details={"task_id": task.id},
        )
        return jsonify(envelope(TaskDTO.from_task(task), message="Task created successfully")), 201

    @auth_required
    def update(self, task_id: int) -> tuple[Response, int]:
        dto = parse_payload(TaskUpdateDTO, json_body())
        changes = dto.changes()
        task = self._update.execute(g.user_id, task_id, changes)
        audit_log(
            AuditAction.TASK_UPDATED,
            user_id=g.user_id,
            ip_address=client_ip(),
            details={"task_id": task.id, "fields": sorted(changes)},
        )
        return jsonify(envelope(TaskDTO.from_task(task), message="Task updated successfully")), 200

    @auth_required
    def change_status(self, task_id: int) -> tuple[Response, int]:
        dto = parse_payload(TaskStatusDTO, json_body())
        task = self._status.execute(g.user_id, task_id, dto.status)
        audit_log(
            AuditAction.TASK_STATUS_CHANGED,
            user_id=g.user_id,
            ip_address=client_ip(),
            details={"task_id": task.id, "status": dto.status.value},
        )
        return (
            jsonify(envelope(TaskDTO.from_task(task), message="Task status updated successfully")),
            200,
        )

    @auth_required
    def delete(self, task_id: int) -> tuple[Response, int]:
        self._delete.execute(g.user_id, task_id)
        audit_log(
            AuditAction.TASK_DELETED,
            user_id=g.user_id,
            ip_address=client_ip(),
            details={"task_id": task_id},
        )
        return jsonify(envelope(message="Task deleted successfully")), 200

    @auth_required
    def stats(self) -> tuple[Response, int]:
        stats = self._stats.execute(g.user_id)
        return jsonify(envelope(stats.to_dict())), 200
