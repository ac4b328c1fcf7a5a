# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, g, jsonify

from taskboard.application.use_cases.admin.list_users import ListUsersUseCase
from taskboard.application.use_cases.admin.set_user_active import SetUserActiveUseCase
from taskboard.infrastructure.audit import AuditAction, audit_log
from taskboard.infrastructure.auth import admin_required
from taskboard.interfaces.http.dto.auth import UserDTO
from taskboard.interfaces.http.dto.common import envelope
from taskboard.interfaces.http.dto.users import SetUserActiveDTO
from taskboard.interfaces.http.request_context import client_ip, json_body
from taskboard.shared.errors import parse_payload


class AdminController:
    def __init__(
        self,
        *,
        list_users_use_case: ListUsersUseCase,
        set_user_active_use_case: SetUserActiveUseCase,
    ) -> None:
        self._list_users = list_users_use_case
        self._set_user_active = set_user_active_use_case

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("admin", __name__, url_prefix="/api/admin")
        bp.add_url_rule("/users", view_func=self.list_users, methods=["GET"])
        bp.add_url_rule(
            "/users/<int:user_id>/active",
            view_func=self.set_active,
            methods=["PUT"],
        )
        return bp

    @admin_required
    def list_users(self) -> tuple[Response, int]:
        users = self._list_users.execute()
        data = [UserDTO.model_validate(user).to_json() for user in users]
        return jsonify(envelope(data, total=len(data))), 200

    @admin_required
    def set_active(self, user_id: int) -> tuple[Response, int]:
        dto = parse_payload(SetUserActiveDTO, json_body())
        user = self._set_user_active.execute(g.user_id, user_id, dto.is_active)
        audit_log(
            AuditAction.USER_ACTIVATED if dto.is_active else AuditAction.USER_DEACTIVATED,
            user_id=g.user_id,
            ip_address=client_ip(),
            details={"target_user_id": user_id},
        )
        return jsonify(envelope(UserDTO.model_validate(user).to_json())), 200
