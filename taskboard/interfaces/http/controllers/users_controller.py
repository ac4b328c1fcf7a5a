# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, g, jsonify

from taskboard.application.use_cases.users.profile import (
    ChangePasswordUseCase,
    GetProfileUseCase,
    UpdateProfileUseCase,
)
from taskboard.infrastructure.audit import AuditAction, audit_log
from taskboard.infrastructure.auth import auth_required
from taskboard.interfaces.http.dto.auth import UserDTO
from taskboard.interfaces.http.dto.common import envelope
from taskboard.interfaces.http.dto.users import ChangePasswordDTO, UpdateProfileDTO
from taskboard.interfaces.http.request_context import client_ip, json_body
from taskboard.shared.errors import parse_payload


class UsersController:
    def __init__(
        self,
        *,
        get_profile_use_case: GetProfileUseCase,
        update_profile_use_case: UpdateProfileUseCase,
        change_password_use_case: ChangePasswordUseCase,
    ) -> None:
        self._get_profile = get_profile_use_case
        self._update_profile = update_profile_use_case
        self._change_password = change_password_use_case

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("users", __name__, url_prefix="/api/users")
        bp.add_url_rule("/profile", view_func=self.profile, methods=["GET"])
        bp.add_url_rule("/profile", view_func=self.update_profile, methods=["PUT"])
        bp.add_url_rule("/change-password", view_func=self.change_password, methods=["PUT"])
        return bp

    @auth_required
    def profile(self) -> tuple[Response, int]:
        user = self._get_profile.execute(g.user_id)
        return jsonify(envelope(UserDTO.model_validate(user).to_json())), 200

    @auth_required
    def update_profile(self) -> tuple[Response, int]:
        dto = parse_payload(UpdateProfileDTO, json_body())
        changes = dto.changes()
        user = self._update_profile.execute(g.user_id, changes)
        audit_log(
            AuditAction.PROFILE_UPDATED,
            user_id=user.id,
            ip_address=client_ip(),
            details={"fields": sorted(changes)},
        )
        return (
            jsonify(
                envelope(UserDTO.model_validate(user).to_json(), message="Profile updated successfully")
            ),
            200,
        )

    @auth_required
    def change_password(self) -> tuple[Response, int]:
        dto = parse_payload(ChangePasswordDTO, json_body())
        self._change_password.execute(g.user_id, dto.current_password, dto.new_password)
        audit_log(AuditAction.PASSWORD_CHANGED, user_id=g.user_id, ip_address=client_ip())
        return jsonify(envelope(message="Password changed successfully")), 200
