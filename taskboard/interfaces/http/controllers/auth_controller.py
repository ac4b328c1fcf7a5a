# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify

from taskboard.application.use_cases.users.login_user import LoginUserUseCase
from taskboard.application.use_cases.users.logout_user import LogoutUserUseCase
from taskboard.application.use_cases.users.register_user import RegisterUserUseCase
from taskboard.infrastructure.audit import AuditAction, audit_log
from taskboard.infrastructure.auth import auth_required, current_user
from taskboard.interfaces.http.dto.auth import (
    AuthPayloadDTO,
    LoginRequestDTO,
    RegisterRequestDTO,
    UserDTO,
)
from taskboard.interfaces.http.dto.common import envelope
from taskboard.interfaces.http.request_context import client_ip, json_body
from taskboard.shared.errors import AppError, parse_payload
from taskboard.shared.logging import logger


class AuthController:
    def __init__(
        self,
        *,
        register_use_case: RegisterUserUseCase,
        login_use_case: LoginUserUseCase,
        logout_use_case: LogoutUserUseCase,
    ) -> None:
        self._register_use_case = register_use_case
        self._login_use_case = login_use_case
        self._logout_use_case = logout_use_case

    def register(self) -> tuple[Response, int]:
        dto = parse_payload(RegisterRequestDTO, json_body())

        user, token = self._register_use_case.execute(
            dto.username,
            dto.email,
            dto.password,
            first_name=dto.first_name,
            last_name=dto.last_name,
        )

        audit_log(
            AuditAction.REGISTER,
            user_id=user.id,
            ip_address=client_ip(),
            details={"username": dto.username},
        )
        logger.info(f"auth.register: ok user_id={user.id}")

        payload = AuthPayloadDTO(user=UserDTO.model_validate(user), token=token)
        return jsonify(envelope(payload.to_json(), message="User registered successfully")), 201

    def login(self) -> tuple[Response, int]:
        dto = parse_payload(LoginRequestDTO, json_body())
        ip_address = client_ip()

        try:
            user, token = self._login_use_case.execute(dto.email, dto.password)
        except AppError as exc:
            audit_log(
                AuditAction.LOGIN_FAILED,
                ip_address=ip_address,
                details={"email": dto.email, "error": exc.code},
                success=False,
            )
            raise

        audit_log(AuditAction.LOGIN_SUCCESS, user_id=user.id, ip_address=ip_address)
        logger.info(f"auth.login: ok user_id={user.id}")

        payload = AuthPayloadDTO(user=UserDTO.model_validate(user), token=token)
        return jsonify(envelope(payload.to_json(), message="Login successful")), 200

    @auth_required
    def logout(self) -> tuple[Response, int]:
        user = current_user()
        self._logout_use_case.execute(user)
        audit_log(AuditAction.LOGOUT, user_id=user.id, ip_address=client_ip())
        return jsonify(envelope(message="Logged out successfully")), 200

    @auth_required
    def me(self) -> tuple[Response, int]:
        user = current_user()
        return jsonify(envelope(UserDTO.model_validate(user).to_json())), 200

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("auth", __name__, url_prefix="/api/auth")
        bp.add_url_rule("/register", view_func=self.register, methods=["POST"])
        bp.add_url_rule("/login", view_func=self.login, methods=["POST"])
        bp.add_url_rule("/logout", view_func=self.logout, methods=["POST"])
        bp.add_url_rule("/me", view_func=self.me, methods=["GET"])
        return bp
