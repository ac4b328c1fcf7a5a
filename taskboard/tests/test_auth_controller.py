from __future__ import annotations

from datetime import UTC, datetime
from typing import cast
from unittest.mock import MagicMock

import pytest
from flask import Flask

from taskboard.application.use_cases.users.register_user import RegisterUserUseCase
from taskboard.domain.users.entities import User
from taskboard.domain.users.exceptions import InvalidCredentialsError
from taskboard.interfaces.http.controllers.auth_controller import AuthController
from taskboard.shared.middleware.error_handler import configure_error_handling


@pytest.fixture()
def flask_app() -> Flask:
    app = Flask(__name__)
    configure_error_handling(app)
    return app


def test_register_endpoint_returns_user_and_token(flask_app: Flask) -> None:
    register_called: dict[str, tuple] = {}

    class StubRegister:
        def execute(self, username, email, password, first_name=None, last_name=None):
            register_called["args"] = (username, email, password, first_name, last_name)
            return (
                User(
                    id=1,
                    username=username,
                    email=email,
                    password_hash="hash",
                    created_at=datetime.now(UTC),
                    first_name=first_name,
                ),
                "token123",
            )

    controller = AuthController(
        register_use_case=cast(RegisterUserUseCase, StubRegister()),
        login_use_case=MagicMock(),
        logout_use_case=MagicMock(),
    )
    flask_app.register_blueprint(controller.as_blueprint())

    with flask_app.test_client() as client:
        response = client.post(
            "/api/auth/register",
            json={
                "username": "alice",
                "email": "alice@example.com",
                "password": "Passw0rd",
                "firstName": "Alice",
            },
        )

    assert response.status_code == 201
    assert register_called["args"] == ("alice", "alice@example.com", "Passw0rd", "Alice", None)
    body = response.get_json()
    assert body["success"] is True
    assert body["data"]["token"] == "token123"
    assert body["data"]["user"]["firstName"] == "Alice"
    assert "passwordHash" not in body["data"]["user"]
    assert "password_hash" not in body["data"]["user"]


def test_register_invalid_payload_returns_400(flask_app: Flask) -> None:
    register = MagicMock()
    controller = AuthController(
        register_use_case=register,
        login_use_case=MagicMock(),
        logout_use_case=MagicMock(),
    )
    flask_app.register_blueprint(controller.as_blueprint())

    with flask_app.test_client() as client:
        response = client.post(
            "/api/auth/register",
            json={"username": "alice", "email": "alice@example.com", "password": "password1"},
        )

    assert response.status_code == 400
    payload = response.get_json()
    assert payload["error"] == "validation_error"
    assert [item["field"] for item in payload["errors"]] == ["password"]
    register.execute.assert_not_called()


def test_login_with_wrong_password_returns_401(flask_app: Flask) -> None:
    login = MagicMock()
    login.execute.side_effect = InvalidCredentialsError()
    controller = AuthController(
        register_use_case=MagicMock(),
        login_use_case=login,
        logout_use_case=MagicMock(),
    )
    flask_app.register_blueprint(controller.as_blueprint())

    with flask_app.test_client() as client:
        response = client.post(
            "/api/auth/login", json={"email": "alice@example.com", "password": "Wrong0ne"}
        )

    assert response.status_code == 401
    assert response.get_json()["error"] == "invalid_credentials"
