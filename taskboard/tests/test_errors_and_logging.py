from __future__ import annotations

from http import HTTPStatus

from taskboard.domain.tasks.exceptions import TaskNotFoundError
from taskboard.domain.users.exceptions import UserAlreadyExistsError
from taskboard.shared.errors import InfrastructureError, ValidationError
from taskboard.shared.logging import sanitize_message


def test_domain_error_envelope() -> None:
    error = TaskNotFoundError()

    assert error.status == HTTPStatus.NOT_FOUND
    assert error.to_dict() == {
        "success": False,
        "error": "task_not_found",
        "message": "Task not found",
    }


def test_conflict_status() -> None:
    assert UserAlreadyExistsError().status == HTTPStatus.CONFLICT


def test_validation_error_lists_fields() -> None:
    error = ValidationError(
        [
            {"field": "title", "message": "Title is required"},
            {"field": "priority", "message": "Input should be 'low'"},
        ]
    )

    body = error.to_dict()

    assert error.status == HTTPStatus.BAD_REQUEST
    assert body["error"] == "validation_error"
    assert [item["field"] for item in body["errors"]] == ["title", "priority"]
    assert "context" not in body


def test_infrastructure_error_hides_details() -> None:
    body = InfrastructureError("db_down", context={"attempt": 1}).to_dict()

    assert body["message"] == "Server error"
    assert body["context"] == {"attempt": 1}


def test_sanitize_message_redacts_secrets() -> None:
    token = "gAAAAABlongfernettokenvalue1234567890"

    cleaned = sanitize_message(f"Authorization: Bearer {token}")
    assert token not in cleaned

    cleaned = sanitize_message("login password=Passw0rd newPassword=Secret99")
    assert "Passw0rd" not in cleaned
    assert "Secret99" not in cleaned


def test_sanitize_message_masks_emails() -> None:
    cleaned = sanitize_message("register for alice@example.com")

    assert "alice@" not in cleaned
    assert "***@example.com" in cleaned
