from __future__ import annotations

from datetime import UTC, datetime
from unittest.mock import MagicMock

import pytest
from flask import Flask

from taskboard.domain.tasks.entities import (
    PageRequest,
    Task,
    TaskPage,
    TaskPriority,
    TaskSort,
    TaskStats,
    TaskStatus,
)
from taskboard.domain.tasks.exceptions import TaskNotFoundError
from taskboard.domain.users.entities import User
from taskboard.infrastructure.auth import configure_auth
from taskboard.interfaces.http.controllers.tasks_controller import TasksController
from taskboard.shared.errors import UnauthenticatedError
from taskboard.shared.middleware.error_handler import configure_error_handling

NOW = datetime(2025, 1, 1, tzinfo=UTC)
ALICE = User(
    id=1,
    username="alice",
    email="alice@example.com",
    password_hash="hash",
    created_at=NOW,
)


def _task(task_id: int = 5, **overrides) -> Task:
    fields = dict(
        id=task_id,
        owner_id=ALICE.id,
        title="Write tests",
        description=None,
        status=TaskStatus.PENDING,
        priority=TaskPriority.MEDIUM,
        due_date=None,
        tags=("qa",),
        is_deleted=False,
        created_at=NOW,
        updated_at=NOW,
    )
    fields.update(overrides)
    return Task(**fields)


class StubValidator:
    def validate(self, token: str | None) -> User:
        if token != "good":
            raise UnauthenticatedError()
        return ALICE

    def validate_admin(self, token: str | None) -> User:
        return self.validate(token)


@pytest.fixture()
def use_cases() -> dict[str, MagicMock]:
    return {
        name: MagicMock()
        for name in ("list", "get", "create", "update", "status", "delete", "stats")
    }


@pytest.fixture()
def client(use_cases):
    app = Flask(__name__)
    configure_error_handling(app)
    configure_auth(app, StubValidator())
    controller = TasksController(
        list_use_case=use_cases["list"],
        get_use_case=use_cases["get"],
        create_use_case=use_cases["create"],
        update_use_case=use_cases["update"],
        status_use_case=use_cases["status"],
        delete_use_case=use_cases["delete"],
        stats_use_case=use_cases["stats"],
    )
    app.register_blueprint(controller.as_blueprint())
    with app.test_client() as test_client:
        yield test_client


AUTH = {"Authorization": "Bearer good"}


def test_requires_bearer_token(client, use_cases) -> None:
    response = client.get("/api/tasks")

    assert response.status_code == 401
    assert response.get_json()["success"] is False
    use_cases["list"].execute.assert_not_called()


def test_list_passes_query_and_wraps_pagination(client, use_cases) -> None:
    use_cases["list"].execute.return_value = TaskPage(
        items=[_task()], total=21, page=3, limit=10
    )

    response = client.get(
        "/api/tasks?status=pending&priority=&sort=-priority&page=3&search=tests",
        headers=AUTH,
    )

    assert response.status_code == 200
    body = response.get_json()
    assert body["success"] is True
    assert body["pagination"] == {"page": 3, "limit": 10, "total": 21, "pages": 3}
    assert body["data"][0]["ownerId"] == ALICE.id
    assert body["data"][0]["createdAt"].startswith("2025-01-01T00:00:00")

    user_id, filters, sort, page = use_cases["list"].execute.call_args.args
    assert user_id == ALICE.id
    assert filters.status is TaskStatus.PENDING
    assert filters.priority is None
    assert filters.search == "tests"
    assert sort is TaskSort.PRIORITY_DESC
    assert page == PageRequest(page=3, limit=10)


def test_list_rejects_bad_query(client, use_cases) -> None:
    response = client.get("/api/tasks?page=zero", headers=AUTH)

    assert response.status_code == 400
    assert response.get_json()["errors"][0]["field"] == "page"
    use_cases["list"].execute.assert_not_called()


def test_create_returns_201(client, use_cases) -> None:
    use_cases["create"].execute.return_value = _task(title="New")

    response = client.post(
        "/api/tasks", json={"title": "New", "tags": ["qa"], "owner": 42}, headers=AUTH
    )

    assert response.status_code == 201
    assert response.get_json()["data"]["title"] == "New"
    user_id, draft = use_cases["create"].execute.call_args.args
    assert user_id == ALICE.id
    assert draft.title == "New"


def test_create_validation_lists_fields(client, use_cases) -> None:
    response = client.post(
        "/api/tasks", json={"title": "", "priority": "asap"}, headers=AUTH
    )

    assert response.status_code == 400
    body = response.get_json()
    assert body["error"] == "validation_error"
    assert {item["field"] for item in body["errors"]} == {"title", "priority"}
    use_cases["create"].execute.assert_not_called()


def test_update_sends_only_present_fields(client, use_cases) -> None:
    use_cases["update"].execute.return_value = _task(priority=TaskPriority.HIGH)

    response = client.put("/api/tasks/5", json={"priority": "high"}, headers=AUTH)

    assert response.status_code == 200
    assert use_cases["update"].execute.call_args.args == (
        ALICE.id,
        5,
        {"priority": TaskPriority.HIGH},
    )


def test_not_found_maps_to_404(client, use_cases) -> None:
    use_cases["get"].execute.side_effect = TaskNotFoundError()

    response = client.get("/api/tasks/77", headers=AUTH)

    assert response.status_code == 404
    assert response.get_json() == {
        "success": False,
        "error": "task_not_found",
        "message": "Task not found",
    }


def test_change_status(client, use_cases) -> None:
    use_cases["status"].execute.return_value = _task(status=TaskStatus.COMPLETED)

    response = client.patch("/api/tasks/5/status", json={"status": "completed"}, headers=AUTH)

    assert response.status_code == 200
    assert response.get_json()["data"]["status"] == "completed"


def test_delete(client, use_cases) -> None:
    response = client.delete("/api/tasks/5", headers=AUTH)

    assert response.status_code == 200
    assert response.get_json()["message"] == "Task deleted successfully"
    use_cases["delete"].execute.assert_called_once_with(ALICE.id, 5)


def test_stats_route_is_not_shadowed_by_task_id(client, use_cases) -> None:
    use_cases["stats"].execute.return_value = TaskStats.from_counts({TaskStatus.PENDING: 2})

    response = client.get("/api/tasks/stats/overview", headers=AUTH)

    assert response.status_code == 200
    assert response.get_json()["data"] == {
        "total": 2,
        "pending": 2,
        "in-progress": 0,
        "completed": 0,
        "archived": 0,
    }
