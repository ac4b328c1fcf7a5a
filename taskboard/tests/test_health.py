from __future__ import annotations

from flask import Flask
from werkzeug.exceptions import MethodNotAllowed

from taskboard.infrastructure.health import DatabaseProbe
from taskboard.interfaces.http.controllers import misc_controller
from taskboard.interfaces.http.controllers.misc_controller import MiscController
from taskboard.shared.errors import handle_http_exception


def _client():
    app = Flask(__name__)
    app.register_blueprint(MiscController().as_blueprint())
    return app.test_client()


def test_health_reports_degraded_database(monkeypatch) -> None:
    monkeypatch.setattr(misc_controller, "check_database", lambda: DatabaseProbe(False, 3.2))

    response = _client().get("/api/health")

    assert response.status_code == 503
    body = response.get_json()
    assert body["success"] is False
    assert body["status"] == "DEGRADED"
    assert body["database"] == "error"


def test_health_ok_shape(monkeypatch) -> None:
    monkeypatch.setattr(misc_controller, "check_database", lambda: DatabaseProbe(True, 0.4))

    body = _client().get("/api/health").get_json()

    assert set(body) == {"success", "status", "service", "timestamp", "database"}
    assert body["database"] == "ok"


def test_method_not_allowed_body() -> None:
    app = Flask(__name__)
    with app.app_context():
        response, status = handle_http_exception(MethodNotAllowed())

    assert status == 405
    assert response.get_json() == {
        "success": False,
        "error": "method_not_allowed",
        "message": "Method not allowed for this endpoint",
    }
