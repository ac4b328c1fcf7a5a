# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Flask, Response
from flask_cors import CORS

from taskboard.infrastructure.admin_setup import setup_admin_user
from taskboard.infrastructure.auth import configure_auth
from taskboard.infrastructure.container import Container, container
from taskboard.infrastructure.db import init_db
from taskboard.shared.logging import logger, setup_logging
from taskboard.shared.middleware.error_handler import configure_error_handling
from taskboard.shared.middleware.request_logger import configure_request_logging


def create_app(app_container: Container | None = None) -> Flask:
    app_container = app_container or container
    config = app_container.config

    init_db()
    setup_logging(debug_mode=config.debug_logging)

    app = Flask(__name__)
    app.config.update(SECRET_KEY=config.secret_key)
    app.json.sort_keys = False

    configure_error_handling(app)
    configure_request_logging(app)
    configure_auth(app, app_container.session_validator)

    CORS(
        app,
        resources={r"/api/*": {"origins": config.security.allowed_origins}},
        allow_headers=["Authorization", "Content-Type", "X-Request-ID"],
        expose_headers=["X-Request-ID"],
    )

    app.register_blueprint(app_container.misc_controller.as_blueprint())
    app.register_blueprint(app_container.auth_controller.as_blueprint())
    app.register_blueprint(app_container.tasks_controller.as_blueprint())
    app.register_blueprint(app_container.users_controller.as_blueprint())
    app.register_blueprint(app_container.admin_controller.as_blueprint())

    setup_admin_user(app_container.user_repository)

    @app.after_request
    def _add_security_headers(resp: Response) -> Response:
        resp.headers.setdefault("X-Frame-Options", "DENY")
        resp.headers.setdefault("Referrer-Policy", "no-referrer")
        resp.headers.setdefault("X-Content-Type-Options", "nosniff")
        resp.headers.setdefault("Cross-Origin-Resource-Policy", "same-origin")
        resp.headers.setdefault("X-Permitted-Cross-Domain-Policies", "none")

        if config.security.enable_hsts:
            resp.headers.setdefault(
                "Strict-Transport-Security",
                "max-age=31536000; includeSubDomains; preload",
            )

        return resp

    logger.info("Flask app initialized")
    return app


if __name__ == "__main__":
    create_app().run(host="0.0.0.0", port=5000, debug=True)
