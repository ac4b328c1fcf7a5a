# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import UTC, datetime
from http import HTTPStatus

from flask import Blueprint, Response, jsonify

from taskboard.infrastructure.health import check_database
from taskboard.infrastructure.observability import render_metrics
from taskboard.shared.config import load_config


class MiscController:
    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("misc", __name__)
        bp.add_url_rule("/api/health", view_func=self.health, methods=["GET"])
        if load_config().observability.metrics_enabled:
            bp.add_url_rule("/metrics", view_func=self.metrics, methods=["GET"])
        return bp

    def health(self):
        probe = check_database()
        body = {
            "success": probe.reachable,
            "status": "OK" if probe.reachable else "DEGRADED",
            "service": load_config().observability.service_name,
            "timestamp": datetime.now(UTC).isoformat(),
            "database": probe.label,
        }
        status = HTTPStatus.OK if probe.reachable else HTTPStatus.SERVICE_UNAVAILABLE
        return jsonify(body), status

    def metrics(self) -> Response:
        body, content_type = render_metrics()
        return Response(body, content_type=content_type)
