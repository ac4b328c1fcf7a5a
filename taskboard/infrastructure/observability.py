# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest

from taskboard.shared.config import load_config

_config = load_config()

REQUEST_LATENCY = Histogram(
    "taskboard_request_latency_seconds",
    "Request latency",
    labelnames=("endpoint",),
    buckets=(0.01, 0.05, 0.1, 0.25, 0.5, 1, 2, 5),
)
REQUEST_COUNTER = Counter(
    "taskboard_requests_total",
    "Number of processed requests",
    labelnames=("endpoint", "status"),
)
TASK_MUTATIONS = Counter(
    "taskboard_task_mutations_total",
    "Task mutations by action",
    labelnames=("action",),
)


def record_request(endpoint: str, status: int, duration: float) -> None:
    if not _config.observability.metrics_enabled:
        return
    REQUEST_LATENCY.labels(endpoint=endpoint).observe(duration)
    REQUEST_COUNTER.labels(endpoint=endpoint, status=str(status)).inc()


def record_task_mutation(action: str) -> None:
    if not _config.observability.metrics_enabled:
        return
    TASK_MUTATIONS.labels(action=action).inc()


def render_metrics() -> tuple[bytes, str]:
    return generate_latest(), CONTENT_TYPE_LATEST


__all__ = [
    "REQUEST_COUNTER",
    "REQUEST_LATENCY",
    "TASK_MUTATIONS",
    "record_request",
    "record_task_mutation",
    "render_metrics",
]
