# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import time
from dataclasses import dataclass

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from taskboard.infrastructure.db import ENGINE
from taskboard.shared.logging import logger


@dataclass(frozen=True, slots=True)
class DatabaseProbe:
    reachable: bool
    latency_ms: float

    @property
    def label(self) -> str:
        return "ok" if self.reachable else "error"


def check_database() -> DatabaseProbe:
    """Round-trips ``SELECT 1``; failures are reported, not raised."""
    started = time.perf_counter()
    try:
        with ENGINE.connect() as connection:
            connection.execute(text("SELECT 1"))
    except SQLAlchemyError as exc:
        logger.error(f"health: database unreachable ({type(exc).__name__})")
        return DatabaseProbe(False, (time.perf_counter() - started) * 1000)
    return DatabaseProbe(True, (time.perf_counter() - started) * 1000)


__all__ = ["DatabaseProbe", "check_database"]
