# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, scoped_session, sessionmaker

from taskboard.shared.config import load_config
from taskboard.shared.logging import logger

_config = load_config()


class Base(DeclarativeBase):
    pass


def _is_sqlite(url: str) -> bool:
    return url.startswith("sqlite")


def _engine_kwargs(url: str) -> dict[str, object]:
    kwargs: dict[str, object] = {"echo": False, "pool_pre_ping": True}
    if _is_sqlite(url):
        kwargs["connect_args"] = {
            "check_same_thread": False,
            "timeout": int(_config.database.pool_timeout),
        }
    if ":memory:" not in url:
        kwargs.update(
            pool_size=_config.database.pool_size,
            max_overflow=_config.database.max_overflow,
            pool_timeout=_config.database.pool_timeout,
        )
    return kwargs


ENGINE: Engine = create_engine(_config.database.url, **_engine_kwargs(_config.database.url))


@event.listens_for(ENGINE, "connect")
def _set_sqlite_pragmas(dbapi_conn, _):
    if not _is_sqlite(_config.database.url):
        return
    cur = dbapi_conn.cursor()
    try:
        cur.execute("PRAGMA foreign_keys=ON;")
        cur.execute("PRAGMA busy_timeout=30000;")
    finally:
        cur.close()


SessionLocal = scoped_session(
    sessionmaker(bind=ENGINE, autoflush=False, autocommit=False, expire_on_commit=False)
)


@contextmanager
def session_scope(factory: Callable[[], Session] = SessionLocal) -> Iterator[Session]:
    """Open a session, commit on success and roll back on any error."""

    session = factory()
    logger.debug("db.session: opened")
    try:
        yield session
        session.commit()
        logger.debug("db.session: committed")
    except Exception:
        logger.warning("db.session: error, rolling back")
        session.rollback()
        raise
    finally:
        session.close()
        if factory is SessionLocal:
            SessionLocal.remove()


def init_db() -> None:
    from taskboard.infrastructure.db import models  # noqa: F401  registers tables

    Base.metadata.create_all(bind=ENGINE)
    logger.info("Database schema ensured")
