# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, scoped_session, sessionmaker
from sqlalchemy.pool import StaticPool

from credential_service.shared.config.settings import DatabaseConfig
from credential_service.shared.logging import logger


class Base(DeclarativeBase):
    pass


def build_engine(database: DatabaseConfig) -> Engine:
    url = database.url
    kwargs: dict[str, Any] = {"echo": False, "pool_pre_ping": True}

    if url.startswith("sqlite"):
        kwargs["connect_args"] = {
            "check_same_thread": False,
            "timeout": int(database.pool_timeout),
        }
        if ":memory:" in url or url.rstrip("/") == "sqlite:":
            kwargs["poolclass"] = StaticPool
        else:
            kwargs.update(
                pool_size=database.pool_size,
                max_overflow=database.max_overflow,
                pool_timeout=database.pool_timeout,
            )
    else:
        kwargs.update(
            pool_size=database.pool_size,
            max_overflow=database.max_overflow,
            pool_timeout=database.pool_timeout,
        )

    engine = create_engine(url, **kwargs)

    if url.startswith("sqlite"):

        @event.listens_for(engine, "connect")
        def _set_sqlite_pragmas(dbapi_conn, _):
            cur = dbapi_conn.cursor()
            try:
                cur.execute("PRAGMA foreign_keys=ON;")
                cur.execute("PRAGMA busy_timeout=30000;")
            finally:
                cur.close()

    return engine


def build_session_factory(engine: Engine) -> scoped_session[Session]:
    return scoped_session(
        sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False)
    )


@contextmanager
def session_scope(session_factory: Callable[[], Session]) -> Iterator[Session]:
    session = session_factory()
    logger.debug("db.session: opened scoped session")
    try:
        yield session
        session.commit()
        logger.debug("db.session: committed scoped session")
    except Exception:
        logger.debug("db.session: error, rolling back")
        session.rollback()
        raise
    finally:
        session.close()
        if isinstance(session_factory, scoped_session):
            session_factory.remove()
        logger.debug("db.session: closed scoped session")


def init_db(engine: Engine) -> None:
    from . import models  # noqa: F401  registers tables on Base.metadata

    Base.metadata.create_all(bind=engine)
    logger.info("Database schema ensured")
