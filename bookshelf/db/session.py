"""Engine and transactional session scope for the SQL key-value medium."""
from __future__ import annotations

from contextlib import contextmanager
from functools import lru_cache
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import declarative_base, sessionmaker, Session

from bookshelf.core.config import get_settings

Base = declarative_base()


@lru_cache
def get_engine() -> Engine:
    settings = get_settings()
    url = (settings.database_url or "").strip()
    if not url:
        raise RuntimeError("DATABASE_URL must be configured to use the SQL storage backend.")
    connect_args = {}
    if make_url(url).get_backend_name() == "sqlite":
        # collections may be created in one thread and used from another (scripts, test runners)
        connect_args["check_same_thread"] = False
    return create_engine(url, pool_pre_ping=True, echo=settings.sql_echo, connect_args=connect_args)


@lru_cache
def _get_sessionmaker() -> sessionmaker:
    return sessionmaker(bind=get_engine(), autoflush=False, expire_on_commit=False)


@contextmanager
def get_session() -> Iterator[Session]:
    """Session scope: commits when the block exits cleanly, rolls back otherwise."""
    session: Session = _get_sessionmaker()()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
