"""Database connection and session management for weathertodo.

The application owns exactly one engine and one session for its lifetime.
Both are created in `weathertodo.cli.main` and handed to the repository
explicitly; nothing in this module holds a global connection.
"""

import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)

DEFAULT_DATABASE_URL = "sqlite:///./todoapp.db"

# Base class for declarative models
Base = declarative_base()


def _is_sqlite_url(database_url: str) -> bool:
    return "sqlite" in (database_url or "")


def _is_memory_url(database_url: str) -> bool:
    return _is_sqlite_url(database_url) and (
        database_url.endswith(":memory:") or database_url.rstrip("/") == "sqlite:"
    )


def get_engine_kwargs(database_url: str, echo: bool = False) -> dict:
    """Return deterministic create_engine kwargs for a DB URL.

    This is separated to allow deterministic unit testing without connecting.
    """
    engine_kwargs: dict = {
        "echo": echo,
        "pool_pre_ping": True,
    }

    if _is_sqlite_url(database_url):
        engine_kwargs["connect_args"] = {"check_same_thread": False}
        if _is_memory_url(database_url):
            # One shared connection, otherwise every checkout sees an empty database.
            engine_kwargs["poolclass"] = StaticPool
    return engine_kwargs


def build_engine(database_url: str = DEFAULT_DATABASE_URL, echo: bool = False) -> Engine:
    return create_engine(database_url, **get_engine_kwargs(database_url, echo=echo))


def create_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@contextmanager
def session_scope(session_factory: sessionmaker) -> Iterator[Session]:
    """Open a session and close it when the block exits.

    Commits are issued by the repository per write; this scope only owns the
    session's lifetime.
    """
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


def init_db(engine: Engine) -> None:
    """Create the tasks table if it does not exist yet."""
    # Import registers TaskDB on Base.metadata.
    from weathertodo.database import models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    logger.debug(f"Schema ready on {engine.url}")
