"""SQLAlchemy engine, session factory and the transactional session scope."""

from __future__ import annotations

import os
from contextlib import contextmanager
from typing import Any, Dict, Iterator

from sqlalchemy import create_engine, event
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from studio.core.config import DATABASE_DSN

if not DATABASE_DSN:
    raise RuntimeError("DATABASE_DSN must be set to initialise the database layer")

_IS_SQLITE = DATABASE_DSN.startswith("sqlite")


class Base(DeclarativeBase):
    pass


def _engine_options() -> Dict[str, Any]:
    if _IS_SQLITE:
        # Handlers run in the threadpool, so a connection may change threads
        return {"connect_args": {"check_same_thread": False}}
    return {
        "pool_pre_ping": True,
        "pool_size": int(os.getenv("DB_POOL_SIZE", "5")),
        "max_overflow": int(os.getenv("DB_MAX_OVERFLOW", "5")),
        "pool_timeout": int(os.getenv("DB_POOL_TIMEOUT", "30")),
        "pool_recycle": int(os.getenv("DB_POOL_RECYCLE", "300")),
    }


engine = create_engine(DATABASE_DSN, **_engine_options())

if _IS_SQLITE:

    @event.listens_for(engine, "connect")
    def _enable_foreign_keys(dbapi_connection, _connection_record) -> None:
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


SessionLocal = sessionmaker(bind=engine, class_=Session, expire_on_commit=False)


@contextmanager
def get_session() -> Iterator[Session]:
    """Session that commits when the block succeeds and rolls back when it raises."""

    session = SessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
