"""Database helpers and SQLAlchemy session management."""

from .session import SessionLocal, get_session, Base, engine

__all__ = [
    "SessionLocal",
    "get_session",
    "Base",
    "engine",
]
