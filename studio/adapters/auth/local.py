"""Local email/password authentication provider."""

from __future__ import annotations

import logging
from typing import Optional
from uuid import UUID

from fastapi import Request, Response
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from studio.core.config import (
    SESSION_COOKIE_MAX_AGE,
    SESSION_COOKIE_NAME,
    SESSION_COOKIE_SECURE,
)
from studio.db import models
from studio.security import PasswordService, SessionService

from .base import AuthError, AuthProvider, SessionUser, UserExistsError

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return email.strip().lower()


class LocalAuthProvider(AuthProvider):
    """Cookie-based sessions backed by the users table."""

    def __init__(
        self,
        passwords: Optional[PasswordService] = None,
        sessions: Optional[SessionService] = None,
    ) -> None:
        self._passwords = passwords or PasswordService()
        self._sessions = sessions or SessionService()

    def register(self, email: str, password: str, db: Session, *, name: Optional[str] = None) -> SessionUser:
        normalized = normalize_email(email)
        if not normalized:
            raise AuthError("Email is required")

        existing = db.execute(select(models.User.id).where(models.User.email == normalized)).first()
        if existing:
            raise UserExistsError("User already exists")

        # The first account bootstraps the deployment and becomes its administrator
        user_count = db.execute(select(func.count(models.User.id))).scalar_one()
        role = models.Role.ADMIN if user_count == 0 else models.Role.USER

        user = models.User(
            email=normalized,
            name=(name or "").strip() or None,
            password_hash=self._passwords.hash(password),
            role=role,
        )
        db.add(user)
        db.flush()
        logger.info("Registered user %s with role %s", user.id, role.value)
        return SessionUser.from_record(user)

    def authenticate(self, email: str, password: str, db: Session) -> SessionUser:
        normalized = normalize_email(email)
        user = db.execute(select(models.User).where(models.User.email == normalized)).scalar_one_or_none()
        if not user or not self._passwords.verify(user.password_hash, password):
            raise AuthError("Invalid credentials")
        if self._passwords.needs_rehash(user.password_hash):
            user.password_hash = self._passwords.hash(password)
        return SessionUser.from_record(user)

    def change_password(self, user_id: str, current_password: str, new_password: str, db: Session) -> None:
        user = db.get(models.User, UUID(user_id))
        if not user or not self._passwords.verify(user.password_hash, current_password):
            raise AuthError("Current password is incorrect")
        user.password_hash = self._passwords.hash(new_password)
        db.flush()

    def attach_to_response(self, response: Response, user: SessionUser) -> None:
        token = self._sessions.create(user.id)
        response.set_cookie(
            SESSION_COOKIE_NAME,
            token,
            httponly=True,
            max_age=SESSION_COOKIE_MAX_AGE,
            secure=SESSION_COOKIE_SECURE,
            samesite="lax",
        )

    def clear_from_response(self, response: Response) -> None:
        response.delete_cookie(SESSION_COOKIE_NAME)

    def current_user(self, request: Request, db: Session) -> Optional[SessionUser]:
        token = request.cookies.get(SESSION_COOKIE_NAME)
        if not token:
            return None
        data = self._sessions.parse(token)
        if not data:
            return None
        user_id = data.get("user_id")
        if not user_id:
            return None
        try:
            uuid = UUID(str(user_id))
        except ValueError:
            return None
        user = db.get(models.User, uuid)
        if not user:
            return None
        return SessionUser.from_record(user)
