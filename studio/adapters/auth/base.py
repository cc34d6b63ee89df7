"""The signed-in user as seen by route handlers, and the provider contract behind it."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from fastapi import Request, Response
from sqlalchemy.orm import Session

from studio.db import models


@dataclass
class SessionUser:
    id: str
    email: str
    role: models.Role
    name: Optional[str] = None

    @classmethod
    def from_record(cls, user: models.User) -> "SessionUser":
        return cls(id=str(user.id), email=user.email, role=user.role, name=user.name)

    @property
    def is_admin(self) -> bool:
        return self.role == models.Role.ADMIN


class AuthError(RuntimeError):
    """Credentials were rejected or an account operation could not be completed."""


class UserExistsError(AuthError):
    """The email address already belongs to an account."""


class AuthProvider:
    """Account and session operations used by the auth routes.

    Providers never commit; the calling route owns the transaction.
    """

    def register(self, email: str, password: str, db: Session, *, name: Optional[str] = None) -> SessionUser:
        raise NotImplementedError

    def authenticate(self, email: str, password: str, db: Session) -> SessionUser:
        raise NotImplementedError

    def change_password(self, user_id: str, current_password: str, new_password: str, db: Session) -> None:
        raise NotImplementedError

    def attach_to_response(self, response: Response, user: SessionUser) -> None:
        raise NotImplementedError

    def clear_from_response(self, response: Response) -> None:
        raise NotImplementedError

    def current_user(self, request: Request, db: Session) -> Optional[SessionUser]:
        raise NotImplementedError
