"""Security utilities for authentication."""

from .passwords import MIN_PASSWORD_LENGTH, PasswordService
from .sessions import SessionService
from .uploads import UploadTokenService

__all__ = ["MIN_PASSWORD_LENGTH", "PasswordService", "SessionService", "UploadTokenService"]
