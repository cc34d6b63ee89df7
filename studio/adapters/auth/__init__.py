"""Authentication provider abstractions."""

from .base import AuthError, AuthProvider, SessionUser, UserExistsError
from .local import LocalAuthProvider, normalize_email

__all__ = [
    "AuthError",
    "AuthProvider",
    "SessionUser",
    "UserExistsError",
    "LocalAuthProvider",
    "normalize_email",
]
