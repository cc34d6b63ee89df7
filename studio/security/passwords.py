"""Argon2 password hashing."""

from __future__ import annotations

from typing import Optional

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError

MIN_PASSWORD_LENGTH = 6


class PasswordService:
    """Hash and check passwords; a wrong password or a corrupt hash is just ``False``."""

    def __init__(self, hasher: Optional[PasswordHasher] = None) -> None:
        self._hasher = hasher or PasswordHasher()

    def hash(self, plaintext: str) -> str:
        return self._hasher.hash(plaintext)

    def verify(self, hashed: str, plaintext: str) -> bool:
        if not hashed:
            return False
        try:
            self._hasher.verify(hashed, plaintext)
        except (VerificationError, InvalidHashError):
            return False
        return True

    def needs_rehash(self, hashed: str) -> bool:
        return self._hasher.check_needs_rehash(hashed)
