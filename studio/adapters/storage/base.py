"""Object storage interface shared by the filesystem and Supabase backends."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional


@dataclass
class StorageObject:
    key: str
    size: Optional[int] = None
    content_type: Optional[str] = None


class StorageError(RuntimeError):
    """Raised when the storage backend rejects or fails an operation."""


class ObjectNotFoundError(StorageError):
    """Raised when a key has no stored object."""


class StorageBackend:
    """A flat key -> bytes store.

    Keys are checked with ``studio.storage.objects.validate_key`` before they
    reach a backend; backends may still refuse keys they cannot represent.
    """

    name = "base"

    def put_bytes(self, key: str, data: bytes, content_type: Optional[str] = None) -> StorageObject:
        raise NotImplementedError

    def get_bytes(self, key: str) -> bytes:
        raise NotImplementedError

    def delete(self, key: str) -> None:
        raise NotImplementedError

    def list(self, prefix: str) -> List[StorageObject]:
        raise NotImplementedError

    def delete_prefix(self, prefix: str) -> int:
        """Delete every object under ``prefix`` and return how many were removed."""

        removed = 0
        for stored in self.list(prefix):
            self.delete(stored.key)
            removed += 1
        return removed

    def generate_signed_url(self, key: str, expires_in_seconds: int = 3600) -> Optional[str]:
        """Time-limited download URL, or ``None`` when the API serves the bytes itself."""

        return None

    def generate_upload_url(self, key: str) -> Optional[str]:
        """URL the browser can PUT to directly, or ``None`` to use the API's own upload URL."""

        return None
