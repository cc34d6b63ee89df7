"""Storage backend abstractions."""

from .base import ObjectNotFoundError, StorageBackend, StorageError, StorageObject
from .local import LocalStorageBackend
from .supabase import SupabaseStorageBackend

__all__ = [
    "ObjectNotFoundError",
    "StorageBackend",
    "StorageError",
    "StorageObject",
    "LocalStorageBackend",
    "SupabaseStorageBackend",
]
