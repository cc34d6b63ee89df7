"""Helpers for naming and resolving stored objects."""

from .objects import (
    ObjectPathError,
    generated_image_key,
    generated_prefix,
    guess_content_type,
    key_from_reference,
    new_upload_key,
    object_path,
    public_url,
    validate_key,
)

__all__ = [
    "ObjectPathError",
    "generated_image_key",
    "generated_prefix",
    "guess_content_type",
    "key_from_reference",
    "new_upload_key",
    "object_path",
    "public_url",
    "validate_key",
]
