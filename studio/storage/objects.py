"""Object key helpers.

Everything stored through a ``StorageBackend`` lives under a flat key space::

    uploads/<uuid>[.ext]                 files uploaded by users (master assets, seeds)
    generated/<asset_id>/<uuid>.<ext>    images produced by the image model

Keys are exposed to the browser in two forms: the *object path*
``/objects/<key>`` returned from upload endpoints and stored on records, and
the *public URL* ``/api/objects/<key>`` that the API serves. Either form (or a
bare key) is accepted wherever a reference is read back.
"""

from __future__ import annotations

import mimetypes
from pathlib import PurePosixPath
from typing import Optional
from uuid import uuid4

OBJECT_PATH_PREFIX = "/objects/"
PUBLIC_URL_PREFIX = "/api/objects/"

_EXTENSIONS = {
    "image/png": ".png",
    "image/jpeg": ".jpg",
    "image/webp": ".webp",
    "image/gif": ".gif",
    "image/svg+xml": ".svg",
}


class ObjectPathError(ValueError):
    """Raised when an object key is unsafe or malformed."""


def validate_key(key: str) -> str:
    if not key or not key.strip():
        raise ObjectPathError("Object key is empty")
    if key.startswith("/"):
        raise ObjectPathError("Object key must not start with '/'")
    if "\\" in key:
        raise ObjectPathError("Object key must not contain backslashes")
    for segment in key.split("/"):
        if segment in ("", ".", ".."):
            raise ObjectPathError(f"Object key has an invalid segment: {key!r}")
    return key


def object_path(key: str) -> str:
    return f"{OBJECT_PATH_PREFIX}{validate_key(key)}"


def public_url(key: str) -> str:
    return f"{PUBLIC_URL_PREFIX}{validate_key(key)}"


def key_from_reference(reference: str) -> Optional[str]:
    """Return the object key for a stored reference, or ``None`` for external URLs."""

    value = (reference or "").strip()
    if not value or value.startswith(("http://", "https://", "data:")):
        return None
    for prefix in (PUBLIC_URL_PREFIX, OBJECT_PATH_PREFIX):
        if value.startswith(prefix):
            return validate_key(value[len(prefix):])
    return validate_key(value)


_ALLOWED_SUFFIXES = frozenset(_EXTENSIONS.values()) | {".jpeg"}

# Types served inline without a sandbox (SVG may carry script)
INLINE_SAFE_TYPES = frozenset({"image/png", "image/jpeg", "image/webp", "image/gif"})


def extension_for(content_type: Optional[str], filename: Optional[str] = None) -> str:
    """Pick a stored extension from the image allow-list; anything else is stored bare."""

    if filename:
        suffix = PurePosixPath(filename).suffix.lower()
        if suffix in _ALLOWED_SUFFIXES:
            return suffix
    if content_type:
        return _EXTENSIONS.get(content_type.split(";")[0].strip().lower(), "")
    return ""


def new_upload_key(filename: Optional[str] = None, content_type: Optional[str] = None) -> str:
    return f"uploads/{uuid4().hex}{extension_for(content_type, filename)}"


def generated_prefix(asset_id: str) -> str:
    return f"generated/{asset_id}/"


def generated_image_key(asset_id: str, content_type: str) -> str:
    return f"{generated_prefix(asset_id)}{uuid4().hex}{extension_for(content_type) or '.png'}"


def sniff_content_type(data: bytes) -> Optional[str]:
    head = data[:512]
    if head.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if head.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if head.startswith((b"GIF87a", b"GIF89a")):
        return "image/gif"
    if head.startswith(b"RIFF") and head[8:12] == b"WEBP":
        return "image/webp"
    stripped = head.lstrip()
    if stripped.startswith(b"<svg") or (stripped.startswith(b"<?xml") and b"<svg" in head):
        return "image/svg+xml"
    return None


def guess_content_type(key: str, data: bytes = b"") -> str:
    guessed, _ = mimetypes.guess_type(key)
    return guessed or sniff_content_type(data) or "application/octet-stream"
