"""Loading reference images and persisting generated ones."""

from __future__ import annotations

import base64
import binascii
import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional

import httpx

from ..adapters.storage import StorageBackend, StorageError
from ..core.config import MAX_UPLOAD_BYTES
from ..core.genai_client import GenerationError
from ..core.image_gen import ImageResult
from ..storage.objects import (
    ObjectPathError,
    generated_image_key,
    generated_prefix,
    guess_content_type,
    key_from_reference,
    public_url,
    sniff_content_type,
)

logger = logging.getLogger(__name__)

_FETCH_TIMEOUT = 30.0


@dataclass
class LoadedImage:
    data: bytes
    mime_type: str


def _decode_data_url(reference: str) -> LoadedImage:
    header, sep, payload = reference.partition(",")
    if not sep or ";base64" not in header:
        raise GenerationError("Only base64 data URLs are supported")
    mime_type = header[len("data:"):].split(";")[0] or "image/png"
    try:
        data = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise GenerationError(f"Invalid data URL: {exc}") from exc
    return LoadedImage(data=data, mime_type=mime_type)


def _too_large() -> GenerationError:
    return GenerationError(f"Master asset exceeds {MAX_UPLOAD_BYTES} bytes")


def _fetch_remote(url: str, client: Optional[httpx.Client] = None) -> LoadedImage:
    owned = client is None
    client = client or httpx.Client(timeout=_FETCH_TIMEOUT, follow_redirects=True)
    try:
        with client.stream("GET", url) as response:
            response.raise_for_status()
            declared = response.headers.get("content-length", "")
            if declared.isdigit() and int(declared) > MAX_UPLOAD_BYTES:
                raise _too_large()
            data = bytearray()
            for chunk in response.iter_bytes():
                data.extend(chunk)
                if len(data) > MAX_UPLOAD_BYTES:
                    raise _too_large()
            content_type = response.headers.get("content-type", "").split(";")[0].strip()
    except httpx.HTTPError as exc:
        raise GenerationError(f"Could not fetch master asset: {exc}") from exc
    finally:
        if owned:
            client.close()
    mime_type = content_type or sniff_content_type(bytes(data)) or "image/png"
    return LoadedImage(data=bytes(data), mime_type=mime_type)


def load_image(reference: str, storage: StorageBackend) -> LoadedImage:
    """Resolve an object path, ``http(s)`` URL or ``data:`` URL to image bytes."""

    if not reference:
        raise GenerationError("No image reference provided")
    if reference.startswith("data:"):
        return _decode_data_url(reference)
    if reference.startswith(("http://", "https://")):
        return _fetch_remote(reference)

    try:
        key = key_from_reference(reference)
        data = storage.get_bytes(key)
    except (ObjectPathError, StorageError) as exc:
        raise GenerationError(f"Could not load master asset: {exc}") from exc
    return LoadedImage(data=data, mime_type=guess_content_type(key, data))


def store_generated_images(storage: StorageBackend, asset_id: str, images: List[ImageResult]) -> List[str]:
    """Write generated images under ``generated/<asset_id>/`` and return their public URLs."""

    urls: List[str] = []
    for image in images:
        key = generated_image_key(asset_id, image.mime_type)
        storage.put_bytes(key, image.data, content_type=image.mime_type)
        urls.append(public_url(key))
    logger.info("Stored %d generated images for asset %s", len(urls), asset_id)
    return urls


def purge_generated_images(storage: StorageBackend, asset_ids: Iterable[str]) -> int:
    """Remove the generated images of assets that are about to be deleted."""

    removed = 0
    for asset_id in asset_ids:
        removed += storage.delete_prefix(generated_prefix(asset_id))
    if removed:
        logger.info("Removed %d generated images", removed)
    return removed
