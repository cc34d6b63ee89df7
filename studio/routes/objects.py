"""Object storage endpoints: direct uploads and public object serving."""

from __future__ import annotations

import logging
from typing import Dict, Optional

from fastapi import APIRouter, Depends, File, Request, UploadFile, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import RedirectResponse, Response
from pydantic import Field

from ..adapters.auth import SessionUser
from ..adapters.storage import ObjectNotFoundError, StorageBackend
from ..core.config import MAX_UPLOAD_BYTES, OBJECT_URL_EXPIRY_SECONDS
from ..dependencies import get_storage, get_upload_tokens
from ..errors import ApiError, not_found
from ..schemas import ApiResponse, CamelModel, envelope
from ..security import UploadTokenService
from ..storage.objects import (
    INLINE_SAFE_TYPES,
    ObjectPathError,
    guess_content_type,
    new_upload_key,
    object_path,
    public_url,
    validate_key,
)
from .auth import get_current_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/objects", tags=["objects"])


class UploadUrlRequest(CamelModel):
    filename: Optional[str] = None
    content_type: Optional[str] = None


class UploadUrlResponse(CamelModel):
    upload_url: str = Field(..., alias="uploadURL")
    object_path: str


class StoredObjectResponse(CamelModel):
    object_path: str
    url: str
    size: int
    content_type: Optional[str] = None


def _too_large() -> ApiError:
    return ApiError(
        status.HTTP_400_BAD_REQUEST,
        "INVALID_REQUEST",
        f"Upload exceeds the {MAX_UPLOAD_BYTES} byte limit",
    )


def _check_size(data: bytes) -> None:
    if not data:
        raise ApiError(status.HTTP_400_BAD_REQUEST, "INVALID_REQUEST", "Upload body is empty")
    if len(data) > MAX_UPLOAD_BYTES:
        raise _too_large()


async def _read_body(request: Request) -> bytes:
    """Read the request body, stopping as soon as it passes the upload limit."""

    declared = request.headers.get("content-length", "")
    if declared.isdigit() and int(declared) > MAX_UPLOAD_BYTES:
        raise _too_large()
    body = bytearray()
    async for chunk in request.stream():
        body.extend(chunk)
        if len(body) > MAX_UPLOAD_BYTES:
            raise _too_large()
    _check_size(bytes(body))
    return bytes(body)


def _serving_headers(media_type: str) -> Dict[str, str]:
    headers = {"Cache-Control": "private, max-age=3600", "X-Content-Type-Options": "nosniff"}
    if media_type not in INLINE_SAFE_TYPES:
        headers["Content-Security-Policy"] = "sandbox"
        if not media_type.startswith("image/"):
            headers["Content-Disposition"] = "attachment"
    return headers


@router.post("/upload", response_model=ApiResponse[UploadUrlResponse])
async def request_upload_url(
    request: Request,
    payload: Optional[UploadUrlRequest] = None,
    current_user: SessionUser = Depends(get_current_user),
    storage: StorageBackend = Depends(get_storage),
    tokens: UploadTokenService = Depends(get_upload_tokens),
) -> ApiResponse:
    payload = payload or UploadUrlRequest()
    key = new_upload_key(payload.filename, payload.content_type)
    upload_url = await run_in_threadpool(storage.generate_upload_url, key)
    if not upload_url:
        token = tokens.create(key, current_user.id)
        upload_url = str(request.url_for("receive_upload", token=token))
    return envelope(UploadUrlResponse(upload_url=upload_url, object_path=object_path(key)))


@router.put("/upload/{token}", response_model=ApiResponse[StoredObjectResponse], name="receive_upload")
async def receive_upload(
    token: str,
    request: Request,
    storage: StorageBackend = Depends(get_storage),
    tokens: UploadTokenService = Depends(get_upload_tokens),
) -> ApiResponse:
    data = tokens.parse(token)
    if not data:
        raise ApiError(status.HTTP_403_FORBIDDEN, "FORBIDDEN", "Upload URL is invalid or has expired")
    key = validate_key(data["key"])

    body = await _read_body(request)
    content_type = request.headers.get("content-type") or guess_content_type(key, body)
    await run_in_threadpool(storage.put_bytes, key, body, content_type)
    logger.info("Stored %d-byte upload at %s for user %s", len(body), key, data.get("user_id"))
    return envelope(
        StoredObjectResponse(object_path=object_path(key), url=public_url(key), size=len(body), content_type=content_type)
    )


@router.post("", response_model=ApiResponse[StoredObjectResponse], status_code=status.HTTP_201_CREATED)
async def upload_object(
    file: UploadFile = File(...),
    current_user: SessionUser = Depends(get_current_user),
    storage: StorageBackend = Depends(get_storage),
) -> ApiResponse:
    contents = await file.read(MAX_UPLOAD_BYTES + 1)
    _check_size(contents)

    key = new_upload_key(file.filename, file.content_type)
    content_type = file.content_type or guess_content_type(key, contents)
    await run_in_threadpool(storage.put_bytes, key, contents, content_type)
    logger.info("User %s uploaded %s (%d bytes)", current_user.id, key, len(contents))
    return envelope(
        StoredObjectResponse(
            object_path=object_path(key),
            url=public_url(key),
            size=len(contents),
            content_type=content_type,
        )
    )


@router.get("/{key:path}")
async def serve_object(key: str, storage: StorageBackend = Depends(get_storage)) -> Response:
    try:
        validate_key(key)
    except ObjectPathError as exc:
        raise ApiError(status.HTTP_400_BAD_REQUEST, "INVALID_REQUEST", str(exc))

    try:
        signed_url = await run_in_threadpool(storage.generate_signed_url, key, OBJECT_URL_EXPIRY_SECONDS)
        if signed_url:
            return RedirectResponse(signed_url, status_code=status.HTTP_302_FOUND)
        data = await run_in_threadpool(storage.get_bytes, key)
    except ObjectNotFoundError:
        raise not_found("File not found")

    media_type = guess_content_type(key, data)
    return Response(content=data, media_type=media_type, headers=_serving_headers(media_type))
