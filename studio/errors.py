"""API error type and the JSON envelope used for failed requests."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .adapters.storage import StorageError
from .core.genai_client import GenerationError

logger = logging.getLogger(__name__)


_DEFAULT_CODES: Dict[int, str] = {
    status.HTTP_400_BAD_REQUEST: "INVALID_REQUEST",
    status.HTTP_401_UNAUTHORIZED: "UNAUTHORIZED",
    status.HTTP_403_FORBIDDEN: "FORBIDDEN",
    status.HTTP_404_NOT_FOUND: "NOT_FOUND",
    status.HTTP_405_METHOD_NOT_ALLOWED: "METHOD_NOT_ALLOWED",
    status.HTTP_409_CONFLICT: "CONFLICT",
    413: "PAYLOAD_TOO_LARGE",
    422: "VALIDATION_ERROR",
    status.HTTP_502_BAD_GATEWAY: "BAD_GATEWAY",
    status.HTTP_503_SERVICE_UNAVAILABLE: "SERVICE_UNAVAILABLE",
}


class ApiError(HTTPException):
    """HTTP error carrying a machine-readable code for the response envelope."""

    def __init__(
        self,
        status_code: int,
        code: str,
        message: str,
        *,
        details: Any = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> None:
        super().__init__(status_code=status_code, detail=message, headers=headers)
        self.code = code
        self.message = message
        self.details = details


def not_found(message: str) -> ApiError:
    return ApiError(status.HTTP_404_NOT_FOUND, "NOT_FOUND", message)


def error_body(code: str, message: str, details: Any = None) -> Dict[str, Any]:
    error: Dict[str, Any] = {"code": code, "message": message}
    if details is not None:
        error["details"] = jsonable_encoder(details)
    return {"ok": False, "error": error}


def _http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    code = getattr(exc, "code", None) or _DEFAULT_CODES.get(exc.status_code, "ERROR")
    message = getattr(exc, "message", None) or str(exc.detail)
    return JSONResponse(
        error_body(code, message, getattr(exc, "details", None)),
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
    )


def _validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        error_body("VALIDATION_ERROR", "Invalid input", exc.errors()),
        status_code=status.HTTP_400_BAD_REQUEST,
    )


def _generation_error_handler(request: Request, exc: GenerationError) -> JSONResponse:
    logger.warning("Generation failed for %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(
        error_body("GENERATION_FAILED", str(exc)),
        status_code=status.HTTP_502_BAD_GATEWAY,
    )


def _storage_error_handler(request: Request, exc: StorageError) -> JSONResponse:
    logger.error("Storage failure for %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(
        error_body("STORAGE_ERROR", str(exc)),
        status_code=status.HTTP_502_BAD_GATEWAY,
    )


def _unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("API error on %s %s", request.method, request.url.path)
    return JSONResponse(
        error_body("INTERNAL_ERROR", "Internal server error"),
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(GenerationError, _generation_error_handler)
    app.add_exception_handler(StorageError, _storage_error_handler)
    app.add_exception_handler(Exception, _unhandled_exception_handler)
