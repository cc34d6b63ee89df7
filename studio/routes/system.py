"""System and diagnostics endpoints."""

from __future__ import annotations

import logging
from typing import Dict

from fastapi import APIRouter

from ..adapters.storage import StorageError
from ..core.config import (
    ALLOW_REGISTRATION,
    ANTHROPIC_API_KEY,
    GEMINI_API_KEY,
    STORAGE_PROVIDER,
    SUPABASE_BUCKET,
    TEXT_PROVIDER,
)
from ..dependencies import get_storage
from ..schemas import ApiResponse, CamelModel, envelope

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/system", tags=["system"])


class SystemConfig(CamelModel):
    registration_enabled: bool
    text_provider: str
    storage_provider: str


@router.get("/providers", response_model=ApiResponse[Dict[str, Dict[str, object]]])
async def provider_status() -> ApiResponse:
    """Report active storage/AI providers and basic health info."""

    info: Dict[str, Dict[str, object]] = {
        "storage": {"provider": STORAGE_PROVIDER},
        "text": {"provider": TEXT_PROVIDER},
        "image": {"provider": "gemini"},
    }

    try:
        storage = get_storage()
        if STORAGE_PROVIDER == "supabase":
            storage.list("uploads")  # lightweight sanity check
            info["storage"]["bucket"] = SUPABASE_BUCKET
        info["storage"]["status"] = "ok"
    except (StorageError, RuntimeError) as exc:
        logger.warning("Storage provider check failed: %s", exc)
        info["storage"]["status"] = "error"
        info["storage"]["detail"] = str(exc)

    text_key = ANTHROPIC_API_KEY if TEXT_PROVIDER == "anthropic" else GEMINI_API_KEY
    info["text"]["status"] = "ok" if text_key else "unconfigured"
    info["image"]["status"] = "ok" if GEMINI_API_KEY else "unconfigured"
    return envelope(info)


@router.get("/config", response_model=ApiResponse[SystemConfig])
async def get_system_config() -> ApiResponse:
    """Return system configuration flags for the frontend."""
    return envelope(
        SystemConfig(
            registration_enabled=ALLOW_REGISTRATION,
            text_provider=TEXT_PROVIDER,
            storage_provider=STORAGE_PROVIDER,
        )
    )
