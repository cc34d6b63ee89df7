"""Direct AI generation endpoints (copy and background images)."""

from __future__ import annotations

import logging
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends
from fastapi.concurrency import run_in_threadpool
from pydantic import Field
from sqlalchemy.orm import Session

from ..adapters.auth import SessionUser
from ..adapters.storage import StorageBackend
from ..core.copywriter import Copywriter
from ..core.image_gen import ImageGenerator
from ..dependencies import db_session, get_copywriter, get_image_generator, get_storage
from ..schemas import ApiResponse, CamelModel, TextConstraints, TextVariant, envelope
from ..services.context import asset_context
from ..services.media import store_generated_images
from .assets import get_visible_asset
from .auth import get_current_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/generate", tags=["generate"])


class TextGenerationRequest(CamelModel):
    asset_id: UUID
    count: int = Field(3, ge=1, le=10)
    constraints: Optional[TextConstraints] = None


class ImageGenerationRequest(CamelModel):
    asset_id: UUID
    count: int = Field(1, ge=1, le=5)
    seed_image_url: Optional[str] = Field(None, pattern=r"^(https?://|/)")


class TextGenerationResponse(CamelModel):
    variants: List[TextVariant]


class ImageGenerationResponse(CamelModel):
    images: List[str]


@router.post("/text", response_model=ApiResponse[TextGenerationResponse])
async def generate_text(
    payload: TextGenerationRequest,
    db: Session = Depends(db_session),
    current_user: SessionUser = Depends(get_current_user),
    copywriter: Copywriter = Depends(get_copywriter),
) -> ApiResponse:
    asset = get_visible_asset(db, payload.asset_id, current_user)
    variants = await run_in_threadpool(
        copywriter.generate,
        asset_context(asset),
        payload.count,
        payload.constraints,
    )
    return envelope(TextGenerationResponse(variants=variants))


@router.post("/image", response_model=ApiResponse[ImageGenerationResponse])
async def generate_image(
    payload: ImageGenerationRequest,
    db: Session = Depends(db_session),
    current_user: SessionUser = Depends(get_current_user),
    image_generator: ImageGenerator = Depends(get_image_generator),
    storage: StorageBackend = Depends(get_storage),
) -> ApiResponse:
    asset = get_visible_asset(db, payload.asset_id, current_user)
    results = await run_in_threadpool(
        image_generator.generate_backgrounds,
        asset_context(asset),
        payload.count,
        payload.seed_image_url,
    )
    urls = await run_in_threadpool(store_generated_images, storage, str(asset.id), results)
    return envelope(ImageGenerationResponse(images=urls))
