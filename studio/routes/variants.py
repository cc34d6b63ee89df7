"""Variant CRUD, re-rendering and batch generation endpoints."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from fastapi.concurrency import run_in_threadpool
from pydantic import Field
from sqlalchemy.orm import Session, joinedload

from ..adapters.auth import SessionUser
from ..adapters.storage import StorageBackend
from ..core.copywriter import Copywriter
from ..core.image_gen import ImageGenerator
from ..db import models
from ..dependencies import db_session, get_copywriter, get_image_generator, get_storage
from ..errors import not_found
from ..rbac import scope_query, visible_or_none
from ..schemas import (
    ApiResponse,
    CamelModel,
    MessageResponse,
    TextConstraints,
    VariantBindings,
    envelope,
)
from ..services.variants import BatchOptions, generate_variant_batch, render_into
from .assets import AssetResponse, get_visible_asset
from .auth import get_current_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/variants", tags=["variants"])


class VariantCreateRequest(CamelModel):
    asset_id: UUID
    source: models.VariantSource = models.VariantSource.USER
    bindings: VariantBindings = Field(default_factory=VariantBindings)
    render_svg: Optional[str] = None
    render_png_url: Optional[str] = None
    status: models.VariantStatus = models.VariantStatus.DRAFT


class VariantUpdateRequest(CamelModel):
    bindings: Optional[VariantBindings] = None
    render_svg: Optional[str] = None
    render_png_url: Optional[str] = None
    status: Optional[models.VariantStatus] = None
    error_message: Optional[str] = None


class GenerateVariantsRequest(CamelModel):
    asset_id: UUID
    generate_text: bool = True
    generate_images: bool = True
    text_count: int = Field(3, ge=1, le=10)
    image_count: int = Field(1, ge=1, le=5)
    constraints: Optional[TextConstraints] = None


class VariantResponse(CamelModel):
    id: UUID
    asset_id: UUID
    source: models.VariantSource
    bindings: VariantBindings = Field(default_factory=VariantBindings)
    render_svg: str
    render_png_url: Optional[str] = None
    status: models.VariantStatus
    error_message: Optional[str] = None
    created_by_user_id: UUID
    created_at: datetime
    updated_at: datetime
    asset: AssetResponse


class BatchResponse(CamelModel):
    variants: List[VariantResponse]
    errors: List[str]


def _variant_query(db: Session):
    return db.query(models.Variant).options(
        joinedload(models.Variant.asset)
        .joinedload(models.Asset.project)
        .joinedload(models.Project.client)
    )


def get_visible_variant(db: Session, variant_id: UUID, user: SessionUser) -> models.Variant:
    variant = _variant_query(db).filter(models.Variant.id == variant_id).one_or_none()
    variant = visible_or_none(variant, user)
    if variant is None:
        raise not_found("Variant not found")
    return variant


@router.get("", response_model=ApiResponse[List[VariantResponse]])
async def list_variants(
    asset_id: Optional[UUID] = Query(None, alias="assetId"),
    db: Session = Depends(db_session),
    current_user: SessionUser = Depends(get_current_user),
) -> ApiResponse:
    query = scope_query(_variant_query(db), models.Variant, current_user)
    if asset_id is not None:
        query = query.filter(models.Variant.asset_id == asset_id)
    variants = query.order_by(models.Variant.created_at.desc()).all()
    return envelope([VariantResponse.model_validate(variant) for variant in variants])


@router.post("", response_model=ApiResponse[VariantResponse], status_code=status.HTTP_201_CREATED)
async def create_variant(
    payload: VariantCreateRequest,
    db: Session = Depends(db_session),
    current_user: SessionUser = Depends(get_current_user),
) -> ApiResponse:
    asset = get_visible_asset(db, payload.asset_id, current_user)
    variant = models.Variant(
        asset=asset,
        source=payload.source,
        bindings=payload.bindings.model_dump(by_alias=True),
        render_svg=payload.render_svg or "",
        render_png_url=payload.render_png_url,
        status=payload.status,
        created_by_user_id=UUID(current_user.id),
    )
    if payload.render_svg is None:
        render_into(variant, asset)

    db.add(variant)
    db.commit()
    logger.info("Variant %s created by %s (status=%s)", variant.id, current_user.id, variant.status.value)
    return envelope(VariantResponse.model_validate(get_visible_variant(db, variant.id, current_user)))


@router.post("/generate", response_model=ApiResponse[BatchResponse])
async def generate_variants(
    payload: GenerateVariantsRequest,
    db: Session = Depends(db_session),
    current_user: SessionUser = Depends(get_current_user),
    storage: StorageBackend = Depends(get_storage),
    copywriter: Copywriter = Depends(get_copywriter),
    image_generator: ImageGenerator = Depends(get_image_generator),
) -> ApiResponse:
    asset = get_visible_asset(db, payload.asset_id, current_user)
    options = BatchOptions(
        generate_text=payload.generate_text,
        generate_images=payload.generate_images,
        text_count=payload.text_count,
        image_count=payload.image_count,
        constraints=payload.constraints,
    )
    result = await run_in_threadpool(
        generate_variant_batch,
        db,
        asset,
        current_user.id,
        copywriter=copywriter,
        image_generator=image_generator,
        storage=storage,
        options=options,
    )
    return envelope(
        BatchResponse(
            variants=[VariantResponse.model_validate(variant) for variant in result.variants],
            errors=result.errors,
        )
    )


@router.get("/{variant_id}", response_model=ApiResponse[VariantResponse])
async def get_variant(
    variant_id: UUID,
    db: Session = Depends(db_session),
    current_user: SessionUser = Depends(get_current_user),
) -> ApiResponse:
    variant = get_visible_variant(db, variant_id, current_user)
    return envelope(VariantResponse.model_validate(variant))


@router.patch("/{variant_id}", response_model=ApiResponse[VariantResponse])
async def update_variant(
    variant_id: UUID,
    payload: VariantUpdateRequest,
    db: Session = Depends(db_session),
    current_user: SessionUser = Depends(get_current_user),
) -> ApiResponse:
    variant = get_visible_variant(db, variant_id, current_user)

    if payload.status is not None:
        variant.status = payload.status
    if "error_message" in payload.model_fields_set:
        variant.error_message = payload.error_message
    if "render_png_url" in payload.model_fields_set:
        variant.render_png_url = payload.render_png_url
    if payload.bindings is not None:
        variant.bindings = payload.bindings.model_dump(by_alias=True)
    if payload.render_svg is not None:
        variant.render_svg = payload.render_svg
    elif payload.bindings is not None:
        render_into(variant, variant.asset)

    db.commit()
    db.refresh(variant)
    return envelope(VariantResponse.model_validate(variant))


@router.post("/{variant_id}/render", response_model=ApiResponse[VariantResponse])
async def rerender_variant(
    variant_id: UUID,
    db: Session = Depends(db_session),
    current_user: SessionUser = Depends(get_current_user),
) -> ApiResponse:
    variant = get_visible_variant(db, variant_id, current_user)
    render_into(variant, variant.asset)
    db.commit()
    db.refresh(variant)
    return envelope(VariantResponse.model_validate(variant))


@router.delete("/{variant_id}", response_model=ApiResponse[MessageResponse])
async def delete_variant(
    variant_id: UUID,
    db: Session = Depends(db_session),
    current_user: SessionUser = Depends(get_current_user),
) -> ApiResponse:
    variant = get_visible_variant(db, variant_id, current_user)
    db.delete(variant)
    db.commit()
    logger.info("Variant %s deleted by %s", variant_id, current_user.id)
    return envelope(MessageResponse(message="Variant deleted successfully"))
