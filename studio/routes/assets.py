"""Template asset CRUD and template generation endpoints."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from fastapi.concurrency import run_in_threadpool
from pydantic import Field
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from ..adapters.auth import SessionUser
from ..adapters.storage import StorageBackend
from ..core.genai_client import GenerationError
from ..core.template_gen import TemplateGenerator
from ..db import models
from ..dependencies import db_session, get_storage, get_template_generator
from ..errors import ApiError, not_found
from ..rbac import scope_query, visible_or_none
from ..schemas import (
    ApiResponse,
    CamelModel,
    DefaultBindings,
    GeneratedTemplate,
    MessageResponse,
    StyleHints,
    TemplateFont,
    envelope,
)
from ..services.media import purge_generated_images
from ..services.templates import apply_template, generate_template
from .auth import get_current_user
from .projects import ProjectResponse, get_visible_project

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/assets", tags=["assets"])


class AssetCreateRequest(CamelModel):
    project_id: UUID
    name: str = Field(..., min_length=1, max_length=200)
    template_svg: Optional[str] = None
    template_fonts: List[TemplateFont] = Field(default_factory=list)
    default_bindings: DefaultBindings = Field(default_factory=DefaultBindings)
    style_hints: StyleHints = Field(default_factory=StyleHints)
    master_asset_url: Optional[str] = None


class AssetUpdateRequest(CamelModel):
    project_id: Optional[UUID] = None
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    template_svg: Optional[str] = Field(None, min_length=1)
    template_fonts: Optional[List[TemplateFont]] = None
    default_bindings: Optional[DefaultBindings] = None
    style_hints: Optional[StyleHints] = None
    master_asset_url: Optional[str] = None


class AssetSummary(CamelModel):
    id: UUID
    project_id: UUID
    name: str
    template_svg: str
    template_fonts: List[TemplateFont] = Field(default_factory=list)
    default_bindings: DefaultBindings = Field(default_factory=DefaultBindings)
    style_hints: StyleHints = Field(default_factory=StyleHints)
    master_asset_url: Optional[str] = None
    created_by_user_id: UUID
    created_at: datetime
    updated_at: datetime


class AssetResponse(AssetSummary):
    project: ProjectResponse


def get_visible_asset(db: Session, asset_id: UUID, user: SessionUser) -> models.Asset:
    asset = (
        db.query(models.Asset)
        .options(joinedload(models.Asset.project).joinedload(models.Project.client))
        .filter(models.Asset.id == asset_id)
        .one_or_none()
    )
    asset = visible_or_none(asset, user)
    if asset is None:
        raise not_found("Asset not found")
    return asset


async def _try_generate(
    generator: TemplateGenerator,
    storage: StorageBackend,
    *,
    master_asset_url: str,
    asset_name: str,
    project: models.Project,
) -> Optional[GeneratedTemplate]:
    try:
        return await run_in_threadpool(
            generate_template,
            generator,
            storage,
            master_asset_url=master_asset_url,
            asset_name=asset_name,
            project=project,
        )
    except GenerationError as exc:
        logger.warning("Template generation failed for asset '%s': %s", asset_name, exc)
        return None


@router.get("", response_model=ApiResponse[List[AssetResponse]])
async def list_assets(
    project_id: Optional[UUID] = Query(None, alias="projectId"),
    db: Session = Depends(db_session),
    current_user: SessionUser = Depends(get_current_user),
) -> ApiResponse:
    query = db.query(models.Asset).options(
        joinedload(models.Asset.project).joinedload(models.Project.client)
    )
    query = scope_query(query, models.Asset, current_user)
    if project_id is not None:
        query = query.filter(models.Asset.project_id == project_id)
    assets = query.order_by(models.Asset.created_at.desc()).all()
    return envelope([AssetResponse.model_validate(asset) for asset in assets])


@router.post("", response_model=ApiResponse[AssetResponse], status_code=status.HTTP_201_CREATED)
async def create_asset(
    payload: AssetCreateRequest,
    db: Session = Depends(db_session),
    current_user: SessionUser = Depends(get_current_user),
    storage: StorageBackend = Depends(get_storage),
    generator: TemplateGenerator = Depends(get_template_generator),
) -> ApiResponse:
    project = get_visible_project(db, payload.project_id, current_user)
    if not payload.master_asset_url and not payload.template_svg:
        raise ApiError(
            status.HTTP_400_BAD_REQUEST,
            "VALIDATION_ERROR",
            "Either templateSvg or masterAssetUrl is required",
        )

    asset = models.Asset(
        project_id=project.id,
        name=payload.name.strip(),
        template_svg=payload.template_svg or "",
        template_fonts=[font.model_dump(by_alias=True) for font in payload.template_fonts],
        default_bindings=payload.default_bindings.model_dump(by_alias=True),
        style_hints=payload.style_hints.model_dump(by_alias=True),
        master_asset_url=payload.master_asset_url,
        created_by_user_id=UUID(current_user.id),
    )

    if payload.master_asset_url:
        result = await _try_generate(
            generator,
            storage,
            master_asset_url=payload.master_asset_url,
            asset_name=asset.name,
            project=project,
        )
        if result is not None:
            apply_template(asset, result)
        elif payload.template_svg:
            logger.info("Falling back to the supplied template for asset '%s'", asset.name)
        else:
            raise GenerationError("Template generation failed and no templateSvg was supplied")

    db.add(asset)
    db.commit()
    logger.info("Asset %s created by %s", asset.id, current_user.id)
    return envelope(AssetResponse.model_validate(get_visible_asset(db, asset.id, current_user)))


@router.get("/{asset_id}", response_model=ApiResponse[AssetResponse])
async def get_asset(
    asset_id: UUID,
    db: Session = Depends(db_session),
    current_user: SessionUser = Depends(get_current_user),
) -> ApiResponse:
    asset = get_visible_asset(db, asset_id, current_user)
    return envelope(AssetResponse.model_validate(asset))


@router.patch("/{asset_id}", response_model=ApiResponse[AssetResponse])
async def update_asset(
    asset_id: UUID,
    payload: AssetUpdateRequest,
    db: Session = Depends(db_session),
    current_user: SessionUser = Depends(get_current_user),
    storage: StorageBackend = Depends(get_storage),
    generator: TemplateGenerator = Depends(get_template_generator),
) -> ApiResponse:
    asset = get_visible_asset(db, asset_id, current_user)

    if payload.project_id is not None and payload.project_id != asset.project_id:
        asset.project = get_visible_project(db, payload.project_id, current_user)
    if payload.name is not None:
        asset.name = payload.name.strip()
    if payload.template_svg is not None:
        asset.template_svg = payload.template_svg
    if payload.template_fonts is not None:
        asset.template_fonts = [font.model_dump(by_alias=True) for font in payload.template_fonts]
    if payload.default_bindings is not None:
        asset.default_bindings = payload.default_bindings.model_dump(by_alias=True)
    if payload.style_hints is not None:
        asset.style_hints = payload.style_hints.model_dump(by_alias=True)

    if "master_asset_url" in payload.model_fields_set and payload.master_asset_url != asset.master_asset_url:
        asset.master_asset_url = payload.master_asset_url
        if payload.master_asset_url:
            result = await _try_generate(
                generator,
                storage,
                master_asset_url=payload.master_asset_url,
                asset_name=asset.name,
                project=asset.project,
            )
            if result is not None:
                apply_template(asset, result)

    db.commit()
    db.refresh(asset)
    return envelope(AssetResponse.model_validate(asset))


@router.post("/{asset_id}/generate-template", response_model=ApiResponse[AssetResponse])
async def regenerate_template(
    asset_id: UUID,
    db: Session = Depends(db_session),
    current_user: SessionUser = Depends(get_current_user),
    storage: StorageBackend = Depends(get_storage),
    generator: TemplateGenerator = Depends(get_template_generator),
) -> ApiResponse:
    asset = get_visible_asset(db, asset_id, current_user)
    if not asset.master_asset_url:
        raise ApiError(status.HTTP_400_BAD_REQUEST, "INVALID_REQUEST", "Asset has no master asset URL")

    template = await run_in_threadpool(
        generate_template,
        generator,
        storage,
        master_asset_url=asset.master_asset_url,
        asset_name=asset.name,
        project=asset.project,
    )
    apply_template(asset, template)
    try:
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("Could not store regenerated template for asset %s: %s", asset_id, exc)
        raise ApiError(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "UPDATE_FAILED",
            "Failed to update asset with generated template",
        )
    db.refresh(asset)
    logger.info("Template regenerated for asset %s", asset.id)
    return envelope(AssetResponse.model_validate(asset))


@router.delete("/{asset_id}", response_model=ApiResponse[MessageResponse])
async def delete_asset(
    asset_id: UUID,
    db: Session = Depends(db_session),
    current_user: SessionUser = Depends(get_current_user),
    storage: StorageBackend = Depends(get_storage),
) -> ApiResponse:
    asset = get_visible_asset(db, asset_id, current_user)
    await run_in_threadpool(purge_generated_images, storage, [str(asset.id)])
    db.delete(asset)
    db.commit()
    logger.info("Asset %s deleted by %s", asset_id, current_user.id)
    return envelope(MessageResponse(message="Asset deleted successfully"))
