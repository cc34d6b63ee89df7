"""Project CRUD endpoints."""

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
from ..db import models
from ..dependencies import db_session, get_storage
from ..errors import not_found
from ..rbac import scope_query, visible_or_none
from ..schemas import ApiResponse, CamelModel, MessageResponse, envelope
from ..services.media import purge_generated_images
from .auth import get_current_user
from .clients import ClientResponse, get_visible_client

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/projects", tags=["projects"])


class ProjectCreateRequest(CamelModel):
    client_id: UUID
    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    brief: Optional[str] = None


class ProjectUpdateRequest(CamelModel):
    client_id: Optional[UUID] = None
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    brief: Optional[str] = None


class ProjectSummary(CamelModel):
    id: UUID
    client_id: UUID
    name: str
    description: Optional[str] = None
    brief: Optional[str] = None
    archived: Optional[datetime] = None
    created_by_user_id: UUID
    created_at: datetime
    updated_at: datetime


class ProjectResponse(ProjectSummary):
    client: ClientResponse


def get_visible_project(db: Session, project_id: UUID, user: SessionUser) -> models.Project:
    project = (
        db.query(models.Project)
        .options(joinedload(models.Project.client))
        .filter(models.Project.id == project_id)
        .one_or_none()
    )
    project = visible_or_none(project, user)
    if project is None:
        raise not_found("Project not found")
    return project


@router.get("", response_model=ApiResponse[List[ProjectResponse]])
async def list_projects(
    client_id: Optional[UUID] = Query(None, alias="clientId"),
    include_archived: bool = Query(False, alias="includeArchived"),
    db: Session = Depends(db_session),
    current_user: SessionUser = Depends(get_current_user),
) -> ApiResponse:
    query = db.query(models.Project).options(joinedload(models.Project.client))
    query = scope_query(query, models.Project, current_user)
    if client_id is not None:
        query = query.filter(models.Project.client_id == client_id)
    if not include_archived:
        query = query.filter(models.Project.archived.is_(None))
    projects = query.order_by(models.Project.created_at.desc()).all()
    return envelope([ProjectResponse.model_validate(project) for project in projects])


@router.post("", response_model=ApiResponse[ProjectResponse], status_code=status.HTTP_201_CREATED)
async def create_project(
    payload: ProjectCreateRequest,
    db: Session = Depends(db_session),
    current_user: SessionUser = Depends(get_current_user),
) -> ApiResponse:
    get_visible_client(db, payload.client_id, current_user)
    project = models.Project(
        client_id=payload.client_id,
        name=payload.name.strip(),
        description=payload.description,
        brief=payload.brief,
        created_by_user_id=UUID(current_user.id),
    )
    db.add(project)
    db.commit()
    logger.info("Project %s created by %s", project.id, current_user.id)
    return envelope(ProjectResponse.model_validate(get_visible_project(db, project.id, current_user)))


@router.get("/{project_id}", response_model=ApiResponse[ProjectResponse])
async def get_project(
    project_id: UUID,
    db: Session = Depends(db_session),
    current_user: SessionUser = Depends(get_current_user),
) -> ApiResponse:
    project = get_visible_project(db, project_id, current_user)
    return envelope(ProjectResponse.model_validate(project))


@router.patch("/{project_id}", response_model=ApiResponse[ProjectResponse])
async def update_project(
    project_id: UUID,
    payload: ProjectUpdateRequest,
    db: Session = Depends(db_session),
    current_user: SessionUser = Depends(get_current_user),
) -> ApiResponse:
    project = get_visible_project(db, project_id, current_user)

    if payload.client_id is not None and payload.client_id != project.client_id:
        project.client = get_visible_client(db, payload.client_id, current_user)
    if payload.name is not None:
        project.name = payload.name.strip()
    if "description" in payload.model_fields_set:
        project.description = payload.description
    if "brief" in payload.model_fields_set:
        project.brief = payload.brief

    db.commit()
    db.refresh(project)
    return envelope(ProjectResponse.model_validate(project))


@router.post("/{project_id}/archive", response_model=ApiResponse[ProjectResponse])
async def archive_project(
    project_id: UUID,
    db: Session = Depends(db_session),
    current_user: SessionUser = Depends(get_current_user),
) -> ApiResponse:
    project = get_visible_project(db, project_id, current_user)
    if project.archived is None:
        project.archived = models.utcnow()
    db.commit()
    db.refresh(project)
    return envelope(ProjectResponse.model_validate(project))


@router.post("/{project_id}/unarchive", response_model=ApiResponse[ProjectResponse])
async def unarchive_project(
    project_id: UUID,
    db: Session = Depends(db_session),
    current_user: SessionUser = Depends(get_current_user),
) -> ApiResponse:
    project = get_visible_project(db, project_id, current_user)
    project.archived = None
    db.commit()
    db.refresh(project)
    return envelope(ProjectResponse.model_validate(project))


@router.delete("/{project_id}", response_model=ApiResponse[MessageResponse])
async def delete_project(
    project_id: UUID,
    db: Session = Depends(db_session),
    current_user: SessionUser = Depends(get_current_user),
    storage: StorageBackend = Depends(get_storage),
) -> ApiResponse:
    project = get_visible_project(db, project_id, current_user)
    await run_in_threadpool(purge_generated_images, storage, [str(asset.id) for asset in project.assets])
    db.delete(project)
    db.commit()
    logger.info("Project %s deleted by %s", project_id, current_user.id)
    return envelope(MessageResponse(message="Project deleted successfully"))
