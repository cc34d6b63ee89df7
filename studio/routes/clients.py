"""Client CRUD endpoints."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from fastapi.concurrency import run_in_threadpool
from pydantic import Field
from sqlalchemy.orm import Session

from ..adapters.auth import SessionUser
from ..adapters.storage import StorageBackend
from ..db import models
from ..dependencies import db_session, get_storage
from ..errors import not_found
from ..rbac import scope_query, visible_or_none
from ..schemas import ApiResponse, CamelModel, MessageResponse, envelope
from ..services.media import purge_generated_images
from .auth import get_current_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/clients", tags=["clients"])


class ClientCreateRequest(CamelModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None


class ClientUpdateRequest(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None


class ClientResponse(CamelModel):
    id: UUID
    name: str
    description: Optional[str] = None
    created_by_user_id: UUID
    created_at: datetime
    updated_at: datetime


def get_visible_client(db: Session, client_id: UUID, user: SessionUser) -> models.Client:
    client = visible_or_none(db.get(models.Client, client_id), user)
    if client is None:
        raise not_found("Client not found")
    return client


@router.get("", response_model=ApiResponse[List[ClientResponse]])
async def list_clients(
    db: Session = Depends(db_session),
    current_user: SessionUser = Depends(get_current_user),
) -> ApiResponse:
    query = scope_query(db.query(models.Client), models.Client, current_user)
    clients = query.order_by(models.Client.created_at.desc()).all()
    return envelope([ClientResponse.model_validate(client) for client in clients])


@router.post("", response_model=ApiResponse[ClientResponse], status_code=status.HTTP_201_CREATED)
async def create_client(
    payload: ClientCreateRequest,
    db: Session = Depends(db_session),
    current_user: SessionUser = Depends(get_current_user),
) -> ApiResponse:
    client = models.Client(
        name=payload.name.strip(),
        description=payload.description,
        created_by_user_id=UUID(current_user.id),
    )
    db.add(client)
    db.commit()
    db.refresh(client)
    logger.info("Client %s created by %s", client.id, current_user.id)
    return envelope(ClientResponse.model_validate(client))


@router.get("/{client_id}", response_model=ApiResponse[ClientResponse])
async def get_client(
    client_id: UUID,
    db: Session = Depends(db_session),
    current_user: SessionUser = Depends(get_current_user),
) -> ApiResponse:
    client = get_visible_client(db, client_id, current_user)
    return envelope(ClientResponse.model_validate(client))


@router.patch("/{client_id}", response_model=ApiResponse[ClientResponse])
async def update_client(
    client_id: UUID,
    payload: ClientUpdateRequest,
    db: Session = Depends(db_session),
    current_user: SessionUser = Depends(get_current_user),
) -> ApiResponse:
    client = get_visible_client(db, client_id, current_user)

    if payload.name is not None:
        client.name = payload.name.strip()
    if "description" in payload.model_fields_set:
        client.description = payload.description

    db.commit()
    db.refresh(client)
    return envelope(ClientResponse.model_validate(client))


@router.delete("/{client_id}", response_model=ApiResponse[MessageResponse])
async def delete_client(
    client_id: UUID,
    db: Session = Depends(db_session),
    current_user: SessionUser = Depends(get_current_user),
    storage: StorageBackend = Depends(get_storage),
) -> ApiResponse:
    client = get_visible_client(db, client_id, current_user)
    asset_ids = [str(asset.id) for project in client.projects for asset in project.assets]
    await run_in_threadpool(purge_generated_images, storage, asset_ids)
    db.delete(client)
    db.commit()
    logger.info("Client %s deleted by %s", client_id, current_user.id)
    return envelope(MessageResponse(message="Client deleted successfully"))
