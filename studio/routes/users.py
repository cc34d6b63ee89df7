"""User administration endpoints (admins only)."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import Field
from sqlalchemy import func
from sqlalchemy.orm import Session

from ..adapters.auth import SessionUser
from ..db import models
from ..dependencies import db_session
from ..errors import ApiError, not_found
from ..schemas import ApiResponse, CamelModel, envelope
from .auth import require_admin

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])


class UserDetail(CamelModel):
    id: UUID
    email: str
    name: Optional[str] = None
    role: models.Role
    created_at: datetime
    updated_at: datetime


class UserUpdateRequest(CamelModel):
    name: Optional[str] = Field(None, max_length=200)
    role: Optional[models.Role] = None


@router.get("", response_model=ApiResponse[List[UserDetail]])
async def list_users(
    db: Session = Depends(db_session),
    _: SessionUser = Depends(require_admin),
) -> ApiResponse:
    users = db.query(models.User).order_by(models.User.created_at.asc()).all()
    return envelope([UserDetail.model_validate(user) for user in users])


@router.patch("/{user_id}", response_model=ApiResponse[UserDetail])
async def update_user(
    user_id: UUID,
    payload: UserUpdateRequest,
    db: Session = Depends(db_session),
    current_user: SessionUser = Depends(require_admin),
) -> ApiResponse:
    user = db.get(models.User, user_id)
    if not user:
        raise not_found("User not found")

    if payload.role is not None and payload.role != user.role:
        if user.role == models.Role.ADMIN:
            admin_count = db.query(func.count(models.User.id)).filter(models.User.role == models.Role.ADMIN).scalar()
            if admin_count <= 1:
                raise ApiError(status.HTTP_400_BAD_REQUEST, "INVALID_REQUEST", "Cannot demote the last admin")
        user.role = payload.role
        logger.info("User %s role changed to %s by %s", user.id, payload.role.value, current_user.id)
    if "name" in payload.model_fields_set:
        user.name = (payload.name or "").strip() or None

    db.commit()
    db.refresh(user)
    return envelope(UserDetail.model_validate(user))
