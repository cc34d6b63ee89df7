"""Dashboard summary counts."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy import func
from sqlalchemy.orm import Session

from ..adapters.auth import SessionUser
from ..db import models
from ..dependencies import db_session
from ..rbac import scope_query
from ..schemas import ApiResponse, CamelModel, envelope
from .auth import get_current_user

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


class DashboardStats(CamelModel):
    total_clients: int
    active_projects: int
    template_assets: int
    generated_variants: int


def _count(db: Session, model, user: SessionUser, *criteria) -> int:
    query = scope_query(db.query(func.count(model.id)), model, user)
    if criteria:
        query = query.filter(*criteria)
    return int(query.scalar() or 0)


@router.get("/stats", response_model=ApiResponse[DashboardStats])
async def dashboard_stats(
    db: Session = Depends(db_session),
    current_user: SessionUser = Depends(get_current_user),
) -> ApiResponse:
    stats = DashboardStats(
        total_clients=_count(db, models.Client, current_user),
        active_projects=_count(db, models.Project, current_user, models.Project.archived.is_(None)),
        template_assets=_count(db, models.Asset, current_user),
        generated_variants=_count(db, models.Variant, current_user),
    )
    return envelope(stats)
