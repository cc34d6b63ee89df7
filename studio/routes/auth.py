"""Authentication endpoints for the dashboard."""

from __future__ import annotations

import logging
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Request, Response, status
from pydantic import Field
from sqlalchemy.orm import Session

from ..adapters.auth import AuthError, SessionUser, UserExistsError
from ..core.config import ALLOW_REGISTRATION
from ..db.models import Role
from ..dependencies import db_session, get_auth_provider
from ..errors import ApiError
from ..schemas import ApiResponse, CamelModel, MessageResponse, envelope
from ..security import MIN_PASSWORD_LENGTH

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])
me_router = APIRouter(tags=["auth"])


class RegisterRequest(CamelModel):
    email: str = Field(..., min_length=3, max_length=320, pattern=r"^[^@\s]+@[^@\s]+$")
    password: str = Field(..., min_length=MIN_PASSWORD_LENGTH)
    name: Optional[str] = Field(None, max_length=200)


class LoginRequest(CamelModel):
    email: str
    password: str = Field(..., min_length=1)


class ChangePasswordRequest(CamelModel):
    current_password: str
    new_password: str = Field(..., min_length=MIN_PASSWORD_LENGTH)


class UserResponse(CamelModel):
    id: UUID
    email: str
    name: Optional[str] = None
    role: Role


class UserEnvelope(CamelModel):
    user: UserResponse


def _to_response_model(user: SessionUser) -> UserEnvelope:
    return UserEnvelope(
        user=UserResponse(id=UUID(user.id), email=user.email, name=user.name, role=user.role)
    )


@router.post("/register", response_model=ApiResponse[UserEnvelope], status_code=status.HTTP_201_CREATED)
async def register(
    payload: RegisterRequest,
    response: Response,
    db: Session = Depends(db_session),
) -> ApiResponse:
    if not ALLOW_REGISTRATION:
        raise ApiError(status.HTTP_403_FORBIDDEN, "REGISTRATION_DISABLED", "Registration is disabled")

    provider = get_auth_provider()
    try:
        user = provider.register(payload.email, payload.password, db, name=payload.name)
    except UserExistsError as exc:
        raise ApiError(status.HTTP_409_CONFLICT, "USER_EXISTS", str(exc))
    except AuthError as exc:
        raise ApiError(status.HTTP_400_BAD_REQUEST, "INVALID_REQUEST", str(exc))
    db.commit()

    provider.attach_to_response(response, user)
    return envelope(_to_response_model(user))


@router.post("/login", response_model=ApiResponse[UserEnvelope])
async def login(payload: LoginRequest, response: Response, db: Session = Depends(db_session)) -> ApiResponse:
    provider = get_auth_provider()
    try:
        user = provider.authenticate(payload.email, payload.password, db)
    except AuthError:
        logger.info("Failed login attempt for %s", payload.email.strip().lower())
        raise ApiError(status.HTTP_401_UNAUTHORIZED, "INVALID_CREDENTIALS", "Invalid email or password")
    db.commit()

    provider.attach_to_response(response, user)
    return envelope(_to_response_model(user))


@router.post("/logout", response_model=ApiResponse[MessageResponse])
async def logout(response: Response) -> ApiResponse:
    get_auth_provider().clear_from_response(response)
    return envelope(MessageResponse(message="Logged out successfully"))


def get_current_user(
    request: Request,
    db: Session = Depends(db_session),
) -> SessionUser:
    provider = get_auth_provider()
    try:
        user = provider.current_user(request, db)
    except AuthError as exc:
        raise ApiError(status.HTTP_401_UNAUTHORIZED, "UNAUTHORIZED", str(exc))
    if not user:
        raise ApiError(status.HTTP_401_UNAUTHORIZED, "UNAUTHORIZED", "Authentication required")
    return user


def require_admin(current_user: SessionUser = Depends(get_current_user)) -> SessionUser:
    if not current_user.is_admin:
        raise ApiError(status.HTTP_403_FORBIDDEN, "FORBIDDEN", "Admin access required")
    return current_user


@me_router.get("/me", response_model=ApiResponse[UserEnvelope])
async def me(current_user: SessionUser = Depends(get_current_user)) -> ApiResponse:
    return envelope(_to_response_model(current_user))


@router.post("/change-password", response_model=ApiResponse[MessageResponse])
async def change_password(
    payload: ChangePasswordRequest,
    current_user: SessionUser = Depends(get_current_user),
    db: Session = Depends(db_session),
) -> ApiResponse:
    """Change the current user's password."""
    provider = get_auth_provider()
    try:
        provider.change_password(current_user.id, payload.current_password, payload.new_password, db)
    except AuthError as exc:
        raise ApiError(status.HTTP_400_BAD_REQUEST, "INVALID_REQUEST", str(exc))
    db.commit()
    logger.info("Password changed for user %s", current_user.id)
    return envelope(MessageResponse(message="Password changed successfully"))
