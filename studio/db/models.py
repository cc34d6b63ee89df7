"""SQLAlchemy ORM models for the ad variants studio."""

from __future__ import annotations

import enum
from datetime import datetime, timezone
from typing import List, Optional
from uuid import UUID as UUID_t, uuid4

from sqlalchemy import JSON, DateTime, Enum, ForeignKey, String, Text, Uuid
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .session import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


# JSONB on Postgres, plain JSON elsewhere (SQLite in tests)
JSONType = JSON().with_variant(JSONB(), "postgresql")


class Role(str, enum.Enum):
    ADMIN = "ADMIN"
    USER = "USER"


class VariantSource(str, enum.Enum):
    USER = "USER"
    AUTO = "AUTO"


class VariantStatus(str, enum.Enum):
    DRAFT = "DRAFT"
    READY = "READY"
    ERROR = "ERROR"


class User(Base):
    __tablename__ = "users"

    id: Mapped[UUID_t] = mapped_column(Uuid, primary_key=True, default=uuid4)
    email: Mapped[str] = mapped_column(String(320), unique=True, nullable=False)
    name: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[Role] = mapped_column(Enum(Role, name="role"), nullable=False, default=Role.USER)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=False), default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=False), default=utcnow, onupdate=utcnow, nullable=False)

    clients: Mapped[List["Client"]] = relationship("Client", back_populates="created_by_user")


class Client(Base):
    __tablename__ = "clients"

    id: Mapped[UUID_t] = mapped_column(Uuid, primary_key=True, default=uuid4)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_by_user_id: Mapped[UUID_t] = mapped_column(Uuid, ForeignKey("users.id"), nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=False), default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=False), default=utcnow, onupdate=utcnow, nullable=False)

    created_by_user: Mapped[User] = relationship("User", back_populates="clients")
    projects: Mapped[List["Project"]] = relationship("Project", back_populates="client", cascade="all, delete-orphan")


class Project(Base):
    __tablename__ = "projects"

    id: Mapped[UUID_t] = mapped_column(Uuid, primary_key=True, default=uuid4)
    client_id: Mapped[UUID_t] = mapped_column(
        Uuid, ForeignKey("clients.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    brief: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    archived: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=False), nullable=True)
    created_by_user_id: Mapped[UUID_t] = mapped_column(Uuid, ForeignKey("users.id"), nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=False), default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=False), default=utcnow, onupdate=utcnow, nullable=False)

    client: Mapped[Client] = relationship("Client", back_populates="projects")
    assets: Mapped[List["Asset"]] = relationship("Asset", back_populates="project", cascade="all, delete-orphan")


class Asset(Base):
    __tablename__ = "assets"

    id: Mapped[UUID_t] = mapped_column(Uuid, primary_key=True, default=uuid4)
    project_id: Mapped[UUID_t] = mapped_column(
        Uuid, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    template_svg: Mapped[str] = mapped_column(Text, nullable=False)
    # [{family, url, weight, style}]
    template_fonts: Mapped[list] = mapped_column(JSONType, default=list, nullable=False)
    # {headline, subheadline, cta, image}
    default_bindings: Mapped[dict] = mapped_column(JSONType, default=dict, nullable=False)
    # {palette, brand, notes}
    style_hints: Mapped[dict] = mapped_column(JSONType, default=dict, nullable=False)
    master_asset_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_by_user_id: Mapped[UUID_t] = mapped_column(Uuid, ForeignKey("users.id"), nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=False), default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=False), default=utcnow, onupdate=utcnow, nullable=False)

    project: Mapped[Project] = relationship("Project", back_populates="assets")
    variants: Mapped[List["Variant"]] = relationship("Variant", back_populates="asset", cascade="all, delete-orphan")


class Variant(Base):
    __tablename__ = "variants"

    id: Mapped[UUID_t] = mapped_column(Uuid, primary_key=True, default=uuid4)
    asset_id: Mapped[UUID_t] = mapped_column(
        Uuid, ForeignKey("assets.id", ondelete="CASCADE"), nullable=False, index=True
    )
    source: Mapped[VariantSource] = mapped_column(
        Enum(VariantSource, name="variant_source"), nullable=False, default=VariantSource.USER
    )
    # {headline, subheadline, cta, imageUrl}
    bindings: Mapped[dict] = mapped_column(JSONType, default=dict, nullable=False)
    render_svg: Mapped[str] = mapped_column(Text, nullable=False)
    render_png_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    status: Mapped[VariantStatus] = mapped_column(
        Enum(VariantStatus, name="variant_status"), nullable=False, default=VariantStatus.DRAFT
    )
    error_message: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_by_user_id: Mapped[UUID_t] = mapped_column(Uuid, ForeignKey("users.id"), nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=False), default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=False), default=utcnow, onupdate=utcnow, nullable=False)

    asset: Mapped[Asset] = relationship("Asset", back_populates="variants")
