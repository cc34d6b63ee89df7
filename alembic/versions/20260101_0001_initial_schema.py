"""Initial database schema.

Revision ID: 0001_initial
Revises: 
Create Date: 2026-01-01
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None


role_enum = sa.Enum("ADMIN", "USER", name="role")
variant_source_enum = sa.Enum("USER", "AUTO", name="variant_source")
variant_status_enum = sa.Enum("DRAFT", "READY", "ERROR", name="variant_status")


def _id_column() -> sa.Column:
    return sa.Column(
        "id",
        postgresql.UUID(as_uuid=True),
        primary_key=True,
        nullable=False,
        server_default=sa.text("gen_random_uuid()"),
    )


def _owner_column() -> sa.Column:
    return sa.Column(
        "created_by_user_id",
        postgresql.UUID(as_uuid=True),
        sa.ForeignKey("users.id"),
        nullable=False,
        index=True,
    )


def _timestamps() -> list:
    return [
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.text("now()")),
        sa.Column("updated_at", sa.DateTime(), nullable=False, server_default=sa.text("now()")),
    ]


def upgrade() -> None:
    op.execute("CREATE EXTENSION IF NOT EXISTS pgcrypto")

    op.create_table(
        "users",
        _id_column(),
        sa.Column("email", sa.String(length=320), nullable=False, unique=True),
        sa.Column("name", sa.String(length=200), nullable=True),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("role", role_enum, nullable=False, server_default="USER"),
        *_timestamps(),
    )

    op.create_table(
        "clients",
        _id_column(),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        _owner_column(),
        *_timestamps(),
    )

    op.create_table(
        "projects",
        _id_column(),
        sa.Column(
            "client_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("clients.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("brief", sa.Text(), nullable=True),
        sa.Column("archived", sa.DateTime(), nullable=True),
        _owner_column(),
        *_timestamps(),
    )

    op.create_table(
        "assets",
        _id_column(),
        sa.Column(
            "project_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("projects.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("template_svg", sa.Text(), nullable=False),
        sa.Column("template_fonts", postgresql.JSONB(astext_type=sa.Text()), nullable=False, server_default=sa.text("'[]'::jsonb")),
        sa.Column("default_bindings", postgresql.JSONB(astext_type=sa.Text()), nullable=False, server_default=sa.text("'{}'::jsonb")),
        sa.Column("style_hints", postgresql.JSONB(astext_type=sa.Text()), nullable=False, server_default=sa.text("'{}'::jsonb")),
        sa.Column("master_asset_url", sa.Text(), nullable=True),
        _owner_column(),
        *_timestamps(),
    )

    op.create_table(
        "variants",
        _id_column(),
        sa.Column(
            "asset_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("assets.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        sa.Column("source", variant_source_enum, nullable=False, server_default="USER"),
        sa.Column("bindings", postgresql.JSONB(astext_type=sa.Text()), nullable=False, server_default=sa.text("'{}'::jsonb")),
        sa.Column("render_svg", sa.Text(), nullable=False),
        sa.Column("render_png_url", sa.Text(), nullable=True),
        sa.Column("status", variant_status_enum, nullable=False, server_default="DRAFT"),
        sa.Column("error_message", sa.Text(), nullable=True),
        _owner_column(),
        *_timestamps(),
    )


def downgrade() -> None:
    op.drop_table("variants")
    op.drop_table("assets")
    op.drop_table("projects")
    op.drop_table("clients")
    op.drop_table("users")
    variant_status_enum.drop(op.get_bind(), checkfirst=True)
    variant_source_enum.drop(op.get_bind(), checkfirst=True)
    role_enum.drop(op.get_bind(), checkfirst=True)
