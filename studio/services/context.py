"""Build prompt context from persisted records."""

from __future__ import annotations

from ..db import models
from ..schemas import AssetContext, ProjectContext


def project_context(project: models.Project) -> ProjectContext:
    return ProjectContext(
        name=project.name,
        client_name=project.client.name,
        brief=project.brief or project.description,
    )


def asset_context(asset: models.Asset) -> AssetContext:
    return AssetContext(
        name=asset.name,
        project_name=asset.project.name,
        client_name=asset.project.client.name,
        default_bindings=dict(asset.default_bindings or {}),
        style_hints=dict(asset.style_hints or {}),
    )
