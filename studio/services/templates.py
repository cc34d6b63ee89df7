"""Template generation from an asset's master image."""

from __future__ import annotations

import logging

from ..adapters.storage import StorageBackend
from ..core.template_gen import TemplateGenerator
from ..db import models
from ..schemas import GeneratedTemplate
from .context import project_context
from .media import load_image

logger = logging.getLogger(__name__)


def generate_template(
    generator: TemplateGenerator,
    storage: StorageBackend,
    *,
    master_asset_url: str,
    asset_name: str,
    project: models.Project,
) -> GeneratedTemplate:
    """Load the master image and ask the model for an editable template.

    Raises ``GenerationError`` when the image cannot be loaded or the model
    output is unusable.
    """

    image = load_image(master_asset_url, storage)
    template = generator.generate_from_image(
        image.data,
        image.mime_type,
        asset_name=asset_name,
        project=project_context(project),
    )
    logger.info("Template generated for asset '%s' from %s", asset_name, master_asset_url[:80])
    return template


def apply_template(asset: models.Asset, template: GeneratedTemplate) -> None:
    asset.template_svg = template.template_svg
    asset.template_fonts = [font.model_dump(by_alias=True) for font in template.template_fonts]
    asset.default_bindings = template.default_bindings.model_dump(by_alias=True)
    asset.style_hints = template.style_hints.model_dump(by_alias=True)
