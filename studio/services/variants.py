"""Variant rendering and the auto-generate batch flow."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..adapters.storage import StorageBackend, StorageError
from ..core.copywriter import Copywriter
from ..core.genai_client import GenerationError
from ..core.image_gen import ImageGenerator
from ..core.renderer import RenderError, render_svg
from ..db import models
from ..schemas import TextConstraints, TextVariant
from .context import asset_context
from .media import store_generated_images

logger = logging.getLogger(__name__)


def render_into(variant: models.Variant, asset: models.Asset) -> None:
    """Render the asset template with the variant's bindings and record the outcome."""

    try:
        variant.render_svg = render_svg(asset.template_svg, variant.bindings or {}, asset.default_bindings)
    except RenderError as exc:
        logger.warning("Render failed for variant of asset %s: %s", asset.id, exc)
        variant.render_svg = variant.render_svg or asset.template_svg
        variant.status = models.VariantStatus.ERROR
        variant.error_message = str(exc)
        return
    if variant.status == models.VariantStatus.ERROR:
        variant.status = models.VariantStatus.DRAFT
    variant.error_message = None


def pair_bindings(
    texts: List[TextVariant],
    images: List[str],
    defaults: Optional[Mapping[str, Any]] = None,
) -> List[Dict[str, str]]:
    """Zip text and image results, cycling the shorter list.

    With no text results the asset defaults supply the copy; with no images the
    image slot is left empty.
    """

    defaults = defaults or {}
    total = max(len(texts), len(images))
    paired: List[Dict[str, str]] = []
    for index in range(total):
        if texts:
            text = texts[index % len(texts)]
            copy = {"headline": text.headline, "subheadline": text.subheadline, "cta": text.cta}
        else:
            copy = {
                "headline": str(defaults.get("headline") or ""),
                "subheadline": str(defaults.get("subheadline") or ""),
                "cta": str(defaults.get("cta") or ""),
            }
        copy["imageUrl"] = images[index % len(images)] if images else ""
        paired.append(copy)
    return paired


@dataclass
class BatchOptions:
    generate_text: bool = True
    generate_images: bool = True
    text_count: int = 3
    image_count: int = 1
    constraints: Optional[TextConstraints] = None


@dataclass
class BatchResult:
    variants: List[models.Variant] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)


def generate_variant_batch(
    db: Session,
    asset: models.Asset,
    user_id: str,
    *,
    copywriter: Copywriter,
    image_generator: ImageGenerator,
    storage: StorageBackend,
    options: BatchOptions,
) -> BatchResult:
    result = BatchResult()
    context = asset_context(asset)

    texts: List[TextVariant] = []
    images: List[str] = []
    try:
        if options.generate_text:
            texts = copywriter.generate(context, options.text_count, options.constraints)
        if options.generate_images:
            generated = image_generator.generate_backgrounds(context, options.image_count)
            images = store_generated_images(storage, str(asset.id), generated)
    except (GenerationError, StorageError) as exc:
        logger.warning("Batch generation for asset %s failed: %s", asset.id, exc)
        result.errors.append(f"Generation failed: {exc}")
        return result

    for index, bindings in enumerate(pair_bindings(texts, images, asset.default_bindings)):
        variant = models.Variant(
            asset=asset,
            source=models.VariantSource.AUTO,
            bindings=bindings,
            render_svg="",
            status=models.VariantStatus.DRAFT,
            created_by_user_id=UUID(user_id),
        )
        render_into(variant, asset)
        try:
            db.add(variant)
            db.commit()
        except SQLAlchemyError as exc:
            db.rollback()
            logger.warning("Failed to store variant %d for asset %s: %s", index + 1, asset.id, exc)
            result.errors.append(f"Failed to create variant {index + 1}: {exc}")
            continue
        result.variants.append(variant)

    logger.info(
        "Batch for asset %s produced %d variants with %d errors",
        asset.id,
        len(result.variants),
        len(result.errors),
    )
    return result
