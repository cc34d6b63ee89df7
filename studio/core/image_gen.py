"""Gemini image generation for ad background artwork."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import List, Optional

from google import genai
from google.genai import types as genai_types

from studio.schemas import AssetContext

from .config import GEMINI_IMAGE_MODEL
from .genai_client import GenerationError, gemini_client

logger = logging.getLogger(__name__)


@dataclass
class ImageResult:
    """Result of an image generation request."""
    data: bytes
    mime_type: str


BACKGROUND_PROMPT = """Create a professional advertisement background image for:
- Asset: {asset_name}
- Project: {project_name}
- Client: {client_name}
- Style hints: {style_hints}

Requirements:
- High quality, professional advertisement background
- Suitable for text overlay (ensure text-safe areas)
- Match the brand palette and style hints provided
- No embedded text or typography in the image
- Maintain visual hierarchy for headline, subheadline, and CTA placement
- Clean, modern aesthetic suitable for digital advertising
"""


def build_background_prompt(context: AssetContext, seed_image_url: Optional[str] = None) -> str:
    prompt = BACKGROUND_PROMPT.format(
        asset_name=context.name,
        project_name=context.project_name,
        client_name=context.client_name,
        style_hints=json.dumps(context.style_hints or {}),
    )
    if seed_image_url:
        prompt += f"\nReference image style: {seed_image_url}\n"
    return prompt


class ImageGenerator:
    """Generates background images one request at a time."""

    def __init__(self, api_key: Optional[str] = None, model: str = GEMINI_IMAGE_MODEL) -> None:
        self._api_key = api_key
        self.model = model

    def generate_image(self, prompt: str, client: Optional[genai.Client] = None) -> ImageResult:
        """
        Generate a single image.

        Raises:
            GenerationError: If the model returns no image data
        """
        client = client or gemini_client(self._api_key)
        try:
            response = client.models.generate_content(
                model=self.model,
                contents=[
                    genai_types.Content(
                        role="user",
                        parts=[genai_types.Part.from_text(text=prompt)],
                    )
                ],
                config=genai_types.GenerateContentConfig(
                    response_modalities=["IMAGE", "TEXT"],
                ),
            )
        except Exception as exc:
            raise GenerationError(f"Image generation failed: {exc}") from exc

        for candidate in response.candidates or []:
            content = candidate.content
            if content is None or not content.parts:
                continue
            for part in content.parts:
                inline = getattr(part, "inline_data", None)
                if inline and inline.data:
                    mime_type = inline.mime_type or "image/png"
                    logger.info("Generated image: %d bytes, %s", len(inline.data), mime_type)
                    return ImageResult(data=inline.data, mime_type=mime_type)
        raise GenerationError("No image data found in Gemini response")

    def generate_backgrounds(
        self,
        context: AssetContext,
        count: int,
        seed_image_url: Optional[str] = None,
    ) -> List[ImageResult]:
        """Request ``count`` images; individual failures are logged and skipped."""

        client = gemini_client(self._api_key)
        prompt = build_background_prompt(context, seed_image_url)
        results: List[ImageResult] = []
        for index in range(count):
            try:
                results.append(self.generate_image(prompt, client=client))
            except GenerationError as exc:
                logger.warning("Failed to generate image %d of %d: %s", index + 1, count, exc)
        if not results:
            raise GenerationError("Failed to generate any images")
        return results
