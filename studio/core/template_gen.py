"""Derive an editable SVG template from a finished master ad image."""

from __future__ import annotations

import logging
from typing import Optional

from google.genai import types
from pydantic import ValidationError

from studio.schemas import GeneratedTemplate, ProjectContext

from .config import GEMINI_TEXT_MODEL
from .genai_client import GenerationError, gemini_client, parse_json_payload

logger = logging.getLogger(__name__)


TEMPLATE_PROMPT = """You are a senior ad designer converting a finished advertisement into a reusable SVG template.

Asset: {asset_name}
Project: {project_name}
Client: {client_name}
Brief: {brief}

Study the attached image and recreate its layout as a single self-contained SVG document:
- Keep the canvas size, background treatment, shapes and colour palette of the original.
- Replace the main headline text with {{{{headline}}}}, the supporting line with {{{{subheadline}}}}
  and the button or call-to-action label with {{{{cta}}}}.
- Where the design has a photo or illustration area, use <image href="{{{{image}}}}" .../>.
- Use only standard SVG elements; no scripts, no external stylesheets.

Return ONLY valid JSON, no markdown fences, in this exact shape:
{{
  "templateSvg": "<svg ...>...</svg>",
  "templateFonts": [{{"family": "...", "url": "", "weight": "normal", "style": "normal"}}],
  "defaultBindings": {{"headline": "...", "subheadline": "...", "cta": "...", "image": ""}},
  "styleHints": {{"palette": ["#rrggbb"], "brand": "...", "notes": "..."}}
}}
Default bindings carry the copy visible in the original image."""


class TemplateGenerator:
    def __init__(self, api_key: Optional[str] = None, model: str = GEMINI_TEXT_MODEL) -> None:
        self._api_key = api_key
        self.model = model

    def generate_from_image(
        self,
        image_bytes: bytes,
        mime_type: str,
        *,
        asset_name: str,
        project: ProjectContext,
    ) -> GeneratedTemplate:
        client = gemini_client(self._api_key)
        prompt = TEMPLATE_PROMPT.format(
            asset_name=asset_name,
            project_name=project.name,
            client_name=project.client_name,
            brief=project.brief or "Not provided",
        )
        logger.info("Generating template for asset '%s' from %d-byte master image", asset_name, len(image_bytes))
        try:
            response = client.models.generate_content(
                model=self.model,
                contents=[
                    types.Part.from_text(text=prompt),
                    types.Part.from_bytes(data=image_bytes, mime_type=mime_type),
                ],
                config=types.GenerateContentConfig(response_mime_type="application/json"),
            )
        except Exception as exc:
            raise GenerationError(f"Template generation failed: {exc}") from exc

        payload = parse_json_payload(response.text or "")
        try:
            template = GeneratedTemplate.model_validate(payload)
        except ValidationError as exc:
            raise GenerationError(f"Model returned a malformed template: {exc.error_count()} errors") from exc
        if "<svg" not in template.template_svg:
            raise GenerationError("Model returned a template without an <svg> root")
        return template
