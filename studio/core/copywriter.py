"""Ad copy generation: headline, subheadline and CTA variants."""

from __future__ import annotations

import json
import logging
from typing import Any, List, Optional

from anthropic import Anthropic
from google.genai import types
from pydantic import BaseModel, ValidationError

from studio.schemas import AssetContext, TextConstraints, TextVariant

from .config import (
    AI_MAX_TOKENS,
    AI_TEMPERATURE,
    ANTHROPIC_API_KEY,
    CLAUDE_MODEL,
    GEMINI_TEXT_MODEL,
)
from .genai_client import GenerationError, gemini_client, parse_json_payload

logger = logging.getLogger(__name__)


class _CopyVariant(BaseModel):
    headline: str
    subheadline: str
    cta: str


class _CopyResponse(BaseModel):
    """Structured output schema handed to Gemini."""

    variants: List[_CopyVariant]


COPY_PROMPT = """You are an expert copywriter creating ad variants.
Generate {count} different text variants for an advertisement based on the provided context.
Each variant should include a headline, subheadline, and call-to-action (CTA).

Context:
- Asset: {asset_name}
- Project: {project_name}
- Client: {client_name}
- Default bindings: {default_bindings}
- Style hints: {style_hints}

Constraints:
{constraints}

Respond with valid JSON only in this exact format:
{{"variants": [{{"headline": "...", "subheadline": "...", "cta": "..."}}, ...]}}"""


def _constraint_lines(constraints: Optional[TextConstraints]) -> str:
    if constraints is None:
        return "- None"
    lines: List[str] = []
    if constraints.headline_max_words:
        lines.append(f"- Headline: max {constraints.headline_max_words} words")
    if constraints.subheadline_max_chars:
        lines.append(f"- Subheadline: max {constraints.subheadline_max_chars} characters")
    if constraints.tone:
        lines.append(f"- Tone: {constraints.tone.value}")
    if constraints.cta_phrases_allowed:
        lines.append(f"- Allowed CTA phrases: {', '.join(constraints.cta_phrases_allowed)}")
    if constraints.banned_phrases:
        lines.append(f"- Banned phrases: {', '.join(constraints.banned_phrases)}")
    return "\n".join(lines) if lines else "- None"


def build_copy_prompt(context: AssetContext, count: int, constraints: Optional[TextConstraints] = None) -> str:
    return COPY_PROMPT.format(
        count=count,
        asset_name=context.name,
        project_name=context.project_name,
        client_name=context.client_name,
        default_bindings=json.dumps(context.default_bindings or {}),
        style_hints=json.dumps(context.style_hints or {}),
        constraints=_constraint_lines(constraints),
    )


def parse_variants_payload(payload: Any) -> List[TextVariant]:
    """Validate a decoded ``{"variants": [...]}`` answer."""

    if isinstance(payload, str):
        payload = parse_json_payload(payload)
    if not isinstance(payload, dict) or not isinstance(payload.get("variants"), list):
        raise GenerationError("Model response is missing a 'variants' list")
    try:
        return [TextVariant.model_validate(item) for item in payload["variants"]]
    except ValidationError as exc:
        raise GenerationError(f"Model returned malformed variants: {exc.error_count()} errors") from exc


class Copywriter:
    """Base class for copy providers."""

    provider = "base"

    def generate(
        self,
        context: AssetContext,
        count: int,
        constraints: Optional[TextConstraints] = None,
    ) -> List[TextVariant]:
        raise NotImplementedError


class GeminiCopywriter(Copywriter):
    provider = "gemini"

    def __init__(self, api_key: Optional[str] = None, model: str = GEMINI_TEXT_MODEL) -> None:
        self._api_key = api_key
        self.model = model

    def generate(
        self,
        context: AssetContext,
        count: int,
        constraints: Optional[TextConstraints] = None,
    ) -> List[TextVariant]:
        client = gemini_client(self._api_key)
        prompt = build_copy_prompt(context, count, constraints)
        logger.info("Generating %d text variants for asset '%s' with %s", count, context.name, self.model)
        try:
            response = client.models.generate_content(
                model=self.model,
                contents=prompt,
                config=types.GenerateContentConfig(
                    response_mime_type="application/json",
                    response_schema=_CopyResponse,
                    temperature=AI_TEMPERATURE,
                ),
            )
        except Exception as exc:
            logger.warning("Gemini text generation failed: %s", exc)
            raise GenerationError(f"Failed to generate text variants: {exc}") from exc
        return parse_variants_payload(response.text or "")


class ClaudeCopywriter(Copywriter):
    provider = "anthropic"

    def __init__(self, api_key: Optional[str] = None, model: str = CLAUDE_MODEL) -> None:
        self._api_key = api_key or ANTHROPIC_API_KEY
        self.model = model
        self._client: Optional[Anthropic] = None

    def _ensure_client(self) -> Anthropic:
        if not self._api_key:
            raise GenerationError("ANTHROPIC_API_KEY is not configured")
        if self._client is None:
            self._client = Anthropic(api_key=self._api_key, timeout=120.0)
        return self._client

    @staticmethod
    def _extract_text(response: Any) -> str:
        text_parts = []
        for block in getattr(response, "content", None) or []:
            if getattr(block, "type", None) == "text":
                text_parts.append(block.text)
        return "\n".join(text_parts)

    def generate(
        self,
        context: AssetContext,
        count: int,
        constraints: Optional[TextConstraints] = None,
    ) -> List[TextVariant]:
        client = self._ensure_client()
        prompt = build_copy_prompt(context, count, constraints)
        logger.info("Generating %d text variants for asset '%s' with %s", count, context.name, self.model)
        try:
            response = client.messages.create(
                model=self.model,
                max_tokens=AI_MAX_TOKENS,
                temperature=min(AI_TEMPERATURE, 1.0),
                messages=[{"role": "user", "content": prompt}],
            )
        except Exception as exc:
            logger.warning("Claude text generation failed: %s", exc)
            raise GenerationError(f"Failed to generate text variants: {exc}") from exc
        return parse_variants_payload(self._extract_text(response))


def make_copywriter(provider: str) -> Copywriter:
    if provider == "anthropic":
        return ClaudeCopywriter()
    return GeminiCopywriter()

