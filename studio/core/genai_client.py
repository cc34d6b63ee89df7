"""Shared helpers for the hosted generative AI providers."""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

from google import genai

from .config import GEMINI_API_KEY

logger = logging.getLogger(__name__)


class GenerationError(RuntimeError):
    """Raised when a generative AI call fails or returns an unusable payload."""


def gemini_client(api_key: Optional[str] = None) -> genai.Client:
    """Create a Gemini client, failing only when a call is actually attempted."""

    key = api_key or GEMINI_API_KEY
    if not key:
        raise GenerationError("GEMINI_API_KEY is not configured")
    return genai.Client(api_key=key)


def strip_json_fences(text: str) -> str:
    """Remove a surrounding ```json ... ``` fence if the model added one."""

    cleaned = (text or "").strip()
    if cleaned.startswith("```"):
        cleaned = cleaned.split("\n", 1)[1] if "\n" in cleaned else cleaned[3:]
        if cleaned.rstrip().endswith("```"):
            cleaned = cleaned.rstrip()[:-3]
        cleaned = cleaned.strip()
    return cleaned


def parse_json_payload(text: str) -> Any:
    """Parse a model's JSON answer, tolerating fences and leading chatter."""

    cleaned = strip_json_fences(text)
    if not cleaned:
        raise GenerationError("Empty response from model")
    try:
        return json.loads(cleaned)
    except json.JSONDecodeError:
        pass

    # Last resort: slice between the first '{' and the last '}'
    start_idx = cleaned.find("{")
    end_idx = cleaned.rfind("}") + 1
    if start_idx != -1 and end_idx > start_idx:
        try:
            return json.loads(cleaned[start_idx:end_idx])
        except json.JSONDecodeError as exc:
            logger.debug("Model response was not JSON: %s", cleaned[:500])
            raise GenerationError(f"Model returned invalid JSON: {exc}") from exc
    logger.debug("Model response was not JSON: %s", cleaned[:500])
    raise GenerationError("Model returned invalid JSON")
