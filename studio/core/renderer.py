"""SVG template rendering: fills ``{{placeholder}}`` tokens with variant bindings."""

from __future__ import annotations

import logging
import re
from typing import Any, Dict, List, Mapping, Optional
from xml.etree import ElementTree
from xml.sax.saxutils import escape

logger = logging.getLogger(__name__)

PLACEHOLDER_PATTERN = re.compile(r"\{\{\s*([A-Za-z_][A-Za-z0-9_.-]*)\s*\}\}")

# Image slots are bound as ``image`` on assets and ``imageUrl`` on variants
_ALIASES = {"image": "imageUrl", "imageUrl": "image"}

_XML_ENTITIES = {'"': "&quot;", "'": "&apos;"}


class RenderError(ValueError):
    """Raised when a rendered template is not a well-formed SVG document."""


def find_placeholders(template_svg: str) -> List[str]:
    """Return the distinct placeholder names in template order."""

    seen: List[str] = []
    for match in PLACEHOLDER_PATTERN.finditer(template_svg or ""):
        name = match.group(1)
        if name not in seen:
            seen.append(name)
    return seen


def _format_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return escape(str(value), _XML_ENTITIES)


def merge_bindings(defaults: Optional[Mapping[str, Any]], bindings: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """Overlay variant bindings on asset defaults.

    An empty string keeps the asset default, while an explicit ``None`` clears
    the slot (and its image alias) so it renders as empty text.
    """

    merged: Dict[str, Any] = dict(defaults or {})
    supplied = dict(bindings or {})
    cleared = set()
    for key, value in supplied.items():
        if value is None:
            cleared.add(key)
            alias = _ALIASES.get(key)
            if alias and supplied.get(alias) in (None, ""):
                cleared.add(alias)
        elif value == "":
            merged.setdefault(key, value)
        else:
            merged[key] = value
    for name, alias in _ALIASES.items():
        if name not in cleared and merged.get(name) in (None, "") and merged.get(alias) not in (None, ""):
            merged[name] = merged[alias]
    for key in cleared:
        merged[key] = ""
    return merged


class TemplateRenderer:
    """Handles rendering of SVG templates with variant bindings."""

    def __init__(self, template_svg: str):
        self.template_svg = template_svg or ""

    def render(self, bindings: Mapping[str, Any], defaults: Optional[Mapping[str, Any]] = None) -> str:
        """
        Render the template with the provided bindings.

        Args:
            bindings: Variant bindings (headline, subheadline, cta, imageUrl, ...)
            defaults: Asset default bindings used where a variant value is missing

        Returns:
            The rendered SVG document

        Raises:
            RenderError: If the output is not well-formed XML
        """
        values = merge_bindings(defaults, bindings)
        missing: List[str] = []

        def _substitute(match: "re.Match[str]") -> str:
            name = match.group(1)
            if name in values:
                return _format_value(values[name])
            if name not in missing:
                missing.append(name)
            return match.group(0)

        rendered = PLACEHOLDER_PATTERN.sub(_substitute, self.template_svg)
        if missing:
            logger.warning("Unfilled placeholders: %s", ", ".join(missing))

        self._check_well_formed(rendered)
        return rendered

    @staticmethod
    def _check_well_formed(document: str) -> None:
        try:
            ElementTree.fromstring(document)
        except ElementTree.ParseError as exc:
            raise RenderError(f"Rendered SVG is not well-formed: {exc}") from exc


def render_svg(
    template_svg: str,
    bindings: Mapping[str, Any],
    defaults: Optional[Mapping[str, Any]] = None,
) -> str:
    return TemplateRenderer(template_svg).render(bindings, defaults)
