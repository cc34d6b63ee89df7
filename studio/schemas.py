"""Shared pydantic types: the response envelope and the JSON payloads stored on assets and variants."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


DataT = TypeVar("DataT")


class CamelModel(BaseModel):
    """Base model exposing camelCase on the wire while accepting snake_case too."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class ApiResponse(BaseModel, Generic[DataT]):
    ok: bool = True
    data: DataT


class MessageResponse(CamelModel):
    message: str


def envelope(data: Any) -> ApiResponse:
    return ApiResponse(data=data)


# ---- JSON payloads ----

class TemplateFont(CamelModel):
    family: str
    url: str = ""
    weight: str = "normal"
    style: str = "normal"


class DefaultBindings(CamelModel):
    """Fallback copy for an asset; extra keys feed custom placeholders."""

    model_config = ConfigDict(extra="allow")

    headline: Optional[str] = ""
    subheadline: Optional[str] = ""
    cta: Optional[str] = ""
    image: Optional[str] = ""


class StyleHints(CamelModel):
    palette: List[str] = Field(default_factory=list)
    brand: str = ""
    notes: str = ""


class VariantBindings(CamelModel):
    model_config = ConfigDict(extra="allow")

    headline: Optional[str] = ""
    subheadline: Optional[str] = ""
    cta: Optional[str] = ""
    image_url: Optional[str] = ""


class Tone(str, Enum):
    CONVERSATIONAL = "conversational"
    DIRECT = "direct"
    PLAYFUL = "playful"
    FORMAL = "formal"


class TextConstraints(CamelModel):
    headline_max_words: Optional[int] = Field(None, ge=1)
    subheadline_max_chars: Optional[int] = Field(None, ge=1)
    cta_phrases_allowed: Optional[List[str]] = None
    tone: Optional[Tone] = None
    banned_phrases: Optional[List[str]] = None


class TextVariant(CamelModel):
    headline: str
    subheadline: str
    cta: str


class GeneratedTemplate(CamelModel):
    template_svg: str = Field(..., min_length=1)
    template_fonts: List[TemplateFont] = Field(default_factory=list)
    default_bindings: DefaultBindings = Field(default_factory=DefaultBindings)
    style_hints: StyleHints = Field(default_factory=StyleHints)


# ---- Prompt context ----

@dataclass
class AssetContext:
    """What the generators know about the asset they write for."""

    name: str
    project_name: str
    client_name: str
    default_bindings: Dict[str, Any] = field(default_factory=dict)
    style_hints: Dict[str, Any] = field(default_factory=dict)


@dataclass
class ProjectContext:
    name: str
    client_name: str
    brief: Optional[str] = None
