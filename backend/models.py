"""Shared backend models for the term glossary."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

HEX_COLOUR_PATTERN = r"^#[0-9A-Fa-f]{6}$"


class StyleRole(str, Enum):
    TERM = "term"
    DEFINITION = "definition"


class LineKind(str, Enum):
    HEADING = "heading"
    SEPARATOR = "separator"
    TERM = "term"
    DEFINITION = "definition"
    OTHER = "other"


@dataclass(frozen=True)
class StyleSpec:
    """Inline styling attached to a term or a definition."""

    colour: str
    bold: bool = False
    italic: bool = False


@dataclass(frozen=True)
class GlossaryLine:
    """One classified line of the glossary document."""

    kind: LineKind
    raw: str
    letter: str = ""
    text: str = ""
    anchor: str = ""
    style: Optional[StyleSpec] = None


@dataclass
class DocumentHandle:
    """Represents the stored glossary document."""

    name: str
    path: Path
    created: bool = False
    seeded: bool = False


@dataclass(frozen=True)
class DefinitionResult:
    term: str
    definition: str
    anchor: str
    cross_reference: str


# API payloads

class TermPayload(BaseModel):
    term: str
    definition: str


class TermsResponsePayload(BaseModel):
    terms: List[TermPayload] = Field(default_factory=list)


class GlossaryDocumentPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    document_name: str = Field(alias="document_name")
    content: str


class ActionResponsePayload(BaseModel):
    success: bool = True
    replacement: str
    notices: List[str] = Field(default_factory=list)
    anchor: Optional[str] = None


# Request payloads

class DefinitionFormatting(BaseModel):
    """Per-invocation overrides; unset fields fall back to the settings."""

    model_config = ConfigDict(populate_by_name=True)

    text: str = ""
    term_colour: Optional[str] = Field(default=None, pattern=HEX_COLOUR_PATTERN)
    term_bold: Optional[bool] = None
    term_italics: Optional[bool] = None
    defn_colour: Optional[str] = Field(default=None, pattern=HEX_COLOUR_PATTERN)
    defn_bold: Optional[bool] = None
    defn_italics: Optional[bool] = None


class DefineTermRequest(DefinitionFormatting):
    selection: str


class ClearTermRequest(BaseModel):
    selection: str


class UpdateSettingsRequest(BaseModel):
    term_colour: Optional[str] = Field(default=None, pattern=HEX_COLOUR_PATTERN)
    term_bold: Optional[bool] = None
    term_italics: Optional[bool] = None
    defn_colour: Optional[str] = Field(default=None, pattern=HEX_COLOUR_PATTERN)
    defn_bold: Optional[bool] = None
    defn_italics: Optional[bool] = None
    glossary_name: Optional[str] = None
