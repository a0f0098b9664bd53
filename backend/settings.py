"""Default style settings for defined terms.

Settings live in a small JSON file next to the vault. Whatever is stored is
laid over the defaults, so older files missing newer keys keep working.
"""

from __future__ import annotations

import json
import time
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, Field, ValidationError

from models import HEX_COLOUR_PATTERN, DefinitionFormatting, StyleSpec


class TermManagerSettings(BaseModel):
    term_colour: str = Field(default="#FFFFFF", pattern=HEX_COLOUR_PATTERN)
    term_bold: bool = True
    term_italics: bool = False
    defn_colour: str = Field(default="#FFFFFF", pattern=HEX_COLOUR_PATTERN)
    defn_bold: bool = False
    defn_italics: bool = False
    glossary_name: str = Field(default="Definitions", min_length=1)


def resolve_styles(
    settings: TermManagerSettings, formatting: DefinitionFormatting
) -> Tuple[StyleSpec, StyleSpec]:
    """Term and definition styles for one invocation."""

    def pick(override, default):
        return default if override is None else override

    term = StyleSpec(
        colour=pick(formatting.term_colour, settings.term_colour),
        bold=pick(formatting.term_bold, settings.term_bold),
        italic=pick(formatting.term_italics, settings.term_italics),
    )
    definition = StyleSpec(
        colour=pick(formatting.defn_colour, settings.defn_colour),
        bold=pick(formatting.defn_bold, settings.defn_bold),
        italic=pick(formatting.defn_italics, settings.defn_italics),
    )
    return term, definition


class SettingsStore:
    """Loads and saves ``TermManagerSettings`` as JSON."""

    def __init__(self, path: Optional[Path] = None):
        default_path = Path(__file__).resolve().parent / "storage" / "settings.json"
        self.path = Path(path) if path else default_path

    def load(self) -> TermManagerSettings:
        raw = self._read_state()
        if not raw:
            return TermManagerSettings()

        known = {key: value for key, value in raw.items() if key in TermManagerSettings.model_fields}
        try:
            return TermManagerSettings(**known)
        except ValidationError as exc:
            print(f"Settings at {self.path} are invalid, using defaults: {exc}")
            return TermManagerSettings()

    def save(self, settings: TermManagerSettings) -> TermManagerSettings:
        payload = settings.model_dump()
        payload["updated_at"] = time.time()
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2)
        return settings

    def update(self, **changes: Any) -> TermManagerSettings:
        current = self.load()
        cleaned = {key: value for key, value in changes.items() if value is not None}
        merged = TermManagerSettings(**{**current.model_dump(), **cleaned})
        return self.save(merged)

    def _read_state(self) -> Optional[Dict]:
        try:
            if self.path.exists():
                with open(self.path, "r", encoding="utf-8") as f:
                    data = json.load(f)
                    return data if isinstance(data, dict) else None
        except (OSError, ValueError):
            return None
        return None
