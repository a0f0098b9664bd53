"""Line-level format of the glossary document.

Everything that knows how a glossary line *looks* lives here: the seed
headings, the styled span markup, anchor keys and cross-reference links.
Structural algorithms in ``glossary_document`` only ever see the tagged
``GlossaryLine`` produced by ``classify_line``.
"""

from __future__ import annotations

import re
import string
from typing import Optional

from models import GlossaryLine, LineKind, StyleRole, StyleSpec

HEADING_MARKER = "#"
SEPARATOR = "---"
BULLET = "-"
INDENT = "\t"
SPAN_CLOSE = "</span>"

SECTION_LETTERS = string.ascii_uppercase

SELECTION_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9 ]*$")
TERM_BRACKET_PATTERN = re.compile(r">[a-zA-Z][a-zA-Z0-9 ]*<")

_TERM_SPAN_PATTERN = re.compile(r"<span class='term' style='(?P<style>[^']*)'>(?P<text>.*?)</span>")
# Definition text runs to the last closing tag before the anchor.
_DEFINITION_SPAN_PATTERN = re.compile(
    r"<span class='definition' style='(?P<style>[^']*)'>(?P<text>.*)</span>(?: \^[A-Za-z0-9]+)?\s*$"
)
_ANCHOR_PATTERN = re.compile(r"\^(?P<anchor>[A-Za-z0-9]+)\s*$")
_COLOUR_PATTERN = re.compile(r"color:\s*(?P<colour>[^;]+);")
_CROSS_REFERENCE_PATTERN = re.compile(
    r"^\[\[(?P<document>[^#\]|]+)#\^(?P<anchor>[A-Za-z0-9]+)\|(?P<term>[A-Za-z][A-Za-z0-9 ]*)\]\]$"
)


def seed_content() -> str:
    """Empty glossary: one heading and separator per letter."""
    return "".join(f"{HEADING_MARKER} {letter}\n{SEPARATOR}\n" for letter in SECTION_LETTERS)


# ---------------------------------------------------------------------------
# Styles and keys
# ---------------------------------------------------------------------------


def build_style(role: StyleRole, colour: str, italic: bool, bold: bool) -> str:
    start = f"<span class='{role.value}' style='color: {colour}; "
    if italic:
        start += "font-style: italic; "
    if bold:
        start += "font-weight: bold; "
    return start + "'>"


def build_style_for(role: StyleRole, spec: StyleSpec) -> str:
    return build_style(role, spec.colour, spec.italic, spec.bold)


def normalize_term_key(phrase: str) -> str:
    """Anchor key for ``phrase``: words capitalised and joined without spaces.

    Only used for block references. Ordering always uses the folded phrase.
    """
    parts = []
    for word in phrase.split(" "):
        if not word:
            continue
        if word[0] in string.ascii_uppercase:
            parts.append(word)
        else:
            parts.append(word[0].upper() + word[1:])
    return "".join(parts)


def capitalize_term(phrase: str) -> str:
    if not phrase:
        return phrase
    return phrase[0].upper() + phrase[1:]


def format_term_line(style: str, term_text: str) -> str:
    return f"{BULLET} {style}{term_text}{SPAN_CLOSE}"


def format_definition_line(style: str, definition: str, anchor: str) -> str:
    return f"{style}{definition}{SPAN_CLOSE} ^{anchor}"


def format_cross_reference(document_name: str, anchor: str, term_phrase: str) -> str:
    return f"[[{document_name}#^{anchor}|{term_phrase}]]"


def parse_cross_reference(text: str) -> Optional[dict]:
    """Split a ``[[Doc#^Key|Term]]`` link into its parts, or None."""
    match = _CROSS_REFERENCE_PATTERN.match(text.strip())
    if not match:
        return None
    return {
        "document": match.group("document"),
        "anchor": match.group("anchor"),
        "term": match.group("term"),
    }


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------


def _parse_style(declarations: str) -> StyleSpec:
    colour_match = _COLOUR_PATTERN.search(declarations)
    return StyleSpec(
        colour=colour_match.group("colour").strip() if colour_match else "",
        bold="font-weight: bold" in declarations,
        italic="font-style: italic" in declarations,
    )


def _extract_span(line: str, role: StyleRole):
    pattern = _TERM_SPAN_PATTERN if role == StyleRole.TERM else _DEFINITION_SPAN_PATTERN
    match = pattern.search(line)
    if match:
        return match.group("text"), _parse_style(match.group("style"))

    # Older or hand-edited lines: fall back to the first bare bracket.
    bracket = TERM_BRACKET_PATTERN.search(line)
    if bracket:
        return bracket.group(0)[1:-1], None
    return "", None


def classify_line(line: str) -> GlossaryLine:
    if line.startswith(SEPARATOR):
        return GlossaryLine(kind=LineKind.SEPARATOR, raw=line)

    if line.startswith(HEADING_MARKER):
        return GlossaryLine(kind=LineKind.HEADING, raw=line, letter=line[2:3])

    if line.startswith(BULLET):
        text, style = _extract_span(line, StyleRole.TERM)
        return GlossaryLine(kind=LineKind.TERM, raw=line, text=text, style=style)

    if line.startswith(INDENT):
        text, style = _extract_span(line, StyleRole.DEFINITION)
        anchor_match = _ANCHOR_PATTERN.search(line)
        return GlossaryLine(
            kind=LineKind.DEFINITION,
            raw=line,
            text=text,
            style=style,
            anchor=anchor_match.group("anchor") if anchor_match else "",
        )

    return GlossaryLine(kind=LineKind.OTHER, raw=line)
