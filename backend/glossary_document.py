"""Pure text transforms over the glossary document.

Each function takes the full document text and returns a new value without
touching storage. Lines the algorithms do not act on are copied through
byte-for-byte; splitting and re-joining on ``\\n`` keeps a trailing newline
intact.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, List, Optional

from glossary_format import INDENT, classify_line
from models import LineKind


class InsertState(Enum):
    SCANNING = "scanning"
    IN_SECTION = "in_section"
    INSERTED = "inserted"


class RemoveState(Enum):
    COPYING = "copying"
    DROPPING_DEFINITION = "dropping_definition"


def parse_terms(text: str) -> Dict[str, str]:
    """Rebuild the term -> definition mapping from document text."""
    index: Dict[str, str] = {}
    pending: Optional[str] = None

    for raw in text.split("\n"):
        line = classify_line(raw)
        if line.kind == LineKind.TERM:
            pending = line.text or None
        elif line.kind == LineKind.DEFINITION:
            if pending is not None:
                index[pending] = line.text
            pending = None

    return index


def insert_entry(text: str, term_markup: str, defn_markup: str, term_phrase: str) -> str:
    """Splice a term/definition pair into its letter section, in order.

    ``term_markup`` is the complete term line, ``defn_markup`` the definition
    line without its leading indent.
    """
    if not term_phrase:
        return text

    letter = term_phrase[0].upper()
    folded = term_phrase.lower()
    entry = [term_markup, INDENT + defn_markup]

    output: List[str] = []
    state = InsertState.SCANNING

    for raw in text.split("\n"):
        if state == InsertState.SCANNING:
            line = classify_line(raw)
            if line.kind == LineKind.HEADING and line.letter == letter:
                state = InsertState.IN_SECTION

        elif state == InsertState.IN_SECTION:
            line = classify_line(raw)
            if line.kind == LineKind.TERM:
                # A term line we cannot read never decides the position.
                if line.text and folded < line.text.lower():
                    output.extend(entry)
                    state = InsertState.INSERTED
            elif line.kind != LineKind.DEFINITION:
                output.extend(entry)
                state = InsertState.INSERTED

        output.append(raw)

    if state == InsertState.IN_SECTION:
        output.extend(entry)

    return "\n".join(output)


def remove_entry(text: str, term_key: str) -> str:
    """Drop the entry whose term matches ``term_key`` (case-insensitive).

    The line directly after a matched term line is taken to be its
    definition and is dropped whatever it contains.
    """
    if not term_key:
        return text

    folded = term_key.lower()
    output: List[str] = []
    state = RemoveState.COPYING

    for raw in text.split("\n"):
        line = classify_line(raw)
        if line.kind == LineKind.TERM:
            if line.text and line.text.lower() == folded:
                state = RemoveState.DROPPING_DEFINITION
                continue
            state = RemoveState.COPYING
        elif state == RemoveState.DROPPING_DEFINITION:
            state = RemoveState.COPYING
            continue
        output.append(raw)

    return "\n".join(output)
