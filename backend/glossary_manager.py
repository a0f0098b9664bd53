"""Glossary document lifecycle and the in-memory term index.

The document is the source of truth. ``TermIndex`` is a lookup cache that is
rebuilt wholesale on load and then patched one key at a time by define and
clear.
"""

from __future__ import annotations

from typing import Dict, Iterator, Optional, Tuple

from glossary_document import insert_entry, parse_terms, remove_entry
from glossary_format import (
    build_style_for,
    capitalize_term,
    format_cross_reference,
    format_definition_line,
    format_term_line,
    normalize_term_key,
    seed_content,
)
from interfaces import DocumentStore
from models import DefinitionResult, DocumentHandle, StyleRole, StyleSpec


class TermIndex:
    """Term -> definition mapping with case-insensitive lookup."""

    def __init__(self, entries: Optional[Dict[str, str]] = None):
        self._entries: Dict[str, str] = dict(entries or {})

    def replace_all(self, entries: Dict[str, str]) -> None:
        self._entries = dict(entries)

    def set(self, term: str, definition: str) -> None:
        self._entries[term] = definition

    def discard(self, term: str) -> Optional[str]:
        key = self._resolve(term)
        if key is None:
            return None
        return self._entries.pop(key)

    def get(self, term: str) -> Optional[str]:
        key = self._resolve(term)
        return None if key is None else self._entries[key]

    def items(self) -> Iterator[Tuple[str, str]]:
        return iter(sorted(self._entries.items(), key=lambda item: item[0].lower()))

    def as_dict(self) -> Dict[str, str]:
        return dict(self._entries)

    def __contains__(self, term: object) -> bool:
        return isinstance(term, str) and self._resolve(term) is not None

    def __len__(self) -> int:
        return len(self._entries)

    def _resolve(self, term: str) -> Optional[str]:
        if term in self._entries:
            return term
        folded = term.lower()
        for key in self._entries:
            if key.lower() == folded:
                return key
        return None


class GlossaryDocumentManager:
    """Keeps one glossary document seeded and applies edits to it."""

    def __init__(self, store: DocumentStore, document_name: str = "Definitions", index: Optional[TermIndex] = None):
        self.store = store
        self.document_name = document_name
        self.index = index if index is not None else TermIndex()
        self._anchors: Dict[str, str] = {}

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def ensure_document(self) -> DocumentHandle:
        if not self.store.exists(self.document_name):
            path = self.store.create(self.document_name, seed_content())
            print(f"Created glossary document {path}")
            return DocumentHandle(name=self.document_name, path=path, created=True)

        if self.store.read(self.document_name) == "":
            path = self.store.write(self.document_name, seed_content())
            print(f"Seeded empty glossary document {path}")
            return DocumentHandle(name=self.document_name, path=path, seeded=True)

        return DocumentHandle(name=self.document_name, path=self.store.path_for(self.document_name))

    def read(self) -> str:
        self.ensure_document()
        return self.store.read(self.document_name)

    def load_index(self) -> TermIndex:
        content = self.read()
        entries = parse_terms(content)
        self.index.replace_all(entries)
        self._anchors = {normalize_term_key(term): term for term in entries}
        return self.index

    def define(self, term_phrase: str, definition: str, term_style: StyleSpec, defn_style: StyleSpec) -> DefinitionResult:
        content = self.read()

        term_text = capitalize_term(term_phrase)
        anchor = normalize_term_key(term_phrase)
        owner = self._anchors.get(anchor)
        if term_text in self.index:
            print(f"'{term_text}' is already defined in {self.document_name}; adding another entry")
        elif owner is not None and owner != term_text:
            # TODO: disambiguate colliding anchor keys (e.g. "Sea Lion" vs "SeaLion").
            print(f"Anchor ^{anchor} is already used by '{owner}'; '{term_text}' will share it")

        term_line = format_term_line(build_style_for(StyleRole.TERM, term_style), term_text)
        defn_line = format_definition_line(build_style_for(StyleRole.DEFINITION, defn_style), definition, anchor)
        updated = insert_entry(content, term_line, defn_line, term_phrase)
        if updated == content:
            print(f"No section heading for '{term_text}' in {self.document_name}; nothing inserted")
        else:
            self.store.write(self.document_name, updated)
            self.index.set(term_text, definition)
            self._anchors.setdefault(anchor, term_text)

        return DefinitionResult(
            term=term_text,
            definition=definition,
            anchor=anchor,
            cross_reference=format_cross_reference(self.document_name, anchor, term_phrase),
        )

    def clear(self, term_phrase: str) -> bool:
        content = self.read()
        updated = remove_entry(content, term_phrase)
        self.index.discard(term_phrase)
        anchor = normalize_term_key(term_phrase)
        if self._anchors.get(anchor, "").lower() == capitalize_term(term_phrase).lower():
            self._anchors.pop(anchor, None)
        if updated == content:
            return False
        self.store.write(self.document_name, updated)
        return True
