"""
Tests for the glossary document lifecycle and the term index.
"""

import os
import shutil
import sys
import tempfile
from pathlib import Path

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "../../backend"))

from glossary_format import seed_content
from glossary_manager import GlossaryDocumentManager, TermIndex
from models import StyleSpec
from storage import FileDocumentStore

TERM_STYLE = StyleSpec(colour="#FFFFFF", bold=True)
DEFN_STYLE = StyleSpec(colour="#FFFFFF")


@pytest.mark.unit
def test_term_index_lookup_is_case_insensitive():
    index = TermIndex({"Sea lion": "Marine mammal"})

    assert "sea LION" in index
    assert index.get("SEA LION") == "Marine mammal"
    assert index.discard("sea lion") == "Marine mammal"
    assert len(index) == 0
    assert index.discard("sea lion") is None


@pytest.mark.unit
def test_term_index_items_sorted():
    index = TermIndex({"beta": "2", "Alpha": "1"})
    assert list(index.items()) == [("Alpha", "1"), ("beta", "2")]


class TestGlossaryDocumentManager:
    """Test suite for GlossaryDocumentManager."""

    def setup_method(self):
        self.temp_dir = tempfile.mkdtemp()
        self.store = FileDocumentStore(root=Path(self.temp_dir))
        self.manager = GlossaryDocumentManager(store=self.store)

    def teardown_method(self):
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def test_ensure_document_creates_seed(self):
        handle = self.manager.ensure_document()

        assert handle.created is True
        assert handle.name == "Definitions"
        assert handle.path == Path(self.temp_dir) / "Definitions.md"
        assert self.store.read("Definitions") == seed_content()

    def test_ensure_document_is_idempotent(self):
        self.manager.ensure_document()
        handle = self.manager.ensure_document()

        assert handle.created is False
        assert handle.seeded is False
        assert self.store.read("Definitions") == seed_content()

    def test_ensure_document_seeds_empty_file(self):
        self.store.create("Definitions", "")
        handle = self.manager.ensure_document()

        assert handle.seeded is True
        assert self.store.read("Definitions") == seed_content()

    def test_ensure_document_leaves_content_alone(self):
        self.store.create("Definitions", "# A\n---\n")
        self.manager.ensure_document()
        assert self.store.read("Definitions") == "# A\n---\n"

    def test_define_writes_entry_and_updates_index(self):
        result = self.manager.define("Cat", "A small feline", TERM_STYLE, DEFN_STYLE)

        assert result.term == "Cat"
        assert result.anchor == "Cat"
        assert result.cross_reference == "[[Definitions#^Cat|Cat]]"
        assert self.manager.index.get("Cat") == "A small feline"

        content = self.store.read("Definitions")
        lines = content.split("\n")
        c = lines.index("# C")
        assert lines[c + 1] == "- <span class='term' style='color: #FFFFFF; font-weight: bold; '>Cat</span>"
        assert lines[c + 2] == "\t<span class='definition' style='color: #FFFFFF; '>A small feline</span> ^Cat"
        assert lines[c + 3] == "---"

    def test_define_lowercase_phrase(self):
        result = self.manager.define("sea lion", "Marine mammal", TERM_STYLE, DEFN_STYLE)

        assert result.term == "Sea lion"
        assert result.anchor == "SeaLion"
        assert result.cross_reference == "[[Definitions#^SeaLion|sea lion]]"
        assert "Sea lion" in self.manager.index

    def test_define_recreates_missing_document(self):
        self.manager.ensure_document()
        os.remove(self.store.path_for("Definitions"))

        self.manager.define("Cat", "Feline", TERM_STYLE, DEFN_STYLE)
        assert "Cat" in self.store.read("Definitions")

    def test_load_index_rebuilds_from_document(self):
        self.manager.define("Cat", "Feline", TERM_STYLE, DEFN_STYLE)
        self.manager.define("Dog", "Canine", TERM_STYLE, DEFN_STYLE)

        fresh = GlossaryDocumentManager(store=self.store)
        fresh.index.set("Stale", "gone after reload")
        index = fresh.load_index()

        assert index.as_dict() == {"Cat": "Feline", "Dog": "Canine"}

    def test_clear_removes_entry_and_index_key(self):
        self.manager.ensure_document()
        self.manager.define("Cat", "Feline", TERM_STYLE, DEFN_STYLE)

        assert self.manager.clear("cat") is True
        assert "Cat" not in self.manager.index
        assert self.store.read("Definitions") == seed_content()

    def test_clear_unknown_term_is_noop(self):
        self.manager.ensure_document()
        assert self.manager.clear("Unicorn") is False
        assert self.store.read("Definitions") == seed_content()

    def test_colliding_anchor_keys_are_not_blocked(self, capsys):
        self.manager.define("Sea Lion", "Eared seal", TERM_STYLE, DEFN_STYLE)
        result = self.manager.define("SeaLion", "Same key", TERM_STYLE, DEFN_STYLE)

        assert result.anchor == "SeaLion"
        assert "already used" in capsys.readouterr().out
        assert self.manager.index.get("Sea Lion") == "Eared seal"
        assert self.manager.index.get("SeaLion") == "Same key"

    def test_custom_document_name(self):
        manager = GlossaryDocumentManager(store=self.store, document_name="Glossary")
        result = manager.define("Cat", "Feline", TERM_STYLE, DEFN_STYLE)

        assert result.cross_reference == "[[Glossary#^Cat|Cat]]"
        assert self.store.exists("Glossary")
        assert not self.store.exists("Definitions")
