"""Filesystem-backed storage for named markdown documents."""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class FileDocumentStore:
    """Markdown files under a single vault directory, addressed by name."""

    extension = ".md"

    def __init__(self, root: Optional[Path] = None):
        base_dir = Path(root) if root else Path(__file__).resolve().parent / "storage" / "vault"
        base_dir.mkdir(parents=True, exist_ok=True)
        self.root = base_dir

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def exists(self, name: str) -> bool:
        return self.path_for(name).is_file()

    def read(self, name: str) -> str:
        path = self.path_for(name)
        if not path.is_file():
            raise FileNotFoundError(f"Document not found: {name}")
        with open(path, "r", encoding="utf-8", newline="") as handle:
            return handle.read()

    def write(self, name: str, content: str) -> Path:
        path = self.path_for(name)
        if not path.is_file():
            raise FileNotFoundError(f"Document not found: {name}")
        self._write(path, content)
        return path

    def create(self, name: str, content: str = "") -> Path:
        path = self.path_for(name)
        if path.exists():
            raise FileExistsError(f"Document already exists: {name}")
        self._write(path, content)
        return path

    def path_for(self, name: str) -> Path:
        normalized = self._normalize_name(name)
        if not normalized:
            raise ValueError("Document name must not be empty")
        if not normalized.endswith(self.extension):
            normalized += self.extension
        return self.root / normalized

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _normalize_name(self, name: str) -> str:
        parts = [part for part in name.strip().strip("/").split("/") if part not in ("", ".", "..")]
        return "/".join(parts)

    def _write(self, path: Path, content: str) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8", newline="") as handle:
            handle.write(content)
