"""Backend application state for the glossary services."""

from __future__ import annotations

import os
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from glossary_manager import GlossaryDocumentManager
from services import TermService
from settings import SettingsStore, TermManagerSettings
from storage import FileDocumentStore

VAULT_ENV_VAR = "TERM_GLOSSARY_VAULT"


@dataclass
class GlossaryServices:
    vault_dir: Path
    settings: TermManagerSettings
    settings_store: SettingsStore
    store: FileDocumentStore
    manager: GlossaryDocumentManager
    terms: TermService


class GlossaryAppState:
    """Holds the vault-scoped services and serialises actions against them."""

    def __init__(self, vault_dir: Optional[Path] = None, settings_path: Optional[Path] = None):
        self.lock = threading.RLock()
        self.vault_dir = self._resolve_vault_dir(vault_dir)
        self.settings_store = SettingsStore(settings_path or (self.vault_dir / ".term-glossary" / "settings.json"))
        self._services: Optional[GlossaryServices] = None
        self._load()

    def current(self) -> GlossaryServices:
        with self.lock:
            assert self._services is not None
            return self._services

    def update_settings(self, **changes) -> TermManagerSettings:
        with self.lock:
            self.settings_store.update(**changes)
            self._load()
            assert self._services is not None
            return self._services.settings

    def reload(self) -> GlossaryServices:
        with self.lock:
            self._load()
            assert self._services is not None
            return self._services

    def _load(self) -> None:
        settings = self.settings_store.load()
        store = FileDocumentStore(root=self.vault_dir)
        manager = GlossaryDocumentManager(store=store, document_name=settings.glossary_name)
        manager.load_index()
        terms = TermService(manager=manager, settings=settings)

        self._services = GlossaryServices(
            vault_dir=self.vault_dir,
            settings=settings,
            settings_store=self.settings_store,
            store=store,
            manager=manager,
            terms=terms,
        )

    def _resolve_vault_dir(self, vault_dir: Optional[Path]) -> Path:
        if vault_dir:
            return Path(vault_dir).expanduser().resolve()
        from_env = os.environ.get(VAULT_ENV_VAR)
        if from_env:
            return Path(from_env).expanduser().resolve()
        return (Path(__file__).resolve().parent / "storage" / "vault").resolve()
