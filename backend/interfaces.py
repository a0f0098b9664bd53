"""Collaborator interfaces the glossary actions talk to.

The editing surface and the notification area belong to the host; the
backend only needs the narrow slices below. Small concrete versions are
provided for the HTTP layer and for tests.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Protocol


class DocumentStore(Protocol):
    def exists(self, name: str) -> bool: ...

    def read(self, name: str) -> str: ...

    def write(self, name: str, content: str) -> Path: ...

    def create(self, name: str, content: str = "") -> Path: ...

    def path_for(self, name: str) -> Path: ...


class Editor(Protocol):
    def get_selection(self) -> str: ...

    def replace_selection(self, text: str) -> None: ...


class Notifier(Protocol):
    def notify(self, message: str) -> None: ...


class SelectionEditor:
    """Holds a single selection and records what replaced it."""

    def __init__(self, selection: str):
        self.selection = selection
        self.replacement: Optional[str] = None

    def get_selection(self) -> str:
        return self.selection

    def replace_selection(self, text: str) -> None:
        self.replacement = text
        self.selection = text


class CollectingNotifier:
    """Keeps notices so a request can hand them back to the caller."""

    def __init__(self):
        self.messages: List[str] = []

    def notify(self, message: str) -> None:
        self.messages.append(message)


class ConsoleNotifier:
    def notify(self, message: str) -> None:
        print(f"Notice: {message}")
