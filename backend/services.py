"""Service layer for the define and clear actions."""

from __future__ import annotations

from glossary_format import SELECTION_PATTERN, parse_cross_reference
from glossary_manager import GlossaryDocumentManager
from interfaces import ConsoleNotifier, Editor, Notifier
from models import DefinitionFormatting, DefinitionResult
from settings import TermManagerSettings, resolve_styles


class InvalidSelectionError(ValueError):
    """The editor selection cannot be used for the requested action."""


class InvalidDefinitionError(ValueError):
    """The definition text would not fit on a single glossary line."""


def validate_definition_text(text: str) -> str:
    if "\n" in text or "\r" in text:
        raise InvalidDefinitionError("Definition must fit on a single line!")
    return text


def validate_term_selection(selection: str) -> str:
    if SELECTION_PATTERN.match(selection):
        return selection
    if not selection[:1].isascii() or not selection[:1].isalpha():
        raise InvalidSelectionError("Term must start with an alphabetical character!")
    raise InvalidSelectionError("Term can only contain alphanumeric characters!")


class TermService:
    """Coordinates the editor, the glossary document and notices."""

    def __init__(
        self,
        manager: GlossaryDocumentManager,
        settings: TermManagerSettings | None = None,
        notifier: Notifier | None = None,
    ):
        self.manager = manager
        self.settings = settings or TermManagerSettings()
        self.notifier = notifier or ConsoleNotifier()

    def define_term(self, editor: Editor, formatting: DefinitionFormatting | None = None) -> DefinitionResult:
        selection = editor.get_selection()
        try:
            validate_term_selection(selection)
        except InvalidSelectionError as exc:
            self.notifier.notify(str(exc))
            raise

        formatting = formatting or DefinitionFormatting()
        try:
            validate_definition_text(formatting.text)
        except InvalidDefinitionError as exc:
            self.notifier.notify(str(exc))
            raise

        term_style, defn_style = resolve_styles(self.settings, formatting)
        result = self.manager.define(selection, formatting.text, term_style, defn_style)

        editor.replace_selection(result.cross_reference)
        self.notifier.notify("Defined!")
        return result

    def clear_term_definition(self, editor: Editor) -> str:
        reference = parse_cross_reference(editor.get_selection())
        if reference is None or reference["document"] != self.manager.document_name:
            error = InvalidSelectionError("Selection is not a defined term reference!")
            self.notifier.notify(str(error))
            raise error

        term = reference["term"]
        if not self.manager.clear(term):
            print(f"No entry for '{term}' in {self.manager.document_name}")

        editor.replace_selection(term)
        self.notifier.notify("Cleared definition!")
        return term
