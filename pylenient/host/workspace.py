from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from pylenient.domain.interfaces import IDisposable
from pylenient.domain.models import JAVASCRIPT, JSON, PLAIN_TEXT, Grammar
from pylenient.utils.events import Emitter
from pylenient.host.notifications import NotificationCenter
from pylenient.host.qt_document import QtEditorDocument
from pylenient.host.qt_file import QtFile

_SUFFIX_GRAMMARS: dict[str, Grammar] = {
    ".js": JAVASCRIPT,
    ".mjs": JAVASCRIPT,
    ".cjs": JAVASCRIPT,
    ".json": JSON,
}


def grammar_for_path(path: Path | str | None) -> Grammar:
    if path is None:
        return PLAIN_TEXT
    return _SUFFIX_GRAMMARS.get(Path(path).suffix.lower(), PLAIN_TEXT)


class Workspace:
    """Open documents plus the shared notification list."""

    def __init__(self, notifications: NotificationCenter | None = None) -> None:
        self.notifications = notifications or NotificationCenter()
        self.unloading = False
        self._documents: list[QtEditorDocument] = []
        self._did_add_document = Emitter()

    def documents(self) -> list[QtEditorDocument]:
        return list(self._documents)

    def open(
        self,
        path: Path | str | None = None,
        *,
        grammar: Grammar | None = None,
        text: str = "",
    ) -> QtEditorDocument:
        """
        Open a document. An existing file is loaded from disk; otherwise `text`
        becomes the (unsaved) initial content.
        """
        file = QtFile(path) if path is not None else None
        doc = QtEditorDocument(file=file, grammar=grammar or grammar_for_path(path))
        if file is not None and file.exists():
            doc.load()
        elif text:
            doc.set_text(text)
        self._documents.append(doc)
        self._did_add_document.emit(doc)
        return doc

    def close(self, doc: QtEditorDocument) -> None:
        if doc in self._documents:
            self._documents.remove(doc)
        doc.destroy()

    def observe_documents(self, callback: Callable[[QtEditorDocument], None]) -> IDisposable:
        """Call `callback` for every open document now and for every one opened later."""
        for doc in list(self._documents):
            callback(doc)
        return self._did_add_document.on(callback)

    def shutdown(self) -> None:
        self.unloading = True
        for doc in list(self._documents):
            self.close(doc)
