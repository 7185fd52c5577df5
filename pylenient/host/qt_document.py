from __future__ import annotations

from collections.abc import Callable

from PyQt6.QtGui import QTextDocument

from pylenient.domain.interfaces import IDisposable, IEditorDocument, IFileHandle
from pylenient.domain.models import PLAIN_TEXT, Grammar
from pylenient.utils.events import Emitter


class QtEditorDocument(IEditorDocument):
    """
    Narrow editor-buffer adapter over a QTextDocument.

    `file` is the attached backing handle and is deliberately a plain public
    attribute: plugins may swap it for a handle of their own, and every later
    load/save goes through whatever handle is attached at that moment.
    """

    def __init__(
        self,
        *,
        file: IFileHandle | None = None,
        grammar: Grammar = PLAIN_TEXT,
        text: str = "",
        document: QTextDocument | None = None,
    ) -> None:
        self.file = file
        self._doc = document if document is not None else QTextDocument()
        self._grammar = grammar
        self._did_change_grammar = Emitter()
        self._did_destroy = Emitter()
        self._destroyed = False
        if text:
            self._doc.setPlainText(text)
        self._doc.setModified(False)

    def __repr__(self) -> str:
        return f"QtEditorDocument(path={self.get_path()!r}, grammar={self._grammar.scope_name!r})"

    # ----------------------------- buffer -----------------------------

    def document(self) -> QTextDocument:
        return self._doc

    def get_path(self) -> str | None:
        return self.file.get_path() if self.file is not None else None

    def is_modified(self) -> bool:
        return self._doc.isModified()

    def get_text(self) -> str:
        return self._doc.toPlainText()

    def set_text(self, text: str) -> None:
        if text == self.get_text():
            return
        self._doc.setPlainText(text)
        self._doc.setModified(True)

    def load(self, *, internal: bool = False) -> None:
        """Replace the buffer with the attached file's content and mark it clean."""
        if self.file is None:
            return
        stream = self.file.create_read_stream()
        try:
            text = "".join(stream)
        finally:
            stream.close()
        self._doc.setPlainText(text)
        self._doc.setModified(False)

    def save(self) -> None:
        """
        Write the buffer through the attached file's write stream.

        Any failure propagates and leaves the document modified.
        """
        if self.file is None:
            raise OSError("Document has no backing file")
        stream = self.file.create_write_stream()
        stream.write(self.get_text())
        stream.end()
        self._doc.setModified(False)

    # ----------------------------- grammar -----------------------------

    def get_grammar(self) -> Grammar:
        return self._grammar

    def set_grammar(self, grammar: Grammar) -> None:
        if grammar == self._grammar:
            return
        self._grammar = grammar
        self._did_change_grammar.emit(grammar)

    def observe_grammar(self, callback: Callable[[Grammar], None]) -> IDisposable:
        callback(self._grammar)
        return self._did_change_grammar.on(callback)

    # ----------------------------- lifecycle -----------------------------

    @property
    def is_destroyed(self) -> bool:
        return self._destroyed

    def on_did_destroy(self, callback: Callable[[], None]) -> IDisposable:
        return self._did_destroy.on(callback)

    def destroy(self) -> None:
        if self._destroyed:
            return
        self._destroyed = True
        self._did_destroy.emit()
        self._did_destroy.clear()
        self._did_change_grammar.clear()
