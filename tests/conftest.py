from __future__ import annotations

import os

# Headless runs (CI) have no display server.
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from collections.abc import Callable, Iterable

import pytest
from PyQt6.QtWidgets import QApplication

from pylenient.domain.errors import ParseError
from pylenient.domain.models import JAVASCRIPT, ConverterSet, Grammar, Notification
from pylenient.lenient.controller import LenientController
from pylenient.lenient.failure_policy import FailurePolicy
from pylenient.services.converters.registry import ConverterRegistry
from pylenient.utils.constants import (
    LANGUAGE_JS,
    LANGUAGE_JSON,
    LENIENT_JS_SCOPE,
    LENIENT_JSON_SCOPE,
)
from pylenient.utils.events import Emitter


# --- Fallback QApplication fixture (works with or without pytest-qt) ---
@pytest.fixture(scope="session")
def qapp():
    """Provide a QApplication for tests that need Qt.
    Creates one if not present; reuses existing otherwise.
    """
    app = QApplication.instance()
    created = False
    if app is None:
        app = QApplication([])
        created = True
    try:
        yield app
    finally:
        # Don't forcibly quit a shared app; only close if we created it here.
        if created:
            app.quit()


# ----------------------------
# Fake converters
# ----------------------------


def strip_semicolons(text: str) -> str:
    return "\n".join(line[:-1] if line.endswith(";") else line for line in text.split("\n"))


def add_semicolons(text: str) -> str:
    return "\n".join(line + ";" if line and not line.endswith(";") else line for line in text.split("\n"))


def failing(text: str) -> str:
    raise ParseError("Unexpected token", line=1, column=1)


def fake_converter_set(
    language: str = LANGUAGE_JS,
    *,
    to_lenient: Callable[[str], str] = strip_semicolons,
    to_canonical: Callable[[str], str] = add_semicolons,
) -> ConverterSet:
    return ConverterSet(
        language=language,
        to_lenient=to_lenient,
        to_canonical=to_canonical,
        lenient_to_lenient=lambda text: to_lenient(to_canonical(text)),
    )


# ----------------------------
# Fake host
# ----------------------------


class FakeReadStream:
    def __init__(self, chunks: Iterable[str]) -> None:
        self.chunks = list(chunks)
        self.closed = False

    def __iter__(self):
        yield from self.chunks

    def close(self) -> None:
        self.closed = True


class FakeWriteStream:
    """Like the editor's own stream: opening it wipes the file."""

    def __init__(self, file: FakeFile) -> None:
        self._file = file
        self._buffer: list[str] = []
        self.ended = False
        file.content = ""

    def write(self, text: str) -> None:
        self._buffer.append(text)

    def end(self) -> None:
        self._file.content = "".join(self._buffer)
        self.ended = True


class FakeFile:
    def __init__(self, path: str = "/project/a.js", content: str = "", *, chunks: list[str] | None = None) -> None:
        self.path = path
        self.content = content
        self._chunks = chunks
        self.read_streams: list[FakeReadStream] = []
        self.write_streams: list[FakeWriteStream] = []
        self.did_change = Emitter()
        self.did_delete = Emitter()
        self.did_rename = Emitter()

    def get_path(self) -> str:
        return self.path

    def exists(self) -> bool:
        return True

    def create_read_stream(self) -> FakeReadStream:
        chunks = self._chunks if self._chunks is not None else ([self.content] if self.content else [])
        stream = FakeReadStream(chunks)
        self.read_streams.append(stream)
        return stream

    def create_write_stream(self) -> FakeWriteStream:
        stream = FakeWriteStream(self)
        self.write_streams.append(stream)
        return stream

    def on_did_change(self, callback):
        return self.did_change.on(callback)

    def on_did_delete(self, callback):
        return self.did_delete.on(callback)

    def on_did_rename(self, callback):
        return self.did_rename.on(callback)


class FakeDocument:
    def __init__(
        self,
        *,
        file: FakeFile | None = None,
        text: str = "",
        grammar: Grammar = JAVASCRIPT,
        modified: bool = False,
    ) -> None:
        self.file = file
        self.text = text
        self.grammar = grammar
        self.modified = modified
        self.load_calls: list[bool] = []
        self.did_change_grammar = Emitter()
        self.did_destroy = Emitter()

    def get_path(self) -> str | None:
        return self.file.get_path() if self.file is not None else None

    def is_modified(self) -> bool:
        return self.modified

    def get_text(self) -> str:
        return self.text

    def set_text(self, text: str) -> None:
        if text != self.text:
            self.text = text
            self.modified = True

    def get_grammar(self) -> Grammar:
        return self.grammar

    def set_grammar(self, grammar: Grammar) -> None:
        if grammar == self.grammar:
            return
        self.grammar = grammar
        self.did_change_grammar.emit(grammar)

    def load(self, *, internal: bool = False) -> None:
        self.load_calls.append(internal)
        stream = self.file.create_read_stream()
        try:
            self.text = "".join(stream)
        finally:
            stream.close()
        self.modified = False

    def save(self) -> None:
        stream = self.file.create_write_stream()
        stream.write(self.text)
        stream.end()
        self.modified = False

    def observe_grammar(self, callback):
        callback(self.grammar)
        return self.did_change_grammar.on(callback)

    def on_did_destroy(self, callback):
        return self.did_destroy.on(callback)

    def destroy(self) -> None:
        self.did_destroy.emit()


class FakeNotifications:
    def __init__(self) -> None:
        self.items: list[Notification] = []

    def add_error(self, message, *, detail="", stack="", dismissable=True, source=None) -> Notification:
        notification = Notification(
            message=message, detail=detail, stack=stack, dismissable=dismissable, source=source
        )
        self.items.append(notification)
        return notification

    def get_notifications(self) -> list[Notification]:
        return list(self.items)

    def visible(self) -> list[Notification]:
        return [n for n in self.items if not n.dismissed]

    def messages(self) -> list[str]:
        return [n.get_message() for n in self.visible()]


# --- Common fixtures ---


@pytest.fixture()
def notifications() -> FakeNotifications:
    return FakeNotifications()


@pytest.fixture()
def make_controller(notifications: FakeNotifications):
    """Controller over fake converters; keyword arguments replace the JS pair."""

    def _make(
        *,
        to_lenient: Callable[[str], str] = strip_semicolons,
        to_canonical: Callable[[str], str] = add_semicolons,
        reload_on_switch: bool = True,
        scope_languages: dict[str, str] | None = None,
    ) -> LenientController:
        registry = ConverterRegistry()
        registry.register(
            LANGUAGE_JS,
            lambda: fake_converter_set(LANGUAGE_JS, to_lenient=to_lenient, to_canonical=to_canonical),
        )
        registry.register(LANGUAGE_JSON, lambda: fake_converter_set(LANGUAGE_JSON))
        return LenientController(
            converters=registry,
            policy=FailurePolicy(notifications),
            scope_languages=scope_languages
            or {LENIENT_JS_SCOPE: LANGUAGE_JS, LENIENT_JSON_SCOPE: LANGUAGE_JSON},
            reload_on_switch=reload_on_switch,
        )

    return _make
