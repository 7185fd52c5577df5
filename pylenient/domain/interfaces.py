from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from typing import Any, Protocol, runtime_checkable

from pylenient.domain.models import ConverterSet, Grammar, Notification


@runtime_checkable
class IDisposable(Protocol):
    def dispose(self) -> None: ...


class IReadStream(Protocol):
    """Source of text chunks. Iterating yields `str` chunks in file order."""

    def __iter__(self) -> Iterator[str]: ...
    def close(self) -> None: ...


class IWriteStream(Protocol):
    """Sink of text. Content is persisted when `end()` returns."""

    def write(self, text: str) -> None: ...
    def end(self) -> None: ...


class IFileHandle(Protocol):
    """
    The host's backing-store handle for one document.

    The lenient file proxy forwards every one of these capabilities and only
    replaces the two stream constructors.
    """

    def get_path(self) -> str: ...
    def exists(self) -> bool: ...
    def create_read_stream(self) -> IReadStream: ...
    def create_write_stream(self) -> IWriteStream: ...
    def on_did_change(self, callback: Callable[[], None]) -> IDisposable: ...
    def on_did_delete(self, callback: Callable[[], None]) -> IDisposable: ...
    def on_did_rename(self, callback: Callable[[str], None]) -> IDisposable: ...


class IEditorDocument(Protocol):
    """One open, editable text resource as exposed by the host editor."""

    file: IFileHandle | None

    def get_path(self) -> str | None: ...
    def is_modified(self) -> bool: ...
    def get_text(self) -> str: ...
    def set_text(self, text: str) -> None: ...
    def get_grammar(self) -> Grammar: ...
    def set_grammar(self, grammar: Grammar) -> None: ...
    def load(self, *, internal: bool = False) -> None: ...

    def observe_grammar(self, callback: Callable[[Grammar], None]) -> IDisposable:
        """Call `callback` with the current grammar now and on every later change."""
        ...

    def on_did_destroy(self, callback: Callable[[], None]) -> IDisposable: ...


class INotificationCenter(Protocol):
    def add_error(
        self,
        message: str,
        *,
        detail: str = "",
        stack: str = "",
        dismissable: bool = True,
        source: str | None = None,
    ) -> Notification: ...

    def get_notifications(self) -> list[Notification]: ...


class IConverterProvider(Protocol):
    """Language tag ("js", "json", ...) to its immutable converter set."""

    def get_converters(self, language: str) -> ConverterSet: ...


class IConfigService(Protocol):
    def get(self, section: str, key: str, default: str | None = None) -> str | None: ...
    def get_int(self, section: str, key: str, default: int | None = None) -> int | None: ...
    def get_bool(self, section: str, key: str, default: bool | None = None) -> bool | None: ...
    def as_dict(self) -> Mapping[str, Mapping[str, Any]]: ...
