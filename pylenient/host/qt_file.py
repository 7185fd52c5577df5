from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from pathlib import Path

from PyQt6.QtCore import QFile, QFileInfo, QFileSystemWatcher, QIODevice, QSaveFile

from pylenient.domain.interfaces import IDisposable, IFileHandle, IReadStream, IWriteStream
from pylenient.utils.events import Emitter

logger = logging.getLogger(__name__)


class FileReadStream(IReadStream):
    """Yields the whole file as one UTF-8 chunk (the editor never streams partial files)."""

    def __init__(self, path: Path) -> None:
        self._path = path
        self._closed = False

    def __iter__(self) -> Iterator[str]:
        if self._closed:
            return
        f = QFile(str(self._path))
        if not f.exists():
            raise FileNotFoundError(str(self._path))
        if not f.open(QIODevice.OpenModeFlag.ReadOnly):
            raise OSError(f"Cannot open for read: {self._path}")
        try:
            data = bytes(f.readAll())
        finally:
            f.close()
        if data:
            yield data.decode("utf-8")

    def close(self) -> None:
        self._closed = True


class FileWriteStream(IWriteStream):
    """Atomic write: content lands on disk only when `end()` commits the QSaveFile."""

    def __init__(self, path: Path) -> None:
        self._path = path
        self._sf = QSaveFile(str(path))
        if not self._sf.open(QIODevice.OpenModeFlag.WriteOnly):
            raise OSError(f"Cannot open for write: {path}")

    def write(self, text: str) -> None:
        if self._sf.write(text.encode("utf-8")) < 0:
            self._sf.cancelWriting()
            raise OSError(f"Write failed for: {self._path}")

    def end(self) -> None:
        if not self._sf.commit():
            raise OSError(f"Commit failed for: {self._path}")


class QtFile(IFileHandle):
    """
    The editor's own file handle for a path on disk.

    Change/delete notifications come from a QFileSystemWatcher that is only
    created once somebody subscribes.
    """

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path)
        self._did_change = Emitter()
        self._did_delete = Emitter()
        self._did_rename = Emitter()
        self._watcher: QFileSystemWatcher | None = None

    def __repr__(self) -> str:
        return f"QtFile({str(self._path)!r})"

    def get_path(self) -> str:
        return str(self._path)

    def exists(self) -> bool:
        return QFileInfo(str(self._path)).exists()

    def create_read_stream(self) -> FileReadStream:
        return FileReadStream(self._path)

    def create_write_stream(self) -> FileWriteStream:
        return FileWriteStream(self._path)

    def on_did_change(self, callback: Callable[[], None]) -> IDisposable:
        self._watch()
        return self._did_change.on(callback)

    def on_did_delete(self, callback: Callable[[], None]) -> IDisposable:
        self._watch()
        return self._did_delete.on(callback)

    def on_did_rename(self, callback: Callable[[str], None]) -> IDisposable:
        return self._did_rename.on(callback)

    def rename(self, new_path: Path | str) -> None:
        target = Path(new_path)
        if not QFile.rename(str(self._path), str(target)):
            raise OSError(f"Cannot rename {self._path} to {target}")
        if self._watcher is not None:
            self._watcher.removePath(str(self._path))
        self._path = target
        self._watch()
        self._did_rename.emit(str(target))

    # ----------------------------- watcher -----------------------------

    def _watch(self) -> None:
        if self._watcher is None:
            self._watcher = QFileSystemWatcher()
            self._watcher.fileChanged.connect(self._on_file_changed)
        path = str(self._path)
        if self.exists() and path not in self._watcher.files():
            self._watcher.addPath(path)

    def _on_file_changed(self, path: str) -> None:
        if path != str(self._path):
            return
        if self.exists():
            # Atomic replaces (QSaveFile and friends) drop the path from the watcher.
            self._watch()
            self._did_change.emit()
        else:
            logger.debug("Watched file disappeared: %s", path)
            self._did_delete.emit()
