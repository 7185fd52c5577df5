from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from types import TracebackType

from pylenient.domain.errors import WriteFailure
from pylenient.domain.interfaces import IFileHandle, IReadStream, IWriteStream
from pylenient.domain.models import Convert

logger = logging.getLogger(__name__)


class TransformReadStream(IReadStream):
    """
    Read side of a mapped file: every chunk from `source` goes through `convert`.

    Conversion errors are not caught here; they surface from iteration so the
    editor's own load-failure path handles them.
    """

    def __init__(self, source: IReadStream, convert: Convert) -> None:
        self._source = source
        self._convert = convert

    def __iter__(self) -> Iterator[str]:
        for chunk in self._source:
            yield self._convert(chunk)

    def close(self) -> None:
        self._source.close()


class TransactionalWriteStream(IWriteStream):
    """
    Write side of a mapped file.

    The editor truncates the destination as soon as a write stream is opened,
    so a conversion failing halfway through a streamed write would lose the
    file. Instead the complete text is collected, converted in one go on
    `end()`, and only then is the underlying write stream opened. If the
    conversion fails the underlying file is never touched: `on_error` is
    called and WriteFailure is raised so the editor keeps the document dirty.
    """

    def __init__(
        self,
        file: IFileHandle,
        convert: Convert,
        *,
        on_error: Callable[[Exception], None],
        on_success: Callable[[], None] | None = None,
    ) -> None:
        self._file = file
        self._convert = convert
        self._on_error = on_error
        self._on_success = on_success
        self._chunks: list[str] = []
        self._underlying: IWriteStream | None = None
        self._failure: WriteFailure | None = None
        self._ended = False

    @property
    def opened(self) -> bool:
        """Whether the underlying store has been opened for writing."""
        return self._underlying is not None

    def write(self, text: str) -> None:
        if self._failure is not None:
            raise self._failure
        if self._ended:
            raise ValueError("write after end")
        self._chunks.append(text)

    def end(self) -> None:
        if self._failure is not None:
            raise self._failure
        if self._ended:
            return
        self._ended = True

        try:
            converted = self._convert("".join(self._chunks))
        except Exception as e:
            self._on_error(e)
            self._failure = WriteFailure(f"Could not save {self._file.get_path()}: {e}")
            raise self._failure from e
        finally:
            self._chunks.clear()

        # Converted successfully, so it is now safe to open (and wipe) the file.
        self._underlying = self._file.create_write_stream()
        self._underlying.write(converted)
        self._underlying.end()
        logger.debug("Saved %s through lenient conversion", self._file.get_path())
        if self._on_success is not None:
            self._on_success()

    def __enter__(self) -> TransactionalWriteStream:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> bool:
        if exc_type is None:
            self.end()
        return False
