from __future__ import annotations

import pytest

from conftest import FakeFile, FakeReadStream, failing
from pylenient.domain.errors import ParseError, WriteFailure
from pylenient.lenient.streams import TransactionalWriteStream, TransformReadStream


def test_read_stream_converts_every_chunk():
    source = FakeReadStream(["a", "b"])
    stream = TransformReadStream(source, str.upper)

    assert list(stream) == ["A", "B"]

    stream.close()
    assert source.closed is True


def test_read_stream_conversion_errors_surface_from_iteration():
    stream = TransformReadStream(FakeReadStream(["x"]), failing)
    with pytest.raises(ParseError):
        list(stream)


def test_write_stream_converts_whole_text_once_on_end():
    seen = []

    def convert(text: str) -> str:
        seen.append(text)
        return text.upper()

    file = FakeFile(content="old")
    stream = TransactionalWriteStream(file, convert, on_error=pytest.fail)
    stream.write("ab")
    stream.write("cd")

    assert file.content == "old"
    assert stream.opened is False

    stream.end()

    assert seen == ["abcd"]
    assert file.content == "ABCD"
    assert stream.opened is True
    assert file.write_streams[0].ended is True


def test_failed_conversion_never_opens_the_file():
    errors = []
    file = FakeFile(content="old")
    stream = TransactionalWriteStream(file, failing, on_error=errors.append)
    stream.write("new")

    with pytest.raises(WriteFailure) as exc_info:
        stream.end()

    assert file.content == "old"
    assert file.write_streams == []
    assert stream.opened is False
    assert len(errors) == 1
    assert isinstance(exc_info.value.__cause__, ParseError)
    assert "/project/a.js" in str(exc_info.value)

    # the stream stays failed
    with pytest.raises(WriteFailure):
        stream.write("more")
    with pytest.raises(WriteFailure):
        stream.end()
    assert len(errors) == 1


def test_success_callback_runs_after_commit():
    file = FakeFile()
    seen = []
    stream = TransactionalWriteStream(
        file,
        lambda t: t,
        on_error=pytest.fail,
        on_success=lambda: seen.append(file.content),
    )
    stream.write("done")
    stream.end()
    stream.end()

    assert seen == ["done"]


def test_empty_save_writes_converted_empty_text():
    file = FakeFile(content="old")
    stream = TransactionalWriteStream(file, lambda t: t + "\n", on_error=pytest.fail)
    stream.end()
    assert file.content == "\n"


def test_write_after_end_is_rejected():
    stream = TransactionalWriteStream(FakeFile(), lambda t: t, on_error=pytest.fail)
    stream.end()
    with pytest.raises(ValueError):
        stream.write("late")


def test_context_manager_commits_on_clean_exit_only():
    file = FakeFile(content="old")
    with TransactionalWriteStream(file, str.upper, on_error=pytest.fail) as stream:
        stream.write("new")
    assert file.content == "NEW"

    file = FakeFile(content="old")
    with pytest.raises(RuntimeError):
        with TransactionalWriteStream(file, str.upper, on_error=pytest.fail) as stream:
            stream.write("new")
            raise RuntimeError("editor crashed")
    assert file.content == "old"
    assert file.write_streams == []
