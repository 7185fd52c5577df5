from __future__ import annotations

import pytest

from conftest import FakeFile, failing, fake_converter_set
from pylenient.domain.errors import WriteFailure
from pylenient.lenient.file_proxy import (
    get_mapped_file,
    get_original_file,
    is_mapped_file,
    new_forwarding_object,
)


def _mapped(file, **kwargs):
    converters = fake_converter_set(**kwargs)
    errors: list[Exception] = []
    mapped = get_mapped_file(file, converters, on_error=errors.append)
    return mapped, errors


def test_forwarding_object_binds_public_methods_to_original():
    file = FakeFile(path="/p/x.js")
    proxy = new_forwarding_object(file)

    assert proxy.get_path() == "/p/x.js"
    assert proxy.exists.__self__ is file
    assert not isinstance(proxy, FakeFile)
    assert not hasattr(proxy, "did_change")
    assert not hasattr(proxy, "_chunks")


def test_forwarding_object_forwards_subscriptions():
    file = FakeFile()
    proxy = new_forwarding_object(file)
    calls = []

    sub = proxy.on_did_change(lambda: calls.append("changed"))
    file.did_change.emit()
    sub.dispose()
    file.did_change.emit()

    assert calls == ["changed"]


class _WithProperty:
    def __init__(self) -> None:
        self.reads = 0

    @property
    def expensive(self):
        self.reads += 1
        raise RuntimeError("must not be evaluated")

    def ping(self) -> str:
        return "pong"


def test_forwarding_object_skips_properties():
    obj = _WithProperty()
    proxy = new_forwarding_object(obj)

    assert proxy.ping() == "pong"
    assert not hasattr(proxy, "expensive")
    assert obj.reads == 0


def test_mapped_file_reads_lenient_chunk_by_chunk():
    file = FakeFile(chunks=["a;\n", "b;\n"])
    mapped, _ = _mapped(file)

    stream = mapped.create_read_stream()
    assert list(stream) == ["a\n", "b\n"]
    stream.close()
    assert file.read_streams[0].closed is True


def test_mapped_file_writes_canonical():
    file = FakeFile(content="")
    mapped, errors = _mapped(file)

    stream = mapped.create_write_stream()
    stream.write("a\nb")
    stream.end()

    assert file.content == "a;\nb;"
    assert errors == []


def test_mapped_file_failed_write_leaves_file_untouched():
    file = FakeFile(content="keep;")
    mapped, errors = _mapped(file, to_canonical=failing)

    stream = mapped.create_write_stream()
    stream.write("broken")
    with pytest.raises(WriteFailure):
        stream.end()

    assert file.content == "keep;"
    assert file.write_streams == []
    assert len(errors) == 1


def test_mapped_file_forwards_everything_else():
    file = FakeFile(path="/p/y.js")
    mapped, _ = _mapped(file)

    assert mapped.get_path() == "/p/y.js"
    assert mapped.exists() is True
    assert callable(mapped.on_did_rename)


def test_original_file_lookup():
    file = FakeFile()
    mapped, _ = _mapped(file)

    assert is_mapped_file(mapped)
    assert not is_mapped_file(file)
    assert not is_mapped_file(new_forwarding_object(file))
    assert get_original_file(mapped) is file
    assert get_original_file(file) is file
    assert get_original_file(None) is None
