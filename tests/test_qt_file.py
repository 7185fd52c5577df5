from __future__ import annotations

from pathlib import Path

import pytest

from pylenient.host.qt_file import FileReadStream, FileWriteStream, QtFile


def test_read_stream_yields_utf8_text(tmp_path: Path):
    p = tmp_path / "a.js"
    p.write_text("const s = 'é';\n", encoding="utf-8")

    stream = QtFile(p).create_read_stream()
    try:
        assert "".join(stream) == "const s = 'é';\n"
    finally:
        stream.close()


def test_read_stream_of_empty_file_yields_nothing(tmp_path: Path):
    p = tmp_path / "empty.js"
    p.write_text("", encoding="utf-8")
    assert list(FileReadStream(p)) == []


def test_read_stream_missing_file_raises(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        list(FileReadStream(tmp_path / "missing.js"))


def test_closed_read_stream_yields_nothing(tmp_path: Path):
    p = tmp_path / "a.js"
    p.write_text("x", encoding="utf-8")
    stream = FileReadStream(p)
    stream.close()
    assert list(stream) == []


def test_write_stream_commits_on_end(tmp_path: Path):
    p = tmp_path / "out.js"
    p.write_text("old", encoding="utf-8")

    stream = QtFile(p).create_write_stream()
    stream.write("new ")
    stream.write("content")
    # atomic: nothing visible until commit
    assert p.read_text(encoding="utf-8") == "old"
    stream.end()

    assert p.read_text(encoding="utf-8") == "new content"


def test_write_stream_unwritable_path_raises(tmp_path: Path):
    with pytest.raises(OSError) as exc_info:
        FileWriteStream(tmp_path / "missing_dir" / "x.js")
    assert "Cannot open for write" in str(exc_info.value)


def test_exists_and_path(tmp_path: Path):
    p = tmp_path / "a.js"
    f = QtFile(p)
    assert f.get_path() == str(p)
    assert f.exists() is False
    p.write_text("x", encoding="utf-8")
    assert f.exists() is True


def test_rename_moves_file_and_notifies(qapp, tmp_path: Path):
    p = tmp_path / "a.js"
    p.write_text("x", encoding="utf-8")
    f = QtFile(p)
    seen = []
    f.on_did_rename(seen.append)

    target = tmp_path / "b.js"
    f.rename(target)

    assert seen == [str(target)]
    assert f.get_path() == str(target)
    assert target.read_text(encoding="utf-8") == "x"
    assert not p.exists()


def test_rename_onto_existing_file_raises(qapp, tmp_path: Path):
    p = tmp_path / "a.js"
    p.write_text("x", encoding="utf-8")
    (tmp_path / "b.js").write_text("y", encoding="utf-8")

    with pytest.raises(OSError):
        QtFile(p).rename(tmp_path / "b.js")


def test_change_subscription_is_disposable(qapp, tmp_path: Path):
    p = tmp_path / "a.js"
    p.write_text("x", encoding="utf-8")
    f = QtFile(p)
    seen = []

    sub = f.on_did_change(lambda: seen.append("changed"))
    f._on_file_changed(str(p))
    sub.dispose()
    f._on_file_changed(str(p))

    assert seen == ["changed"]


def test_delete_is_reported_when_watched_file_disappears(qapp, tmp_path: Path):
    p = tmp_path / "a.js"
    p.write_text("x", encoding="utf-8")
    f = QtFile(p)
    seen = []
    f.on_did_delete(lambda: seen.append("deleted"))

    p.unlink()
    f._on_file_changed(str(p))

    assert seen == ["deleted"]
