from __future__ import annotations

from pathlib import Path

import pytest

from reflex_engine.buffer import BufferIOError, FileBuffer, UntitledBufferError


def test_open_reads_file(tmp_path: Path) -> None:
    path = tmp_path / "notes.txt"
    path.write_bytes(b"first\nsecond")

    buffer = FileBuffer.open(str(path))

    assert buffer.line_count() == 2
    assert buffer.line(1) == "second"
    assert buffer.file_name() == str(path)
    assert buffer.is_dirty() is False
    assert buffer.buffer_is_empty is False


def test_open_missing_file_fails(tmp_path: Path) -> None:
    missing = tmp_path / "nope.txt"

    with pytest.raises(BufferIOError) as excinfo:
        FileBuffer.open(str(missing))

    assert excinfo.value.path == str(missing)
    assert isinstance(excinfo.value.__cause__, FileNotFoundError)


def test_open_directory_fails(tmp_path: Path) -> None:
    with pytest.raises(BufferIOError):
        FileBuffer.open(str(tmp_path))


def test_open_invalid_encoding_fails(tmp_path: Path) -> None:
    path = tmp_path / "binary.bin"
    path.write_bytes(b"\xff\xfe\xfa")

    with pytest.raises(BufferIOError):
        FileBuffer.open(str(path))


@pytest.mark.parametrize("data", [b"", b"no newline", b"a\n\nb\n", b"crlf\r\nline\r\n"])
def test_save_writes_bytes_back_unchanged(tmp_path: Path, data: bytes) -> None:
    path = tmp_path / "round.txt"
    path.write_bytes(data)

    FileBuffer.open(str(path)).save()

    assert path.read_bytes() == data


def test_save_clears_dirty(tmp_path: Path) -> None:
    path = tmp_path / "edit.txt"
    path.write_bytes(b"bc\n")
    buffer = FileBuffer.open(str(path))

    buffer.insert("a")
    assert buffer.is_dirty()
    buffer.save()

    assert buffer.is_dirty() is False
    assert path.read_bytes() == b"abc\n"


def test_save_untitled_buffer_requires_path() -> None:
    buffer = FileBuffer.from_text("draft")
    buffer.insert("x")

    with pytest.raises(UntitledBufferError):
        buffer.save()

    assert buffer.is_dirty()


def test_save_to_path_rebinds_buffer(tmp_path: Path) -> None:
    target = tmp_path / "draft.txt"
    buffer = FileBuffer.from_text("draft\n")

    buffer.save(str(target))

    assert buffer.file_name() == str(target)
    assert target.read_text() == "draft\n"


def test_failed_save_keeps_dirty_and_path(tmp_path: Path) -> None:
    kept = tmp_path / "kept.txt"
    kept.write_bytes(b"x")
    buffer = FileBuffer.open(str(kept))
    buffer.insert("y")

    with pytest.raises(BufferIOError):
        buffer.save(str(tmp_path / "missing" / "dir" / "out.txt"))

    assert buffer.is_dirty()
    assert buffer.file_name() == str(kept)
    assert kept.read_bytes() == b"x"


def test_save_unencodable_text_fails(tmp_path: Path) -> None:
    path = tmp_path / "ascii.txt"
    buffer = FileBuffer.from_text("café\n", file_path=str(path))
    buffer.encoding = "ascii"

    with pytest.raises(BufferIOError):
        buffer.save()

    assert not path.exists()
