from __future__ import annotations

from pathlib import Path

import pytest

from reflex_engine.buffer import BufferIOError, FileBuffer, Size
from reflex_engine.runtime import telemetry
from reflex_engine.runtime.config import EditorConfig
from reflex_engine.runtime.session import CommandLine, EditorSession


def test_config_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("REFLEX_WIDTH", "120")
    monkeypatch.setenv("REFLEX_HEIGHT", "oops")
    monkeypatch.setenv("REFLEX_NAME_WIDTH", "0")
    monkeypatch.setenv("REFLEX_ENCODING", "latin-1")

    config = EditorConfig.from_env()

    assert config.size == Size(120, 24)
    assert config.name_width == 1
    assert config.encoding == "latin-1"


def test_session_from_missing_path_binds_empty_buffer(tmp_path: Path) -> None:
    path = str(tmp_path / "new.txt")

    session = EditorSession.from_path(path)

    buffer = session.current_buffer
    assert buffer.file_name() == path
    assert buffer.is_empty()
    assert buffer.buffer_is_empty


def test_session_propagates_other_open_errors(tmp_path: Path) -> None:
    with pytest.raises(BufferIOError):
        EditorSession.from_path(str(tmp_path))


def test_open_buffer_focuses_new_buffer(tmp_path: Path) -> None:
    path = tmp_path / "second.txt"
    path.write_text("hello\n")
    session = EditorSession()

    buffer = session.open_buffer(str(path))

    assert session.current_buffer is buffer
    assert len(session.buffers) == 2
    assert buffer.line(0) == "hello\n"


def test_buffers_do_not_share_state() -> None:
    session = EditorSession(
        buffers=[FileBuffer.from_text("one\n"), FileBuffer.from_text("two\n")]
    )

    session.buffers[0].insert("x")

    assert session.buffers[1].text() == "two\n"
    assert session.buffers[1].is_dirty() is False


def test_session_requires_a_buffer() -> None:
    with pytest.raises(ValueError):
        EditorSession(buffers=[])


def test_resize_reshifts_current_viewport() -> None:
    buffer = FileBuffer.from_text("line\n" * 30)
    buffer.selections[0].cursor.move_to(25, 0)
    session = EditorSession(buffers=[buffer])

    session.resize(Size(10, 5))

    assert session.viewport_size == Size(10, 5)
    assert buffer.viewport.y == 21


def test_command_line_editing() -> None:
    line = CommandLine()

    line.insert("wq")
    line.move_left()
    line.insert("x")
    line.move_right()
    line.move_right()
    line.delete_backward()
    line.move_left()
    line.move_left()
    line.delete_forward()

    assert line.text == "x"
    assert line.cursor == 0
    assert line.submit() == "x"
    assert line.history == ["x"]
    assert (line.text, line.cursor) == ("", 0)


def test_configure_rejects_conflicting_arguments() -> None:
    with pytest.raises(ValueError):
        telemetry.configure(config=object(), preset="development")
