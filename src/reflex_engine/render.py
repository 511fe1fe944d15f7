"""Turn a session into screen rows, a status line, and a caret position."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from reflex_engine import __version__
from reflex_engine.buffer import UNTITLED, FileBuffer, Position, Size
from reflex_engine.runtime.config import EditorConfig
from reflex_engine.runtime.session import EditorSession, ModeName

FILLER = "~"


@dataclass(slots=True)
class Frame:
    rows: List[str]
    status: str
    command: str
    cursor: Optional[Position]


def visible_row(line: str, offset_x: int, width: int) -> str:
    """Slice ``line`` to the viewport columns, dropping its terminator."""

    if line.endswith("\n"):
        line = line[:-1]
    return line[offset_x : offset_x + width]


def welcome_row(config: EditorConfig, width: int) -> str:
    message = config.welcome.format(version=__version__)
    padding = max(width - len(message), 0) // 2
    row = FILLER + " " * max(padding - 1, 0) + message
    return row[:width]


def buffer_rows(buffer: FileBuffer, size: Size, config: EditorConfig) -> List[str]:
    rows: List[str] = []
    offset = buffer.viewport
    for screen_row in range(size.height):
        line = buffer.line(screen_row + offset.y)
        if line is not None:
            rows.append(visible_row(line, offset.x, size.width))
        elif buffer.buffer_is_empty and screen_row == size.height // 3:
            rows.append(welcome_row(config, size.width))
        else:
            rows.append(FILLER)
    return rows


def status_line(buffer: FileBuffer, mode: ModeName, width: int, config: EditorConfig) -> str:
    name = (buffer.file_name() or UNTITLED)[: config.name_width]
    dirty = " (Dirty)" if buffer.is_dirty() else ""
    status = f"{name}{dirty} - {buffer.line_count()} lines"[:width]
    return f" {mode.label} {status}"


def render_frame(session: EditorSession) -> Frame:
    buffer = session.current_buffer
    size = session.viewport_size
    config = session.config
    if session.mode is ModeName.COMMAND:
        command = ":" + session.command_line.text
        cursor: Optional[Position] = Position(x=session.command_line.cursor + 1, y=size.height)
    else:
        command = ""
        cursor = buffer.primary_cursor_screen_position(size)
    return Frame(
        rows=buffer_rows(buffer, size, config),
        status=status_line(buffer, session.mode, size.width, config),
        command=command,
        cursor=cursor,
    )


__all__ = ["Frame", "render_frame", "buffer_rows", "status_line", "visible_row"]
