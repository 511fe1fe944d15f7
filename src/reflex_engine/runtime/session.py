"""Explicit editor session: open buffers, active mode, and the command line."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from reflex_engine.buffer import BufferIOError, FileBuffer, Size

from . import telemetry
from .config import EditorConfig


class ModeName(str, Enum):
    NORMAL = "normal"
    INSERT = "insert"
    COMMAND = "command"

    @property
    def label(self) -> str:
        return self.value.upper()


@dataclass(slots=True)
class CommandLine:
    """Text typed after ``:`` plus its caret and submission history."""

    text: str = ""
    cursor: int = 0
    history: List[str] = field(default_factory=list)

    def insert(self, text: str) -> None:
        self.text = self.text[: self.cursor] + text + self.text[self.cursor :]
        self.cursor += len(text)

    def delete_backward(self) -> None:
        if self.cursor > 0:
            self.text = self.text[: self.cursor - 1] + self.text[self.cursor :]
            self.cursor -= 1

    def delete_forward(self) -> None:
        if self.cursor < len(self.text):
            self.text = self.text[: self.cursor] + self.text[self.cursor + 1 :]

    def move_left(self) -> None:
        self.cursor = max(self.cursor - 1, 0)

    def move_right(self) -> None:
        self.cursor = min(self.cursor + 1, len(self.text))

    def clear(self) -> None:
        self.text = ""
        self.cursor = 0

    def submit(self) -> str:
        command = self.text
        self.history.append(command)
        self.clear()
        return command


@dataclass
class EditorSession:
    """Everything one editing session owns, passed explicitly to modes."""

    buffers: List[FileBuffer] = field(default_factory=lambda: [FileBuffer()])
    current_index: int = 0
    config: EditorConfig = field(default_factory=EditorConfig)
    size: Optional[Size] = None
    mode: ModeName = ModeName.NORMAL
    command_line: CommandLine = field(default_factory=CommandLine)
    should_quit: bool = False

    def __post_init__(self) -> None:
        if not self.buffers:
            raise ValueError("A session needs at least one buffer")
        if self.size is None:
            self.size = self.config.size

    @classmethod
    def from_path(
        cls, path: Optional[str], *, config: Optional[EditorConfig] = None
    ) -> "EditorSession":
        session = cls(config=config or EditorConfig())
        if path:
            session.buffers = [session._load(path)]
        return session

    @property
    def current_buffer(self) -> FileBuffer:
        return self.buffers[self.current_index]

    @property
    def viewport_size(self) -> Size:
        return self.size or self.config.size

    def open_buffer(self, path: str) -> FileBuffer:
        """Open ``path`` in a new buffer and focus it."""

        buffer = self._load(path)
        self.buffers.append(buffer)
        self.current_index = len(self.buffers) - 1
        buffer.shift_viewport(self.viewport_size)
        return buffer

    def resize(self, size: Size) -> None:
        self.size = size
        self.current_buffer.shift_viewport(size)

    def _load(self, path: str) -> FileBuffer:
        try:
            return FileBuffer.open(path, encoding=self.config.encoding)
        except BufferIOError as exc:
            if not isinstance(exc.__cause__, FileNotFoundError):
                raise
        telemetry.record_event("session.new_file", data={"path": path})
        return FileBuffer(file_path=path, encoding=self.config.encoding)


__all__ = ["CommandLine", "EditorSession", "ModeName"]
