"""Multi-selection file buffer: editing, movement, scrolling, and persistence."""

from __future__ import annotations

from contextlib import AbstractContextManager
from dataclasses import dataclass
from pathlib import Path
from typing import ContextManager, List, Optional, Tuple

from reflex_engine.runtime import telemetry

from .document import NEWLINE, TextStorage
from .errors import BufferIOError, UntitledBufferError
from .state import Direction, Position, Selection
from .validation import absolute_index, clamp_position, max_column
from .viewport import Size, Viewport

UNTITLED = "[No Name]"


@dataclass(slots=True)
class BufferView:
    version: int
    text: str
    cursors: Tuple[Tuple[int, int], ...]
    file_path: Optional[str]
    dirty: bool


class FileBuffer:
    """Text storage plus an ordered, never-empty list of selections.

    Every mutating operation walks the selections in order and, after each
    edit, shifts the coordinates of all other selections that sit at or after
    the edit point, so no selection drifts onto text inserted before it.
    """

    def __init__(
        self,
        *,
        storage: Optional[TextStorage] = None,
        file_path: Optional[str] = None,
        encoding: str = "utf-8",
    ) -> None:
        self.storage = storage if storage is not None else TextStorage()
        self.file_path = file_path
        self.encoding = encoding
        self.dirty = False
        self.buffer_is_empty = len(self.storage) == 0
        self.selections: List[Selection] = [Selection()]
        self.primary_index = 0
        self.viewport = Viewport()

    @classmethod
    def from_text(cls, text: str, *, file_path: Optional[str] = None) -> "FileBuffer":
        return cls(storage=TextStorage.from_text(text), file_path=file_path)

    @classmethod
    def open(cls, path: str, *, encoding: str = "utf-8") -> "FileBuffer":
        """Read ``path`` into a clean buffer.

        Raises ``BufferIOError`` for missing files, permission problems, and
        content that is not valid ``encoding``.
        """

        with telemetry.span(
            "buffer::open", component="buffer", metadata={"path": path}
        ):
            try:
                storage = TextStorage.load(Path(path).read_bytes(), encoding=encoding)
            except (OSError, UnicodeDecodeError) as exc:
                telemetry.record_event(
                    "buffer.open_failed",
                    level="error",
                    data={"path": path, "reason": str(exc)},
                )
                raise BufferIOError(f"Cannot open '{path}': {exc}", path=path) from exc
        return cls(storage=storage, file_path=path, encoding=encoding)

    @property
    def name(self) -> str:
        return self.file_path or UNTITLED

    @property
    def primary_selection(self) -> Selection:
        return self.selections[self.primary_index]

    def file_name(self) -> Optional[str]:
        return self.file_path

    def is_dirty(self) -> bool:
        return self.dirty

    def is_empty(self) -> bool:
        return self.storage.line_count() == 0

    def line_count(self) -> int:
        return self.storage.line_count()

    def line(self, index: int) -> Optional[str]:
        return self.storage.line(index)

    def text(self) -> str:
        return self.storage.text()

    def snapshot(self) -> BufferView:
        return BufferView(
            version=self.storage.version,
            text=self.storage.text(),
            cursors=tuple(s.cursor.coords for s in self.selections),
            file_path=self.file_path,
            dirty=self.dirty,
        )

    def add_selection(self, y: int, x: int) -> Selection:
        selection = Selection.at(y, x)
        for position in selection.positions():
            clamp_position(self.storage, position)
            position.sync_preferred()
        self.selections.append(selection)
        return selection

    def set_primary(self, index: int) -> None:
        if not 0 <= index < len(self.selections):
            raise IndexError(f"No selection at index {index}")
        self.primary_index = index

    def insert(self, char: str) -> None:
        if len(char) != 1:
            raise ValueError(f"insert expects a single character, got {char!r}")
        with Transaction(self, "insert"):
            self._reclamp()
            for index in range(len(self.selections)):
                self._insert_at(index, char)
            self.buffer_is_empty = False
            self.dirty = True
            self._reclamp()

    def insert_text(self, text: str) -> None:
        for char in text:
            self.insert(char)

    def delete(self, backspace: bool) -> None:
        label = "backspace" if backspace else "delete"
        with Transaction(self, label):
            self._reclamp()
            removed = 0
            for index in range(len(self.selections)):
                removed += self._delete_at(index, backspace)
            if removed:
                self.dirty = True
            self._reclamp()

    def move_cursors(self, direction: Direction) -> None:
        storage = self.storage
        with Transaction(self, f"move_{direction.value}"):
            self._reclamp()
            for selection in self.selections:
                cursor = selection.cursor
                if direction is Direction.UP:
                    cursor.y = max(cursor.y - 1, 0)
                elif direction is Direction.DOWN:
                    if cursor.y < storage.line_count() - 1:
                        cursor.y += 1
                elif direction is Direction.LEFT:
                    cursor.x_preferred = max(cursor.x - 1, 0)
                elif cursor.x < max_column(storage, cursor.y):
                    cursor.x_preferred = cursor.x + 1
                cursor.x = min(cursor.x_preferred, max_column(storage, cursor.y))
                if direction in (Direction.LEFT, Direction.RIGHT):
                    cursor.sync_preferred()
                selection.collapse()

    def shift_viewport(self, size: Size) -> None:
        self.viewport.shift(self.primary_selection.cursor, size)

    def primary_cursor_screen_position(self, size: Size) -> Optional[Position]:
        return self.viewport.screen_position(self.primary_selection.cursor, size)

    def char_under_cursor(self, position: Position) -> str:
        line = self.storage.line(position.y)
        if line is None or not 0 <= position.x < len(line):
            return " "
        char = line[position.x]
        return " " if char == NEWLINE else char

    def save(self, path: Optional[str] = None) -> None:
        """Write the buffer to ``path`` or its own file.

        ``path`` rebinds the buffer on success. The dirty flag is cleared only
        when the write succeeds.
        """

        target = path or self.file_path
        if not target:
            raise UntitledBufferError(self.name)
        with telemetry.span(
            "buffer::save", component="buffer", metadata={"path": target}
        ):
            try:
                Path(target).write_bytes(self.storage.serialize(encoding=self.encoding))
            except (OSError, UnicodeEncodeError) as exc:
                telemetry.record_event(
                    "buffer.save_failed",
                    level="error",
                    data={"path": target, "reason": str(exc)},
                )
                raise BufferIOError(
                    f"Cannot write '{target}': {exc}", path=target
                ) from exc
        self.file_path = target
        self.dirty = False

    def _insert_at(self, index: int, char: str) -> None:
        storage = self.storage
        selection = self.selections[index]
        cursor = selection.cursor
        if cursor.y == storage.line_count():
            storage.insert(len(storage), NEWLINE)
        origin = cursor.coords
        storage.insert(absolute_index(storage, cursor), char)
        if char == NEWLINE:
            cursor.move_to(cursor.y + 1, 0)
        else:
            cursor.move_to(cursor.y, cursor.x + 1)
        selection.collapse()
        self._shift_after_insert(index, origin, char == NEWLINE)

    def _delete_at(self, index: int, backspace: bool) -> int:
        storage = self.storage
        selection = self.selections[index]
        cursor = selection.cursor
        at = absolute_index(storage, cursor)
        if backspace:
            if at == 0:
                return 0
            at -= 1
            if cursor.x == 0:
                row = cursor.y - 1
                origin = (row, storage.visible_length(row))
            else:
                origin = (cursor.y, cursor.x - 1)
        else:
            if cursor.y >= storage.line_count() or at >= len(storage):
                return 0
            origin = cursor.coords

        joined = storage.char_at(at) == NEWLINE
        storage.delete(at, at)
        cursor.move_to(*origin)
        selection.collapse()
        self._shift_after_delete(index, origin, joined)
        return 1

    def _others(self, index: int):
        for other_index, other in enumerate(self.selections):
            if other_index != index:
                yield from other.positions()

    def _shift_after_insert(
        self, index: int, origin: Tuple[int, int], newline: bool
    ) -> None:
        row, column = origin
        for position in self._others(index):
            if position.y == row and position.x > column:
                if newline:
                    position.move_to(row + 1, position.x - column)
                else:
                    position.move_to(row, position.x + 1)
            elif newline and position.y > row:
                position.y += 1

    def _shift_after_delete(
        self, index: int, origin: Tuple[int, int], joined: bool
    ) -> None:
        row, column = origin
        for position in self._others(index):
            if joined:
                if position.y == row + 1:
                    position.move_to(row, column + position.x)
                elif position.y > row + 1:
                    position.y -= 1
            elif position.y == row and position.x > column:
                position.move_to(row, position.x - 1)

    def _reclamp(self) -> None:
        for selection in self.selections:
            for position in selection.positions():
                clamp_position(self.storage, position)
        self.primary_index = min(self.primary_index, len(self.selections) - 1)


class Transaction(AbstractContextManager["Transaction"]):
    """Profiles one buffer operation and rolls selection state back on failure."""

    def __init__(self, buffer: FileBuffer, label: str) -> None:
        self.buffer = buffer
        self.label = label
        self._span_cm: Optional[ContextManager[object]] = None
        self._saved: List[Selection] = []
        self._flags: Tuple[bool, bool] = (False, False)
        self._version = 0

    def __enter__(self) -> "Transaction":
        self._saved = [selection.copy() for selection in self.buffer.selections]
        self._flags = (self.buffer.dirty, self.buffer.buffer_is_empty)
        self._version = self.buffer.storage.version
        self._span_cm = telemetry.span(
            name=f"buffer::{self.label}",
            component="buffer",
            metadata={
                "buffer": self.buffer.name,
                "selections": len(self._saved),
            },
        )
        self._span_cm.__enter__()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if exc_type is not None:
            # Storage ops validate before mutating; selections are restored and
            # re-fitted to whatever text is left.
            self.buffer.selections = self._saved
            self.buffer.dirty, self.buffer.buffer_is_empty = self._flags
            if self.buffer.storage.version != self._version:
                self.buffer.dirty = True
            self.buffer._reclamp()
        if self._span_cm is not None:
            self._span_cm.__exit__(exc_type, exc, tb)
        return False


__all__ = ["BufferView", "FileBuffer", "Transaction", "UNTITLED"]
