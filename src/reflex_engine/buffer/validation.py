"""Clamping helpers shared across buffer operations."""

from __future__ import annotations

from .document import TextStorage
from .state import Position


def last_row(storage: TextStorage) -> int:
    """Highest legal cursor row, including the end-of-buffer virtual line."""

    count = storage.line_count()
    if storage.ends_with_newline():
        return count
    return count - 1


def max_column(storage: TextStorage, row: int) -> int:
    # The terminator cell is the end-of-line column; missing lines only allow 0.
    return storage.visible_length(row)


def clamp_position(storage: TextStorage, position: Position) -> None:
    row = max(0, min(position.y, last_row(storage)))
    column = max(0, min(position.x, max_column(storage, row)))
    if (row, column) != (position.y, position.x):
        position.y = row
        position.x = column


def absolute_index(storage: TextStorage, position: Position) -> int:
    return storage.char_offset_of_line(position.y) + position.x


__all__ = ["last_row", "max_column", "clamp_position", "absolute_index"]
