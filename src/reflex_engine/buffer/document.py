"""Character storage addressed by absolute index and segmented into lines."""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass, field
from typing import Iterator, List, Optional

from .errors import OutOfRangeError

NEWLINE = "\n"


def _split_lines(text: str) -> List[str]:
    """Split ``text`` on ``\\n`` only, keeping terminators and dropping empties."""

    parts = text.split(NEWLINE)
    lines = [part + NEWLINE for part in parts[:-1]]
    if parts[-1]:
        lines.append(parts[-1])
    return lines


@dataclass(slots=True)
class TextStorage:
    """Mutable text kept as a list of terminated lines.

    Every line keeps its ``\\n``; only the last one may be unterminated. A
    parallel list of line start offsets makes absolute-index lookups a
    bisection, and is rebuilt from the first touched line after each edit.
    """

    _lines: List[str] = field(default_factory=list)
    _starts: List[int] = field(default_factory=list)
    _length: int = 0
    version: int = 0

    def __post_init__(self) -> None:
        self._reindex(0)

    @classmethod
    def from_text(cls, text: str) -> "TextStorage":
        return cls(_lines=_split_lines(text))

    @classmethod
    def load(cls, data: bytes, *, encoding: str = "utf-8") -> "TextStorage":
        """Decode ``data`` without newline translation.

        Raises ``UnicodeDecodeError`` when the bytes are not valid ``encoding``.
        """

        return cls.from_text(data.decode(encoding))

    def serialize(self, *, encoding: str = "utf-8") -> bytes:
        return self.text().encode(encoding)

    def text(self) -> str:
        return "".join(self._lines)

    def __len__(self) -> int:
        return self._length

    def __iter__(self) -> Iterator[str]:
        return iter(tuple(self._lines))

    def line_count(self) -> int:
        return len(self._lines)

    def line(self, index: int) -> Optional[str]:
        if 0 <= index < len(self._lines):
            return self._lines[index]
        return None

    def visible_length(self, index: int) -> int:
        line = self.line(index)
        if line is None:
            return 0
        if line.endswith(NEWLINE):
            return len(line) - 1
        return len(line)

    def ends_with_newline(self) -> bool:
        return not self._lines or self._lines[-1].endswith(NEWLINE)

    def char_offset_of_line(self, index: int) -> int:
        if index == len(self._lines):
            return self._length
        if not 0 <= index < len(self._lines):
            raise OutOfRangeError(f"Line {index} out of range", index=index)
        return self._starts[index]

    def char_at(self, at: int) -> str:
        if not 0 <= at < self._length:
            raise OutOfRangeError(f"Index {at} out of range", index=at)
        row = self._line_of(at)
        return self._lines[row][at - self._starts[row]]

    def insert(self, at: int, text: str) -> None:
        if not 0 <= at <= self._length:
            raise OutOfRangeError(f"Insert index {at} out of range", index=at)
        if not text:
            return
        row = self._line_of(at) if at < self._length else self._append_row()
        segment = self._lines[row] if row < len(self._lines) else ""
        column = at - self.char_offset_of_line(row)
        updated = segment[:column] + text + segment[column:]
        self._splice(row, row + 1, updated)

    def delete(self, start: int, end: int) -> None:
        """Remove the inclusive range ``start..=end``."""

        if start > end or start < 0 or end >= self._length:
            raise OutOfRangeError(
                f"Delete range {start}..={end} out of range", index=end
            )
        first = self._line_of(start)
        # The range may swallow a terminator, so the following line is re-split too.
        last = min(self._line_of(end) + 2, len(self._lines))
        base = self._starts[first]
        segment = "".join(self._lines[first:last])
        updated = segment[: start - base] + segment[end - base + 1 :]
        self._splice(first, last, updated)

    def _append_row(self) -> int:
        # Appending lands on the unterminated last line, or on a new one.
        if self._lines and not self._lines[-1].endswith(NEWLINE):
            return len(self._lines) - 1
        return len(self._lines)

    def _line_of(self, at: int) -> int:
        return bisect_right(self._starts, at) - 1

    def _splice(self, start: int, end: int, text: str) -> None:
        self._lines[start:end] = _split_lines(text)
        self.version += 1
        self._reindex(start)

    def _reindex(self, start: int) -> None:
        del self._starts[start:]
        offset = self._starts[-1] + len(self._lines[start - 1]) if start else 0
        for line in self._lines[start:]:
            self._starts.append(offset)
            offset += len(line)
        self._length = offset
