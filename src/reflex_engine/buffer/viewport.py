"""Scroll offset that trails the primary cursor."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .state import Position


@dataclass(frozen=True, slots=True)
class Size:
    """Visible rectangle in character cells."""

    width: int
    height: int

    def __post_init__(self) -> None:
        if self.width < 1 or self.height < 1:
            raise ValueError(f"Size must be at least 1x1, got {self.width}x{self.height}")


@dataclass(slots=True)
class Viewport:
    """Top-left buffer coordinate mapped to the screen origin."""

    x: int = 0
    y: int = 0

    def shift(self, cursor: Position, size: Size) -> None:
        """Scroll just enough for ``cursor`` to land inside ``size``."""

        if cursor.x - self.x >= size.width:
            self.x = cursor.x - size.width + 1
        elif self.x > cursor.x:
            self.x = cursor.x
        if cursor.y - self.y >= size.height:
            self.y = cursor.y - size.height + 1
        elif self.y > cursor.y:
            self.y = cursor.y

    def contains(self, cursor: Position, size: Size) -> bool:
        return (
            self.x <= cursor.x < self.x + size.width
            and self.y <= cursor.y < self.y + size.height
        )

    def screen_position(self, cursor: Position, size: Size) -> Optional[Position]:
        if not self.contains(cursor, size):
            return None
        return Position(x=cursor.x - self.x, y=cursor.y - self.y)


__all__ = ["Size", "Viewport"]
