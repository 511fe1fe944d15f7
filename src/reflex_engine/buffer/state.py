"""Cursor positions, selections, and movement directions."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class Direction(str, Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


@dataclass(slots=True)
class Position:
    """Line/column pair plus the column the cursor wants to return to."""

    x: int = 0
    x_preferred: int = 0
    y: int = 0

    @classmethod
    def at(cls, y: int, x: int) -> "Position":
        return cls(x=x, x_preferred=x, y=y)

    def copy(self) -> "Position":
        return Position(x=self.x, x_preferred=self.x_preferred, y=self.y)

    def sync_preferred(self) -> None:
        self.x_preferred = self.x

    def move_to(self, y: int, x: int) -> None:
        self.y = y
        self.x = x
        self.x_preferred = x

    @property
    def coords(self) -> tuple[int, int]:
        return (self.y, self.x)


@dataclass(slots=True)
class Selection:
    """Anchor/cursor pair; edits happen at the cursor."""

    anchor: Position = field(default_factory=Position)
    cursor: Position = field(default_factory=Position)

    @classmethod
    def at(cls, y: int, x: int) -> "Selection":
        return cls(anchor=Position.at(y, x), cursor=Position.at(y, x))

    def copy(self) -> "Selection":
        return Selection(anchor=self.anchor.copy(), cursor=self.cursor.copy())

    def collapse(self) -> None:
        self.anchor = self.cursor.copy()

    def positions(self) -> tuple[Position, Position]:
        return (self.cursor, self.anchor)


__all__ = ["Direction", "Position", "Selection"]
