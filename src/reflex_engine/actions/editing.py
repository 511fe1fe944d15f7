"""Buffer editing and cursor movement verbs.

Each action performs exactly one buffer operation on every selection of the
current buffer, then scrolls the viewport so the primary cursor stays visible.
"""

from __future__ import annotations

from reflex_engine.buffer import Direction
from reflex_engine.modes.base import KeyInput, ModeContext, ModeResult


def _after_edit(context: ModeContext, status: str) -> ModeResult:
    buffer = context.buffer
    buffer.shift_viewport(context.session.viewport_size)
    context.bus.emit(
        "buffer.changed",
        {
            "buffer": buffer.name,
            "version": buffer.storage.version,
            "cursor": buffer.primary_selection.cursor.coords,
            "dirty": buffer.dirty,
        },
    )
    return ModeResult(consumed=True, status=status)


def insert_text(context: ModeContext, key: KeyInput) -> ModeResult:
    text = key.text or ""
    if not text:
        return ModeResult(consumed=False, status="miss")
    context.buffer.insert_text(text)
    return _after_edit(context, "insert")


def insert_newline(context: ModeContext, key: KeyInput) -> ModeResult:
    del key
    context.buffer.insert("\n")
    return _after_edit(context, "insert")


def delete_backward(context: ModeContext, key: KeyInput) -> ModeResult:
    del key
    context.buffer.delete(backspace=True)
    return _after_edit(context, "delete")


def delete_forward(context: ModeContext, key: KeyInput) -> ModeResult:
    del key
    context.buffer.delete(backspace=False)
    return _after_edit(context, "delete")


def _move(context: ModeContext, direction: Direction) -> ModeResult:
    context.buffer.move_cursors(direction)
    return _after_edit(context, "move")


def move_up(context: ModeContext, key: KeyInput) -> ModeResult:
    del key
    return _move(context, Direction.UP)


def move_down(context: ModeContext, key: KeyInput) -> ModeResult:
    del key
    return _move(context, Direction.DOWN)


def move_left(context: ModeContext, key: KeyInput) -> ModeResult:
    del key
    return _move(context, Direction.LEFT)


def move_right(context: ModeContext, key: KeyInput) -> ModeResult:
    del key
    return _move(context, Direction.RIGHT)


__all__ = [
    "insert_text",
    "insert_newline",
    "delete_backward",
    "delete_forward",
    "move_up",
    "move_down",
    "move_left",
    "move_right",
]
