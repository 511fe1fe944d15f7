"""Built-in actions and the default key table for every mode."""

from __future__ import annotations

from typing import Dict, Iterable

from reflex_engine.actions import command as command_actions
from reflex_engine.actions import core as core_actions
from reflex_engine.actions import editing as edit_actions
from reflex_engine.runtime.session import ModeName

from .models import ActionRef, Binding
from .registry import KeymapRegistry

NORMAL = ModeName.NORMAL
INSERT = ModeName.INSERT
COMMAND = ModeName.COMMAND

DEFAULT_ACTIONS: tuple[ActionRef, ...] = (
    ActionRef("core.enter_insert", core_actions.enter_insert_mode, "Enter insert mode"),
    ActionRef(
        "core.enter_command", core_actions.enter_command_mode, "Enter command-line mode"
    ),
    ActionRef(
        "core.exit_to_normal", core_actions.exit_to_normal_mode, "Return to normal mode"
    ),
    ActionRef("core.noop", core_actions.noop_action, "Do nothing"),
    ActionRef("edit.insert_text", edit_actions.insert_text, "Insert typed text"),
    ActionRef("edit.insert_newline", edit_actions.insert_newline, "Split the line"),
    ActionRef("edit.delete_backward", edit_actions.delete_backward, "Backspace"),
    ActionRef("edit.delete_forward", edit_actions.delete_forward, "Delete under cursor"),
    ActionRef("edit.move_up", edit_actions.move_up, "Cursor up"),
    ActionRef("edit.move_down", edit_actions.move_down, "Cursor down"),
    ActionRef("edit.move_left", edit_actions.move_left, "Cursor left"),
    ActionRef("edit.move_right", edit_actions.move_right, "Cursor right"),
    ActionRef(
        "command.insert_text", command_actions.insert_command_text, "Type on command line"
    ),
    ActionRef(
        "command.delete_backward",
        command_actions.delete_command_backward,
        "Erase before the command-line caret",
    ),
    ActionRef(
        "command.delete_forward",
        command_actions.delete_command_forward,
        "Erase under the command-line caret",
    ),
    ActionRef("command.cursor_left", command_actions.command_cursor_left, "Caret left"),
    ActionRef(
        "command.cursor_right", command_actions.command_cursor_right, "Caret right"
    ),
    ActionRef(
        "command.submit_line",
        command_actions.submit_command_line,
        "Evaluate the command line",
    ),
)

_ARROWS = (
    ("UP", "edit.move_up"),
    ("DOWN", "edit.move_down"),
    ("LEFT", "edit.move_left"),
    ("RIGHT", "edit.move_right"),
)

DEFAULT_BINDINGS: tuple[Binding, ...] = (
    Binding("normal.enter_insert", NORMAL, "i", "core.enter_insert"),
    Binding("normal.enter_command", NORMAL, ":", "core.enter_command"),
    Binding("normal.escape", NORMAL, "ESC", "core.exit_to_normal"),
    *(
        Binding(f"{mode.value}.{action_id.split('.')[1]}", mode, key, action_id)
        for mode in (NORMAL, INSERT)
        for key, action_id in _ARROWS
    ),
    Binding("insert.exit_escape", INSERT, "ESC", "core.exit_to_normal"),
    Binding("insert.newline", INSERT, "ENTER", "edit.insert_newline"),
    Binding("insert.backspace", INSERT, "BACKSPACE", "edit.delete_backward"),
    Binding("insert.delete", INSERT, "DELETE", "edit.delete_forward"),
    Binding("command.cancel", COMMAND, "ESC", "core.exit_to_normal"),
    Binding("command.submit", COMMAND, "ENTER", "command.submit_line"),
    Binding("command.backspace", COMMAND, "BACKSPACE", "command.delete_backward"),
    Binding("command.delete", COMMAND, "DELETE", "command.delete_forward"),
    Binding("command.cursor_left", COMMAND, "LEFT", "command.cursor_left"),
    Binding("command.cursor_right", COMMAND, "RIGHT", "command.cursor_right"),
)

# Printable keys that miss the table fall through to these actions.
TEXT_ACTIONS: Dict[ModeName, str] = {
    INSERT: "edit.insert_text",
    COMMAND: "command.insert_text",
}


def load_default_keymaps(
    registry: KeymapRegistry,
    *,
    replace: bool = False,
    extra_bindings: Iterable[Binding] | None = None,
) -> None:
    """Register built-in actions and bindings, then any ``extra_bindings``."""

    for action in DEFAULT_ACTIONS:
        registry.register_action(action, replace=replace)
    for binding in DEFAULT_BINDINGS:
        registry.register_binding(binding, replace=replace)
    for binding in extra_bindings or ():
        registry.register_binding(binding, replace=True)


__all__ = ["DEFAULT_ACTIONS", "DEFAULT_BINDINGS", "TEXT_ACTIONS", "load_default_keymaps"]
