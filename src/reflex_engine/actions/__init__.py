"""Editing, movement, and command verbs bound to keys."""

from .command import (
    command_cursor_left,
    command_cursor_right,
    delete_command_backward,
    delete_command_forward,
    insert_command_text,
    submit_command_line,
)
from .core import enter_command_mode, enter_insert_mode, exit_to_normal_mode, noop_action
from .editing import (
    delete_backward,
    delete_forward,
    insert_newline,
    insert_text,
    move_down,
    move_left,
    move_right,
    move_up,
)

__all__ = [
    "enter_insert_mode",
    "enter_command_mode",
    "exit_to_normal_mode",
    "noop_action",
    "insert_text",
    "insert_newline",
    "delete_backward",
    "delete_forward",
    "move_up",
    "move_down",
    "move_left",
    "move_right",
    "insert_command_text",
    "delete_command_backward",
    "delete_command_forward",
    "command_cursor_left",
    "command_cursor_right",
    "submit_command_line",
]
