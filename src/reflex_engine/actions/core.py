"""Mode-switching actions shared across modes."""

from __future__ import annotations

from reflex_engine.modes.base import KeyInput, ModeContext, ModeName, ModeResult


def enter_insert_mode(context: ModeContext, key: KeyInput) -> ModeResult:
    del context, key
    return ModeResult(consumed=True, switch_to=ModeName.INSERT, message="enter_insert")


def enter_command_mode(context: ModeContext, key: KeyInput) -> ModeResult:
    del key
    context.session.command_line.clear()
    return ModeResult(
        consumed=True, switch_to=ModeName.COMMAND, message="enter_command"
    )


def exit_to_normal_mode(context: ModeContext, key: KeyInput) -> ModeResult:
    del key
    context.session.command_line.clear()
    return ModeResult(consumed=True, switch_to=ModeName.NORMAL, message="exit_to_normal")


def noop_action(context: ModeContext, key: KeyInput) -> ModeResult:
    del context, key
    return ModeResult(consumed=True, status="noop")


__all__ = [
    "enter_insert_mode",
    "enter_command_mode",
    "exit_to_normal_mode",
    "noop_action",
]
