"""Command-line editing and evaluation of ``:`` commands."""

from __future__ import annotations

from functools import partial
from typing import Callable, Dict, List

from reflex_engine.buffer import BufferIOError
from reflex_engine.modes.base import KeyInput, ModeContext, ModeName, ModeResult
from reflex_engine.runtime import telemetry

CommandHandler = Callable[[ModeContext, List[str]], ModeResult]


def _editing(status: str = "editing") -> ModeResult:
    return ModeResult(consumed=True, status=status)


def insert_command_text(context: ModeContext, key: KeyInput) -> ModeResult:
    if not key.text:
        return ModeResult(consumed=False, status="miss")
    context.session.command_line.insert(key.text)
    return _editing()


def delete_command_backward(context: ModeContext, key: KeyInput) -> ModeResult:
    del key
    context.session.command_line.delete_backward()
    return _editing()


def delete_command_forward(context: ModeContext, key: KeyInput) -> ModeResult:
    del key
    context.session.command_line.delete_forward()
    return _editing()


def command_cursor_left(context: ModeContext, key: KeyInput) -> ModeResult:
    del key
    context.session.command_line.move_left()
    return _editing()


def command_cursor_right(context: ModeContext, key: KeyInput) -> ModeResult:
    del key
    context.session.command_line.move_right()
    return _editing()


def submit_command_line(context: ModeContext, key: KeyInput) -> ModeResult:
    del key
    text = context.session.command_line.submit().strip()
    context.bus.emit("command.submit", text)
    if not text:
        return ModeResult(consumed=True, switch_to=ModeName.NORMAL, status="command_empty")
    command, *args = text.split()
    handler = _COMMAND_HANDLERS.get(command)
    if handler is None:
        return _command_error(context, f"Not an editor command: {command}")
    with telemetry.span(
        "command::execute", component="command", metadata={"command": command}
    ):
        return handler(context, args)


def _command_error(context: ModeContext, message: str) -> ModeResult:
    context.bus.emit("command.error", message)
    return ModeResult(
        consumed=True,
        switch_to=ModeName.NORMAL,
        status="command_error",
        message=message,
    )


def _write(context: ModeContext, args: List[str]) -> str | None:
    """Save the current buffer; return an error message on failure."""

    buffer = context.buffer
    path = args[0] if args else None
    try:
        buffer.save(path)
    except BufferIOError as exc:
        return str(exc)
    context.bus.emit("command.write", buffer.snapshot())
    return None


def _quit(context: ModeContext, *, force: bool) -> None:
    context.session.should_quit = True
    context.bus.emit("command.quit", {"force": force})


def _handle_write(context: ModeContext, args: List[str]) -> ModeResult:
    error = _write(context, args)
    if error:
        return _command_error(context, error)
    buffer = context.buffer
    return ModeResult(
        consumed=True,
        switch_to=ModeName.NORMAL,
        status="command_write",
        message=f'"{buffer.name}" {buffer.line_count()}L written',
    )


def _handle_quit(
    context: ModeContext, args: List[str], *, force: bool = False
) -> ModeResult:
    del args
    if context.buffer.dirty and not force:
        return _command_error(
            context, "No write since last change (add ! to override)"
        )
    _quit(context, force=force)
    return ModeResult(
        consumed=True,
        switch_to=ModeName.NORMAL,
        status="command_quit_force" if force else "command_quit",
    )


def _handle_write_quit(context: ModeContext, args: List[str]) -> ModeResult:
    error = _write(context, args)
    if error:
        return _command_error(context, error)
    _quit(context, force=False)
    return ModeResult(consumed=True, switch_to=ModeName.NORMAL, status="command_wq")


def _handle_edit(context: ModeContext, args: List[str]) -> ModeResult:
    if not args:
        return _command_error(context, "No file name")
    try:
        buffer = context.session.open_buffer(args[0])
    except BufferIOError as exc:
        return _command_error(context, str(exc))
    context.bus.emit("command.edit", buffer.name)
    return ModeResult(
        consumed=True,
        switch_to=ModeName.NORMAL,
        status="command_edit",
        message=buffer.name,
    )


_COMMAND_HANDLERS: Dict[str, CommandHandler] = {
    "w": _handle_write,
    "write": _handle_write,
    "q": _handle_quit,
    "quit": _handle_quit,
    "q!": partial(_handle_quit, force=True),
    "quit!": partial(_handle_quit, force=True),
    "wq": _handle_write_quit,
    "x": _handle_write_quit,
    "e": _handle_edit,
    "edit": _handle_edit,
}


__all__ = [
    "insert_command_text",
    "delete_command_backward",
    "delete_command_forward",
    "command_cursor_left",
    "command_cursor_right",
    "submit_command_line",
]
