"""Executable Textual app hosting the editor."""

from __future__ import annotations

import argparse
import sys
from typing import Any, List, Optional, Sequence, Tuple

from rich.text import Text
from textual import events
from textual.app import App, ComposeResult
from textual.widgets import Static

from reflex_engine import __version__
from reflex_engine.buffer import BufferIOError, Position
from reflex_engine.modes import ModeBus, ModeContext, ModeName
from reflex_engine.modes.mode_manager import ModeManager
from reflex_engine.render import Frame
from reflex_engine.runtime import telemetry
from reflex_engine.runtime.config import EditorConfig
from reflex_engine.runtime.session import EditorSession

from .controller import ReflexUIHooks, TextualReflexAdapter

# Status line plus command line below the text area.
CHROME_ROWS = 2


def create_manager(session: EditorSession) -> ModeManager:
    return ModeManager(ModeContext(session=session, bus=ModeBus()))


def frame_text(frame: Frame) -> Text:
    """Join frame rows, painting the caret cell in reverse video."""

    text = Text(no_wrap=True, overflow="crop")
    cursor = frame.cursor
    for index, row in enumerate(frame.rows):
        if index:
            text.append("\n")
        if cursor is not None and cursor.y == index:
            padded = row.ljust(cursor.x + 1)
            text.append(padded[: cursor.x])
            text.append(padded[cursor.x], style="reverse")
            text.append(padded[cursor.x + 1 :])
        else:
            text.append(row)
    return text


class ReflexApp(App[None]):
    """Full-screen editor: text area, status line, command line."""

    CSS = """
    Screen {
        layout: vertical;
    }

    #buffer-view {
        height: 1fr;
    }

    #status-line {
        height: 1;
        background: $surface-darken-1;
    }

    #command-line {
        height: 1;
    }
    """

    def __init__(self, session: EditorSession) -> None:
        super().__init__()
        self.session = session
        self.manager = create_manager(session)
        self.adapter: TextualReflexAdapter | None = None
        self._buffer_widget = Static("", id="buffer-view")
        self._status_widget = Static("", id="status-line")
        self._command_widget = Static("", id="command-line")
        self._message = ""

    def compose(self) -> ComposeResult:
        yield self._buffer_widget
        yield self._status_widget
        yield self._command_widget

    def on_mount(self) -> None:
        hooks = ReflexUIHooks(
            update_frame=self._update_frame,
            update_status=self._update_status,
            handle_event=self._handle_event,
            request_quit=self.exit,
        )
        self.adapter = TextualReflexAdapter(self.manager, hooks)
        self.adapter.resize(self.size.width, self.size.height - CHROME_ROWS)

    def on_resize(self, event: events.Resize) -> None:
        if self.adapter:
            self.adapter.resize(event.size.width, event.size.height - CHROME_ROWS)

    def on_key(self, event: events.Key) -> None:
        if not self.adapter:
            return
        normalized = self._normalize_key(event)
        if normalized is None:
            return
        key, text, modifiers = normalized
        self.adapter.handle_key(key, text=text, modifiers=modifiers)
        event.stop()

    def _update_frame(self, frame: Frame) -> None:
        self._buffer_widget.update(frame_text(frame))
        status = frame.status
        if self._message:
            status = f"{status}  {self._message}"
        self._status_widget.update(status)
        if self.session.mode is ModeName.COMMAND and frame.cursor is not None:
            caret = Position(x=frame.cursor.x, y=0)
            line = Frame(rows=[frame.command], status="", command="", cursor=caret)
            self._command_widget.update(frame_text(line))
        else:
            self._command_widget.update(frame.command)

    def _update_status(self, message: str) -> None:
        self._message = message

    def _handle_event(self, name: str, payload: Any | None) -> None:
        if name == "command.error" and isinstance(payload, str):
            self._message = payload
        elif name == "mode.switch":
            self._message = ""

    @staticmethod
    def _normalize_key(
        event: events.Key,
    ) -> Optional[Tuple[str, Optional[str], Tuple[str, ...]]]:
        modifiers: List[str] = []
        key = event.key
        if key == "ctrl+c":
            return None
        if key.startswith("ctrl+"):
            modifiers.append("CTRL")
            key = key[len("ctrl+") :]
        if key == "escape":
            return ("ESC", None, tuple(modifiers))
        if key in {"enter", "return"}:
            return ("ENTER", None, tuple(modifiers))
        if event.is_printable and event.character and not modifiers:
            return (event.character, event.character, ())
        return (key.upper(), None, tuple(modifiers))


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="reflex", description="Modal terminal text editor."
    )
    parser.add_argument("path", nargs="?", help="File to open")
    parser.add_argument(
        "--log-preset",
        choices=("development", "production"),
        default="production",
        help="telelog preset (default: production, which logs to a file)",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    telemetry.configure(preset=args.log_preset)
    try:
        session = EditorSession.from_path(args.path, config=EditorConfig.from_env())
    except BufferIOError as exc:
        print(f"reflex: {exc}", file=sys.stderr)
        return 1
    ReflexApp(session).run()
    return 0


if __name__ == "__main__":  # pragma: no cover - manual entry point
    sys.exit(main())
