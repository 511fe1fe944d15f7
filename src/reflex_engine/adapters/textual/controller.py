"""Bridges host key events to the ModeManager and pushes frames back."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional

from reflex_engine.buffer import Size
from reflex_engine.modes import KeyInput, ModeResult
from reflex_engine.modes.mode_manager import ModeManager
from reflex_engine.render import Frame, render_frame
from reflex_engine.runtime import telemetry
from reflex_engine.runtime.session import EditorSession


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class ReflexUIHooks:
    """Callbacks the adapter uses to update host widgets."""

    update_frame: Callable[[Frame], None]
    update_status: Callable[[str], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    request_quit: Callable[[], None] = _noop


class TextualReflexAdapter:
    """Feeds normalized keys to the manager and re-renders after each one."""

    EVENTS = (
        "mode.switch",
        "command.submit",
        "command.error",
        "command.write",
        "command.quit",
        "command.edit",
    )

    def __init__(self, manager: ModeManager, hooks: ReflexUIHooks) -> None:
        self.manager = manager
        self.hooks = hooks
        self.logger = telemetry.get_logger("reflex_engine.adapters.textual")
        for event in self.EVENTS:
            manager.context.bus.subscribe(
                event, lambda payload, name=event: self._handle_event(name, payload)
            )
        self.refresh()

    @property
    def session(self) -> EditorSession:
        return self.manager.context.session

    def handle_key(
        self,
        key: str,
        *,
        text: Optional[str] = None,
        modifiers: Iterable[str] = (),
    ) -> ModeResult:
        normalized = tuple(str(mod).upper() for mod in modifiers)
        self.logger.debug(f"key -> {key!r} text={text!r} mods={normalized}")
        result = self.manager.handle_key(
            KeyInput(key=key, text=text, modifiers=normalized)
        )
        if result.message and result.status != "ok":
            self.hooks.update_status(result.message)
        self.refresh()
        if self.session.should_quit:
            self.hooks.request_quit()
        return result

    def resize(self, width: int, height: int) -> None:
        self.session.resize(Size(max(width, 1), max(height, 1)))
        self.refresh()

    def refresh(self) -> Frame:
        frame = render_frame(self.session)
        self.hooks.update_frame(frame)
        return frame

    def state_metadata(self) -> Dict[str, object]:
        buffer = self.session.current_buffer
        return {
            "mode": self.session.mode.value,
            "cursor": buffer.primary_selection.cursor.coords,
            "selections": len(buffer.selections),
            "command": self.session.command_line.text,
            "buffer": buffer.name,
            "version": buffer.storage.version,
        }

    def _handle_event(self, name: str, payload: object | None) -> None:
        self.logger.debug(f"event -> {name} {self.state_metadata()!r}")
        self.hooks.handle_event(name, payload)


__all__ = ["ReflexUIHooks", "TextualReflexAdapter"]
