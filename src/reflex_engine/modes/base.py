"""Key inputs, dispatch results, and the mode transition table."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, FrozenSet, Optional, Tuple

from reflex_engine.buffer import FileBuffer
from reflex_engine.runtime.session import EditorSession, ModeName

MODE_TRANSITIONS: Dict[ModeName, FrozenSet[ModeName]] = {
    ModeName.NORMAL: frozenset({ModeName.INSERT, ModeName.COMMAND}),
    ModeName.INSERT: frozenset({ModeName.NORMAL}),
    ModeName.COMMAND: frozenset({ModeName.NORMAL}),
}


def can_transition(source: ModeName, target: ModeName) -> bool:
    return source == target or target in MODE_TRANSITIONS[source]


@dataclass(slots=True)
class KeyInput:
    """Normalized key event passed to the mode manager."""

    key: str
    modifiers: Tuple[str, ...] = ()
    text: Optional[str] = None


@dataclass(slots=True)
class ModeResult:
    consumed: bool
    switch_to: Optional[ModeName] = None
    status: str = "ok"
    message: Optional[str] = None


class ModeBus:
    """Minimal event bus letting actions notify the host."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in self._subscribers.get(event, []):
            callback(payload)


@dataclass(slots=True)
class ModeContext:
    """Services every action receives: the session and the event bus."""

    session: EditorSession
    bus: ModeBus

    @property
    def buffer(self) -> FileBuffer:
        return self.session.current_buffer


__all__ = [
    "MODE_TRANSITIONS",
    "KeyInput",
    "ModeBus",
    "ModeContext",
    "ModeName",
    "ModeResult",
    "can_transition",
]
