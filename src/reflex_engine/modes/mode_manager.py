"""Mode manager: resolves keys against the binding table and applies switches."""

from __future__ import annotations

from typing import Optional

from reflex_engine.buffer import ModeTransitionError
from reflex_engine.keymaps import (
    TEXT_ACTIONS,
    KeymapRegistry,
    ResolutionMatch,
    load_default_keymaps,
    normalize_key,
)
from reflex_engine.runtime import telemetry

from .base import KeyInput, ModeContext, ModeName, ModeResult, can_transition


class ModeManager:
    """Owns the active mode of a session and dispatches key events."""

    def __init__(
        self,
        context: ModeContext,
        *,
        keymap_registry: Optional[KeymapRegistry] = None,
        load_defaults: bool = True,
    ) -> None:
        self.context = context
        self.keymap_registry = keymap_registry or KeymapRegistry(
            logger_name="reflex_engine.keymaps"
        )
        if load_defaults and keymap_registry is None:
            load_default_keymaps(self.keymap_registry)

    @property
    def mode(self) -> ModeName:
        return self.context.session.mode

    def switch_mode(self, target: ModeName) -> None:
        source = self.mode
        if source == target:
            return
        if not can_transition(source, target):
            raise ModeTransitionError(source.value, target.value)
        self.context.session.mode = target
        self.context.bus.emit("mode.switch", target)
        telemetry.record_event(
            "mode.switch", data={"from": source.value, "to": target.value}
        )

    def handle_key(self, key: KeyInput) -> ModeResult:
        mode = self.mode
        token = normalize_key(key.key, key.modifiers)
        with telemetry.span(
            name=f"mode::{mode.value}",
            component="modes",
            metadata={"key": token, "mode": mode.value},
        ) as handle:
            match = self.keymap_registry.lookup(mode, token)
            if match is None:
                match = self._text_fallback(mode, key)
            if match is None:
                handle.add_metadata("status", "miss")
                return ModeResult(consumed=False, status="miss")
            handle.add_metadata("action", match.action.id)
            result = match.action(self.context, key)

        if not isinstance(result, ModeResult):
            result = ModeResult(consumed=True)
        if result.switch_to is not None:
            self.switch_mode(result.switch_to)
        return result

    def _text_fallback(self, mode: ModeName, key: KeyInput) -> Optional[ResolutionMatch]:
        action_id = TEXT_ACTIONS.get(mode)
        if action_id is None or not key.text or not key.text.isprintable():
            return None
        if any(mod in {"CTRL", "ALT"} for mod in key.modifiers):
            return None
        return self.keymap_registry.resolve_action(action_id)


__all__ = ["ModeManager"]
