"""Keymap registry storing actions and the per-mode binding table."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterator, Optional

from reflex_engine.runtime.session import ModeName
from reflex_engine.runtime.telemetry import span

from .models import ActionRef, Binding


@dataclass(frozen=True, slots=True)
class ResolutionMatch:
    binding: Optional[Binding]
    action: ActionRef


@dataclass(slots=True)
class RegistryStats:
    action_count: int
    binding_count: int
    modes: tuple[str, ...]


class KeymapConflictError(RuntimeError):
    """Raised when a binding reuses a key already bound in the same mode."""

    def __init__(self, binding: Binding, existing: Binding):
        super().__init__(
            f"Binding '{binding.id}' conflicts with '{existing.id}' "
            f"on {binding.mode.value}:{binding.key}"
        )
        self.binding = binding
        self.existing = existing


class KeymapRegistry:
    def __init__(self, *, logger_name: str | None = None) -> None:
        self._actions: Dict[str, ActionRef] = {}
        self._bindings: Dict[str, Binding] = {}
        self._table: Dict[tuple[ModeName, str], str] = {}
        self._logger_name = logger_name

    def get_action(self, action_id: str) -> ActionRef:
        try:
            return self._actions[action_id]
        except KeyError as exc:
            raise KeyError(f"Action '{action_id}' is not registered") from exc

    def register_action(self, action: ActionRef, *, replace: bool = False) -> ActionRef:
        if not replace and action.id in self._actions:
            raise ValueError(f"Action '{action.id}' already registered")
        self._actions[action.id] = action
        return action

    def register_binding(self, binding: Binding, *, replace: bool = False) -> Binding:
        with span(
            "keymaps::register_binding",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"binding_id": binding.id, "mode": binding.mode.value},
        ) as handle:
            if binding.action_id not in self._actions:
                handle.add_metadata("missing_action", binding.action_id)
                raise KeyError(
                    f"Binding '{binding.id}' references unknown action '{binding.action_id}'"
                )

            existing_id = self._table.get(binding.signature)
            if existing_id is not None and existing_id != binding.id:
                if not replace:
                    raise KeymapConflictError(binding, self._bindings[existing_id])
                self._bindings.pop(existing_id)
            elif binding.id in self._bindings and not replace:
                raise ValueError(f"Binding id '{binding.id}' already registered")

            previous = self._bindings.get(binding.id)
            if previous is not None:
                self._table.pop(previous.signature, None)
            self._bindings[binding.id] = binding
            self._table[binding.signature] = binding.id
            return binding

    def unregister_binding(self, binding_id: str) -> Optional[Binding]:
        binding = self._bindings.pop(binding_id, None)
        if binding is not None:
            self._table.pop(binding.signature, None)
        return binding

    def lookup(self, mode: ModeName, key: str) -> Optional[ResolutionMatch]:
        binding_id = self._table.get((ModeName(mode), key))
        if binding_id is None:
            return None
        binding = self._bindings[binding_id]
        return ResolutionMatch(binding=binding, action=self.get_action(binding.action_id))

    def resolve_action(self, action_id: str) -> ResolutionMatch:
        return ResolutionMatch(binding=None, action=self.get_action(action_id))

    def iter_bindings(self, mode: Optional[ModeName] = None) -> Iterator[Binding]:
        for binding in self._bindings.values():
            if mode is None or binding.mode == mode:
                yield binding

    def stats(self) -> RegistryStats:
        return RegistryStats(
            action_count=len(self._actions),
            binding_count=len(self._bindings),
            modes=tuple(sorted({b.mode.value for b in self._bindings.values()})),
        )


__all__ = [
    "KeymapConflictError",
    "KeymapRegistry",
    "RegistryStats",
    "ResolutionMatch",
]
