"""Dataclasses describing key bindings and the actions they trigger."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Callable, Iterable, Mapping

from reflex_engine.runtime.session import ModeName


def normalize_key(key: str, modifiers: Iterable[str] = ()) -> str:
    """Return the lookup token for ``key``, e.g. ``CTRL+s``."""

    if not key:
        raise ValueError("key cannot be empty")
    mods = sorted(dict.fromkeys(m.strip().upper() for m in modifiers if m.strip()))
    if mods:
        return "+".join((*mods, key))
    return key


@dataclass(frozen=True, slots=True)
class ActionRef:
    """Callable plus the metadata used for telemetry and help text."""

    id: str
    handler: Callable[..., object]
    description: str = ""
    metadata: Mapping[str, object] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("ActionRef id cannot be empty")
        if not callable(self.handler):
            raise TypeError("handler must be callable")
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))

    def __call__(self, *args: object, **kwargs: object) -> object:
        return self.handler(*args, **kwargs)


@dataclass(frozen=True, slots=True)
class Binding:
    """One row of the transition table: ``(mode, key) -> action``."""

    id: str
    mode: ModeName
    key: str
    action_id: str
    description: str = ""

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("binding id cannot be empty")
        if not self.action_id:
            raise ValueError("binding action_id cannot be empty")
        object.__setattr__(self, "mode", ModeName(self.mode))
        object.__setattr__(self, "key", normalize_key(self.key))

    @property
    def signature(self) -> tuple[ModeName, str]:
        return (self.mode, self.key)


__all__ = ["ActionRef", "Binding", "normalize_key"]
