"""Editor settings resolved from ``REFLEX_*`` environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass

from reflex_engine.buffer import Size

ENV_PREFIX = "REFLEX_"


def _env_int(name: str, fallback: int) -> int:
    value = os.environ.get(f"{ENV_PREFIX}{name}")
    if value is None:
        return fallback
    try:
        return int(value)
    except ValueError:
        return fallback


@dataclass(frozen=True)
class EditorConfig:
    encoding: str = "utf-8"
    width: int = 80
    height: int = 24
    name_width: int = 20
    welcome: str = "REFLEX -- v{version}"

    @classmethod
    def from_env(cls) -> "EditorConfig":
        defaults = cls()
        return cls(
            encoding=os.environ.get(f"{ENV_PREFIX}ENCODING", defaults.encoding),
            width=max(1, _env_int("WIDTH", defaults.width)),
            height=max(1, _env_int("HEIGHT", defaults.height)),
            name_width=max(1, _env_int("NAME_WIDTH", defaults.name_width)),
        )

    @property
    def size(self) -> Size:
        return Size(self.width, self.height)


__all__ = ["EditorConfig"]
