"""Mode table and dispatch types."""

from .base import (
    MODE_TRANSITIONS,
    KeyInput,
    ModeBus,
    ModeContext,
    ModeName,
    ModeResult,
    can_transition,
)

__all__ = [
    "MODE_TRANSITIONS",
    "KeyInput",
    "ModeBus",
    "ModeContext",
    "ModeName",
    "ModeResult",
    "can_transition",
]
