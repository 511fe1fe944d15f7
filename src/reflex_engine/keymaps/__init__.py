"""Key binding table and default keymaps."""

from .models import ActionRef, Binding, normalize_key
from .registry import KeymapConflictError, KeymapRegistry, RegistryStats, ResolutionMatch
from .defaults import TEXT_ACTIONS, load_default_keymaps

__all__ = [
    "ActionRef",
    "Binding",
    "normalize_key",
    "KeymapRegistry",
    "KeymapConflictError",
    "RegistryStats",
    "ResolutionMatch",
    "TEXT_ACTIONS",
    "load_default_keymaps",
]
