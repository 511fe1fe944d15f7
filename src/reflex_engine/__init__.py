"""Modal text editor built around a multi-selection buffer engine."""

__all__ = [
    "actions",
    "adapters",
    "buffer",
    "keymaps",
    "modes",
    "render",
    "runtime",
]

__version__ = "0.1.0"
