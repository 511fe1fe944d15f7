"""Error taxonomy shared by storage, buffers, and modes."""

from __future__ import annotations

from typing import Optional


class ReflexError(RuntimeError):
    """Base class for every error raised by reflex_engine."""


class OutOfRangeError(ReflexError, IndexError):
    """Raised when storage is addressed past its current content."""

    def __init__(self, message: str, *, index: int | None = None) -> None:
        super().__init__(message)
        self.index = index


class BufferIOError(ReflexError):
    """Raised when a buffer cannot be read from or written to disk."""

    def __init__(self, message: str, *, path: Optional[str] = None) -> None:
        super().__init__(message)
        self.path = path


class UntitledBufferError(BufferIOError):
    """Raised when saving a buffer that has no associated path."""

    def __init__(self, buffer_name: str) -> None:
        super().__init__(f"Buffer '{buffer_name}' has no file name")
        self.buffer_name = buffer_name


class ModeTransitionError(ReflexError, ValueError):
    """Raised when a mode switch is not allowed by the transition table."""

    def __init__(self, source: str, target: str) -> None:
        super().__init__(f"Cannot switch from '{source}' to '{target}'")
        self.source = source
        self.target = target


__all__ = [
    "ReflexError",
    "OutOfRangeError",
    "BufferIOError",
    "UntitledBufferError",
    "ModeTransitionError",
]
