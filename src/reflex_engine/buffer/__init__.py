"""Text storage, selections, viewport, and the multi-selection file buffer."""

from .buffer import UNTITLED, BufferView, FileBuffer, Transaction
from .document import TextStorage
from .errors import (
    BufferIOError,
    ModeTransitionError,
    OutOfRangeError,
    ReflexError,
    UntitledBufferError,
)
from .state import Direction, Position, Selection
from .validation import clamp_position
from .viewport import Size, Viewport

__all__ = [
    "UNTITLED",
    "BufferView",
    "FileBuffer",
    "Transaction",
    "TextStorage",
    "Direction",
    "Position",
    "Selection",
    "Size",
    "Viewport",
    "ReflexError",
    "OutOfRangeError",
    "BufferIOError",
    "UntitledBufferError",
    "ModeTransitionError",
    "clamp_position",
]
