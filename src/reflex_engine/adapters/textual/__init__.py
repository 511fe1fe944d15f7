"""Textual host for the editor."""

from .controller import ReflexUIHooks, TextualReflexAdapter

__all__ = ["ReflexUIHooks", "TextualReflexAdapter"]
