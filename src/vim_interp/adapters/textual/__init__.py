"""Textual host adapter.

The runnable demo lives in :mod:`vim_interp.adapters.textual.app`.
"""

from .controller import TextualUIHooks, TextualVimAdapter

__all__ = ["TextualUIHooks", "TextualVimAdapter"]
