"""The unnamed clipboard shared by cut, copy and paste."""

from __future__ import annotations

from typing import Callable, Optional


class Clipboard:
    """Single unnamed register; hosts may observe writes via ``on_set``."""

    def __init__(self, on_set: Optional[Callable[[str], None]] = None) -> None:
        self._text = ""
        self._on_set = on_set

    def get(self) -> str:
        return self._text

    def set(self, text: str) -> None:
        self._text = text
        if self._on_set is not None:
            self._on_set(text)


__all__ = ["Clipboard"]
