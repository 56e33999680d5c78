"""Fixed a-z mark table."""

from __future__ import annotations

from typing import List, Optional

from vim_interp.buffer import Position

MARK_NAMES = "abcdefghijklmnopqrstuvwxyz"


def _slot(name: str) -> Optional[int]:
    if len(name) != 1 or name not in MARK_NAMES:
        return None
    return ord(name) - ord("a")


class MarkStore:
    def __init__(self) -> None:
        self._slots: List[Optional[Position]] = [None] * len(MARK_NAMES)

    def save(self, name: str, position: Position) -> bool:
        slot = _slot(name)
        if slot is None:
            return False
        self._slots[slot] = position
        return True

    def get(self, name: str) -> Optional[Position]:
        slot = _slot(name)
        if slot is None:
            return None
        return self._slots[slot]

    def clear(self) -> None:
        self._slots = [None] * len(MARK_NAMES)


__all__ = ["MarkStore", "MARK_NAMES"]
