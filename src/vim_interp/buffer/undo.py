"""Undo/redo history for buffer edit groups."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from .state import Position


@dataclass(slots=True)
class UndoEntry:
    label: str
    before_text: str
    after_text: str
    cursor_before: Position
    cursor_after: Position


class UndoTimeline:
    """Linear history; recording a new entry drops the redo tail."""

    def __init__(self) -> None:
        self._done: List[UndoEntry] = []
        self._undone: List[UndoEntry] = []

    def push(self, entry: UndoEntry) -> None:
        self._done.append(entry)
        self._undone.clear()

    def clear(self) -> None:
        self._done.clear()
        self._undone.clear()

    def can_undo(self) -> bool:
        return bool(self._done)

    def can_redo(self) -> bool:
        return bool(self._undone)

    def undo(self) -> Optional[UndoEntry]:
        if not self._done:
            return None
        entry = self._done.pop()
        self._undone.append(entry)
        return entry

    def redo(self) -> Optional[UndoEntry]:
        if not self._undone:
            return None
        entry = self._undone.pop()
        self._done.append(entry)
        return entry


__all__ = ["UndoEntry", "UndoTimeline"]
