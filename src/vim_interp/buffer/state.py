"""Caret, anchor and visibility state for buffers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

Position = int  # absolute offset into the buffer text
Selection = Tuple[Position, Position]  # half-open [start, end)


@dataclass(slots=True)
class BufferState:
    """Mutable caret/anchor pair; the selection spans between them."""

    anchor: Position = 0
    caret: Position = 0
    caret_visible: bool = False
    last_change_tick: int = 0

    def collapse(self, position: Position) -> None:
        self.anchor = position
        self.caret = position

    def selection(self) -> Selection:
        if self.anchor <= self.caret:
            return (self.anchor, self.caret)
        return (self.caret, self.anchor)


__all__ = ["BufferState", "Position", "Selection"]
