"""Validation helpers shared across buffer services."""

from __future__ import annotations

from .state import Position
from .sync import BufferValidationError


def ensure_position(text: str, position: Position) -> Position:
    if position < 0 or position > len(text):
        raise BufferValidationError("Offset out of range", position=position)
    return position


def ensure_range(text: str, start: Position, end: Position) -> tuple[Position, Position]:
    ensure_position(text, start)
    ensure_position(text, end)
    if start > end:
        raise BufferValidationError("Range start after end", position=start)
    return start, end


__all__ = ["ensure_position", "ensure_range"]
