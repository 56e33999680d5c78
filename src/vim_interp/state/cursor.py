"""The authoritative modal cursor, distinct from the buffer's own caret."""

from __future__ import annotations

from dataclasses import dataclass

from vim_interp.buffer import Position, TextSurface


@dataclass(slots=True)
class CursorModel:
    """Tracks ``vim_position`` and the column vertical motions aim for.

    The buffer caret may drift while an operation runs (visual selections,
    multi-step edits); once the operation settles, ``position`` wins and is
    pushed back to the buffer.
    """

    position: Position = 0
    column: int = 0

    def place(
        self, buffer: TextSurface, position: Position, *, remember_column: bool = True
    ) -> Position:
        position = max(0, min(position, buffer.last_position()))
        self.position = position
        buffer.set_position(position)
        if remember_column:
            self.column = position - buffer.line_start(buffer.line_of(position))
        return position

    def sync_from(self, buffer: TextSurface) -> Position:
        return self.place(buffer, buffer.get_position())

    def settle(self, buffer: TextSurface) -> Position:
        """Pull the cursor off the end-of-line slot of a non-empty line.

        Column memory is left alone so a later vertical motion still aims
        for the remembered column.
        """

        position = max(0, min(self.position, buffer.last_position()))
        line = buffer.line_of(position)
        start, end = buffer.line_start(line), buffer.line_end(line)
        if position >= end and end > start:
            position = end - 1
        self.position = position
        buffer.set_position(position)
        return position

    def move_vertical(
        self, buffer: TextSurface, delta: int, *, clamp_eol: bool = True
    ) -> bool:
        target = buffer.line_of(self.position) + delta
        if target < 0 or target > buffer.last_line():
            return False
        start, end = buffer.line_start(target), buffer.line_end(target)
        limit = end - start
        if clamp_eol and limit > 0:
            limit -= 1
        self.place(buffer, start + min(self.column, limit), remember_column=False)
        return True


__all__ = ["CursorModel"]
