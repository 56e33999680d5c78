"""In-memory buffer implementing the ``TextSurface`` capability."""

from __future__ import annotations

from bisect import bisect_right
from contextlib import AbstractContextManager
from typing import ContextManager, List, Optional

from vim_interp.runtime import telemetry

from .registers import Clipboard
from .state import BufferState, Position, Selection
from .surface import MoveUnit
from .sync import BufferMirror, BufferValidationError
from .undo import UndoEntry, UndoTimeline
from .validation import ensure_position, ensure_range

OPENERS = {"(": ")", "[": "]", "{": "}"}
CLOSERS = {close: open_ for open_, close in OPENERS.items()}


def is_word_char(char: str) -> bool:
    return char.isalnum() or char == "_"


class Buffer:
    def __init__(
        self,
        text: str = "",
        *,
        name: str = "default",
        page_lines: int = 20,
        state: Optional[BufferState] = None,
        clipboard: Optional[Clipboard] = None,
        history: Optional[UndoTimeline] = None,
    ) -> None:
        self.name = name
        self.page_lines = page_lines
        self.state = state or BufferState()
        self.clipboard = clipboard if clipboard is not None else Clipboard()
        self.history = history or UndoTimeline()
        self.version = 0
        self._text = text
        self._saved_text = text
        self._line_starts: Optional[List[int]] = None
        self._edit_depth = 0
        self._open_sequences: List[Transaction] = []

    @classmethod
    def from_text(cls, text: str, *, name: str = "default") -> "Buffer":
        return cls(text, name=name)

    # -- snapshots -------------------------------------------------------

    @property
    def text(self) -> str:
        return self._text

    @property
    def modified(self) -> bool:
        return self._text != self._saved_text

    @property
    def caret_visible(self) -> bool:
        return self.state.caret_visible

    def set_caret_visible(self, visible: bool) -> None:
        self.state.caret_visible = visible

    def mark_saved(self) -> None:
        self._saved_text = self._text

    def reset(self, text: str = "") -> None:
        """Replace the whole document, dropping history."""

        self._set_text(text)
        self._saved_text = text
        self.history.clear()
        self.state.collapse(0)

    def mirror(self, *, attributes: Optional[dict[str, str]] = None) -> BufferMirror:
        return BufferMirror(
            text=self._text,
            position=self.state.caret,
            selection=self.state.selection(),
            caret_visible=self.state.caret_visible,
            attributes=dict(attributes or {}),
        )

    def get_text(self, start: Position = 0, end: Optional[Position] = None) -> str:
        stop = len(self._text) if end is None else end
        start, stop = ensure_range(self._text, start, stop)
        return self._text[start:stop]

    # -- caret and selection --------------------------------------------

    def get_position(self) -> Position:
        return self.state.caret

    def set_position(self, position: Position) -> None:
        self.state.collapse(self._clamp(position))

    def get_selection(self) -> Selection:
        return self.state.selection()

    def set_selection(self, start: Position, end: Position) -> None:
        self.state.anchor = self._clamp(start)
        self.state.caret = self._clamp(end)

    def move(
        self,
        unit: MoveUnit,
        *,
        forward: bool = True,
        extend: bool = False,
        count: int = 1,
    ) -> Position:
        position = self.state.caret
        if unit is MoveUnit.CHAR:
            step = count if forward else -count
            target = self._clamp(position + step)
        elif unit is MoveUnit.WORD:
            target = position
            for _ in range(count):
                target = self.word_boundary(target, forward=forward)
        else:
            lines = count * (self.page_lines if unit is MoveUnit.PAGE else 1)
            target = self._vertical(position, lines if forward else -lines)

        if extend:
            self.state.caret = target
        else:
            self.state.collapse(target)
        return target

    def _vertical(self, position: Position, delta: int) -> Position:
        line = self.line_of(position)
        column = position - self.line_start(line)
        target = max(0, min(self.last_line(), line + delta))
        start = self.line_start(target)
        return start + min(column, self.line_end(target) - start)

    # -- mutations -------------------------------------------------------

    def insert(self, text: str, position: Optional[Position] = None) -> None:
        at = self.state.caret if position is None else position
        ensure_position(self._text, at)
        self._replace(at, at, text, label="insert")
        self.state.collapse(at + len(text))

    def delete(self, start: Position, end: Position) -> str:
        ensure_range(self._text, start, end)
        removed = self._replace(start, end, "", label="delete")
        self.state.collapse(start)
        return removed

    def cut(self, start: Position, end: Position) -> str:
        removed = self.delete(start, end)
        self.clipboard.set(removed)
        return removed

    def copy(self, start: Position, end: Position) -> str:
        copied = self.get_text(start, end)
        self.clipboard.set(copied)
        return copied

    def paste(self, position: Optional[Position] = None) -> str:
        content = self.clipboard.get()
        if content:
            self.insert(content, position)
        return content

    def _replace(self, start: Position, end: Position, text: str, *, label: str) -> str:
        with self.edit_sequence(label):
            removed = self._text[start:end]
            self._set_text(self._text[:start] + text + self._text[end:])
        return removed

    def _set_text(self, text: str) -> None:
        self._text = text
        self._line_starts = None
        self.version += 1
        self.state.last_change_tick = self.version

    # -- edit groups and history ------------------------------------------

    def edit_sequence(self, label: str) -> ContextManager[object]:
        return Transaction(self, label)

    def begin_edit_sequence(self, label: str = "edit") -> None:
        transaction = Transaction(self, label)
        transaction.__enter__()
        self._open_sequences.append(transaction)

    def end_edit_sequence(self) -> None:
        if not self._open_sequences:
            raise BufferValidationError("No edit sequence is open")
        self._open_sequences.pop().__exit__(None, None, None)

    def undo(self) -> Optional[Position]:
        entry = self.history.undo()
        if entry is None:
            return None
        self._set_text(entry.before_text)
        self.state.collapse(self._clamp(entry.cursor_before))
        return self.state.caret

    def redo(self) -> Optional[Position]:
        entry = self.history.redo()
        if entry is None:
            return None
        self._set_text(entry.after_text)
        self.state.collapse(self._clamp(entry.cursor_after))
        return self.state.caret

    # -- line queries ------------------------------------------------------

    def _starts(self) -> List[int]:
        if self._line_starts is None:
            starts = [0]
            index = self._text.find("\n")
            while index != -1:
                starts.append(index + 1)
                index = self._text.find("\n", index + 1)
            self._line_starts = starts
        return self._line_starts

    def line_of(self, position: Position) -> int:
        return bisect_right(self._starts(), self._clamp(position)) - 1

    def line_start(self, line: int) -> Position:
        starts = self._starts()
        return starts[max(0, min(line, len(starts) - 1))]

    def line_end(self, line: int) -> Position:
        starts = self._starts()
        line = max(0, min(line, len(starts) - 1))
        if line == len(starts) - 1:
            return len(self._text)
        return starts[line + 1] - 1

    def last_line(self) -> int:
        return len(self._starts()) - 1

    def last_position(self) -> Position:
        return len(self._text)

    # -- text analysis -----------------------------------------------------

    def word_boundary(self, position: Position, *, forward: bool) -> Position:
        text = self._text
        index = self._clamp(position)
        if forward:
            while index < len(text) and not is_word_char(text[index]):
                index += 1
            while index < len(text) and is_word_char(text[index]):
                index += 1
        else:
            while index > 0 and not is_word_char(text[index - 1]):
                index -= 1
            while index > 0 and is_word_char(text[index - 1]):
                index -= 1
        return index

    def word_span(self, position: Position) -> Optional[Selection]:
        """Span of the word at ``position``, or of the next word after it."""

        text = self._text
        index = self._clamp(position)
        while index < len(text) and not is_word_char(text[index]):
            index += 1
        if index >= len(text):
            return None
        start = index
        while start > 0 and is_word_char(text[start - 1]):
            start -= 1
        end = index
        while end < len(text) and is_word_char(text[end]):
            end += 1
        return (start, end)

    def forward_match(self, position: Position) -> Optional[Position]:
        """Offset just past the closer matching the opener at ``position``."""

        text = self._text
        if position >= len(text) or text[position] not in OPENERS:
            return None
        opener = text[position]
        closer = OPENERS[opener]
        depth = 0
        for index in range(position, len(text)):
            if text[index] == opener:
                depth += 1
            elif text[index] == closer:
                depth -= 1
                if depth == 0:
                    return index + 1
        return None

    def backward_match(self, position: Position) -> Optional[Position]:
        """Offset of the opener matching the closer just before ``position``."""

        text = self._text
        if position <= 0 or position > len(text) or text[position - 1] not in CLOSERS:
            return None
        closer = text[position - 1]
        opener = CLOSERS[closer]
        depth = 0
        for index in range(position - 1, -1, -1):
            if text[index] == closer:
                depth += 1
            elif text[index] == opener:
                depth -= 1
                if depth == 0:
                    return index
        return None

    def find_string(
        self, needle: str, start: Position, *, forward: bool = True
    ) -> Optional[Position]:
        """Forward hits report the match start, backward hits the match end.

        Backward search finds the last match that begins before ``start``.
        """

        if not needle:
            return None
        start = self._clamp(start)
        if forward:
            index = self._text.find(needle, start)
            return None if index == -1 else index
        index = self._text.rfind(needle, 0, start - 1 + len(needle))
        return None if index == -1 else index + len(needle)

    def skip_whitespace(self, position: Position, *, forward: bool = True) -> Position:
        text = self._text
        index = self._clamp(position)
        if forward:
            while index < len(text) and text[index].isspace():
                index += 1
        else:
            while index > 0 and text[index - 1].isspace():
                index -= 1
        return index

    def _clamp(self, position: Position) -> Position:
        return max(0, min(position, len(self._text)))


class Transaction(AbstractContextManager["Transaction"]):
    """One undo unit; nested transactions fold into the outermost."""

    def __init__(self, buffer: Buffer, label: str) -> None:
        self.buffer = buffer
        self.label = label
        self._span_cm: Optional[ContextManager[object]] = None
        self._before_text = ""
        self._before_cursor: Position = 0
        self._outermost = False

    def __enter__(self) -> "Transaction":
        buffer = self.buffer
        self._outermost = buffer._edit_depth == 0
        buffer._edit_depth += 1
        if self._outermost:
            self._before_text = buffer.text
            self._before_cursor = buffer.state.caret
            self._span_cm = telemetry.span(
                name=f"buffer::{self.label}",
                component=True,
                metadata={"buffer": buffer.name},
            )
            self._span_cm.__enter__()
        return self

    def commit(self) -> None:
        buffer = self.buffer
        if buffer.text == self._before_text:
            return
        buffer.history.push(
            UndoEntry(
                label=self.label,
                before_text=self._before_text,
                after_text=buffer.text,
                cursor_before=self._before_cursor,
                cursor_after=buffer.state.caret,
            )
        )

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.buffer._edit_depth -= 1
        if self._outermost:
            self.commit()
            if self._span_cm is not None:
                self._span_cm.__exit__(exc_type, exc, tb)
        return False


__all__ = ["Buffer", "Transaction", "is_word_char"]
