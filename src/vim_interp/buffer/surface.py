"""The buffer capability consumed by the interpreter core."""

from __future__ import annotations

from enum import Enum
from typing import ContextManager, Optional, Protocol

from .registers import Clipboard
from .state import Position, Selection
from .sync import BufferMirror


class MoveUnit(str, Enum):
    CHAR = "char"
    LINE = "line"
    WORD = "word"
    PAGE = "page"


class TextSurface(Protocol):
    """Everything the modal core asks of a text buffer.

    Offsets are absolute character positions. Lookups that can fail return
    ``None``; mutations raise ``BufferValidationError`` on bad offsets.
    """

    clipboard: Clipboard

    @property
    def modified(self) -> bool: ...

    @property
    def caret_visible(self) -> bool: ...

    def set_caret_visible(self, visible: bool) -> None: ...

    def get_text(self, start: Position = 0, end: Optional[Position] = None) -> str: ...

    def get_position(self) -> Position: ...

    def set_position(self, position: Position) -> None: ...

    def get_selection(self) -> Selection: ...

    def set_selection(self, start: Position, end: Position) -> None: ...

    def move(
        self,
        unit: MoveUnit,
        *,
        forward: bool = True,
        extend: bool = False,
        count: int = 1,
    ) -> Position: ...

    def insert(self, text: str, position: Optional[Position] = None) -> None: ...

    def delete(self, start: Position, end: Position) -> str: ...

    def cut(self, start: Position, end: Position) -> str: ...

    def copy(self, start: Position, end: Position) -> str: ...

    def paste(self, position: Optional[Position] = None) -> str: ...

    def line_of(self, position: Position) -> int: ...

    def line_start(self, line: int) -> Position: ...

    def line_end(self, line: int) -> Position: ...

    def last_line(self) -> int: ...

    def last_position(self) -> Position: ...

    def word_boundary(self, position: Position, *, forward: bool) -> Position: ...

    def word_span(self, position: Position) -> Optional[Selection]: ...

    def forward_match(self, position: Position) -> Optional[Position]: ...

    def backward_match(self, position: Position) -> Optional[Position]: ...

    def find_string(
        self, needle: str, start: Position, *, forward: bool = True
    ) -> Optional[Position]: ...

    def skip_whitespace(self, position: Position, *, forward: bool = True) -> Position: ...

    def edit_sequence(self, label: str) -> ContextManager[object]: ...

    def begin_edit_sequence(self, label: str = "edit") -> None: ...

    def end_edit_sequence(self) -> None: ...

    def undo(self) -> Optional[Position]: ...

    def redo(self) -> Optional[Position]: ...

    def reset(self, text: str = "") -> None: ...

    def mark_saved(self) -> None: ...

    def mirror(self, *, attributes: Optional[dict[str, str]] = None) -> BufferMirror: ...


__all__ = ["MoveUnit", "TextSurface"]
