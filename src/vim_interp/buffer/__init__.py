"""Buffer capability, in-memory buffer and undo/redo data structures."""

from .buffer import Buffer, Transaction
from .registers import Clipboard
from .state import BufferState, Position, Selection
from .surface import MoveUnit, TextSurface
from .sync import BufferMirror, BufferValidationError
from .undo import UndoEntry, UndoTimeline
from .validation import ensure_position, ensure_range

__all__ = [
    "Buffer",
    "BufferMirror",
    "BufferState",
    "BufferValidationError",
    "Clipboard",
    "MoveUnit",
    "Position",
    "Selection",
    "TextSurface",
    "Transaction",
    "UndoEntry",
    "UndoTimeline",
    "ensure_position",
    "ensure_range",
]
