"""Interpreter state: cursor, marks, paste kind, prompts."""

from .cursor import CursorModel
from .engine import EngineState, VisualDirection, VisualState
from .marks import MARK_NAMES, MarkStore
from .paste import PasteType, classify_paste
from .prompts import ExState, SearchState

__all__ = [
    "CursorModel",
    "EngineState",
    "ExState",
    "MARK_NAMES",
    "MarkStore",
    "PasteType",
    "SearchState",
    "VisualDirection",
    "VisualState",
    "classify_paste",
]
