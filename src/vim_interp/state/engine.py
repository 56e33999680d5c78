"""Per-view engine state owned by one ``ModeController``."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Optional

from .cursor import CursorModel
from .marks import MarkStore
from .paste import PasteType
from .prompts import ExState, SearchState

if TYPE_CHECKING:  # pragma: no cover
    from vim_interp.commands.model import Command, FindChar


class VisualDirection(str, Enum):
    SAME = "same"
    UP = "up"
    DOWN = "down"


@dataclass(slots=True)
class VisualState:
    """Which side of a line-wise selection grows next."""

    direction: VisualDirection = VisualDirection.SAME
    linewise: bool = False

    def reset(self, *, linewise: bool = False) -> None:
        self.direction = VisualDirection.SAME
        self.linewise = linewise


@dataclass(slots=True)
class EngineState:
    cursor: CursorModel = field(default_factory=CursorModel)
    marks: MarkStore = field(default_factory=MarkStore)
    paste_type: PasteType = PasteType.NORMAL
    search: SearchState = field(default_factory=SearchState)
    ex: ExState = field(default_factory=ExState)
    visual: VisualState = field(default_factory=VisualState)
    last_command: Optional["Command"] = None
    last_find_char: Optional["FindChar"] = None

    @property
    def vim_position(self) -> int:
        return self.cursor.position


__all__ = ["EngineState", "VisualDirection", "VisualState"]
