"""Parsed command values produced by the key parser."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union

REPEAT_LAST = "repeat.last"


class Operator(str, Enum):
    CHANGE = "change"
    DELETE = "delete"
    YANK = "yank"


class Direction(str, Enum):
    FORWARD = "forward"
    BACKWARD = "backward"

    def flipped(self) -> "Direction":
        if self is Direction.FORWARD:
            return Direction.BACKWARD
        return Direction.FORWARD


class MarkKind(str, Enum):
    GOTO_LINE = "goto_line"
    GOTO_CHAR = "goto_char"
    SAVE = "save"


class MotionKind(str, Enum):
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"
    WORD_FORWARD = "word_forward"
    WORD_BACKWARD = "word_backward"
    A_WORD = "a_word"
    INNER_WORD = "inner_word"
    MATCH = "match"
    A_BLOCK = "a_block"
    INNER_BLOCK = "inner_block"
    FIND_CHAR = "find_char"
    LINE = "line"


@dataclass(frozen=True, slots=True)
class FindChar:
    direction: Direction
    inclusive: bool
    char: str

    def reversed(self) -> "FindChar":
        return FindChar(self.direction.flipped(), self.inclusive, self.char)


@dataclass(frozen=True, slots=True)
class Motion:
    kind: MotionKind
    # (open, close) pair for block text objects.
    delimiter: Optional[Tuple[str, str]] = None
    find: Optional[FindChar] = None


@dataclass(frozen=True, slots=True)
class Simple:
    tag: str


@dataclass(frozen=True, slots=True)
class MotionCommand:
    operator: Operator
    motion: Motion


@dataclass(frozen=True, slots=True)
class Repeat:
    count: int
    inner: "Command"


@dataclass(frozen=True, slots=True)
class Goto:
    line: int  # 0-based


@dataclass(frozen=True, slots=True)
class Mark:
    kind: MarkKind
    char: str


@dataclass(frozen=True, slots=True)
class Replace:
    char: str


Command = Union[Simple, MotionCommand, Repeat, Goto, FindChar, Mark, Replace]


__all__ = [
    "Command",
    "Direction",
    "FindChar",
    "Goto",
    "Mark",
    "MarkKind",
    "Motion",
    "MotionCommand",
    "MotionKind",
    "Operator",
    "REPEAT_LAST",
    "Repeat",
    "Replace",
    "Simple",
]
