"""Command values, the key parser, the motion engine and the dispatcher."""

from .model import (
    REPEAT_LAST,
    Command,
    Direction,
    FindChar,
    Goto,
    Mark,
    MarkKind,
    Motion,
    MotionCommand,
    MotionKind,
    Operator,
    Repeat,
    Replace,
    Simple,
)
from .motions import MotionEngine, MotionRange
from .parser import Awaiting, CommandParser, ParseDraft, ParseOutcome
from .dispatcher import CommandDispatcher

__all__ = [
    "Awaiting",
    "Command",
    "CommandDispatcher",
    "CommandParser",
    "Direction",
    "FindChar",
    "Goto",
    "Mark",
    "MarkKind",
    "Motion",
    "MotionCommand",
    "MotionEngine",
    "MotionKind",
    "MotionRange",
    "Operator",
    "ParseDraft",
    "ParseOutcome",
    "REPEAT_LAST",
    "Repeat",
    "Replace",
    "Simple",
]
