"""Resumable command-mode key parser.

Every key is fed to :meth:`CommandParser.feed`, which either completes a
:class:`~vim_interp.commands.model.Command`, reports that it needs more keys
(the draft is kept until the next call), or misses (the draft is dropped).
There is at most one draft; :meth:`CommandParser.cancel` discards it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Literal, Optional

from vim_interp.keymaps import KeymapResolver
from vim_interp.runtime import telemetry

from .model import (
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

COMMAND_MODE = "command"
BUFFER_START = "move.buffer_start"
BUFFER_END = "move.buffer_end"

OPERATOR_KEYS = {"c": Operator.CHANGE, "d": Operator.DELETE, "y": Operator.YANK}

MOTION_KEYS = {
    "h": MotionKind.LEFT,
    "LEFT": MotionKind.LEFT,
    "l": MotionKind.RIGHT,
    "RIGHT": MotionKind.RIGHT,
    "k": MotionKind.UP,
    "UP": MotionKind.UP,
    "j": MotionKind.DOWN,
    "DOWN": MotionKind.DOWN,
    "w": MotionKind.WORD_FORWARD,
    "b": MotionKind.WORD_BACKWARD,
    "%": MotionKind.MATCH,
}

BLOCK_KEYS = {
    "(": ("(", ")"),
    ")": ("(", ")"),
    "b": ("(", ")"),
    "[": ("[", "]"),
    "]": ("[", "]"),
    "{": ("{", "}"),
    "}": ("{", "}"),
    "B": ("{", "}"),
    "<": ("<", ">"),
    ">": ("<", ">"),
    '"': ('"', '"'),
    "'": ("'", "'"),
    "`": ("`", "`"),
}

FIND_KEYS = {
    "f": (Direction.FORWARD, True),
    "F": (Direction.BACKWARD, True),
    "t": (Direction.FORWARD, False),
    "T": (Direction.BACKWARD, False),
}

MARK_KEYS = {"m": MarkKind.SAVE, "'": MarkKind.GOTO_LINE, "`": MarkKind.GOTO_CHAR}


class Awaiting(str, Enum):
    NONE = "none"
    SEQUENCE = "sequence"  # a prefix of a multi-key binding such as ``g``
    OPERATOR = "operator"  # ``c``/``d``/``y`` waiting for its motion
    TEXT_OBJECT = "text_object"  # ``a``/``i`` waiting for the object key
    CHARACTER = "character"  # ``f``/``t``/``m``/``r`` waiting for a char


@dataclass(slots=True)
class ParseDraft:
    awaiting: Awaiting = Awaiting.NONE
    count: str = ""
    operator: Optional[Operator] = None
    operator_key: str = ""
    motion_count: str = ""
    whole: bool = False
    find: Optional[tuple[Direction, bool]] = None
    mark: Optional[MarkKind] = None
    replace: bool = False
    tokens: List[str] = field(default_factory=list)

    @property
    def empty(self) -> bool:
        return self.awaiting is Awaiting.NONE and not self.count

    def total_count(self) -> int:
        return int(self.count or "1") * int(self.motion_count or "1")


@dataclass(frozen=True, slots=True)
class ParseOutcome:
    status: Literal["command", "pending", "miss"]
    command: Optional[Command] = None


PENDING = ParseOutcome(status="pending")
MISS = ParseOutcome(status="miss")


class CommandParser:
    def __init__(self, resolver: KeymapResolver, *, mode: str = COMMAND_MODE) -> None:
        self._resolver = resolver
        self._mode = mode
        self._draft = ParseDraft()
        self.logger = telemetry.get_logger("vim_interp.commands.parser")

    @property
    def pending(self) -> bool:
        return not self._draft.empty

    @property
    def draft(self) -> ParseDraft:
        return self._draft

    def cancel(self) -> None:
        self._draft = ParseDraft()

    def feed(self, token: str) -> ParseOutcome:
        draft = self._draft
        if draft.awaiting is Awaiting.CHARACTER:
            outcome = self._feed_character(draft, token)
        elif draft.awaiting is Awaiting.TEXT_OBJECT:
            outcome = self._feed_text_object(draft, token)
        elif draft.awaiting is Awaiting.OPERATOR:
            outcome = self._feed_operator(draft, token)
        elif draft.awaiting is Awaiting.SEQUENCE:
            outcome = self._feed_sequence(draft, token)
        else:
            outcome = self._feed_start(draft, token)

        if outcome.status != "pending":
            if outcome.status == "miss":
                telemetry.record_event(
                    "parser.miss", level="debug", data={"token": token}
                )
            self.cancel()
        return outcome

    def _feed_start(self, draft: ParseDraft, token: str) -> ParseOutcome:
        if token.isdigit() and len(token) == 1 and (token != "0" or draft.count):
            draft.count += token
            return PENDING
        if token in OPERATOR_KEYS:
            draft.operator = OPERATOR_KEYS[token]
            draft.operator_key = token
            draft.awaiting = Awaiting.OPERATOR
            return PENDING
        if token in FIND_KEYS:
            draft.find = FIND_KEYS[token]
            draft.awaiting = Awaiting.CHARACTER
            return PENDING
        if token in MARK_KEYS:
            draft.mark = MARK_KEYS[token]
            draft.awaiting = Awaiting.CHARACTER
            return PENDING
        if token == "r":
            draft.replace = True
            draft.awaiting = Awaiting.CHARACTER
            return PENDING
        if token == "G":
            if draft.count:
                return ParseOutcome("command", Goto(int(draft.count) - 1))
            return ParseOutcome("command", Simple(BUFFER_END))
        return self._feed_sequence(draft, token)

    def _feed_sequence(self, draft: ParseDraft, token: str) -> ParseOutcome:
        draft.tokens.append(token)
        result = self._resolver.resolve(self._mode, draft.tokens)
        if result.status == "pending":
            draft.awaiting = Awaiting.SEQUENCE
            return PENDING
        if result.status == "miss" or result.match is None:
            return MISS
        action_id = result.match.action.id
        if action_id == BUFFER_START and draft.count:
            return ParseOutcome("command", Goto(int(draft.count) - 1))
        return self._finish(draft, Simple(action_id))

    def _feed_operator(self, draft: ParseDraft, token: str) -> ParseOutcome:
        assert draft.operator is not None
        if token.isdigit() and len(token) == 1 and (token != "0" or draft.motion_count):
            draft.motion_count += token
            return PENDING
        if token == draft.operator_key:
            return self._finish_motion(draft, Motion(MotionKind.LINE))
        if token in MOTION_KEYS:
            return self._finish_motion(draft, Motion(MOTION_KEYS[token]))
        if token in ("a", "i"):
            draft.whole = token == "a"
            draft.awaiting = Awaiting.TEXT_OBJECT
            return PENDING
        if token in FIND_KEYS:
            draft.find = FIND_KEYS[token]
            draft.awaiting = Awaiting.CHARACTER
            return PENDING
        return MISS

    def _feed_text_object(self, draft: ParseDraft, token: str) -> ParseOutcome:
        if token == "w":
            kind = MotionKind.A_WORD if draft.whole else MotionKind.INNER_WORD
            return self._finish_motion(draft, Motion(kind))
        if token in BLOCK_KEYS:
            kind = MotionKind.A_BLOCK if draft.whole else MotionKind.INNER_BLOCK
            return self._finish_motion(draft, Motion(kind, delimiter=BLOCK_KEYS[token]))
        return MISS

    def _feed_character(self, draft: ParseDraft, token: str) -> ParseOutcome:
        if len(token) != 1:
            return MISS
        if draft.find is not None:
            direction, inclusive = draft.find
            find = FindChar(direction, inclusive, token)
            if draft.operator is not None:
                return self._finish_motion(
                    draft, Motion(MotionKind.FIND_CHAR, find=find)
                )
            return self._finish(draft, find)
        if draft.mark is not None:
            return ParseOutcome("command", Mark(draft.mark, token))
        if draft.replace:
            return ParseOutcome("command", Replace(token))
        return MISS

    def _finish_motion(self, draft: ParseDraft, motion: Motion) -> ParseOutcome:
        assert draft.operator is not None
        return self._finish(draft, MotionCommand(draft.operator, motion))

    def _finish(self, draft: ParseDraft, command: Command) -> ParseOutcome:
        count = draft.total_count()
        if count > 1:
            command = Repeat(count, command)
        return ParseOutcome("command", command)


__all__ = ["Awaiting", "CommandParser", "ParseDraft", "ParseOutcome"]
