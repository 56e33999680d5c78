"""Executes parsed commands against the buffer and engine state."""

from __future__ import annotations

from typing import Optional

from vim_interp.modes.base_mode import ModeContext, ModeResult
from vim_interp.runtime import telemetry

from .model import (
    REPEAT_LAST,
    Command,
    FindChar,
    Goto,
    Mark,
    MarkKind,
    MotionCommand,
    Repeat,
    Replace,
    Simple,
)
from .motions import MotionEngine


class CommandDispatcher:
    """Maps each command variant to its handler and tracks the ``.`` target."""

    def __init__(self, context: ModeContext) -> None:
        self.context = context
        self.motions = MotionEngine(context)
        self.logger = telemetry.get_logger("vim_interp.commands.dispatcher")

    def handle_command(self, command: Command, *, record: bool = True) -> ModeResult:
        with telemetry.span(
            "commands::dispatch",
            component="commands",
            metadata={"command": type(command).__name__},
        ):
            result = self._dispatch(command)
        if record and self.is_repeatable(command):
            self.context.state.last_command = command
        return result

    def _dispatch(self, command: Command) -> ModeResult:
        if isinstance(command, MotionCommand):
            return self.motions.handle_motion_command(command.operator, command.motion)
        if isinstance(command, Repeat):
            return self._repeat(command)
        if isinstance(command, Goto):
            return self.goto_line(command.line)
        if isinstance(command, FindChar):
            return self.find_char(command, remember=True)
        if isinstance(command, Mark):
            return self._mark(command)
        if isinstance(command, Replace):
            return self.replace_char(command.char)
        if isinstance(command, Simple):
            return self._simple(command)
        raise TypeError(f"Unsupported command {command!r}")

    def is_repeatable(self, command: Command) -> bool:
        if isinstance(command, Simple):
            if command.tag == REPEAT_LAST:
                return False
            action = self.context.registry.find_action(command.tag)
            return action is not None and action.repeatable
        if isinstance(command, Repeat):
            return self.is_repeatable(command.inner)
        if isinstance(command, Mark):
            return command.kind is MarkKind.SAVE
        return isinstance(command, (MotionCommand, Replace))

    def repeat_last(self) -> ModeResult:
        command = self.context.state.last_command
        if command is None:
            return ModeResult(consumed=True, status="nothing_to_repeat")
        return self.handle_command(command, record=False)

    def repeat_find(self, *, reverse: bool = False) -> ModeResult:
        last = self.context.state.last_find_char
        if last is None:
            return ModeResult(consumed=True, status="nothing_to_repeat")
        return self.find_char(last.reversed() if reverse else last, remember=False)

    def _repeat(self, command: Repeat) -> ModeResult:
        result = ModeResult(consumed=True)
        with self.context.buffer.edit_sequence("repeat"):
            for _ in range(command.count):
                outcome = self._dispatch(command.inner)
                if outcome.switch_to:
                    result.switch_to = outcome.switch_to
                result.status = outcome.status
        return result

    def goto_line(self, line: int) -> ModeResult:
        buffer = self.context.buffer
        line = max(0, min(line, buffer.last_line()))
        start, end = buffer.line_start(line), buffer.line_end(line)
        target = min(buffer.skip_whitespace(start, forward=True), end)
        self.context.state.cursor.place(buffer, target)
        return ModeResult(consumed=True, status="goto")

    def find_char(self, command: FindChar, *, remember: bool) -> ModeResult:
        target = self.motions.find_char_target(command)
        if target is None:
            return ModeResult(consumed=True, status="find_failed")
        self.context.state.cursor.place(self.context.buffer, target)
        if remember:
            self.context.state.last_find_char = command
        return ModeResult(consumed=True, status="find")

    def replace_char(self, char: str) -> ModeResult:
        buffer = self.context.buffer
        cursor = self.context.state.cursor
        position = cursor.position
        line_end = buffer.line_end(buffer.line_of(position))
        if position >= line_end:
            return ModeResult(consumed=True, status="replace_failed")
        with buffer.edit_sequence("replace"):
            buffer.delete(position, position + 1)
            cursor.place(buffer, position)
            settled = cursor.settle(buffer)
            buffer.insert(char, position)
            cursor.place(buffer, settled)
            # Step back right only when the clamp pulled the cursor left.
            if settled < position:
                cursor.place(buffer, settled + 1)
        return ModeResult(consumed=True, status="replace")

    def _mark(self, command: Mark) -> ModeResult:
        state = self.context.state
        if command.kind is MarkKind.SAVE:
            state.marks.save(command.char, state.cursor.position)
            return ModeResult(consumed=True, status="mark_saved")
        target = state.marks.get(command.char)
        if target is None:
            return ModeResult(consumed=True, status="mark_unset")
        buffer = self.context.buffer
        if command.kind is MarkKind.GOTO_LINE:
            return self.goto_line(buffer.line_of(min(target, buffer.last_position())))
        state.cursor.place(buffer, target)
        return ModeResult(consumed=True, status="mark_goto")

    def _simple(self, command: Simple) -> ModeResult:
        action = self.context.registry.find_action(command.tag)
        if action is None:
            telemetry.record_event(
                "command.unknown", level="debug", data={"tag": command.tag}
            )
            return ModeResult(consumed=True, status="unknown_command")
        outcome = action(self.context, command)
        if isinstance(outcome, ModeResult):
            return outcome
        return ModeResult(consumed=True)

    @property
    def last_command(self) -> Optional[Command]:
        return self.context.state.last_command


__all__ = ["CommandDispatcher"]
