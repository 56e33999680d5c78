"""Pure cursor movement for command and visual modes.

Each ``step_*`` function moves ``vim_position`` and reports whether it moved;
the ``move_*`` actions wrap them for the keymap table. Visual mode reuses the
steps and then recomputes the selection around the new position.
"""

from __future__ import annotations

from typing import Callable

from vim_interp.buffer import MoveUnit
from vim_interp.buffer.buffer import is_word_char
from vim_interp.commands.model import Motion, MotionKind
from vim_interp.modes.base_mode import ModeContext, ModeResult
from vim_interp.modes.keymap_helpers import require_dispatcher

Step = Callable[[ModeContext], bool]


def _place(context: ModeContext, target: int) -> bool:
    cursor = context.state.cursor
    before = cursor.position
    cursor.place(context.buffer, target)
    return cursor.position != before


def _line_bounds(context: ModeContext) -> tuple[int, int]:
    buffer = context.buffer
    line = buffer.line_of(context.state.cursor.position)
    return buffer.line_start(line), buffer.line_end(line)


def step_left(context: ModeContext) -> bool:
    start, _ = _line_bounds(context)
    position = context.state.cursor.position
    if position <= start:
        return False
    return _place(context, position - 1)


def step_right(context: ModeContext) -> bool:
    start, end = _line_bounds(context)
    position = context.state.cursor.position
    if position >= max(end - 1, start):
        return False
    return _place(context, position + 1)


def step_up(context: ModeContext) -> bool:
    return context.state.cursor.move_vertical(context.buffer, -1)


def step_down(context: ModeContext) -> bool:
    return context.state.cursor.move_vertical(context.buffer, 1)


def next_word_start(context: ModeContext, position: int) -> int:
    buffer = context.buffer
    if position >= buffer.last_position():
        return position
    char = buffer.get_text(position, position + 1)
    if char.isspace():
        return buffer.skip_whitespace(position, forward=True)
    if is_word_char(char):
        end = buffer.word_boundary(position, forward=True)
    else:
        end = position + 1
    return buffer.skip_whitespace(end, forward=True)


def step_word_forward(context: ModeContext) -> bool:
    position = context.state.cursor.position
    return _place(context, next_word_start(context, position))


def step_word_backward(context: ModeContext) -> bool:
    position = context.state.cursor.position
    return _place(context, context.buffer.word_boundary(position, forward=False))


def step_line_start(context: ModeContext) -> bool:
    start, _ = _line_bounds(context)
    return _place(context, start)


def first_nonblank(context: ModeContext, line: int) -> int:
    buffer = context.buffer
    start, end = buffer.line_start(line), buffer.line_end(line)
    return min(buffer.skip_whitespace(start, forward=True), end)


def step_first_nonblank(context: ModeContext) -> bool:
    line = context.buffer.line_of(context.state.cursor.position)
    return _place(context, first_nonblank(context, line))


def step_line_end(context: ModeContext) -> bool:
    start, end = _line_bounds(context)
    return _place(context, max(end - 1, start))


def step_buffer_start(context: ModeContext) -> bool:
    return _place(context, first_nonblank(context, 0))


def step_buffer_end(context: ModeContext) -> bool:
    return _place(context, first_nonblank(context, context.buffer.last_line()))


def _step_page(context: ModeContext, forward: bool) -> bool:
    buffer = context.buffer
    buffer.set_position(context.state.cursor.position)
    return _place(context, buffer.move(MoveUnit.PAGE, forward=forward))


def step_page_down(context: ModeContext) -> bool:
    return _step_page(context, True)


def step_page_up(context: ModeContext) -> bool:
    return _step_page(context, False)


def step_match(context: ModeContext) -> bool:
    span = require_dispatcher(context).motions.motion_range(Motion(MotionKind.MATCH))
    if span is None:
        return False
    position = context.state.cursor.position
    target = span.start if span.start != position else span.end - 1
    return _place(context, target)


def _run(step: Step) -> Callable[[ModeContext, object], ModeResult]:
    def action(context: ModeContext, command: object) -> ModeResult:
        del command
        moved = step(context)
        return ModeResult(consumed=True, status="move" if moved else "no_move")

    action.__name__ = step.__name__.replace("step_", "move_")
    return action


move_left = _run(step_left)
move_right = _run(step_right)
move_up = _run(step_up)
move_down = _run(step_down)
move_word_forward = _run(step_word_forward)
move_word_backward = _run(step_word_backward)
move_line_start = _run(step_line_start)
move_first_nonblank = _run(step_first_nonblank)
move_line_end = _run(step_line_end)
move_buffer_start = _run(step_buffer_start)
move_buffer_end = _run(step_buffer_end)
move_page_down = _run(step_page_down)
move_page_up = _run(step_page_up)
move_match = _run(step_match)


__all__ = [
    "Step",
    "first_nonblank",
    "next_word_start",
    "move_buffer_end",
    "move_buffer_start",
    "move_down",
    "move_first_nonblank",
    "move_left",
    "move_line_end",
    "move_line_start",
    "move_match",
    "move_page_down",
    "move_page_up",
    "move_right",
    "move_up",
    "move_word_backward",
    "move_word_forward",
    "step_buffer_end",
    "step_buffer_start",
    "step_down",
    "step_first_nonblank",
    "step_left",
    "step_line_end",
    "step_line_start",
    "step_match",
    "step_page_down",
    "step_page_up",
    "step_right",
    "step_up",
    "step_word_backward",
    "step_word_forward",
]
