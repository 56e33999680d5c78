"""Actions dedicated to Visual and VisualLine selection management."""

from __future__ import annotations

from vim_interp.commands.model import Operator
from vim_interp.commands.motions import MotionRange
from vim_interp.modes.base_mode import EditorMode, ModeContext, ModeResult
from vim_interp.modes.keymap_helpers import require_dispatcher
from vim_interp.state import VisualDirection

from . import movement
from .movement import Step


def select_current(context: ModeContext) -> None:
    """Seed the selection for a fresh visual mode around ``vim_position``."""

    buffer = context.buffer
    position = context.state.cursor.position
    if context.state.visual.linewise:
        line = buffer.line_of(position)
        buffer.set_selection(buffer.line_start(line), buffer.line_end(line))
    else:
        buffer.set_selection(position, min(position + 1, buffer.last_position()))
    _emit_selection(context)


def vis_move_position(context: ModeContext, step: Step) -> ModeResult:
    buffer = context.buffer
    cursor = context.state.cursor
    old = cursor.position
    start, end = buffer.get_selection()
    step(context)
    if context.state.visual.linewise:
        _reselect_lines(context, start, end)
    else:
        _reselect_chars(context, old, start, end)
    _emit_selection(context)
    return ModeResult(consumed=True, status="visual_select")


def _reselect_chars(context: ModeContext, old: int, start: int, end: int) -> None:
    buffer = context.buffer
    cursor = context.state.cursor
    new = cursor.position
    if buffer.last_position() > 0 and new >= buffer.last_position():
        new = cursor.place(buffer, buffer.last_position() - 1, remember_column=False)
    first, last = start, max(end - 1, start)
    if old == last and old != first:
        fixed = first
    elif old == first and old != last:
        fixed = last
    elif abs(first - new) >= abs(last - new):
        fixed = first
    else:
        fixed = last
    buffer.set_selection(
        min(fixed, new), min(max(fixed, new) + 1, buffer.last_position())
    )


def _reselect_lines(context: ModeContext, start: int, end: int) -> None:
    buffer = context.buffer
    visual = context.state.visual
    first, last = buffer.line_of(start), buffer.line_of(end)
    anchor = last if visual.direction is VisualDirection.UP else first
    line = buffer.line_of(context.state.cursor.position)
    first, last = min(anchor, line), max(anchor, line)
    if first == last:
        visual.direction = VisualDirection.SAME
    elif line > anchor:
        visual.direction = VisualDirection.DOWN
    else:
        visual.direction = VisualDirection.UP
    buffer.set_selection(buffer.line_start(first), buffer.line_end(last))


def _emit_selection(context: ModeContext) -> None:
    start, end = context.buffer.get_selection()
    context.bus.emit(
        "visual.selection",
        {"start": start, "end": end, "cursor": context.state.cursor.position},
    )


def selection_range(context: ModeContext) -> MotionRange:
    buffer = context.buffer
    start, end = buffer.get_selection()
    if context.state.visual.linewise:
        motions = require_dispatcher(context).motions
        return motions.line_range(buffer.line_of(start), buffer.line_of(end))
    return MotionRange(start, end)


def _apply(context: ModeContext, operator: Operator) -> ModeResult:
    span = selection_range(context)
    result = require_dispatcher(context).motions.apply_operator(operator, span)
    if operator is Operator.YANK:
        context.state.cursor.place(context.buffer, span.start)
    if result.switch_to is None:
        result.switch_to = EditorMode.COMMAND
    return result


def delete_selection(context: ModeContext, command: object) -> ModeResult:
    del command
    return _apply(context, Operator.DELETE)


def yank_selection(context: ModeContext, command: object) -> ModeResult:
    del command
    return _apply(context, Operator.YANK)


def change_selection(context: ModeContext, command: object) -> ModeResult:
    del command
    return _apply(context, Operator.CHANGE)


def _extend(step: Step):
    def action(context: ModeContext, command: object) -> ModeResult:
        del command
        return vis_move_position(context, step)

    action.__name__ = step.__name__.replace("step_", "extend_")
    return action


extend_left = _extend(movement.step_left)
extend_right = _extend(movement.step_right)
extend_up = _extend(movement.step_up)
extend_down = _extend(movement.step_down)
extend_word_forward = _extend(movement.step_word_forward)
extend_word_backward = _extend(movement.step_word_backward)
extend_line_start = _extend(movement.step_line_start)
extend_line_end = _extend(movement.step_line_end)
extend_buffer_end = _extend(movement.step_buffer_end)


__all__ = [
    "change_selection",
    "delete_selection",
    "extend_buffer_end",
    "extend_down",
    "extend_left",
    "extend_line_end",
    "extend_line_start",
    "extend_right",
    "extend_up",
    "extend_word_backward",
    "extend_word_forward",
    "select_current",
    "selection_range",
    "vis_move_position",
    "yank_selection",
]
