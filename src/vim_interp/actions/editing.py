"""Editing verbs: character deletes, line joins, paste, undo and tab hops."""

from __future__ import annotations

from vim_interp.commands.model import Motion, MotionKind, Operator
from vim_interp.commands.motions import MotionRange
from vim_interp.modes.base_mode import EditorMode, ModeContext, ModeResult
from vim_interp.modes.keymap_helpers import require_dispatcher
from vim_interp.state import PasteType

from .movement import first_nonblank


def delete_char(context: ModeContext, command: object) -> ModeResult:
    del command
    motions = require_dispatcher(context).motions
    return motions.handle_motion_command(Operator.DELETE, Motion(MotionKind.RIGHT))


def delete_char_before(context: ModeContext, command: object) -> ModeResult:
    del command
    motions = require_dispatcher(context).motions
    return motions.handle_motion_command(Operator.DELETE, Motion(MotionKind.LEFT))


def _to_line_end(context: ModeContext) -> MotionRange:
    buffer = context.buffer
    position = context.state.cursor.position
    return MotionRange(position, buffer.line_end(buffer.line_of(position)))


def delete_to_line_end(context: ModeContext, command: object) -> ModeResult:
    del command
    span = _to_line_end(context)
    if span.start >= span.end:
        return ModeResult(consumed=True, status="motion_failed")
    return require_dispatcher(context).motions.apply_operator(Operator.DELETE, span)


def change_to_line_end(context: ModeContext, command: object) -> ModeResult:
    del command
    span = _to_line_end(context)
    if span.start >= span.end:
        return ModeResult(consumed=True, switch_to=EditorMode.INSERT, status="change")
    return require_dispatcher(context).motions.apply_operator(Operator.CHANGE, span)


def join_lines(context: ModeContext, command: object) -> ModeResult:
    del command
    buffer = context.buffer
    line = buffer.line_of(context.state.cursor.position)
    if line >= buffer.last_line():
        return ModeResult(consumed=True, status="join_failed")
    joint = buffer.line_end(line)
    next_end = buffer.line_end(line + 1)
    resume = min(buffer.skip_whitespace(joint + 1, forward=True), next_end)
    separator = " " if resume < next_end and joint > buffer.line_start(line) else ""
    with buffer.edit_sequence("join"):
        buffer.delete(joint, resume)
        if separator:
            buffer.insert(separator, joint)
    context.state.cursor.place(buffer, joint)
    return ModeResult(consumed=True, status="join")


def undo(context: ModeContext, command: object) -> ModeResult:
    del command
    position = context.buffer.undo()
    if position is None:
        return ModeResult(consumed=True, status="undo_empty")
    context.state.cursor.place(context.buffer, position)
    return ModeResult(consumed=True, status="undo")


def redo(context: ModeContext, command: object) -> ModeResult:
    del command
    position = context.buffer.redo()
    if position is None:
        return ModeResult(consumed=True, status="redo_empty")
    context.state.cursor.place(context.buffer, position)
    return ModeResult(consumed=True, status="redo")


def _paste_charwise(context: ModeContext, *, after: bool) -> None:
    buffer = context.buffer
    cursor = context.state.cursor
    position = cursor.position
    line = buffer.line_of(position)
    start, end = buffer.line_start(line), buffer.line_end(line)
    before = buffer.last_position()
    if after and end > start and position == end - 1:
        # No slot after the last char: paste in front of a placeholder.
        buffer.insert(" ", end)
        buffer.paste(end)
        placeholder = end + (buffer.last_position() - before) - 1
        buffer.delete(placeholder, placeholder + 1)
        insert_at = end
    else:
        insert_at = position + 1 if after and position < end else position
        buffer.paste(insert_at)
    delta = buffer.last_position() - before
    cursor.place(buffer, insert_at + max(delta, 1) - 1)


def _paste_linewise(context: ModeContext, *, after: bool, keep_break: bool) -> None:
    buffer = context.buffer
    cursor = context.state.cursor
    line = buffer.line_of(cursor.position)
    anchor = buffer.line_end(line) if after else buffer.line_start(line)
    buffer.insert("\n", anchor)
    insert_at = anchor + 1 if after else anchor
    size = len(buffer.paste(insert_at))
    if not keep_break:
        duplicate = insert_at + size - 1
        buffer.delete(duplicate, duplicate + 1)
    cursor.place(buffer, first_nonblank(context, buffer.line_of(insert_at)))


def _paste(context: ModeContext, *, after: bool) -> ModeResult:
    buffer = context.buffer
    if not buffer.clipboard.get():
        return ModeResult(consumed=True, status="paste_empty")
    paste_type = context.state.paste_type
    with buffer.edit_sequence("paste"):
        if paste_type is PasteType.NORMAL:
            _paste_charwise(context, after=after)
        else:
            _paste_linewise(
                context, after=after, keep_break=paste_type is PasteType.LINE_END
            )
    return ModeResult(consumed=True, status="paste")


def paste_after(context: ModeContext, command: object) -> ModeResult:
    del command
    return _paste(context, after=True)


def paste_before(context: ModeContext, command: object) -> ModeResult:
    del command
    return _paste(context, after=False)


def tab_next(context: ModeContext, command: object) -> ModeResult:
    del command
    context.bus.emit("tab.next", None)
    return ModeResult(consumed=True, status="tab_next")


def tab_previous(context: ModeContext, command: object) -> ModeResult:
    del command
    context.bus.emit("tab.previous", None)
    return ModeResult(consumed=True, status="tab_previous")


__all__ = [
    "change_to_line_end",
    "delete_char",
    "delete_char_before",
    "delete_to_line_end",
    "join_lines",
    "paste_after",
    "paste_before",
    "redo",
    "tab_next",
    "tab_previous",
    "undo",
]
