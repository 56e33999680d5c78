"""Mode-entry and repetition actions shared across modes."""

from __future__ import annotations

from vim_interp.modes.base_mode import EditorMode, ModeContext, ModeResult
from vim_interp.modes.keymap_helpers import require_dispatcher

from .movement import first_nonblank


def enter_insert_mode(context: ModeContext, command: object) -> ModeResult:
    del command
    return ModeResult(consumed=True, switch_to=EditorMode.INSERT, message="enter_insert")


def append(context: ModeContext, command: object) -> ModeResult:
    del command
    buffer = context.buffer
    cursor = context.state.cursor
    line_end = buffer.line_end(buffer.line_of(cursor.position))
    if cursor.position < line_end:
        cursor.place(buffer, cursor.position + 1)
    return ModeResult(consumed=True, switch_to=EditorMode.INSERT, message="append")


def append_line_end(context: ModeContext, command: object) -> ModeResult:
    del command
    buffer = context.buffer
    cursor = context.state.cursor
    cursor.place(buffer, buffer.line_end(buffer.line_of(cursor.position)))
    return ModeResult(consumed=True, switch_to=EditorMode.INSERT, message="append")


def insert_line_start(context: ModeContext, command: object) -> ModeResult:
    del command
    cursor = context.state.cursor
    line = context.buffer.line_of(cursor.position)
    cursor.place(context.buffer, first_nonblank(context, line))
    return ModeResult(consumed=True, switch_to=EditorMode.INSERT, message="enter_insert")


def open_line_below(context: ModeContext, command: object) -> ModeResult:
    del command
    buffer = context.buffer
    cursor = context.state.cursor
    line_end = buffer.line_end(buffer.line_of(cursor.position))
    with buffer.edit_sequence("open_line"):
        buffer.insert("\n", line_end)
    cursor.place(buffer, line_end + 1)
    return ModeResult(consumed=True, switch_to=EditorMode.INSERT, message="open_line")


def open_line_above(context: ModeContext, command: object) -> ModeResult:
    del command
    buffer = context.buffer
    cursor = context.state.cursor
    line_start = buffer.line_start(buffer.line_of(cursor.position))
    with buffer.edit_sequence("open_line"):
        buffer.insert("\n", line_start)
    cursor.place(buffer, line_start)
    return ModeResult(consumed=True, switch_to=EditorMode.INSERT, message="open_line")


def enter_visual_mode(context: ModeContext, command: object) -> ModeResult:
    del command
    return ModeResult(consumed=True, switch_to=EditorMode.VISUAL, message="enter_visual")


def enter_visual_line_mode(context: ModeContext, command: object) -> ModeResult:
    del command
    return ModeResult(
        consumed=True, switch_to=EditorMode.VISUAL_LINE, message="enter_visual_line"
    )


def enter_ex_mode(context: ModeContext, command: object) -> ModeResult:
    del command
    return ModeResult(consumed=True, switch_to=EditorMode.EX, message="enter_ex")


def enter_search_mode(context: ModeContext, command: object) -> ModeResult:
    del command
    return ModeResult(consumed=True, switch_to=EditorMode.SEARCH, message="enter_search")


def exit_to_command_mode(context: ModeContext, command: object) -> ModeResult:
    del command
    return ModeResult(consumed=True, switch_to=EditorMode.COMMAND, message="exit")


def repeat_last(context: ModeContext, command: object) -> ModeResult:
    del command
    return require_dispatcher(context).repeat_last()


def repeat_find(context: ModeContext, command: object) -> ModeResult:
    del command
    return require_dispatcher(context).repeat_find()


def repeat_find_reversed(context: ModeContext, command: object) -> ModeResult:
    del command
    return require_dispatcher(context).repeat_find(reverse=True)


__all__ = [
    "append",
    "append_line_end",
    "enter_ex_mode",
    "enter_insert_mode",
    "enter_search_mode",
    "enter_visual_line_mode",
    "enter_visual_mode",
    "exit_to_command_mode",
    "insert_line_start",
    "open_line_above",
    "open_line_below",
    "repeat_find",
    "repeat_find_reversed",
    "repeat_last",
]
