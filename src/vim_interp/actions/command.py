"""Evaluation of committed ex (``:``) command lines.

Host-side effects travel as bus events; the interpreter itself only touches
the buffer for ``:enew`` and line jumps. Whatever the input, the result
returns the controller to Command mode.
"""

from __future__ import annotations

import re
from typing import Callable, Dict, Optional

from vim_interp.modes.base_mode import EditorMode, ModeContext, ModeResult
from vim_interp.modes.keymap_helpers import require_dispatcher
from vim_interp.runtime import telemetry

ExHandler = Callable[[ModeContext, Optional[str], bool], str]

_TAB_MOVE = re.compile(r"^[+-]\d+$")


def _prefix_of(word: str, full: str, shortest: int = 1) -> bool:
    return len(word) >= shortest and full.startswith(word)


def _done(status: str, message: Optional[str] = None) -> ModeResult:
    return ModeResult(
        consumed=True, switch_to=EditorMode.COMMAND, status=status, message=message
    )


def execute_ex(context: ModeContext, text: str) -> ModeResult:
    line = text.strip()
    telemetry.record_event("ex.command", level="debug", data={"text": line})
    if not line:
        return _done("ex_empty")

    if line.isdigit():
        require_dispatcher(context).goto_line(int(line) - 1)
        return _done("ex_goto_line")

    head, _, rest = line.partition(" ")
    argument = rest.strip() or None
    force = head.endswith("!")
    name = head.rstrip("!")

    handler = _lookup(name)
    if handler is None:
        telemetry.record_event("ex.unknown", level="debug", data={"text": line})
        return _done("ex_unknown", line)
    return _done(handler(context, argument, force), line)


def _lookup(name: str) -> Optional[ExHandler]:
    handler = _EXACT.get(name)
    if handler is not None:
        return handler
    if _prefix_of(name, "quit"):
        return _quit
    if _prefix_of(name, "write"):
        return _write
    return None


def _goto(context: ModeContext, argument: Optional[str], force: bool) -> str:
    del force
    if argument is None or not argument.isdigit():
        return "ex_unknown"
    offset = max(int(argument) - 1, 0)
    context.state.cursor.place(context.buffer, offset)
    return "ex_goto"


def _refused(context: ModeContext, name: str) -> str:
    context.bus.emit("ex.refused", {"command": name, "reason": "modified"})
    return "ex_refused"


def _enew(context: ModeContext, argument: Optional[str], force: bool) -> str:
    del argument
    if context.buffer.modified and not force:
        return _refused(context, "enew")
    context.buffer.reset("")
    context.state.cursor.place(context.buffer, 0)
    context.bus.emit("file.new", {"force": force})
    return "ex_enew"


def _find(context: ModeContext, argument: Optional[str], force: bool) -> str:
    if context.buffer.modified and not force:
        return _refused(context, "find")
    context.bus.emit("file.reload", {"force": force, "path": argument})
    return "ex_reload"


def _edit(context: ModeContext, argument: Optional[str], force: bool) -> str:
    if argument is None:
        return "ex_unknown"
    context.bus.emit("file.open", {"path": argument, "create": True, "force": force})
    return "ex_open"


def _write_payload(context: ModeContext, argument: Optional[str], force: bool) -> dict:
    return {"path": argument, "force": force, "text": context.buffer.get_text()}


def _write(context: ModeContext, argument: Optional[str], force: bool) -> str:
    context.bus.emit("file.write", _write_payload(context, argument, force))
    return "ex_write"


def _quit(context: ModeContext, argument: Optional[str], force: bool) -> str:
    del argument
    context.bus.emit("view.close", {"force": force})
    return "ex_quit"


def _write_quit(context: ModeContext, argument: Optional[str], force: bool) -> str:
    context.bus.emit("file.write", _write_payload(context, argument, force))
    context.bus.emit("view.close", {"force": force})
    return "ex_write_quit"


def _tab_new(context: ModeContext, argument: Optional[str], force: bool) -> str:
    del force
    context.bus.emit("tab.new", {"path": argument})
    return "ex_tab_new"


def _tab_next(context: ModeContext, argument: Optional[str], force: bool) -> str:
    del argument, force
    context.bus.emit("tab.next", None)
    return "ex_tab_next"


def _tab_previous(context: ModeContext, argument: Optional[str], force: bool) -> str:
    del argument, force
    context.bus.emit("tab.previous", None)
    return "ex_tab_previous"


def _tab_move(context: ModeContext, argument: Optional[str], force: bool) -> str:
    del force
    if argument is None or not _TAB_MOVE.match(argument):
        return "ex_unknown"
    context.bus.emit("tab.move", {"offset": int(argument)})
    return "ex_tab_move"


_EXACT: Dict[str, ExHandler] = {
    "goto": _goto,
    "enew": _enew,
    "find": _find,
    "e": _edit,
    "ed": _edit,
    "edi": _edit,
    "edit": _edit,
    "wq": _write_quit,
    "tabnew": _tab_new,
    "tabnext": _tab_next,
    "tabprev": _tab_previous,
    "tabm": _tab_move,
}


__all__ = ["execute_ex"]
