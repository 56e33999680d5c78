"""Handlers behind the simple-command table and the visual bindings.

Every handler takes ``(context, command)`` and returns a ``ModeResult``.
"""

from . import command, core, editing, movement, search, visual
from .command import execute_ex
from .search import do_next_search, do_previous_search
from .visual import vis_move_position

__all__ = [
    "command",
    "core",
    "do_next_search",
    "do_previous_search",
    "editing",
    "execute_ex",
    "movement",
    "search",
    "vis_move_position",
    "visual",
]
