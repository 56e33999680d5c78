"""Built-in keymaps: the simple-command table and the visual bindings.

Command-mode keys that take arguments or counts (``c d y f F t T m ' ` r G``
and digits) are handled by the command parser before the table is consulted.
"""

from __future__ import annotations

from typing import Callable, Mapping, Sequence

from vim_interp.actions import core as core_actions
from vim_interp.actions import editing as editing_actions
from vim_interp.actions import movement as movement_actions
from vim_interp.actions import search as search_actions
from vim_interp.actions import visual as visual_actions
from vim_interp.commands.model import REPEAT_LAST

from .models import ActionRef, Binding, KeySequence
from .registry import KeymapRegistry

VISUAL_MODES = ("visual", "visual_line")


def _action(
    action_id: str,
    handler: Callable[..., object],
    description: str,
    *,
    repeatable: bool = True,
) -> ActionRef:
    return ActionRef(
        id=action_id,
        handler=handler,
        description=description,
        metadata={"repeatable": repeatable},
    )


def _motion(action_id: str, handler: Callable[..., object], description: str) -> ActionRef:
    return _action(action_id, handler, description, repeatable=False)


DEFAULT_ACTIONS: tuple[ActionRef, ...] = (
    _action("core.insert", core_actions.enter_insert_mode, "Insert before the cursor"),
    _action("core.append", core_actions.append, "Append after the cursor"),
    _action("core.append_line_end", core_actions.append_line_end, "Append at line end"),
    _action(
        "core.insert_line_start",
        core_actions.insert_line_start,
        "Insert at the first non-blank",
    ),
    _action("core.open_below", core_actions.open_line_below, "Open a line below"),
    _action("core.open_above", core_actions.open_line_above, "Open a line above"),
    _motion("core.visual", core_actions.enter_visual_mode, "Character-wise visual"),
    _motion(
        "core.visual_line", core_actions.enter_visual_line_mode, "Line-wise visual"
    ),
    _motion("core.ex", core_actions.enter_ex_mode, "Open the ex command line"),
    _motion("core.search", core_actions.enter_search_mode, "Open the search prompt"),
    _motion("core.exit", core_actions.exit_to_command_mode, "Back to command mode"),
    _motion(REPEAT_LAST, core_actions.repeat_last, "Repeat the last change"),
    _motion("find.repeat", core_actions.repeat_find, "Repeat the last find-char"),
    _motion(
        "find.reverse",
        core_actions.repeat_find_reversed,
        "Repeat the last find-char backwards",
    ),
    _motion("move.left", movement_actions.move_left, "Cursor left"),
    _motion("move.right", movement_actions.move_right, "Cursor right"),
    _motion("move.up", movement_actions.move_up, "Cursor up"),
    _motion("move.down", movement_actions.move_down, "Cursor down"),
    _motion("move.word_forward", movement_actions.move_word_forward, "Next word"),
    _motion("move.word_backward", movement_actions.move_word_backward, "Previous word"),
    _motion("move.line_start", movement_actions.move_line_start, "Start of line"),
    _motion(
        "move.first_nonblank", movement_actions.move_first_nonblank, "First non-blank"
    ),
    _motion("move.line_end", movement_actions.move_line_end, "End of line"),
    _motion("move.buffer_start", movement_actions.move_buffer_start, "First line"),
    _motion("move.buffer_end", movement_actions.move_buffer_end, "Last line"),
    _motion("move.match", movement_actions.move_match, "Matching bracket"),
    _motion("move.page_down", movement_actions.move_page_down, "Page down"),
    _motion("move.page_up", movement_actions.move_page_up, "Page up"),
    _motion("search.next", search_actions.search_next, "Next match"),
    _motion("search.previous", search_actions.search_previous, "Previous match"),
    _motion("search.word", search_actions.search_word, "Search word under cursor"),
    _action("edit.delete_char", editing_actions.delete_char, "Delete under cursor"),
    _action(
        "edit.delete_char_before",
        editing_actions.delete_char_before,
        "Delete before cursor",
    ),
    _action(
        "edit.delete_to_eol", editing_actions.delete_to_line_end, "Delete to line end"
    ),
    _action(
        "edit.change_to_eol", editing_actions.change_to_line_end, "Change to line end"
    ),
    _action("edit.join", editing_actions.join_lines, "Join with the next line"),
    _action("edit.paste_after", editing_actions.paste_after, "Put after"),
    _action("edit.paste_before", editing_actions.paste_before, "Put before"),
    _motion("edit.undo", editing_actions.undo, "Undo"),
    _motion("edit.redo", editing_actions.redo, "Redo"),
    _motion("tab.next", editing_actions.tab_next, "Next tab"),
    _motion("tab.previous", editing_actions.tab_previous, "Previous tab"),
    _motion("visual.left", visual_actions.extend_left, "Extend selection left"),
    _motion("visual.right", visual_actions.extend_right, "Extend selection right"),
    _motion("visual.up", visual_actions.extend_up, "Extend selection up"),
    _motion("visual.down", visual_actions.extend_down, "Extend selection down"),
    _motion(
        "visual.word_forward",
        visual_actions.extend_word_forward,
        "Extend selection to next word",
    ),
    _motion(
        "visual.word_backward",
        visual_actions.extend_word_backward,
        "Extend selection to previous word",
    ),
    _motion(
        "visual.line_start",
        visual_actions.extend_line_start,
        "Extend selection to line start",
    ),
    _motion(
        "visual.line_end", visual_actions.extend_line_end, "Extend selection to line end"
    ),
    _motion(
        "visual.buffer_end",
        visual_actions.extend_buffer_end,
        "Extend selection to last line",
    ),
    _action("visual.delete", visual_actions.delete_selection, "Delete selection"),
    _action("visual.yank", visual_actions.yank_selection, "Yank selection"),
    _action("visual.change", visual_actions.change_selection, "Change selection"),
)

COMMAND_KEYS: tuple[tuple[tuple[str, ...], str], ...] = (
    (("i",), "core.insert"),
    (("a",), "core.append"),
    (("A",), "core.append_line_end"),
    (("I",), "core.insert_line_start"),
    (("o",), "core.open_below"),
    (("O",), "core.open_above"),
    (("v",), "core.visual"),
    (("V",), "core.visual_line"),
    ((":",), "core.ex"),
    (("/",), "core.search"),
    ((".",), REPEAT_LAST),
    ((";",), "find.repeat"),
    ((",",), "find.reverse"),
    (("h",), "move.left"),
    (("LEFT",), "move.left"),
    (("l",), "move.right"),
    (("RIGHT",), "move.right"),
    (("k",), "move.up"),
    (("UP",), "move.up"),
    (("j",), "move.down"),
    (("DOWN",), "move.down"),
    (("w",), "move.word_forward"),
    (("b",), "move.word_backward"),
    (("0",), "move.line_start"),
    (("^",), "move.first_nonblank"),
    (("$",), "move.line_end"),
    (("g", "g"), "move.buffer_start"),
    (("G",), "move.buffer_end"),
    (("%",), "move.match"),
    (("ctrl+f",), "move.page_down"),
    (("ctrl+b",), "move.page_up"),
    (("n",), "search.next"),
    (("N",), "search.previous"),
    (("*",), "search.word"),
    (("x",), "edit.delete_char"),
    (("X",), "edit.delete_char_before"),
    (("D",), "edit.delete_to_eol"),
    (("C",), "edit.change_to_eol"),
    (("J",), "edit.join"),
    (("p",), "edit.paste_after"),
    (("P",), "edit.paste_before"),
    (("u",), "edit.undo"),
    (("ctrl+r",), "edit.redo"),
    (("g", "t"), "tab.next"),
    (("g", "T"), "tab.previous"),
)

VISUAL_KEYS: tuple[tuple[tuple[str, ...], str], ...] = (
    (("h",), "visual.left"),
    (("LEFT",), "visual.left"),
    (("l",), "visual.right"),
    (("RIGHT",), "visual.right"),
    (("k",), "visual.up"),
    (("UP",), "visual.up"),
    (("j",), "visual.down"),
    (("DOWN",), "visual.down"),
    (("w",), "visual.word_forward"),
    (("b",), "visual.word_backward"),
    (("0",), "visual.line_start"),
    (("$",), "visual.line_end"),
    (("G",), "visual.buffer_end"),
    (("d",), "visual.delete"),
    (("x",), "visual.delete"),
    (("y",), "visual.yank"),
    (("c",), "visual.change"),
)

# ``v``/``V`` toggle between the visual modes or leave from their own mode.
VISUAL_TOGGLES: Mapping[str, tuple[tuple[tuple[str, ...], str], ...]] = {
    "visual": ((("v",), "core.exit"), (("V",), "core.visual_line")),
    "visual_line": ((("V",), "core.exit"), (("v",), "core.visual")),
}


def _binding(mode: str, keys: Sequence[str], action_id: str) -> Binding:
    return Binding(
        id=f"{mode}.{'_'.join(keys)}",
        mode=mode,
        sequence=KeySequence.from_strings(*keys),
        action_id=action_id,
    )


def _default_bindings() -> tuple[Binding, ...]:
    bindings = [_binding("command", keys, action) for keys, action in COMMAND_KEYS]
    for mode in VISUAL_MODES:
        for keys, action in VISUAL_KEYS + VISUAL_TOGGLES[mode]:
            bindings.append(_binding(mode, keys, action))
    return tuple(bindings)


DEFAULT_BINDINGS: tuple[Binding, ...] = _default_bindings()


def load_default_keymaps(registry: KeymapRegistry) -> None:
    """Register the built-in actions and the bindings of every mode."""

    for action in DEFAULT_ACTIONS:
        registry.register_action(action)
    for binding in DEFAULT_BINDINGS:
        registry.register_binding(binding)


__all__ = ["load_default_keymaps", "DEFAULT_ACTIONS", "DEFAULT_BINDINGS"]
