"""Helper utilities for keymap-driven modes."""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

from .base_mode import KeyInput, ModeContext

if TYPE_CHECKING:  # pragma: no cover
    from vim_interp.commands.dispatcher import CommandDispatcher

ESCAPE_KEYS = frozenset({"ESC", "<Esc>"})
BACKSPACE_KEYS = frozenset({"BACKSPACE", "<BS>"})
ENTER_KEYS = frozenset({"ENTER", "RETURN", "<CR>"})


def key_to_token(key: KeyInput) -> str:
    if key.modifiers:
        modifier = "+".join(sorted({m.strip().lower() for m in key.modifiers}))
        return f"{modifier}+{key.key}"
    return key.key


def is_escape(key: KeyInput, chords: Iterable[str] = ()) -> bool:
    if key.key in ESCAPE_KEYS and not key.modifiers:
        return True
    return key_to_token(key) in set(chords)


def typed_char(key: KeyInput) -> str | None:
    """The single printable character a key produces, if any."""

    if key.modifiers and key_to_token(key) != key.key:
        return None
    text = key.text if key.text is not None else key.key
    if len(text) == 1 and text.isprintable():
        return text
    return None


def require_dispatcher(context: ModeContext) -> "CommandDispatcher":
    dispatcher = context.extras.get("dispatcher")
    if dispatcher is None:
        raise RuntimeError("ModeContext.extras missing 'dispatcher'")
    return dispatcher  # type: ignore[return-value]


__all__ = [
    "BACKSPACE_KEYS",
    "ENTER_KEYS",
    "ESCAPE_KEYS",
    "is_escape",
    "key_to_token",
    "require_dispatcher",
    "typed_char",
]
