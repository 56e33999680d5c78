"""Textual adapter that wires ModeController events into UI callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional

from vim_interp.buffer import BufferMirror
from vim_interp.modes import EditorMode, KeyInput, ModeResult
from vim_interp.modes.keymap_helpers import BACKSPACE_KEYS, ENTER_KEYS, typed_char
from vim_interp.modes.mode_controller import ModeController


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


BUS_EVENTS = (
    "mode.switch",
    "status.changed",
    "buffer.edited",
    "cursor.moved",
    "visual.selection",
    "search.query",
    "command.start",
    "command.end",
    "command.submit",
    "ex.refused",
    "file.write",
    "file.open",
    "file.reload",
    "file.new",
    "view.close",
    "tab.new",
    "tab.next",
    "tab.previous",
    "tab.move",
)

PROMPT_MODES = (EditorMode.SEARCH.value, EditorMode.EX.value)


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_buffer: Callable[[BufferMirror], None]
    update_status: Callable[[str], None] = _noop
    show_command: Callable[[str], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    log: Callable[[str], None] = _noop


class TextualVimAdapter:
    """Bridges ModeController + bus events to a Textual-friendly surface.

    Keys the controller does not consume (Insert mode, or modal editing
    switched off) are applied to the buffer here, the way a plain text
    widget would handle them.
    """

    def __init__(self, controller: ModeController, hooks: TextualUIHooks) -> None:
        self.controller = controller
        self.hooks = hooks
        self._subscribe_events()
        self._refresh_buffer()
        self._refresh_command_line()
        self.hooks.update_status(self.controller.status_text())

    def handle_textual_key(
        self,
        key: str,
        *,
        text: Optional[str] = None,
        modifiers: Iterable[str] = (),
    ) -> ModeResult:
        """Translate a Textual key event into a KeyInput and dispatch it."""

        normalized_modifiers = tuple(str(mod).upper() for mod in modifiers)
        key_input = KeyInput(key=key, text=text, modifiers=normalized_modifiers)
        self._log_state("key ->", key=key, text=text, mods=normalized_modifiers)
        result = self.controller.handle_key(key_input)
        if not result.consumed:
            self._forward(key_input)
        self._after_mode_result(result)
        self._log_state(
            "result <-",
            consumed=result.consumed,
            status=result.status,
            message=result.message,
            switch_to=result.switch_to,
        )
        return result

    def _forward(self, key: KeyInput) -> None:
        buffer = self.controller.context.buffer
        position = buffer.get_position()
        if key.key in BACKSPACE_KEYS:
            if position > 0:
                buffer.delete(position - 1, position)
            return
        if key.key in ENTER_KEYS:
            buffer.insert("\n", position)
            return
        char = typed_char(key)
        if char is not None:
            buffer.insert(char, position)

    def _after_mode_result(self, result: ModeResult) -> None:
        status = self.controller.status_text() or result.message or ""
        self.hooks.update_status(status)
        self._refresh_buffer()
        self._refresh_command_line()

    def _subscribe_events(self) -> None:
        bus = self.controller.context.bus
        for event in BUS_EVENTS:
            bus.subscribe(
                event, lambda payload, name=event: self._handle_event(name, payload)
            )

    def _handle_event(self, name: str, payload: object | None) -> None:
        self._log_state("event ->", event=name, payload=payload)
        self.hooks.handle_event(name, payload)
        if name == "status.changed" and isinstance(payload, str):
            self.hooks.update_status(payload)
        if name in ("mode.switch", "search.query") or name.startswith("command"):
            self._refresh_command_line()
        if name in ("buffer.edited", "cursor.moved", "visual.selection"):
            self._refresh_buffer()

    def _refresh_buffer(self) -> None:
        mirror = self.controller.context.buffer.mirror(
            attributes={"mode": self.controller.mode or ""}
        )
        self.hooks.update_buffer(mirror)

    def _refresh_command_line(self) -> None:
        text = ""
        if self.controller.mode in PROMPT_MODES:
            text = self.controller.status_text()
        self.hooks.show_command(text)

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        context = self.controller.context
        return {
            "mode": self.controller.mode or "?",
            "cursor": context.state.cursor.position,
            "selection": context.buffer.get_selection(),
            "enabled": self.controller.is_active(),
        }


__all__ = ["TextualVimAdapter", "TextualUIHooks"]
