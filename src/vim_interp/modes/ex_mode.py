"""Ex command line (``:``) with inline editing."""

from __future__ import annotations

from vim_interp.actions.command import execute_ex
from vim_interp.runtime import telemetry

from .base_mode import EditorMode, KeyInput, Mode, ModeContext, ModeResult
from .keymap_helpers import BACKSPACE_KEYS, ENTER_KEYS, typed_char


class ExMode(Mode):
    name = EditorMode.EX.value

    def __init__(self, context: ModeContext) -> None:
        super().__init__(context)
        self.logger = telemetry.get_logger("vim_interp.modes.ex")

    def on_enter(self, previous: str | None) -> None:
        del previous
        self.context.state.ex.clear()
        self.context.bus.emit("command.start", None)

    def on_exit(self, next_mode: str | None) -> None:
        del next_mode
        self.context.state.ex.clear()
        self.context.bus.emit("command.end", None)

    def handle_key(self, key: KeyInput) -> ModeResult:
        ex = self.context.state.ex
        if key.key in ENTER_KEYS:
            text = ex.commit()
            self.context.bus.emit("command.submit", text)
            return execute_ex(self.context, text)

        if key.key in BACKSPACE_KEYS:
            if not ex.backspace():
                return ModeResult(
                    consumed=True, switch_to=EditorMode.COMMAND, message="command_cancel"
                )
            return ModeResult(consumed=True, status="editing")

        char = typed_char(key)
        if char is None:
            return ModeResult(consumed=True, status="ignored")
        ex.type(char)
        return ModeResult(consumed=True, status="editing")

    def status_text(self) -> str:
        return ":" + self.context.state.ex.text


__all__ = ["ExMode"]
