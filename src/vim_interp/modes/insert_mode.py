"""Insert mode: every key except escape belongs to the host."""

from __future__ import annotations

from vim_interp.runtime import telemetry

from .base_mode import EditorMode, KeyInput, Mode, ModeContext, ModeResult


class InsertMode(Mode):
    name = EditorMode.INSERT.value

    def __init__(self, context: ModeContext) -> None:
        super().__init__(context)
        self.logger = telemetry.get_logger("vim_interp.modes.insert")

    def on_enter(self, previous: str | None) -> None:
        del previous
        buffer = self.context.buffer
        buffer.set_caret_visible(True)
        buffer.set_position(self.context.state.cursor.position)

    def handle_key(self, key: KeyInput) -> ModeResult:
        # Escape never reaches here; the controller intercepts it.
        del key
        return ModeResult(consumed=False, status="forward")

    def status_text(self) -> str:
        return "-- INSERT --"


__all__ = ["InsertMode"]
