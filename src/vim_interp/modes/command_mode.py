"""Command (normal) mode: keys feed the resumable command parser."""

from __future__ import annotations

from vim_interp.commands import CommandParser
from vim_interp.runtime import telemetry

from .base_mode import EditorMode, KeyInput, Mode, ModeContext, ModeResult
from .keymap_helpers import key_to_token, require_dispatcher


class CommandMode(Mode):
    name = EditorMode.COMMAND.value

    def __init__(self, context: ModeContext) -> None:
        super().__init__(context)
        self.logger = telemetry.get_logger("vim_interp.modes.command")
        self.parser = CommandParser(context.resolver, mode=self.name)
        self._dispatcher = require_dispatcher(context)

    def on_enter(self, previous: str | None) -> None:
        buffer = self.context.buffer
        cursor = self.context.state.cursor
        self.parser.cancel()
        if previous == EditorMode.INSERT.value:
            # Leaving Insert steps back onto the last typed character.
            position = buffer.get_position()
            if position > buffer.line_start(buffer.line_of(position)):
                position -= 1
            buffer.set_caret_visible(False)
            cursor.place(buffer, position)
        else:
            buffer.set_position(cursor.position)
        cursor.settle(buffer)

    def on_exit(self, next_mode: str | None) -> None:
        del next_mode
        self.parser.cancel()

    def cancel_pending(self) -> None:
        self.parser.cancel()

    def handle_key(self, key: KeyInput) -> ModeResult:
        outcome = self.parser.feed(key_to_token(key))
        if outcome.status == "pending":
            return ModeResult(consumed=True, status="pending", message="awaiting_key")
        if outcome.status == "miss" or outcome.command is None:
            return ModeResult(consumed=True, status="miss")
        return self._dispatcher.handle_command(outcome.command)

    def status_text(self) -> str:
        if not self.parser.pending:
            return ""
        draft = self.parser.draft
        return draft.count + draft.operator_key + draft.motion_count + "".join(
            draft.tokens
        )


__all__ = ["CommandMode"]
