"""Character-wise and line-wise visual modes driven by the keymap resolver."""

from __future__ import annotations

from typing import List

from vim_interp.actions.visual import select_current
from vim_interp.keymaps import ResolutionMatch
from vim_interp.runtime import telemetry

from .base_mode import EditorMode, KeyInput, Mode, ModeContext, ModeResult
from .keymap_helpers import key_to_token


class VisualMode(Mode):
    name = EditorMode.VISUAL.value
    linewise = False

    def __init__(self, context: ModeContext) -> None:
        super().__init__(context)
        self.logger = telemetry.get_logger(f"vim_interp.modes.{self.name}")
        self._pending: List[str] = []

    def on_enter(self, previous: str | None) -> None:
        del previous
        self._pending.clear()
        self.context.state.visual.reset(linewise=self.linewise)
        select_current(self.context)

    def on_exit(self, next_mode: str | None) -> None:
        del next_mode
        self._pending.clear()

    def cancel_pending(self) -> None:
        self._pending.clear()

    def handle_key(self, key: KeyInput) -> ModeResult:
        self._pending.append(key_to_token(key))
        result = self.context.resolver.resolve(self.name, tuple(self._pending))

        if result.status == "match" and result.match:
            self._pending.clear()
            return self._execute_match(result.match)

        if result.status == "pending":
            return ModeResult(consumed=True, status="pending", message="awaiting_key")

        self._pending.clear()
        return ModeResult(consumed=True, status="miss")

    def _execute_match(self, match: ResolutionMatch) -> ModeResult:
        with telemetry.span(
            "keymaps::execute",
            component="keymaps",
            metadata={"binding_id": match.binding.id, "action": match.action.id},
        ):
            outcome = match.action(self.context, match)

        if isinstance(outcome, ModeResult):
            return outcome
        return ModeResult(consumed=True)

    def status_text(self) -> str:
        return "-- VISUAL --"


class VisualLineMode(VisualMode):
    name = EditorMode.VISUAL_LINE.value
    linewise = True

    def status_text(self) -> str:
        return "-- VISUAL LINE --"


__all__ = ["VisualLineMode", "VisualMode"]
