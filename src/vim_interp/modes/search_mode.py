"""Incremental search prompt (``/``)."""

from __future__ import annotations

from vim_interp.actions.search import do_next_search
from vim_interp.runtime import telemetry

from .base_mode import EditorMode, KeyInput, Mode, ModeContext, ModeResult
from .keymap_helpers import BACKSPACE_KEYS, ENTER_KEYS, typed_char


class SearchMode(Mode):
    name = EditorMode.SEARCH.value

    def __init__(self, context: ModeContext) -> None:
        super().__init__(context)
        self.logger = telemetry.get_logger("vim_interp.modes.search")

    def on_enter(self, previous: str | None) -> None:
        del previous
        self.context.state.search.clear()

    def on_exit(self, next_mode: str | None) -> None:
        del next_mode
        self.context.state.search.clear()

    def handle_key(self, key: KeyInput) -> ModeResult:
        search = self.context.state.search
        if key.key in ENTER_KEYS:
            query = search.commit()
            found = bool(query) and do_next_search(self.context, continuing=False)
            return ModeResult(
                consumed=True,
                switch_to=EditorMode.COMMAND,
                status="search" if found else "search_failed",
                message=query,
            )

        if key.key in BACKSPACE_KEYS:
            if not search.backspace():
                return ModeResult(
                    consumed=True, switch_to=EditorMode.COMMAND, message="search_cancel"
                )
            self._publish()
            return ModeResult(consumed=True, status="editing")

        char = typed_char(key)
        if char is None:
            return ModeResult(consumed=True, status="ignored")
        search.type(char)
        self._publish()
        return ModeResult(consumed=True, status="editing")

    def _publish(self) -> None:
        self.context.bus.emit("search.query", self.context.state.search.text)

    def status_text(self) -> str:
        return "/" + self.context.state.search.text


__all__ = ["SearchMode"]
