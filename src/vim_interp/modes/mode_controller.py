"""Mode controller owning the active mode, transitions and key dispatch."""

from __future__ import annotations

from enum import Enum
from typing import Dict, Optional, Type

from vim_interp.buffer import Buffer, TextSurface
from vim_interp.commands import CommandDispatcher
from vim_interp.keymaps import KeymapRegistry, KeymapResolver
from vim_interp.keymaps.defaults import load_default_keymaps
from vim_interp.runtime import EngineConfig, telemetry
from vim_interp.state import EngineState

from .base_mode import (
    EditorMode,
    KeyInput,
    Mode,
    ModeBus,
    ModeContext,
    ModeResult,
    UnknownModeError,
)
from .command_mode import CommandMode
from .ex_mode import ExMode
from .insert_mode import InsertMode
from .keymap_helpers import is_escape
from .search_mode import SearchMode
from .visual_mode import VisualLineMode, VisualMode


def _mode_key(name: object) -> str:
    return name.value if isinstance(name, Enum) else str(name)


class ModeController:
    """Routes key events to the active mode and applies requested switches."""

    def __init__(self, context: ModeContext, *, enabled: bool | None = None) -> None:
        self.context = context
        self._modes: Dict[str, Mode] = {}
        self._active: Optional[str] = None
        self._enabled = context.config.start_enabled if enabled is None else enabled
        self.logger = telemetry.get_logger("vim_interp.modes")
        self.context.extras.setdefault("mode_controller", self)

    @property
    def active_mode(self) -> Optional[Mode]:
        if self._active is None:
            return None
        return self._modes.get(self._active)

    @property
    def mode(self) -> Optional[str]:
        return self._active

    def register_mode(
        self,
        mode_cls: Type[Mode],
        /,
        *mode_args: object,
        **mode_kwargs: object,
    ) -> Mode:
        mode = mode_cls(self.context, *mode_args, **mode_kwargs)
        if mode.name in self._modes:
            raise ValueError(f"Mode '{mode.name}' already registered")
        self._modes[mode.name] = mode
        if self._active is None:
            self._active = mode.name
            mode.on_enter(None)
        return mode

    def switch_mode(self, name: str | EditorMode) -> None:
        key = _mode_key(name)
        if key not in self._modes:
            raise UnknownModeError(key)
        previous = self.active_mode
        if previous is not None:
            previous.on_exit(key)
        self._active = key
        self._modes[key].on_enter(previous.name if previous else None)
        telemetry.record_event(
            "mode.switch",
            data={"mode": key, "previous": previous.name if previous else None},
        )
        self.context.bus.emit("mode.switch", key)
        self._publish_status()

    def handle_key(self, key: KeyInput) -> ModeResult:
        if not self._enabled or key.released:
            return ModeResult(consumed=False, status="forward")

        mode = self.active_mode
        if mode is None:
            raise UnknownModeError(self._active)

        buffer = self.context.buffer
        before_text = buffer.get_text()
        before_position = self.context.state.cursor.position

        if is_escape(key, self.context.config.escape_chords):
            result = self._escape()
        else:
            with telemetry.span(
                name=f"mode::{mode.name}",
                component=True,
                metadata={"key": key.key, "mode": mode.name},
            ):
                result = mode.handle_key(key)
            if result.switch_to:
                self.switch_mode(result.switch_to)
            if self._active == EditorMode.COMMAND.value:
                self.context.state.cursor.settle(buffer)
            if mode.name == self._active and result.consumed:
                self._publish_status()

        self._emit_hooks(before_text, before_position)
        return result

    def _escape(self) -> ModeResult:
        for mode in self._modes.values():
            mode.cancel_pending()
        if self._active == EditorMode.COMMAND.value:
            self.context.state.cursor.settle(self.context.buffer)
            self._publish_status()
        else:
            self.switch_mode(EditorMode.COMMAND)
        return ModeResult(consumed=True, status="escape")

    def _emit_hooks(self, before_text: str, before_position: int) -> None:
        buffer = self.context.buffer
        if buffer.get_text() != before_text:
            self.context.bus.emit("buffer.edited", None)
        position = self.context.state.cursor.position
        if position != before_position:
            self.context.bus.emit("cursor.moved", position)

    def _publish_status(self) -> None:
        self.context.bus.emit("status.changed", self.status_text())

    def is_active(self) -> bool:
        return self._enabled

    def set_enabled(self, enabled: bool) -> None:
        if enabled == self._enabled:
            return
        if not enabled and self._active != EditorMode.COMMAND.value:
            self.switch_mode(EditorMode.COMMAND)
        self._enabled = enabled
        telemetry.record_event("mode.enabled", data={"enabled": enabled})
        self._publish_status()

    def status_text(self) -> str:
        mode = self.active_mode
        if mode is None or not self._enabled:
            return ""
        return mode.status_text()


def create_default_controller(
    buffer: TextSurface | None = None,
    config: EngineConfig | None = None,
    *,
    registry: KeymapRegistry | None = None,
) -> ModeController:
    """Wire a buffer, default keymaps and all six modes into one controller."""

    config = config or EngineConfig.from_env()
    if buffer is None:
        buffer = Buffer(page_lines=config.page_lines)
    if registry is None:
        registry = KeymapRegistry(logger_name="vim_interp.keymaps")
        load_default_keymaps(registry)
    resolver = KeymapResolver(registry, logger_name="vim_interp.keymaps")
    context = ModeContext(
        buffer=buffer,
        state=EngineState(),
        bus=ModeBus(),
        registry=registry,
        resolver=resolver,
        config=config,
    )
    context.extras["dispatcher"] = CommandDispatcher(context)

    controller = ModeController(context)
    controller.register_mode(CommandMode)
    controller.register_mode(InsertMode)
    controller.register_mode(VisualMode)
    controller.register_mode(VisualLineMode)
    controller.register_mode(SearchMode)
    controller.register_mode(ExMode)
    return controller


__all__ = ["ModeController", "create_default_controller"]
