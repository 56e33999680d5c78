"""Base classes and shared utilities for editor modes."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, Optional, Tuple

from vim_interp.buffer import TextSurface
from vim_interp.keymaps import KeymapRegistry, KeymapResolver
from vim_interp.runtime import EngineConfig
from vim_interp.state import EngineState


class EditorMode(str, Enum):
    COMMAND = "command"
    INSERT = "insert"
    VISUAL = "visual"
    VISUAL_LINE = "visual_line"
    SEARCH = "search"
    EX = "ex"


class UnknownModeError(RuntimeError):
    """Raised when the controller is asked for a mode it never registered."""

    def __init__(self, mode: object) -> None:
        super().__init__(f"Unknown mode '{mode}'")
        self.mode = mode


@dataclass(slots=True)
class KeyInput:
    """Normalized key event passed to modes."""

    key: str
    modifiers: Tuple[str, ...] = ()
    text: Optional[str] = None
    released: bool = False


@dataclass(slots=True)
class ModeResult:
    """Result returned from ``Mode.handle_key``."""

    consumed: bool
    switch_to: Optional[str] = None
    status: str = "ok"
    message: Optional[str] = None


class ModeBus:
    """Minimal event bus letting modes and hosts exchange structured signals."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in self._subscribers.get(event, []):
            callback(payload)


@dataclass(slots=True)
class ModeContext:
    """Shared services every mode and action can access."""

    buffer: TextSurface
    state: EngineState
    bus: ModeBus
    registry: KeymapRegistry
    resolver: KeymapResolver
    config: EngineConfig = field(default_factory=EngineConfig)
    extras: Dict[str, object] = field(default_factory=dict)


class Mode:
    """Base class all concrete editor modes inherit from."""

    name: str = "mode"

    def __init__(self, context: ModeContext) -> None:
        self.context = context

    def on_enter(self, previous: Optional[str]) -> None:
        del previous

    def on_exit(self, next_mode: Optional[str]) -> None:
        del next_mode

    def handle_key(
        self, key: KeyInput
    ) -> ModeResult:  # pragma: no cover - abstract override
        raise NotImplementedError

    def cancel_pending(self) -> None:
        """Drop any partially typed key sequence."""

    def status_text(self) -> str:
        return ""


__all__ = [
    "EditorMode",
    "KeyInput",
    "Mode",
    "ModeBus",
    "ModeContext",
    "ModeResult",
    "UnknownModeError",
]
