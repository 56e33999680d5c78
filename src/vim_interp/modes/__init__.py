"""Mode primitives shared by the controller, the modes and the actions.

Concrete modes live in their own modules and the controller in
``vim_interp.modes.mode_controller``.
"""

from .base_mode import (
    EditorMode,
    KeyInput,
    Mode,
    ModeBus,
    ModeContext,
    ModeResult,
    UnknownModeError,
)

__all__ = [
    "EditorMode",
    "KeyInput",
    "Mode",
    "ModeBus",
    "ModeContext",
    "ModeResult",
    "UnknownModeError",
]
