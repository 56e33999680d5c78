"""Modal, vim-style command interpreter for abstract text buffers."""

__all__ = [
    "actions",
    "adapters",
    "buffer",
    "commands",
    "keymaps",
    "modes",
    "runtime",
    "state",
]

__version__ = "0.1.0"
