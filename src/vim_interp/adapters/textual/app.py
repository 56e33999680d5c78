"""Executable Textual app that hosts the modal interpreter."""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Sequence, Tuple

try:  # pragma: no cover - imported only when demo is run
    from textual import events
    from textual.app import App, ComposeResult
    from textual.containers import Vertical
    from textual.widgets import Footer, Header, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use vim_interp.adapters.textual.app"
    ) from exc

from vim_interp.buffer import Buffer, BufferMirror
from vim_interp.modes.mode_controller import ModeController, create_default_controller
from vim_interp.runtime import EngineConfig, telemetry

from .controller import TextualUIHooks, TextualVimAdapter

SPECIAL_KEYS = {
    "escape": "ESC",
    "enter": "ENTER",
    "backspace": "BACKSPACE",
    "left": "LEFT",
    "right": "RIGHT",
    "up": "UP",
    "down": "DOWN",
}


@dataclass
class UIState:
    buffer_text: str = ""
    status_text: str = ""
    command_text: str = ""


class VimInterpApp(App[None]):
    """Minimal Textual UI embedding the modal interpreter."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#buffer-view {
		height: 1fr;
		border: round $accent;
		padding: 1 1;
		content-align: left top;
		overflow: auto;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}

	#command-line {
		height: 1;
		background: $surface-darken-2;
		padding: 0 1;
	}
	"""

    # ctrl+c is an escape chord for the interpreter, so only ctrl+q quits.
    BINDINGS = [("ctrl+q", "quit", "Quit")]

    def __init__(
        self, *, path: Path | None = None, config: EngineConfig | None = None
    ) -> None:
        super().__init__()
        self._state = UIState()
        self._path = path
        self._config = config
        self.controller: ModeController | None = None
        self.adapter: TextualVimAdapter | None = None
        self._buffer_widget: Static | None = None
        self._status_widget: Static | None = None
        self._command_widget: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Vertical(id="buffer-area"):
            self._buffer_widget = Static("", id="buffer-view")
            yield self._buffer_widget
        self._status_widget = Static("", id="status-line")
        self._command_widget = Static("", id="command-line")
        yield self._status_widget
        yield self._command_widget
        yield Footer()

    async def on_mount(self) -> None:
        config = self._config or EngineConfig.from_env()
        buffer = Buffer(
            self._read(self._path),
            name=self._buffer_name(),
            page_lines=config.page_lines,
        )
        self.controller = create_default_controller(buffer, config)
        hooks = TextualUIHooks(
            update_buffer=self._update_buffer,
            update_status=self._update_status,
            show_command=self._show_command,
            handle_event=self._handle_event,
            log=self._log_line,
        )
        self.adapter = TextualVimAdapter(self.controller, hooks)

    async def on_key(self, event: events.Key) -> None:
        if not self.adapter:
            return
        normalized = self._normalize_key(event)
        if normalized is None:
            return
        key, text, modifiers = normalized
        self.adapter.handle_textual_key(key, text=text, modifiers=modifiers)
        event.stop()

    def _update_buffer(self, mirror: BufferMirror) -> None:
        self._state.buffer_text = mirror.text
        if self._buffer_widget:
            self._buffer_widget.update(self._render_text(mirror))

    def _update_status(self, status: str) -> None:
        self._state.status_text = status
        if self._status_widget:
            self._status_widget.update(status)

    def _show_command(self, command: str) -> None:
        self._state.command_text = command
        if self._command_widget:
            self._command_widget.update(command)

    def _handle_event(self, name: str, payload: Any | None) -> None:
        data = payload if isinstance(payload, dict) else {}
        if name == "file.write":
            self._write(data)
        elif name == "file.open":
            self._open(data)
        elif name == "file.reload":
            self._open({"path": data.get("path") or self._path, "force": True})
        elif name == "file.new":
            self._path = None
        elif name == "view.close":
            self._close(bool(data.get("force")))
        elif name == "ex.refused":
            self._update_status("E37: No write since last change (add ! to override)")
        elif name.startswith("tab."):
            self._update_status("Tabs are not supported in this demo")

    def _write(self, data: dict) -> None:
        if self.controller is None:
            return
        target = data.get("path") or self._path
        if target is None:
            self._update_status("E32: No file name")
            return
        path = Path(target)
        path.write_text(str(data.get("text", "")), encoding="utf-8")
        self._path = path
        self.controller.context.buffer.mark_saved()
        self._update_status(f'"{path}" written')

    def _open(self, data: dict) -> None:
        if self.controller is None or data.get("path") is None:
            return
        buffer = self.controller.context.buffer
        if buffer.modified and not data.get("force"):
            self._update_status("E37: No write since last change (add ! to override)")
            return
        self._path = Path(data["path"])
        buffer.reset(self._read(self._path))
        self.controller.context.state.cursor.place(buffer, 0)
        self.controller.context.bus.emit("buffer.edited", None)
        self._update_status(f'"{self._path}" opened')

    def _close(self, force: bool) -> None:
        if self.controller is None:
            return
        if self.controller.context.buffer.modified and not force:
            self._update_status("E37: No write since last change (add ! to override)")
            return
        self.exit()

    def _log_line(self, line: str) -> None:
        telemetry.record_event("textual.key", level="debug", data={"line": line})

    def _buffer_name(self) -> str:
        return self._path.name if self._path else "[No Name]"

    @staticmethod
    def _read(path: Path | None) -> str:
        if path is None or not path.exists():
            return ""
        return path.read_text(encoding="utf-8")

    @staticmethod
    def _render_text(mirror: BufferMirror) -> str:
        # Mark the caret with a block so the static widget shows it.
        position = min(mirror.position, len(mirror.text))
        head, tail = mirror.text[:position], mirror.text[position:]
        if not tail or tail[0] == "\n":
            return f"{head}█{tail}"
        return f"{head}█{tail[1:]}"

    @staticmethod
    def _normalize_key(
        event: events.Key,
    ) -> Optional[Tuple[str, Optional[str], Tuple[str, ...]]]:
        key = event.key
        if key == "ctrl+q":
            return None
        if key in SPECIAL_KEYS:
            return (SPECIAL_KEYS[key], None, ())
        if key.startswith("ctrl+"):
            return (key.split("+", 1)[1], None, ("CTRL",))
        if event.is_printable and event.character:
            return (event.character, event.character, ())
        return (key.upper(), None, ())


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the vim-interp Textual demo.")
    parser.add_argument("path", nargs="?", type=Path, help="File to edit")
    parser.add_argument(
        "--page-lines",
        type=int,
        default=None,
        help="Lines moved by ctrl+f/ctrl+b (default: VIM_INTERP_PAGE_LINES or 20)",
    )
    parser.add_argument(
        "--disabled",
        action="store_true",
        help="Start with modal editing switched off",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    telemetry.configure(preset="silent")
    config = EngineConfig.from_env()
    if args.page_lines is not None or args.disabled:
        config = EngineConfig(
            page_lines=args.page_lines or config.page_lines,
            start_enabled=config.start_enabled and not args.disabled,
            escape_chords=config.escape_chords,
        )
    app = VimInterpApp(path=args.path, config=config)
    app.run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
