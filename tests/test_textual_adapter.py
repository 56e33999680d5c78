from __future__ import annotations

from typing import Any, Dict, List

from vim_interp.adapters.textual import TextualUIHooks, TextualVimAdapter
from vim_interp.buffer import Buffer
from vim_interp.modes.mode_controller import ModeController, create_default_controller
from vim_interp.runtime import EngineConfig


def make_controller(text: str = "") -> ModeController:
    return create_default_controller(Buffer(text), EngineConfig())


def test_adapter_updates_buffer_and_status() -> None:
    controller = make_controller()
    updates: List[str] = []
    statuses: List[str] = []
    hooks = TextualUIHooks(
        update_buffer=lambda mirror: updates.append(mirror.text),
        update_status=lambda status: statuses.append(status),
    )
    adapter = TextualVimAdapter(controller, hooks)

    adapter.handle_textual_key("i")
    adapter.handle_textual_key("h", text="h")
    adapter.handle_textual_key("i", text="i")
    adapter.handle_textual_key("ESC")

    assert "-- INSERT --" in statuses
    assert statuses[-1] == ""
    assert updates[-1] == "hi"
    assert controller.context.state.cursor.position == 1


def test_adapter_forwards_editing_keys_in_insert_mode() -> None:
    controller = make_controller("ab")
    updates: List[str] = []
    adapter = TextualVimAdapter(
        controller,
        TextualUIHooks(update_buffer=lambda mirror: updates.append(mirror.text)),
    )

    adapter.handle_textual_key("A")
    adapter.handle_textual_key("ENTER")
    adapter.handle_textual_key("c", text="c")
    adapter.handle_textual_key("BACKSPACE")
    adapter.handle_textual_key("BACKSPACE")

    assert updates[-1] == "ab"


def test_adapter_types_when_modal_editing_is_off() -> None:
    controller = make_controller()
    controller.set_enabled(False)
    hooks = TextualUIHooks(update_buffer=lambda _: None)
    adapter = TextualVimAdapter(controller, hooks)

    result = adapter.handle_textual_key("x", text="x")

    assert not result.consumed
    assert controller.context.buffer.get_text() == "x"


def test_adapter_relays_command_events() -> None:
    controller = make_controller("abc")
    command_lines: List[str] = []
    events: List[tuple[str, object | None]] = []
    hooks = TextualUIHooks(
        update_buffer=lambda mirror: None,
        show_command=lambda text: command_lines.append(text),
        handle_event=lambda name, payload: events.append((name, payload)),
        update_status=lambda status: None,
    )
    adapter = TextualVimAdapter(controller, hooks)

    adapter.handle_textual_key(":", text=":")
    adapter.handle_textual_key("w", text="w")
    adapter.handle_textual_key("q", text="q")
    assert command_lines[-1] == ":wq"
    adapter.handle_textual_key("ENTER")

    assert command_lines[-1] == ""
    assert ("command.submit", "wq") in events
    written = next(payload for name, payload in events if name == "file.write")
    assert isinstance(written, dict)
    assert written["force"] is False
    assert written["text"] == "abc"
    assert ("view.close", {"force": False}) in events


def test_adapter_shows_search_prompt() -> None:
    controller = make_controller("abc")
    command_lines: List[str] = []
    hooks = TextualUIHooks(
        update_buffer=lambda mirror: None,
        show_command=lambda text: command_lines.append(text),
    )
    adapter = TextualVimAdapter(controller, hooks)

    adapter.handle_textual_key("/", text="/")
    adapter.handle_textual_key("b", text="b")

    assert command_lines[-1] == "/b"


def test_adapter_surfaces_visual_selection_events() -> None:
    controller = make_controller("abc")
    events: List[Dict[str, Any]] = []
    hooks = TextualUIHooks(
        update_buffer=lambda mirror: None,
        handle_event=lambda name, payload: events.append(
            {"name": name, "payload": payload}
        ),
        update_status=lambda status: None,
    )
    adapter = TextualVimAdapter(controller, hooks)

    adapter.handle_textual_key("v")
    adapter.handle_textual_key("l")

    visual_payloads = [event for event in events if event["name"] == "visual.selection"]
    assert visual_payloads
    assert visual_payloads[-1]["payload"] == {"start": 0, "end": 2, "cursor": 1}


def test_adapter_passes_ctrl_modifiers() -> None:
    controller = make_controller("abc")
    hooks = TextualUIHooks(update_buffer=lambda _: None)
    adapter = TextualVimAdapter(controller, hooks)

    adapter.handle_textual_key("x")
    adapter.handle_textual_key("u")
    adapter.handle_textual_key("r", modifiers=("ctrl",))

    assert controller.context.buffer.get_text() == "bc"


def test_adapter_emits_log_lines() -> None:
    controller = make_controller()
    logs: List[str] = []
    hooks = TextualUIHooks(
        update_buffer=lambda mirror: None,
        update_status=lambda status: None,
        show_command=lambda _: None,
        handle_event=lambda _name, _payload: None,
        log=lambda line: logs.append(line),
    )
    adapter = TextualVimAdapter(controller, hooks)

    adapter.handle_textual_key("i")

    assert any(line.startswith("key ->") for line in logs)
    assert any(line.startswith("result <-") for line in logs)
    assert any("event=" in line and "mode.switch" in line for line in logs)
