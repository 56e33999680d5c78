from typing import List

import pytest

from vim_interp.buffer import Buffer
from vim_interp.modes import EditorMode, KeyInput, UnknownModeError
from vim_interp.modes.mode_controller import ModeController, create_default_controller
from vim_interp.runtime import EngineConfig


def make_controller(
    text: str = "",
    position: int = 0,
    *,
    buffer: Buffer | None = None,
    config: EngineConfig | None = None,
) -> ModeController:
    controller = create_default_controller(
        buffer or Buffer(text), config or EngineConfig()
    )
    context = controller.context
    context.state.cursor.place(context.buffer, position)
    return controller


def press(controller: ModeController, *keys: str) -> None:
    for key in keys:
        controller.handle_key(KeyInput(key=key, text=key if len(key) == 1 else None))


def test_starts_in_command_mode() -> None:
    controller = make_controller("abc")

    assert controller.mode == EditorMode.COMMAND.value
    assert controller.is_active()
    assert controller.status_text() == ""


def test_append_at_line_end_then_escape_steps_back() -> None:
    controller = make_controller("abc")

    press(controller, "A")
    assert controller.mode == "insert"
    assert controller.context.buffer.get_position() == 3
    assert controller.context.buffer.caret_visible

    press(controller, "ESC")
    assert controller.mode == "command"
    assert controller.context.state.cursor.position == 2
    assert not controller.context.buffer.caret_visible


def test_escape_at_line_start_keeps_position() -> None:
    controller = make_controller("abc\ndef", 4)

    press(controller, "i", "ESC")

    assert controller.context.state.cursor.position == 4


def test_insert_keys_are_forwarded_to_host() -> None:
    controller = make_controller("abc")
    press(controller, "i")

    result = controller.handle_key(KeyInput(key="x", text="x"))

    assert not result.consumed
    assert result.status == "forward"
    assert controller.context.buffer.get_text() == "abc"


def test_host_typing_then_escape() -> None:
    controller = make_controller("")
    press(controller, "i")
    controller.context.buffer.insert("hi", 0)

    press(controller, "ESC")

    assert controller.context.state.cursor.position == 1


def test_insert_entry_points() -> None:
    append = make_controller("abc")
    line_start = make_controller("  abc", 4)
    below = make_controller("abc", 1)
    above = make_controller("abc", 1)

    press(append, "a")
    press(line_start, "I")
    press(below, "o")
    press(above, "O")

    assert append.context.state.cursor.position == 1
    assert line_start.context.state.cursor.position == 2
    assert below.context.buffer.get_text() == "abc\n"
    assert below.context.state.cursor.position == 4
    assert above.context.buffer.get_text() == "\nabc"
    assert above.context.state.cursor.position == 0
    assert {c.mode for c in (append, line_start, below, above)} == {"insert"}


def test_escape_drops_pending_operator() -> None:
    controller = make_controller("foo bar")

    press(controller, "d", "ESC", "w")

    assert controller.context.buffer.get_text() == "foo bar"
    assert controller.context.state.cursor.position == 4


def test_escape_chords() -> None:
    controller = make_controller("abc")
    press(controller, "i")

    result = controller.handle_key(KeyInput(key="c", modifiers=("ctrl",)))

    assert result.status == "escape"
    assert controller.mode == "command"


def test_configured_escape_chord() -> None:
    controller = make_controller("abc", config=EngineConfig(escape_chords=("ctrl+g",)))
    press(controller, "v")

    controller.handle_key(KeyInput(key="g", modifiers=("ctrl",)))

    assert controller.mode == "command"


def test_disabled_controller_forwards_everything() -> None:
    controller = make_controller("abc")
    press(controller, "i")

    controller.set_enabled(False)
    result = controller.handle_key(KeyInput(key="x", text="x"))

    assert controller.mode == "command"
    assert not controller.is_active()
    assert not result.consumed
    assert controller.status_text() == ""
    assert controller.context.buffer.get_text() == "abc"

    controller.set_enabled(True)
    press(controller, "x")
    assert controller.context.buffer.get_text() == "bc"


def test_released_keys_are_ignored() -> None:
    controller = make_controller("abc")

    result = controller.handle_key(KeyInput(key="x", released=True))

    assert not result.consumed
    assert controller.context.buffer.get_text() == "abc"


def test_unknown_mode() -> None:
    controller = make_controller("abc")

    with pytest.raises(UnknownModeError):
        controller.switch_mode("bogus")


def test_status_text_follows_mode() -> None:
    controller = make_controller("abc")
    statuses: List[object] = []
    controller.context.bus.subscribe("status.changed", statuses.append)

    press(controller, "i")
    assert controller.status_text() == "-- INSERT --"
    press(controller, "ESC", "2", "d")
    assert controller.status_text() == "2d"
    press(controller, "ESC")

    assert "-- INSERT --" in statuses
    assert statuses[-1] == ""


def test_bus_events() -> None:
    controller = make_controller("abc")
    switches: List[object] = []
    edits: List[object] = []
    moves: List[object] = []
    controller.context.bus.subscribe("mode.switch", switches.append)
    controller.context.bus.subscribe("buffer.edited", edits.append)
    controller.context.bus.subscribe("cursor.moved", moves.append)

    press(controller, "l", "x", "i", "ESC")

    assert switches == ["insert", "command"]
    assert moves == [1, 0]
    assert edits == [None]


def test_join_lines() -> None:
    controller = make_controller("foo\n  bar")

    press(controller, "J")

    assert controller.context.buffer.get_text() == "foo bar"
    assert controller.context.state.cursor.position == 3


def test_undo_and_redo() -> None:
    controller = make_controller("abc")

    press(controller, "x")
    assert controller.context.buffer.get_text() == "bc"

    press(controller, "u")
    assert controller.context.buffer.get_text() == "abc"

    controller.handle_key(KeyInput(key="r", modifiers=("ctrl",)))
    assert controller.context.buffer.get_text() == "bc"


def test_page_motion_uses_buffer_page_size() -> None:
    text = "\n".join("xx" for _ in range(10))
    controller = make_controller(buffer=Buffer(text, page_lines=5))

    controller.handle_key(KeyInput(key="f", modifiers=("ctrl",)))
    assert controller.context.state.cursor.position == 15

    controller.handle_key(KeyInput(key="b", modifiers=("ctrl",)))
    assert controller.context.state.cursor.position == 0


def test_delete_to_line_end_and_change_to_line_end() -> None:
    delete = make_controller("abc def", 3)
    change = make_controller("abc def", 3)

    press(delete, "D")
    press(change, "C")

    assert delete.context.buffer.get_text() == "abc"
    assert delete.context.state.cursor.position == 2
    assert change.context.buffer.get_text() == "abc"
    assert change.mode == "insert"
