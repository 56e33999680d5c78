from typing import Any, List, Tuple

import pytest

from vim_interp.buffer import Buffer
from vim_interp.modes import KeyInput, ModeResult
from vim_interp.modes.mode_controller import ModeController, create_default_controller
from vim_interp.runtime import EngineConfig

HOST_EVENTS = (
    "search.query",
    "command.submit",
    "ex.refused",
    "file.write",
    "file.open",
    "file.reload",
    "file.new",
    "view.close",
    "tab.new",
    "tab.next",
    "tab.previous",
    "tab.move",
)


def make_controller(
    text: str, position: int = 0
) -> Tuple[ModeController, List[Tuple[str, Any]]]:
    controller = create_default_controller(Buffer(text), EngineConfig())
    context = controller.context
    context.state.cursor.place(context.buffer, position)
    events: List[Tuple[str, Any]] = []
    for name in HOST_EVENTS:
        context.bus.subscribe(
            name, lambda payload, name=name: events.append((name, payload))
        )
    return controller, events


def press(controller: ModeController, *keys: str) -> ModeResult:
    result = ModeResult(consumed=False)
    for key in keys:
        result = controller.handle_key(
            KeyInput(key=key, text=key if len(key) == 1 else None)
        )
    return result


def ex(controller: ModeController, line: str) -> ModeResult:
    return press(controller, ":", *line, "ENTER")


def cursor_of(controller: ModeController) -> int:
    return controller.context.state.cursor.position


def test_search_forward_and_wrap() -> None:
    controller, _ = make_controller("foo bar foo")

    result = press(controller, "/", "f", "o", "o", "ENTER")
    assert result.status == "search"
    assert controller.mode == "command"
    assert cursor_of(controller) == 0

    press(controller, "n")
    assert cursor_of(controller) == 8

    press(controller, "n")
    assert cursor_of(controller) == 0

    press(controller, "N")
    assert cursor_of(controller) == 8

    press(controller, "N")
    assert cursor_of(controller) == 0


def test_search_publishes_query_while_typing() -> None:
    controller, events = make_controller("abc")

    press(controller, "/", "a", "b")
    assert controller.status_text() == "/ab"

    press(controller, "BACKSPACE")

    assert events == [
        ("search.query", "a"),
        ("search.query", "ab"),
        ("search.query", "a"),
    ]


def test_search_backspace_on_empty_query_cancels() -> None:
    controller, _ = make_controller("abc")

    press(controller, "/", "BACKSPACE")

    assert controller.mode == "command"


def test_failed_search_keeps_cursor() -> None:
    controller, _ = make_controller("abc def", 4)

    result = press(controller, "/", "z", "ENTER")

    assert result.status == "search_failed"
    assert cursor_of(controller) == 4


def test_empty_search_reuses_last_query() -> None:
    controller, _ = make_controller("ab ab ab")

    press(controller, "/", "a", "b", "ENTER", "n")
    assert cursor_of(controller) == 3

    press(controller, "/", "ENTER")

    assert controller.context.state.search.last_query == "ab"
    assert cursor_of(controller) == 3


def test_search_word_under_cursor() -> None:
    controller, events = make_controller("foo bar foo")

    press(controller, "*")

    assert cursor_of(controller) == 8
    assert ("search.query", "foo") in events


def test_ex_line_number() -> None:
    controller, _ = make_controller("l0\nl1\nl2\nl3\nl4\nl5")

    result = ex(controller, "5")

    assert result.status == "ex_goto_line"
    assert controller.mode == "command"
    assert cursor_of(controller) == 12


def test_ex_goto_offset() -> None:
    controller, _ = make_controller("abcdef")

    ex(controller, "goto 3")

    assert cursor_of(controller) == 2


def test_ex_prompt_editing() -> None:
    controller, events = make_controller("abc")

    press(controller, ":", "w", "x")
    assert controller.status_text() == ":wx"

    press(controller, "BACKSPACE", "ENTER")

    assert ("command.submit", "w") in events
    assert ("file.write", {"path": None, "force": False, "text": "abc"}) in events


def test_ex_backspace_on_empty_line_leaves() -> None:
    controller, _ = make_controller("abc")

    press(controller, ":", "BACKSPACE")

    assert controller.mode == "command"


@pytest.mark.parametrize(
    ("line", "expected"),
    [
        ("q", [("view.close", {"force": False})]),
        ("quit!", [("view.close", {"force": True})]),
        (
            "w out.txt",
            [("file.write", {"path": "out.txt", "force": False, "text": "abc"})],
        ),
        (
            "wq",
            [
                ("file.write", {"path": None, "force": False, "text": "abc"}),
                ("view.close", {"force": False}),
            ],
        ),
        (
            "e foo.txt",
            [("file.open", {"path": "foo.txt", "create": True, "force": False})],
        ),
        ("find", [("file.reload", {"force": False, "path": None})]),
        ("tabnew", [("tab.new", {"path": None})]),
        ("tabnext", [("tab.next", None)]),
        ("tabprev", [("tab.previous", None)]),
        ("tabm +2", [("tab.move", {"offset": 2})]),
        ("tabm -1", [("tab.move", {"offset": -1})]),
        ("tabm x", []),
    ],
)
def test_ex_host_events(line: str, expected: List[Tuple[str, Any]]) -> None:
    controller, events = make_controller("abc")

    ex(controller, line)

    assert [event for event in events if event[0] != "command.submit"] == expected
    assert controller.mode == "command"


def test_enew_refused_when_modified() -> None:
    controller, events = make_controller("abc")
    press(controller, "x")

    result = ex(controller, "enew")

    assert result.status == "ex_refused"
    assert controller.context.buffer.get_text() == "bc"
    assert ("ex.refused", {"command": "enew", "reason": "modified"}) in events


def test_forced_enew_clears_buffer() -> None:
    controller, events = make_controller("abc")
    press(controller, "x")

    ex(controller, "enew!")

    assert controller.context.buffer.get_text() == ""
    assert cursor_of(controller) == 0
    assert ("file.new", {"force": True}) in events


def test_unknown_ex_command() -> None:
    controller, _ = make_controller("abc")

    result = ex(controller, "bogus")

    assert result.status == "ex_unknown"
    assert result.message == "bogus"
    assert controller.mode == "command"
