from vim_interp.buffer import Buffer
from vim_interp.modes import KeyInput
from vim_interp.modes.mode_controller import ModeController, create_default_controller
from vim_interp.runtime import EngineConfig
from vim_interp.state import PasteType


def make_controller(text: str, position: int = 0) -> ModeController:
    controller = create_default_controller(Buffer(text), EngineConfig())
    context = controller.context
    context.state.cursor.place(context.buffer, position)
    return controller


def press(controller: ModeController, *keys: str) -> None:
    for key in keys:
        controller.handle_key(KeyInput(key=key, text=key if len(key) == 1 else None))


def text_of(controller: ModeController) -> str:
    return controller.context.buffer.get_text()


def cursor_of(controller: ModeController) -> int:
    return controller.context.state.cursor.position


def test_delete_word_stops_at_line_break() -> None:
    controller = make_controller("hello\nworld")

    press(controller, "d", "w")

    assert text_of(controller) == "\nworld"
    assert cursor_of(controller) == 0
    assert controller.context.state.paste_type is PasteType.NORMAL


def test_delete_word_takes_trailing_spaces() -> None:
    controller = make_controller("foo bar")

    press(controller, "d", "w")

    assert text_of(controller) == "bar"


def test_operator_without_range_changes_nothing() -> None:
    for keys in (("d", "h"), ("d", "%"), ("d", "j"), ("y", "k")):
        controller = make_controller("abc")

        press(controller, *keys)

        assert text_of(controller) == "abc"
        assert cursor_of(controller) == 0
        assert controller.mode == "command"


def test_delete_line_in_the_middle() -> None:
    controller = make_controller("one\ntwo\nthree", 5)

    press(controller, "d", "d")

    assert text_of(controller) == "one\nthree"
    assert cursor_of(controller) == 4
    assert controller.context.state.paste_type is PasteType.LINE


def test_delete_last_line_removes_preceding_break() -> None:
    controller = make_controller("one\ntwo", 4)

    press(controller, "d", "d")

    assert text_of(controller) == "one"
    assert cursor_of(controller) == 0
    assert controller.context.state.paste_type is PasteType.LINE_END


def test_counted_line_delete_is_one_undo_step() -> None:
    controller = make_controller("a\nb\nc")

    press(controller, "2", "d", "d")
    assert text_of(controller) == "c"

    press(controller, "u")
    assert text_of(controller) == "a\nb\nc"


def test_delete_down_takes_two_lines() -> None:
    controller = make_controller("a\nb\nc")

    press(controller, "d", "j")

    assert text_of(controller) == "c"


def test_change_line_keeps_break_and_enters_insert() -> None:
    controller = make_controller("one\ntwo")

    press(controller, "c", "c")

    assert text_of(controller) == "\ntwo"
    assert controller.mode == "insert"
    assert controller.context.state.paste_type is PasteType.LINE_END


def test_change_inner_block() -> None:
    controller = make_controller("f(abc)", 3)

    press(controller, "c", "i", "(")

    assert text_of(controller) == "f()"
    assert cursor_of(controller) == 2
    assert controller.mode == "insert"


def test_inner_block_picks_enclosing_pair() -> None:
    inner = make_controller("(a(b)c)", 3)
    outer = make_controller("(a(b)c)", 1)

    press(inner, "d", "i", "b")
    press(outer, "d", "i", "b")

    assert text_of(inner) == "(a()c)"
    assert text_of(outer) == "()"


def test_a_block_with_quotes() -> None:
    controller = make_controller('say "hi" now', 5)

    press(controller, "d", "a", '"')

    assert text_of(controller) == "say  now"
    assert cursor_of(controller) == 4


def test_a_word_prefers_leading_whitespace() -> None:
    controller = make_controller("foo bar baz", 5)

    press(controller, "d", "a", "w")

    assert text_of(controller) == "foo baz"


def test_a_word_falls_back_to_trailing_whitespace() -> None:
    controller = make_controller("foo bar")

    press(controller, "d", "a", "w")

    assert text_of(controller) == "bar"


def test_inner_word() -> None:
    controller = make_controller("foo bar", 5)

    press(controller, "d", "i", "w")

    assert text_of(controller) == "foo "


def test_delete_to_matching_bracket() -> None:
    controller = make_controller("a(b)c", 1)

    press(controller, "d", "%")

    assert text_of(controller) == "ac"


def test_delete_with_find_char() -> None:
    inclusive = make_controller("abcxdef")
    till = make_controller("abcxdef")

    press(inclusive, "d", "f", "x")
    press(till, "d", "t", "x")

    assert text_of(inclusive) == "def"
    assert text_of(till) == "xdef"


def test_yank_line_keeps_cursor() -> None:
    controller = make_controller("one\ntwo", 1)

    press(controller, "y", "y")

    assert text_of(controller) == "one\ntwo"
    assert cursor_of(controller) == 1
    assert controller.context.buffer.clipboard.get() == "one\n"
    assert controller.context.state.paste_type is PasteType.LINE


def test_undo_restores_deleted_word() -> None:
    controller = make_controller("hello\nworld")

    press(controller, "d", "w", "u")

    assert text_of(controller) == "hello\nworld"
