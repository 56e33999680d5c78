from vim_interp.commands import (
    CommandParser,
    Direction,
    FindChar,
    Goto,
    Mark,
    MarkKind,
    Motion,
    MotionCommand,
    MotionKind,
    Operator,
    Repeat,
    Replace,
    Simple,
)
from vim_interp.keymaps import KeymapRegistry, KeymapResolver
from vim_interp.keymaps.defaults import load_default_keymaps


def make_parser() -> CommandParser:
    registry = KeymapRegistry()
    load_default_keymaps(registry)
    return CommandParser(KeymapResolver(registry))


def feed(parser: CommandParser, *tokens: str):
    outcome = None
    for token in tokens:
        outcome = parser.feed(token)
    return outcome


def test_operator_waits_for_motion() -> None:
    parser = make_parser()

    assert parser.feed("d").status == "pending"
    assert parser.pending
    outcome = parser.feed("w")

    assert outcome.status == "command"
    assert outcome.command == MotionCommand(
        Operator.DELETE, Motion(MotionKind.WORD_FORWARD)
    )
    assert not parser.pending


def test_doubled_operator_is_line_motion() -> None:
    outcome = feed(make_parser(), "y", "y")

    assert outcome.command == MotionCommand(Operator.YANK, Motion(MotionKind.LINE))


def test_counts_multiply() -> None:
    outcome = feed(make_parser(), "3", "d", "2", "w")

    assert outcome.command == Repeat(
        6, MotionCommand(Operator.DELETE, Motion(MotionKind.WORD_FORWARD))
    )


def test_count_wraps_simple_command() -> None:
    assert feed(make_parser(), "2", "x").command == Repeat(2, Simple("edit.delete_char"))
    assert feed(make_parser(), "1", "0", "x").command == Repeat(
        10, Simple("edit.delete_char")
    )


def test_zero_without_count_is_line_start() -> None:
    assert feed(make_parser(), "0").command == Simple("move.line_start")


def test_text_objects() -> None:
    assert feed(make_parser(), "c", "i", "(").command == MotionCommand(
        Operator.CHANGE, Motion(MotionKind.INNER_BLOCK, delimiter=("(", ")"))
    )
    assert feed(make_parser(), "d", "a", "w").command == MotionCommand(
        Operator.DELETE, Motion(MotionKind.A_WORD)
    )
    assert feed(make_parser(), "y", "a", "B").command == MotionCommand(
        Operator.YANK, Motion(MotionKind.A_BLOCK, delimiter=("{", "}"))
    )


def test_find_char_commands() -> None:
    assert feed(make_parser(), "f", "x").command == FindChar(
        Direction.FORWARD, True, "x"
    )
    assert feed(make_parser(), "T", "x").command == FindChar(
        Direction.BACKWARD, False, "x"
    )
    assert feed(make_parser(), "d", "t", "x").command == MotionCommand(
        Operator.DELETE,
        Motion(MotionKind.FIND_CHAR, find=FindChar(Direction.FORWARD, False, "x")),
    )


def test_goto_forms() -> None:
    assert feed(make_parser(), "5", "G").command == Goto(4)
    assert feed(make_parser(), "G").command == Simple("move.buffer_end")
    assert feed(make_parser(), "g", "g").command == Simple("move.buffer_start")
    assert feed(make_parser(), "3", "g", "g").command == Goto(2)


def test_marks_and_replace_ignore_counts() -> None:
    assert feed(make_parser(), "m", "a").command == Mark(MarkKind.SAVE, "a")
    assert feed(make_parser(), "2", "m", "a").command == Mark(MarkKind.SAVE, "a")
    assert feed(make_parser(), "`", "a").command == Mark(MarkKind.GOTO_CHAR, "a")
    assert feed(make_parser(), "'", "a").command == Mark(MarkKind.GOTO_LINE, "a")
    assert feed(make_parser(), "r", "z").command == Replace("z")


def test_multi_key_simple_command() -> None:
    parser = make_parser()

    assert parser.feed("g").status == "pending"
    assert parser.feed("t").command == Simple("tab.next")


def test_miss_discards_draft() -> None:
    parser = make_parser()

    assert feed(parser, "d", "z").status == "miss"
    assert not parser.pending
    assert parser.feed("Q").status == "miss"
    assert parser.feed("x").command == Simple("edit.delete_char")


def test_cancel_discards_draft() -> None:
    parser = make_parser()
    feed(parser, "2", "d")

    parser.cancel()

    assert not parser.pending
    assert parser.feed("w").command == Simple("move.word_forward")
