"""Range computation for motions and text objects, and the operators over them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional

from vim_interp.buffer import Position, TextSurface
from vim_interp.modes.base_mode import EditorMode, ModeContext, ModeResult
from vim_interp.runtime import telemetry
from vim_interp.state import CursorModel, classify_paste

from .model import Direction, FindChar, Motion, MotionKind, Operator

BRACKETS = {"(": ")", "[": "]", "{": "}"}


@dataclass(frozen=True, slots=True)
class MotionRange:
    """Half-open ``[start, end)``; ``linewise`` marks whole-line ranges."""

    start: Position
    end: Position
    linewise: bool = False


class MotionEngine:
    def __init__(self, context: ModeContext) -> None:
        self.context = context
        self.logger = telemetry.get_logger("vim_interp.commands.motions")
        self._ranges: Dict[MotionKind, Callable[[Motion], Optional[MotionRange]]] = {
            MotionKind.LEFT: self._left,
            MotionKind.RIGHT: self._right,
            MotionKind.UP: self._up,
            MotionKind.DOWN: self._down,
            MotionKind.LINE: self._line,
            MotionKind.WORD_FORWARD: self._word_forward,
            MotionKind.WORD_BACKWARD: self._word_backward,
            MotionKind.A_WORD: self._a_word,
            MotionKind.INNER_WORD: self._inner_word,
            MotionKind.MATCH: self._match,
            MotionKind.A_BLOCK: self._block,
            MotionKind.INNER_BLOCK: self._block,
            MotionKind.FIND_CHAR: self._find_char,
        }

    @property
    def buffer(self) -> TextSurface:
        return self.context.buffer

    @property
    def cursor(self) -> CursorModel:
        return self.context.state.cursor

    def handle_motion_command(self, operator: Operator, motion: Motion) -> ModeResult:
        self.buffer.set_position(self.cursor.position)
        span = self.motion_range(motion)
        if span is None:
            telemetry.record_event(
                "motion.failed",
                level="debug",
                data={"operator": operator.value, "motion": motion.kind.value},
            )
            return ModeResult(consumed=True, status="motion_failed")
        return self.apply_operator(operator, span)

    def motion_range(self, motion: Motion) -> Optional[MotionRange]:
        return self._ranges[motion.kind](motion)

    def line_range(self, first: int, last: int) -> MotionRange:
        """Whole lines ``first..last``; the trailing break is kept unless on the last line."""

        buffer = self.buffer
        start = buffer.line_start(first)
        if last < buffer.last_line():
            end = buffer.line_end(last) + 1
        else:
            end = buffer.line_end(last)
        return MotionRange(start, end, linewise=True)

    # -- operators -------------------------------------------------------

    def apply_operator(self, operator: Operator, span: MotionRange) -> ModeResult:
        with self.buffer.edit_sequence(f"operator::{operator.value}"):
            if operator is Operator.DELETE:
                return self._delete(span)
            if operator is Operator.CHANGE:
                return self._change(span)
            return self._yank(span)

    def _delete(self, span: MotionRange) -> ModeResult:
        buffer = self.buffer
        at_end = span.end == buffer.last_position()
        if span.linewise and at_end and span.start == span.end and span.start > 0:
            # An empty last line is only the break in front of it.
            span = MotionRange(span.start - 1, span.end, linewise=True)
        text = buffer.get_text(span.start, span.end)
        self.context.state.paste_type = classify_paste(text, span.linewise)
        buffer.cut(span.start, span.end)
        start = span.start
        if span.linewise and at_end and not text.endswith("\n") and start > 0:
            buffer.delete(start - 1, start)
            start = buffer.line_start(buffer.line_of(start - 1))
        self.cursor.place(buffer, start)
        self.cursor.settle(buffer)
        return ModeResult(consumed=True, status="delete")

    def _change(self, span: MotionRange) -> ModeResult:
        buffer = self.buffer
        end = span.end
        if span.linewise and buffer.get_text(span.start, end).endswith("\n"):
            end -= 1
        text = buffer.cut(span.start, end)
        self.context.state.paste_type = classify_paste(text, span.linewise)
        self.cursor.place(buffer, span.start)
        return ModeResult(consumed=True, switch_to=EditorMode.INSERT, status="change")

    def _yank(self, span: MotionRange) -> ModeResult:
        text = self.buffer.copy(span.start, span.end)
        self.context.state.paste_type = classify_paste(text, span.linewise)
        self.buffer.set_position(self.cursor.position)
        return ModeResult(consumed=True, status="yank")

    # -- ranges ------------------------------------------------------------

    def _current_line(self) -> int:
        return self.buffer.line_of(self.cursor.position)

    def _left(self, motion: Motion) -> Optional[MotionRange]:
        del motion
        position = self.cursor.position
        if position <= self.buffer.line_start(self._current_line()):
            return None
        return MotionRange(position - 1, position)

    def _right(self, motion: Motion) -> Optional[MotionRange]:
        del motion
        position = self.cursor.position
        if position >= self.buffer.line_end(self._current_line()):
            return None
        return MotionRange(position, position + 1)

    def _up(self, motion: Motion) -> Optional[MotionRange]:
        del motion
        line = self._current_line()
        if line == 0:
            return None
        return self.line_range(line - 1, line)

    def _down(self, motion: Motion) -> Optional[MotionRange]:
        del motion
        line = self._current_line()
        if line >= self.buffer.last_line():
            return None
        return self.line_range(line, line + 1)

    def _line(self, motion: Motion) -> Optional[MotionRange]:
        del motion
        line = self._current_line()
        return self.line_range(line, line)

    def _word_forward(self, motion: Motion) -> Optional[MotionRange]:
        del motion
        buffer = self.buffer
        position = self.cursor.position
        boundary = buffer.word_boundary(position, forward=True)
        if boundary <= position:
            return None
        trailing = buffer.skip_whitespace(boundary, forward=True)
        if trailing > boundary and buffer.line_of(trailing) == buffer.line_of(boundary):
            return MotionRange(position, trailing)
        return MotionRange(position, boundary)

    def _word_backward(self, motion: Motion) -> Optional[MotionRange]:
        del motion
        buffer = self.buffer
        position = self.cursor.position
        if position <= buffer.line_start(self._current_line()):
            return None
        start = buffer.word_boundary(position, forward=False)
        if start >= position:
            return None
        return MotionRange(start, position)

    def _a_word(self, motion: Motion) -> Optional[MotionRange]:
        del motion
        buffer = self.buffer
        span = buffer.word_span(self.cursor.position)
        if span is None:
            return None
        start, end = span
        line_start = buffer.line_start(buffer.line_of(start))
        leading = max(buffer.skip_whitespace(start, forward=False), line_start)
        if leading < start:
            return MotionRange(leading, end)
        line_end = buffer.line_end(buffer.line_of(end))
        trailing = min(buffer.skip_whitespace(end, forward=True), line_end)
        return MotionRange(start, max(trailing, end))

    def _inner_word(self, motion: Motion) -> Optional[MotionRange]:
        del motion
        span = self.buffer.word_span(self.cursor.position)
        if span is None:
            return None
        return MotionRange(*span)

    def _match(self, motion: Motion) -> Optional[MotionRange]:
        del motion
        buffer = self.buffer
        position = self.cursor.position
        if position >= buffer.last_position():
            return None
        char = buffer.get_text(position, position + 1)
        if char in BRACKETS.values():
            opener = buffer.backward_match(position + 1)
            return None if opener is None else MotionRange(opener, position + 1)
        if char in BRACKETS:
            end = buffer.forward_match(position)
            return None if end is None else MotionRange(position, end)
        return None

    def _block(self, motion: Motion) -> Optional[MotionRange]:
        if motion.delimiter is None:
            return None
        pair = self.enclosing_pair(*motion.delimiter)
        if pair is None:
            return None
        open_index, close_index = pair
        if motion.kind is MotionKind.A_BLOCK:
            return MotionRange(open_index, close_index + 1)
        return MotionRange(open_index + 1, close_index)

    def enclosing_pair(self, opener: str, closer: str) -> Optional[tuple[int, int]]:
        """Offsets of the nearest delimiters enclosing the cursor."""

        buffer = self.buffer
        position = self.cursor.position
        if opener in BRACKETS:
            search = position + 1
            while True:
                hit = buffer.find_string(opener, search, forward=False)
                if hit is None:
                    return None
                open_index = hit - len(opener)
                end = buffer.forward_match(open_index)
                if end is not None and end > position:
                    return open_index, end - 1
                search = open_index

        search = position + 1
        if opener == closer and self._on_closing_quote(opener):
            search = position
        hit = buffer.find_string(opener, search, forward=False)
        if hit is None:
            return None
        open_index = hit - len(opener)
        close_index = buffer.find_string(
            closer, max(position, open_index + 1), forward=True
        )
        if close_index is None:
            return None
        return open_index, close_index

    def _on_closing_quote(self, quote: str) -> bool:
        buffer = self.buffer
        position = self.cursor.position
        if position >= buffer.last_position():
            return False
        if buffer.get_text(position, position + 1) != quote:
            return False
        before = buffer.get_text(buffer.line_start(self._current_line()), position)
        return before.count(quote) % 2 == 1

    def _find_char(self, motion: Motion) -> Optional[MotionRange]:
        if motion.find is None:
            return None
        target = self.find_char_target(motion.find)
        if target is None:
            return None
        position = self.cursor.position
        if motion.find.direction is Direction.FORWARD:
            return MotionRange(position, target + 1)
        return MotionRange(target, position)

    def find_char_target(self, find: FindChar) -> Optional[Position]:
        """Line-local landing offset for ``f``/``F``/``t``/``T``."""

        buffer = self.buffer
        position = self.cursor.position
        line = self._current_line()
        start, end = buffer.line_start(line), buffer.line_end(line)
        text = buffer.get_text(start, end)
        offset = position - start
        if find.direction is Direction.FORWARD:
            index = text.find(find.char, offset + 1)
            step = -1
        else:
            index = text.rfind(find.char, 0, max(offset, 0))
            step = 1
        if index == -1:
            return None
        target = index if find.inclusive else index + step
        if target < 0 or target >= len(text):
            target = index
        return start + target


__all__ = ["MotionEngine", "MotionRange"]
