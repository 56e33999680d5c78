"""Forward/backward search over the committed query, with wrap-around."""

from __future__ import annotations

from vim_interp.modes.base_mode import ModeContext, ModeResult
from vim_interp.runtime import telemetry


def _land(context: ModeContext, position: int) -> None:
    context.state.cursor.place(context.buffer, position)


def do_next_search(context: ModeContext, continuing: bool) -> bool:
    """Search forward; wraps to the buffer start when nothing lies ahead."""

    query = context.state.search.last_query
    if not query:
        return False
    buffer = context.buffer
    if continuing:
        start = context.state.cursor.position + 1
    else:
        start = buffer.get_selection()[0]
    hit = buffer.find_string(query, start, forward=True)
    if hit is None:
        hit = buffer.find_string(query, 0, forward=True)
    if hit is None:
        telemetry.record_event("search.miss", level="debug", data={"query": query})
        return False
    _land(context, hit)
    return True


def do_previous_search(context: ModeContext, start: int) -> bool:
    """Search backward from ``start - 1``; wraps to the buffer end."""

    query = context.state.search.last_query
    if not query:
        return False
    buffer = context.buffer
    hit = buffer.find_string(query, max(start - 1, 0), forward=False)
    if hit is None:
        hit = buffer.find_string(query, buffer.last_position(), forward=False)
    if hit is None:
        telemetry.record_event("search.miss", level="debug", data={"query": query})
        return False
    _land(context, hit - len(query))
    return True


def search_next(context: ModeContext, command: object) -> ModeResult:
    del command
    found = do_next_search(context, continuing=True)
    return ModeResult(consumed=True, status="search" if found else "search_failed")


def search_previous(context: ModeContext, command: object) -> ModeResult:
    del command
    found = do_previous_search(context, context.state.cursor.position)
    return ModeResult(consumed=True, status="search" if found else "search_failed")


def search_word(context: ModeContext, command: object) -> ModeResult:
    del command
    buffer = context.buffer
    span = buffer.word_span(context.state.cursor.position)
    if span is None:
        return ModeResult(consumed=True, status="search_failed")
    query = buffer.get_text(*span)
    context.state.search.last_query = query
    context.bus.emit("search.query", query)
    _land(context, span[0])
    found = do_next_search(context, continuing=True)
    return ModeResult(consumed=True, status="search" if found else "search_failed")


__all__ = [
    "do_next_search",
    "do_previous_search",
    "search_next",
    "search_previous",
    "search_word",
]
