"""Pending input for the search (``/``) and ex (``:``) prompts."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import Deque, List, Optional


@dataclass(slots=True)
class SearchState:
    # Front of the deque is the most recently typed character.
    pending: Deque[str] = field(default_factory=deque)
    last_query: Optional[str] = None

    @property
    def text(self) -> str:
        return "".join(reversed(self.pending))

    def type(self, char: str) -> None:
        self.pending.appendleft(char)

    def backspace(self) -> bool:
        if not self.pending:
            return False
        self.pending.popleft()
        return True

    def clear(self) -> None:
        self.pending.clear()

    def commit(self) -> Optional[str]:
        """Promote the pending query; an empty one reuses the last query."""

        query = self.text
        self.clear()
        if query:
            self.last_query = query
        return self.last_query


@dataclass(slots=True)
class ExState:
    pending: List[str] = field(default_factory=list)

    @property
    def text(self) -> str:
        return "".join(self.pending)

    def type(self, char: str) -> None:
        self.pending.append(char)

    def backspace(self) -> bool:
        if not self.pending:
            return False
        self.pending.pop()
        return True

    def clear(self) -> None:
        self.pending.clear()

    def commit(self) -> str:
        text = self.text
        self.clear()
        return text


__all__ = ["SearchState", "ExState"]
