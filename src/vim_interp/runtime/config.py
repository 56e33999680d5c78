"""Interpreter configuration resolved from ``VIM_INTERP_*`` variables."""

from __future__ import annotations

from dataclasses import dataclass

from .telemetry import env, env_flag

DEFAULT_ESCAPE_CHORDS: tuple[str, ...] = ("ctrl+c", "ctrl+[")


@dataclass(frozen=True, slots=True)
class EngineConfig:
    """Knobs a host may tune without touching the key tables."""

    page_lines: int = 20
    start_enabled: bool = True
    # Chords treated like Escape, in key-token form.
    escape_chords: tuple[str, ...] = DEFAULT_ESCAPE_CHORDS

    def __post_init__(self) -> None:
        if self.page_lines <= 0:
            raise ValueError("page_lines must be positive")

    @classmethod
    def from_env(cls) -> "EngineConfig":
        page_lines = int(env("PAGE_LINES") or "20")
        chords = env("ESCAPE_CHORDS")
        escape_chords = (
            tuple(chord.strip().lower() for chord in chords.split(",") if chord.strip())
            if chords
            else DEFAULT_ESCAPE_CHORDS
        )
        return cls(
            page_lines=page_lines,
            start_enabled=env_flag("START_ENABLED", True),
            escape_chords=escape_chords,
        )


__all__ = ["EngineConfig", "DEFAULT_ESCAPE_CHORDS"]
