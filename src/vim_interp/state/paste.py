"""Classification of cut/copied content for put placement."""

from __future__ import annotations

from enum import Enum


class PasteType(str, Enum):
    NORMAL = "normal"
    LINE = "line"
    # Whole lines taken from the buffer's last line carry no trailing break.
    LINE_END = "line_end"


def classify_paste(text: str, linewise: bool) -> PasteType:
    if not linewise:
        return PasteType.NORMAL
    if text.endswith("\n"):
        return PasteType.LINE
    return PasteType.LINE_END


__all__ = ["PasteType", "classify_paste"]
