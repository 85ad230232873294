"""Script detection used to label translation direction."""

from __future__ import annotations

from line_translator.models import Direction

# Thai Unicode block
_THAI_FIRST = 0x0E00
_THAI_LAST = 0x0E7F


def looks_thai(text: str) -> bool:
    """Return True if any character falls in the Thai block (U+0E00-U+0E7F)."""
    return any(_THAI_FIRST <= ord(ch) <= _THAI_LAST for ch in text)


def direction_for(text: str) -> Direction:
    """Assumed direction for a message, judged from the input text only."""
    return Direction.TH_TO_EN if looks_thai(text) else Direction.EN_TO_TH
