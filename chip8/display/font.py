"""Built-in hex-digit font for the CHIP-8 interpreter."""

from __future__ import annotations

from typing import Tuple

from ..constants import FONT_GLYPH_HEIGHT

GLYPH_COUNT = 16

# Five rows per glyph, most significant bit is the leftmost pixel.
# fmt: off
FONTSET: Tuple[int, ...] = (
    0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
    0x20, 0x60, 0x20, 0x20, 0x70,  # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
    0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
    0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
    0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
    0xF0, 0x80, 0xF0, 0x80, 0x80,  # F
)
# fmt: on


def glyph_rows(digit: int) -> Tuple[int, ...]:
    """Return the five row bytes for hex ``digit``."""
    if not (0 <= digit < GLYPH_COUNT):
        raise ValueError(f"Glyph index out of range: {digit}")
    start = digit * FONT_GLYPH_HEIGHT
    return FONTSET[start : start + FONT_GLYPH_HEIGHT]


__all__ = ["FONTSET", "GLYPH_COUNT", "glyph_rows"]
