"""Monochrome framebuffer with XOR sprite blitting."""

from __future__ import annotations

from typing import Iterable

import numpy as np

from ..constants import SCREEN_HEIGHT, SCREEN_WIDTH


class Framebuffer:
    """64x32 one-bit display owned by the emulator.

    Pixels live in a ``(height, width)`` uint8 array holding 0 or 1. Only the
    emulator mutates it; renderers receive :meth:`view`, which is read-only.
    """

    def __init__(self, width: int = SCREEN_WIDTH, height: int = SCREEN_HEIGHT):
        self.width = width
        self.height = height
        self.pixels = np.zeros((height, width), dtype=np.uint8)

    def clear(self) -> None:
        self.pixels.fill(0)

    def draw_sprite(self, x: int, y: int, rows: Iterable[int]) -> bool:
        """XOR sprite ``rows`` into the buffer with its top-left at (x, y).

        Each row byte covers eight pixels, most significant bit leftmost.
        Coordinates wrap independently per pixel, so a sprite crossing an
        edge continues on the opposite side. Returns True when any lit pixel
        was turned off.
        """
        collision = False
        pixels = self.pixels
        for row_index, row in enumerate(rows):
            py = (y + row_index) % self.height
            for bit in range(8):
                if not (row >> (7 - bit)) & 1:
                    continue
                px = (x + bit) % self.width
                if pixels[py, px]:
                    collision = True
                    pixels[py, px] = 0
                else:
                    pixels[py, px] = 1
        return collision

    def view(self) -> np.ndarray:
        """Read-only view sharing memory with the live buffer."""
        view = self.pixels.view()
        view.flags.writeable = False
        return view

    def to_bytes(self) -> bytes:
        return self.pixels.tobytes()

    def to_ascii(self, on: str = "#", off: str = ".") -> str:
        return "\n".join(
            "".join(on if value else off for value in row) for row in self.pixels
        )


__all__ = ["Framebuffer"]
