"""Display subsystem for the CHIP-8 emulator."""

from .font import FONTSET, GLYPH_COUNT, glyph_rows
from .framebuffer import Framebuffer
from .renderer import FramebufferRenderer

__all__ = [
    "FONTSET",
    "GLYPH_COUNT",
    "glyph_rows",
    "Framebuffer",
    "FramebufferRenderer",
]
