"""Framebuffer rendering utilities backed by Pillow."""

from typing import Tuple

import numpy as np
from PIL import Image

Color = Tuple[int, int, int]

ON_COLOR: Color = (255, 255, 255)
OFF_COLOR: Color = (0, 0, 0)


class FramebufferRenderer:
    """Turn a 0/1 pixel array into a scaled RGB image."""

    def __init__(
        self,
        scale: int = 10,
        fg_color: Color = ON_COLOR,
        bg_color: Color = OFF_COLOR,
    ):
        if scale < 1:
            raise ValueError(f"Scale must be positive, got {scale}")
        self.scale = scale
        self.fg_color = fg_color
        self.bg_color = bg_color

    def to_rgb_array(self, pixels: np.ndarray) -> np.ndarray:
        """Return a ``(h*scale, w*scale, 3)`` uint8 array."""
        lit = np.asarray(pixels, dtype=bool)
        rgb = np.empty(lit.shape + (3,), dtype=np.uint8)
        rgb[lit] = self.fg_color
        rgb[~lit] = self.bg_color
        if self.scale > 1:
            rgb = rgb.repeat(self.scale, axis=0).repeat(self.scale, axis=1)
        return rgb

    def render(self, pixels: np.ndarray) -> Image.Image:
        return Image.fromarray(self.to_rgb_array(pixels))

    def save(self, pixels: np.ndarray, path: str) -> None:
        self.render(pixels).save(path)


__all__ = ["FramebufferRenderer", "ON_COLOR", "OFF_COLOR"]
