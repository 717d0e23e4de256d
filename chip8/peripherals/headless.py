"""Scriptable periphery that renders off-screen."""

from __future__ import annotations

import logging
from collections import deque
from typing import Deque, Iterable, List, Optional

import numpy as np
from PIL import Image

from ..display.renderer import FramebufferRenderer
from ..keyboard import validate_key
from .base import Periphery

logger = logging.getLogger(__name__)


class HeadlessPeriphery(Periphery):
    """Periphery for tests, batch runs and screenshots.

    Frames are kept in memory instead of being shown, and the tone is a
    boolean flag. Key input comes from a script consumed one value per
    :meth:`poll_input` call, not per frame: the pacer polls at every batch
    boundary, which can happen several times before a frame is due. Use
    :meth:`hold_key` for input that must persist across a whole frame.
    """

    def __init__(
        self,
        *,
        keys: Iterable[Optional[int]] = (),
        capture_every: int = 0,
        renderer: Optional[FramebufferRenderer] = None,
    ) -> None:
        self._script: Deque[Optional[int]] = deque(validate_key(k) for k in keys)
        self._held: Optional[int] = None
        self.capture_every = capture_every
        self.renderer = renderer or FramebufferRenderer(scale=1)
        self.frames_rendered = 0
        self.last_frame: Optional[np.ndarray] = None
        self.captured: List[Image.Image] = []
        self.tone_playing = False
        self.tone_starts = 0
        self.polls = 0
        self.closed = False

    def hold_key(self, code: Optional[int]) -> None:
        """Report ``code`` from every poll once the script runs out."""
        self._held = validate_key(code)

    def queue_keys(self, keys: Iterable[Optional[int]]) -> None:
        self._script.extend(validate_key(k) for k in keys)

    def render(self, framebuffer: np.ndarray) -> None:
        self.frames_rendered += 1
        self.last_frame = np.array(framebuffer, copy=True)
        if self.capture_every and self.frames_rendered % self.capture_every == 0:
            self.captured.append(self.renderer.render(self.last_frame))

    def poll_input(self) -> Optional[int]:
        self.polls += 1
        if self._script:
            return self._script.popleft()
        return self._held

    def play_tone(self) -> None:
        if not self.tone_playing:
            self.tone_starts += 1
        self.tone_playing = True

    def stop_tone(self) -> None:
        self.tone_playing = False

    def snapshot(self) -> Optional[Image.Image]:
        """Render the most recent frame, if any."""
        if self.last_frame is None:
            return None
        return self.renderer.render(self.last_frame)

    def close(self) -> None:
        self.closed = True
        logger.debug("Headless periphery closed after %d frames", self.frames_rendered)


__all__ = ["HeadlessPeriphery"]
