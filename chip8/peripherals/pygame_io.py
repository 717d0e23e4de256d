"""Interactive periphery: pygame window, keyboard and square-wave beeper."""

from __future__ import annotations

import logging
from typing import Dict, Optional

import numpy as np
import pygame

from ..constants import SCREEN_HEIGHT, SCREEN_WIDTH
from ..display.renderer import FramebufferRenderer
from ..keyboard import KEY_LAYOUT
from .base import Periphery

logger = logging.getLogger(__name__)

WINDOW_TITLE = "CHIP-8"
WINDOW_SCALE = 10
BEEP_FREQUENCY_HZ = 440
BEEP_VOLUME = 0.1
SAMPLE_RATE = 44_100


def build_square_wave(
    sample_rate: int, channels: int, frequency: int = BEEP_FREQUENCY_HZ
) -> np.ndarray:
    """One period of a signed 16-bit square wave, shaped for the mixer."""
    period = max(2, int(round(sample_rate / frequency)))
    amplitude = 2**15 - 1
    wave = np.full(period, amplitude, dtype=np.int16)
    wave[period // 2 :] = -amplitude
    if channels > 1:
        wave = np.repeat(wave[:, None], channels, axis=1)
    return np.ascontiguousarray(wave)


def _host_keymap() -> Dict[int, int]:
    return {getattr(pygame, f"K_{name}"): code for name, code in KEY_LAYOUT.items()}


class PygamePeriphery(Periphery):
    """Window-backed periphery.

    Closing the window raises ``SystemExit`` from :meth:`poll_input`, which is
    the only way the run loop ends on the success path.
    """

    def __init__(self, scale: int = WINDOW_SCALE, title: str = WINDOW_TITLE):
        pygame.mixer.pre_init(SAMPLE_RATE, -16, 1, 512)
        pygame.init()
        self.renderer = FramebufferRenderer(scale=scale)
        self.window = pygame.display.set_mode(
            (SCREEN_WIDTH * scale, SCREEN_HEIGHT * scale)
        )
        pygame.display.set_caption(title)
        self._keymap = _host_keymap()
        self._beep: Optional[pygame.mixer.Sound] = self._build_beep()
        self._tone_playing = False

    def _build_beep(self) -> Optional[pygame.mixer.Sound]:
        try:
            init = pygame.mixer.get_init()
            if init is None:
                pygame.mixer.init()
                init = pygame.mixer.get_init()
            frequency, _size, channels = init
            sound = pygame.sndarray.make_sound(build_square_wave(frequency, channels))
        except pygame.error as exc:
            logger.warning("Audio unavailable, running silent: %s", exc)
            return None
        sound.set_volume(BEEP_VOLUME)
        return sound

    def render(self, framebuffer: np.ndarray) -> None:
        rgb = self.renderer.to_rgb_array(framebuffer)
        # surfarray expects (width, height, 3)
        surface = pygame.surfarray.make_surface(rgb.transpose(1, 0, 2))
        self.window.blit(surface, (0, 0))
        pygame.display.flip()

    def poll_input(self) -> Optional[int]:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                logger.info("Window closed")
                raise SystemExit(0)
        pressed = pygame.key.get_pressed()
        for host_key, code in self._keymap.items():
            if pressed[host_key]:
                return code
        return None

    def play_tone(self) -> None:
        if self._beep is not None and not self._tone_playing:
            self._beep.play(loops=-1)
        self._tone_playing = True

    def stop_tone(self) -> None:
        if self._beep is not None and self._tone_playing:
            self._beep.stop()
        self._tone_playing = False

    def close(self) -> None:
        self.stop_tone()
        pygame.quit()


__all__ = ["PygamePeriphery", "build_square_wave"]
