"""Periphery contract between the run loop and the host machine."""

from abc import ABC, abstractmethod
from typing import Optional

import numpy as np


class Periphery(ABC):
    """Host-side display, keypad and beeper.

    All calls are synchronous and must not block the run loop. ``render``
    receives a read-only view of the emulator's framebuffer; implementations
    copy what they need and never write to it.
    """

    @abstractmethod
    def render(self, framebuffer: np.ndarray) -> None:
        """Present a ``(height, width)`` array of 0/1 pixels."""
        pass

    @abstractmethod
    def poll_input(self) -> Optional[int]:
        """Return the currently held key code (0x0-0xF), or None."""
        pass

    @abstractmethod
    def play_tone(self) -> None:
        """Start the continuous beep."""
        pass

    @abstractmethod
    def stop_tone(self) -> None:
        """Silence the beep."""
        pass

    def close(self) -> None:
        """Release host resources."""
        pass


__all__ = ["Periphery"]
