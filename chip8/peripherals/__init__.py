"""Periphery implementations for the CHIP-8 emulator.

The pygame front end lives in :mod:`chip8.peripherals.pygame_io` and is
imported on demand so headless use does not need a display.
"""

from .base import Periphery
from .headless import HeadlessPeriphery

__all__ = ["Periphery", "HeadlessPeriphery"]
