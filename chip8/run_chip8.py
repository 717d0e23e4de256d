"""Wire a ROM, the emulator, the pacer and a periphery together."""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Optional, Union

from .config import MachineConfig
from .emulator import Chip8Emulator
from .errors import ExecutionError
from .memory import read_rom
from .peripherals import Periphery
from .scheduler import Clock, FrameScheduler, Sleeper

logger = logging.getLogger(__name__)


def create_emulator(
    rom: Union[bytes, str, Path], config: Optional[MachineConfig] = None
) -> Chip8Emulator:
    """Build an emulator with ``rom`` (raw bytes or a file path) loaded.

    Raises:
        RomLoadError: the file is unreadable or too large for memory.
    """
    rom_data = rom if isinstance(rom, bytes) else read_rom(rom)
    emu = Chip8Emulator(config)
    emu.load_rom(rom_data)
    return emu


def run_emulator(
    rom: Union[bytes, str, Path],
    *,
    periphery: Optional[Periphery] = None,
    config: Optional[MachineConfig] = None,
    duration: Optional[float] = None,
    max_frames: Optional[int] = None,
    clock: Clock = time.monotonic,
    sleep: Sleeper = time.sleep,
) -> Chip8Emulator:
    """Run a ROM and return the emulator once a limit is reached.

    Without ``duration`` or ``max_frames`` this runs until the process is
    terminated. When no periphery is given the pygame window is opened.
    """
    config = config or MachineConfig()
    emu = create_emulator(rom, config)

    if periphery is None:
        from .peripherals.pygame_io import PygamePeriphery

        periphery = PygamePeriphery()

    scheduler = FrameScheduler(emu, periphery, config, clock=clock, sleep=sleep)
    try:
        scheduler.run(duration=duration, max_frames=max_frames)
    except ExecutionError as exc:
        exc.history = tuple(emu.history_listing())
        raise
    finally:
        periphery.close()

    logger.info(
        "Stopped after %d cycles, %d frames", emu.cycle_count, scheduler.frames_rendered
    )
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("Final frame:\n%s", emu.display.to_ascii())
    return emu


__all__ = ["create_emulator", "run_emulator"]
