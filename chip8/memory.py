"""Bounds-checked 4 KiB memory for the CHIP-8 machine."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Optional, Union

from .constants import FONT_OFFSET, MEMORY_SIZE, PROGRAM_START
from .display.font import FONTSET
from .errors import MemoryAccessError, RomLoadError

logger = logging.getLogger(__name__)


class Chip8Memory:
    """Flat byte-addressable memory with the fontset preloaded.

    Reads and writes outside ``[0, size)`` raise :class:`MemoryAccessError`.
    The emulator passes the current opcode/PC in so diagnostics point at the
    faulting instruction.
    """

    def __init__(
        self,
        size: int = MEMORY_SIZE,
        *,
        font_offset: int = FONT_OFFSET,
        program_start: int = PROGRAM_START,
    ):
        if font_offset + len(FONTSET) > program_start:
            raise ValueError(
                f"Fontset at 0x{font_offset:03X} overlaps program region "
                f"0x{program_start:03X}"
            )
        self.size = size
        self.font_offset = font_offset
        self.program_start = program_start
        self.data = bytearray(size)
        self.program_length = 0
        self._load_fontset()

    def _load_fontset(self) -> None:
        self.data[self.font_offset : self.font_offset + len(FONTSET)] = bytes(FONTSET)

    def reset(self) -> None:
        """Zero-fill and repopulate the fontset; the program is discarded."""
        self.data[:] = bytes(self.size)
        self.program_length = 0
        self._load_fontset()

    @property
    def max_program_size(self) -> int:
        return self.size - self.program_start

    def contains(self, address: int) -> bool:
        return 0 <= address < self.size

    def _check(self, address: int, opcode: Optional[int], pc: int) -> None:
        if not self.contains(address):
            raise MemoryAccessError(address, opcode=opcode, pc=pc)

    def read_word(self, address: int) -> int:
        """Fetch a big-endian instruction word; ``address`` is also the PC."""
        self._check(address, None, address)
        self._check(address + 1, None, address)
        return (self.data[address] << 8) | self.data[address + 1]

    def read_block(
        self, address: int, length: int, *, opcode: Optional[int] = None, pc: int = 0
    ) -> bytes:
        if length <= 0:
            return b""
        self._check(address, opcode, pc)
        self._check(address + length - 1, opcode, pc)
        return bytes(self.data[address : address + length])

    def write_block(
        self,
        address: int,
        values: Iterable[int],
        *,
        opcode: Optional[int] = None,
        pc: int = 0,
    ) -> None:
        payload = bytes(v & 0xFF for v in values)
        if not payload:
            return
        self._check(address, opcode, pc)
        self._check(address + len(payload) - 1, opcode, pc)
        self.data[address : address + len(payload)] = payload

    def load_program(self, rom: bytes) -> None:
        """Copy ``rom`` unmodified into the program region."""
        if len(rom) > self.max_program_size:
            raise RomLoadError(
                f"ROM size {len(rom)} exceeds maximum {self.max_program_size} "
                f"bytes available at 0x{self.program_start:03X}"
            )
        end = self.program_start + len(rom)
        self.data[self.program_start : end] = rom
        self.program_length = len(rom)
        logger.info(
            "Loaded %d byte program at 0x%03X", len(rom), self.program_start
        )


def read_rom(path: Union[str, Path]) -> bytes:
    """Read a ROM image from disk, wrapping I/O failures as load errors."""
    rom_path = Path(path)
    try:
        return rom_path.read_bytes()
    except OSError as exc:
        raise RomLoadError(f"Cannot read ROM '{rom_path}': {exc}") from exc


__all__ = ["Chip8Memory", "read_rom"]
