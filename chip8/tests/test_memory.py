from __future__ import annotations

import pytest

from chip8 import MemoryAccessError, RomLoadError
from chip8.constants import FONT_OFFSET, MAX_ROM_SIZE, MEMORY_SIZE, PROGRAM_START
from chip8.display.font import FONTSET
from chip8.memory import Chip8Memory, read_rom


def test_fontset_loaded_at_offset() -> None:
    mem = Chip8Memory()

    assert bytes(mem.data[FONT_OFFSET : FONT_OFFSET + 80]) == bytes(FONTSET)
    assert mem.data[FONT_OFFSET] == 0xF0
    assert not any(mem.data[PROGRAM_START:])


def test_load_program_copies_verbatim() -> None:
    mem = Chip8Memory()
    mem.load_program(b"\x12\x34\x56")

    assert bytes(mem.data[PROGRAM_START : PROGRAM_START + 3]) == b"\x12\x34\x56"
    assert mem.program_length == 3
    assert bytes(mem.data[FONT_OFFSET : FONT_OFFSET + 80]) == bytes(FONTSET)


def test_largest_rom_fits() -> None:
    mem = Chip8Memory()
    rom = bytes([0xAB]) * MAX_ROM_SIZE

    mem.load_program(rom)

    assert mem.data[MEMORY_SIZE - 1] == 0xAB
    assert mem.max_program_size == 3584


def test_oversized_rom_rejected() -> None:
    mem = Chip8Memory()

    with pytest.raises(RomLoadError, match="exceeds maximum"):
        mem.load_program(bytes(MAX_ROM_SIZE + 1))


def test_fontset_overlapping_program_rejected() -> None:
    with pytest.raises(ValueError):
        Chip8Memory(font_offset=0x1F0)


def test_reset_discards_program() -> None:
    mem = Chip8Memory()
    mem.load_program(b"\xFF\xFF")
    mem.reset()

    assert mem.data[PROGRAM_START] == 0
    assert mem.program_length == 0
    assert mem.data[FONT_OFFSET] == 0xF0


def test_read_word_is_big_endian() -> None:
    mem = Chip8Memory()
    mem.load_program(b"\xA2\x2A")

    assert mem.read_word(PROGRAM_START) == 0xA22A


@pytest.mark.parametrize("address", [-1, MEMORY_SIZE, MEMORY_SIZE + 10])
def test_block_access_out_of_range(address: int) -> None:
    mem = Chip8Memory()

    with pytest.raises(MemoryAccessError):
        mem.read_block(address, 1)
    with pytest.raises(MemoryAccessError):
        mem.write_block(address, [1])


def test_word_straddling_end_raises() -> None:
    mem = Chip8Memory()

    with pytest.raises(MemoryAccessError) as excinfo:
        mem.read_word(MEMORY_SIZE - 1)

    assert excinfo.value.address == MEMORY_SIZE
    assert excinfo.value.pc == MEMORY_SIZE - 1


def test_block_access() -> None:
    mem = Chip8Memory()
    mem.write_block(0x300, [1, 2, 0x1FF])

    assert mem.read_block(0x300, 3) == b"\x01\x02\xff"
    assert mem.read_block(0x300, 0) == b""
    with pytest.raises(MemoryAccessError):
        mem.read_block(MEMORY_SIZE - 2, 3, opcode=0xD003, pc=0x200)


def test_read_rom(tmp_path) -> None:
    path = tmp_path / "game.ch8"
    path.write_bytes(b"\x00\xE0")

    assert read_rom(path) == b"\x00\xE0"
    assert read_rom(str(path)) == b"\x00\xE0"


def test_read_rom_missing_file(tmp_path) -> None:
    with pytest.raises(RomLoadError, match="Cannot read ROM"):
        read_rom(tmp_path / "missing.ch8")
