"""Exception hierarchy for the CHIP-8 emulator.

Two families exist: load errors raised before the run loop starts, and
execution errors raised from inside a cycle. Neither is recoverable; the
CLI reports them and exits.
"""

from __future__ import annotations

from typing import Optional, Tuple


class Chip8Error(Exception):
    """Base class for every emulator failure."""


class RomLoadError(Chip8Error, ValueError):
    """ROM image could not be read or does not fit into memory."""


class ExecutionError(Chip8Error, RuntimeError):
    """Fatal condition hit while executing an instruction."""

    # Disassembled recent instructions, filled in by the runner.
    history: Tuple[str, ...] = ()

    def __init__(self, message: str, *, opcode: Optional[int], pc: int):
        self.opcode = opcode
        self.pc = pc
        if opcode is None:
            detail = f"at address 0x{pc:03X}"
        else:
            detail = f"opcode 0x{opcode:04X} at address 0x{pc:03X}"
        super().__init__(f"{message} ({detail})")


class UnknownOpcodeError(ExecutionError):
    def __init__(self, opcode: int, pc: int):
        super().__init__("Unknown opcode", opcode=opcode, pc=pc)


class StackOverflowError(ExecutionError):
    def __init__(self, opcode: int, pc: int, depth: int):
        self.depth = depth
        super().__init__(
            f"Call stack overflow (depth {depth})", opcode=opcode, pc=pc
        )


class StackUnderflowError(ExecutionError):
    def __init__(self, opcode: int, pc: int):
        super().__init__("Return with empty call stack", opcode=opcode, pc=pc)


class MemoryAccessError(ExecutionError):
    """An instruction computed an address outside the 4 KiB space."""

    def __init__(self, address: int, *, opcode: Optional[int], pc: int):
        self.address = address
        super().__init__(
            f"Memory access out of range: 0x{address:X}", opcode=opcode, pc=pc
        )


__all__ = [
    "Chip8Error",
    "RomLoadError",
    "ExecutionError",
    "UnknownOpcodeError",
    "StackOverflowError",
    "StackUnderflowError",
    "MemoryAccessError",
]
