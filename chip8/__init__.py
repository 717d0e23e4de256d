"""CHIP-8 emulator package."""

from .config import MachineConfig
from .emulator import Chip8Emulator
from .errors import (
    Chip8Error,
    ExecutionError,
    MemoryAccessError,
    RomLoadError,
    StackOverflowError,
    StackUnderflowError,
    UnknownOpcodeError,
)
from .scheduler import FrameScheduler
from .state_model import (
    CPUState,
    EmulatorState,
    FieldDiff,
    KeyboardState,
    MemoryState,
    StateDiff,
    TimerState,
    capture_state,
    diff_states,
    empty_state_diff,
)

__version__ = "0.1.0"

__all__ = [
    "Chip8Emulator",
    "FrameScheduler",
    "MachineConfig",
    "Chip8Error",
    "ExecutionError",
    "MemoryAccessError",
    "RomLoadError",
    "StackOverflowError",
    "StackUnderflowError",
    "UnknownOpcodeError",
    "CPUState",
    "MemoryState",
    "KeyboardState",
    "TimerState",
    "EmulatorState",
    "FieldDiff",
    "StateDiff",
    "capture_state",
    "diff_states",
    "empty_state_diff",
]
