"""Canonical emulator state snapshots and diff utilities."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, Optional, Tuple

from .emulator import Chip8Emulator


@dataclass(frozen=True)
class CPUState:
    """Register file, index, program counter and call stack."""

    registers: Dict[str, int]
    index: int
    pc: int
    stack: Tuple[int, ...]
    cycles: int
    awaiting_key: bool


@dataclass(frozen=True)
class MemoryState:
    """Full 4 KiB memory image."""

    data: bytes


@dataclass(frozen=True)
class KeyboardState:
    """Key latched at the last frame boundary."""

    key: Optional[int]


@dataclass(frozen=True)
class TimerState:
    """Delay and sound timer counters."""

    delay: int
    sound: int


@dataclass(frozen=True)
class EmulatorState:
    """Composite immutable snapshot of emulator subsystems."""

    cpu: CPUState
    memory: MemoryState
    keyboard: KeyboardState
    timers: TimerState
    display: bytes


@dataclass(frozen=True)
class FieldDiff:
    """Difference for a single named field."""

    name: str
    before: object
    after: object


@dataclass(frozen=True)
class StateDiff:
    """Aggregated differences between two emulator states."""

    cpu: Tuple[FieldDiff, ...] = field(default_factory=tuple)
    memory: Tuple[FieldDiff, ...] = field(default_factory=tuple)
    keyboard: Tuple[FieldDiff, ...] = field(default_factory=tuple)
    timers: Tuple[FieldDiff, ...] = field(default_factory=tuple)
    display_changed: bool = False

    def is_empty(self) -> bool:
        """Return True when no differences were recorded."""

        return (
            not self.cpu
            and not self.memory
            and not self.keyboard
            and not self.timers
            and not self.display_changed
        )


def empty_state_diff() -> StateDiff:
    """Return a reusable empty diff instance."""

    return StateDiff()


def capture_state(emulator: Chip8Emulator) -> EmulatorState:
    """Capture the current emulator state as canonical snapshot."""

    cpu_state = CPUState(
        registers={f"v{i:x}": value for i, value in enumerate(emulator.registers)},
        index=emulator.index,
        pc=emulator.pc,
        stack=tuple(emulator.stack),
        cycles=emulator.cycle_count,
        awaiting_key=emulator.awaiting_key,
    )
    return EmulatorState(
        cpu=cpu_state,
        memory=MemoryState(data=bytes(emulator.memory.data)),
        keyboard=KeyboardState(key=emulator.keypad.key),
        timers=TimerState(delay=emulator.delay_timer, sound=emulator.sound_timer),
        display=emulator.display.to_bytes(),
    )


def diff_states(before: Optional[EmulatorState], after: EmulatorState) -> StateDiff:
    """Compute structured differences between two emulator states."""

    if before is None:
        return empty_state_diff()

    return StateDiff(
        cpu=_diff_cpu(before.cpu, after.cpu),
        memory=_diff_memory(before.memory, after.memory),
        keyboard=_diff_fields(before.keyboard, after.keyboard, ("key",)),
        timers=_diff_fields(before.timers, after.timers, ("delay", "sound")),
        display_changed=before.display != after.display,
    )


def _diff_cpu(before: CPUState, after: CPUState) -> Tuple[FieldDiff, ...]:
    diffs: list[FieldDiff] = []
    diffs.extend(_diff_mapping("registers", before.registers, after.registers))
    diffs.extend(
        _diff_fields(before, after, ("index", "pc", "stack", "cycles", "awaiting_key"))
    )
    return tuple(diffs)


def _diff_memory(before: MemoryState, after: MemoryState) -> Tuple[FieldDiff, ...]:
    diffs: list[FieldDiff] = []
    if len(before.data) != len(after.data):
        diffs.append(FieldDiff("size", len(before.data), len(after.data)))
        return tuple(diffs)
    for address, (previous, current) in enumerate(zip(before.data, after.data)):
        if previous != current:
            diffs.append(FieldDiff(f"0x{address:03X}", previous, current))
    return tuple(diffs)


def _diff_fields(before: object, after: object, names: Iterable[str]) -> Tuple[FieldDiff, ...]:
    diffs: list[FieldDiff] = []
    for name in names:
        previous = getattr(before, name)
        current = getattr(after, name)
        if previous != current:
            diffs.append(FieldDiff(name, previous, current))
    return tuple(diffs)


def _diff_mapping(
    prefix: str, before: Dict[str, int], after: Dict[str, int]
) -> Iterable[FieldDiff]:
    for key in sorted(set(before.keys()) | set(after.keys())):
        previous = before.get(key)
        current = after.get(key)
        if previous != current:
            yield FieldDiff(f"{prefix}.{key}", previous, current)


__all__ = [
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
