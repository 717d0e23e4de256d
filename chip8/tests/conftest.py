"""Shared pytest fixtures for the CHIP-8 tests."""

from __future__ import annotations

from typing import Callable, Iterable, Optional

import pytest

from chip8 import Chip8Emulator, MachineConfig


class FakeClock:
    """Monotonic clock that advances a little on every read and on sleep."""

    def __init__(self, start: float = 0.0, tick: float = 1e-6) -> None:
        self.now = start
        self.tick = tick
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        self.now += self.tick
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


def program(*words: int) -> bytes:
    """Assemble big-endian instruction words into ROM bytes."""
    return b"".join(word.to_bytes(2, "big") for word in words)


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def make_emulator() -> Callable[..., Chip8Emulator]:
    def _make(
        rom: Iterable[int] | bytes = b"", config: Optional[MachineConfig] = None
    ) -> Chip8Emulator:
        emu = Chip8Emulator(config or MachineConfig(rng_seed=1234))
        data = rom if isinstance(rom, bytes) else program(*rom)
        if data:
            emu.load_rom(data)
        return emu

    return _make


@pytest.fixture
def assemble() -> Callable[..., bytes]:
    return program
