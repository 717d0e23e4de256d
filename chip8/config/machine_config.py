"""Machine configuration for the CHIP-8 emulator."""

from dataclasses import asdict, dataclass, fields
from typing import Optional
import json

from ..constants import (
    CPU_FREQUENCY_HZ,
    DEFAULT_STACK_DEPTH,
    FONT_OFFSET,
    MEMORY_SIZE,
    PROGRAM_START,
    TARGET_FPS,
    TIMER_FREQUENCY_HZ,
)


@dataclass
class MachineConfig:
    """CHIP-8 machine configuration."""
    name: str = "CHIP-8"
    cpu_frequency: int = CPU_FREQUENCY_HZ
    target_fps: int = TARGET_FPS
    timer_frequency: int = TIMER_FREQUENCY_HZ
    stack_depth: int = DEFAULT_STACK_DEPTH
    memory_size: int = MEMORY_SIZE
    program_start: int = PROGRAM_START
    font_offset: int = FONT_OFFSET
    rng_seed: Optional[int] = None
    trace_instructions: bool = False

    def __post_init__(self):
        for name in ("cpu_frequency", "target_fps", "timer_frequency", "stack_depth"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive, got {getattr(self, name)}")
        if self.cpu_frequency < self.target_fps:
            raise ValueError(
                f"cpu_frequency {self.cpu_frequency} is below target_fps "
                f"{self.target_fps}; no instruction would run per frame"
            )
        if not (0 < self.program_start < self.memory_size):
            raise ValueError(
                f"program_start 0x{self.program_start:X} outside memory of "
                f"{self.memory_size} bytes"
            )

    @property
    def cycles_per_frame(self) -> int:
        """Instructions executed per display frame (truncated)."""
        return self.cpu_frequency // self.target_fps

    @property
    def frame_interval(self) -> float:
        return 1.0 / self.target_fps

    @property
    def timer_interval(self) -> float:
        return 1.0 / self.timer_frequency

    def to_dict(self) -> dict:
        data = asdict(self)
        data["program_start"] = f"0x{self.program_start:03X}"
        data["font_offset"] = f"0x{self.font_offset:03X}"
        return data

    @classmethod
    def from_dict(cls, data: dict) -> 'MachineConfig':
        known = {f.name for f in fields(cls)}
        values = {k: v for k, v in data.items() if k in known}
        for key in ("program_start", "font_offset"):
            if isinstance(values.get(key), str):
                values[key] = int(values[key], 16)
        return cls(**values)

    def save(self, path: str) -> None:
        """Save configuration to JSON file."""
        with open(path, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def load(cls, path: str) -> 'MachineConfig':
        """Load configuration from JSON file."""
        with open(path, 'r') as f:
            data = json.load(f)

        return cls.from_dict(data)
