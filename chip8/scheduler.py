"""Frame-paced run loop for the CHIP-8 emulator."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Callable, Optional

from .config import MachineConfig
from .constants import SLEEP_GRANULARITY_SECS
from .emulator import Chip8Emulator
from .peripherals import Periphery

logger = logging.getLogger(__name__)

Clock = Callable[[], float]
Sleeper = Callable[[float], None]


@dataclass
class Deadline:
    """Recurring deadline on a monotonic clock."""

    interval: float
    due: float = 0.0

    def elapsed(self, now: float) -> bool:
        return now >= self.due

    def advance(self, now: float) -> None:
        """Move to the next slot, re-anchoring when more than one slot behind."""

        self.due += self.interval
        if self.due < now:
            self.due = now + self.interval


@dataclass
class FrameScheduler:
    """Cooperative pacer tying CPU cycles, timers and frames together.

    Each frame runs up to ``cycles_per_frame`` instructions back to back.
    Once the budget is spent the scheduler samples the keypad and matches
    the tone to the sound timer. It then ticks the timers when their 60 Hz
    deadline has passed, renders when the frame deadline has passed (which
    also refills the budget), and sleeps until just short of the next frame
    deadline. The boundary work repeats while the frame deadline is pending.
    """

    emulator: Chip8Emulator
    periphery: Periphery
    config: MachineConfig = field(default_factory=MachineConfig)
    clock: Clock = time.monotonic
    sleep: Sleeper = time.sleep

    def __post_init__(self) -> None:
        self.cycles_per_frame = self.config.cycles_per_frame
        self.frames_rendered = 0
        self.timer_ticks = 0
        self.cycles_in_frame = 0
        self._tone_on = False
        now = self.clock()
        self._frame = Deadline(self.config.frame_interval, now)
        self._timer = Deadline(self.config.timer_interval, now)

    @property
    def next_frame_at(self) -> float:
        return self._frame.due

    def run(
        self, *, duration: Optional[float] = None, max_frames: Optional[int] = None
    ) -> None:
        """Drive the emulator; with no limits this never returns.

        ``duration`` is measured on the scheduler clock from the start of
        this call; ``max_frames`` counts renders.
        """

        start = self.clock()
        logger.debug(
            "Run loop starting: %d cycles/frame, duration=%s, max_frames=%s",
            self.cycles_per_frame,
            duration,
            max_frames,
        )
        while True:
            if self.cycles_in_frame < self.cycles_per_frame:
                self.emulator.cycle()
                self.cycles_in_frame += 1
                continue

            self.end_of_batch()

            if max_frames is not None and self.frames_rendered >= max_frames:
                break
            if duration is not None and self.clock() - start >= duration:
                break

    def end_of_batch(self) -> None:
        """Frame-boundary work once the cycle budget is exhausted."""

        self.emulator.set_key(self.periphery.poll_input())
        self._sync_tone()
        # Timers and the frame share one clock sample per batch.
        now = self.clock()
        self.tick_timers(now)
        self.tick_frame(now)
        self.sleep_if_needed()

    def tick_timers(self, now: float) -> bool:
        if not self._timer.elapsed(now):
            return False
        self.emulator.decay_timers()
        self.timer_ticks += 1
        self._timer.advance(now)
        return True

    def tick_frame(self, now: float) -> bool:
        if not self._frame.elapsed(now):
            return False
        self.cycles_in_frame = 0
        self.periphery.render(self.emulator.framebuffer)
        self.frames_rendered += 1
        self._frame.advance(now)
        return True

    def sleep_if_needed(self) -> None:
        # Undersleep by one granule so a coarse host timer never overshoots.
        remaining = self._frame.due - self.clock()
        if remaining > SLEEP_GRANULARITY_SECS:
            self.sleep(remaining - SLEEP_GRANULARITY_SECS)

    def _sync_tone(self) -> None:
        active = self.emulator.sound_active
        if active and not self._tone_on:
            self.periphery.play_tone()
        elif not active and self._tone_on:
            self.periphery.stop_tone()
        self._tone_on = active


__all__ = ["Deadline", "FrameScheduler"]
