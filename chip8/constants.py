"""Shared machine constants for the CHIP-8 emulator.

This module centralizes the fixed layout of the virtual machine so the
memory, display and scheduler code agree on sizes and offsets.
"""

# Total addressable memory. Every address computed by an instruction must
# fall inside [0, MEMORY_SIZE - 1].
MEMORY_SIZE = 0x1000  # 4096 bytes

# Programs are loaded here by convention; the region below it is reserved
# for the interpreter and the built-in fontset.
PROGRAM_START = 0x200

# Base address of the hex-digit sprite table (16 glyphs x 5 bytes).
FONT_OFFSET = 0x50
FONT_GLYPH_HEIGHT = 5

# Largest ROM image that fits after the program offset.
MAX_ROM_SIZE = MEMORY_SIZE - PROGRAM_START

# Display geometry (monochrome).
SCREEN_WIDTH = 64
SCREEN_HEIGHT = 32

NUM_REGISTERS = 16
FLAG_REGISTER = 0xF

# Historical interpreters provide 16 return slots.
DEFAULT_STACK_DEPTH = 16

# Pacing defaults: 1 kHz virtual CPU, 60 Hz display and timers.
CPU_FREQUENCY_HZ = 1_000
TARGET_FPS = 60
TIMER_FREQUENCY_HZ = 60

# Coarse sleep granularity assumed for the host timer.
SLEEP_GRANULARITY_SECS = 0.001

# The sixteen keypad keys are numbered 0x0..0xF.
NUM_KEYS = 16
