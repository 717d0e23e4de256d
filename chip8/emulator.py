"""CHIP-8 virtual machine: state ownership and the fetch/decode/execute cycle."""

from __future__ import annotations

import logging
import random
from collections import deque
from typing import Callable, Deque, Dict, List, Optional, Tuple

import numpy as np

from .config import MachineConfig
from .constants import FLAG_REGISTER, FONT_GLYPH_HEIGHT, NUM_REGISTERS
from .decoding import Opcode, decode
from .disasm import disassemble, disassemble_history
from .display import Framebuffer
from .errors import (
    StackOverflowError,
    StackUnderflowError,
    UnknownOpcodeError,
)
from .keyboard import KeypadLatch
from .memory import Chip8Memory

logger = logging.getLogger(__name__)

# A handler returns the next PC, or None to fall through to PC + 2.
Handler = Callable[[Opcode], Optional[int]]

INSTRUCTION_HISTORY_LIMIT = 100


class Chip8Emulator:
    """Single CHIP-8 machine instance.

    The emulator exclusively owns memory, registers, the call stack, timers,
    the keypad latch and the framebuffer. Two operations mutate it from the
    outside: :meth:`cycle` (one instruction) and :meth:`decay_timers` (one
    60 Hz tick). :meth:`set_key` refreshes the keypad latch between batches.
    """

    def __init__(
        self,
        config: Optional[MachineConfig] = None,
        *,
        rng: Optional[random.Random] = None,
    ):
        self.config = config or MachineConfig()
        self.memory = Chip8Memory(
            self.config.memory_size,
            font_offset=self.config.font_offset,
            program_start=self.config.program_start,
        )
        self.display = Framebuffer()
        self.keypad = KeypadLatch()
        self.trace_enabled = self.config.trace_instructions
        self._rng = rng or random.Random(self.config.rng_seed)
        self._rom = b""

        self.registers = bytearray(NUM_REGISTERS)
        self.index = 0
        self.pc = self.config.program_start
        self.stack: List[int] = []
        self.delay_timer = 0
        self.sound_timer = 0
        self.cycle_count = 0
        self._key_wait_register: Optional[int] = None
        self.instruction_history: Deque[Tuple[int, int]] = deque(
            maxlen=INSTRUCTION_HISTORY_LIMIT
        )

        self._handlers: Dict[int, Handler] = {
            0x0: self._op_system,
            0x1: self._op_jump,
            0x2: self._op_call,
            0x3: self._op_skip_eq_imm,
            0x4: self._op_skip_ne_imm,
            0x5: self._op_skip_eq_reg,
            0x6: self._op_load_imm,
            0x7: self._op_add_imm,
            0x8: self._op_alu,
            0x9: self._op_skip_ne_reg,
            0xA: self._op_load_index,
            0xB: self._op_jump_offset,
            0xC: self._op_random,
            0xD: self._op_draw,
            0xE: self._op_keys,
            0xF: self._op_misc,
        }
        self._alu_handlers: Dict[int, Callable[[int, int], None]] = {
            0x0: self._alu_load,
            0x1: self._alu_or,
            0x2: self._alu_and,
            0x3: self._alu_xor,
            0x4: self._alu_add,
            0x5: self._alu_sub,
            0x6: self._alu_shr,
            0x7: self._alu_subn,
            0xE: self._alu_shl,
        }
        self._misc_handlers: Dict[int, Handler] = {
            0x07: self._op_read_delay,
            0x0A: self._op_wait_key,
            0x15: self._op_set_delay,
            0x18: self._op_set_sound,
            0x1E: self._op_add_index,
            0x29: self._op_font_char,
            0x33: self._op_store_bcd,
            0x55: self._op_store_registers,
            0x65: self._op_load_registers,
        }

    # ------------------------------------------------------------------ #
    # Lifecycle
    # ------------------------------------------------------------------ #

    def load_rom(self, rom: bytes) -> None:
        """Copy a ROM image into the program region."""
        self.memory.load_program(rom)
        self._rom = bytes(rom)

    def reset(self) -> None:
        """Return to power-on state with the last loaded ROM in place."""
        self.memory.reset()
        if self._rom:
            self.memory.load_program(self._rom)
        self.display.clear()
        self.keypad.clear()
        self.registers[:] = bytes(NUM_REGISTERS)
        self.index = 0
        self.pc = self.config.program_start
        self.stack.clear()
        self.delay_timer = 0
        self.sound_timer = 0
        self.cycle_count = 0
        self._key_wait_register = None
        self.instruction_history.clear()
        logger.debug("Emulator reset")

    # ------------------------------------------------------------------ #
    # Public API used by the scheduler and tests
    # ------------------------------------------------------------------ #

    @property
    def framebuffer(self) -> np.ndarray:
        return self.display.view()

    @property
    def stack_pointer(self) -> int:
        return len(self.stack)

    @property
    def sound_active(self) -> bool:
        return self.sound_timer > 0

    @property
    def awaiting_key(self) -> bool:
        """True while an ``FX0A`` is parked waiting for a keypress."""
        return self._key_wait_register is not None

    def set_key(self, code: Optional[int]) -> None:
        self.keypad.latch(code)

    def decay_timers(self) -> None:
        """Apply one 60 Hz tick; both timers saturate at zero."""
        if self.delay_timer > 0:
            self.delay_timer -= 1
        if self.sound_timer > 0:
            self.sound_timer -= 1

    def run_cycles(self, count: int) -> None:
        for _ in range(count):
            self.cycle()

    def cycle(self) -> None:
        """Execute exactly one instruction (or one key-wait poll)."""
        pc = self.pc
        self.cycle_count += 1

        if self._key_wait_register is not None:
            key = self.keypad.key
            if key is None:
                return
            self.registers[self._key_wait_register] = key
            logger.debug("Key 0x%X released FX0A wait at 0x%03X", key, pc)
            self._key_wait_register = None
            self.pc = pc + 2
            return

        word = self.memory.read_word(pc)
        self.instruction_history.append((pc, word))
        if self.trace_enabled:
            logger.debug("0x%03X: %04X  %s", pc, word, disassemble(word))

        op = decode(word)
        next_pc = self._handlers[op.kind](op)
        self.pc = pc + 2 if next_pc is None else next_pc

    def history_listing(self) -> List[str]:
        """Disassembled recent instructions, oldest first."""
        return disassemble_history(self.instruction_history)

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #

    def _skip_if(self, condition: bool) -> Optional[int]:
        return self.pc + 4 if condition else None

    def _unknown(self, op: Opcode) -> Optional[int]:
        raise UnknownOpcodeError(op.word, self.pc)

    # ------------------------------------------------------------------ #
    # Instruction families
    # ------------------------------------------------------------------ #

    def _op_system(self, op: Opcode) -> Optional[int]:
        if op.word == 0x00E0:
            self.display.clear()
            return None
        if op.word == 0x00EE:
            if not self.stack:
                raise StackUnderflowError(op.word, self.pc)
            return self.stack.pop()
        # 0NNN calls native RCA 1802 code; there is nothing to run.
        logger.debug("Ignoring machine code call 0x%03X at 0x%03X", op.nnn, self.pc)
        return None

    def _op_jump(self, op: Opcode) -> Optional[int]:
        return op.nnn

    def _op_call(self, op: Opcode) -> Optional[int]:
        depth = self.config.stack_depth
        if len(self.stack) >= depth:
            raise StackOverflowError(op.word, self.pc, depth)
        self.stack.append(self.pc + 2)
        return op.nnn

    def _op_skip_eq_imm(self, op: Opcode) -> Optional[int]:
        return self._skip_if(self.registers[op.x] == op.nn)

    def _op_skip_ne_imm(self, op: Opcode) -> Optional[int]:
        return self._skip_if(self.registers[op.x] != op.nn)

    def _op_skip_eq_reg(self, op: Opcode) -> Optional[int]:
        if op.n != 0:
            return self._unknown(op)
        return self._skip_if(self.registers[op.x] == self.registers[op.y])

    def _op_skip_ne_reg(self, op: Opcode) -> Optional[int]:
        if op.n != 0:
            return self._unknown(op)
        return self._skip_if(self.registers[op.x] != self.registers[op.y])

    def _op_load_imm(self, op: Opcode) -> Optional[int]:
        self.registers[op.x] = op.nn
        return None

    def _op_add_imm(self, op: Opcode) -> Optional[int]:
        # No carry flag for the immediate form.
        self.registers[op.x] = (self.registers[op.x] + op.nn) & 0xFF
        return None

    def _op_alu(self, op: Opcode) -> Optional[int]:
        handler = self._alu_handlers.get(op.n)
        if handler is None:
            return self._unknown(op)
        handler(op.x, op.y)
        return None

    def _op_load_index(self, op: Opcode) -> Optional[int]:
        self.index = op.nnn
        return None

    def _op_jump_offset(self, op: Opcode) -> Optional[int]:
        return op.nnn + self.registers[0]

    def _op_random(self, op: Opcode) -> Optional[int]:
        self.registers[op.x] = self._rng.randrange(256) & op.nn
        return None

    def _op_draw(self, op: Opcode) -> Optional[int]:
        rows = self.memory.read_block(self.index, op.n, opcode=op.word, pc=self.pc)
        collision = self.display.draw_sprite(
            self.registers[op.x], self.registers[op.y], rows
        )
        self.registers[FLAG_REGISTER] = 1 if collision else 0
        return None

    def _op_keys(self, op: Opcode) -> Optional[int]:
        pressed = self.keypad.is_pressed(self.registers[op.x])
        if op.nn == 0x9E:
            return self._skip_if(pressed)
        if op.nn == 0xA1:
            return self._skip_if(not pressed)
        return self._unknown(op)

    def _op_misc(self, op: Opcode) -> Optional[int]:
        handler = self._misc_handlers.get(op.nn)
        if handler is None:
            return self._unknown(op)
        return handler(op)

    # ------------------------------------------------------------------ #
    # 8XYN arithmetic/logic; VF is written before VX
    # ------------------------------------------------------------------ #

    def _alu_load(self, x: int, y: int) -> None:
        self.registers[x] = self.registers[y]

    def _alu_or(self, x: int, y: int) -> None:
        self.registers[x] |= self.registers[y]

    def _alu_and(self, x: int, y: int) -> None:
        self.registers[x] &= self.registers[y]

    def _alu_xor(self, x: int, y: int) -> None:
        self.registers[x] ^= self.registers[y]

    def _alu_add(self, x: int, y: int) -> None:
        total = self.registers[x] + self.registers[y]
        self.registers[FLAG_REGISTER] = 1 if total > 0xFF else 0
        self.registers[x] = total & 0xFF

    def _alu_sub(self, x: int, y: int) -> None:
        vx, vy = self.registers[x], self.registers[y]
        self.registers[FLAG_REGISTER] = 1 if vx >= vy else 0
        self.registers[x] = (vx - vy) & 0xFF

    def _alu_subn(self, x: int, y: int) -> None:
        vx, vy = self.registers[x], self.registers[y]
        self.registers[FLAG_REGISTER] = 1 if vy >= vx else 0
        self.registers[x] = (vy - vx) & 0xFF

    def _alu_shr(self, x: int, y: int) -> None:
        vx = self.registers[x]
        self.registers[FLAG_REGISTER] = vx & 0x01
        self.registers[x] = vx >> 1

    def _alu_shl(self, x: int, y: int) -> None:
        vx = self.registers[x]
        self.registers[FLAG_REGISTER] = (vx >> 7) & 0x01
        self.registers[x] = (vx << 1) & 0xFF

    # ------------------------------------------------------------------ #
    # FXNN
    # ------------------------------------------------------------------ #

    def _op_read_delay(self, op: Opcode) -> Optional[int]:
        self.registers[op.x] = self.delay_timer
        return None

    def _op_wait_key(self, op: Opcode) -> Optional[int]:
        key = self.keypad.key
        if key is not None:
            self.registers[op.x] = key
            return None
        self._key_wait_register = op.x
        logger.debug("Waiting for key into V%X at 0x%03X", op.x, self.pc)
        return self.pc

    def _op_set_delay(self, op: Opcode) -> Optional[int]:
        self.delay_timer = self.registers[op.x]
        return None

    def _op_set_sound(self, op: Opcode) -> Optional[int]:
        self.sound_timer = self.registers[op.x]
        return None

    def _op_add_index(self, op: Opcode) -> Optional[int]:
        self.index = (self.index + self.registers[op.x]) & 0xFFFF
        return None

    def _op_font_char(self, op: Opcode) -> Optional[int]:
        self.index = self.config.font_offset + self.registers[op.x] * FONT_GLYPH_HEIGHT
        return None

    def _op_store_bcd(self, op: Opcode) -> Optional[int]:
        value = self.registers[op.x]
        digits = (value // 100, (value // 10) % 10, value % 10)
        self.memory.write_block(self.index, digits, opcode=op.word, pc=self.pc)
        return None

    def _op_store_registers(self, op: Opcode) -> Optional[int]:
        self.memory.write_block(
            self.index, self.registers[: op.x + 1], opcode=op.word, pc=self.pc
        )
        return None

    def _op_load_registers(self, op: Opcode) -> Optional[int]:
        block = self.memory.read_block(
            self.index, op.x + 1, opcode=op.word, pc=self.pc
        )
        self.registers[: op.x + 1] = block
        return None


__all__ = ["Chip8Emulator", "INSTRUCTION_HISTORY_LIMIT"]
