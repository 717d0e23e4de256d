"""Render CHIP-8 opcodes as assembler-style text.

Used for instruction traces and for the history printed alongside fatal
execution errors. Unrecognised words render as ``DW 0xNNNN``.
"""

from __future__ import annotations

from typing import Callable, Dict, Iterable, List, Tuple

from .decoding import Opcode, decode

_ALU_MNEMONICS: Dict[int, str] = {
    0x0: "LD V{x:X}, V{y:X}",
    0x1: "OR V{x:X}, V{y:X}",
    0x2: "AND V{x:X}, V{y:X}",
    0x3: "XOR V{x:X}, V{y:X}",
    0x4: "ADD V{x:X}, V{y:X}",
    0x5: "SUB V{x:X}, V{y:X}",
    0x6: "SHR V{x:X}",
    0x7: "SUBN V{x:X}, V{y:X}",
    0xE: "SHL V{x:X}",
}

_MISC_MNEMONICS: Dict[int, str] = {
    0x07: "LD V{x:X}, DT",
    0x0A: "LD V{x:X}, K",
    0x15: "LD DT, V{x:X}",
    0x18: "LD ST, V{x:X}",
    0x1E: "ADD I, V{x:X}",
    0x29: "LD F, V{x:X}",
    0x33: "LD B, V{x:X}",
    0x55: "LD [I], V0-V{x:X}",
    0x65: "LD V0-V{x:X}, [I]",
}


def _data_word(op: Opcode) -> str:
    return f"DW 0x{op.word:04X}"


def _sys(op: Opcode) -> str:
    if op.word == 0x00E0:
        return "CLS"
    if op.word == 0x00EE:
        return "RET"
    return f"SYS 0x{op.nnn:03X}"


def _alu(op: Opcode) -> str:
    template = _ALU_MNEMONICS.get(op.n)
    if template is None:
        return _data_word(op)
    return template.format(x=op.x, y=op.y)


def _reg_compare(mnemonic: str) -> Callable[[Opcode], str]:
    def render(op: Opcode) -> str:
        if op.n != 0:
            return _data_word(op)
        return f"{mnemonic} V{op.x:X}, V{op.y:X}"

    return render


def _keys(op: Opcode) -> str:
    if op.nn == 0x9E:
        return f"SKP V{op.x:X}"
    if op.nn == 0xA1:
        return f"SKNP V{op.x:X}"
    return _data_word(op)


def _misc(op: Opcode) -> str:
    template = _MISC_MNEMONICS.get(op.nn)
    if template is None:
        return _data_word(op)
    return template.format(x=op.x)


_RENDERERS: Dict[int, Callable[[Opcode], str]] = {
    0x0: _sys,
    0x1: lambda op: f"JP 0x{op.nnn:03X}",
    0x2: lambda op: f"CALL 0x{op.nnn:03X}",
    0x3: lambda op: f"SE V{op.x:X}, 0x{op.nn:02X}",
    0x4: lambda op: f"SNE V{op.x:X}, 0x{op.nn:02X}",
    0x5: _reg_compare("SE"),
    0x6: lambda op: f"LD V{op.x:X}, 0x{op.nn:02X}",
    0x7: lambda op: f"ADD V{op.x:X}, 0x{op.nn:02X}",
    0x8: _alu,
    0x9: _reg_compare("SNE"),
    0xA: lambda op: f"LD I, 0x{op.nnn:03X}",
    0xB: lambda op: f"JP V0, 0x{op.nnn:03X}",
    0xC: lambda op: f"RND V{op.x:X}, 0x{op.nn:02X}",
    0xD: lambda op: f"DRW V{op.x:X}, V{op.y:X}, {op.n}",
    0xE: _keys,
    0xF: _misc,
}


def disassemble(word: int) -> str:
    """Return the mnemonic for a single 16-bit instruction word."""

    op = decode(word)
    return _RENDERERS[op.kind](op)


def disassemble_history(entries: Iterable[Tuple[int, int]]) -> List[str]:
    """Format ``(pc, opcode)`` pairs as listing lines."""

    return [
        f"0x{pc:03X}: {opcode:04X}  {disassemble(opcode)}" for pc, opcode in entries
    ]


__all__ = ["disassemble", "disassemble_history"]
