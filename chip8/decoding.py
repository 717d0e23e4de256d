"""Opcode field extraction.

Every CHIP-8 instruction is one big-endian 16-bit word. The helpers below
pull out the fields the interpreter dispatches on::

    F X Y N      first, second, third and fourth nibble
        N N      low byte (immediate)
      N N N      low twelve bits (address)

They are total: any 16-bit value decodes without error.
"""

from __future__ import annotations

from dataclasses import dataclass


def first_nibble(word: int) -> int:
    return (word >> 12) & 0xF


def second_nibble(word: int) -> int:
    return (word >> 8) & 0xF


def third_nibble(word: int) -> int:
    return (word >> 4) & 0xF


def fourth_nibble(word: int) -> int:
    return word & 0xF


def lower_byte(word: int) -> int:
    return word & 0xFF


def lower_three(word: int) -> int:
    return word & 0xFFF


def compose(kind: int, x: int = 0, y: int = 0, n: int = 0) -> int:
    """Build a word from four nibbles (inverse of the extractors)."""

    return ((kind & 0xF) << 12) | ((x & 0xF) << 8) | ((y & 0xF) << 4) | (n & 0xF)


@dataclass(frozen=True)
class Opcode:
    """All operand views of a single instruction word."""

    word: int
    kind: int
    x: int
    y: int
    n: int
    nn: int
    nnn: int

    def __str__(self) -> str:
        return f"{self.word:04X}"


def decode(word: int) -> Opcode:
    """Split ``word`` into every field at once.

    ``x`` and ``y`` are register indices into V0..VF.
    """

    word &= 0xFFFF
    return Opcode(
        word=word,
        kind=first_nibble(word),
        x=second_nibble(word),
        y=third_nibble(word),
        n=fourth_nibble(word),
        nn=lower_byte(word),
        nnn=lower_three(word),
    )


__all__ = [
    "Opcode",
    "compose",
    "decode",
    "first_nibble",
    "second_nibble",
    "third_nibble",
    "fourth_nibble",
    "lower_byte",
    "lower_three",
]
