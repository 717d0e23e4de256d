"""Hex keypad model: host key layout and the per-frame key latch."""

from __future__ import annotations

from typing import Dict, Optional

from .constants import NUM_KEYS

# The COSMAC VIP keypad
#
#     1 2 3 C
#     4 5 6 D
#     7 8 9 E
#     A 0 B F
#
# is mapped onto the left block of a QWERTY keyboard:
#
#     1 2 3 4
#     Q W E R
#     A S D F
#     Z X C V
# fmt: off
KEY_LAYOUT: Dict[str, int] = {
    "1": 0x1, "2": 0x2, "3": 0x3, "4": 0xC,
    "q": 0x4, "w": 0x5, "e": 0x6, "r": 0xD,
    "a": 0x7, "s": 0x8, "d": 0x9, "f": 0xE,
    "z": 0xA, "x": 0x0, "c": 0xB, "v": 0xF,
}
# fmt: on


def validate_key(code: Optional[int]) -> Optional[int]:
    if code is None:
        return None
    if not (0 <= code < NUM_KEYS):
        raise ValueError(f"Key code out of range: {code!r}")
    return code


class KeypadLatch:
    """Last key observed at a frame boundary, or ``None`` for no key.

    The pacer refreshes the latch once per frame; instructions only ever see
    that sampled value.
    """

    def __init__(self) -> None:
        self._key: Optional[int] = None

    @property
    def key(self) -> Optional[int]:
        return self._key

    def latch(self, code: Optional[int]) -> None:
        self._key = validate_key(code)

    def clear(self) -> None:
        self._key = None

    def is_pressed(self, code: int) -> bool:
        return self._key is not None and self._key == code


__all__ = ["KEY_LAYOUT", "KeypadLatch", "validate_key"]
