"""Tests for the XOR framebuffer."""

import numpy as np
import pytest

from .framebuffer import Framebuffer


def test_draw_sprite_sets_pixels_msb_first() -> None:
    fb = Framebuffer()

    collision = fb.draw_sprite(10, 5, [0b10100000])

    assert not collision
    assert list(fb.pixels[5, 10:13]) == [1, 0, 1]
    assert fb.pixels.sum() == 2


def test_redraw_erases_and_reports_collision() -> None:
    fb = Framebuffer()
    fb.draw_sprite(0, 0, [0xFF, 0x81])

    assert fb.draw_sprite(0, 0, [0xFF, 0x81])
    assert not fb.pixels.any()


def test_partial_overlap_collision() -> None:
    fb = Framebuffer()
    fb.draw_sprite(0, 0, [0x80])

    assert fb.draw_sprite(0, 0, [0xC0])
    assert fb.pixels[0, 0] == 0
    assert fb.pixels[0, 1] == 1


def test_sprite_wraps_both_axes() -> None:
    fb = Framebuffer()
    fb.draw_sprite(63, 31, [0xC0, 0xC0])

    lit = {(x, y) for y, x in zip(*np.nonzero(fb.pixels))}
    assert lit == {(63, 31), (0, 31), (63, 0), (0, 0)}


def test_clear() -> None:
    fb = Framebuffer()
    fb.draw_sprite(0, 0, [0xFF])
    fb.clear()

    assert not fb.pixels.any()


def test_view_is_read_only_and_live() -> None:
    fb = Framebuffer()
    view = fb.view()

    with pytest.raises(ValueError):
        view[0, 0] = 1

    fb.draw_sprite(0, 0, [0x80])
    assert view[0, 0] == 1
    assert fb.pixels.flags.writeable


def test_to_ascii_and_bytes() -> None:
    fb = Framebuffer(width=4, height=2)
    fb.draw_sprite(1, 1, [0x80])

    assert fb.to_ascii() == "....\n.#.."
    assert fb.to_bytes() == bytes([0, 0, 0, 0, 0, 1, 0, 0])
