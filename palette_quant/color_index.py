"""Reduced-precision packing of RGB triples into histogram keys."""
from __future__ import annotations

from typing import Tuple

ColorTuple = Tuple[int, int, int]

SIGBITS = 5
RSHIFT = 8 - SIGBITS


def get_color_index(red: int, green: int, blue: int, sig_bits: int = SIGBITS) -> int:
    """Zero the non-significant bits of each channel and pack them as ``0xRRGGBB``."""

    mask = 255 ^ ((1 << (8 - sig_bits)) - 1)
    return ((red & mask) << 16) | ((green & mask) << 8) | (blue & mask)


def get_colors_from_index(index: int) -> ColorTuple:
    return (index >> 16) & 255, (index >> 8) & 255, index & 255
