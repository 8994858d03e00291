"""Dominant color and palette extraction with modified median cut quantization."""
from __future__ import annotations

import logging

from .color_map import ColorMap, PaletteEntry
from .errors import EmptyImageError, InvalidArgumentError, PaletteError, QuantizationError
from .image_source import PillowPixelSource, PixelSource, load_image
from .sampling import Area
from .thief import get_color, get_palette

__all__ = [
    "Area",
    "ColorMap",
    "EmptyImageError",
    "InvalidArgumentError",
    "PaletteEntry",
    "PaletteError",
    "PillowPixelSource",
    "PixelSource",
    "QuantizationError",
    "get_color",
    "get_palette",
    "load_image",
]

logging.getLogger(__name__).addHandler(logging.NullHandler())
