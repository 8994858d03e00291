"""Exceptions raised by palette extraction."""
from __future__ import annotations


class PaletteError(RuntimeError):
    """Raised when palette extraction fails."""


class InvalidArgumentError(PaletteError, ValueError):
    """Raised for out-of-range options or unusable image sources."""


class EmptyImageError(PaletteError):
    """Raised when sampling leaves no usable pixels (blank, transparent or white image)."""


class QuantizationError(PaletteError):
    """Raised when a box cannot be cut although it holds more than one pixel.

    The histogram and the box disagree about where the pixels are. The
    quantizer catches this and stops refining instead of failing the call.
    """
