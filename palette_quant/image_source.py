"""Pillow-backed pixel sources."""
from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Protocol, Tuple, runtime_checkable

from PIL import Image, UnidentifiedImageError

from .errors import InvalidArgumentError


logger = logging.getLogger(__name__)

PixelTuple = Tuple[int, int, int, int]

# Transparency runs from 0 (opaque) to 127 (fully transparent).
MAX_ALPHA = 127


@runtime_checkable
class PixelSource(Protocol):
    """Anything that can report its size and the color of one pixel.

    ``get_pixel`` returns ``(red, green, blue, alpha)`` where alpha is a
    transparency between 0 and :data:`MAX_ALPHA`.
    """

    @property
    def width(self) -> int: ...

    @property
    def height(self) -> int: ...

    def get_pixel(self, x: int, y: int) -> PixelTuple: ...


class PillowPixelSource:
    """Read-only view over an RGBA copy of a Pillow image."""

    def __init__(self, image: Image.Image) -> None:
        self._image = image if image.mode == "RGBA" else image.convert("RGBA")
        self._pixels = self._image.load()

    @property
    def width(self) -> int:
        return self._image.width

    @property
    def height(self) -> int:
        return self._image.height

    def get_pixel(self, x: int, y: int) -> PixelTuple:
        r, g, b, a = self._pixels[x, y]
        return r, g, b, (255 - a) >> 1


def _open(fp) -> Image.Image:
    try:
        with Image.open(fp) as img:
            return img.convert("RGBA")
    except (UnidentifiedImageError, OSError) as exc:
        raise InvalidArgumentError(f"Unable to read image: {exc}") from exc


def load_image(source) -> PixelSource:
    """Return a pixel source for ``source``.

    Accepts an existing :class:`PixelSource`, a ``PIL.Image.Image`` (left
    untouched), a path, raw encoded bytes or a binary file object.
    """

    if isinstance(source, PixelSource):
        return source
    if isinstance(source, Image.Image):
        return PillowPixelSource(source.convert("RGBA"))
    if isinstance(source, (str, Path)):
        path = Path(source)
        if not path.is_file():
            raise InvalidArgumentError(f"Image file not found: {path}")
        logger.debug("Loading image path=%s", path)
        return PillowPixelSource(_open(path))
    if isinstance(source, (bytes, bytearray, memoryview)):
        logger.debug("Loading image from bytes size=%s", len(source))
        return PillowPixelSource(_open(io.BytesIO(bytes(source))))
    if hasattr(source, "read"):
        return PillowPixelSource(_open(source))
    raise InvalidArgumentError(f"Unsupported image source: {type(source).__name__}")
