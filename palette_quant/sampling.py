"""Pixel sampling policy applied before histogram construction."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, Tuple

from .color_index import ColorTuple
from .errors import InvalidArgumentError
from .image_source import PixelSource


logger = logging.getLogger(__name__)

THRESHOLD_ALPHA = 62
THRESHOLD_WHITE = 250


@dataclass(frozen=True, slots=True)
class Area:
    """Sub-rectangle of an image; missing sizes extend to the image edge."""

    x: int = 0
    y: int = 0
    width: int | None = None
    height: int | None = None

    def resolve(self, image_width: int, image_height: int) -> Tuple[int, int, int, int]:
        width = self.width if self.width is not None else image_width - self.x
        height = self.height if self.height is not None else image_height - self.y
        if self.x < 0 or self.y < 0 or width < 0 or height < 0:
            raise InvalidArgumentError("Area coordinates and size must not be negative")
        if self.x + width > image_width or self.y + height > image_height:
            raise InvalidArgumentError("Area is out of image bounds")
        return self.x, self.y, width, height


def is_usable(red: int, green: int, blue: int, alpha: int) -> bool:
    """Keep clearly visible pixels that are not near-white."""

    if alpha > THRESHOLD_ALPHA:
        return False
    return not (red > THRESHOLD_WHITE and green > THRESHOLD_WHITE and blue > THRESHOLD_WHITE)


def iter_samples(
    source: PixelSource, quality: int = 10, area: Area | None = None
) -> Iterator[ColorTuple]:
    """Yield every ``quality``-th usable pixel of ``area`` in row-major order."""

    if quality < 1:
        raise InvalidArgumentError("The quality argument must be an integer greater than zero")
    start_x, start_y, width, height = (area or Area()).resolve(source.width, source.height)
    pixel_count = width * height
    logger.debug(
        "Sampling area=%s quality=%s candidates=%s",
        (start_x, start_y, width, height),
        quality,
        -(-pixel_count // quality),
    )
    for i in range(0, pixel_count, quality):
        x = start_x + i % width
        y = start_y + i // width
        red, green, blue, alpha = source.get_pixel(x, y)
        if is_usable(red, green, blue, alpha):
            yield red, green, blue
