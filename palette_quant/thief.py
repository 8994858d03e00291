"""Dominant color and palette extraction entry points."""
from __future__ import annotations

import logging
from typing import Callable, List, Optional

from .color_map import PaletteEntry
from .errors import EmptyImageError, InvalidArgumentError
from .histogram import build_histogram
from .image_source import load_image
from .quantize import MAX_COLORS, MIN_COLORS, quantize
from .sampling import Area, iter_samples


logger = logging.getLogger(__name__)

PaletteFilter = Callable[[PaletteEntry], bool]


def get_palette(
    source,
    color_count: int = 10,
    quality: int = 10,
    area: Area | None = None,
    filter_function: Optional[PaletteFilter] = None,
    with_metrics: bool = False,
) -> List[PaletteEntry]:
    """Cluster the colors of ``source`` with modified median cut.

    ``color_count`` is approximate: the palette can come out a couple of
    colors shorter or longer. ``quality`` is the sampling stride, 1 reads
    every pixel. ``filter_function`` is applied to the finished palette;
    if it rejects every entry the most prevalent one is kept.
    """

    if color_count < MIN_COLORS or color_count > MAX_COLORS:
        raise InvalidArgumentError(
            f"The number of palette colors must be between {MIN_COLORS} and {MAX_COLORS} inclusive"
        )
    if quality < 1:
        raise InvalidArgumentError("The quality argument must be an integer greater than zero")

    pixels = load_image(source)
    histo = build_histogram(iter_samples(pixels, quality, area))
    if not histo.total:
        raise EmptyImageError("Unable to compute the color palette of a blank or transparent image")
    logger.debug("Histogram built pixels=%s cells=%s", histo.total, len(histo))

    palette = quantize(histo, color_count).palette(with_metrics, histo.total)

    if filter_function is not None:
        fallback = palette[0]
        palette = [entry for entry in palette if filter_function(entry)]
        if not palette:
            logger.debug("Palette filter removed every color; keeping %s", fallback.color)
            palette = [fallback]
    logger.debug("Palette ready requested=%s returned=%s", color_count, len(palette))
    return palette


def get_color(
    source,
    quality: int = 10,
    area: Area | None = None,
    filter_function: Optional[PaletteFilter] = None,
    with_metrics: bool = False,
) -> PaletteEntry:
    """Return the most prevalent color of ``source``."""

    palette = get_palette(source, 5, quality, area, filter_function, with_metrics)
    return palette[0]
