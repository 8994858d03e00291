"""Color histogram built from sampled pixels."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Tuple

from .color_index import RSHIFT, ColorTuple, get_color_index, get_colors_from_index


@dataclass(slots=True)
class Histogram:
    """Pixel counts per reduced-precision color index.

    ``counts`` is keyed by :func:`get_color_index` at the default precision.
    ``pixels`` keeps every accepted sample at full precision; it is only
    scanned to find the bounds of the first box.
    """

    counts: Dict[int, int] = field(default_factory=dict)
    pixels: List[int] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.counts)

    def __contains__(self, index: object) -> bool:
        return index in self.counts

    def get(self, index: int) -> int:
        return self.counts.get(index, 0)

    @property
    def total(self) -> int:
        return len(self.pixels)

    def bounds(self) -> Tuple[int, int, int, int, int, int]:
        """Return ``(r1, r2, g1, g2, b1, b2)`` covering every sample, in reduced space."""

        if not self.pixels:
            raise ValueError("Histogram is empty")
        r_min = g_min = b_min = 255
        r_max = g_max = b_max = 0
        for index in self.pixels:
            r, g, b = get_colors_from_index(index)
            r, g, b = r >> RSHIFT, g >> RSHIFT, b >> RSHIFT
            r_min, r_max = min(r_min, r), max(r_max, r)
            g_min, g_max = min(g_min, g), max(g_max, g)
            b_min, b_max = min(b_min, b), max(b_max, b)
        return r_min, r_max, g_min, g_max, b_min, b_max


def build_histogram(samples: Iterable[ColorTuple]) -> Histogram:
    histo = Histogram()
    counts = histo.counts
    for red, green, blue in samples:
        histo.pixels.append(get_color_index(red, green, blue, 8))
        index = get_color_index(red, green, blue)
        counts[index] = counts.get(index, 0) + 1
    return histo
