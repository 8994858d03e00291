"""Boxes over the reduced-precision RGB cube."""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Iterator, Sequence, Tuple

from .color_index import RSHIFT, ColorTuple, get_color_index, get_colors_from_index
from .histogram import Histogram


class Axis(Enum):
    RED = "r"
    GREEN = "g"
    BLUE = "b"


def cell_index(red: int, green: int, blue: int) -> int:
    """Histogram key of a cell given in reduced coordinates (0-31)."""

    return get_color_index(red << RSHIFT, green << RSHIFT, blue << RSHIFT)


@dataclass(slots=True, eq=False)
class VBox:
    """Inclusive ``[r1, r2] x [g1, g2] x [b1, b2]`` region of the histogram.

    ``volume``, ``count`` and ``avg`` are computed on first use and cached;
    pass ``force=True`` to recompute. Bounds are not changed once a box is
    queued; cuts go through :meth:`with_bounds` which returns a new box.
    """

    r1: int
    r2: int
    g1: int
    g2: int
    b1: int
    b2: int
    histo: Histogram = field(repr=False)
    _volume: int | None = field(default=None, init=False, repr=False)
    _count: int | None = field(default=None, init=False, repr=False)
    _avg: ColorTuple | None = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        if self.r1 > self.r2 or self.g1 > self.g2 or self.b1 > self.b2:
            raise ValueError(f"Inverted box bounds: {self!r}")

    @classmethod
    def from_histogram(cls, histo: Histogram) -> "VBox":
        r1, r2, g1, g2, b1, b2 = histo.bounds()
        return cls(r1, r2, g1, g2, b1, b2, histo)

    def bounds(self, axis: Axis) -> Tuple[int, int]:
        if axis is Axis.RED:
            return self.r1, self.r2
        if axis is Axis.GREEN:
            return self.g1, self.g2
        return self.b1, self.b2

    def with_bounds(self, axis: Axis, low: int, high: int) -> "VBox":
        """Return a copy whose extent along ``axis`` is ``[low, high]``."""

        if axis is Axis.RED:
            return replace(self, r1=low, r2=high)
        if axis is Axis.GREEN:
            return replace(self, g1=low, g2=high)
        return replace(self, b1=low, b2=high)

    def copy(self) -> "VBox":
        return VBox(self.r1, self.r2, self.g1, self.g2, self.b1, self.b2, self.histo)

    def cells(self) -> Iterator[Tuple[int, int, int]]:
        for i in range(self.r1, self.r2 + 1):
            for j in range(self.g1, self.g2 + 1):
                for k in range(self.b1, self.b2 + 1):
                    yield i, j, k

    def volume(self, force: bool = False) -> int:
        if self._volume is None or force:
            self._volume = (
                (self.r2 - self.r1 + 1) * (self.g2 - self.g1 + 1) * (self.b2 - self.b1 + 1)
            )
        return self._volume

    def count(self, force: bool = False) -> int:
        if self._count is None or force:
            # walk whichever of the box and the histogram is smaller
            if self.volume() > len(self.histo):
                self._count = self._count_by_histogram()
            else:
                self._count = self._count_by_grid()
        return self._count

    def _count_by_histogram(self) -> int:
        npix = 0
        for index, hval in self.histo.counts.items():
            if self.contains(get_colors_from_index(index)):
                npix += hval
        return npix

    def _count_by_grid(self) -> int:
        histo = self.histo
        return sum(histo.get(cell_index(i, j, k)) for i, j, k in self.cells())

    def avg(self, force: bool = False) -> ColorTuple:
        if self._avg is None or force:
            mult = 1 << RSHIFT
            ntot = 0
            r_sum = g_sum = b_sum = 0.0
            for i, j, k in self.cells():
                hval = self.histo.get(cell_index(i, j, k))
                if not hval:
                    continue
                ntot += hval
                r_sum += hval * (i + 0.5) * mult
                g_sum += hval * (j + 0.5) * mult
                b_sum += hval * (k + 0.5) * mult
            if ntot:
                self._avg = (int(r_sum / ntot), int(g_sum / ntot), int(b_sum / ntot))
            else:
                self._avg = (
                    min(mult * (self.r1 + self.r2 + 1) // 2, 255),
                    min(mult * (self.g1 + self.g2 + 1) // 2, 255),
                    min(mult * (self.b1 + self.b2 + 1) // 2, 255),
                )
        return self._avg

    def contains(self, pixel: Sequence[int], shift: int = RSHIFT) -> bool:
        r_val = pixel[0] >> shift
        g_val = pixel[1] >> shift
        b_val = pixel[2] >> shift
        return (
            self.r1 <= r_val <= self.r2
            and self.g1 <= g_val <= self.g2
            and self.b1 <= b_val <= self.b2
        )

    def longest_axis(self) -> Axis:
        red = self.r2 - self.r1
        green = self.g2 - self.g1
        blue = self.b2 - self.b1
        if red >= green and red >= blue:
            return Axis.RED
        if green >= blue:
            return Axis.GREEN
        return Axis.BLUE
