"""Final boxes of a quantization run and the palette built from them."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Optional

from .color_index import ColorTuple
from .vbox import VBox


@dataclass(slots=True)
class PaletteEntry:
    """One palette color; the metrics are ``None`` unless requested."""

    color: ColorTuple
    count: int | None = None
    volume: int | None = None
    ratio: float | None = None

    @property
    def hex(self) -> str:
        return rgb_to_hex(self.color)


def rgb_to_hex(color: ColorTuple) -> str:
    r, g, b = color
    return f"#{r:02x}{g:02x}{b:02x}"


def _distance(a: ColorTuple, b: ColorTuple) -> int:
    return (a[0] - b[0]) ** 2 + (a[1] - b[1]) ** 2 + (a[2] - b[2]) ** 2


class ColorMap:
    """Collects the boxes left in the queue, in the order they were popped."""

    def __init__(self) -> None:
        self._vboxes: List[VBox] = []

    def push(self, vbox: VBox) -> None:
        self._vboxes.append(vbox)

    def __len__(self) -> int:
        return len(self._vboxes)

    @property
    def vboxes(self) -> List[VBox]:
        return list(self._vboxes)

    def _populated(self) -> List[VBox]:
        # empty boxes have nothing to average
        return [vbox for vbox in self._vboxes if vbox.count()]

    def palette(
        self,
        with_metrics: bool = False,
        total: int | None = None,
        key: Optional[Callable[[PaletteEntry], object]] = None,
    ) -> List[PaletteEntry]:
        """Return one entry per populated box, most populous first.

        ``total`` is the number of pixels the ratio is computed against and
        defaults to the population of all boxes. ``key`` replaces the
        default ordering and is applied to entries that always carry
        metrics internally; they are stripped afterwards when
        ``with_metrics`` is false.
        """

        boxes = self._populated()
        if total is None:
            total = sum(vbox.count() for vbox in boxes)
        entries = [
            PaletteEntry(
                color=vbox.avg(),
                count=vbox.count(),
                volume=vbox.volume(),
                ratio=(vbox.count() / total) if total else 0.0,
            )
            for vbox in boxes
        ]
        if key is None:
            entries.sort(key=lambda entry: entry.count, reverse=True)
        else:
            entries.sort(key=key)
        if not with_metrics:
            entries = [PaletteEntry(color=entry.color) for entry in entries]
        return entries

    def colors(self) -> List[ColorTuple]:
        return [entry.color for entry in self.palette()]

    def nearest(self, color: ColorTuple) -> ColorTuple:
        """Return the palette color closest to ``color`` in RGB space."""

        boxes = self._populated()
        if not boxes:
            raise ValueError("Color map has no populated boxes")
        best = min(boxes, key=lambda vbox: _distance(color, vbox.avg()))
        return best.avg()

    def map(self, color: ColorTuple) -> ColorTuple:
        """Return the color of the box containing ``color``, else the nearest one."""

        for vbox in self._populated():
            if vbox.contains(color):
                return vbox.avg()
        return self.nearest(color)
