"""Adobe ACT palette files."""
from __future__ import annotations

from pathlib import Path
from typing import Sequence

from .color_index import ColorTuple

ACT_SIZE = 256


def write_act_palette(path: Path, colors: Sequence[ColorTuple]) -> None:
    """Write up to 256 colors, padding the table with black."""

    colors = list(colors[:ACT_SIZE])
    padded = colors + [(0, 0, 0)] * (ACT_SIZE - len(colors))
    with path.open("wb") as fh:
        for r, g, b in padded:
            fh.write(bytes((r, g, b)))
