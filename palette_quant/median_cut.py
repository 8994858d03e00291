"""Median cut of a single box along its longest axis."""
from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional, Tuple

from .errors import QuantizationError
from .histogram import Histogram
from .vbox import Axis, VBox, cell_index


logger = logging.getLogger(__name__)

# outer, middle and inner loop axes; the cut axis is always outermost
_ITERATE_ORDERS = {
    Axis.RED: (Axis.RED, Axis.GREEN, Axis.BLUE),
    Axis.GREEN: (Axis.GREEN, Axis.RED, Axis.BLUE),
    Axis.BLUE: (Axis.BLUE, Axis.RED, Axis.GREEN),
}

# maps (outer, middle, inner) loop values back to a histogram key
_CELL_LOOKUPS: Dict[Axis, Callable[[int, int, int], int]] = {
    Axis.RED: lambda first, second, third: cell_index(first, second, third),
    Axis.GREEN: lambda first, second, third: cell_index(second, first, third),
    Axis.BLUE: lambda first, second, third: cell_index(second, third, first),
}


def sum_colors(axis: Axis, histo: Histogram, vbox: VBox) -> Tuple[int, Dict[int, int]]:
    """Return the box population and the running population per ``axis`` coordinate."""

    axes = _ITERATE_ORDERS[axis]
    lookup = _CELL_LOOKUPS[axis]
    first_lo, first_hi = vbox.bounds(axes[0])
    second_lo, second_hi = vbox.bounds(axes[1])
    third_lo, third_hi = vbox.bounds(axes[2])

    total = 0
    partial_sum: Dict[int, int] = {}
    for first in range(first_lo, first_hi + 1):
        plane = 0
        for second in range(second_lo, second_hi + 1):
            for third in range(third_lo, third_hi + 1):
                plane += histo.get(lookup(first, second, third))
        total += plane
        partial_sum[first] = total
    return total, partial_sum


def do_cut(axis: Axis, vbox: VBox, partial_sum: Dict[int, int], total: int) -> Tuple[VBox, VBox]:
    """Split ``vbox`` near the population median along ``axis``.

    The plane is placed inside the larger side of the median bin, then
    nudged so that neither child is empty when that can be avoided.
    Coordinates missing from ``partial_sum`` count as empty.
    """

    low, high = vbox.bounds(axis)
    for i in range(low, high + 1):
        if partial_sum.get(i, 0) <= total / 2:
            continue
        left = i - low
        right = high - i
        if left <= right:
            d2 = min(high - 1, int(i + right / 2))
        else:
            d2 = max(low, int(i - 1 - left / 2))

        while not partial_sum.get(d2) and d2 < high:
            d2 += 1
        while partial_sum.get(d2, 0) >= total and partial_sum.get(d2 - 1):
            d2 -= 1
        # every pixel on the top plane: the lower child has to stay empty
        d2 = min(d2, high - 1)

        return vbox.with_bounds(axis, low, d2), vbox.with_bounds(axis, d2 + 1, high)

    raise QuantizationError(
        f"No median plane along {axis.value} for box {vbox!r} (total={total})"
    )


def median_cut_apply(histo: Histogram, vbox: VBox) -> Optional[List[VBox]]:
    """Cut ``vbox`` in two.

    Returns ``None`` for an empty box and a single copy for a box that
    holds one pixel or spans one cell.
    """

    if not vbox.count():
        return None
    if vbox.count() == 1 or vbox.volume() == 1:
        return [vbox.copy()]

    axis = vbox.longest_axis()
    total, partial_sum = sum_colors(axis, histo, vbox)
    first, second = do_cut(axis, vbox, partial_sum, total)
    logger.debug(
        "Cut axis=%s total=%s children=%s/%s",
        axis.value,
        total,
        first.count(),
        second.count(),
    )
    return [first, second]
