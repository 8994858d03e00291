"""Modified median cut quantization over a color histogram."""
from __future__ import annotations

import logging
from typing import List

from .color_map import ColorMap
from .errors import EmptyImageError, InvalidArgumentError, QuantizationError
from .histogram import Histogram
from .median_cut import median_cut_apply
from .pqueue import PriorityQueue, by_population, by_population_volume
from .vbox import VBox


logger = logging.getLogger(__name__)

MAX_ITERATIONS = 1000
FRACT_BY_POPULATIONS = 0.75
MIN_COLORS = 2
MAX_COLORS = 256


def quantize_iter(queue: PriorityQueue[VBox], target: float, histo: Histogram) -> int:
    """Split the top box of ``queue`` until ``target`` colors or the iteration cap.

    Boxes that cannot be split any further are set aside for the rest of
    the phase and queued again before returning. The phase also ends when
    the queue runs dry. Returns the number of iterations used.
    """

    n_colors = 1
    n_iterations = 0
    settled: List[VBox] = []
    try:
        while n_iterations < MAX_ITERATIONS and queue.size():
            vbox = queue.pop()
            if not vbox.count():
                queue.push(vbox)
                n_iterations += 1
                continue

            try:
                vboxes = median_cut_apply(histo, vbox)
            except QuantizationError:
                logger.warning("Stopping refinement early target=%s", target, exc_info=True)
                queue.push(vbox)
                return n_iterations
            if not vboxes:
                logger.warning("Box produced no children count=%s", vbox.count())
                queue.push(vbox)
                return n_iterations

            if len(vboxes) == 1:
                settled.append(vboxes[0])
            else:
                queue.push(vboxes[0])
                queue.push(vboxes[1])
                n_colors += 1

            if n_colors >= target:
                break
            n_iterations += 1
        if n_iterations >= MAX_ITERATIONS:
            logger.debug("Iteration cap reached target=%s colors=%s", target, n_colors)
    finally:
        for vbox in settled:
            queue.push(vbox)
    return n_iterations


def quantize(histo: Histogram, max_colors: int) -> ColorMap:
    if not histo.total:
        raise EmptyImageError("Zero usable pixels found in image")
    if max_colors < MIN_COLORS or max_colors > MAX_COLORS:
        raise InvalidArgumentError(
            f"The number of palette colors must be between {MIN_COLORS} and {MAX_COLORS} inclusive"
        )

    vbox = VBox.from_histogram(histo)
    logger.debug(
        "Seed box bounds=%s histogram_cells=%s pixels=%s",
        (vbox.r1, vbox.r2, vbox.g1, vbox.g2, vbox.b1, vbox.b2),
        len(histo),
        histo.total,
    )
    queue: PriorityQueue[VBox] = PriorityQueue(by_population)
    queue.push(vbox)

    # first set of colors, sorted by population
    quantize_iter(queue, FRACT_BY_POPULATIONS * max_colors, histo)
    logger.debug("Population phase done boxes=%s", queue.size())

    # then favour large boxes: population times volume
    queue.set_comparator(by_population_volume)
    quantize_iter(queue, max_colors - queue.size(), histo)
    logger.debug("Volume phase done boxes=%s requested=%s", queue.size(), max_colors)

    cmap = ColorMap()
    while queue.size():
        cmap.push(queue.pop())
    return cmap
