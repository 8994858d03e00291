from __future__ import annotations

import random
from typing import Callable, List, Sequence, Tuple

import pytest
from PIL import Image

from palette_quant.histogram import Histogram, build_histogram

ColorTuple = Tuple[int, int, int]


def _random_samples(seed: int, size: int) -> List[ColorTuple]:
    rng = random.Random(seed)
    centres = [(200, 40, 40), (30, 160, 90), (40, 60, 210), (220, 210, 60)]
    samples: List[ColorTuple] = []
    for _ in range(size):
        if rng.random() < 0.7:
            cr, cg, cb = rng.choice(centres)
            samples.append(
                (
                    max(0, min(255, cr + rng.randint(-30, 30))),
                    max(0, min(255, cg + rng.randint(-30, 30))),
                    max(0, min(255, cb + rng.randint(-30, 30))),
                )
            )
        else:
            samples.append((rng.randint(0, 255), rng.randint(0, 255), rng.randint(0, 255)))
    return samples


@pytest.fixture
def random_samples() -> List[ColorTuple]:
    return _random_samples(1234, 2000)


@pytest.fixture
def random_histogram(random_samples) -> Histogram:
    return build_histogram(random_samples)


@pytest.fixture
def make_histogram() -> Callable[..., Histogram]:
    def factory(*groups: Tuple[ColorTuple, int]) -> Histogram:
        samples: List[ColorTuple] = []
        for color, count in groups:
            samples.extend([color] * count)
        return build_histogram(samples)

    return factory


@pytest.fixture
def make_image() -> Callable[..., Image.Image]:
    """Build an RGB(A) image from ``(color, pixel_count)`` runs laid out row by row."""

    def factory(
        runs: Sequence[Tuple[Tuple[int, ...], int]], width: int, mode: str = "RGB"
    ) -> Image.Image:
        total = sum(count for _, count in runs)
        height = -(-total // width)
        image = Image.new(mode, (width, height))
        position = 0
        for color, count in runs:
            for _ in range(count):
                image.putpixel((position % width, position // width), tuple(color))
                position += 1
        return image

    return factory
