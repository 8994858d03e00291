from __future__ import annotations

import pytest
from PIL import Image

from palette_quant import (
    Area,
    EmptyImageError,
    InvalidArgumentError,
    PaletteError,
    get_color,
    get_palette,
)


def _close_to(color, expected, tolerance=8):
    return all(abs(a - b) <= tolerance for a, b in zip(color, expected))


def test_two_pixel_image(make_image):
    image = make_image([((255, 0, 0), 1), ((0, 255, 0), 1)], width=2)
    palette = get_palette(image, color_count=2, quality=1, with_metrics=True)

    assert len(palette) == 2
    assert [entry.count for entry in palette] == [1, 1]
    colors = sorted(entry.color for entry in palette)
    assert _close_to(colors[0], (0, 255, 0))
    assert _close_to(colors[1], (255, 0, 0))


@pytest.mark.parametrize("color_count", [2, 5, 10, 256])
def test_single_color_image(color_count):
    image = Image.new("RGB", (10, 10), (50, 50, 50))
    palette = get_palette(image, color_count=color_count, quality=1)

    assert len(palette) == 1
    # centre of the 5-bit bucket holding 50, see "Reduced-space boxes" in DESIGN.md
    assert palette[0].color == (52, 52, 52)
    assert _close_to(palette[0].color, (50, 50, 50))


def test_transparent_image_is_empty():
    image = Image.new("RGBA", (8, 8), (200, 30, 30, 0))
    with pytest.raises(EmptyImageError):
        get_palette(image)


def test_white_image_is_empty():
    with pytest.raises(EmptyImageError) as excinfo:
        get_color(Image.new("RGB", (8, 8), (255, 255, 255)))
    assert isinstance(excinfo.value, PaletteError)
    assert not isinstance(excinfo.value, ValueError)


@pytest.mark.parametrize("color_count", [1, 300])
def test_color_count_out_of_range(color_count):
    with pytest.raises(InvalidArgumentError):
        get_palette(Image.new("RGB", (2, 2)), color_count=color_count)


def test_quality_below_one():
    with pytest.raises(ValueError):
        get_palette(Image.new("RGB", (2, 2)), quality=0)


def test_area_out_of_bounds():
    with pytest.raises(InvalidArgumentError):
        get_palette(Image.new("RGB", (4, 4)), area=Area(x=2, y=0, width=3, height=4))


def test_area_limits_sampling(make_image):
    image = make_image([((200, 10, 10), 4), ((10, 10, 200), 4)], width=4)
    color = get_color(image, quality=1, area=Area(x=0, y=1))
    assert _close_to(color.color, (10, 10, 200))


def test_get_color_picks_most_populous(make_image):
    image = make_image([((0, 0, 255), 70), ((255, 0, 0), 30)], width=10)
    palette = get_palette(image, color_count=5, quality=1, with_metrics=True)
    color = get_color(image, quality=1)

    assert color.color == palette[0].color
    assert _close_to(color.color, (0, 0, 255))
    assert palette[0].count == 70
    assert palette[0].ratio == pytest.approx(0.7)


def test_filter_keeps_matching_entries(make_image):
    image = make_image([((0, 0, 255), 70), ((255, 0, 0), 30)], width=10)
    palette = get_palette(
        image, color_count=5, quality=1, filter_function=lambda entry: entry.color[0] > 128
    )
    assert len(palette) == 1
    assert _close_to(palette[0].color, (255, 0, 0))


def test_filter_falls_back_to_first_entry(make_image):
    image = make_image([((0, 0, 255), 70), ((255, 0, 0), 30)], width=10)
    palette = get_palette(image, color_count=5, quality=1, filter_function=lambda entry: False)
    assert len(palette) == 1
    assert _close_to(palette[0].color, (0, 0, 255))


def test_rich_image_palette_size(random_samples):
    image = Image.new("RGB", (50, 40))
    image.putdata(random_samples)
    palette = get_palette(image, color_count=10, quality=1, with_metrics=True)

    assert abs(len(palette) - 10) <= 2
    counts = [entry.count for entry in palette]
    assert counts == sorted(counts, reverse=True)
    assert sum(counts) == len([c for c in random_samples if not all(v > 250 for v in c)])


def test_default_quality_samples_stride(random_samples):
    image = Image.new("RGB", (50, 40))
    image.putdata(random_samples)
    palette = get_palette(image, with_metrics=True)
    assert sum(entry.count for entry in palette) <= 200
