from __future__ import annotations

import pytest

from avghash.engine import grayscale
from avghash.engine.models import Color, GridImage, Rectangle
from avghash.engine.resize import nearest_neighbor


def test_red_intensity_reads_only_the_red_channel():
    assert grayscale.intensity(Color(100, 65535, 65535, 65535)) == 100


def test_luma_intensity_uses_bt601_weights():
    assert grayscale.intensity(Color(0xFFFF, 0xFFFF, 0xFFFF, 0xFFFF), "luma") == 0xFFFF
    assert grayscale.intensity(Color(0xFFFF, 0, 0, 0xFFFF), "luma") == 19595
    assert grayscale.intensity(Color(0, 0, 0, 0xFFFF), "luma") == 0


def test_unknown_intensity_source_is_rejected():
    with pytest.raises(ValueError):
        grayscale.intensity(Color(0, 0, 0, 0), "blue")  # type: ignore[arg-type]


def test_reduce_image_produces_row_major_grid():
    source = GridImage.from_rows(
        [[Color(y * 8 + x, 0, 0, 0xFFFF) for x in range(8)] for y in range(8)]
    )

    reduced = grayscale.reduce_image(source, nearest_neighbor)

    assert reduced.bounds == Rectangle(0, 0, 8, 8)
    assert reduced.intensities == tuple(range(64))


def test_reduce_image_of_zero_area_image_is_empty():
    source = GridImage(bounds=Rectangle(0, 0, 0, 0), pixels=())

    reduced = grayscale.reduce_image(source, nearest_neighbor)

    assert reduced.intensities == ()
    assert reduced.bounds.is_empty


def test_reduce_image_rejects_resizers_breaking_the_grid_contract():
    def wrong_size(image, _width, _height):
        return nearest_neighbor(image, 4, 4)

    with pytest.raises(ValueError):
        grayscale.reduce_image(GridImage.filled(8, 8, Color(0, 0, 0, 0)), wrong_size)


def test_reduce_image_asks_the_resizer_for_an_eight_by_eight_grid():
    calls: list[tuple[int, int]] = []

    def recording_resizer(image, width, height):
        calls.append((width, height))
        return nearest_neighbor(image, width, height)

    grayscale.reduce_image(GridImage.filled(32, 20, Color(1, 2, 3, 4)), recording_resizer)

    assert calls == [(8, 8)]
