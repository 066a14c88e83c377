import numpy as np
import pytest

from fastmatch.vision.pyramid import (
    build_pyramid,
    image_at_level,
    level_size,
    select_pyramid_level,
    to_full_resolution,
)
from fastmatch.vision.types import Point


@pytest.mark.parametrize("scene,template,expected", [
    ((100, 100), (20, 20), 1),      # floor(log2(20/7)) = 1
    ((100, 100), (14, 14), 1),
    ((100, 100), (13, 13), 0),
    ((100, 100), (28, 28), 2),
    ((400, 400), (64, 64), 3),
    ((100, 100), (5, 5), 0),        # below 7 px: log of a value < 1
    ((6, 500), (6, 6), 0),
    ((5000, 5000), (2000, 2000), 6),  # capped
    ((30, 1000), (200, 200), 2),    # scene side counts too
])
def test_select_pyramid_level(scene, template, expected):
    assert select_pyramid_level(scene, template) == expected


def test_select_pyramid_level_always_in_range():
    dims = [1, 2, 3, 6, 7, 8, 13, 14, 27, 28, 55, 56, 111, 112, 223, 224, 447, 448, 895, 896, 4096]
    for a in dims:
        for b in dims:
            level = select_pyramid_level((a, b), (b, a))
            assert 0 <= level <= 6


def test_select_pyramid_level_accepts_color_shapes():
    assert select_pyramid_level((100, 100, 3), (20, 20, 3)) == 1


def test_level_size_rounds_up():
    assert level_size(101, 50, 0) == (101, 50)
    assert level_size(101, 50, 1) == (51, 25)
    assert level_size(101, 50, 2) == (26, 13)
    assert level_size(1, 1, 6) == (1, 1)


def test_image_at_level_zero_is_identity(noise_scene):
    assert image_at_level(noise_scene, 0) is noise_scene


def test_image_at_level_single_resize_shape():
    img = np.zeros((101, 50), dtype=np.uint8)
    assert image_at_level(img, 1).shape == (51, 25)
    assert image_at_level(img, 2).shape == (26, 13)
    color = np.zeros((101, 50, 3), dtype=np.uint8)
    assert image_at_level(color, 2).shape == (26, 13, 3)


def test_image_at_level_preserves_constant_image():
    img = np.full((64, 48), 77, dtype=np.uint8)
    out = image_at_level(img, 3)
    assert out.dtype == np.uint8
    assert np.all(out == 77)


def test_build_pyramid_sizes_match_level_sizes(noise_scene):
    img = noise_scene[:, :99]
    pyr = build_pyramid(img, 3)
    assert len(pyr) == 4
    assert pyr[0] is img
    for level, level_img in enumerate(pyr):
        w, h = level_size(99, 100, level)
        assert level_img.shape == (h, w)


def test_build_pyramid_differs_from_single_resize(noise_scene):
    chained = build_pyramid(noise_scene, 2)[2]
    direct = image_at_level(noise_scene, 2)
    assert chained.shape == direct.shape
    # Gaussian blur before subsampling smooths noise more than a single resize
    assert float(chained.std()) < float(direct.std())


@pytest.mark.parametrize("level", range(7))
def test_to_full_resolution_exact(level):
    p = to_full_resolution(Point(3, 5), level)
    assert p == Point(3 * 2 ** level, 5 * 2 ** level)


def test_to_full_resolution_level_zero_is_identity():
    assert to_full_resolution(Point(12, 7), 0) == Point(12, 7)
