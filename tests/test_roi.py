import numpy as np

from fastmatch.vision.roi import plan_roi
from fastmatch.vision.types import Point, SearchRegion


def test_window_around_doubled_point():
    # 20x20 template at level 0, coarse match at (15, 20)
    r = plan_roi(Point(15, 20), (100, 100), (20, 20))
    assert r == SearchRegion(25, 35, 30, 30)


def test_window_clamped_at_leading_edge():
    r = plan_roi(Point(1, 0), (100, 100), (20, 20))
    assert (r.x, r.y) == (0, 0)
    assert (r.width, r.height) == (30, 30)


def test_window_clipped_at_trailing_edge():
    r = plan_roi(Point(45, 45), (100, 100), (20, 20))
    assert (r.x, r.y) == (85, 85)
    # x + w >= cols shrinks the width to cols - x - 1
    assert (r.width, r.height) == (14, 14)


def test_clip_applies_when_window_touches_edge_exactly():
    # x = 70, w = 30 -> x + w == cols, still clipped
    r = plan_roi(Point(37.5, 0), (100, 100), (20, 20))
    assert r.x == 70
    assert r.width == 29


def test_non_square_uses_rows_and_cols():
    r = plan_roi(Point(10, 10), (80, 120), (8, 40))
    assert r.x == 20 - 10
    assert r.y == 20 - 2
    assert (r.width, r.height) == (60, 12)


def test_window_always_inside_scene():
    rng = np.random.default_rng(7)
    for _ in range(2000):
        rows, cols = (int(v) for v in rng.integers(1, 300, size=2))
        t_rows, t_cols = (int(v) for v in rng.integers(1, 120, size=2))
        p = Point(float(rng.integers(-50, 400)), float(rng.integers(-50, 400)))
        r = plan_roi(p, (rows, cols), (t_rows, t_cols))
        assert r.contained_in((rows, cols)), (p, rows, cols, t_rows, t_cols, r)
        assert r.x >= 0 and r.y >= 0
        assert r.width >= 1 and r.height >= 1
        assert r.right <= cols and r.bottom <= rows
        if cols >= 2:
            assert r.right <= cols - 1
        if rows >= 2:
            assert r.bottom <= rows - 1


def test_crop_matches_region(noise_scene):
    r = SearchRegion(10, 20, 5, 7)
    crop = r.crop(noise_scene)
    assert crop.shape == (7, 5)
    assert np.array_equal(crop, noise_scene[20:27, 10:15])
