"""Search window planning for the next finer pyramid level."""
from __future__ import annotations

from typing import Sequence

from ..config.matching import ROI_SPAN
from .types import Point, SearchRegion


def plan_roi(point: Point, scene_shape: Sequence[int], template_shape: Sequence[int]) -> SearchRegion:
    """Window at the finer level around a match found one level coarser.

    point: match at the coarser level (it is doubled here).
    scene_shape/template_shape: (rows, cols, ...) at the finer level.

    The window starts a quarter template before the doubled point and spans
    ROI_SPAN templates, clipped so that x + width <= cols - 1 (same for y).
    Points outside the scene are pulled back in so the window always has at
    least one pixel.
    """
    rows, cols = int(scene_shape[0]), int(scene_shape[1])
    t_rows, t_cols = int(template_shape[0]), int(template_shape[1])

    x = max(0, int(point.x * 2 - t_cols // 4))
    y = max(0, int(point.y * 2 - t_rows // 4))
    x = min(x, max(0, cols - 2))
    y = min(y, max(0, rows - 2))

    w = int(t_cols * ROI_SPAN)
    h = int(t_rows * ROI_SPAN)
    if x + w >= cols:
        w = cols - x - 1
    if y + h >= rows:
        h = rows - y - 1
    return SearchRegion(x, y, max(1, w), max(1, h))
